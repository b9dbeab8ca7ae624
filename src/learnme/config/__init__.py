"""Configuration package for LearnMe."""

from learnme.config.app_config import (
    AppConfig,
    CertificateConfig,
    ChatConfig,
    ProviderConfig,
    clear_config_cache,
    get_provider_config,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "CertificateConfig",
    "ChatConfig",
    "ProviderConfig",
    "clear_config_cache",
    "get_provider_config",
    "load_app_config",
]
