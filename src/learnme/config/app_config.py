"""Application configuration loader.

Loads centralized configuration from config/learnme.yaml (or the file named
by LEARNME_CONFIG) with built-in defaults when no file is present.

Usage:
    from learnme.config.app_config import load_app_config, get_provider_config

    config = load_app_config()
    provider = get_provider_config("openai")
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("config/learnme.yaml")
CONFIG_ENV = "LEARNME_CONFIG"
BASE_URL_ENV = "LEARNME_BASE_URL"


@dataclass
class ProviderConfig:
    """Configuration for a single LLM provider."""

    base_url: str | None
    default_model: str
    api_key_env: str | None = None

    def get_api_key(self) -> str | None:
        """Get API key from environment variable."""
        if self.api_key_env:
            return os.environ.get(self.api_key_env)
        return None

    @property
    def requires_api_key(self) -> bool:
        return self.api_key_env is not None


@dataclass
class ChatConfig:
    """Configuration for the Dev chat assistant."""

    provider: str = "openai"
    model: str | None = None
    temperature: float = 0.7
    max_tokens: int = 1500
    presence_penalty: float = 0.1
    frequency_penalty: float = 0.1
    history_limit: int = 10


@dataclass
class CertificateConfig:
    """Configuration for certificate issuing."""

    completion_threshold: int = 80
    base_url: str = "http://localhost:3001"
    issuer: str = "LearnMe Platform"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    providers: dict[str, ProviderConfig] = field(default_factory=dict)
    chat: ChatConfig = field(default_factory=ChatConfig)
    certificates: CertificateConfig = field(default_factory=CertificateConfig)
    paths: dict[str, str] = field(default_factory=dict)

    @property
    def db_path(self) -> Path:
        return Path(self.paths.get("db_path", "db/learnme.db"))


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "providers": {
            "openai": {
                "base_url": "https://api.openai.com/v1",
                "default_model": "gpt-4",
                "api_key_env": "OPENAI_API_KEY",
            },
            "lmstudio": {
                "base_url": "http://localhost:1234/v1",
                "default_model": "llama-3.2-3b-instruct",
                "api_key_env": None,
            },
        },
        "chat": {
            "provider": "openai",
            "temperature": 0.7,
            "max_tokens": 1500,
            "presence_penalty": 0.1,
            "frequency_penalty": 0.1,
            "history_limit": 10,
        },
        "certificates": {
            "completion_threshold": 80,
            "base_url": "http://localhost:3001",
            "issuer": "LearnMe Platform",
        },
        "paths": {
            "db_path": "db/learnme.db",
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()

    providers = {}
    for name, pconfig in (data.get("providers") or defaults["providers"]).items():
        providers[name] = ProviderConfig(
            base_url=pconfig.get("base_url"),
            default_model=pconfig.get("default_model", "default"),
            api_key_env=pconfig.get("api_key_env"),
        )

    chat_data = data.get("chat", {})
    chat = ChatConfig(
        provider=chat_data.get("provider", "openai"),
        model=chat_data.get("model"),
        temperature=chat_data.get("temperature", 0.7),
        max_tokens=chat_data.get("max_tokens", 1500),
        presence_penalty=chat_data.get("presence_penalty", 0.1),
        frequency_penalty=chat_data.get("frequency_penalty", 0.1),
        history_limit=chat_data.get("history_limit", 10),
    )

    cert_data = data.get("certificates", {})
    certificates = CertificateConfig(
        completion_threshold=cert_data.get("completion_threshold", 80),
        base_url=os.environ.get(
            BASE_URL_ENV, cert_data.get("base_url", "http://localhost:3001")
        ),
        issuer=cert_data.get("issuer", "LearnMe Platform"),
    )

    paths = {**defaults["paths"], **data.get("paths", {})}

    return AppConfig(
        providers=providers, chat=chat, certificates=certificates, paths=paths
    )


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    config_file = Path(os.environ.get(CONFIG_ENV, CONFIG_FILE))

    data: dict[str, Any]
    if config_file.exists():
        logger.debug("loading_app_config", source=str(config_file))
        data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(data)
    return _cached_config


def get_provider_config(provider: str) -> ProviderConfig | None:
    """Get configuration for a specific provider.

    Args:
        provider: Provider name (e.g., "openai", "lmstudio")

    Returns:
        ProviderConfig or None if provider not found.
    """
    config = load_app_config()
    return config.providers.get(provider)


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
