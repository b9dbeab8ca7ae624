"""LLM client for OpenAI-compatible providers.

Provides a unified interface for the chat assistant, compatible with the
OpenAI API and local OpenAI-compatible servers.

Supported providers:
- openai: OpenAI API (needs OPENAI_API_KEY)
- lmstudio: Local LM Studio server
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Literal

import structlog
from openai import OpenAI

from learnme.config import load_app_config

logger = structlog.get_logger(__name__)

Provider = Literal["openai", "lmstudio"]

# Placeholder key for servers that don't check it
NO_KEY = "not-needed"


@dataclass
class LLMConfig:
    """Configuration for LLM client."""

    provider: Provider = "openai"
    base_url: str | None = "https://api.openai.com/v1"
    model: str = "gpt-4"
    temperature: float = 0.7
    max_tokens: int = 1500
    presence_penalty: float = 0.1
    frequency_penalty: float = 0.1
    timeout: int = 60
    api_key: str | None = None
    requires_api_key: bool = True

    @classmethod
    def from_app_config(cls, provider: str | None = None) -> LLMConfig:
        """Build from the chat and provider sections of the app config.

        Args:
            provider: Override the configured chat provider

        Raises:
            LLMError: If the provider isn't configured
        """
        app_config = load_app_config()
        chat = app_config.chat
        name = provider or chat.provider

        provider_config = app_config.providers.get(name)
        if provider_config is None:
            raise LLMError(f"Unknown LLM provider: {name}")

        return cls(
            provider=name,  # type: ignore[arg-type]
            base_url=provider_config.base_url,
            model=chat.model or provider_config.default_model,
            temperature=chat.temperature,
            max_tokens=chat.max_tokens,
            presence_penalty=chat.presence_penalty,
            frequency_penalty=chat.frequency_penalty,
            api_key=provider_config.get_api_key(),
            requires_api_key=provider_config.requires_api_key,
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key) or not self.requires_api_key


@dataclass
class Message:
    """A chat message."""

    role: Literal["system", "user", "assistant"]
    content: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for API call."""
        return {"role": self.role, "content": self.content}


@dataclass
class LLMResponse:
    """Response from LLM."""

    content: str
    model: str
    provider: str
    usage: dict[str, int] = field(default_factory=dict)
    latency_ms: int = 0

    @property
    def total_tokens(self) -> int:
        return self.usage.get("total_tokens", 0)


class LLMError(Exception):
    """Error during LLM interaction."""

    pass


class LLMConnectionError(LLMError):
    """Error connecting to LLM server."""

    pass


class LLMResponseError(LLMError):
    """Error in LLM response."""

    pass


class LLMClient:
    """Chat client over the OpenAI SDK."""

    def __init__(self, config: LLMConfig | None = None, model: str | None = None):
        """Initialize LLM client.

        Args:
            config: LLM configuration (built from the app config if not provided)
            model: Override model from config
        """
        if config is None:
            config = LLMConfig.from_app_config()

        self.config = config
        if model is not None:
            self.config.model = model

        self._client = OpenAI(
            base_url=self.config.base_url,
            api_key=self.config.api_key or NO_KEY,
            timeout=self.config.timeout,
        )

        logger.info(
            "llm_client_initialized",
            provider=self.config.provider,
            model=self.config.model,
            base_url=self.config.base_url,
        )

    def chat(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send chat completion request.

        Args:
            messages: List of messages in conversation
            temperature: Override default temperature
            max_tokens: Override default max tokens

        Returns:
            LLMResponse with content and metadata

        Raises:
            LLMConnectionError: If cannot connect to server
            LLMResponseError: If response is invalid
        """
        if temperature is None:
            temperature = self.config.temperature
        if max_tokens is None:
            max_tokens = self.config.max_tokens

        request_kwargs: dict[str, Any] = {
            "model": self.config.model,
            "messages": [m.to_dict() for m in messages],
            "temperature": temperature,
            "max_tokens": max_tokens,
            "presence_penalty": self.config.presence_penalty,
            "frequency_penalty": self.config.frequency_penalty,
        }

        start_time = time.time()

        try:
            response = self._client.chat.completions.create(**request_kwargs)
        except Exception as e:
            error_msg = str(e)
            if "Connection" in error_msg or "connect" in error_msg.lower():
                raise LLMConnectionError(
                    f"Could not connect to {self.config.provider} at {self.config.base_url}: {e}"
                ) from e
            raise LLMError(f"LLM call failed: {e}") from e

        latency_ms = int((time.time() - start_time) * 1000)

        if not response.choices:
            raise LLMResponseError("Empty response from LLM")

        content = response.choices[0].message.content or ""

        usage = {}
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        logger.debug(
            "llm_response",
            provider=self.config.provider,
            model=response.model,
            tokens=usage.get("total_tokens", 0),
            latency_ms=latency_ms,
        )

        return LLMResponse(
            content=content,
            model=response.model,
            provider=self.config.provider,
            usage=usage,
            latency_ms=latency_ms,
        )

    def is_available(self) -> bool:
        """Check if the LLM server answers.

        Returns:
            True if server responds, False otherwise
        """
        try:
            self._client.models.list()
            return True
        except Exception as e:
            logger.debug("llm_unavailable", provider=self.config.provider, error=str(e))
            return False
