"""LLM integration for the Dev chat assistant."""

from learnme.llm.client import (
    LLMClient,
    LLMConfig,
    LLMConnectionError,
    LLMError,
    LLMResponse,
    LLMResponseError,
    Message,
)

__all__ = [
    "LLMClient",
    "LLMConfig",
    "LLMConnectionError",
    "LLMError",
    "LLMResponse",
    "LLMResponseError",
    "Message",
]
