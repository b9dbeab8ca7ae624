"""Dev, the AI programming mentor.

Wraps the LLM client with the Dev persona: builds the conversation from the
system prompt, the recent history and the new message, then picks a learning
path recommendation from the reply.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from learnme.config import load_app_config
from learnme.core.path_recommender import PathRecommendation, recommend_path
from learnme.llm.client import LLMClient, LLMConfig, LLMResponseError, Message
from learnme.prompts.registry import get_prompt
from learnme.utils.text_utils import strip_think

logger = structlog.get_logger(__name__)

SYSTEM_PROMPT_KEY = "chat/dev_system"

HISTORY_ROLES = ("user", "assistant")

EMPTY_REPLY = "I'm sorry, I couldn't generate a response right now."

FALLBACK_MESSAGE = (
    "I'm having trouble connecting to my AI services right now, but I can still "
    "help you! What would you like to learn? I can recommend learning paths for "
    "web development, mobile apps, data science, AI, game development, and more. "
    "Just tell me your goal! 🚀"
)


class ChatUnavailableError(Exception):
    """The configured provider has no credentials."""

    pass


@dataclass
class ChatReply:
    response: str
    recommendation: PathRecommendation

    def to_dict(self) -> dict[str, Any]:
        return {"response": self.response, "recommendation": self.recommendation.to_dict()}


def filter_history(history: list[Any] | None, limit: int) -> list[Message]:
    """Keep well-formed user/assistant turns, the last `limit` of them."""
    if not history:
        return []

    valid = [
        Message(role=entry["role"], content=entry["content"])
        for entry in history
        if isinstance(entry, dict)
        and entry.get("role") in HISTORY_ROLES
        and isinstance(entry.get("content"), str)
        and entry["content"]
    ]
    return valid[-limit:] if limit > 0 else []


class DevChat:
    """Conversation front-end for the Dev assistant."""

    def __init__(self, client: LLMClient | None = None, config: LLMConfig | None = None):
        self._client = client
        self._config = config
        self.history_limit = load_app_config().chat.history_limit

    @property
    def config(self) -> LLMConfig:
        if self._client is not None:
            return self._client.config
        if self._config is None:
            self._config = LLMConfig.from_app_config()
        return self._config

    def is_configured(self) -> bool:
        return self._client is not None or self.config.has_credentials

    def _get_client(self) -> LLMClient:
        if self._client is None:
            if not self.config.has_credentials:
                raise ChatUnavailableError(f"{self.config.provider} API key not configured")
            self._client = LLMClient(config=self.config)
        return self._client

    def build_messages(self, message: str, history: list[Any] | None = None) -> list[Message]:
        messages = [Message(role="system", content=get_prompt(SYSTEM_PROMPT_KEY))]
        messages.extend(filter_history(history, self.history_limit))
        messages.append(Message(role="user", content=message))
        return messages

    def _complete(self, messages: list[Message]) -> str:
        """Run a completion, mapping an empty provider answer to EMPTY_REPLY."""
        client = self._get_client()
        try:
            response = client.chat(messages)
        except LLMResponseError as e:
            logger.warning("chat_empty_response", error=str(e))
            return EMPTY_REPLY
        return strip_think(response.content) or EMPTY_REPLY

    def reply(self, message: str, history: list[Any] | None = None) -> ChatReply:
        """Answer a learner message.

        Args:
            message: The learner's message
            history: Previous turns as {"role", "content"} dicts

        Returns:
            ChatReply with the answer and a recommended path

        Raises:
            ChatUnavailableError: If no API key is configured
            LLMError: If the provider call fails
        """
        self._get_client()
        messages = self.build_messages(message, history)

        logger.info(
            "chat_request",
            message_count=len(messages),
            has_history=len(messages) > 2,
        )

        content = self._complete(messages)
        return ChatReply(response=content, recommendation=recommend_path(content))

    def teach(self, system_prompt: str, user_prompt: str) -> str:
        """Single-turn tutoring completion for the teaching endpoint.

        Raises:
            ChatUnavailableError: If no API key is configured
            LLMError: If the provider call fails
        """
        messages = [
            Message(role="system", content=system_prompt),
            Message(role="user", content=user_prompt),
        ]
        logger.info("teach_request", prompt_chars=len(system_prompt) + len(user_prompt))
        return self._complete(messages)
