"""Base abstraction for chat-capable LLM providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

VALID_ROLES = frozenset({"system", "user", "assistant"})


class LLMError(RuntimeError):
    """Raised when a provider call fails or returns no usable content."""


class BaseLLM(ABC):
    """Abstract interface for all LLM providers.

    Implementations adapt provider-specific request/response formats
    behind a unified `chat` API.
    """

    name: str = "base"

    @abstractmethod
    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        """Generate a chat completion from message history.

        Args:
            messages: Chat message list, e.g. `[{"role": "user", "content": "..."}]`.
            **kwargs: Per-call overrides (temperature, max_tokens, ...).

        Returns:
            Model response text.
        """

    @staticmethod
    def validate_messages(messages: list[dict[str, str]]) -> None:
        """Reject empty histories and malformed messages.

        Raises:
            ValueError: If the message list is empty or a message is invalid.
        """
        if not messages:
            raise ValueError("Messages list cannot be empty")
        for position, message in enumerate(messages):
            role = message.get("role") if isinstance(message, dict) else None
            if role not in VALID_ROLES:
                raise ValueError(f"Message {position} has invalid role: {role!r}")
            if not isinstance(message.get("content"), str):
                raise ValueError(f"Message {position} content must be a string")
