"""Keyed creator registry shared by the splitter and LLM factories.

Each factory subclass names the settings key it resolves (``config_key``)
and keeps its own ``_registry`` mapping, so registrations never leak
between factories. Keys are matched case-insensitively.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar


class KeyedFactory:
    """Resolve creators registered under a lower-cased key.

    Subclasses set:
        config_key: Dotted settings path named in error messages.
        label: Human-readable name of the key (``"LLM provider"``).
        _registry: Subclass-owned ``{key: creator}`` mapping.
    """

    config_key: ClassVar[str] = ""
    label: ClassVar[str] = "key"
    _registry: dict[str, Callable[..., Any]] = {}

    @staticmethod
    def _normalize(key: Any) -> str:
        return key.strip().lower() if isinstance(key, str) else ""

    @classmethod
    def register(cls, key: str, creator: Callable[..., Any]) -> None:
        """Register ``creator`` under ``key``, replacing any previous entry.

        Raises:
            ValueError: If the key is blank.
        """
        normalized = cls._normalize(key)
        if not normalized:
            raise ValueError(f"{cls.label[:1].upper()}{cls.label[1:]} name cannot be empty")
        cls._registry[normalized] = creator

    @classmethod
    def resolve(cls, key: Any) -> Callable[..., Any]:
        """Return the creator registered under ``key``.

        Raises:
            ValueError: If the key is missing or nothing is registered
                under it. The message names ``config_key``.
        """
        normalized = cls._normalize(key)
        if not normalized:
            raise ValueError(f"Missing required {cls.label}: {cls.config_key}")

        creator = cls._registry.get(normalized)
        if creator is None:
            available = ", ".join(sorted(cls._registry)) or "<none>"
            raise ValueError(
                f"Unsupported {cls.config_key}: {normalized}. Registered: {available}"
            )
        return creator

    @classmethod
    def available(cls) -> list[str]:
        """Return the registered keys, sorted."""
        return sorted(cls._registry)
