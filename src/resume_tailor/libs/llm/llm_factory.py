"""Factory for creating LLM provider instances from settings."""

from __future__ import annotations

from collections.abc import Callable

from resume_tailor.core.settings import Settings
from resume_tailor.libs.llm.base_llm import BaseLLM
from resume_tailor.libs.registry import KeyedFactory


LLMCreator = Callable[[Settings], BaseLLM]


class LLMFactory(KeyedFactory):
    """Build chat providers by name (``openrouter``, ``gemini``)."""

    config_key = "llm.provider"
    label = "LLM provider"
    _registry: dict[str, LLMCreator] = {}

    @classmethod
    def create(cls, settings: Settings, provider: str | None = None) -> BaseLLM:
        """Create a provider.

        Args:
            settings: Global application settings.
            provider: Optional name overriding ``llm.provider``; used by
                the generation chain to build its fallback providers.

        Raises:
            ValueError: If the provider is missing or not registered.
        """
        name = provider if provider is not None else settings.llm.get("provider")
        return cls.resolve(name)(settings)
