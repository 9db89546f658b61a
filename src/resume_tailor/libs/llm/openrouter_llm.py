"""OpenRouter LLM implementation.

OpenRouter exposes an OpenAI-compatible chat completions API, so this
provider drives the official ``openai`` client with a custom base URL and
the attribution headers OpenRouter expects.
"""

from __future__ import annotations

import os
from typing import Any, Optional

from resume_tailor.core.settings import Settings
from resume_tailor.libs.llm.base_llm import BaseLLM, LLMError


class OpenRouterLLMError(LLMError):
    """Raised when the OpenRouter API call fails."""


class OpenRouterLLM(BaseLLM):
    """OpenRouter provider implementation.

    Attributes:
        api_key: The API key for authentication.
        model: Model identifier routed by OpenRouter.
        base_url: API base URL.
        temperature: Default sampling temperature.
        max_tokens: Default completion token limit.
        timeout: Request timeout in seconds.

    Example:
        >>> from resume_tailor.core.settings import load_settings
        >>> settings = load_settings("config/settings.yaml")
        >>> llm = OpenRouterLLM(settings)
        >>> llm.chat([{"role": "user", "content": "Hello"}])
    """

    name = "openrouter"

    DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
    DEFAULT_MODEL = "mistralai/mistral-7b-instruct"
    DEFAULT_SITE_URL = "http://localhost:3001"
    DEFAULT_APP_TITLE = "Resume Tailor AI"

    def __init__(
        self,
        settings: Settings,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
    ) -> None:
        """Initialize the OpenRouter provider.

        Args:
            settings: Application settings containing LLM configuration.
            api_key: Optional API key override (falls back to settings, then
                the OPENROUTER_API_KEY environment variable).
            client: Optional pre-built OpenAI-compatible client.

        Raises:
            ValueError: If no API key is available.
        """
        provider_config = settings.llm.get("openrouter") or {}

        self.api_key = (
            api_key
            or provider_config.get("api_key")
            or os.environ.get("OPENROUTER_API_KEY")
        )
        if not self.api_key:
            raise ValueError(
                "OpenRouter API key not provided. Set OPENROUTER_API_KEY environment "
                "variable or llm.openrouter.api_key."
            )

        self.model = provider_config.get("model", self.DEFAULT_MODEL)
        self.base_url = provider_config.get("base_url", self.DEFAULT_BASE_URL)
        self.site_url = provider_config.get("site_url", self.DEFAULT_SITE_URL)
        self.app_title = provider_config.get("app_title", self.DEFAULT_APP_TITLE)
        self.temperature = float(settings.llm.get("temperature", 0.1))
        self.max_tokens = int(settings.llm.get("max_tokens", 2000))
        self.timeout = float(settings.llm.get("timeout", 30))

        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            from openai import OpenAI

            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                default_headers={
                    "HTTP-Referer": self.site_url,
                    "X-Title": self.app_title,
                },
            )
        return self._client

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        """Send a chat completion request.

        Raises:
            ValueError: If the message list is invalid.
            OpenRouterLLMError: If the call fails or returns no content.
        """
        self.validate_messages(messages)

        try:
            response = self._get_client().chat.completions.create(
                model=kwargs.get("model", self.model),
                messages=messages,
                temperature=kwargs.get("temperature", self.temperature),
                max_tokens=kwargs.get("max_tokens", self.max_tokens),
            )
        except Exception as e:
            raise OpenRouterLLMError(f"[OpenRouter] API call failed: {type(e).__name__}: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise OpenRouterLLMError(f"[OpenRouter] Unexpected response format: {e}") from e

        if not content or not content.strip():
            raise OpenRouterLLMError("[OpenRouter] No content returned")
        return content
