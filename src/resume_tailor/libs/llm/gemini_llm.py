"""Google Gemini LLM implementation.

Calls the ``generateContent`` REST endpoint directly over HTTPS. Chat
roles are mapped onto Gemini's ``user`` / ``model`` turns and system
messages are sent as ``systemInstruction``.
"""

from __future__ import annotations

import os
from typing import Any, Optional

import requests

from resume_tailor.core.settings import Settings
from resume_tailor.libs.llm.base_llm import BaseLLM, LLMError


class GeminiLLMError(LLMError):
    """Raised when the Gemini API call fails."""


class GeminiLLM(BaseLLM):
    """Gemini provider implementation.

    Attributes:
        api_key: The Google AI Studio API key.
        model: Gemini model name.
        base_url: API base URL.
        temperature: Default sampling temperature.
        max_tokens: Default ``maxOutputTokens``.
        timeout: Request timeout in seconds.
    """

    name = "gemini"

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    DEFAULT_MODEL = "gemini-1.5-flash"

    _ROLE_MAP = {"user": "user", "assistant": "model"}

    def __init__(self, settings: Settings, api_key: Optional[str] = None) -> None:
        """Initialize the Gemini provider.

        Args:
            settings: Application settings containing LLM configuration.
            api_key: Optional API key override (falls back to settings, then
                the GEMINI_API_KEY environment variable).

        Raises:
            ValueError: If no API key is available.
        """
        provider_config = settings.llm.get("gemini") or {}

        self.api_key = (
            api_key
            or provider_config.get("api_key")
            or os.environ.get("GEMINI_API_KEY")
        )
        if not self.api_key:
            raise ValueError(
                "Gemini API key not provided. Set GEMINI_API_KEY environment "
                "variable or llm.gemini.api_key."
            )

        self.model = provider_config.get("model", self.DEFAULT_MODEL)
        self.base_url = provider_config.get("base_url", self.DEFAULT_BASE_URL).rstrip("/")
        self.temperature = float(settings.llm.get("temperature", 0.1))
        self.max_tokens = int(settings.llm.get("max_tokens", 2000))
        self.timeout = float(settings.llm.get("timeout", 30))

    def build_payload(self, messages: list[dict[str, str]], **kwargs: Any) -> dict[str, Any]:
        """Translate chat messages into a ``generateContent`` request body."""
        system_parts = [{"text": m["content"]} for m in messages if m["role"] == "system"]
        contents = [
            {"role": self._ROLE_MAP[m["role"]], "parts": [{"text": m["content"]}]}
            for m in messages
            if m["role"] != "system"
        ]

        generation_config: dict[str, Any] = {
            "temperature": kwargs.get("temperature", self.temperature),
            "maxOutputTokens": kwargs.get("max_tokens", self.max_tokens),
        }
        response_mime_type = kwargs.get("response_mime_type")
        if response_mime_type:
            generation_config["responseMimeType"] = response_mime_type

        payload: dict[str, Any] = {"contents": contents, "generationConfig": generation_config}
        if system_parts:
            payload["systemInstruction"] = {"parts": system_parts}
        return payload

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        """Send a ``generateContent`` request.

        Raises:
            ValueError: If the message list is invalid or has no user turn.
            GeminiLLMError: If the call fails or returns no content.
        """
        self.validate_messages(messages)
        payload = self.build_payload(messages, **kwargs)
        if not payload["contents"]:
            raise ValueError("Gemini requires at least one user or assistant message")

        model = kwargs.get("model", self.model)
        url = f"{self.base_url}/models/{model}:generateContent"

        try:
            response = requests.post(
                url,
                params={"key": self.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            error_details = e.response.text if e.response is not None else str(e)
            status = e.response.status_code if e.response is not None else "?"
            raise GeminiLLMError(f"[Gemini] HTTP {status}: {error_details}") from e
        except requests.exceptions.RequestException as e:
            raise GeminiLLMError(f"[Gemini] Request failed: {e}") from e
        except ValueError as e:
            raise GeminiLLMError(f"[Gemini] Response is not JSON: {e}") from e

        try:
            content = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise GeminiLLMError(f"[Gemini] Unexpected response format: missing {e}") from e

        if not content or not content.strip():
            raise GeminiLLMError("[Gemini] No content returned")
        return content
