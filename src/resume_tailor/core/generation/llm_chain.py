"""Ordered LLM provider chain with retries and a caller-supplied fallback.

Providers are tried in configuration order. Each gets ``retries``
attempts, with a linear backoff (``backoff_seconds * attempt``) between
attempts of the same provider. A handler turns raw response text into
the caller's result type; a handler exception counts as a failed attempt
just like a transport error. When every provider is exhausted the
fallback, if any, produces the result.
"""

from __future__ import annotations

import logging
import time
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from resume_tailor.libs.llm import BaseLLM, LLMFactory

if TYPE_CHECKING:
    from resume_tailor.core.settings import Settings
    from resume_tailor.core.trace.trace_context import TraceContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

FALLBACK_PROVIDER = "fallback"


class GenerationError(RuntimeError):
    """Raised when every provider and the fallback failed.

    Attributes:
        attempts: Attempt records collected before giving up.
    """

    def __init__(self, message: str, attempts: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.attempts = attempts or []


@dataclass
class ChainResult(Generic[T]):
    """Outcome of a chain run.

    Attributes:
        value: Handler (or fallback) output.
        provider: Name of the provider that succeeded, or ``"fallback"``.
        attempts: One record per attempt: provider, attempt number,
            ok flag and error message.
    """

    value: T
    provider: str
    attempts: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return self.provider == FALLBACK_PROVIDER


class LLMChain:
    """Try providers in order until one yields a handled response.

    Args:
        providers: Providers in priority order.
        retries: Attempts per provider (at least 1).
        backoff_seconds: Base delay between attempts of one provider.
        sleep: Sleep function, injectable for tests.
    """

    def __init__(
        self,
        providers: Sequence[BaseLLM],
        retries: int = 2,
        backoff_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.providers = list(providers)
        self.retries = max(1, int(retries))
        self.backoff_seconds = max(0.0, float(backoff_seconds))
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        provider_order: Optional[Sequence[str]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "LLMChain":
        """Build a chain from ``llm.provider`` + ``llm.fallback_providers``.

        Providers that cannot be constructed (typically a missing API key)
        are skipped with a warning.
        """
        if provider_order is None:
            fallback_providers = settings.llm.get("fallback_providers") or []
            provider_order = [settings.llm.get("provider"), *fallback_providers]

        providers: List[BaseLLM] = []
        seen = set()
        for name in provider_order:
            if not isinstance(name, str) or not name.strip():
                continue
            key = name.strip().lower()
            if key in seen:
                continue
            seen.add(key)
            try:
                providers.append(LLMFactory.create(settings, provider=key))
            except ValueError as exc:
                logger.warning("Skipping LLM provider %s: %s", key, exc)

        return cls(
            providers,
            retries=settings.extraction.get("retries", 2),
            backoff_seconds=settings.extraction.get("retry_backoff_seconds", 1.0),
            sleep=sleep,
        )

    def run(
        self,
        messages: List[Dict[str, str]],
        handler: Callable[[str], T],
        fallback: Optional[Callable[[], T]] = None,
        trace: Optional[TraceContext] = None,
        stage_name: str = "llm_chain",
        **chat_kwargs: Any,
    ) -> ChainResult[T]:
        """Run the chain.

        Args:
            messages: Chat messages sent to every provider.
            handler: Converts response text into the result; raising marks
                the attempt as failed.
            fallback: Called once when all providers failed.
            trace: Optional trace context; one stage is recorded.
            stage_name: Name of the recorded stage.
            **chat_kwargs: Forwarded to each provider's ``chat``.

        Raises:
            GenerationError: If all providers and the fallback failed.
        """
        attempts: List[Dict[str, Any]] = []
        stage = trace.stage_timer(stage_name) if trace is not None else nullcontext({})
        with stage as data:
            try:
                result = self._attempt_all(messages, handler, fallback, attempts, chat_kwargs)
            except GenerationError:
                data.update({"provider": None, "used_fallback": False, "attempts": list(attempts), "failed": True})
                raise
            data.update(
                {
                    "provider": result.provider,
                    "used_fallback": result.used_fallback,
                    "attempts": list(result.attempts),
                }
            )
        return result

    def _attempt_all(
        self,
        messages: List[Dict[str, str]],
        handler: Callable[[str], T],
        fallback: Optional[Callable[[], T]],
        attempts: List[Dict[str, Any]],
        chat_kwargs: Dict[str, Any],
    ) -> ChainResult[T]:
        for provider in self.providers:
            for attempt in range(1, self.retries + 1):
                logger.info("Trying %s (attempt %d/%d)", provider.name, attempt, self.retries)
                try:
                    value = handler(provider.chat(messages, **chat_kwargs))
                except Exception as exc:
                    attempts.append(
                        {"provider": provider.name, "attempt": attempt, "ok": False, "error": str(exc)}
                    )
                    logger.warning("%s attempt %d failed: %s", provider.name, attempt, exc)
                    if attempt < self.retries:
                        self._sleep(self.backoff_seconds * attempt)
                    continue

                attempts.append({"provider": provider.name, "attempt": attempt, "ok": True, "error": None})
                logger.info("Succeeded with %s", provider.name)
                return ChainResult(value=value, provider=provider.name, attempts=attempts)

            logger.warning("%s failed after %d attempts", provider.name, self.retries)

        if fallback is None:
            raise GenerationError("All providers failed after retries", attempts)

        logger.info("All providers failed; using fallback")
        try:
            value = fallback()
        except Exception as exc:
            attempts.append({"provider": FALLBACK_PROVIDER, "attempt": 1, "ok": False, "error": str(exc)})
            raise GenerationError("All providers and the fallback failed", attempts) from exc

        attempts.append({"provider": FALLBACK_PROVIDER, "attempt": 1, "ok": True, "error": None})
        return ChainResult(value=value, provider=FALLBACK_PROVIDER, attempts=attempts)
