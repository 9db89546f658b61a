"""Unit tests for LLMChain ordering, retries and fallback."""

from __future__ import annotations

from typing import Any, Iterable, List

import pytest

from resume_tailor.core.generation import ChainResult, GenerationError, LLMChain
from resume_tailor.core.settings import Settings
from resume_tailor.core.trace import TraceContext
from resume_tailor.libs.llm import LLMFactory
from resume_tailor.libs.llm.base_llm import BaseLLM, LLMError


class _ScriptedLLM(BaseLLM):
    """Returns (or raises) scripted responses in order."""

    def __init__(self, name: str, responses: Iterable[Any]) -> None:
        self.name = name
        self._responses = list(responses)
        self.calls: List[dict[str, Any]] = []

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        self.calls.append(kwargs)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


_MESSAGES = [{"role": "user", "content": "hi"}]


def _identity(content: str) -> str:
    return content


@pytest.fixture
def sleeps() -> List[float]:
    return []


class TestRun:

    def test_first_provider_success(self, sleeps: List[float]) -> None:
        first = _ScriptedLLM("first", ["one"])
        second = _ScriptedLLM("second", ["two"])
        chain = LLMChain([first, second], sleep=sleeps.append)

        result = chain.run(_MESSAGES, handler=_identity)

        assert isinstance(result, ChainResult)
        assert result.value == "one"
        assert result.provider == "first"
        assert not result.used_fallback
        assert second.calls == []
        assert sleeps == []

    def test_retries_with_linear_backoff_then_next_provider(self, sleeps: List[float]) -> None:
        first = _ScriptedLLM("first", [LLMError("a"), LLMError("b"), LLMError("c")])
        second = _ScriptedLLM("second", ["ok"])
        chain = LLMChain([first, second], retries=3, backoff_seconds=0.5, sleep=sleeps.append)

        result = chain.run(_MESSAGES, handler=_identity)

        assert result.provider == "second"
        assert sleeps == [0.5, 1.0]
        assert [(a["provider"], a["attempt"], a["ok"]) for a in result.attempts] == [
            ("first", 1, False),
            ("first", 2, False),
            ("first", 3, False),
            ("second", 1, True),
        ]
        assert result.attempts[0]["error"] == "a"

    def test_handler_failure_counts_as_failed_attempt(self, sleeps: List[float]) -> None:
        llm = _ScriptedLLM("only", ["not json", '{"a": 1}'])
        chain = LLMChain([llm], retries=2, backoff_seconds=0, sleep=sleeps.append)

        def handler(content: str) -> int:
            if not content.startswith("{"):
                raise ValueError("bad payload")
            return len(content)

        result = chain.run(_MESSAGES, handler=handler)

        assert result.value == 8
        assert result.attempts[0] == {"provider": "only", "attempt": 1, "ok": False, "error": "bad payload"}
        assert sleeps == [0.0]

    def test_chat_kwargs_are_forwarded(self, sleeps: List[float]) -> None:
        llm = _ScriptedLLM("only", ["ok"])
        chain = LLMChain([llm], sleep=sleeps.append)

        chain.run(_MESSAGES, handler=_identity, response_mime_type="application/json")

        assert llm.calls == [{"response_mime_type": "application/json"}]

    def test_fallback_used_when_all_providers_fail(self, sleeps: List[float]) -> None:
        llm = _ScriptedLLM("only", [LLMError("x"), LLMError("y")])
        chain = LLMChain([llm], retries=2, sleep=sleeps.append)

        result = chain.run(_MESSAGES, handler=_identity, fallback=lambda: "rescued")

        assert result.value == "rescued"
        assert result.provider == "fallback"
        assert result.used_fallback
        assert result.attempts[-1] == {"provider": "fallback", "attempt": 1, "ok": True, "error": None}

    def test_no_providers_goes_straight_to_fallback(self, sleeps: List[float]) -> None:
        chain = LLMChain([], sleep=sleeps.append)

        result = chain.run(_MESSAGES, handler=_identity, fallback=lambda: "rescued")

        assert result.used_fallback
        assert len(result.attempts) == 1

    def test_all_failed_without_fallback_raises(self, sleeps: List[float]) -> None:
        llm = _ScriptedLLM("only", [LLMError("x"), LLMError("y")])
        chain = LLMChain([llm], retries=2, sleep=sleeps.append)

        with pytest.raises(GenerationError, match="All providers failed") as exc_info:
            chain.run(_MESSAGES, handler=_identity)

        assert [a["error"] for a in exc_info.value.attempts] == ["x", "y"]

    def test_failing_fallback_raises_generation_error(self, sleeps: List[float]) -> None:
        llm = _ScriptedLLM("only", [LLMError("x")])
        chain = LLMChain([llm], retries=1, sleep=sleeps.append)

        def broken_fallback() -> str:
            raise RuntimeError("fallback broke")

        with pytest.raises(GenerationError, match="fallback failed") as exc_info:
            chain.run(_MESSAGES, handler=_identity, fallback=broken_fallback)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.attempts[-1]["provider"] == "fallback"
        assert exc_info.value.attempts[-1]["ok"] is False

    def test_retries_clamped_to_at_least_one(self, sleeps: List[float]) -> None:
        chain = LLMChain([], retries=0, backoff_seconds=-3, sleep=sleeps.append)

        assert chain.retries == 1
        assert chain.backoff_seconds == 0.0


class TestTrace:

    def test_success_records_stage(self, sleeps: List[float]) -> None:
        trace = TraceContext(trace_type="extraction")
        chain = LLMChain([_ScriptedLLM("only", ["ok"])], sleep=sleeps.append)

        chain.run(_MESSAGES, handler=_identity, trace=trace, stage_name="extraction")

        stage = trace.get_stage_data("extraction")
        assert stage is not None
        assert stage["provider"] == "only"
        assert stage["used_fallback"] is False
        assert len(stage["attempts"]) == 1
        assert trace.elapsed_ms("extraction") >= 0.0

    def test_failure_records_stage_before_raising(self, sleeps: List[float]) -> None:
        trace = TraceContext()
        chain = LLMChain([_ScriptedLLM("only", [LLMError("x")])], retries=1, sleep=sleeps.append)

        with pytest.raises(GenerationError):
            chain.run(_MESSAGES, handler=_identity, trace=trace, stage_name="optimization")

        stage = trace.get_stage_data("optimization")
        assert stage is not None
        assert stage["failed"] is True
        assert stage["provider"] is None
        assert [a["provider"] for a in stage["attempts"]] == ["only"]
        assert trace.elapsed_ms("optimization") >= 0.0


def _make_settings(provider: str, fallback_providers: list, **extraction: Any) -> Settings:
    raw = {
        "llm": {"provider": provider, "fallback_providers": fallback_providers},
        "splitter": {"type": "window"},
        "extraction": extraction,
        "observability": {},
    }
    return Settings(
        llm=raw["llm"],
        splitter=raw["splitter"],
        extraction=raw["extraction"],
        observability=raw["observability"],
        raw=raw,
    )


class TestFromSettings:

    def test_builds_providers_in_configured_order(self, monkeypatch: pytest.MonkeyPatch) -> None:
        created: List[str] = []

        def make(name: str):
            def factory(settings: Settings) -> BaseLLM:
                created.append(name)
                return _ScriptedLLM(name, [])
            return factory

        monkeypatch.setattr(LLMFactory, "_registry", {"a": make("a"), "b": make("b")})
        settings = _make_settings("b", ["a", "B", ""], retries=4, retry_backoff_seconds=0.25)

        chain = LLMChain.from_settings(settings)

        assert [p.name for p in chain.providers] == ["b", "a"]
        assert created == ["b", "a"]
        assert chain.retries == 4
        assert chain.backoff_seconds == 0.25

    def test_skips_providers_without_keys(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
        monkeypatch.setenv("GEMINI_API_KEY", "gm-key")

        chain = LLMChain.from_settings(_make_settings("openrouter", ["gemini"]))

        assert [p.name for p in chain.providers] == ["gemini"]

    def test_explicit_provider_order(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENROUTER_API_KEY", "or-key")
        monkeypatch.setenv("GEMINI_API_KEY", "gm-key")

        chain = LLMChain.from_settings(
            _make_settings("openrouter", []),
            provider_order=["gemini", "openrouter"],
        )

        assert [p.name for p in chain.providers] == ["gemini", "openrouter"]
