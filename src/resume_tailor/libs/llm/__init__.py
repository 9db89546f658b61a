"""
LLM Module.

This package contains LLM client abstractions and implementations:
- Base LLM class
- LLM factory
- Provider implementations (OpenRouter, Gemini)
"""

from resume_tailor.libs.llm.base_llm import BaseLLM, LLMError
from resume_tailor.libs.llm.llm_factory import LLMFactory
from resume_tailor.libs.llm.openrouter_llm import OpenRouterLLM, OpenRouterLLMError
from resume_tailor.libs.llm.gemini_llm import GeminiLLM, GeminiLLMError

LLMFactory.register("openrouter", OpenRouterLLM)
LLMFactory.register("gemini", GeminiLLM)

__all__ = [
    "BaseLLM",
    "LLMError",
    "LLMFactory",
    "OpenRouterLLM",
    "OpenRouterLLMError",
    "GeminiLLM",
    "GeminiLLMError",
]
