"""
Generation Module.

Services that send normalized resume text to chat-completion providers:
- LLM chain (ordered providers, retries, caller-supplied fallback)
- Resume field extractor
- Resume optimizer (tailoring against a job description)
"""

from resume_tailor.core.generation.llm_chain import ChainResult, GenerationError, LLMChain
from resume_tailor.core.generation.resume_extractor import (
    ExtractionParseError,
    ExtractionResult,
    ResumeExtractor,
    parse_json_object,
)
from resume_tailor.core.generation.resume_optimizer import ResumeOptimizer

__all__ = [
    "ChainResult",
    "GenerationError",
    "LLMChain",
    "ExtractionParseError",
    "ExtractionResult",
    "ResumeExtractor",
    "parse_json_object",
    "ResumeOptimizer",
]
