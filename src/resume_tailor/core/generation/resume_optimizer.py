"""Tailor an extracted resume against a job description."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from resume_tailor.core.generation.llm_chain import LLMChain
from resume_tailor.core.types import ExtractedInfo, OptimizedResume
from resume_tailor.ingestion.chunking import normalize_text

if TYPE_CHECKING:
    from resume_tailor.core.settings import Settings
    from resume_tailor.core.trace.trace_context import TraceContext

logger = logging.getLogger(__name__)

DEFAULT_OPTIMIZER_PROVIDERS = ("gemini", "openrouter")

OPTIMIZER_SYSTEM_PROMPT = "You are an expert resume writer who produces ATS-friendly resumes."

OPTIMIZER_PROMPT_TEMPLATE = """Create a comprehensive, professional, ATS-friendly resume based on this information:

CANDIDATE INFO: {candidate}

JOB DESCRIPTION: {job_description}

Create a FULL-LENGTH resume that:
1. Passes ATS scanners with proper formatting and keywords
2. Uses strong action verbs and quantified achievements
3. Incorporates relevant keywords from the job description naturally
4. Includes every relevant section: experience, education, skills and projects
5. Opens with a 3-4 sentence Professional Summary

Format with clear section headers:
- Professional Summary
- Core Skills
- Professional Experience
- Projects
- Education

Return ONLY the formatted resume text:"""


def match_keywords(skills: List[str], job_description: str, resume_text: str) -> List[str]:
    """Skills named by both the job description and the produced resume.

    Matching is case-insensitive; order and first spelling follow ``skills``.
    """
    job_lower = job_description.lower()
    resume_lower = resume_text.lower()
    matches: List[str] = []
    seen = set()
    for skill in skills:
        key = skill.lower()
        if key in seen:
            continue
        if key in job_lower and key in resume_lower:
            matches.append(skill)
            seen.add(key)
    return matches


class ResumeOptimizer:
    """Rewrite a resume for a specific job description.

    Args:
        settings: Application settings.
        chain: Optional prebuilt chain. By default providers come from
            ``extraction.optimizer_providers`` (Gemini, then OpenRouter).
        fallback: Optional caller-supplied generator called with the
            extracted info and normalized job description.
    """

    def __init__(
        self,
        settings: Settings,
        chain: Optional[LLMChain] = None,
        fallback: Optional[Callable[[ExtractedInfo, str], str]] = None,
    ) -> None:
        self.settings = settings
        if chain is None:
            order = settings.extraction.get("optimizer_providers") or list(DEFAULT_OPTIMIZER_PROVIDERS)
            chain = LLMChain.from_settings(settings, provider_order=order)
        self.chain = chain
        self.fallback = fallback
        self.max_input_chars = int(settings.extraction.get("max_input_chars", 4000))

    def build_messages(self, info: ExtractedInfo, job_description: str) -> List[Dict[str, str]]:
        prompt = OPTIMIZER_PROMPT_TEMPLATE.format(
            candidate=json.dumps(info.to_dict(), indent=2, ensure_ascii=False),
            job_description=job_description,
        )
        return [
            {"role": "system", "content": OPTIMIZER_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]

    def optimize(
        self,
        info: Optional[ExtractedInfo],
        job_description: str,
        trace: Optional[TraceContext] = None,
    ) -> OptimizedResume:
        """Produce a tailored plain-text resume.

        Raises:
            ValueError: If the extracted info or job description is missing.
            GenerationError: If all providers and the fallback failed.
        """
        if info is None or not isinstance(job_description, str) or not job_description.strip():
            raise ValueError("Missing required data: extracted info and job description")

        job_text = normalize_text(job_description)[: self.max_input_chars]
        messages = self.build_messages(info, job_text)

        fallback = None
        if self.fallback is not None:
            optimize_fallback = self.fallback
            fallback = lambda: _require_text(optimize_fallback(info, job_text))  # noqa: E731

        result = self.chain.run(
            messages,
            handler=_require_text,
            fallback=fallback,
            trace=trace,
            stage_name="optimization",
        )
        resume_text = result.value.strip()
        keywords = match_keywords(info.skills, job_text, resume_text)
        logger.info("Tailored resume via %s (%d keyword matches)", result.provider, len(keywords))
        return OptimizedResume(
            optimized_resume=resume_text,
            provider=result.provider,
            keyword_matches=keywords,
        )


def _require_text(content: Optional[str]) -> str:
    if not content or not content.strip():
        raise ValueError("Empty resume returned")
    return content
