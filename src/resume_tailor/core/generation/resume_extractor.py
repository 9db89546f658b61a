"""Resume field extraction through chat-completion providers.

The raw resume text is normalized and chunked first; the normalized text,
cut to the configured context budget, is sent with a JSON-shaped prompt to
the provider chain. Response text is reduced to its outermost JSON object
and cleaned into an ExtractedInfo.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from resume_tailor.core.generation.llm_chain import LLMChain
from resume_tailor.core.types import ExtractedInfo, ProcessedDocument
from resume_tailor.ingestion.chunking import TextChunker

if TYPE_CHECKING:
    from resume_tailor.core.settings import Settings
    from resume_tailor.core.trace.trace_context import TraceContext

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_CHARS = 4000

EXTRACTION_SYSTEM_PROMPT = (
    "You are an expert resume parser. Extract information and return only valid JSON."
)

EXTRACTION_PROMPT_TEMPLATE = """Extract all resume information from this text and return ONLY a valid JSON object:

TEXT: {text}

Extract and return in this exact JSON format:
{{
  "personalInfo": {{
    "name": "Full Name",
    "email": "email@example.com",
    "phone": "phone number",
    "location": "city, state/country",
    "linkedin": "linkedin profile",
    "website": "personal website"
  }},
  "summary": "professional summary or objective",
  "experience": [
    {{"title": "Job Title", "company": "Company Name", "duration": "Start - End dates", "description": "Key achievements and responsibilities"}}
  ],
  "education": [
    {{"degree": "Degree Name", "institution": "School Name", "year": "Graduation Year", "gpa": "GPA if mentioned"}}
  ],
  "skills": ["skill1", "skill2"],
  "projects": [
    {{"name": "Project Name", "description": "Project description", "duration": "Project timeline"}}
  ],
  "certifications": ["cert1"],
  "languages": ["language1"],
  "achievements": ["achievement1"]
}}

Return ONLY the JSON object, no other text:"""


class ExtractionParseError(ValueError):
    """Raised when a response does not contain a JSON object."""


def parse_json_object(content: str) -> Dict[str, Any]:
    """Parse the outermost ``{...}`` of a model response.

    Models often wrap JSON in prose or code fences; everything before the
    first ``{`` and after the last ``}`` is ignored.

    Raises:
        ExtractionParseError: If no JSON object can be decoded.
    """
    text = content.strip()
    start = text.find("{")
    end = text.rfind("}") + 1
    if start != -1 and end > start:
        text = text[start:end]

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionParseError(f"Invalid JSON response: {e.msg}") from e

    if not isinstance(parsed, dict):
        raise ExtractionParseError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


@dataclass
class ExtractionResult:
    """Extracted fields and how they were obtained."""

    info: ExtractedInfo
    provider: str
    document: ProcessedDocument
    attempts: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return self.provider == "fallback"


class ResumeExtractor:
    """Extract structured resume fields from raw text.

    Args:
        settings: Application settings (``llm``, ``splitter``, ``extraction``).
        chain: Optional prebuilt provider chain; built from settings otherwise.
        chunker: Optional TextChunker; built from settings otherwise.
        fallback: Optional caller-supplied extractor receiving the full
            normalized text when every provider fails.
    """

    def __init__(
        self,
        settings: Settings,
        chain: Optional[LLMChain] = None,
        chunker: Optional[TextChunker] = None,
        fallback: Optional[Callable[[str], ExtractedInfo]] = None,
    ) -> None:
        self.settings = settings
        self.chain = chain if chain is not None else LLMChain.from_settings(settings)
        self.chunker = chunker if chunker is not None else TextChunker(settings=settings)
        self.fallback = fallback
        self.max_input_chars = int(
            settings.extraction.get("max_input_chars", DEFAULT_MAX_INPUT_CHARS)
        )

    def prepare_input(self, document: ProcessedDocument) -> str:
        """Cut the normalized text to the context budget."""
        text = document.full_text
        if len(text) <= self.max_input_chars:
            return text
        logger.info(
            "Truncating resume text from %d to %d characters (%d chunks available)",
            len(text),
            self.max_input_chars,
            document.metadata.total_chunks,
        )
        return text[: self.max_input_chars] + "..."

    def build_messages(self, text: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
            {"role": "user", "content": EXTRACTION_PROMPT_TEMPLATE.format(text=text)},
        ]

    def extract(self, text: Any, trace: Optional[TraceContext] = None) -> ExtractionResult:
        """Extract fields from raw resume text.

        Raises:
            ValueError: If ``text`` is not a non-blank string.
            GenerationError: If all providers and the fallback failed.
        """
        if not isinstance(text, str) or not text.strip():
            raise ValueError("Text content is required")

        document = self.chunker.process_document(text, trace=trace)
        messages = self.build_messages(self.prepare_input(document))

        fallback = None
        if self.fallback is not None:
            extract_fallback = self.fallback
            fallback = lambda: extract_fallback(document.full_text)  # noqa: E731

        result = self.chain.run(
            messages,
            handler=lambda content: ExtractedInfo.from_dict(parse_json_object(content)),
            fallback=fallback,
            trace=trace,
            stage_name="extraction",
            response_mime_type="application/json",
        )
        return ExtractionResult(
            info=result.value,
            provider=result.provider,
            document=document,
            attempts=result.attempts,
        )
