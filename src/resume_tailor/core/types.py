"""Shared data types for documents, chunks and extracted resume fields.

Chunk / document types are immutable value objects produced by the
ingestion layer. Resume field types mirror the JSON shape exchanged with
text-completion services and the web front end (camelCase on the wire).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_OVERLAP = 100
RESUME_CHUNK_SIZE = 1500
RESUME_OVERLAP = 200


# ── Chunking ─────────────────────────────────────────────────────────


@dataclass
class ChunkerConfig:
    """Configuration for window-based text chunking.

    Attributes:
        chunk_size: Target maximum characters per chunk. Values below 1
            are clamped to 1.
        overlap: Trailing characters of the previous span the next span
            may re-include. Negative values are clamped to 0.
        preserve_paragraphs: Prefer cutting at paragraph, then sentence
            boundaries in the tail half of each window.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    overlap: int = DEFAULT_OVERLAP
    preserve_paragraphs: bool = True

    def __post_init__(self) -> None:
        for name in ("chunk_size", "overlap"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")

        if self.chunk_size < 1:
            logger.warning("chunk_size=%d is not positive; clamping to 1", self.chunk_size)
            self.chunk_size = 1
        if self.overlap < 0:
            logger.warning("overlap=%d is negative; clamping to 0", self.overlap)
            self.overlap = 0
        self.preserve_paragraphs = bool(self.preserve_paragraphs)

    @classmethod
    def for_resume(cls) -> "ChunkerConfig":
        """Preset sized for resume-scale documents."""
        return cls(chunk_size=RESUME_CHUNK_SIZE, overlap=RESUME_OVERLAP, preserve_paragraphs=True)


@dataclass(frozen=True)
class TextChunk:
    """A trimmed, non-empty segment of a larger text.

    Attributes:
        content: Trimmed chunk text.
        index: Zero-based position among the chunks of one input.
        word_count: Number of whitespace-delimited tokens in ``content``.
        character_count: ``len(content)``.
    """

    content: str
    index: int
    word_count: int
    character_count: int

    @classmethod
    def from_content(cls, content: str, index: int) -> "TextChunk":
        return cls(
            content=content,
            index=index,
            word_count=count_words(content),
            character_count=len(content),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "index": self.index,
            "wordCount": self.word_count,
            "characterCount": self.character_count,
        }


@dataclass(frozen=True)
class DocumentMetadata:
    """Summary derived from a processed document."""

    total_words: int
    total_characters: int
    total_chunks: int
    processing_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalWords": self.total_words,
            "totalCharacters": self.total_characters,
            "totalChunks": self.total_chunks,
            "processingDate": self.processing_date.isoformat(),
        }


@dataclass(frozen=True)
class ProcessedDocument:
    """Normalized text together with its ordered chunks and summary."""

    full_text: str
    chunks: Tuple[TextChunk, ...]
    metadata: DocumentMetadata

    @classmethod
    def build(cls, full_text: str, chunks: List[TextChunk]) -> "ProcessedDocument":
        """Create a document, deriving metadata from ``full_text`` and ``chunks``."""
        metadata = DocumentMetadata(
            total_words=count_words(full_text),
            total_characters=len(full_text),
            total_chunks=len(chunks),
        )
        return cls(full_text=full_text, chunks=tuple(chunks), metadata=metadata)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fullText": self.full_text,
            "chunks": [chunk.to_dict() for chunk in self.chunks],
            "metadata": self.metadata.to_dict(),
        }


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens. Empty or blank text has zero words."""
    return len(text.split())


# ── Extracted resume fields ──────────────────────────────────────────


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def _optional_str(value: Any) -> Optional[str]:
    text = _as_str(value)
    return text or None


def _clean_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _dict_items(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


@dataclass
class PersonalInfo:
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "PersonalInfo":
        if not isinstance(data, dict):
            return cls()
        return cls(
            name=_optional_str(data.get("name")),
            email=_optional_str(data.get("email")),
            phone=_optional_str(data.get("phone")),
            location=_optional_str(data.get("location")),
            linkedin=_optional_str(data.get("linkedin")),
            website=_optional_str(data.get("website")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {key: value for key, value in self.__dict__.items() if value}


@dataclass
class Experience:
    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Experience":
        return cls(
            title=_as_str(data.get("title")),
            company=_as_str(data.get("company")),
            duration=_as_str(data.get("duration")),
            description=_as_str(data.get("description")),
        )

    def to_dict(self) -> Dict[str, str]:
        return dict(self.__dict__)


@dataclass
class Education:
    degree: str = ""
    institution: str = ""
    year: str = ""
    gpa: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Education":
        return cls(
            degree=_as_str(data.get("degree")),
            institution=_as_str(data.get("institution")),
            year=_as_str(data.get("year")),
            gpa=_optional_str(data.get("gpa")),
        )

    def to_dict(self) -> Dict[str, str]:
        payload = {"degree": self.degree, "institution": self.institution, "year": self.year}
        if self.gpa:
            payload["gpa"] = self.gpa
        return payload


@dataclass
class Project:
    name: str = ""
    description: str = ""
    duration: Optional[str] = None
    technologies: Optional[str] = None
    link: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        return cls(
            name=_as_str(data.get("name")),
            description=_as_str(data.get("description")),
            duration=_optional_str(data.get("duration")),
            technologies=_optional_str(data.get("technologies")),
            link=_optional_str(data.get("link")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {key: value for key, value in self.__dict__.items() if value is not None}


@dataclass
class ExtractedInfo:
    """Structured resume fields.

    Built from untrusted service output with :meth:`from_dict`: missing
    sections become empty, non-list sections are ignored, and blank or
    non-string list entries are dropped.
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    summary: Optional[str] = None
    experience: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    achievements: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ExtractedInfo":
        if not isinstance(data, dict):
            raise ValueError(f"Extracted info must be a JSON object, got {type(data).__name__}")
        return cls(
            personal_info=PersonalInfo.from_dict(data.get("personalInfo")),
            summary=_optional_str(data.get("summary")),
            experience=[Experience.from_dict(item) for item in _dict_items(data.get("experience"))],
            education=[Education.from_dict(item) for item in _dict_items(data.get("education"))],
            skills=_clean_str_list(data.get("skills")),
            projects=[Project.from_dict(item) for item in _dict_items(data.get("projects"))],
            certifications=_clean_str_list(data.get("certifications")),
            languages=_clean_str_list(data.get("languages")),
            achievements=_clean_str_list(data.get("achievements")),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "personalInfo": self.personal_info.to_dict(),
            "experience": [item.to_dict() for item in self.experience],
            "education": [item.to_dict() for item in self.education],
            "skills": list(self.skills),
            "projects": [item.to_dict() for item in self.projects],
            "certifications": list(self.certifications),
            "languages": list(self.languages),
            "achievements": list(self.achievements),
        }
        if self.summary:
            payload["summary"] = self.summary
        return payload


@dataclass
class OptimizedResume:
    """A resume rewritten against a job description.

    Attributes:
        optimized_resume: Plain-text resume.
        provider: Name of the provider that produced it, or ``"fallback"``.
        keyword_matches: Candidate skills mentioned by both the job
            description and the produced resume.
    """

    optimized_resume: str
    provider: str
    keyword_matches: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "optimizedResume": self.optimized_resume,
            "provider": self.provider,
            "keywordMatches": list(self.keyword_matches),
        }
