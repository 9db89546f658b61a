"""Tests for the shared data types."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from resume_tailor.core.types import (
    DocumentMetadata,
    ExtractedInfo,
    OptimizedResume,
    PersonalInfo,
    ProcessedDocument,
    TextChunk,
)


# ── Document types ──────────────────────────────────────────────────


def test_text_chunk_from_content_counts() -> None:
    chunk = TextChunk.from_content("Senior engineer at Acme.", 3)

    assert chunk.index == 3
    assert chunk.word_count == 4
    assert chunk.character_count == 24
    assert chunk.to_dict() == {
        "content": "Senior engineer at Acme.",
        "index": 3,
        "wordCount": 4,
        "characterCount": 24,
    }


def test_text_chunk_is_immutable() -> None:
    chunk = TextChunk.from_content("abc", 0)

    with pytest.raises(AttributeError):
        chunk.content = "changed"  # type: ignore[misc]


def test_processed_document_build_derives_metadata() -> None:
    chunks = [TextChunk.from_content("one two", 0), TextChunk.from_content("two three", 1)]

    document = ProcessedDocument.build("one two three", chunks)

    assert document.metadata.total_words == 3
    assert document.metadata.total_characters == 13
    assert document.metadata.total_chunks == 2
    assert isinstance(document.chunks, tuple)
    assert document.metadata.processing_date.tzinfo is not None


def test_processed_document_to_dict_uses_camel_case() -> None:
    metadata = DocumentMetadata(
        total_words=0,
        total_characters=0,
        total_chunks=0,
        processing_date=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )
    document = ProcessedDocument(full_text="", chunks=(), metadata=metadata)

    assert document.to_dict() == {
        "fullText": "",
        "chunks": [],
        "metadata": {
            "totalWords": 0,
            "totalCharacters": 0,
            "totalChunks": 0,
            "processingDate": "2024-01-02T03:04:05+00:00",
        },
    }


# ── Extracted fields ────────────────────────────────────────────────


class TestExtractedInfo:

    def test_from_dict_cleans_untrusted_input(self) -> None:
        info = ExtractedInfo.from_dict(
            {
                "personalInfo": {"name": "  Jane Doe ", "email": "", "phone": 5551234},
                "summary": "   ",
                "experience": [
                    {"title": "Engineer", "company": "Acme", "duration": "2020 - 2023"},
                    "not a dict",
                ],
                "education": [{"degree": "BSc", "institution": "MIT", "year": 2019, "gpa": ""}],
                "skills": ["Python", " ", 7, " SQL "],
                "projects": [{"name": "Tailor", "description": "CLI", "link": "https://x.dev"}],
                "certifications": "AWS",
                "languages": None,
            }
        )

        assert info.personal_info == PersonalInfo(name="Jane Doe", phone="5551234")
        assert info.summary is None
        assert len(info.experience) == 1
        assert info.experience[0].description == ""
        assert info.education[0].year == "2019"
        assert info.education[0].gpa is None
        assert info.skills == ["Python", "SQL"]
        assert info.projects[0].link == "https://x.dev"
        assert info.certifications == []
        assert info.languages == []
        assert info.achievements == []

    def test_from_dict_missing_sections_default_empty(self) -> None:
        info = ExtractedInfo.from_dict({})

        assert info == ExtractedInfo()

    def test_from_dict_rejects_non_object(self) -> None:
        with pytest.raises(ValueError, match="JSON object"):
            ExtractedInfo.from_dict(["skills"])

    def test_to_dict_omits_empty_optional_fields(self) -> None:
        info = ExtractedInfo.from_dict(
            {
                "personalInfo": {"name": "Jane"},
                "summary": "Backend engineer",
                "education": [{"degree": "BSc", "institution": "MIT", "year": "2019"}],
                "projects": [{"name": "Tailor", "description": "CLI"}],
                "skills": ["Python"],
            }
        )

        assert info.to_dict() == {
            "personalInfo": {"name": "Jane"},
            "summary": "Backend engineer",
            "experience": [],
            "education": [{"degree": "BSc", "institution": "MIT", "year": "2019"}],
            "skills": ["Python"],
            "projects": [{"name": "Tailor", "description": "CLI"}],
            "certifications": [],
            "languages": [],
            "achievements": [],
        }

    def test_round_trip_through_camel_case_dict(self) -> None:
        info = ExtractedInfo.from_dict({"personalInfo": {"email": "a@b.c"}, "skills": ["Go"]})

        assert ExtractedInfo.from_dict(info.to_dict()) == info


def test_optimized_resume_to_dict() -> None:
    resume = OptimizedResume(optimized_resume="text", provider="gemini")

    assert resume.to_dict() == {"optimizedResume": "text", "provider": "gemini", "keywordMatches": []}
