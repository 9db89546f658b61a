"""Chunking module - raw text to chunked documents.

Normalizes document text and adapts libs.splitter output into TextChunk
and ProcessedDocument objects.
"""

from resume_tailor.ingestion.chunking.text_chunker import (
    TextChunker,
    chunk_text,
    normalize_text,
    process_document_text,
)

__all__ = ["TextChunker", "chunk_text", "normalize_text", "process_document_text"]
