"""Text chunking adapter - turns raw document text into ProcessedDocuments.

This module sits between libs.splitter (pure span splitting) and the
generation services that send text to context-limited completion APIs.

Value added on top of the splitter:
1. Normalization: line endings, whitespace runs and blank lines are
   collapsed into an unambiguous ``\\n`` / ``\\n\\n`` structure.
2. TextChunk objects with contiguous indices and word / character counts.
3. ProcessedDocument metadata (totals and processing date).
4. Trace recording at the start / end of document processing.
"""

from __future__ import annotations

import logging
import re
from contextlib import nullcontext
from typing import TYPE_CHECKING, List, Optional

from resume_tailor.core.types import ChunkerConfig, ProcessedDocument, TextChunk
from resume_tailor.libs.splitter import BaseSplitter, SplitterFactory, WindowSplitter

if TYPE_CHECKING:
    from resume_tailor.core.settings import Settings
    from resume_tailor.core.trace.trace_context import TraceContext

logger = logging.getLogger(__name__)

_LINE_ENDINGS = re.compile(r"\r\n?")
_INLINE_WHITESPACE = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" ?\n ?")
_BLANK_LINES = re.compile(r"\n{2,}")


def normalize_text(raw_text: str) -> str:
    """Normalize line endings and whitespace.

    - ``\\r\\n`` and ``\\r`` become ``\\n``
    - runs of spaces, tabs and other non-newline whitespace become one space
    - spaces around line breaks are dropped
    - one or more blank lines become a single ``\\n\\n`` paragraph break
    - leading / trailing whitespace is trimmed

    Args:
        raw_text: Arbitrary text.

    Returns:
        Normalized text; empty input yields ``""``.
    """
    text = _LINE_ENDINGS.sub("\n", raw_text)
    text = _INLINE_WHITESPACE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()


class TextChunker:
    """Converts text into TextChunks and ProcessedDocuments.

    The splitter is resolved in this order: an explicit ``splitter``, the
    ``splitter`` section of ``settings`` via SplitterFactory, or a
    WindowSplitter with ``config`` (resume-scale preset by default).

    Example:
        >>> chunker = TextChunker(config=ChunkerConfig(chunk_size=1000, overlap=100))
        >>> document = chunker.process_document(raw_text)
        >>> document.metadata.total_chunks == len(document.chunks)
        True
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        splitter: Optional[BaseSplitter] = None,
        config: Optional[ChunkerConfig] = None,
    ) -> None:
        if splitter is not None:
            self._splitter = splitter
        elif settings is not None:
            self._splitter = SplitterFactory.create(settings)
        else:
            self._splitter = WindowSplitter(config or ChunkerConfig.for_resume())

    @property
    def splitter(self) -> BaseSplitter:
        return self._splitter

    def chunk(self, text: str, trace: Optional[TraceContext] = None) -> List[TextChunk]:
        """Split text into TextChunks with contiguous indices.

        Empty segments never reach this point, so indices have no gaps.
        """
        segments = self._splitter.split_text(text, trace=trace)
        return [TextChunk.from_content(content, index) for index, content in enumerate(segments)]

    def process_document(
        self,
        raw_text: str,
        trace: Optional[TraceContext] = None,
    ) -> ProcessedDocument:
        """Normalize and chunk raw text, deriving document metadata.

        Args:
            raw_text: Text as extracted from the source file or pasted by
                the user.
            trace: Optional trace context; one ``process_document`` stage
                is recorded when processing completes.

        Returns:
            An immutable ProcessedDocument.
        """
        logger.debug("Processing document text: %d characters", len(raw_text))
        stage = trace.stage_timer("process_document") if trace is not None else nullcontext({})
        with stage as data:
            full_text = normalize_text(raw_text)
            document = ProcessedDocument.build(full_text, self.chunk(full_text))
            metadata = document.metadata
            data.update(
                {
                    "raw_characters": len(raw_text),
                    "total_words": metadata.total_words,
                    "total_characters": metadata.total_characters,
                    "total_chunks": metadata.total_chunks,
                    "splitter": type(self._splitter).__name__,
                }
            )

        logger.info(
            "Document processed: words=%d characters=%d chunks=%d",
            metadata.total_words,
            metadata.total_characters,
            metadata.total_chunks,
        )
        return document


def chunk_text(text: str, config: Optional[ChunkerConfig] = None) -> List[TextChunk]:
    """Chunk ``text`` with ``config`` (generic defaults: 1000 / 100 / paragraphs)."""
    return TextChunker(config=config or ChunkerConfig()).chunk(text)


def process_document_text(
    raw_text: str,
    trace: Optional[TraceContext] = None,
) -> ProcessedDocument:
    """Normalize and chunk ``raw_text`` with the resume-scale preset (1500 / 200)."""
    return TextChunker(config=ChunkerConfig.for_resume()).process_document(raw_text, trace=trace)
