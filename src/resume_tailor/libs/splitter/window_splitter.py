"""Overlapping window splitter with paragraph / sentence boundary seeking.

A single forward scan over the text. Each window is at most
``chunk_size`` characters; when boundary seeking is enabled the cut is
pulled back to the last paragraph break (``\\n\\n``) or, failing that, the
last period, provided it starts at or after the middle of the window. The next
window re-includes up to ``overlap`` trailing characters and always starts
at least one character further right; the scan runs until the start
reaches the end of the text, so tail windows repeat shrinking suffixes.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from resume_tailor.core.types import ChunkerConfig
from resume_tailor.libs.splitter.base_splitter import BaseSplitter

if TYPE_CHECKING:
    from resume_tailor.core.settings import Settings
    from resume_tailor.core.trace.trace_context import TraceContext

PARAGRAPH_BREAK = "\n\n"
SENTENCE_END = "."


class WindowSplitter(BaseSplitter):
    """Split text into overlapping, size-bounded windows.

    Args:
        config: Chunking configuration; defaults to ``ChunkerConfig()``.
    """

    def __init__(self, config: ChunkerConfig | None = None) -> None:
        self.config = config or ChunkerConfig()

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "WindowSplitter":
        """Build a splitter from the ``splitter`` settings section.

        Keyword overrides win over configured values.
        """
        section = settings.splitter
        values = {
            "chunk_size": section.get("chunk_size", ChunkerConfig.chunk_size),
            "overlap": section.get("overlap", ChunkerConfig.overlap),
            "preserve_paragraphs": section.get("preserve_paragraphs", True),
        }
        values.update(overrides)
        return cls(ChunkerConfig(**values))

    def iter_windows(self, text: str) -> Iterator[tuple[int, int]]:
        """Yield ``(start, end)`` source spans in left-to-right order.

        Starts are strictly increasing. Spans are raw slices; their
        trimmed content may be empty.
        """
        chunk_size = self.config.chunk_size
        overlap = self.config.overlap
        length = len(text)

        if length <= chunk_size:
            yield 0, length
            return

        start = 0
        while start < length:
            end = min(start + chunk_size, length)

            if self.config.preserve_paragraphs and end < length:
                end = self._seek_boundary(text, start, end)

            yield start, end

            start = max(end - overlap, start + 1)

    def split_text(self, text: str, trace: TraceContext | None = None) -> list[str]:
        segments = []
        for start, end in self.iter_windows(text):
            content = text[start:end].strip()
            if content:
                segments.append(content)
        return segments

    def _seek_boundary(self, text: str, start: int, end: int) -> int:
        midpoint = start + self.config.chunk_size / 2

        # a break may begin exactly at ``end``
        paragraph = text.rfind(PARAGRAPH_BREAK, 0, end + len(PARAGRAPH_BREAK))
        if paragraph >= midpoint:
            return paragraph + len(PARAGRAPH_BREAK)

        sentence = text.rfind(SENTENCE_END, 0, end + len(SENTENCE_END))
        if sentence >= midpoint:
            return sentence + len(SENTENCE_END)

        return end
