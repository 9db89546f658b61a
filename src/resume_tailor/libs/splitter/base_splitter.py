"""Base abstraction for text splitter strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from resume_tailor.core.trace.trace_context import TraceContext


class BaseSplitter(ABC):
    """Abstract interface for splitter implementations."""

    @abstractmethod
    def split_text(self, text: str, trace: TraceContext | None = None) -> list[str]:
        """Split text into trimmed, non-empty segments.

        Args:
            text: Source text to split.
            trace: Optional trace context object.

        Returns:
            List of text segments in source order.
        """
