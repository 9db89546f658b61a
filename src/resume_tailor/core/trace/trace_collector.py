"""Trace collector - receives finished TraceContext objects and persists them.

Writes one JSON line per trace, independently of the logging module.
"""

import json
import logging
from pathlib import Path

from resume_tailor.core.settings import Settings, resolve_path
from resume_tailor.core.trace.trace_context import TraceContext

logger = logging.getLogger(__name__)

_DEFAULT_TRACES_PATH = resolve_path("logs/traces.jsonl")


class TraceCollector:
    """Collects finished traces and appends them to a JSON Lines file.

    Args:
        traces_path: File path for the ``traces.jsonl`` output.
            Parent directories are created automatically.
    """

    def __init__(self, traces_path: str | Path = _DEFAULT_TRACES_PATH) -> None:
        self._path = Path(traces_path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TraceCollector":
        """Build a collector writing to ``observability.traces_path``."""
        configured = settings.observability.get("traces_path")
        if configured:
            return cls(resolve_path(configured))
        return cls()

    def collect(self, trace: TraceContext) -> None:
        """Persist a single trace as one JSON line.

        Unfinished traces are finished first so the output always carries
        timing data.
        """
        if trace.finished_at is None:
            trace.finish()

        line = json.dumps(trace.to_dict(), ensure_ascii=False, default=str)
        try:
            with self._path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError:
            logger.exception("Failed to write trace %s", trace.trace_id)

    @property
    def path(self) -> Path:
        """Return the resolved path of the traces file."""
        return self._path
