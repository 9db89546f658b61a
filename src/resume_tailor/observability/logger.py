"""Observability logger utilities.

Provides:
- ``get_logger``: standard human-readable logger.
- ``configure_logging``: apply ``observability.log_level`` from settings.
- ``JSONFormatter``: :class:`logging.Formatter` that emits JSON.
- ``get_trace_logger``: logger backed by a JSON Lines file handler.
- ``write_trace``: append a trace dict to ``logs/traces.jsonl``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from resume_tailor.core.settings import Settings, resolve_path

_DEFAULT_TRACES_PATH = resolve_path("logs/traces.jsonl")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# transport loggers echo request URLs, some carrying API keys
_NOISY_LOGGERS = ("httpx", "urllib3", "openai")


# ── Human-readable logger ───────────────────────────────────────────


def get_logger(name: str = "resume-tailor", log_level: Optional[str] = None) -> logging.Logger:
    """Get a configured logger.

    Args:
        name: Logger name.
        log_level: Optional log level string (e.g., "INFO").

    Returns:
        Configured logger instance.
    """

    if log_level:
        level = getattr(logging, log_level.upper(), logging.INFO)
    else:
        level = logging.INFO

    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr)

    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logging.getLogger(name)


def configure_logging(settings: Settings) -> None:
    """Set the root log level from ``observability.log_level``."""
    level_name = str(settings.observability.get("log_level", "INFO"))
    get_logger(log_level=level_name)
    logging.getLogger().setLevel(getattr(logging, level_name.upper(), logging.INFO))


# ── JSON Lines formatter ────────────────────────────────────────────


class JSONFormatter(logging.Formatter):
    """Logging formatter that outputs one JSON object per line.

    Each record becomes a dict with at least ``timestamp``, ``level``,
    ``logger`` and ``message``; ``exception`` is added when the record
    carries exc_info. Attributes attached via *extra=* are merged into the
    top level.
    """

    _INTERNAL_ATTRS = frozenset({
        "args", "created", "exc_info", "exc_text", "filename",
        "funcName", "levelname", "levelno", "lineno", "module",
        "msecs", "message", "msg", "name", "pathname", "process",
        "processName", "relativeCreated", "stack_info", "thread",
        "threadName", "taskName",
    })

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        """Return the log record as a single-line JSON string."""
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, val in record.__dict__.items():
            if key in self._INTERNAL_ATTRS or key in payload:
                continue
            try:
                json.dumps(val)
                payload[key] = val
            except (TypeError, ValueError):
                payload[key] = str(val)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


# ── Trace logger ────────────────────────────────────────────────────


def get_trace_logger(
    traces_path: str | Path = _DEFAULT_TRACES_PATH,
    *,
    name: str = "resume-tailor.trace",
) -> logging.Logger:
    """Return a logger that writes JSON Lines to *traces_path*.

    Repeated calls with the same *name* return the same logger and do
    not stack handlers.

    Args:
        traces_path: File path for the JSONL output. Parent directories
            are created automatically.
        name: Logger name.
    """
    path = Path(traces_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)

    if not logger.handlers:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.propagate = False

    return logger


# ── Convenience writer for trace dicts ──────────────────────────────


def write_trace(
    trace_dict: Dict[str, Any],
    traces_path: str | Path = _DEFAULT_TRACES_PATH,
) -> None:
    """Append a single trace dictionary as one JSON line.

    Writes directly, without the logging framework, so the output matches
    :class:`~resume_tailor.core.trace.trace_collector.TraceCollector`.
    """
    path = Path(traces_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    line = json.dumps(trace_dict, ensure_ascii=False, default=str)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(line + "\n")
