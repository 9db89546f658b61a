"""
Trace Module.

This package contains tracing components:
- Trace context
- Trace collector
"""

from resume_tailor.core.trace.trace_context import TraceContext
from resume_tailor.core.trace.trace_collector import TraceCollector

__all__ = ["TraceContext", "TraceCollector"]
