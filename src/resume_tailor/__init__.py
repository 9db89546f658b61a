"""
Resume Tailor - resume text processing and AI-assisted tailoring.

Layers:
- core: settings, shared types, tracing, generation services
- libs: pluggable splitters and LLM providers
- ingestion: raw text to chunked documents
- observability: logging and trace sinks
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
