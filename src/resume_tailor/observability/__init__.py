"""
Observability Layer - Logging and tracing.

This package contains observability components:
- Human-readable logger
- JSON Lines trace logger and writer
"""

__all__ = []
