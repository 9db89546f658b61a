"""
Ingestion Layer - Raw text preparation.

This package turns raw document text into normalized, chunked
documents ready for context-limited text services.
"""

__all__ = []
