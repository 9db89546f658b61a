"""
Core Layer - Core business logic.

This package contains the core business logic including:
- Configuration management (settings.py)
- Shared data types (types.py)
- Trace collection
- Generation services (extraction, optimization)
"""

__all__ = []
