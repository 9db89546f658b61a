"""
Libs Layer - Pluggable abstraction layer.

This package contains the factory pattern implementations for
pluggable components:
- Splitters
- LLM clients

Both factories share the keyed registry in ``registry``.
"""

__all__ = []
