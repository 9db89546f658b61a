"""
Splitter Module.

This package contains text splitter abstractions and implementations:
- Base splitter class
- Splitter factory
- Window splitter (overlapping, boundary-aware windows)
"""

from resume_tailor.libs.splitter.base_splitter import BaseSplitter
from resume_tailor.libs.splitter.splitter_factory import SplitterFactory
from resume_tailor.libs.splitter.window_splitter import WindowSplitter

SplitterFactory.register("window", WindowSplitter.from_settings)
SplitterFactory.register(
    "fixed", lambda settings: WindowSplitter.from_settings(settings, preserve_paragraphs=False)
)

__all__ = ["BaseSplitter", "SplitterFactory", "WindowSplitter"]
