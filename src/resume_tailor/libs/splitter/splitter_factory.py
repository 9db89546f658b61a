"""Factory for creating splitter strategy instances from settings."""

from __future__ import annotations

from collections.abc import Callable

from resume_tailor.core.settings import Settings
from resume_tailor.libs.registry import KeyedFactory
from resume_tailor.libs.splitter.base_splitter import BaseSplitter


SplitterCreator = Callable[[Settings], BaseSplitter]


class SplitterFactory(KeyedFactory):
    """Build the splitter named by ``splitter.type``.

    Example:
        >>> SplitterFactory.register("window", WindowSplitter.from_settings)
        >>> SplitterFactory.create(settings)
    """

    config_key = "splitter.type"
    label = "splitter type"
    _registry: dict[str, SplitterCreator] = {}

    @classmethod
    def create(cls, settings: Settings) -> BaseSplitter:
        """Create a splitter from the ``splitter`` settings section.

        Raises:
            ValueError: If ``splitter.type`` is missing or not registered.
        """
        return cls.resolve(settings.splitter.get("type"))(settings)
