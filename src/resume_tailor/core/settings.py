"""Settings loading and validation utilities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


# src/resume_tailor/core/settings.py -> repository root
REPO_ROOT = Path(__file__).resolve().parents[3]

DEFAULT_SETTINGS_PATH = REPO_ROOT / "config" / "settings.yaml"


@dataclass(slots=True)
class Settings:
    """Application settings structure.

    Attributes:
        llm: LLM provider configuration dictionary.
        splitter: Text splitter configuration dictionary.
        extraction: Extraction / generation configuration dictionary.
        observability: Observability configuration dictionary.
        raw: Original full settings dictionary.
    """

    llm: dict[str, Any]
    splitter: dict[str, Any]
    extraction: dict[str, Any]
    observability: dict[str, Any]
    raw: dict[str, Any]


def resolve_path(relative: str | Path) -> Path:
    """Resolve a repository-relative path to an absolute path.

    Absolute inputs are returned unchanged.

    Args:
        relative: Path relative to the repository root.

    Returns:
        Absolute path, independent of the current working directory.
    """

    path = Path(relative)
    if path.is_absolute():
        return path
    return REPO_ROOT / path


def _require_path(data: dict[str, Any], dotted_path: str) -> None:
    current: Any = data
    for key in dotted_path.split("."):
        if not isinstance(current, dict) or key not in current:
            raise ValueError(f"Missing required settings field: {dotted_path}")
        current = current[key]


def validate_settings(settings: Settings) -> None:
    """Validate required settings fields.

    Args:
        settings: Parsed settings object.

    Raises:
        ValueError: If any required field is missing.
    """

    required_paths = [
        "llm",
        "llm.provider",
        "splitter",
        "splitter.type",
        "extraction",
        "observability",
    ]

    for path in required_paths:
        _require_path(settings.raw, path)


def settings_from_dict(parsed: dict[str, Any]) -> Settings:
    """Build and validate a Settings object from an already-parsed mapping.

    Raises:
        ValueError: If required fields are missing.
    """

    settings = Settings(
        llm=parsed.get("llm") or {},
        splitter=parsed.get("splitter") or {},
        extraction=parsed.get("extraction") or {},
        observability=parsed.get("observability") or {},
        raw=parsed,
    )
    validate_settings(settings)
    return settings


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load YAML settings from a file and validate required fields.

    Args:
        path: Path to the YAML settings file.

    Returns:
        Parsed and validated settings object.

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: If YAML is invalid or required fields are missing.
    """

    settings_path = Path(path)
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with settings_path.open("r", encoding="utf-8") as fp:
        try:
            parsed = yaml.safe_load(fp)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in settings file {settings_path}: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ValueError("Settings file must contain a YAML mapping at top level")

    return settings_from_dict(parsed)
