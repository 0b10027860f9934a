"""Helpers for resolving story file locations."""
from __future__ import annotations

import os
from pathlib import Path

STORY_PATH_ENV_VAR = "BRANCHTALE_STORY"
DEFAULT_STORY_FILENAME = "story.json"


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing bundled story definitions."""
    if base_path is not None:
        return Path(base_path)
    return Path(__file__).resolve().parent / "definitions"


def get_default_story_path() -> Path:
    """Return the story file to play when none is given explicitly.

    ``BRANCHTALE_STORY`` takes precedence over the bundled story.
    """
    override = os.getenv(STORY_PATH_ENV_VAR)
    if override:
        return Path(override)
    return get_definitions_path() / DEFAULT_STORY_FILENAME
