"""Data layer utilities for loading story definitions."""

from .errors import DataError, DataLoadError, DataValidationError
from .paths import get_default_story_path, get_definitions_path
from .story_repo import StoryRepository, build_story_graph

__all__ = [
    "DataError",
    "DataLoadError",
    "DataValidationError",
    "StoryRepository",
    "build_story_graph",
    "get_default_story_path",
    "get_definitions_path",
]
