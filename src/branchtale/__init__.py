"""Branching story engine: scene graph, validator and traversal session."""
from __future__ import annotations

from .domain import DEFAULT_START_NODE_ID, SceneNode, SceneOption, StoryGraph
from .services import (
    Issue,
    SessionState,
    StoryGraphInvalidError,
    TraversalSession,
    collect_issues,
    format_issue,
    require_valid_graph,
    validate_graph,
)

__all__ = [
    "DEFAULT_START_NODE_ID",
    "Issue",
    "SceneNode",
    "SceneOption",
    "SessionState",
    "StoryGraph",
    "StoryGraphInvalidError",
    "TraversalSession",
    "collect_issues",
    "format_issue",
    "require_valid_graph",
    "validate_graph",
]
