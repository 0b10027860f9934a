"""Service layer exports."""

from .errors import SessionFinishedError, StoryGraphInvalidError
from .story_graph_validator import (
    Issue,
    collect_issues,
    find_unreachable_nodes,
    format_issue,
    require_valid_graph,
    validate_graph,
)
from .traversal_session import ChoiceProvider, SceneRenderer, SessionState, TraversalSession

__all__ = [
    "ChoiceProvider",
    "Issue",
    "SceneRenderer",
    "SessionFinishedError",
    "SessionState",
    "StoryGraphInvalidError",
    "TraversalSession",
    "collect_issues",
    "find_unreachable_nodes",
    "format_issue",
    "require_valid_graph",
    "validate_graph",
]
