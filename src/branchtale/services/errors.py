"""Service-layer exceptions."""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from branchtale.services.story_graph_validator import Issue


class StoryGraphInvalidError(Exception):
    """Raised when a story graph fails validation and must not be played."""

    def __init__(self, issues: Sequence["Issue"]) -> None:
        self.issues = list(issues)
        super().__init__(f"Story graph failed validation with {len(self.issues)} issue(s).")


class SessionFinishedError(Exception):
    """Raised when a choice is applied to a session that already ended or aborted."""
