"""State machine that walks a story graph one choice at a time."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from branchtale.core.types import AbortReason, SessionStatus
from branchtale.domain import SceneNode, StoryGraph
from branchtale.services.errors import SessionFinishedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionState:
    """Snapshot of where a session stands."""

    status: SessionStatus
    node_id: str | None = None
    reason: AbortReason | None = None

    @property
    def is_finished(self) -> bool:
        return self.status != "active"


class SceneRenderer(Protocol):
    def render_scene(self, node: SceneNode) -> None:
        """Display a scene's text and its numbered options."""

    def render_ending(self, node: SceneNode) -> None:
        """Display an ending scene and signal the end of the branch."""

    def render_abort(self, state: SessionState) -> None:
        """Tell the player the session stopped early."""


class ChoiceProvider(Protocol):
    def choose(self, option_count: int) -> int | None:
        """Return a zero-based index below ``option_count``, or None when input has ended."""


class TraversalSession:
    """One playthrough from the start scene to an ending.

    The session only reads the graph. It keeps no history, so several
    sessions may share one validated graph.
    """

    def __init__(self, graph: StoryGraph) -> None:
        self._graph = graph
        self._steps_taken = 0
        self._state = SessionState(status="active", node_id=graph.start_node_id)
        self._current_node: SceneNode | None = None
        self._enter(graph.start_node_id)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_node_id(self) -> str | None:
        return self._state.node_id

    @property
    def steps_taken(self) -> int:
        return self._steps_taken

    def current_node(self) -> SceneNode | None:
        """Return the scene under the cursor, or None once the session aborted."""
        return self._current_node

    def choose(self, choice_index: int) -> SessionState:
        """Follow the option at ``choice_index`` and return the new state."""
        if self._state.status != "active":
            raise SessionFinishedError(f"Session is already {self._state.status}.")
        node = self._require_current_node()
        if not 0 <= choice_index < len(node.options):
            raise IndexError(f"Choice index {choice_index} is invalid for scene '{node.id}'.")
        self._steps_taken += 1
        self._enter(node.options[choice_index].target_id)
        return self._state

    def abort(self, reason: AbortReason) -> SessionState:
        self._state = SessionState(status="aborted", node_id=self._state.node_id, reason=reason)
        self._current_node = None
        return self._state

    def run(self, renderer: SceneRenderer, chooser: ChoiceProvider) -> SessionState:
        """Drive the session until it ends or aborts."""
        while True:
            if self._state.status == "aborted":
                renderer.render_abort(self._state)
                return self._state
            node = self._require_current_node()
            if self._state.status == "ended":
                renderer.render_ending(node)
                return self._state
            renderer.render_scene(node)
            choice_index = chooser.choose(len(node.options))
            if choice_index is None:
                logger.info("Input closed at scene '%s'; stopping session.", node.id)
                self.abort("INPUT_CLOSED")
                continue
            self.choose(choice_index)

    def _enter(self, node_id: str) -> None:
        node = self._graph.get_node(node_id)
        if node is None:
            logger.error("NODE_NOT_FOUND: scene '%s' does not exist; aborting session.", node_id)
            self._state = SessionState(status="aborted", node_id=node_id, reason="NODE_NOT_FOUND")
            self._current_node = None
            return
        self._current_node = node
        status: SessionStatus = "ended" if node.is_ending else "active"
        self._state = SessionState(status=status, node_id=node_id)

    def _require_current_node(self) -> SceneNode:
        if self._current_node is None:
            raise SessionFinishedError("Session has no current scene.")
        return self._current_node
