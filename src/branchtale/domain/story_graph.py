"""Container owning every scene of a story."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping

from branchtale.domain.scene import SceneNode

logger = logging.getLogger(__name__)

DEFAULT_START_NODE_ID = "START"


class StoryGraph:
    """Scenes keyed by id plus the designated start scene.

    The graph does not enforce reference integrity or acyclicity on insert;
    use :mod:`branchtale.services.story_graph_validator` once assembly is done.
    """

    def __init__(self, start_node_id: str = DEFAULT_START_NODE_ID) -> None:
        self._nodes: Dict[str, SceneNode] = {}
        self._start_node_id = start_node_id

    def add_node(self, node: SceneNode) -> None:
        """Insert ``node``, replacing any node already stored under its id."""
        if node.id in self._nodes:
            logger.warning(
                "DUPLICATE_NODE_ID: scene '%s' already exists; overwriting previous definition.",
                node.id,
            )
        self._nodes[node.id] = node

    def get_node(self, node_id: str) -> SceneNode | None:
        return self._nodes.get(node_id)

    def node_exists(self, node_id: str) -> bool:
        return node_id in self._nodes

    def set_start_node(self, node_id: str) -> None:
        self._start_node_id = node_id

    @property
    def start_node_id(self) -> str:
        return self._start_node_id

    def node_count(self) -> int:
        return len(self._nodes)

    def all_nodes(self) -> Mapping[str, SceneNode]:
        """Return a read-only view of the id -> node mapping."""
        return MappingProxyType(self._nodes)

    def ending_nodes(self) -> List[SceneNode]:
        """Return ending scenes in insertion order."""
        return [node for node in self._nodes.values() if node.is_ending]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[SceneNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)
