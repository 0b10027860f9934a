"""Repository that assembles a StoryGraph from a JSON story definition."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping

from branchtale.data import paths
from branchtale.data.errors import DataValidationError
from branchtale.data.json_loader import load_json_object
from branchtale.domain import DEFAULT_START_NODE_ID, SceneNode, StoryGraph


class StoryRepository:
    """Loads a story file once and hands out the assembled graph.

    Only the shape of the file is checked here. Dangling references and
    cycles are left for the graph validator so that every problem is reported
    together.
    """

    def __init__(self, story_path: Path | str | None = None) -> None:
        self._story_path = Path(story_path) if story_path is not None else None
        self._graph: StoryGraph | None = None

    @property
    def story_path(self) -> Path:
        if self._story_path is not None:
            return self._story_path
        return paths.get_default_story_path()

    def load_graph(self) -> StoryGraph:
        """Return the story graph, reading the file on first use."""
        if self._graph is None:
            raw = load_json_object(self.story_path)
            self._graph = build_story_graph(raw)
        return self._graph


def build_story_graph(definition: Mapping[str, object]) -> StoryGraph:
    """Build a graph from an already-parsed story definition."""
    if not isinstance(definition, Mapping):
        raise DataValidationError("Story definition must be an object/dict.")
    start = definition.get("start", DEFAULT_START_NODE_ID)
    start_node_id = _require_str(start, "story start")

    graph = StoryGraph()
    for node in _parse_nodes(definition.get("nodes")):
        graph.add_node(node)
    graph.set_start_node(start_node_id)
    return graph


def _parse_nodes(raw_nodes: object) -> Iterable[SceneNode]:
    if isinstance(raw_nodes, Mapping):
        for node_id, payload in raw_nodes.items():
            if not isinstance(node_id, str):
                raise DataValidationError("Story node ids must be strings.")
            yield _parse_node(node_id, payload, f"story node '{node_id}'")
        return
    if isinstance(raw_nodes, list):
        for index, payload in enumerate(raw_nodes):
            context = f"nodes[{index}]"
            node_data = _require_mapping(payload, context)
            node_id = _require_str(node_data.get("id"), f"{context} id")
            yield _parse_node(node_id, node_data, f"story node '{node_id}'")
        return
    raise DataValidationError("Story 'nodes' must be an object or a list of objects.")


def _parse_node(node_id: str, payload: object, context: str) -> SceneNode:
    if not node_id:
        raise DataValidationError(f"{context} id must not be empty.")
    node_data = _require_mapping(payload, context)
    text = _require_str(node_data.get("text"), f"{context} text")
    node = SceneNode(id=node_id, text=text)
    for label, target_id in _parse_options(node_data.get("options"), context):
        node.add_option(label, target_id)
    return node


def _parse_options(raw_options: object, context: str) -> List[tuple[str, str]]:
    if raw_options is None:
        return []
    if not isinstance(raw_options, list):
        raise DataValidationError(f"{context} options must be a list if provided.")
    options: List[tuple[str, str]] = []
    for index, entry in enumerate(raw_options):
        option_ctx = f"{context} options[{index}]"
        option_data = _require_mapping(entry, option_ctx)
        label = _require_str(option_data.get("label"), f"{option_ctx} label")
        target_id = _require_str(option_data.get("next"), f"{option_ctx} next")
        options.append((label, target_id))
    return options


def _require_mapping(value: object, context: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise DataValidationError(f"{context} must be an object/dict.")
    return value


def _require_str(value: object, context: str) -> str:
    if not isinstance(value, str):
        raise DataValidationError(f"{context} must be a string.")
    return value
