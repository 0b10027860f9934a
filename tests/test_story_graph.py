import logging

import pytest

from branchtale.domain import DEFAULT_START_NODE_ID, SceneNode, SceneOption, StoryGraph
from tests.helpers.graph_builders import make_node


def test_scene_node_without_options_is_ending() -> None:
    node = SceneNode(id="END", text="The end.")

    assert node.is_ending
    assert node.options == []


def test_scene_node_preserves_option_order() -> None:
    node = make_node("A", [("third", "C"), ("first", "X"), ("second", "B")])

    assert not node.is_ending
    assert node.option_labels == ["third", "first", "second"]
    assert node.options[1] == SceneOption(label="first", target_id="X")
    assert node.target_ids() == ["C", "X", "B"]


def test_scene_node_rejects_empty_id() -> None:
    with pytest.raises(ValueError):
        SceneNode(id="", text="nothing")


def test_graph_defaults_start_node() -> None:
    graph = StoryGraph()

    assert graph.start_node_id == DEFAULT_START_NODE_ID == "START"
    assert graph.node_count() == 0


def test_graph_lookup_of_missing_node_returns_none() -> None:
    graph = StoryGraph()
    graph.add_node(make_node("A"))

    assert graph.get_node("nope") is None
    assert not graph.node_exists("nope")
    assert graph.node_exists("A")
    assert "A" in graph


def test_graph_start_node_can_point_anywhere() -> None:
    graph = StoryGraph()
    graph.set_start_node("never_added")

    assert graph.start_node_id == "never_added"


def test_duplicate_node_id_last_write_wins_with_single_warning(caplog) -> None:
    graph = StoryGraph()
    with caplog.at_level(logging.WARNING, logger="branchtale.domain.story_graph"):
        graph.add_node(SceneNode(id="A", text="first"))
        graph.add_node(SceneNode(id="A", text="second"))

    node = graph.get_node("A")
    assert node is not None
    assert node.text == "second"
    assert graph.node_count() == 1
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "A" in warnings[0].getMessage()


def test_all_nodes_is_read_only() -> None:
    graph = StoryGraph()
    graph.add_node(make_node("A"))
    view = graph.all_nodes()

    assert list(view) == ["A"]
    with pytest.raises(TypeError):
        view["B"] = make_node("B")  # type: ignore[index]


def test_all_nodes_keeps_insertion_order() -> None:
    graph = StoryGraph()
    for node_id in ("C", "A", "B"):
        graph.add_node(make_node(node_id))

    assert list(graph.all_nodes()) == ["C", "A", "B"]
    assert [node.id for node in graph] == ["C", "A", "B"]
    assert len(graph) == 3


def test_ending_nodes_lists_terminal_scenes() -> None:
    graph = StoryGraph()
    graph.add_node(make_node("A", [("go", "B"), ("stay", "C")]))
    graph.add_node(make_node("B"))
    graph.add_node(make_node("C"))

    assert [node.id for node in graph.ending_nodes()] == ["B", "C"]
