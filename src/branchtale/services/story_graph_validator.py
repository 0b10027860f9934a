"""Static story graph validation utilities."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Mapping

from branchtale.core.types import Severity
from branchtale.domain import SceneNode, StoryGraph
from branchtale.services.errors import StoryGraphInvalidError

logger = logging.getLogger(__name__)

_UNVISITED = 0
_IN_PROGRESS = 1
_DONE = 2


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]

    @property
    def is_error(self) -> bool:
        return self.severity == "ERROR"


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def collect_issues(
    graph: StoryGraph,
    *,
    check_start_node: bool = False,
    check_reachability: bool = False,
) -> list[Issue]:
    """Return every structural problem found in ``graph``.

    Dangling option targets and option cycles are always checked. The start
    node check and the unreachable-scene warnings are opt-in. Nodes are
    visited in sorted id order, so the result does not depend on the order
    in which scenes were added.
    """
    nodes = graph.all_nodes()
    issues: list[Issue] = []
    if check_start_node:
        _validate_start_node(graph, issues)
    _validate_option_targets(nodes, issues)
    _validate_acyclic(nodes, issues)
    if check_reachability:
        for node_id in find_unreachable_nodes(graph):
            issues.append(
                Issue(
                    severity="WARN",
                    code="UNREACHABLE_NODE",
                    message="Scene is unreachable from the start scene.",
                    context={"node_id": node_id},
                )
            )
    return issues


def validate_graph(
    graph: StoryGraph,
    *,
    check_start_node: bool = False,
    check_reachability: bool = False,
) -> bool:
    """Log every issue found in ``graph`` and return True when it is playable."""
    issues = collect_issues(
        graph,
        check_start_node=check_start_node,
        check_reachability=check_reachability,
    )
    _log_issues(issues)
    return not any(issue.is_error for issue in issues)


def require_valid_graph(graph: StoryGraph) -> None:
    """Gate used before any session starts.

    Raises StoryGraphInvalidError carrying the error issues when the graph
    has dangling options, cycles, or a start scene that does not exist.
    """
    issues = collect_issues(graph, check_start_node=True)
    _log_issues(issues)
    errors = [issue for issue in issues if issue.is_error]
    if errors:
        raise StoryGraphInvalidError(errors)
    logger.info("Story graph validated: %d scenes.", graph.node_count())


def find_unreachable_nodes(graph: StoryGraph) -> list[str]:
    """Return ids of scenes that cannot be reached from the start scene."""
    nodes = graph.all_nodes()
    reachable: set[str] = set()
    stack: List[str] = []
    if graph.start_node_id in nodes:
        stack.append(graph.start_node_id)
    while stack:
        node_id = stack.pop()
        if node_id in reachable:
            continue
        reachable.add(node_id)
        for target_id in nodes[node_id].target_ids():
            if target_id in nodes and target_id not in reachable:
                stack.append(target_id)
    return sorted(set(nodes) - reachable)


def _validate_start_node(graph: StoryGraph, issues: list[Issue]) -> None:
    if graph.node_exists(graph.start_node_id):
        return
    issues.append(
        Issue(
            severity="ERROR",
            code="MISSING_START_NODE",
            message="Start scene does not exist.",
            context={"referenced_id": graph.start_node_id},
        )
    )


def _validate_option_targets(nodes: Mapping[str, SceneNode], issues: list[Issue]) -> None:
    for node_id in sorted(nodes):
        for index, option in enumerate(nodes[node_id].options):
            if option.target_id in nodes:
                continue
            issues.append(
                Issue(
                    severity="ERROR",
                    code="DANGLING_EDGE",
                    message="Option references missing scene.",
                    context={
                        "node_id": node_id,
                        "field_path": f"options[{index}].next",
                        "referenced_id": option.target_id,
                    },
                )
            )


def _validate_acyclic(nodes: Mapping[str, SceneNode], issues: list[Issue]) -> None:
    """Three-color depth-first search over option edges with an explicit stack.

    Every edge that closes back onto a scene still on the active path is
    reported. Edges to missing scenes are skipped; the target check owns them.
    """
    color = {node_id: _UNVISITED for node_id in nodes}
    for root_id in sorted(nodes):
        if color[root_id] != _UNVISITED:
            continue
        color[root_id] = _IN_PROGRESS
        path: List[str] = [root_id]
        stack: List[tuple[str, Iterator[str]]] = [(root_id, iter(nodes[root_id].target_ids()))]
        while stack:
            node_id, targets = stack[-1]
            for target_id in targets:
                state = color.get(target_id)
                if state is None or state == _DONE:
                    continue
                if state == _IN_PROGRESS:
                    cycle = path[path.index(target_id) :] + [target_id]
                    issues.append(
                        Issue(
                            severity="ERROR",
                            code="CYCLE_DETECTED",
                            message="Option creates a cycle between scenes.",
                            context={
                                "node_id": node_id,
                                "referenced_id": target_id,
                                "cycle": " -> ".join(cycle),
                            },
                        )
                    )
                    continue
                color[target_id] = _IN_PROGRESS
                path.append(target_id)
                stack.append((target_id, iter(nodes[target_id].target_ids())))
                break
            else:
                color[node_id] = _DONE
                path.pop()
                stack.pop()


def _log_issues(issues: list[Issue]) -> None:
    for issue in issues:
        if issue.is_error:
            logger.error(format_issue(issue))
        else:
            logger.warning(format_issue(issue))
