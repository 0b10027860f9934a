"""Console-driven UI loop for branchtale."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

from branchtale.data import DataError, StoryRepository
from branchtale.domain import SceneNode, StoryGraph
from branchtale.presentation.cli import config
from branchtale.presentation.cli.render import (
    clear_screen,
    render_banner,
    render_choices,
    render_heading,
    render_story_text,
)
from branchtale.services import (
    SessionState,
    StoryGraphInvalidError,
    TraversalSession,
    require_valid_graph,
    validate_graph,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_INVALID_GRAPH = 2
EXIT_ABORTED = 3

InputFunc = Callable[[str], str]


class ConsoleRenderer:
    """Prints scenes to stdout."""

    def __init__(self, *, width: int, clear: bool = True, show_ids: bool = False) -> None:
        self._width = width
        self._clear = clear
        self._show_ids = show_ids

    def render_scene(self, node: SceneNode) -> None:
        self._start_screen(node)
        render_choices(node.option_labels)

    def render_ending(self, node: SceneNode) -> None:
        self._start_screen(node)
        render_banner("THE END", self._width)

    def render_abort(self, state: SessionState) -> None:
        if state.reason == "NODE_NOT_FOUND":
            print(f"\nThe story cannot continue: scene '{state.node_id}' is missing.")
        else:
            print("\nSession stopped.")

    def _start_screen(self, node: SceneNode) -> None:
        if self._clear:
            clear_screen()
        title = f"Scene: {node.id}" if self._show_ids else "Scene"
        render_banner(title, self._width)
        render_story_text(node.text, self._width)


class ConsolePrompt:
    """Reads choices from the console, re-prompting until the input is usable."""

    def __init__(self, input_func: InputFunc | None = None) -> None:
        self._input = input_func or input

    def choose(self, option_count: int) -> int | None:
        while True:
            raw = self._read(f"\nChoose an option (1-{option_count}): ")
            if raw is None:
                return None
            try:
                index = int(raw) - 1
            except ValueError:
                print("Please enter a number.")
                continue
            if 0 <= index < option_count:
                return index
            print(f"Please enter a value between 1 and {option_count}.")

    def confirm(self, prompt: str) -> bool:
        raw = self._read(prompt)
        return raw is not None and raw.lower() in ("y", "yes")

    def pause(self) -> None:
        self._read("\n[Press Enter to continue...]")

    def _read(self, prompt: str) -> str | None:
        try:
            return self._input(prompt).strip()
        except EOFError:
            return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="branchtale",
        description="Play a branching story from a JSON story definition.",
    )
    parser.add_argument(
        "--story",
        metavar="PATH",
        help="story definition to load (defaults to $BRANCHTALE_STORY or the bundled story)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="validate the story and report problems without playing",
    )
    parser.add_argument("--debug", action="store_true", help="show scene ids and debug logging")
    parser.add_argument("--no-clear", action="store_true", help="never clear the screen between scenes")
    return parser


def main(argv: Sequence[str] | None = None, *, input_func: InputFunc | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)
    debug = args.debug or config.debug_enabled()
    _configure_logging(debug)
    settings = config.load_config()
    width = settings["text_width"]

    try:
        graph = StoryRepository(args.story).load_graph()
    except DataError as exc:
        logger.error("Could not load story: %s", exc)
        return EXIT_LOAD_ERROR

    if args.check:
        return _run_check(graph)

    try:
        require_valid_graph(graph)
    except StoryGraphInvalidError:
        logger.error("Story graph validation failed. Fix it before playing.")
        return EXIT_INVALID_GRAPH

    prompt = ConsolePrompt(input_func)
    renderer = ConsoleRenderer(
        width=width,
        clear=settings["clear_screen"] and not args.no_clear,
        show_ids=debug,
    )
    render_banner("BRANCHTALE", width)
    print(f"A story of {graph.node_count()} scenes and {len(graph.ending_nodes())} endings.")
    if settings["clear_screen"] and not args.no_clear:
        prompt.pause()

    exit_code = _play_loop(graph, renderer, prompt)
    _render_closing(graph, width)
    return exit_code


def _run_check(graph: StoryGraph) -> int:
    ok = validate_graph(graph, check_start_node=True, check_reachability=True)
    status = "OK" if ok else "FAILED"
    print(
        f"Story check {status}: scenes={graph.node_count()} "
        f"endings={len(graph.ending_nodes())} start={graph.start_node_id}"
    )
    return EXIT_OK if ok else EXIT_INVALID_GRAPH


def _play_loop(graph: StoryGraph, renderer: ConsoleRenderer, prompt: ConsolePrompt) -> int:
    while True:
        session = TraversalSession(graph)
        state = session.run(renderer, prompt)
        if state.status == "aborted":
            return EXIT_ABORTED
        if not prompt.confirm("\nTry another path? (y/n): "):
            return EXIT_OK


def _render_closing(graph: StoryGraph, width: int) -> None:
    print()
    render_banner("END OF THE STORY", width)
    render_heading("Statistics")
    print(f"- Scenes in the story: {graph.node_count()}")
    print(f"- Endings available: {len(graph.ending_nodes())}")


def _configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(stream=sys.stderr, format="[%(levelname)s] %(message)s")
    logging.getLogger().setLevel(level)
