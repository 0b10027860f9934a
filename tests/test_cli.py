import json
import logging
from pathlib import Path

import pytest

import branchtale.main as entrypoint
from branchtale.domain import SceneNode
from branchtale.presentation.cli import app, config


def _scripted_input(responses):
    queue = list(responses)
    prompts: list[str] = []

    def _input(prompt: str) -> str:
        prompts.append(prompt)
        if not queue:
            raise EOFError
        return queue.pop(0)

    _input.prompts = prompts  # type: ignore[attr-defined]
    return _input


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(config, "get_default_config_path", lambda: tmp_path / "config.json")
    monkeypatch.delenv("BRANCHTALE_DEBUG", raising=False)
    monkeypatch.delenv("BRANCHTALE_STORY", raising=False)


def _write_story(path: Path, nodes: dict, start: str = "START") -> Path:
    path.write_text(json.dumps({"start": start, "nodes": nodes}), encoding="utf-8")
    return path


def test_prompt_reprompts_until_valid(capsys) -> None:
    prompt = app.ConsolePrompt(_scripted_input(["", "abc", "0", "4", " 2 "]))

    assert prompt.choose(3) == 1
    out = capsys.readouterr().out
    assert out.count("Please enter a number.") == 2
    assert out.count("Please enter a value between 1 and 3.") == 2


def test_prompt_returns_none_on_eof() -> None:
    prompt = app.ConsolePrompt(_scripted_input([]))

    assert prompt.choose(2) is None
    assert not prompt.confirm("Again? ")


def test_renderer_shows_ids_only_in_debug(capsys) -> None:
    node = SceneNode(id="CABIN", text="A lonely cabin.")
    node.add_option("Enter", "INSIDE")

    app.ConsoleRenderer(width=40, clear=False, show_ids=False).render_scene(node)
    plain = capsys.readouterr().out
    app.ConsoleRenderer(width=40, clear=False, show_ids=True).render_scene(node)
    debug = capsys.readouterr().out

    assert "CABIN" not in plain
    assert "Scene: CABIN" in debug
    assert "A lonely cabin." in plain
    assert "[1] Enter" in plain


def test_play_bundled_story_to_an_ending(capsys) -> None:
    responses = ["abc", "9", "1", "1", "1", "n"]

    exit_code = app.main(["--no-clear"], input_func=_scripted_input(responses))

    out = capsys.readouterr().out
    assert exit_code == app.EXIT_OK
    assert "Please enter a number." in out
    assert "Please enter a value between 1 and 2." in out
    assert "You follow the map's route" in out
    assert "THE END" in out
    assert "Scenes in the story: 12" in out
    assert "Endings available: 6" in out


def test_replay_starts_a_fresh_session(capsys) -> None:
    responses = ["2", "2", "y", "1", "2", "2", "1", "n"]

    exit_code = app.main(["--no-clear"], input_func=_scripted_input(responses))

    out = capsys.readouterr().out
    assert exit_code == app.EXIT_OK
    assert out.count("THE END") == 2
    assert "You cross the bridge" in out
    assert "You follow the map's route" in out


def test_end_of_input_aborts_with_distinct_code(capsys) -> None:
    exit_code = app.main(["--no-clear"], input_func=_scripted_input(["1"]))

    assert exit_code == app.EXIT_ABORTED
    assert "Session stopped." in capsys.readouterr().out


def test_invalid_graph_blocks_play(tmp_path: Path, caplog, capsys) -> None:
    story = _write_story(
        tmp_path / "story.json",
        {
            "START": {"text": "a", "options": [{"label": "x", "next": "B"}]},
            "B": {"text": "b", "options": [{"label": "y", "next": "START"}, {"label": "z", "next": "GONE"}]},
        },
    )
    responses = _scripted_input(["1"])

    with caplog.at_level(logging.ERROR):
        exit_code = app.main(["--story", str(story), "--no-clear"], input_func=responses)

    assert exit_code == app.EXIT_INVALID_GRAPH
    assert exit_code != app.EXIT_OK
    messages = "\n".join(record.getMessage() for record in caplog.records)
    assert "CYCLE_DETECTED" in messages
    assert "DANGLING_EDGE" in messages
    assert responses.prompts == []
    assert "Scene" not in capsys.readouterr().out


def test_missing_start_node_blocks_play(tmp_path: Path) -> None:
    story = _write_story(tmp_path / "story.json", {"A": {"text": "a"}}, start="NOPE")

    exit_code = app.main(["--story", str(story), "--no-clear"], input_func=_scripted_input([]))

    assert exit_code == app.EXIT_INVALID_GRAPH


def test_unreadable_story_returns_load_error(tmp_path: Path, caplog) -> None:
    with caplog.at_level(logging.ERROR):
        exit_code = app.main(["--story", str(tmp_path / "absent.json")])

    assert exit_code == app.EXIT_LOAD_ERROR
    assert any("Could not load story" in record.getMessage() for record in caplog.records)


def test_check_mode_reports_without_playing(tmp_path: Path, caplog, capsys) -> None:
    story = _write_story(
        tmp_path / "story.json",
        {"START": {"text": "a", "options": [{"label": "x", "next": "END"}]}, "END": {"text": "b"}, "ORPHAN": {"text": "c"}},
    )

    with caplog.at_level(logging.WARNING):
        exit_code = app.main(["--story", str(story), "--check"], input_func=_scripted_input([]))

    assert exit_code == app.EXIT_OK
    assert "Story check OK: scenes=3 endings=2 start=START" in capsys.readouterr().out
    assert any("UNREACHABLE_NODE" in record.getMessage() for record in caplog.records)


def test_check_mode_fails_on_errors(tmp_path: Path, capsys) -> None:
    story = _write_story(tmp_path / "story.json", {"START": {"text": "a", "options": [{"label": "x", "next": "GONE"}]}})

    exit_code = app.main(["--story", str(story), "--check"])

    assert exit_code == app.EXIT_INVALID_GRAPH
    assert "Story check FAILED" in capsys.readouterr().out


def test_clear_screen_pauses_after_welcome(monkeypatch) -> None:
    cleared: list[bool] = []
    monkeypatch.setattr(app, "clear_screen", lambda: cleared.append(True))
    responses = _scripted_input(["", "2", "2", "n"])

    exit_code = app.main([], input_func=responses)

    assert exit_code == app.EXIT_OK
    assert "Press Enter" in responses.prompts[0]
    assert len(cleared) == 3


def test_entrypoint_exits_with_cli_status(monkeypatch) -> None:
    monkeypatch.setattr(entrypoint, "cli_main", lambda: app.EXIT_INVALID_GRAPH)

    with pytest.raises(SystemExit) as excinfo:
        entrypoint.main()

    assert excinfo.value.code == app.EXIT_INVALID_GRAPH
