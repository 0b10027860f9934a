"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Sequence

_RULE_CHAR = "="


def clear_screen() -> None:
    """Clear the terminal using the platform's shell command."""
    os.system("cls" if os.name == "nt" else "clear")


def wrap_text(text: str, width: int) -> list[str]:
    """
    Wrap narrative text to ``width`` columns, breaking on word boundaries.

    Blank lines in ``text`` separate paragraphs and are kept.
    """
    if not text or width <= 0:
        return [text] if text else [""]
    lines: list[str] = []
    for paragraph in text.split("\n"):
        if not paragraph.strip():
            lines.append("")
            continue
        lines.extend(
            textwrap.wrap(
                paragraph,
                width=width,
                break_long_words=False,
                break_on_hyphens=False,
            )
        )
    return lines


def render_rule(width: int) -> None:
    print(_RULE_CHAR * width)


def render_banner(title: str, width: int) -> None:
    """Print a title centered between two rules."""
    render_rule(width)
    print(title.center(width).rstrip())
    render_rule(width)


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_story_text(text: str, width: int) -> None:
    print()
    for line in wrap_text(text, width):
        print(line)
    print()


def render_choices(choices: Sequence[str]) -> None:
    """Display numbered story choices."""
    if not choices:
        return
    render_heading("Choices")
    for idx, label in enumerate(choices, start=1):
        print(f"  [{idx}] {label}")
