"""Scene definitions that make up a story graph."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, slots=True)
class SceneOption:
    """A selectable option leading from one scene to another."""

    label: str
    target_id: str


@dataclass(slots=True)
class SceneNode:
    """One narrative unit and its ordered outgoing options.

    A node without options is an ending. Option order defines the numbering
    shown to the player and is preserved exactly as added.
    """

    id: str
    text: str
    options: List[SceneOption] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValueError("Scene node id must be a non-empty string.")

    def add_option(self, label: str, target_id: str) -> None:
        """Append an option pointing at ``target_id``."""
        self.options.append(SceneOption(label=label, target_id=target_id))

    @property
    def is_ending(self) -> bool:
        return not self.options

    @property
    def option_labels(self) -> List[str]:
        return [option.label for option in self.options]

    def target_ids(self) -> List[str]:
        """Return option targets in display order (duplicates kept)."""
        return [option.target_id for option in self.options]
