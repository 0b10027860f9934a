"""Domain model exports."""

from .scene import SceneNode, SceneOption
from .story_graph import DEFAULT_START_NODE_ID, StoryGraph

__all__ = [
    "DEFAULT_START_NODE_ID",
    "SceneNode",
    "SceneOption",
    "StoryGraph",
]
