"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

DEBUG_ENV_VAR = "BRANCHTALE_DEBUG"

_DEFAULT_TEXT_WIDTH = 72
_MIN_TEXT_WIDTH = 40
_MAX_TEXT_WIDTH = 200


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Branchtale"
        return Path.home() / "Branchtale"
    return Path.home() / ".config" / "branchtale"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def debug_enabled() -> bool:
    """Return True only when BRANCHTALE_DEBUG is explicitly set to '1'."""
    return os.getenv(DEBUG_ENV_VAR) == "1"


def default_config() -> Dict[str, Any]:
    return {"text_width": _DEFAULT_TEXT_WIDTH, "clear_screen": True}


def _normalize_text_width(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return _DEFAULT_TEXT_WIDTH
    return max(_MIN_TEXT_WIDTH, min(_MAX_TEXT_WIDTH, value))


def _normalize(raw: Dict[str, Any]) -> Dict[str, Any]:
    clear_screen = raw.get("clear_screen")
    return {
        "text_width": _normalize_text_width(raw.get("text_width")),
        "clear_screen": clear_screen if isinstance(clear_screen, bool) else True,
    }


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return _normalize(raw)


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = _normalize(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
