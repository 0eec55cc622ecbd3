"""Persistent JSON config helpers.

Stores the UI theme, indentation width, and default collapse depth.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .ui_theme import normalize_theme_name

APP_NAME = "lazytree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_INDENT_WIDTH = 2
MAX_INDENT_WIDTH = 8


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _strict_int(value: object) -> int | None:
    """Return ``value`` when it is a real JSON integer (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name in normalized form."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = normalize_theme_name(stripped)
    save_config(config)


def load_indent_width() -> int:
    """Return persisted row indentation width, constrained to ``1..8``."""
    value = _strict_int(load_config().get("indent_width"))
    if value is None or not 1 <= value <= MAX_INDENT_WIDTH:
        return DEFAULT_INDENT_WIDTH
    return value


def save_indent_width(indent_width: int) -> None:
    config = load_config()
    config["indent_width"] = max(1, min(MAX_INDENT_WIDTH, int(indent_width)))
    save_config(config)


def load_collapse_depth() -> int | None:
    """Return persisted default collapse depth; ``None`` means fully expanded."""
    value = _strict_int(load_config().get("collapse_depth"))
    if value is None or value < 0:
        return None
    return value


def save_collapse_depth(depth: int | None) -> None:
    """Persist the default collapse depth; ``None`` removes the key."""
    config = load_config()
    if depth is None:
        config.pop("collapse_depth", None)
    else:
        config["collapse_depth"] = max(0, int(depth))
    save_config(config)
