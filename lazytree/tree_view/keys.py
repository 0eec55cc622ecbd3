"""Key tokens for tree navigation and their dispatch onto named tree actions.

A keymap maps action names to the key tokens that trigger them. Callers may
override the tokens of individual actions; unnamed actions keep their
defaults. Single-character tokens match case-insensitively, named keys such
as ``PAGE_DOWN`` must match exactly.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

PAGE_ROWS = 10

TREE_ACTIONS = (
    "up",
    "down",
    "page_up",
    "page_down",
    "first",
    "last",
    "activate",
    "collapse",
    "expand",
)

DEFAULT_TREE_KEYMAP: dict[str, tuple[str, ...]] = {
    "up": ("UP", "k"),
    "down": ("DOWN", "j"),
    "page_up": ("PAGE_UP",),
    "page_down": ("PAGE_DOWN",),
    "first": ("HOME",),
    "last": ("END",),
    "activate": ("ENTER", "l"),
    "collapse": ("LEFT", "h"),
    "expand": ("RIGHT",),
}

ActionHandler = Callable[[], bool]


def normalize_key_token(key: str) -> str:
    """Fold single-character tokens to lowercase; named keys stay as-is."""
    return key.lower() if len(key) == 1 else key


def merge_keymap(overrides: Mapping[str, Sequence[str]] | None = None) -> dict[str, tuple[str, ...]]:
    """Return the default keymap with per-action token overrides applied.

    Raises ``ValueError`` for action names that are not tree actions.
    """
    keymap = dict(DEFAULT_TREE_KEYMAP)
    if not overrides:
        return keymap
    unknown = sorted(set(overrides) - set(TREE_ACTIONS))
    if unknown:
        raise ValueError(f"unknown tree action(s): {', '.join(unknown)}")
    for action, tokens in overrides.items():
        keymap[action] = tuple(tokens)
    return keymap


class TreeKeyDispatcher:
    """Resolve key tokens to tree actions and run the bound handler."""

    def __init__(
        self,
        handlers: Mapping[str, ActionHandler],
        keymap: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        missing = [action for action in TREE_ACTIONS if action not in handlers]
        if missing:
            raise ValueError(f"missing handler(s) for tree action(s): {', '.join(missing)}")
        self._actions: dict[str, str] = {}
        self._handlers = dict(handlers)
        # Later actions win when two actions share a token.
        for action, tokens in merge_keymap(keymap).items():
            for token in tokens:
                self._actions[normalize_key_token(token)] = action

    def action_for(self, key: str) -> str | None:
        """Return the action bound to ``key``, or ``None``."""
        return self._actions.get(normalize_key_token(key))

    def dispatch(self, key: str) -> bool:
        """Run the action bound to ``key``; ``False`` when nothing is bound."""
        action = self.action_for(key)
        if action is None:
            return False
        return bool(self._handlers[action]())
