"""Headless tree view model: focus, callbacks, and row-addressed edits.

``TreeView`` wraps a ``TreeList`` and speaks only in visual rows. Every
row-addressed call converts the row to a storage index right before the
underlying mutation, since storage indices shift on every structural change.
Callbacks run after the core operation succeeded and never inside it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Generic, TypeVar

from ..tree_list import Placement, TreeList
from .keys import PAGE_ROWS, TreeKeyDispatcher

logger = logging.getLogger(__name__)

T = TypeVar("T")

IndexCallback = Callable[[int], None]
CollapseCallback = Callable[[int, bool, int], None]


class TreeView(Generic[T]):
    """Row-oriented façade over ``TreeList`` tracking the focused row."""

    def __init__(
        self,
        tree: TreeList[T] | None = None,
        keymap: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self.tree: TreeList[T] = tree if tree is not None else TreeList()
        self.focus = 0
        self.scroll_top = 0
        self.enabled = True
        self.on_submit: IndexCallback | None = None
        self.on_select: IndexCallback | None = None
        self.on_collapse: CollapseCallback | None = None
        self._keys = TreeKeyDispatcher(
            {
                "up": lambda: self.focus_up(1),
                "down": lambda: self.focus_down(1),
                "page_up": lambda: self.focus_up(PAGE_ROWS),
                "page_down": lambda: self.focus_down(PAGE_ROWS),
                "first": self.focus_first,
                "last": self.focus_last,
                "activate": self.activate,
                "collapse": self.collapse_or_parent,
                "expand": self.expand_focused,
            },
            keymap,
        )

    def __len__(self) -> int:
        return len(self.tree)

    def is_empty(self) -> bool:
        return self.tree.is_empty()

    @property
    def height(self) -> int:
        """Number of visible rows."""
        return self.tree.height

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def set_on_submit(self, callback: IndexCallback | None) -> None:
        self.on_submit = callback

    def set_on_select(self, callback: IndexCallback | None) -> None:
        self.on_select = callback

    def set_on_collapse(self, callback: CollapseCallback | None) -> None:
        """Register ``callback(row, is_collapsed, children)`` for Enter toggles."""
        self.on_collapse = callback

    def clear(self) -> None:
        self.tree.clear()
        self.focus = 0
        self.scroll_top = 0

    def take_items(self) -> list[T]:
        items = self.tree.take_items()
        self.focus = 0
        self.scroll_top = 0
        return items

    def row(self) -> int | None:
        """Return the focused row, or ``None`` for an empty tree."""
        if self.is_empty():
            return None
        return self.focus

    def set_selected_row(self, row: int) -> None:
        self.focus = max(0, min(row, self.tree.height - 1))

    def _index(self, row: int) -> int:
        return self.tree.row_to_item_index(row)

    def borrow_item(self, row: int) -> T | None:
        return self.tree.get(self._index(row))

    def set_item(self, row: int, value: T) -> bool:
        return self.tree.set(self._index(row), value)

    def item_depth(self, row: int) -> int | None:
        node = self.tree.node(self._index(row))
        return None if node is None else node.level

    def item_is_collapsed(self, row: int) -> bool:
        return self.tree.get_collapsed(self._index(row))

    def item_is_container(self, row: int) -> bool:
        return self.tree.is_container_item(self._index(row))

    def insert_item(self, value: T, placement: Placement, row: int) -> int | None:
        """Insert ``value`` relative to ``row``; returns its new row when visible."""
        inserted_row = self.tree.insert_item(placement, self._index(row), value)
        logger.debug("inserted item at row %s (%s relative to row %d)", inserted_row, placement.value, row)
        return inserted_row

    def insert_container_item(self, value: T, placement: Placement, row: int) -> int | None:
        inserted_row = self.tree.insert_container_item(placement, self._index(row), value)
        logger.debug("inserted container at row %s (%s relative to row %d)", inserted_row, placement.value, row)
        return inserted_row

    def _clamp_focus(self) -> None:
        self.focus = max(0, min(self.focus, self.tree.height - 1))

    def remove_item(self, row: int) -> list[T] | None:
        """Remove the item at ``row`` together with all of its children."""
        removed = self.tree.remove_with_children(self._index(row))
        self._clamp_focus()
        if removed is not None:
            logger.debug("removed %d item(s) at row %d", len(removed), row)
        return removed

    def remove_children(self, row: int) -> list[T] | None:
        removed = self.tree.remove_children(self._index(row))
        self._clamp_focus()
        if removed is not None:
            logger.debug("removed %d child item(s) below row %d", len(removed), row)
        return removed

    def extract_item(self, row: int) -> T | None:
        """Remove only the item at ``row``; its children move up one level."""
        index = self._index(row)
        found = index < len(self.tree)
        removed = self.tree.remove(index)
        self._clamp_focus()
        if found:
            logger.debug("extracted item at row %d", row)
        return removed

    def collapse_item(self, row: int) -> None:
        self.set_collapsed(row, True)

    def expand_item(self, row: int) -> None:
        self.set_collapsed(row, False)

    def set_collapsed(self, row: int, collapsed: bool) -> None:
        self.tree.set_collapsed(self._index(row), collapsed)

    def focus_up(self, n: int) -> bool:
        return self._move_focus(max(0, self.focus - n))

    def focus_down(self, n: int) -> bool:
        return self._move_focus(min(self.focus + n, self.tree.height - 1))

    def focus_first(self) -> bool:
        return self._move_focus(0)

    def focus_last(self) -> bool:
        return self._move_focus(self.tree.height - 1)

    def _move_focus(self, target: int) -> bool:
        if self.is_empty():
            return True
        target = max(0, target)
        if target == self.focus:
            return True
        self.focus = target
        if self.on_select is not None:
            logger.debug("select callback for row %d", target)
            self.on_select(target)
        return True

    def activate(self) -> bool:
        """Toggle the focused container or submit the focused leaf."""
        if self.is_empty():
            return True
        row = self.focus
        index = self._index(row)
        if self.tree.is_container_item(index):
            self._toggle(row, index, not self.tree.get_collapsed(index))
        elif self.on_submit is not None:
            logger.debug("submit callback for row %d", row)
            self.on_submit(row)
        return True

    def collapse_or_parent(self) -> bool:
        """Collapse the focused expanded container, else focus its parent row."""
        if self.is_empty():
            return True
        row = self.focus
        index = self._index(row)
        if self.tree.is_container_item(index) and not self.tree.get_collapsed(index):
            self._toggle(row, index, True)
            return True
        parent = self.tree.parent_index(index)
        if parent is not None:
            self._move_focus(self.tree.item_index_to_row(parent))
        return True

    def expand_focused(self) -> bool:
        """Expand the focused container when it is collapsed."""
        if self.is_empty():
            return True
        row = self.focus
        index = self._index(row)
        if self.tree.is_container_item(index) and self.tree.get_collapsed(index):
            self._toggle(row, index, False)
        return True

    def _toggle(self, row: int, index: int, collapsed: bool) -> None:
        children = self.tree.get_children(index)
        self.tree.set_collapsed(index, collapsed)
        if self.on_collapse is not None:
            logger.debug("collapse callback for row %d (collapsed=%s)", row, collapsed)
            self.on_collapse(row, collapsed, children)

    def handle_key(self, key: str) -> bool:
        """Dispatch one key token; ``False`` when unbound or the view is disabled."""
        if not self.enabled:
            return False
        return self._keys.dispatch(key)
