"""Headless tree view: focus tracking, key dispatch, and row rendering."""

from __future__ import annotations

from .keys import DEFAULT_TREE_KEYMAP, TreeKeyDispatcher
from .rendering import first_col, format_tree_row, item_width, render_tree_rows, scroll_offset
from .view import TreeView

__all__ = [
    "DEFAULT_TREE_KEYMAP",
    "TreeKeyDispatcher",
    "TreeView",
    "first_col",
    "format_tree_row",
    "item_width",
    "render_tree_rows",
    "scroll_offset",
]
