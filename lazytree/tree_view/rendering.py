"""Formatting helpers for visible tree rows."""

from __future__ import annotations

from ..ansi import clip_ansi_line, display_width
from ..tree_list import TreeNode
from ..ui_theme import DEFAULT_THEME, UITheme
from .view import TreeView

DEFAULT_INDENT_WIDTH = 2
SYMBOL_WIDTH = 2


def first_col(node: TreeNode, indent_width: int = DEFAULT_INDENT_WIDTH) -> int:
    """Return the column where the affordance symbol of ``node`` starts."""
    return node.level * indent_width


def item_width(node: TreeNode) -> int:
    """Return the display width of ``node`` including its symbol column."""
    return display_width(str(node.value)) + SYMBOL_WIDTH


def format_tree_row(
    node: TreeNode,
    *,
    focused: bool = False,
    theme: UITheme | None = None,
    indent_width: int = DEFAULT_INDENT_WIDTH,
) -> str:
    """Render one tree row as ANSI-styled display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    indent = " " * first_col(node, indent_width)
    label_color = active_theme.tree_container if node.is_container else active_theme.tree_leaf
    label = str(node.value)
    if focused:
        label = f"{active_theme.reverse}{label}"
    hint = ""
    if node.is_collapsed and node.children:
        hint = f"{active_theme.tree_collapsed_hint} ({node.children}){reset}"
    return f"{indent}{active_theme.tree_marker}{node.symbol()} {reset}{label_color}{label}{reset}{hint}"


def scroll_offset(focus: int, current_offset: int, viewport_rows: int) -> int:
    """Return the first visible row that keeps ``focus`` inside the viewport."""
    if viewport_rows <= 0:
        return 0
    if focus < current_offset:
        return max(0, focus)
    if focus >= current_offset + viewport_rows:
        return focus - viewport_rows + 1
    return max(0, current_offset)


def render_tree_rows(
    view: TreeView,
    viewport_rows: int | None = None,
    max_cols: int | None = None,
    *,
    theme: UITheme | None = None,
    indent_width: int = DEFAULT_INDENT_WIDTH,
    show_focus: bool = True,
) -> list[str]:
    """Render the visible window of ``view`` and update its scroll position.

    ``viewport_rows=None`` renders every visible row.
    """
    if viewport_rows is None:
        start_row = 0
        limit = view.height
    else:
        view.scroll_top = scroll_offset(view.focus, view.scroll_top, viewport_rows)
        start_row = view.scroll_top
        limit = viewport_rows

    tree = view.tree
    rows: list[str] = []
    for row, index in enumerate(tree.visible_indices(start_row), start=start_row):
        if len(rows) >= limit:
            break
        text = format_tree_row(
            tree.node(index),
            focused=show_focus and row == view.focus,
            theme=theme,
            indent_width=indent_width,
        )
        if max_cols is not None:
            text = clip_ansi_line(text, max_cols)
        rows.append(text)
    return rows
