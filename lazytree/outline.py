"""Indented-text outline parsing and ``TreeList`` construction.

One item per non-blank line; nesting comes from leading indentation.
A trailing ``/`` marks a container item and is stripped from the label.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .tree_list import Placement, TreeList


class OutlineError(ValueError):
    """Raised for outlines whose indentation does not describe a tree."""

    def __init__(self, line_number: int, message: str) -> None:
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


@dataclass(frozen=True)
class OutlineLine:
    """One parsed outline item."""

    depth: int
    label: str
    is_container: bool = False


def _leading_width(line: str) -> tuple[int, int]:
    """Return ``(tabs, spaces)`` counted in the leading whitespace of ``line``."""
    tabs = 0
    spaces = 0
    for ch in line:
        if ch == "\t":
            tabs += 1
        elif ch == " ":
            spaces += 1
        else:
            break
    return tabs, spaces


def parse_outline(text: str, indent_width: int | None = None) -> list[OutlineLine]:
    """Parse indented outline text into depth-tagged lines.

    Tabs count as one level each. Space indentation is measured in units of
    ``indent_width``, inferred from the first space-indented line when not
    given. Blank lines are skipped.
    """
    if indent_width is not None and indent_width <= 0:
        raise ValueError("indent_width must be >= 1")

    parsed: list[OutlineLine] = []
    unit = indent_width
    previous_depth = -1
    for line_number, raw in enumerate(text.splitlines(), start=1):
        if not raw.strip():
            continue
        tabs, spaces = _leading_width(raw)
        if spaces and unit is None:
            unit = spaces
        if spaces and spaces % (unit or 1):
            raise OutlineError(line_number, f"indentation of {spaces} spaces is not a multiple of {unit}")
        depth = tabs + (spaces // unit if spaces else 0)
        if depth > previous_depth + 1:
            raise OutlineError(line_number, f"indentation jumps from depth {max(previous_depth, 0)} to {depth}")

        label = raw.strip()
        is_container = label.endswith("/")
        if is_container:
            label = label.rstrip("/").rstrip()
        parsed.append(OutlineLine(depth=depth, label=label, is_container=is_container))
        previous_depth = depth
    return parsed


def build_tree_list(lines: Iterable[OutlineLine], collapse_depth: int | None = None) -> TreeList[str]:
    """Build a ``TreeList`` from parsed outline lines.

    Items are appended with ``LAST_CHILD`` under their parent or ``AFTER``
    the previous root. Nodes with children end up expanded, except those at
    ``collapse_depth`` or deeper when it is set.
    """
    tree: TreeList[str] = TreeList()
    # Storage index of the open item at each depth; appends land at len(tree).
    open_items: list[int] = []
    for line in lines:
        if line.depth > len(open_items):
            raise ValueError(f"outline depth {line.depth} has no parent item")
        root = open_items[0] if open_items else 0
        del open_items[line.depth :]
        if line.depth == 0:
            placement, index = Placement.AFTER, root
        else:
            placement, index = Placement.LAST_CHILD, open_items[-1]

        position = len(tree)
        if line.is_container:
            tree.insert_container_item(placement, index, line.label)
        else:
            tree.insert_item(placement, index, line.label)
        open_items.append(position)

    apply_collapse_depth(tree, collapse_depth)
    return tree


def apply_collapse_depth(tree: TreeList, depth: int | None) -> None:
    """Expand every node with children, collapsing those at ``depth`` or deeper.

    Containers start collapsed when created empty, so nodes that gained
    children during the build are expanded here. ``depth=None`` expands all.
    """
    for index in range(len(tree)):
        node = tree.node(index)
        if node is None or not node.children:
            continue
        tree.set_collapsed(index, depth is not None and node.level >= depth)
