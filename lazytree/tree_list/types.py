"""Node record and placement policy used by the flattened tree list."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class Placement(Enum):
    """Where a new item attaches relative to an existing storage index."""

    #: Sibling after the reference item and its whole subtree.
    AFTER = "after"
    #: Sibling immediately before the reference item.
    BEFORE = "before"
    #: Child of the reference item, placed before its other children.
    FIRST_CHILD = "first_child"
    #: Child of the reference item, placed after its other children.
    LAST_CHILD = "last_child"
    #: New immediate parent of the reference item.
    PARENT = "parent"


@dataclass
class TreeNode(Generic[T]):
    """One tree entry stored in pre-order inside ``TreeList``.

    ``children`` counts all descendants regardless of collapse state.
    ``height`` counts visible rows of the subtree (``1`` while collapsed).
    ``collapsed_height`` holds the would-be expanded height while collapsed.
    """

    value: T
    level: int = 0
    is_collapsed: bool = False
    is_container: bool = False
    children: int = 0
    height: int = 1
    collapsed_height: int | None = None

    def row_span(self) -> int:
        """Return storage slots covered when this node is drawn as one row."""
        if self.is_collapsed:
            return self.children + 1
        return 1

    def symbol(self) -> str:
        """Return the collapse affordance glyph for this node."""
        if self.is_container:
            return "▸" if self.is_collapsed else "▾"
        return "◦"
