"""Flattened tree container with collapse-aware row bookkeeping.

Nodes live in one list in pre-order: every node is immediately followed by
its whole subtree. Hierarchy is encoded only through ``level`` and the
``children`` descendant count, so subtrees are always contiguous slices.
Visible row counts are maintained incrementally on every mutation.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

from .types import Placement, TreeNode

T = TypeVar("T")


class TreeList(Generic[T]):
    """Ordered forest stored as a single pre-order list of ``TreeNode`` records."""

    def __init__(self) -> None:
        self._items: list[TreeNode[T]] = []
        self._height = 0

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"TreeList(len={len(self._items)}, height={self._height})"

    def is_empty(self) -> bool:
        return not self._items

    @property
    def height(self) -> int:
        """Number of rows currently visible from the roots."""
        return self._height

    @property
    def items(self) -> tuple[TreeNode[T], ...]:
        """Snapshot of node records in storage order."""
        return tuple(self._items)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._items)

    def node(self, index: int) -> TreeNode[T] | None:
        """Return the node record at storage ``index`` or ``None``."""
        if not self._in_range(index):
            return None
        return self._items[index]

    def get(self, index: int) -> T | None:
        """Return the payload at storage ``index`` or ``None``."""
        if not self._in_range(index):
            return None
        return self._items[index].value

    def set(self, index: int, value: T) -> bool:
        """Replace the payload at storage ``index``; ``False`` when out of range."""
        if not self._in_range(index):
            return False
        self._items[index].value = value
        return True

    def take_items(self) -> list[T]:
        """Remove every node and return payloads in storage order."""
        values = [node.value for node in self._items]
        self._items.clear()
        self._height = 0
        return values

    def clear(self) -> None:
        self._items.clear()
        self._height = 0

    def insert_item(self, placement: Placement, index: int, value: T) -> int | None:
        """Insert a plain item relative to storage ``index``.

        Returns the visual row of the new item, or ``None`` when it was
        inserted below a collapsed ancestor and is not displayed yet.
        """
        return self._insert(placement, index, value, is_container=False)

    def insert_container_item(self, placement: Placement, index: int, value: T) -> int | None:
        """Insert a container item; it starts collapsed when it has no children."""
        return self._insert(placement, index, value, is_container=True)

    def remove(self, index: int) -> T | None:
        """Remove one node and promote its descendants one level up."""
        if not self._in_range(index):
            return None

        # Expanded nodes keep the height math to a flat -1.
        self.set_collapsed(index, False)
        visible = self._propagate(index, 0, children_delta=-1, height_delta=-1)

        removed = self._items.pop(index)
        for node in self._items[index : index + removed.children]:
            node.level -= 1

        if visible:
            self._height -= 1
        return removed.value

    def remove_children(self, index: int) -> list[T] | None:
        """Remove all descendants of ``index`` and keep the node itself.

        The node keeps its collapse state. Returns removed payloads in
        storage order, or ``None`` when ``index`` is out of range.
        """
        if not self._in_range(index):
            return None

        node = self._items[index]
        was_collapsed = node.is_collapsed
        self.set_collapsed(index, False)

        count = node.children
        rows = node.height - 1
        visible = self._propagate(index, 1, children_delta=-count, height_delta=-rows)
        if visible:
            self._height -= rows

        removed = [child.value for child in self._items[index + 1 : index + 1 + count]]
        del self._items[index + 1 : index + 1 + count]

        self.set_collapsed(index, was_collapsed)
        return removed

    def remove_with_children(self, index: int) -> list[T] | None:
        """Remove ``index`` and its subtree; node payload first, then descendants."""
        if not self._in_range(index):
            return None

        self.set_collapsed(index, False)
        node = self._items[index]
        count = node.children + 1
        rows = node.height
        visible = self._propagate(index, 0, children_delta=-count, height_delta=-rows)
        if visible:
            self._height -= rows

        removed = [item.value for item in self._items[index : index + count]]
        del self._items[index : index + count]
        return removed

    def is_container_item(self, index: int) -> bool:
        if not self._in_range(index):
            return False
        return self._items[index].is_container

    def get_children(self, index: int) -> int:
        """Return the descendant count of ``index`` (``0`` when out of range)."""
        if not self._in_range(index):
            return 0
        return self._items[index].children

    def get_collapsed(self, index: int) -> bool:
        if not self._in_range(index):
            return False
        return self._items[index].is_collapsed

    def set_collapsed(self, index: int, collapsed: bool) -> None:
        """Collapse or expand the node at storage ``index``.

        No-op when out of range or already in the requested state.
        """
        if not self._in_range(index):
            return
        node = self._items[index]
        if node.is_collapsed == collapsed:
            return

        if collapsed:
            node.collapsed_height = node.height
            delta = 1 - node.height
        else:
            # Expand before walking so the node itself takes the height change.
            node.is_collapsed = False
            delta = (node.collapsed_height or 1) - 1
            node.collapsed_height = None

        visible = self._propagate(index, 1, children_delta=0, height_delta=delta)

        # Collapse after walking so the node still reported its old height.
        if collapsed:
            node.is_collapsed = True

        if visible:
            self._height += delta

    def row_to_item_index(self, row: int) -> int:
        """Translate a visual row to a storage index.

        Returns ``len(self)`` when ``row`` is past the visible rows.
        """
        i = 0
        target = row
        while i < len(self._items):
            if target == i:
                return i
            node = self._items[i]
            if node.is_collapsed:
                i += node.children
                target += node.children
            i += 1
        return len(self._items)

    def item_index_to_row(self, index: int) -> int:
        """Translate a storage index of a visible node to its visual row.

        Returns ``height`` when ``index`` is past the stored items.
        """
        if index >= len(self._items):
            return self._height
        i = 0
        row = index
        while i < index:
            node = self._items[i]
            if node.is_collapsed:
                i += node.children
                row -= node.children
            i += 1
        return row

    def visible_indices(self, start_row: int = 0) -> Iterator[int]:
        """Yield storage indices of visible nodes from visual row ``start_row``."""
        i = self.row_to_item_index(max(0, start_row))
        while i < len(self._items):
            yield i
            i += self._items[i].row_span()

    def parent_index(self, index: int) -> int | None:
        """Return the storage index of the parent of ``index``, if any."""
        if not self._in_range(index):
            return None
        level = self._items[index].level
        for i in range(index - 1, -1, -1):
            if self._items[i].level < level:
                return i
        return None

    def _insert(self, placement: Placement, index: int, value: T, is_container: bool) -> int | None:
        wrapped: TreeNode[T] | None = None
        if not self._items:
            parent, position, level = None, 0, 0
        else:
            index = min(max(index, 0), len(self._items) - 1)
            anchor = self._items[index]
            if placement is Placement.AFTER:
                parent = self.parent_index(index)
                position = index + 1 + anchor.children
                level = anchor.level
            elif placement is Placement.BEFORE:
                parent = self.parent_index(index)
                position = index
                level = anchor.level
            elif placement is Placement.FIRST_CHILD:
                parent = index
                position = index + 1
                level = anchor.level + 1
            elif placement is Placement.LAST_CHILD:
                parent = index
                position = index + 1 + anchor.children
                level = anchor.level + 1
            elif placement is Placement.PARENT:
                parent = self.parent_index(index)
                position = index
                level = anchor.level
                wrapped = anchor
            else:
                raise ValueError(f"unknown placement: {placement!r}")

        visible = True
        if parent is not None:
            self._items[parent].is_container = True
            visible = self._propagate(parent, 1, children_delta=1, height_delta=1)

        if wrapped is not None:
            is_container = True
            for node in self._items[position : position + wrapped.children + 1]:
                node.level += 1
            children = wrapped.children + 1
            height = wrapped.height + 1
        else:
            children = 0
            height = 1

        initially_collapsed = is_container and children == 0
        self._items.insert(
            position,
            TreeNode(
                value=value,
                level=level,
                is_collapsed=initially_collapsed,
                is_container=is_container,
                children=children,
                height=height,
                collapsed_height=1 if initially_collapsed else None,
            ),
        )

        if not visible:
            return None
        self._height += 1
        return self.item_index_to_row(position)

    def _walk_up(self, index: int, offset: int) -> Iterator[TreeNode[T]]:
        """Yield ancestors of ``index`` nearest first.

        With ``offset=1`` the node at ``index`` itself is yielded first.
        """
        if not self._in_range(index):
            raise IndexError(f"tree index out of range: {index}")
        level = self._items[index].level + offset
        for i in range(index, -1, -1):
            if level <= 0:
                return
            node = self._items[i]
            if node.level < level:
                yield node
                level = node.level

    def _propagate(self, index: int, offset: int, *, children_delta: int, height_delta: int) -> bool:
        """Apply count deltas along the ancestor walk of ``index``.

        ``children`` always changes. Visible heights change up to the first
        collapsed node, whose cached ``collapsed_height`` takes the delta
        instead; nodes above it are hidden-unaffected and left alone.
        Returns ``True`` when no collapsed node was met, i.e. the change is
        visible from the roots.
        """
        inside_collapsed = False
        for node in self._walk_up(index, offset):
            node.children += children_delta
            if inside_collapsed:
                continue
            if node.is_collapsed:
                inside_collapsed = True
                node.collapsed_height = (node.collapsed_height or 1) + height_delta
            else:
                node.height += height_delta
        return not inside_collapsed
