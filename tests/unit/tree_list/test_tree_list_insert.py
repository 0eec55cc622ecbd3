"""Insertion tests for ``TreeList`` placements.

Each case checks the visible rows as ``(level, collapsed, value, children,
height)`` tuples together with storage length and visible height.
"""

from __future__ import annotations

import unittest

from lazytree.tree_list import Placement, TreeList


def visible_rows(tree: TreeList) -> list[tuple[int, bool, str, int, int]]:
    rows = []
    for index in tree.visible_indices():
        node = tree.node(index)
        rows.append((node.level, node.is_collapsed, node.value, node.children, node.height))
    return rows


class InsertFlatTests(unittest.TestCase):
    def test_insert_after_returns_consecutive_rows(self) -> None:
        tree: TreeList[str] = TreeList()
        self.assertEqual(tree.insert_item(Placement.AFTER, 0, "1"), 0)
        self.assertEqual(tree.insert_item(Placement.AFTER, 0, "2"), 1)
        self.assertEqual(tree.insert_item(Placement.AFTER, 1, "3"), 2)
        self.assertEqual(tree.insert_item(Placement.AFTER, 2, "4"), 3)

        self.assertEqual([tree.get(i) for i in range(len(tree))], ["1", "2", "3", "4"])
        self.assertEqual(tree.height, 4)

    def test_insert_clamps_out_of_range_index_to_last_item(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.AFTER, 0, "1")
        tree.insert_item(Placement.AFTER, 0, "2")

        self.assertEqual(tree.insert_item(Placement.AFTER, 99, "3"), 2)
        self.assertEqual(tree.insert_item(Placement.BEFORE, 99, "x"), 2)
        self.assertEqual([tree.get(i) for i in range(len(tree))], ["1", "2", "x", "3"])

    def test_insert_before_flat(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.BEFORE, 0, "4")
        tree.insert_item(Placement.BEFORE, 0, "1")
        tree.insert_item(Placement.BEFORE, 1, "2")
        tree.insert_item(Placement.BEFORE, 2, "3")

        self.assertEqual(
            visible_rows(tree),
            [
                (0, False, "1", 0, 1),
                (0, False, "2", 0, 1),
                (0, False, "3", 0, 1),
                (0, False, "4", 0, 1),
            ],
        )

    def test_placement_is_ignored_for_empty_tree(self) -> None:
        for placement in Placement:
            tree: TreeList[str] = TreeList()
            self.assertEqual(tree.insert_item(placement, 5, "root"), 0)
            self.assertEqual(visible_rows(tree), [(0, False, "root", 0, 1)])


class InsertNestedTests(unittest.TestCase):
    def test_last_child_chain_builds_single_path(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.LAST_CHILD, 0, "1")
        tree.insert_item(Placement.LAST_CHILD, 0, "2")
        tree.insert_item(Placement.LAST_CHILD, 1, "3")
        tree.insert_item(Placement.LAST_CHILD, 2, "4")

        self.assertEqual(
            visible_rows(tree),
            [
                (0, False, "1", 3, 4),
                (1, False, "2", 2, 3),
                (2, False, "3", 1, 2),
                (3, False, "4", 0, 1),
            ],
        )
        self.assertEqual(tree.height, 4)

    def test_first_child_goes_before_existing_children(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.AFTER, 0, "Parent")
        tree.insert_item(Placement.FIRST_CHILD, 0, "b")
        self.assertEqual(tree.insert_item(Placement.FIRST_CHILD, 0, "a"), 1)

        self.assertEqual(
            visible_rows(tree),
            [
                (0, False, "Parent", 2, 3),
                (1, False, "a", 0, 1),
                (1, False, "b", 0, 1),
            ],
        )

    def test_after_skips_subtree_of_reference_item(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.AFTER, 0, "Parent")
        tree.insert_item(Placement.LAST_CHILD, 0, "LastChild 1")
        tree.insert_item(Placement.LAST_CHILD, 0, "LastChild 2")
        tree.insert_item(Placement.LAST_CHILD, 2, "Nested LastChild")
        tree.insert_item(Placement.AFTER, 0, "After Parent")
        tree.insert_item(Placement.AFTER, 0, "After Parent 2")
        tree.insert_item(Placement.AFTER, 2, "After LastChild 2")

        self.assertEqual(
            visible_rows(tree),
            [
                (0, False, "Parent", 4, 5),
                (1, False, "LastChild 1", 0, 1),
                (1, False, "LastChild 2", 1, 2),
                (2, False, "Nested LastChild", 0, 1),
                (1, False, "After LastChild 2", 0, 1),
                (0, False, "After Parent 2", 0, 1),
                (0, False, "After Parent", 0, 1),
            ],
        )
        self.assertEqual(len(tree), 7)
        self.assertEqual(tree.height, 7)

    def test_before_child_keeps_parent_level(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.AFTER, 0, "Parent")
        tree.insert_item(Placement.LAST_CHILD, 0, "b")
        self.assertEqual(tree.insert_item(Placement.BEFORE, 1, "a"), 1)

        self.assertEqual(
            visible_rows(tree),
            [
                (0, False, "Parent", 2, 3),
                (1, False, "a", 0, 1),
                (1, False, "b", 0, 1),
            ],
        )

    def test_child_insertion_marks_parent_as_container(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.AFTER, 0, "Parent")
        self.assertFalse(tree.is_container_item(0))

        tree.insert_item(Placement.LAST_CHILD, 0, "child")

        self.assertTrue(tree.is_container_item(0))
        self.assertFalse(tree.is_container_item(1))


class InsertParentTests(unittest.TestCase):
    def test_parent_placement_wraps_chain(self) -> None:
        tree: TreeList[str] = TreeList()
        for value in ("5", "4", "3", "2", "1"):
            self.assertEqual(tree.insert_item(Placement.PARENT, 0, value), 0)

        self.assertEqual(
            visible_rows(tree),
            [
                (0, False, "1", 4, 5),
                (1, False, "2", 3, 4),
                (2, False, "3", 2, 3),
                (3, False, "4", 1, 2),
                (4, False, "5", 0, 1),
            ],
        )
        self.assertEqual(tree.height, 5)

    def test_parent_placement_between_siblings(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.AFTER, 0, "Root")
        tree.insert_item(Placement.LAST_CHILD, 1, "1")
        for value in ("6", "5", "4", "3", "2"):
            tree.insert_item(Placement.AFTER, 1, value)

        self.assertEqual(tree.insert_item(Placement.PARENT, 3, "Parent"), 3)

        self.assertEqual(
            visible_rows(tree),
            [
                (0, False, "Root", 7, 8),
                (1, False, "1", 0, 1),
                (1, False, "2", 0, 1),
                (1, False, "Parent", 1, 2),
                (2, False, "3", 0, 1),
                (1, False, "4", 0, 1),
                (1, False, "5", 0, 1),
                (1, False, "6", 0, 1),
            ],
        )
        self.assertEqual(len(tree), 8)
        self.assertEqual(tree.height, 8)

    def test_parent_placement_nested_between_levels(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.LAST_CHILD, 0, "1")
        tree.insert_item(Placement.LAST_CHILD, 0, "2")
        tree.insert_item(Placement.LAST_CHILD, 1, "8")
        for value in ("7", "6", "5", "4", "3"):
            tree.insert_item(Placement.PARENT, 2, value)

        self.assertEqual(
            [row[2:] for row in visible_rows(tree)],
            [
                ("1", 7, 8),
                ("2", 6, 7),
                ("3", 5, 6),
                ("4", 4, 5),
                ("5", 3, 4),
                ("6", 2, 3),
                ("7", 1, 2),
                ("8", 0, 1),
            ],
        )
        self.assertEqual([row[0] for row in visible_rows(tree)], list(range(8)))

    def test_parent_of_collapsed_item_counts_visible_height_only(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.AFTER, 0, "a")
        tree.insert_item(Placement.LAST_CHILD, 0, "a1")
        tree.insert_item(Placement.LAST_CHILD, 0, "a2")
        tree.set_collapsed(0, True)

        self.assertEqual(tree.insert_item(Placement.PARENT, 0, "wrapper"), 0)

        self.assertEqual(
            visible_rows(tree),
            [
                (0, False, "wrapper", 3, 2),
                (1, True, "a", 2, 1),
            ],
        )
        self.assertEqual(tree.height, 2)
        self.assertEqual([tree.node(i).level for i in range(len(tree))], [0, 1, 2, 2])

    def test_parent_placement_turns_wrapper_into_container(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.AFTER, 0, "leaf")

        self.assertEqual(tree.insert_item(Placement.PARENT, 0, "wrapper"), 0)

        wrapper = tree.node(0)
        self.assertTrue(tree.is_container_item(0))
        self.assertFalse(wrapper.is_collapsed)
        self.assertEqual(wrapper.symbol(), "▾")
        self.assertFalse(tree.is_container_item(1))


class InsertIntoCollapsedTests(unittest.TestCase):
    def test_insert_child_into_collapsed_parent_is_hidden(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.LAST_CHILD, 0, "1")
        tree.insert_item(Placement.LAST_CHILD, 0, "2")
        tree.set_collapsed(1, True)

        self.assertIsNone(tree.insert_item(Placement.LAST_CHILD, 1, "3"))
        self.assertEqual(
            visible_rows(tree),
            [
                (0, False, "1", 2, 2),
                (1, True, "2", 1, 1),
            ],
        )
        self.assertEqual(len(tree), 3)
        self.assertEqual(tree.height, 2)

        tree.set_collapsed(1, False)

        self.assertEqual(
            visible_rows(tree),
            [
                (0, False, "1", 2, 3),
                (1, False, "2", 1, 2),
                (2, False, "3", 0, 1),
            ],
        )
        self.assertEqual(tree.height, 3)
        self.assertEqual(tree.row_to_item_index(2), 2)

    def test_insert_next_to_collapsed_items_returns_visual_rows(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.LAST_CHILD, 0, "1")
        tree.insert_item(Placement.LAST_CHILD, 0, "2a")
        tree.insert_item(Placement.LAST_CHILD, 1, "3a")
        tree.insert_item(Placement.LAST_CHILD, 2, "4a")
        tree.set_collapsed(0, True)
        self.assertEqual(visible_rows(tree), [(0, True, "1", 3, 1)])

        self.assertEqual(tree.insert_item(Placement.AFTER, tree.row_to_item_index(0), "5"), 1)
        self.assertEqual(visible_rows(tree), [(0, True, "1", 3, 1), (0, False, "5", 0, 1)])

        self.assertEqual(tree.insert_item(Placement.LAST_CHILD, tree.row_to_item_index(1), "6a"), 2)
        self.assertEqual(tree.insert_item(Placement.LAST_CHILD, tree.row_to_item_index(1), "7"), 3)

        index = tree.row_to_item_index(1)
        tree.set_collapsed(index, True)
        self.assertEqual(tree.insert_item(Placement.AFTER, index, "8"), 2)

    def test_hidden_insert_below_two_collapsed_ancestors(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.AFTER, 0, "a")
        tree.insert_item(Placement.LAST_CHILD, 0, "b")
        tree.insert_item(Placement.LAST_CHILD, 1, "c")
        tree.set_collapsed(1, True)
        tree.set_collapsed(0, True)

        self.assertIsNone(tree.insert_item(Placement.LAST_CHILD, 1, "d"))
        self.assertEqual(tree.get_children(0), 3)
        self.assertEqual(tree.get_children(1), 2)
        self.assertEqual(tree.height, 1)

        tree.set_collapsed(0, False)
        self.assertEqual(tree.height, 2)
        tree.set_collapsed(1, False)
        self.assertEqual(tree.height, 4)
        self.assertEqual([tree.node(i).height for i in range(len(tree))], [4, 3, 1, 1])


class InsertContainerTests(unittest.TestCase):
    def test_empty_container_starts_collapsed(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_container_item(Placement.LAST_CHILD, 0, "1")

        self.assertEqual(visible_rows(tree), [(0, True, "1", 0, 1)])
        self.assertEqual(tree.node(0).collapsed_height, 1)
        self.assertEqual(tree.height, 1)

        tree.set_collapsed(0, False)

        self.assertEqual(visible_rows(tree), [(0, False, "1", 0, 1)])
        self.assertIsNone(tree.node(0).collapsed_height)

    def test_child_of_empty_container_is_hidden_until_expanded(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_container_item(Placement.AFTER, 0, "dir")

        self.assertIsNone(tree.insert_item(Placement.LAST_CHILD, 0, "file"))
        self.assertEqual(tree.height, 1)

        tree.set_collapsed(0, False)

        self.assertEqual(tree.height, 2)
        self.assertEqual(tree.row_to_item_index(1), 1)

    def test_container_wrapping_existing_item_starts_expanded(self) -> None:
        tree: TreeList[str] = TreeList()
        tree.insert_item(Placement.AFTER, 0, "leaf")

        self.assertEqual(tree.insert_container_item(Placement.PARENT, 0, "dir"), 0)

        self.assertEqual(visible_rows(tree), [(0, False, "dir", 1, 2), (1, False, "leaf", 0, 1)])


if __name__ == "__main__":
    unittest.main()
