"""Flattened tree storage: node records, placements, and the ``TreeList`` container."""

from __future__ import annotations

from .tree_list import TreeList
from .types import Placement, TreeNode

__all__ = [
    "Placement",
    "TreeList",
    "TreeNode",
]
