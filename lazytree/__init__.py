"""Public package surface for lazytree.

Exports the flattened ``TreeList`` container, its ``Placement`` policy, the
headless ``TreeView`` model, and ``main`` for programmatic CLI invocation.
"""

from __future__ import annotations

from .tree_list import Placement, TreeList, TreeNode
from .tree_view import TreeView


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["Placement", "TreeList", "TreeNode", "TreeView", "main"]
