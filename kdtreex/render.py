from __future__ import annotations

from typing import List

from kdtreex.core.tree import NO_NODE, KDTree

_INDENT = 4


def _render_node(tree: KDTree, handle: int, depth: int, lines: List[str]) -> None:
    right = tree.right_of(handle)
    left = tree.left_of(handle)
    pad = " " * (depth * _INDENT)

    if right != NO_NODE:
        _render_node(tree, right, depth + 1, lines)
        lines.append(f"{pad} /")
    lines.append(f"{pad}{tree.split_points[handle]}")
    if left != NO_NODE:
        lines.append(f"{pad} \\")
        _render_node(tree, left, depth + 1, lines)


def render_tree(tree: KDTree) -> str:
    """Render the tree sideways: root on the left, right subtree above it.

    Each level is indented by four spaces and every node shows its split
    point, e.g. for three points::

            (9, 6)
         /
        (7, 2)
         \\
            (5, 4)
    """

    lines: List[str] = []
    _render_node(tree, tree.root_handle, 0, lines)
    return "\n".join(lines)


__all__ = ["render_tree"]
