from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence, Tuple

import numpy as np

from kdtreex.core.iterator import TreeIterator
from kdtreex.core.point import Point
from kdtreex.errors import InvalidArgument

NO_NODE = -1


def _readonly_handles(values: Sequence[int]) -> np.ndarray:
    arr = np.asarray(values, dtype=np.int64)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class KDTree:
    """Immutable k-d tree stored as an arena of integer node handles.

    Node ``i`` owns ``split_points[i]`` and splits on ``split_axes[i]``;
    ``left[i]``, ``right[i]`` and ``parents[i]`` hold neighbouring handles or
    ``-1`` when absent. Parent handles exist purely for traversal.
    """

    split_points: Tuple[Point, ...]
    split_axes: np.ndarray
    left: np.ndarray
    right: np.ndarray
    parents: np.ndarray
    root_handle: int
    dims: int

    @classmethod
    def from_arena(
        cls,
        *,
        split_points: Sequence[Point],
        split_axes: Sequence[int],
        left: Sequence[int],
        right: Sequence[int],
        parents: Sequence[int],
        root_handle: int,
        dims: int,
    ) -> "KDTree":
        num_nodes = len(split_points)
        if num_nodes == 0:
            raise InvalidArgument("A k-d tree must hold at least one point.")
        lengths = {len(split_axes), len(left), len(right), len(parents)}
        if lengths != {num_nodes}:
            raise InvalidArgument("Arena arrays must all have one entry per node.")
        for point in split_points:
            point.freeze()
        return cls(
            split_points=tuple(split_points),
            split_axes=_readonly_handles(split_axes),
            left=_readonly_handles(left),
            right=_readonly_handles(right),
            parents=_readonly_handles(parents),
            root_handle=int(root_handle),
            dims=int(dims),
        )

    @property
    def num_points(self) -> int:
        return len(self.split_points)

    def __len__(self) -> int:
        return self.num_points

    @property
    def root(self) -> "KDNode":
        return KDNode(self, self.root_handle)

    def node(self, handle: int) -> "KDNode":
        if handle < 0 or handle >= self.num_points:
            raise InvalidArgument(f"Unknown node handle {handle}.")
        return KDNode(self, int(handle))

    def left_of(self, handle: int) -> int:
        return int(self.left[handle])

    def right_of(self, handle: int) -> int:
        return int(self.right[handle])

    def parent_of(self, handle: int) -> int:
        return int(self.parents[handle])

    def begin(self) -> TreeIterator:
        return TreeIterator.from_subtree(self, self.root_handle)

    def end(self) -> TreeIterator:
        return TreeIterator(self, NO_NODE)

    def __iter__(self) -> Iterator[Point]:
        return self.begin()

    def points(self) -> list[Point]:
        """Copies of the stored points in in-order sequence."""

        return [point.copy() for point in self]

    def depth_of(self, handle: int) -> int:
        depth = 0
        parent = self.parent_of(handle)
        while parent != NO_NODE:
            depth += 1
            parent = self.parent_of(parent)
        return depth

    def height(self) -> int:
        """Number of levels from the root to the deepest leaf."""

        best = 0
        stack = [(self.root_handle, 1)]
        while stack:
            handle, level = stack.pop()
            best = max(best, level)
            for child in (self.left_of(handle), self.right_of(handle)):
                if child != NO_NODE:
                    stack.append((child, level + 1))
        return best

    def __str__(self) -> str:
        from kdtreex.render import render_tree

        return render_tree(self)


@dataclass(frozen=True, eq=False)
class KDNode:
    """Read-only view of one node, which is also the root of its subtree."""

    tree: KDTree
    handle: int

    @property
    def split_point(self) -> Point:
        return self.tree.split_points[self.handle]

    @property
    def split_axis(self) -> int:
        return int(self.tree.split_axes[self.handle])

    @property
    def dims(self) -> int:
        return self.tree.dims

    def _view(self, handle: int) -> Optional["KDNode"]:
        return None if handle == NO_NODE else KDNode(self.tree, handle)

    @property
    def left_child(self) -> Optional["KDNode"]:
        return self._view(self.tree.left_of(self.handle))

    @property
    def right_child(self) -> Optional["KDNode"]:
        return self._view(self.tree.right_of(self.handle))

    @property
    def parent(self) -> Optional["KDNode"]:
        return self._view(self.tree.parent_of(self.handle))

    @property
    def is_leaf(self) -> bool:
        return self.tree.left_of(self.handle) == NO_NODE and self.tree.right_of(self.handle) == NO_NODE

    def begin(self) -> TreeIterator:
        """Iterator over this subtree's points starting at its first in-order leaf."""

        return TreeIterator.from_subtree(self.tree, self.handle)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, KDNode):
            return NotImplemented
        return self.tree is other.tree and self.handle == other.handle

    def __hash__(self) -> int:
        return hash((id(self.tree), self.handle))


__all__ = ["KDTree", "KDNode", "NO_NODE"]
