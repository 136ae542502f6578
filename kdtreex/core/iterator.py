from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kdtreex.errors import OutOfRange

if TYPE_CHECKING:  # pragma: no cover - typing only
    from kdtreex.core.point import Point
    from kdtreex.core.tree import KDTree

_END = -1


class TreeIterator:
    """Forward in-order cursor over the points of a :class:`KDTree`.

    The cursor holds a single node handle (``-1`` is the end position) and
    moves using only the tree's child and parent links, so it needs no
    auxiliary stack. It also satisfies the Python iterator protocol, which
    yields the remaining points and leaves the cursor at the end position.

    The cursor never walks above ``boundary``, the root of the subtree it
    was started from.
    """

    __slots__ = ("_tree", "_handle", "_boundary")

    def __init__(self, tree: "KDTree", handle: int = _END, *, boundary: int | None = None) -> None:
        self._tree = tree
        self._handle = int(handle)
        self._boundary = tree.root_handle if boundary is None else int(boundary)

    @classmethod
    def from_subtree(cls, tree: "KDTree", handle: int) -> "TreeIterator":
        """Position a cursor on the first leaf of the subtree rooted at ``handle``.

        Descends preferring the left child, then the right child, until a
        node without children is reached.
        """

        current = int(handle)
        while True:
            left = tree.left_of(current)
            if left != _END:
                current = left
                continue
            right = tree.right_of(current)
            if right != _END:
                current = right
                continue
            break
        return cls(tree, current, boundary=handle)

    @property
    def handle(self) -> int:
        return self._handle

    @property
    def at_end(self) -> bool:
        return self._handle == _END

    def deref(self) -> "Point":
        if self._handle == _END:
            raise OutOfRange("Cannot dereference an iterator at the end position.")
        return self._tree.split_points[self._handle]

    def advance(self) -> "TreeIterator":
        """Step to the in-order successor and return ``self``."""

        if self._handle == _END:
            raise OutOfRange("Cannot advance an iterator past the end position.")
        tree = self._tree
        current = self._handle
        right = tree.right_of(current)
        if right != _END:
            current = right
            left = tree.left_of(current)
            while left != _END:
                current = left
                left = tree.left_of(current)
            self._handle = current
            return self

        parent = tree.parent_of(current)
        while current != self._boundary and parent != _END and tree.right_of(parent) == current:
            current = parent
            parent = tree.parent_of(current)
        self._handle = _END if current == self._boundary else parent
        return self

    def copy(self) -> "TreeIterator":
        return TreeIterator(self._tree, self._handle, boundary=self._boundary)

    def __iter__(self) -> "TreeIterator":
        return self

    def __next__(self) -> "Point":
        if self._handle == _END:
            raise StopIteration
        point = self._tree.split_points[self._handle]
        self.advance()
        return point

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TreeIterator):
            return NotImplemented
        if self._handle == _END and other._handle == _END:
            return True
        return self._tree is other._tree and self._handle == other._handle

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        position = "end" if self._handle == _END else str(self._handle)
        return f"TreeIterator(handle={position})"


__all__ = ["TreeIterator"]
