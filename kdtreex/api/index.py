from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, List, Tuple

from kdtreex.algo.build import build_tree
from kdtreex.core.point import Point
from kdtreex.core.tree import KDTree
from kdtreex.queries.nearest import nearest_neighbor


@dataclass(frozen=True)
class KDIndex:
    """Thin façade around tree construction and nearest-neighbour queries."""

    selection: str | None = None
    method: str | None = None
    tree: KDTree | None = None

    def fit(self, points: Any) -> "KDIndex":
        """Return a new index owning a tree built from ``points``."""

        tree = build_tree(points, selection=self.selection)
        return replace(self, tree=tree)

    def nearest(
        self,
        reference: Any,
        *,
        method: str | None = None,
        return_distance: bool = False,
    ) -> Point | Tuple[Point, Any]:
        tree = self._require_tree()
        return nearest_neighbor(
            tree,
            reference,
            method=method or self.method,
            return_distance=return_distance,
        )

    def points(self) -> List[Point]:
        return self._require_tree().points()

    def __len__(self) -> int:
        return 0 if self.tree is None else self.tree.num_points

    def _require_tree(self) -> KDTree:
        if self.tree is None:
            raise ValueError("KDIndex requires an existing tree; call fit() first.")
        return self.tree
