#!/usr/bin/env python
"""Quick-start guide for kdtreex library usage.

Run with: python -m kdtreex

This module intentionally avoids importing kdtreex internals to provide
a fast, clean startup for displaying help text.
"""

from __future__ import annotations

QUICKSTART = """\
================================================================================
                                  KDTREEX
           Balanced k-d tree for exact nearest-neighbour queries
================================================================================

BASIC USAGE
-----------
    from kdtreex import Point, build_tree, brute_force_nearest, pruned_nearest

    points = [Point([2, 3]), Point([5, 4]), Point([9, 6]),
              Point([4, 7]), Point([8, 1]), Point([7, 2])]

    # Construction takes ownership: each Point is moved into the tree
    # and the list is cleared.
    tree = build_tree(points)

    pruned_nearest(tree, Point([9, 2]))        # Point([8, 1])
    brute_force_nearest(tree, Point([9, 2]))   # same distance, linear scan

ITERATION
---------
    for point in tree:            # in-order, leftmost leaf first
        print(point)              # "(2, 3)"

    it = tree.begin()
    while it != tree.end():
        print(it.deref())
        it.advance()

    print(tree)                   # sideways rendering, right subtree on top

FACADE
------
    from kdtreex import KDIndex

    index = KDIndex(selection="partition").fit(numpy_rows)
    point, sq_dist = index.nearest([0.0, 0.0], return_distance=True)

CONFIGURATION (environment)
---------------------------
    KDTREEX_SELECTION=partition|sort      median selection per level
    KDTREEX_SEARCH=pruned|brute_force     default for nearest_neighbor()
    KDTREEX_PRECISION=float64|float32|int64|int32
    KDTREEX_LOG_LEVEL=INFO
    KDTREEX_ENABLE_DIAGNOSTICS=1

COMMAND LINE
------------
    python -m cli.queries --example --reference 9 --reference 2
    python -m cli.queries --points 20 --dims 3 --seed 7 -r 0 -r 0 -r 0
    python -m cli.queries benchmark --tree-points 65536 --dims 3

================================================================================
"""


def main() -> None:
    """Print quick-start guide."""
    print(QUICKSTART)


if __name__ == "__main__":
    main()
