from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

import numpy as np
from numpy.random import default_rng

from kdtreex.algo import build_tree
from kdtreex.core import KDTree, Point
from kdtreex.datasets import gaussian_points
from kdtreex.queries import brute_force_nearest, pruned_nearest

_QUERY_FUNCTIONS: Dict[str, Callable[[KDTree, Point], Point]] = {
    "pruned": pruned_nearest,
    "brute_force": brute_force_nearest,
}


@dataclass(frozen=True)
class QueryBenchmarkResult:
    method: str
    elapsed_seconds: float
    queries: int
    latency_ms: float
    queries_per_second: float
    build_seconds: float | None = None


def _build_tree(
    *,
    dims: int,
    tree_points: int,
    seed: int,
    selection: str | None = None,
    prebuilt_points: np.ndarray | None = None,
) -> Tuple[KDTree, float]:
    if prebuilt_points is not None:
        points_np = np.asarray(prebuilt_points, dtype=np.float64)
    else:
        points_np = gaussian_points(default_rng(seed), tree_points, dims, dtype=np.float64)
    start = time.perf_counter()
    tree = build_tree(points_np, selection=selection)
    build_seconds = time.perf_counter() - start
    return tree, build_seconds


def time_query(
    query: Callable[[KDTree, Point], Point], tree: KDTree, reference: Point
) -> Tuple[Point, float]:
    """Run one query and return its result with the elapsed microseconds."""

    start = time.perf_counter()
    result = query(tree, reference)
    elapsed_us = (time.perf_counter() - start) * 1e6
    return result, elapsed_us


def benchmark_nearest_latency(
    *,
    dims: int,
    tree_points: int,
    query_count: int,
    seed: int,
    method: str = "pruned",
    selection: str | None = None,
    prebuilt_tree: KDTree | None = None,
    prebuilt_queries: np.ndarray | None = None,
    build_seconds: float | None = None,
) -> Tuple[KDTree, QueryBenchmarkResult]:
    if method not in _QUERY_FUNCTIONS:
        raise ValueError(f"Unknown method '{method}'. Expected one of {tuple(_QUERY_FUNCTIONS)}.")
    query = _QUERY_FUNCTIONS[method]

    if prebuilt_tree is None:
        tree, tree_build_seconds = _build_tree(
            dims=dims,
            tree_points=tree_points,
            seed=seed,
            selection=selection,
        )
    else:
        tree = prebuilt_tree
        tree_build_seconds = build_seconds

    if prebuilt_queries is None:
        queries_np = gaussian_points(default_rng(seed + 1), query_count, dims, dtype=np.float64)
    else:
        queries_np = np.asarray(prebuilt_queries, dtype=np.float64)
    references = [Point(row) for row in queries_np]

    start = time.perf_counter()
    for reference in references:
        query(tree, reference)
    elapsed = time.perf_counter() - start
    count = len(references)
    qps = count / elapsed if elapsed > 0 else float("inf")
    latency = (elapsed / count) * 1e3 if count else 0.0
    return tree, QueryBenchmarkResult(
        method=method,
        elapsed_seconds=elapsed,
        queries=count,
        latency_ms=latency,
        queries_per_second=qps,
        build_seconds=tree_build_seconds,
    )


__all__ = [
    "QueryBenchmarkResult",
    "_build_tree",
    "benchmark_nearest_latency",
    "time_query",
]
