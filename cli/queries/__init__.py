from __future__ import annotations

from .app import QueryCLIOptions, app, main, run_queries
from .benchmark import QueryBenchmarkResult, _build_tree, benchmark_nearest_latency, time_query

__all__ = [
    "QueryBenchmarkResult",
    "_build_tree",
    "benchmark_nearest_latency",
    "time_query",
    "QueryCLIOptions",
    "app",
    "run_queries",
    "main",
]
