from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from numpy.random import default_rng
import typer
from typing_extensions import Annotated

from kdtreex.algo import build_tree
from kdtreex.core import KDTree, Point
from kdtreex.datasets import example_points, random_points
from kdtreex.errors import KDTreeError
from kdtreex.queries import brute_force_nearest, pruned_nearest
from kdtreex.render import render_tree

from .benchmark import benchmark_nearest_latency, time_query
from .runtime import _apply_runtime_overrides, _emit_runtime_banner


@dataclass
class QueryCLIOptions:
    points: int = 10
    dims: int = 2
    seed: int | None = None
    example: bool = False
    reference: Tuple[str, ...] | None = None
    show_tree: bool = True
    selection: str | None = None
    log_level: str | None = None
    diagnostics: bool | None = None


app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Build a k-d tree and compare brute-force and pruned nearest-neighbour search.",
)

_SHAPE_PANEL = "Point set"
_QUERY_PANEL = "Query"
_RUNTIME_PANEL = "Runtime controls"
_BENCHMARK_METHODS = ("both", "pruned", "brute_force")


def _parse_coordinate(text: str) -> int | float:
    value = text.strip()
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError as exc:
        raise typer.BadParameter(f"'{text}' is not a number.") from exc


def _resolve_reference(values: Sequence[str] | None, dims: int) -> Point:
    if values:
        if len(values) != dims:
            raise typer.BadParameter(
                f"expected {dims} reference coordinates, got {len(values)}.",
                param_hint="--reference",
            )
        return Point([_parse_coordinate(value) for value in values])
    typer.echo(f"Please enter a {dims}-dimensional point to do a nearest neighbor search on:")
    coordinates = [
        _parse_coordinate(typer.prompt(f"Dimension {axis + 1}")) for axis in range(dims)
    ]
    return Point(coordinates)


def _report_tree(tree: KDTree, *, show_tree: bool) -> None:
    if show_tree:
        typer.echo("\nK-D Tree Pretty Print:")
        typer.echo(render_tree(tree))
    typer.echo("\nIn-order traversal:")
    for point in tree:
        typer.echo(str(point))


def run_queries(options: QueryCLIOptions) -> None:
    if options.example:
        points: List[Point] = example_points()
        dims = 2
    else:
        if options.points <= 0 or options.dims <= 0:
            raise typer.BadParameter("--points and --dims must both be positive.")
        points = random_points(default_rng(options.seed), options.points, options.dims)
        dims = options.dims
        typer.echo("Generated points:")
        for point in points:
            typer.echo(str(point))

    tree = build_tree(points, selection=options.selection)
    _report_tree(tree, show_tree=options.show_tree)

    reference = _resolve_reference(options.reference, dims)
    typer.echo(f"\nSearching for nearest neighbor of point {reference}")

    brute, brute_us = time_query(brute_force_nearest, tree, reference)
    typer.echo(
        f"Brute-force search returned {brute} (squared distance "
        f"{brute.distance_to(reference)}) in {brute_us:.1f} microseconds"
    )
    pruned, pruned_us = time_query(pruned_nearest, tree, reference)
    typer.echo(
        f"Pruned search returned {pruned} (squared distance "
        f"{pruned.distance_to(reference)}) in {pruned_us:.1f} microseconds"
    )


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    points: Annotated[
        int,
        typer.Option(
            "--points",
            "-n",
            help="Number of random integer points to generate.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 10,
    dims: Annotated[
        int,
        typer.Option(
            "--dims",
            "-k",
            help="Dimensionality of each generated point.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 2,
    seed: Annotated[
        Optional[int],
        typer.Option(
            "--seed",
            help="Random seed for point generation (default: fresh entropy).",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = None,
    example: Annotated[
        bool,
        typer.Option(
            "--example",
            help="Use the six-point planar example instead of random points.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = False,
    reference: Annotated[
        Optional[List[str]],
        typer.Option(
            "--reference",
            "-r",
            help="Reference coordinate; repeat once per dimension. Prompted when omitted.",
            rich_help_panel=_QUERY_PANEL,
        ),
    ] = None,
    show_tree: Annotated[
        bool,
        typer.Option(
            "--show-tree/--hide-tree",
            help="Print the sideways tree rendering.",
            rich_help_panel=_QUERY_PANEL,
        ),
    ] = True,
    selection: Annotated[
        Optional[str],
        typer.Option(
            "--selection",
            help="Median selection strategy (partition or sort).",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Override runtime log level.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    diagnostics: Annotated[
        Optional[bool],
        typer.Option(
            "--enable-diagnostics/--disable-diagnostics",
            help="Control resource polling in operation logs.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
) -> None:
    options = QueryCLIOptions(
        points=points,
        dims=dims,
        seed=seed,
        example=example,
        reference=tuple(reference) if reference else None,
        show_tree=show_tree,
        selection=selection,
        log_level=log_level,
        diagnostics=diagnostics,
    )
    ctx.obj = options
    if ctx.invoked_subcommand is None:
        try:
            _apply_runtime_overrides(
                selection=selection, log_level=log_level, diagnostics=diagnostics
            )
            run_queries(options)
        except (KDTreeError, ValueError) as exc:
            typer.echo(f"error: {exc}", err=True)
            raise typer.Exit(code=1) from exc


@app.command("benchmark")
def benchmark(
    tree_points: Annotated[
        int,
        typer.Option("--tree-points", help="Number of Gaussian points in the tree."),
    ] = 16_384,
    dims: Annotated[
        int,
        typer.Option("--dims", "-k", help="Dimensionality of tree/query points."),
    ] = 3,
    queries: Annotated[
        int,
        typer.Option("--queries", help="Number of query points per method."),
    ] = 1_024,
    seed: Annotated[
        int,
        typer.Option("--seed", help="Base random seed for point/query generation."),
    ] = 0,
    method: Annotated[
        str,
        typer.Option("--method", help="Query method to time: both, pruned or brute_force."),
    ] = "both",
    selection: Annotated[
        Optional[str],
        typer.Option("--selection", help="Median selection strategy (partition or sort)."),
    ] = None,
) -> None:
    """Time tree construction and per-query latency on Gaussian data."""

    method = method.strip().lower().replace("-", "_")
    if method not in _BENCHMARK_METHODS:
        raise typer.BadParameter(
            f"expected one of {_BENCHMARK_METHODS}, got '{method}'.", param_hint="--method"
        )
    try:
        _apply_runtime_overrides(selection=selection, log_level="WARNING")
    except ValueError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    _emit_runtime_banner()
    methods = ("pruned", "brute_force") if method == "both" else (method,)

    tree = None
    build_seconds: float | None = None
    for name in methods:
        try:
            tree, result = benchmark_nearest_latency(
                dims=dims,
                tree_points=tree_points,
                query_count=queries,
                seed=seed,
                method=name,
                selection=selection,
                prebuilt_tree=tree,
                build_seconds=build_seconds,
            )
        except (KDTreeError, ValueError) as exc:
            typer.echo(f"error: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        build_seconds = result.build_seconds
        typer.echo(
            f"[{name}] points={tree_points} dims={dims} queries={result.queries} "
            f"build_s={result.build_seconds or 0.0:.4f} latency_ms={result.latency_ms:.4f} "
            f"qps={result.queries_per_second:,.1f}"
        )


def main() -> None:
    app()


__all__ = ["QueryCLIOptions", "app", "main", "run_queries"]
