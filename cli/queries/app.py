from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer
from typing_extensions import Annotated

from kdtreex import config as kx_config

from cli.runtime import runtime_from_args

from .baselines import run_baseline_comparisons
from .benchmark import benchmark_tree_queries, build_index, generate_workload


@dataclass
class QueryCLIOptions:
    dimension: int = 3
    tree_points: int = 8_192
    queries: int = 1_024
    k: int = 8
    radius: float = 0.5
    seed: int = 0
    precision: str | None = None
    traversal: str | None = None
    diagnostics: bool | None = None
    log_level: str | None = None
    validate: bool | None = None
    baseline: str = "none"


app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Benchmark KD-tree nearest, k-nearest and radius queries.",
)

_SHAPE_PANEL = "Benchmark shape"
_RUNTIME_PANEL = "Runtime controls"
_BASELINE_PANEL = "Baselines"


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    dimension: Annotated[
        int,
        typer.Option("--dimension", min=1, help="Dimensionality of tree/query points.", rich_help_panel=_SHAPE_PANEL),
    ] = 3,
    tree_points: Annotated[
        int,
        typer.Option("--tree-points", min=0, help="Number of points to index.", rich_help_panel=_SHAPE_PANEL),
    ] = 8_192,
    queries: Annotated[
        int,
        typer.Option("--queries", min=0, help="Number of query points.", rich_help_panel=_SHAPE_PANEL),
    ] = 1_024,
    k: Annotated[
        int,
        typer.Option("--k", help="Neighbours per k-NN query.", rich_help_panel=_SHAPE_PANEL),
    ] = 8,
    radius: Annotated[
        float,
        typer.Option("--radius", help="Radius for range queries.", rich_help_panel=_SHAPE_PANEL),
    ] = 0.5,
    seed: Annotated[
        int,
        typer.Option("--seed", help="Seed for the Gaussian point and query sets.", rich_help_panel=_SHAPE_PANEL),
    ] = 0,
    precision: Annotated[
        Optional[str],
        typer.Option("--precision", help="Stored point dtype (float32 or float64).", rich_help_panel=_RUNTIME_PANEL),
    ] = None,
    traversal: Annotated[
        Optional[str],
        typer.Option("--traversal", help="Search traversal (recursive or stack).", rich_help_panel=_RUNTIME_PANEL),
    ] = None,
    diagnostics: Annotated[
        Optional[bool],
        typer.Option(
            "--diagnostics/--no-diagnostics",
            help="Sample CPU/RSS in operation logs.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Level for the kdtreex logger.", rich_help_panel=_RUNTIME_PANEL),
    ] = None,
    validate: Annotated[
        Optional[bool],
        typer.Option(
            "--validate/--no-validate",
            help="Run the split-invariant validator after building.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    baseline: Annotated[
        str,
        typer.Option("--baseline", help="Comparison baseline: none or brute.", rich_help_panel=_BASELINE_PANEL),
    ] = "none",
) -> None:
    options = QueryCLIOptions(
        dimension=dimension,
        tree_points=tree_points,
        queries=queries,
        k=k,
        radius=radius,
        seed=seed,
        precision=precision,
        traversal=traversal,
        diagnostics=diagnostics,
        log_level=log_level,
        validate=validate,
        baseline=baseline,
    )
    ctx.obj = options
    if ctx.invoked_subcommand is None:
        run_queries(options)


def run_queries(options: QueryCLIOptions) -> None:
    args = options
    if args.baseline not in {"none", "brute"}:
        raise typer.BadParameter("--baseline must be 'none' or 'brute'.")

    kx_config.configure_runtime(runtime_from_args(args))
    try:
        points, queries = generate_workload(
            dimension=args.dimension,
            tree_points=args.tree_points,
            query_count=args.queries,
            seed=args.seed,
        )
        tree, build_seconds = build_index(points)
        typer.echo(
            f"kdtree | build={build_seconds:.4f}s points={len(tree)} "
            f"dimension={tree.dimension} depth={tree.data.stats.depth}"
        )
        if args.validate:
            typer.echo(f"kdtree | validate={'ok' if tree.validate() else 'FAILED'}")

        results = benchmark_tree_queries(
            tree,
            queries,
            k=args.k,
            radius=args.radius,
            build_seconds=build_seconds,
        )
        for result in results:
            typer.echo(
                f"kdtree[{result.label}] | queries={result.queries} "
                f"time={result.elapsed_seconds:.4f}s "
                f"latency={result.latency_ms:.4f}ms "
                f"throughput={result.queries_per_second:,.1f} q/s"
            )

        knn_latency = results[0].latency_ms
        for comparison in run_baseline_comparisons(
            tree, points, queries, k=args.k, mode=args.baseline
        ):
            slowdown = (
                comparison.result.latency_ms / knn_latency if knn_latency else float("inf")
            )
            typer.echo(
                f"baseline[{comparison.name}] | build={comparison.build_seconds:.4f}s "
                f"time={comparison.result.elapsed_seconds:.4f}s "
                f"latency={comparison.result.latency_ms:.4f}ms "
                f"slowdown={slowdown:.3f}x mismatches={comparison.mismatches}"
            )
    finally:
        kx_config.reset_runtime_config_cache()


def main() -> None:
    app()


__all__ = ["QueryCLIOptions", "app", "main", "run_queries"]
