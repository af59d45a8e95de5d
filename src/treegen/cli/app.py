"""
treegen CLI: generate branching-rule trees, compute statistics, export reports.

Commands:
- tree: build one random or fixed tree and print its parameters
- population: build many trees in parallel and print aggregate statistics
- report: the full run (random tree, fixed tree, population) into one workbook
"""

from __future__ import annotations

import random
from typing import List, Optional

import typer
from rich.console import Console

from treegen.cli.formatters import build_config_table, build_sheet_table
from treegen.cli.load_helpers import load_config_or_exit
from treegen.cli.paths import resolve_workbook_path
from treegen.core.config import BuildMode, GenerationConfig
from treegen.core.errors import GenerationTimeout, TreeGenError
from treegen.core.population import generate_population
from treegen.core.tree import Tree, create_fixed_tree, create_random_tree, generate_from_config
from treegen.export import (
    ExportError,
    YamlWorkbookSink,
    export_population,
    export_single_tree,
    population_parameters,
    population_table,
    tree_parameters,
    vertex_table,
)
from treegen.utils.logging import setup_logging
from treegen.visualizer import build_tree_view

app = typer.Typer(help="treegen CLI: generate branching-rule trees and report their statistics.")
console = Console()

TABLE_ROW_LIMIT = 50


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    setup_logging(verbose)


def _render_tree(tree: Tree, show: bool, with_vertices: bool) -> None:
    console.print(build_sheet_table(tree_parameters(tree)))
    if with_vertices:
        console.print(build_sheet_table(vertex_table(tree), limit=TABLE_ROW_LIMIT))
        console.print(build_sheet_table(vertex_table(tree, leaves_only=True), limit=TABLE_ROW_LIMIT))
    if show:
        console.print(build_tree_view(tree))


def _export(workbook: str | None, writer, *args) -> Optional[List[str]]:
    if workbook is None:
        return None
    path = resolve_workbook_path(workbook)
    try:
        sheets = writer(YamlWorkbookSink(path), *args)
    except ExportError as exc:
        console.print(f"[red]Export failed:[/red] {exc}")
        raise typer.Exit(code=1)
    console.print(f"[green]Exported[/green] {len(sheets)} sheet(s) to {path}")
    return sheets


def _run_population(config: GenerationConfig, count: int | None = None) -> List[Tree]:
    try:
        with console.status(f"Generating {count or config.graphs_count} tree(s)..."):
            return generate_population(config, count)
    except GenerationTimeout as exc:
        console.print(f"[red]Generation timed out:[/red] {exc}")
        raise typer.Exit(code=1)
    except TreeGenError as exc:
        console.print(f"[red]Generation failed:[/red] {exc}")
        raise typer.Exit(code=1)


@app.command("tree")
def tree_command(
    mode: Optional[BuildMode] = typer.Option(None, "--mode", case_sensitive=False, help="Branching policy"),
    edges: Optional[int] = typer.Option(None, "--edges", "-m", help="Maximum branching per vertex"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Vertex limit (stopping rule)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    config_path: Optional[str] = typer.Option(None, "--config", help="YAML configuration file"),
    vertices: bool = typer.Option(False, "--vertices/--no-vertices", help="Print vertex tables"),
    show: bool = typer.Option(False, "--show", help="Print the tree structure"),
    workbook: Optional[str] = typer.Option(None, "--workbook", "-w", help="Export to outputs/reports/<name>.yaml"),
    title: str = typer.Option("Tree", "--title", help="Sheet name prefix"),
    verbose_load: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Generate one tree and print its parameters."""
    config = load_config_or_exit(
        config_path,
        console=console,
        verbose_errors=verbose_load,
        build_mode=mode,
        edges_count=edges,
        vertex_limit=limit,
        seed=seed,
    )
    tree = generate_from_config(config, random.Random(config.seed))

    console.print(
        f"[bold]{config.build_mode.value.capitalize()} tree[/bold] "
        f"(m={config.edges_count}, N={config.vertex_limit}): {tree.vertex_count} vertices"
    )
    _render_tree(tree, show, vertices)
    _export(workbook, export_single_tree, title, tree)


@app.command("population")
def population_command(
    count: Optional[int] = typer.Option(None, "--count", "-r", help="Number of trees"),
    mode: Optional[BuildMode] = typer.Option(None, "--mode", case_sensitive=False, help="Branching policy"),
    edges: Optional[int] = typer.Option(None, "--edges", "-m", help="Maximum branching per vertex"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Vertex limit (stopping rule)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Master random seed"),
    workers: Optional[int] = typer.Option(None, "--workers", help="Parallel generation workers"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Deadline for the whole batch (seconds)"),
    config_path: Optional[str] = typer.Option(None, "--config", help="YAML configuration file"),
    table: bool = typer.Option(False, "--table", help="Print the per-tree table"),
    workbook: Optional[str] = typer.Option(None, "--workbook", "-w", help="Export to outputs/reports/<name>.yaml"),
    title: str = typer.Option("Population", "--title", help="Sheet name prefix"),
    verbose_load: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Generate a population of trees and print aggregate statistics."""
    config = load_config_or_exit(
        config_path,
        console=console,
        verbose_errors=verbose_load,
        graphs_count=count,
        build_mode=mode,
        edges_count=edges,
        vertex_limit=limit,
        seed=seed,
        workers=workers,
        timeout=timeout,
    )
    trees = _run_population(config)

    console.print(f"[bold]Population[/bold]: {len(trees)} {config.build_mode.value} tree(s)")
    console.print(build_sheet_table(population_parameters(trees)))
    if table:
        console.print(build_sheet_table(population_table(trees), limit=TABLE_ROW_LIMIT))
    _export(workbook, export_population, title, trees)


@app.command("report")
def report_command(
    workbook: str = typer.Option("report", "--workbook", "-w", help="Workbook name under outputs/reports"),
    config_path: Optional[str] = typer.Option(None, "--config", help="YAML configuration file"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    show: bool = typer.Option(False, "--show", help="Print the single-tree structures"),
    verbose_load: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Random tree, fixed tree and a random population, exported to one workbook."""
    config = load_config_or_exit(config_path, console=console, verbose_errors=verbose_load, seed=seed)
    console.print(build_config_table(config))

    random_tree = create_random_tree(config)
    console.print("\n[bold]Lab 2[/bold]: random tree")
    _render_tree(random_tree, show, with_vertices=False)
    _export(workbook, export_single_tree, "Lab 2", random_tree)

    fixed_tree = create_fixed_tree(config)
    console.print("\n[bold]Lab 3[/bold]: fixed tree")
    _render_tree(fixed_tree, show, with_vertices=False)
    _export(workbook, export_single_tree, "Lab 3", fixed_tree)

    population_config = config.with_overrides(build_mode=BuildMode.RANDOM)
    trees = _run_population(population_config)
    console.print(f"\n[bold]Lab 4[/bold]: {len(trees)} random trees")
    console.print(build_sheet_table(population_parameters(trees)))
    _export(workbook, export_population, "Lab 4", trees)


__all__ = ["app"]
