"""Build SheetTable records from trees and populations."""

from __future__ import annotations

from typing import Sequence

from treegen.core import statistics as stats
from treegen.core.tree.models import Tree
from treegen.export.records import SheetTable

VERTEX_COLUMNS = ["Vertex", "Parent"]
PARAMETER_COLUMNS = ["Parameter", "Value"]
POPULATION_COLUMNS = ["Tree", "Vertices", "Leaves", "Height", "Alpha"]


def vertex_table(tree: Tree, leaves_only: bool = False) -> SheetTable:
    """(vertexNumber, parentNumber) rows, ordered by vertex number."""
    vertices = tree.leaves() if leaves_only else tree.sorted_vertices()
    return SheetTable(
        title="Leaf vertices" if leaves_only else "All vertices",
        columns=VERTEX_COLUMNS,
        rows=[[v.number, v.parent] for v in vertices],
    )


def tree_parameters(tree: Tree) -> SheetTable:
    return SheetTable(
        title="Generated tree parameters",
        columns=PARAMETER_COLUMNS,
        rows=[
            ["Height", stats.height(tree)],
            ["Vertex count", stats.vertex_count(tree)],
            ["Leaf count", stats.leaves_count(tree)],
            ["Alpha", stats.alpha(tree)],
            ["Mean outgoing edges", stats.mean_out_degree(tree)],
        ],
    )


def population_parameters(trees: Sequence[Tree]) -> SheetTable:
    summary = stats.summarize_population(trees)
    return SheetTable(
        title="Generated population parameters",
        columns=PARAMETER_COLUMNS,
        rows=[
            ["Trees", summary.size],
            ["Average vertex count", summary.average_vertex_count],
            ["Average leaf count", summary.average_leaf_count],
            ["Average height", summary.average_height],
            ["Average alpha", summary.average_alpha],
            ["Vertex count variance", summary.variance_vertex_count],
            ["Leaf count variance", summary.variance_leaf_count],
            ["Height variance", summary.variance_height],
            ["Alpha variance", summary.variance_alpha],
            ["Alpha mean", summary.mean_alpha],
        ],
    )


def population_table(trees: Sequence[Tree]) -> SheetTable:
    """(treeIndex, vertexCount, leafCount, height, alpha) rows, 1-based in population order."""
    rows = []
    for index, tree in enumerate(trees, start=1):
        s = stats.summarize_tree(tree, index)
        rows.append([s.index, s.vertex_count, s.leaf_count, s.height, s.alpha])
    return SheetTable(title="Generated trees", columns=POPULATION_COLUMNS, rows=rows)


__all__ = [
    "PARAMETER_COLUMNS",
    "POPULATION_COLUMNS",
    "VERTEX_COLUMNS",
    "population_parameters",
    "population_table",
    "tree_parameters",
    "vertex_table",
]
