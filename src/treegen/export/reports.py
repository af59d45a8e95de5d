"""Write the standard single-tree and population reports to a sink."""

from __future__ import annotations

from typing import List, Sequence

from treegen.core.tree.models import Tree
from treegen.export.sinks import ReportSink
from treegen.export.tables import population_parameters, population_table, tree_parameters, vertex_table


def export_single_tree(sink: ReportSink, prefix: str, tree: Tree) -> List[str]:
    """Parameters, all vertices and leaf vertices of one tree. Returns the sheet names."""
    sheets = [
        (f"{prefix} - Parameters", tree_parameters(tree)),
        (f"{prefix} - All vertices", vertex_table(tree)),
        (f"{prefix} - Leaf vertices", vertex_table(tree, leaves_only=True)),
    ]
    for name, table in sheets:
        sink.write(name, table)
    return [name for name, _ in sheets]


def export_population(sink: ReportSink, prefix: str, trees: Sequence[Tree]) -> List[str]:
    """Aggregate parameters and the per-tree table of a population. Returns the sheet names."""
    sheets = [
        (f"{prefix} - Parameters", population_parameters(trees)),
        (f"{prefix} - Trees", population_table(trees)),
    ]
    for name, table in sheets:
        sink.write(name, table)
    return [name for name, _ in sheets]


__all__ = ["export_population", "export_single_tree"]
