"""Export adapter: tabular records and the sinks that store them."""

from treegen.export.records import SheetTable
from treegen.export.reports import export_population, export_single_tree
from treegen.export.sinks import ExportError, ReportSink, YamlWorkbookSink
from treegen.export.tables import population_parameters, population_table, tree_parameters, vertex_table

__all__ = [
    "ExportError",
    "ReportSink",
    "SheetTable",
    "YamlWorkbookSink",
    "export_population",
    "export_single_tree",
    "population_parameters",
    "population_table",
    "tree_parameters",
    "vertex_table",
]
