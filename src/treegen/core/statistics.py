"""
Statistics engine.

Pure functions over already-built trees:
- per-tree metrics: vertex_count, leaves_count, height, alpha, mean_out_degree
- population aggregates: average and (population) variance of a metric

An empty population yields 0.0 for both aggregates; a single tree has
variance 0.0.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, List, Sequence, Union

import numpy as np
from pydantic import BaseModel

from treegen.core.errors import DegenerateAggregateInput, StructuralInvariantViolation
from treegen.core.tree.models import Tree

logger = logging.getLogger(__name__)

DEFAULT_RESULT = 0.0

# =============================================================================
# Per-tree metrics
# =============================================================================


def vertex_count(tree: Tree) -> int:
    return tree.vertex_count


def leaves_count(tree: Tree) -> int:
    return len(tree.leaves())


def height(tree: Tree) -> int:
    return tree.height


def alpha(tree: Tree) -> float:
    """Branching index: total vertices per leaf."""
    leaves = leaves_count(tree)
    if leaves == 0:
        raise StructuralInvariantViolation("tree has no leaves; alpha is undefined")
    return tree.vertex_count / leaves


def mean_out_degree(tree: Tree) -> float:
    """Mean number of direct children over all vertices, leaves included."""
    if tree.vertex_count == 0:
        return DEFAULT_RESULT
    degrees = np.fromiter((tree.child_count(v.number) for v in tree.vertices), dtype=float)
    return float(degrees.mean())


mean_for_edges = mean_out_degree


class Metric(str, Enum):
    """Per-tree metrics supported by the population aggregates."""

    VERTEX_COUNT = "vertex_count"
    LEAF_COUNT = "leaf_count"
    HEIGHT = "height"
    ALPHA = "alpha"

    def __call__(self, tree: Tree) -> float:
        return float(_METRIC_FUNCTIONS[self](tree))


_METRIC_FUNCTIONS = {
    Metric.VERTEX_COUNT: vertex_count,
    Metric.LEAF_COUNT: leaves_count,
    Metric.HEIGHT: height,
    Metric.ALPHA: alpha,
}

MetricLike = Union[Metric, Callable[[Tree], float]]

# =============================================================================
# Population aggregates
# =============================================================================


def _series(metric: MetricLike, trees: Iterable[Tree]) -> np.ndarray:
    values = np.fromiter((float(metric(t)) for t in trees), dtype=float)
    if values.size == 0:
        raise DegenerateAggregateInput(f"no trees to aggregate {_metric_name(metric)} over")
    return values


def _metric_name(metric: MetricLike) -> str:
    return metric.value if isinstance(metric, Metric) else getattr(metric, "__name__", repr(metric))


def average(metric: MetricLike, trees: Iterable[Tree]) -> float:
    """Arithmetic mean of a metric across trees; 0.0 for an empty population."""
    try:
        return float(_series(metric, trees).mean())
    except DegenerateAggregateInput as exc:
        logger.debug("%s; returning %s", exc, DEFAULT_RESULT)
        return DEFAULT_RESULT


def variance(metric: MetricLike, trees: Iterable[Tree]) -> float:
    """Population variance (divides by N) of a metric; 0.0 for an empty population."""
    try:
        return float(_series(metric, trees).var(ddof=0))
    except DegenerateAggregateInput as exc:
        logger.debug("%s; returning %s", exc, DEFAULT_RESULT)
        return DEFAULT_RESULT


def mean_for_alpha(trees: Iterable[Tree]) -> float:
    return average(Metric.ALPHA, trees)


# =============================================================================
# Summaries
# =============================================================================


class TreeSummary(BaseModel):
    """Scalar descriptors of one tree in a population."""

    index: int
    vertex_count: int
    leaf_count: int
    height: int
    alpha: float


class PopulationSummary(BaseModel):
    """Aggregate descriptors of a population."""

    size: int
    average_vertex_count: float
    average_leaf_count: float
    average_height: float
    average_alpha: float
    variance_vertex_count: float
    variance_leaf_count: float
    variance_height: float
    variance_alpha: float
    mean_alpha: float


def summarize_tree(tree: Tree, index: int = 1) -> TreeSummary:
    return TreeSummary(
        index=index,
        vertex_count=vertex_count(tree),
        leaf_count=leaves_count(tree),
        height=height(tree),
        alpha=alpha(tree),
    )


def summarize_population(trees: Sequence[Tree]) -> PopulationSummary:
    population: List[Tree] = list(trees)
    return PopulationSummary(
        size=len(population),
        average_vertex_count=average(Metric.VERTEX_COUNT, population),
        average_leaf_count=average(Metric.LEAF_COUNT, population),
        average_height=average(Metric.HEIGHT, population),
        average_alpha=average(Metric.ALPHA, population),
        variance_vertex_count=variance(Metric.VERTEX_COUNT, population),
        variance_leaf_count=variance(Metric.LEAF_COUNT, population),
        variance_height=variance(Metric.HEIGHT, population),
        variance_alpha=variance(Metric.ALPHA, population),
        mean_alpha=mean_for_alpha(population),
    )


__all__ = [
    "DEFAULT_RESULT",
    "Metric",
    "PopulationSummary",
    "TreeSummary",
    "alpha",
    "average",
    "height",
    "leaves_count",
    "mean_for_alpha",
    "mean_for_edges",
    "mean_out_degree",
    "summarize_population",
    "summarize_tree",
    "variance",
    "vertex_count",
]
