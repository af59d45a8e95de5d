"""
Tests for the statistics engine.

Tests cover:
- Per-tree metrics
- Population mean and variance, including the empty/singleton defaults
- Summary models
"""

import random

import pytest

from tests.utils.trees import build_tree, chain_tree
from treegen.core import statistics as stats
from treegen.core.errors import StructuralInvariantViolation
from treegen.core.statistics import Metric, average, variance
from treegen.core.tree import Tree, Vertex


class TestTreeMetrics:
    """Tests for single-tree metrics."""

    def test_star_tree(self, star_tree):
        assert stats.vertex_count(star_tree) == 4
        assert stats.leaves_count(star_tree) == 3
        assert stats.height(star_tree) == 1
        assert stats.alpha(star_tree) == pytest.approx(4 / 3)

    def test_mean_out_degree_counts_leaves(self, star_tree):
        """Three edges over four vertices."""
        assert stats.mean_out_degree(star_tree) == pytest.approx(0.75)
        assert stats.mean_for_edges(star_tree) == stats.mean_out_degree(star_tree)

    def test_mean_out_degree_of_generated_tree(self, fixed_tree):
        assert stats.mean_out_degree(fixed_tree) == pytest.approx(17 / 18)

    def test_single_vertex_tree(self):
        """A lone root is its own leaf."""
        tree = chain_tree(1)

        assert stats.leaves_count(tree) == 1
        assert stats.alpha(tree) == 1.0
        assert stats.height(tree) == 0

    def test_alpha_guards_missing_leaves(self):
        tree = Tree(vertices=[], edges=[])

        with pytest.raises(StructuralInvariantViolation):
            stats.alpha(tree)

    def test_metric_enum_is_callable(self, fixed_tree):
        assert Metric.VERTEX_COUNT(fixed_tree) == 18.0
        assert Metric.LEAF_COUNT(fixed_tree) == 11.0
        assert Metric.HEIGHT(fixed_tree) == 3.0
        assert Metric.ALPHA(fixed_tree) == pytest.approx(18 / 11)


def _population(sizes):
    return [chain_tree(n) for n in sizes]


class TestAggregates:
    """Tests for population mean and variance."""

    def test_worked_example(self):
        """Vertex counts [10, 12, 11, 13, 10]: mean 11.2, population variance 1.36."""
        trees = _population([10, 12, 11, 13, 10])

        assert average(Metric.VERTEX_COUNT, trees) == pytest.approx(11.2)
        assert variance(Metric.VERTEX_COUNT, trees) == pytest.approx(1.36)

    @pytest.mark.parametrize("metric", list(Metric))
    def test_empty_population_defaults(self, metric):
        assert average(metric, []) == 0.0
        assert variance(metric, []) == 0.0

    @pytest.mark.parametrize("metric", list(Metric))
    def test_singleton_variance_is_zero(self, metric, fixed_tree):
        assert variance(metric, [fixed_tree]) == 0.0
        assert average(metric, [fixed_tree]) == pytest.approx(metric(fixed_tree))

    @pytest.mark.parametrize("metric", list(Metric))
    def test_order_independent(self, metric):
        from treegen.core.config import BuildMode
        from treegen.core.tree import generate

        trees = [generate(BuildMode.RANDOM, 4, 60, rng=random.Random(s)) for s in range(12)]
        shuffled = list(trees)
        random.Random(5).shuffle(shuffled)

        assert variance(metric, shuffled) == pytest.approx(variance(metric, trees))
        assert average(metric, shuffled) == pytest.approx(average(metric, trees))

    def test_custom_callable_metric(self):
        trees = _population([2, 4])

        assert average(stats.mean_out_degree, trees) == pytest.approx((1 / 2 + 3 / 4) / 2)

    def test_accepts_generators(self):
        assert average(Metric.HEIGHT, (chain_tree(n) for n in (3, 5))) == pytest.approx(3.0)

    def test_mean_for_alpha(self):
        trees = [build_tree({1: 0, 2: 1, 3: 1}), chain_tree(4)]

        assert stats.mean_for_alpha(trees) == pytest.approx((3 / 2 + 4) / 2)

    def test_metric_errors_propagate(self):
        """Failures inside a metric are not turned into defaults."""
        broken = Tree(vertices=[Vertex(number=1, parent=0)], edges=[])

        def failing(tree):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            average(failing, [broken])


class TestSummaries:
    """Tests for summary models."""

    def test_summarize_tree(self, fixed_tree):
        summary = stats.summarize_tree(fixed_tree, index=3)

        assert summary.index == 3
        assert summary.vertex_count == 18
        assert summary.leaf_count == 11
        assert summary.height == 3
        assert summary.alpha == pytest.approx(18 / 11)

    def test_summarize_population(self):
        trees = _population([10, 12, 11, 13, 10])
        summary = stats.summarize_population(trees)

        assert summary.size == 5
        assert summary.average_vertex_count == pytest.approx(11.2)
        assert summary.variance_vertex_count == pytest.approx(1.36)
        assert summary.average_leaf_count == 1.0
        assert summary.variance_leaf_count == 0.0
        assert summary.average_height == pytest.approx(10.2)
        assert summary.mean_alpha == pytest.approx(summary.average_alpha)

    def test_summarize_empty_population(self):
        summary = stats.summarize_population([])

        assert summary.size == 0
        assert summary.average_alpha == 0.0
        assert summary.variance_height == 0.0
