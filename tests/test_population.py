"""
Tests for populations and parallel batch generation.

Tests cover:
- TreePopulation under concurrent writers
- Request-order output and seeded reproducibility
- Cancellation, deadlines and task failures
- Topping up an existing population
"""

import random
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from tests.utils.trees import chain_tree
from treegen.core import population as population_module
from treegen.core.config import BuildMode, GenerationConfig
from treegen.core.errors import ConfigurationError, GenerationCancelled, GenerationTimeout
from treegen.core.population import (
    TreePopulation,
    derive_seeds,
    fill_population,
    generate_population,
    submit_population,
)
from treegen.core.tree import generate


@pytest.fixture
def config() -> GenerationConfig:
    return GenerationConfig(edges_count=4, vertex_limit=40, graphs_count=12, seed=11, workers=4)


@pytest.fixture
def blocked_executor():
    """Single-worker executor whose worker is held until the test releases it."""
    release = threading.Event()
    executor = ThreadPoolExecutor(max_workers=1)
    executor.submit(release.wait)
    yield executor
    release.set()
    executor.shutdown(wait=True)


class TestTreePopulation:
    """Tests for the population container."""

    def test_append_and_index(self):
        population = TreePopulation()
        population.append(chain_tree(2))
        population.extend([chain_tree(3), chain_tree(4)])

        assert len(population) == 3
        assert population[1].vertex_count == 3
        assert population.last().vertex_count == 4
        assert [t.vertex_count for t in population] == [2, 3, 4]

    def test_empty_last(self):
        assert TreePopulation().last() is None

    def test_snapshot_is_detached(self):
        population = TreePopulation([chain_tree(2)])
        snapshot = population.snapshot()
        population.append(chain_tree(3))

        assert len(snapshot) == 1
        assert len(population) == 2

    def test_concurrent_appends(self):
        """Appends from many threads are all kept."""
        population = TreePopulation()
        tree = chain_tree(3)

        def writer():
            for _ in range(200):
                population.append(tree)

        threads = [threading.Thread(target=writer) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(population) == 1600


class TestBatchGeneration:
    """Tests for submit_population / generate_population."""

    def test_count_defaults_to_graphs_count(self, config):
        trees = generate_population(config)

        assert len(trees) == 12
        assert all(t.vertex_count >= 40 for t in trees)

    def test_request_order(self, config):
        """Tree i is built from seed i of the master sequence, whatever thread ran it."""
        trees = generate_population(config, 20)
        expected = [
            generate(BuildMode.RANDOM, 4, 40, rng=random.Random(seed)) for seed in derive_seeds(config.seed, 20)
        ]

        assert trees == expected

    def test_seeded_batches_are_reproducible(self, config):
        assert generate_population(config, 8) == generate_population(config, 8)

    def test_different_seeds_differ(self, config):
        other = config.with_overrides(seed=12)

        assert generate_population(config, 8) != generate_population(other, 8)

    def test_task_seeds_are_distinct(self):
        seeds = derive_seeds(3, 50)

        assert len(set(seeds)) == 50

    def test_negative_count(self, config):
        with pytest.raises(ConfigurationError, match="count"):
            submit_population(config, -1)

    def test_zero_trees(self, config):
        assert generate_population(config, 0) == []

    def test_fixed_mode_population(self, config):
        trees = generate_population(config.with_overrides(build_mode=BuildMode.FIXED), 3)

        assert trees[0] == trees[1] == trees[2]

    def test_external_executor(self, config):
        with ThreadPoolExecutor(max_workers=2) as executor:
            job = submit_population(config, 5, executor=executor)
            trees = job.result()

        assert len(trees) == 5
        assert job.done()

    def test_join_into_preserves_order(self, config):
        population = TreePopulation([chain_tree(2)])
        job = submit_population(config, 4)
        job.join_into(population)

        assert len(population) == 5
        assert population[0].vertex_count == 2
        assert list(population)[1:] == generate_population(config, 4)


class TestCancellation:
    """Tests for cancellation and deadlines."""

    def test_cancel_before_start(self, config, blocked_executor):
        job = submit_population(config, 5, executor=blocked_executor)
        job.cancel()

        assert job.cancelled
        with pytest.raises(GenerationCancelled):
            job.result(timeout=5)

    def test_external_cancel_event(self, config, blocked_executor):
        token = threading.Event()
        job = submit_population(config, 3, executor=blocked_executor, cancel_event=token)
        token.set()

        with pytest.raises(GenerationCancelled):
            job.result(timeout=5)

    def test_cancel_after_completion_keeps_trees(self, config):
        """Cancelling a finished job drops nothing."""
        with ThreadPoolExecutor(max_workers=2) as executor:
            job = submit_population(config, 3, executor=executor)
        assert job.done()

        job.cancel()

        assert job.cancelled
        assert job.result(timeout=5) == generate_population(config, 3)

    def test_deadline(self, config, blocked_executor):
        job = submit_population(config, 3, executor=blocked_executor)

        with pytest.raises(GenerationTimeout):
            job.result(timeout=0.05)
        assert job.cancelled

    def test_config_timeout_is_default_deadline(self, config, blocked_executor):
        job = submit_population(config.with_overrides(timeout=0.05), 2, executor=blocked_executor)

        with pytest.raises(GenerationTimeout):
            job.result()

    def test_task_failure_propagates(self, config, monkeypatch):
        def explode(cfg, rng):
            raise ValueError("generator failed")

        monkeypatch.setattr(population_module, "generate_from_config", explode)
        job = submit_population(config, 3)

        with pytest.raises(ValueError, match="generator failed"):
            job.result(timeout=5)


class TestFillPopulation:
    """Tests for topping up a population."""

    def test_fill_to_graphs_count(self, config):
        first = chain_tree(2)
        population = TreePopulation([first])

        fill_population(population, config.with_overrides(graphs_count=4))

        assert len(population) == 4
        assert population[0] is first

    def test_full_population_untouched(self, config):
        population = TreePopulation([chain_tree(2)] * 3)

        fill_population(population, config.with_overrides(graphs_count=2))

        assert len(population) == 3
