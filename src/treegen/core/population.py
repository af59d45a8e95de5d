"""
Tree populations and batch generation.

A population is an ordered, append-only sequence of trees generated under the
same parameters. Batches are generated off the calling thread:

    job = submit_population(config, count=400)
    trees = job.result(timeout=30)       # request order, blocks until done
    job.join_into(population)            # or append into an existing population

Every task owns its own ``random.Random``. Task seeds are drawn from a master
generator (seeded by ``config.seed``) on the submitting thread, in request
order, so a seeded batch is reproducible whatever the thread scheduling.
"""

from __future__ import annotations

import logging
import random
import threading
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Iterable, Iterator, List, Optional, Tuple

from treegen.core.config import GenerationConfig
from treegen.core.errors import ConfigurationError, GenerationCancelled, GenerationTimeout
from treegen.core.tree.generator import generate_from_config
from treegen.core.tree.models import Tree

logger = logging.getLogger(__name__)

SEED_BITS = 64


class TreePopulation:
    """Ordered, append-only collection of trees, safe under concurrent writers."""

    def __init__(self, trees: Optional[Iterable[Tree]] = None):
        self._lock = threading.Lock()
        self._trees: List[Tree] = list(trees or [])

    def append(self, tree: Tree) -> None:
        with self._lock:
            self._trees.append(tree)

    def extend(self, trees: Iterable[Tree]) -> None:
        batch = list(trees)
        with self._lock:
            self._trees.extend(batch)

    def snapshot(self) -> Tuple[Tree, ...]:
        """Immutable copy of the current contents."""
        with self._lock:
            return tuple(self._trees)

    def last(self) -> Optional[Tree]:
        with self._lock:
            return self._trees[-1] if self._trees else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._trees)

    def __iter__(self) -> Iterator[Tree]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> Tree:
        with self._lock:
            return self._trees[index]


def derive_seeds(seed: Optional[int], count: int) -> List[int]:
    """Per-task seeds, drawn in request order from a master generator."""
    master = random.Random(seed)
    return [master.getrandbits(SEED_BITS) for _ in range(count)]


def _generate_task(config: GenerationConfig, seed: int, cancel_event: threading.Event) -> Tree:
    if cancel_event.is_set():
        raise GenerationCancelled("batch cancelled before this tree was started")
    return generate_from_config(config, random.Random(seed))


class PopulationJob:
    """Handle on a running batch; trees come back in the order they were requested."""

    def __init__(
        self,
        futures: List[Future],
        cancel_event: threading.Event,
        executor: Optional[ThreadPoolExecutor] = None,
        default_timeout: Optional[float] = None,
    ):
        self._futures = futures
        self._cancel_event = cancel_event
        self._executor = executor  # owned executor, shut down once joined
        self.default_timeout = default_timeout

    @property
    def size(self) -> int:
        return len(self._futures)

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def done(self) -> bool:
        return all(f.done() for f in self._futures)

    def cancel(self) -> None:
        """Stop scheduling new trees; trees already being built still finish."""
        self._cancel_event.set()
        for future in self._futures:
            future.cancel()
        logger.info("Population job cancelled (%d/%d finished)", sum(f.done() for f in self._futures), self.size)

    def result(self, timeout: Optional[float] = None) -> List[Tree]:
        """
        Wait for every tree and return them in request order.

        Args:
            timeout: Seconds to wait; defaults to the job's configured deadline

        Raises:
            GenerationTimeout: If the deadline passes first (remaining work is cancelled)
            GenerationCancelled: If the job was cancelled before every tree was built
        """
        deadline = timeout if timeout is not None else self.default_timeout
        if self._cancel_event.is_set():
            # token set externally; drop queued work instead of waiting on it
            self.cancel()
        try:
            finished, pending = wait(self._futures, timeout=deadline, return_when=FIRST_EXCEPTION)
            dropped = sum(f.cancelled() for f in self._futures)
            if self._cancel_event.is_set() and (dropped or pending):
                raise GenerationCancelled(
                    f"population job cancelled with {dropped + len(pending)} of {self.size} trees not built"
                )
            for future in self._futures:
                if future in finished and not future.cancelled() and future.exception() is not None:
                    self.cancel()
                    raise future.exception()
            if pending:
                self.cancel()
                raise GenerationTimeout(f"{len(pending)} of {self.size} trees unfinished after {deadline}s")
            return [future.result() for future in self._futures]
        finally:
            self._shutdown()

    def join_into(self, population: TreePopulation, timeout: Optional[float] = None) -> TreePopulation:
        """Append the finished trees to a population, preserving request order."""
        population.extend(self.result(timeout))
        return population

    def _shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None


def submit_population(
    config: GenerationConfig,
    count: Optional[int] = None,
    *,
    executor: Optional[ThreadPoolExecutor] = None,
    cancel_event: Optional[threading.Event] = None,
) -> PopulationJob:
    """
    Start generating ``count`` trees (default ``config.graphs_count``) in the background.

    Args:
        config: Generation parameters shared by every tree
        count: Number of trees to generate
        executor: Executor to run on; a private pool of ``config.workers`` is used otherwise
        cancel_event: External cancellation token

    Returns:
        PopulationJob to wait on
    """
    total = config.graphs_count if count is None else count
    if total < 0:
        raise ConfigurationError(f"count must be >= 0, got {total}")

    cancel_event = cancel_event or threading.Event()
    owned = None
    if executor is None:
        owned = ThreadPoolExecutor(max_workers=config.workers, thread_name_prefix="treegen")
        executor = owned

    seeds = derive_seeds(config.seed, total)
    futures = [executor.submit(_generate_task, config, seed, cancel_event) for seed in seeds]
    logger.info(
        "Submitted %d %s tree(s) (m=%d, N=%d, workers=%d)",
        total,
        config.build_mode.value,
        config.edges_count,
        config.vertex_limit,
        config.workers,
    )
    return PopulationJob(futures, cancel_event, executor=owned, default_timeout=config.timeout)


def generate_population(
    config: GenerationConfig,
    count: Optional[int] = None,
    *,
    timeout: Optional[float] = None,
) -> List[Tree]:
    """Generate a batch and block until it is complete."""
    return submit_population(config, count).result(timeout)


def fill_population(
    population: TreePopulation,
    config: GenerationConfig,
    *,
    timeout: Optional[float] = None,
) -> TreePopulation:
    """Top a population up to ``config.graphs_count`` trees."""
    missing = config.graphs_count - len(population)
    if missing <= 0:
        return population
    logger.debug("Filling population: %d present, %d missing", len(population), missing)
    return submit_population(config, missing).join_into(population, timeout)


__all__ = [
    "PopulationJob",
    "TreePopulation",
    "derive_seeds",
    "fill_population",
    "generate_population",
    "submit_population",
]
