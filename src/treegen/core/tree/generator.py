"""
Tree generator.

Grows a single rooted tree level by level under a branching policy until the
vertex count passes the stopping threshold:

    level 0:  1
    level 1:  2 3            children_count(1) == 2
    level 2:  4 5 | 6 7      children_count(2) == 2, children_count(3) == 2
    ...

Each vertex of the current level is expanded in encounter order and its
children get the next free numbers. Growth stops after the level during which
the count exceeded ``vertex_limit``.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Protocol, Union

from treegen.core.config import BuildMode, GenerationConfig
from treegen.core.errors import ConfigurationError
from treegen.core.tree.invariants import validate_structure
from treegen.core.tree.models import ROOT_PARENT, Edge, Tree, Vertex

logger = logging.getLogger(__name__)

ROOT_NUMBER = 1
MIN_VERTEX_AMOUNT = 10


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class BranchingPolicy:
    """Decides how many children a vertex receives."""

    def __init__(self, mode: BuildMode, edges_max: int, rng: Optional[RandomSource] = None):
        self.mode = mode
        self.edges_max = edges_max
        self.rng = rng

    def children_count(self, vertex_index: int) -> int:
        """
        Number of children for the vertex created at ``vertex_index``.

        FIXED: ``m - 2`` for the first ``m`` vertices, ``m - 1`` afterwards.
        RANDOM: uniform in ``[1, m - 1]`` for the first MIN_VERTEX_AMOUNT
        vertices so a young tree cannot die out, uniform in ``[0, m - 1]``
        afterwards.
        """
        m = self.edges_max
        if self.mode is BuildMode.FIXED:
            return max(m - 2, 0) if vertex_index <= m else m - 1

        if vertex_index <= MIN_VERTEX_AMOUNT:
            # m == 1 leaves no room above zero; the level safeguard takes over
            return self.rng.randint(min(1, m - 1), m - 1)
        return self.rng.randint(0, m - 1)


def _coerce_mode(mode: Union[BuildMode, str]) -> BuildMode:
    if isinstance(mode, BuildMode):
        return mode
    try:
        return BuildMode(str(mode).lower())
    except ValueError:
        valid = ", ".join(m.value for m in BuildMode)
        raise ConfigurationError(f"Unknown build mode '{mode}'. Valid modes: {valid}") from None


def _check_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"{name} must be an integer >= 1, got {value!r}")


def generate(
    mode: Union[BuildMode, str],
    edges_max: int,
    vertex_limit: int,
    rng: Optional[RandomSource] = None,
) -> Tree:
    """
    Build one rooted tree.

    Args:
        mode: Branching policy (RANDOM or FIXED)
        edges_max: Upper bound on per-vertex branching (m >= 1)
        vertex_limit: Stopping threshold (N >= 1)
        rng: Random source, required for RANDOM and ignored for FIXED

    Returns:
        A validated Tree with at least ``vertex_limit`` vertices

    Raises:
        ConfigurationError: If the parameters are invalid
    """
    build_mode = _coerce_mode(mode)
    _check_positive("edges_max", edges_max)
    _check_positive("vertex_limit", vertex_limit)
    if build_mode is BuildMode.RANDOM and rng is None:
        raise ConfigurationError("RANDOM mode requires a random source")

    policy = BranchingPolicy(build_mode, edges_max, rng)

    vertices: List[Vertex] = [Vertex(number=ROOT_NUMBER, parent=ROOT_PARENT)]
    edges: List[Edge] = []

    def attach(parent: int) -> int:
        number = len(vertices) + 1
        vertices.append(Vertex(number=number, parent=parent))
        edges.append(Edge(parent=parent, child=number))
        return number

    level: List[int] = [ROOT_NUMBER]
    while len(vertices) <= vertex_limit:
        next_level: List[int] = []
        for parent in level:
            for _ in range(policy.children_count(parent)):
                next_level.append(attach(parent))

        if not next_level:
            # Dead level: keep growing from the newest vertex
            last = vertices[-1].number
            next_level.append(attach(last))
            logger.debug("Level produced no children; attached vertex %d to %d", len(vertices), last)

        level = next_level

    tree = validate_structure(Tree(vertices=vertices, edges=edges))
    logger.debug(
        "Generated %s tree: m=%d N=%d vertices=%d height=%d",
        build_mode.value,
        edges_max,
        vertex_limit,
        tree.vertex_count,
        tree.height,
    )
    return tree


def generate_from_config(config: GenerationConfig, rng: Optional[RandomSource] = None) -> Tree:
    """Build one tree from a configuration; RANDOM mode seeds a fresh source if none is given."""
    if config.build_mode is BuildMode.RANDOM and rng is None:
        rng = random.Random(config.seed)
    return generate(config.build_mode, config.edges_count, config.vertex_limit, rng)


def create_random_tree(config: GenerationConfig, rng: Optional[RandomSource] = None) -> Tree:
    return generate_from_config(config.with_overrides(build_mode=BuildMode.RANDOM), rng)


def create_fixed_tree(config: GenerationConfig) -> Tree:
    return generate_from_config(config.with_overrides(build_mode=BuildMode.FIXED))


__all__ = [
    "MIN_VERTEX_AMOUNT",
    "ROOT_NUMBER",
    "BranchingPolicy",
    "RandomSource",
    "create_fixed_tree",
    "create_random_tree",
    "generate",
    "generate_from_config",
]
