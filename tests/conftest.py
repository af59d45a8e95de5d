"""
Shared fixtures for treegen tests.
"""

import random

import pytest

from tests.utils.trees import build_tree
from treegen.core.config import BuildMode
from treegen.core.tree import Tree, generate


@pytest.fixture
def fixed_tree() -> Tree:
    """The FIXED tree for m=4, N=10."""
    return generate(BuildMode.FIXED, edges_max=4, vertex_limit=10)


@pytest.fixture
def random_tree() -> Tree:
    return generate(BuildMode.RANDOM, edges_max=4, vertex_limit=100, rng=random.Random(2024))


@pytest.fixture
def star_tree() -> Tree:
    """Root with three leaf children."""
    return build_tree({1: 0, 2: 1, 3: 1, 4: 1})
