"""
Tree generation module.

Components:
- Vertex / Edge: value types identifying tree nodes and parent links
- Tree: Read-only rooted tree with parent/child/leaf queries
- BranchingPolicy: RANDOM or FIXED children-count rule
- generate: Level-by-level growth until the vertex limit is passed

Example:
    import random
    from treegen.core.tree import BuildMode, generate

    tree = generate(BuildMode.RANDOM, edges_max=4, vertex_limit=100, rng=random.Random(7))
    print(tree.vertex_count, len(tree.leaves()))
"""

from treegen.core.config import BuildMode
from treegen.core.tree.generator import (
    MIN_VERTEX_AMOUNT,
    BranchingPolicy,
    create_fixed_tree,
    create_random_tree,
    generate,
    generate_from_config,
)
from treegen.core.tree.invariants import find_violations, validate_structure
from treegen.core.tree.models import Edge, Tree, Vertex

__all__ = [
    "BuildMode",
    "BranchingPolicy",
    "Edge",
    "MIN_VERTEX_AMOUNT",
    "Tree",
    "Vertex",
    "create_fixed_tree",
    "create_random_tree",
    "find_violations",
    "generate",
    "generate_from_config",
    "validate_structure",
]
