"""Structural invariant checks for generated trees."""

from __future__ import annotations

from typing import List

from treegen.core.errors import StructuralInvariantViolation
from treegen.core.tree.models import Tree


def find_violations(tree: Tree) -> List[str]:
    """Return a description of every structural invariant the tree breaks."""
    problems: List[str] = []

    roots = [v.number for v in tree.vertices if v.is_root]
    if len(roots) != 1:
        problems.append(f"expected exactly one root, found {len(roots)}: {roots}")

    numbers = [v.number for v in tree.vertices]
    if sorted(numbers) != list(range(1, len(numbers) + 1)):
        problems.append("vertex numbers are not the contiguous range 1..n")
    if numbers != sorted(numbers):
        problems.append("vertex numbers were not assigned in increasing order")

    for vertex in tree.vertices:
        if not vertex.is_root and vertex.parent >= vertex.number:
            problems.append(f"vertex {vertex.number} has parent {vertex.parent} that is not older")

    links = {(v.parent, v.number) for v in tree.vertices if not v.is_root}
    edges = {(e.parent, e.child) for e in tree.edges}
    if links != edges or len(edges) != len(tree.edges):
        problems.append("edges do not match the vertices' parent links")

    if not problems and tree.reachable_count() != tree.vertex_count:
        orphans = tree.vertex_count - tree.reachable_count()
        problems.append(f"{orphans} vertex(es) unreachable from the root")

    return problems


def validate_structure(tree: Tree) -> Tree:
    """Raise StructuralInvariantViolation if the tree is malformed; return it otherwise."""
    problems = find_violations(tree)
    if problems:
        raise StructuralInvariantViolation("; ".join(problems))
    return tree


__all__ = ["find_violations", "validate_structure"]
