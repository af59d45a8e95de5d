"""Text rendering of generated trees with rich."""

from __future__ import annotations

from typing import Optional

from rich.tree import Tree as RichTree

from treegen.core.tree.models import Tree

LEAF_STYLE = "dark_orange"
INNER_STYLE = "green"


def _label(tree: Tree, number: int) -> str:
    vertex = tree.get_vertex(number)
    style = LEAF_STYLE if tree.is_leaf(number) else INNER_STYLE
    return f"[{style}]{vertex}[/{style}]"


def build_tree_view(tree: Tree, max_depth: Optional[int] = None) -> RichTree:
    """
    Build a rich Tree mirroring the generated tree.

    Labels read ``number-parent``; leaves and inner vertices get different
    colours. Subtrees below ``max_depth`` are collapsed into a count.
    """
    root = tree.root
    if root is None:
        return RichTree("[dim]<empty tree>[/dim]")

    view = RichTree(_label(tree, root.number), guide_style="dim")
    stack = [(root.number, view, 0)]
    while stack:
        number, node, depth = stack.pop()
        children = tree.children_of(number)
        if not children:
            continue
        if max_depth is not None and depth >= max_depth:
            node.add(f"[dim]... {len(children)} more child(ren)[/dim]")
            continue
        branches = [(child.number, node.add(_label(tree, child.number)), depth + 1) for child in children]
        stack.extend(reversed(branches))
    return view


__all__ = ["build_tree_view", "LEAF_STYLE", "INNER_STYLE"]
