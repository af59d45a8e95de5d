"""Tree visualization."""

from .render import build_tree_view

__all__ = ["build_tree_view"]
