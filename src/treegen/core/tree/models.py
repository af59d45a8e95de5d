"""
Tree data models.

These models represent a generated rooted tree:
- Vertex: A numbered node with a link to its parent number
- Edge: Directed parent -> child connector
- Tree: The complete, read-only structure produced by the generator

Numbering:
    1 (root, parent 0)
    ├── 2
    │   ├── 4
    │   └── 5
    └── 3

Vertex numbers are assigned in creation order, so every child has a larger
number than its parent and the numbers form the contiguous range 1..n.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

ROOT_PARENT = 0


class Vertex(BaseModel):
    """A tree vertex identified by its creation number."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1)
    parent: int = Field(default=ROOT_PARENT, ge=0)  # 0 for the root

    @property
    def is_root(self) -> bool:
        return self.parent == ROOT_PARENT

    def __lt__(self, other: "Vertex") -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.number < other.number

    def __le__(self, other: "Vertex") -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.number <= other.number

    def __gt__(self, other: "Vertex") -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.number > other.number

    def __ge__(self, other: "Vertex") -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.number >= other.number

    def __str__(self) -> str:
        return f"{self.number}-{self.parent}"


class Edge(BaseModel):
    """Directed link from a parent vertex to a child vertex."""

    model_config = ConfigDict(frozen=True)

    parent: int
    child: int


class Tree(BaseModel):
    """
    A rooted tree built once by the generator and never mutated afterwards.

    Vertices are kept in creation order; child lists and depths are indexed
    lazily for the query methods.
    """

    model_config = ConfigDict(frozen=True)

    vertices: List[Vertex]
    edges: List[Edge] = Field(default_factory=list)

    _by_number: Dict[int, Vertex] = PrivateAttr(default_factory=dict)
    _children: Dict[int, List[int]] = PrivateAttr(default_factory=dict)
    _depths: Optional[Dict[int, int]] = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        self._by_number = {v.number: v for v in self.vertices}
        children: Dict[int, List[int]] = {v.number: [] for v in self.vertices}
        for edge in self.edges:
            children.setdefault(edge.parent, []).append(edge.child)
        self._children = children

    def __eq__(self, other: object) -> bool:
        # Structural equality only; lazily built indexes are ignored.
        if not isinstance(other, Tree):
            return NotImplemented
        return self.vertices == other.vertices and self.edges == other.edges

    __hash__ = None  # type: ignore[assignment]

    # =========================================================================
    # Vertex Access
    # =========================================================================

    @property
    def root(self) -> Optional[Vertex]:
        """Get the root vertex (parent 0)."""
        for vertex in self.vertices:
            if vertex.is_root:
                return vertex
        return None

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def get_vertex(self, number: int) -> Optional[Vertex]:
        return self._by_number.get(number)

    def sorted_vertices(self) -> List[Vertex]:
        """Vertices ordered by number."""
        return sorted(self.vertices)

    def children_of(self, number: int) -> List[Vertex]:
        """Direct children of a vertex, in creation order."""
        return [self._by_number[n] for n in self._children.get(number, []) if n in self._by_number]

    def child_count(self, number: int) -> int:
        return len(self._children.get(number, []))

    def is_leaf(self, number: int) -> bool:
        return self.child_count(number) == 0

    def leaves(self) -> List[Vertex]:
        """Vertices without children, ordered by number."""
        return [v for v in self.sorted_vertices() if self.is_leaf(v.number)]

    # =========================================================================
    # Depth
    # =========================================================================

    def _index_depths(self) -> Dict[int, int]:
        if self._depths is None:
            depths: Dict[int, int] = {}
            root = self.root
            if root is not None:
                queue = deque([(root.number, 0)])
                while queue:
                    number, depth = queue.popleft()
                    depths[number] = depth
                    queue.extend((child, depth + 1) for child in self._children.get(number, []))
            self._depths = depths
        return self._depths

    def depth_of(self, number: int) -> Optional[int]:
        """Edges between the root and a vertex, or None if unreachable."""
        return self._index_depths().get(number)

    def reachable_count(self) -> int:
        """Number of vertices reachable from the root."""
        return len(self._index_depths())

    @property
    def height(self) -> int:
        """Length in edges of the longest root-to-leaf path (0 for a lone root)."""
        depths = self._index_depths()
        return max(depths.values()) if depths else 0


__all__ = [
    "ROOT_PARENT",
    "Edge",
    "Tree",
    "Vertex",
]
