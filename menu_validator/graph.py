"""
Menu graph model.

Adjacency relation between menu ids plus the set of root menus (menus
without a parent). Populated once by the ingestion layer and read-only
while paths are enumerated.
"""

from typing import Dict, Hashable, Iterable, Tuple

NodeId = Hashable


class MenuGraph:
    """
    Directed graph of menus.

    Children are kept in insertion order because that order decides the
    traversal order, and therefore the order in which paths are reported.
    A node without an adjacency entry is a leaf.
    """

    def __init__(self):
        self._children: Dict[NodeId, Tuple[NodeId, ...]] = {}
        # dict used as an insertion-ordered set
        self._roots: Dict[NodeId, None] = {}

    def add_children(self, node_id: NodeId, child_ids: Iterable[NodeId]) -> None:
        """Register (or overwrite) the ordered child list of a node."""
        self._children[node_id] = tuple(child_ids)

    def add_root(self, node_id: NodeId) -> None:
        """Mark a node as having no parent. Repeated adds are ignored."""
        self._roots.setdefault(node_id, None)

    def children_of(self, node_id: NodeId) -> Tuple[NodeId, ...]:
        """Get child ids of a node, empty for unknown nodes."""
        return self._children.get(node_id, ())

    @property
    def roots(self) -> Tuple[NodeId, ...]:
        """Root ids in first-insertion order."""
        return tuple(self._roots)

    @property
    def node_ids(self) -> Tuple[NodeId, ...]:
        """Ids with an adjacency entry, in insertion order."""
        return tuple(self._children)

    def __repr__(self) -> str:
        return f"MenuGraph(nodes={len(self._children)}, roots={len(self._roots)})"
