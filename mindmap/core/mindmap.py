"""
MindMap - the node store and its adjacency mirror.

This module implements:
- Integer node ids, assigned in increasing order and never reused
- Placement of each new node by the geometry policy at insertion time
- A directed-graph mirror kept in lockstep with the node table
- Position nudging

add_node performs every check and computation before it touches either
structure, so a failed call leaves both the node table and the mirror
exactly as they were.
"""

import logging
from typing import Iterator

from .geometry import child_position
from .mirror import AdjacencyMirror
from .models import MindNode, NodeNotFoundError, ROOT_ID


logger = logging.getLogger(__name__)

DEFAULT_ROOT_TEXT = "Central Topic"


class MindMap:
    """
    A single-writer, in-memory mind map.

    The root node (id 0, level 0) sits at the origin and is created with the
    map. Every other node is attached to an existing parent through
    add_node. Nodes are never removed or re-parented.

    Not thread-safe: callers sharing one instance between tasks must guard
    the whole object with a single lock.
    """

    def __init__(self, root_text: str = DEFAULT_ROOT_TEXT):
        self._nodes: dict[int, MindNode] = {
            ROOT_ID: MindNode(id=ROOT_ID, text=root_text, x=0.0, y=0.0, level=0)
        }
        self._next_id = ROOT_ID + 1
        self._mirror = AdjacencyMirror()
        self._mirror.add_root(ROOT_ID, root_text)

    # --- Properties ---

    @property
    def root(self) -> MindNode:
        """Snapshot of the root node."""
        return self.get_node(ROOT_ID)

    @property
    def mirror(self) -> AdjacencyMirror:
        """The adjacency mirror (read-only use)."""
        return self._mirror

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return self._mirror.edge_count

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._nodes

    # --- Node Operations ---

    def add_node(self, parent_id: int, text: str) -> int:
        """
        Attach a new node under an existing parent.

        The new node's angle comes from the parent's child count before the
        node is appended, so a parent's first child is ordinal 0.

        Args:
            parent_id: Id of an existing node
            text: Display text for the new node

        Returns:
            The new node's id

        Raises:
            NodeNotFoundError: If parent_id does not exist (nothing is changed)
        """
        parent = self._nodes.get(parent_id)
        if parent is None:
            raise NodeNotFoundError(parent_id)

        level = parent.level + 1
        x, y = child_position(parent.x, parent.y, len(parent.children), level)
        new_id = self._next_id
        node = MindNode(id=new_id, text=text, x=x, y=y, level=level)

        # Commit: mirror, node table and parent's child list together
        self._mirror.add_child(parent_id, new_id, text)
        self._next_id += 1
        parent.children.append(new_id)
        self._nodes[new_id] = node

        logger.debug("Added node %d under %d at (%.1f, %.1f), level %d",
                     new_id, parent_id, x, y, level)
        return new_id

    def nudge(self, node_id: int, dx: float, dy: float) -> None:
        """
        Move a single node by (dx, dy).

        Positions are absolute, so descendants stay where they are.

        Raises:
            NodeNotFoundError: If node_id does not exist
        """
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)

        node.x += dx
        node.y += dy
        logger.debug("Moved node %d by (%.1f, %.1f)", node_id, dx, dy)

    def get_node(self, node_id: int) -> MindNode:
        """Get a snapshot of a node by id."""
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node.model_copy(deep=True)

    def list_all(self) -> list[MindNode]:
        """
        Snapshot every node.

        Order is not part of the contract. Each call returns fresh copies,
        so callers may keep or modify them freely.
        """
        return [node.model_copy(deep=True) for node in self._nodes.values()]

    def iter_nodes(self) -> Iterator[MindNode]:
        """Iterate over the live nodes (read-only use, e.g. by exporters)."""
        yield from self._nodes.values()

    def edges(self) -> Iterator[tuple[int, int]]:
        """Yield (parent_id, child_id) pairs as recorded in the mirror."""
        yield from self._mirror.edges()

    def parent_of(self, node_id: int) -> int | None:
        """Parent id of a node, or None for the root."""
        if node_id not in self._nodes:
            raise NodeNotFoundError(node_id)
        parents = self._mirror.parents_of(node_id)
        return parents[0] if parents else None
