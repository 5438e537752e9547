"""
Adjacency mirror - a directed graph view of the mind map used for export.

The mirror keeps its own node indices (in insertion order) and an index
table mapping mind-map node ids onto them. Only MindMap mutates it; the
exporters read edges and labels through it.
"""

from typing import Iterator

import networkx as nx


class AdjacencyMirror:
    """
    Directed graph holding one node per mind-map node and one edge per
    parent -> child relation.
    """

    def __init__(self):
        self._graph = nx.DiGraph()
        self._node_indices: dict[int, int] = {}  # node_id -> mirror index
        self._node_ids: dict[int, int] = {}      # mirror index -> node_id

    # --- Mutation (called by MindMap only) ---

    def _add_mirror_node(self, node_id: int, text: str) -> int:
        index = self._graph.number_of_nodes()
        self._graph.add_node(index, label=text)
        self._node_indices[node_id] = index
        self._node_ids[index] = node_id
        return index

    def add_root(self, node_id: int, text: str) -> int:
        """Register the root node. Returns its mirror index."""
        return self._add_mirror_node(node_id, text)

    def add_child(self, parent_id: int, child_id: int, text: str) -> int:
        """Register a new node and its edge from the parent. Returns its mirror index."""
        parent_index = self._node_indices[parent_id]
        child_index = self._add_mirror_node(child_id, text)
        self._graph.add_edge(parent_index, child_index)
        return child_index

    # --- Lookups ---

    @property
    def graph(self) -> nx.DiGraph:
        """The underlying graph (treat as read-only)."""
        return self._graph

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._node_indices

    def index_of(self, node_id: int) -> int:
        """Mirror index for a mind-map node id."""
        return self._node_indices[node_id]

    def labels(self) -> Iterator[tuple[int, str]]:
        """Yield (mirror index, label) for every mirror node."""
        for index, data in self._graph.nodes(data=True):
            yield index, data["label"]

    def index_edges(self) -> Iterator[tuple[int, int]]:
        """Yield (source index, target index) for every mirror edge."""
        yield from self._graph.edges()

    def edges(self) -> Iterator[tuple[int, int]]:
        """Yield (parent_id, child_id) for every mirror edge."""
        for source, target in self._graph.edges():
            yield self._node_ids[source], self._node_ids[target]

    def parents_of(self, node_id: int) -> list[int]:
        """Node ids with an edge into the given node."""
        index = self._node_indices[node_id]
        return [self._node_ids[p] for p in self._graph.predecessors(index)]
