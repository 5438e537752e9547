"""
Mind map analysis - structural summary of a map.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .geometry import slot_count

if TYPE_CHECKING:
    from .mindmap import MindMap


@dataclass
class MindMapSummary:
    """Summary of a mind map's structure."""
    root_text: str
    total_nodes: int
    total_edges: int
    nodes_by_level: dict[int, int]
    max_depth: int
    leaf_count: int
    aliased_parents: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "root_text": self.root_text,
            "total_nodes": self.total_nodes,
            "total_edges": self.total_edges,
            "nodes_by_level": {str(k): v for k, v in self.nodes_by_level.items()},
            "max_depth": self.max_depth,
            "leaf_count": self.leaf_count,
            "aliased_parents": self.aliased_parents,
        }


def summarize_mindmap(mindmap: "MindMap") -> MindMapSummary:
    """
    Generate a summary of a mind map.

    Aliased parents are those whose children outnumber the angle slots of
    the children's level, so some siblings share a direction.
    """
    nodes = list(mindmap.iter_nodes())

    level_counts: dict[int, int] = defaultdict(int)
    for node in nodes:
        level_counts[node.level] += 1

    aliased = sorted(
        node.id for node in nodes
        if len(node.children) > slot_count(node.level + 1)
    )

    return MindMapSummary(
        root_text=mindmap.root.text,
        total_nodes=len(nodes),
        total_edges=mindmap.edge_count,
        nodes_by_level=dict(sorted(level_counts.items())),
        max_depth=max(level_counts),
        leaf_count=sum(1 for n in nodes if not n.children),
        aliased_parents=aliased
    )
