"""
Core data models for mind maps.

These models define the canonical schema for a mind map:
- Nodes with text, absolute position, depth level and ordered children
- Request bodies accepted by the HTTP API

Node identifiers are plain integers. The root is always node 0 and new ids
are handed out by the MindMap in increasing order, never reused.
"""

from typing import Optional
from pydantic import BaseModel, Field


ROOT_ID = 0


class NodeNotFoundError(LookupError):
    """Raised when an operation references a node id that does not exist."""

    def __init__(self, node_id: int):
        super().__init__(f"Node not found: {node_id}")
        self.node_id = node_id


class MindNode(BaseModel):
    """A node in the mind map."""
    id: int
    text: str
    x: float = 0.0
    y: float = 0.0
    children: list[int] = Field(default_factory=list)  # Creation order
    level: int = 0  # Parent hops from the root

    @property
    def position(self) -> tuple[float, float]:
        """Get the node's absolute (x, y) position."""
        return (self.x, self.y)


# --- API Request/Response Models ---

class AddNodeRequest(BaseModel):
    """Request to attach a new node under an existing parent."""
    parent_id: int
    text: str


class MoveNodeRequest(BaseModel):
    """Request to nudge a node by a relative offset (finite values only)."""
    dx: float = Field(0.0, allow_inf_nan=False)
    dy: float = Field(0.0, allow_inf_nan=False)


class SaveSvgRequest(BaseModel):
    """Request to write the SVG document to disk."""
    file_path: Optional[str] = None
    fit_to_content: bool = False
