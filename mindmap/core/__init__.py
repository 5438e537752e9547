"""
Mind Map Core - Node store, geometry policy, adjacency mirror, and exporters.

This module provides the core functionality used by both the command shell
and the HTTP API, ensuring a single source of truth for all mind-map logic.
"""

from .models import (
    ROOT_ID,
    NodeNotFoundError,
    # Core models
    MindNode,
    # Request models (for API)
    AddNodeRequest,
    MoveNodeRequest,
    SaveSvgRequest,
)

from .mindmap import MindMap, DEFAULT_ROOT_TEXT
from .mirror import AdjacencyMirror
from .export import to_dot, to_svg, save_svg, wrap_text, level_color
from .validation import validate_mindmap, validation_summary, ValidationIssue, IssueSeverity
from .analysis import summarize_mindmap, MindMapSummary

__all__ = [
    "ROOT_ID",
    "NodeNotFoundError",
    # Models
    "MindNode",
    # Request models
    "AddNodeRequest",
    "MoveNodeRequest",
    "SaveSvgRequest",
    # Store
    "MindMap",
    "DEFAULT_ROOT_TEXT",
    "AdjacencyMirror",
    # Export
    "to_dot",
    "to_svg",
    "save_svg",
    "wrap_text",
    "level_color",
    # Validation
    "validate_mindmap",
    "validation_summary",
    "ValidationIssue",
    "IssueSeverity",
    # Analysis
    "summarize_mindmap",
    "MindMapSummary",
]
