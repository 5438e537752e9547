"""Mind map tool - radial mind-map layout with DOT and SVG export."""

from .core import (
    MindMap,
    MindNode,
    NodeNotFoundError,
    to_dot,
    to_svg,
    save_svg,
)

__version__ = "1.0.0"

__all__ = [
    "MindMap",
    "MindNode",
    "NodeNotFoundError",
    "to_dot",
    "to_svg",
    "save_svg",
]
