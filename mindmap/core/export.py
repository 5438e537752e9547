"""
Mind map exporters.

- DOT: a Graphviz digraph with one labelled node per mind-map node and one
  unlabelled edge per parent -> child relation (positions are not exported)
- SVG: curved edges first, then a rounded box per node coloured by level,
  with the node text wrapped onto at most two lines

The SVG canvas is a fixed 1000 x 800 viewport centred on the origin. Nodes
outside it are clipped unless fit_to_content is requested.
"""

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import TYPE_CHECKING

import graphviz

from .geometry import NODE_WIDTH, NODE_HEIGHT

if TYPE_CHECKING:
    from .mindmap import MindMap


logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"

# Fixed viewport
CANVAS_WIDTH = 1000
CANVAS_HEIGHT = 800
FIT_MARGIN = 40

# Edge curve control point drops below the midpoint by this much
EDGE_BULGE = 50.0

# Text layout
WRAP_WORDS = 3
LINE_PITCH = 20.0
FONT_FAMILY = "Arial"
FONT_SIZE = 14

# Characters outside the XML 1.0 Char production
_XML_ILLEGAL = re.compile("[^\t\n\r -퟿-�\U00010000-\U0010ffff]")

LEVEL_COLORS = {
    0: "#FF6B6B",
    1: "#4ECDC4",
    2: "#45B7D1",
}
DEEP_LEVEL_COLOR = "#A5D8FF"


def level_color(level: int) -> str:
    """Fill colour for a node at the given level (levels 3+ share one)."""
    return LEVEL_COLORS.get(level, DEEP_LEVEL_COLOR)


def wrap_text(text: str) -> list[str]:
    """
    Split node text into display lines.

    More than three words: the first three on one line, everything else on a
    second (no further wrapping). Otherwise the original text, untouched.
    """
    words = text.split()
    if len(words) > WRAP_WORDS:
        return [" ".join(words[:WRAP_WORDS]), " ".join(words[WRAP_WORDS:])]
    return [text]


def edge_control_point(
    source: tuple[float, float],
    target: tuple[float, float]
) -> tuple[float, float]:
    """Quadratic curve control point: the midpoint, pushed down by EDGE_BULGE."""
    return (
        (source[0] + target[0]) / 2,
        (source[1] + target[1]) / 2 + EDGE_BULGE,
    )


def xml_safe(text: str) -> str:
    """Drop characters XML 1.0 cannot carry (control characters, lone surrogates)."""
    return _XML_ILLEGAL.sub("", text)


def _fmt(value: float) -> str:
    """Format a coordinate compactly (225.0 -> '225', 1.25 -> '1.25')."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


# --- DOT ---

def to_dot(mindmap: "MindMap") -> str:
    """
    Render the mind map as Graphviz DOT source.

    Nodes are named by their mirror index and labelled with their text
    (backslashes and <...> taken literally). Edges carry no label.
    """
    mirror = mindmap.mirror
    dot = graphviz.Digraph()

    for index, label in mirror.labels():
        dot.node(str(index), label=graphviz.escape(label))

    for source, target in mirror.index_edges():
        dot.edge(str(source), str(target))

    return dot.source


# --- SVG ---

def _view_box(mindmap: "MindMap", fit_to_content: bool) -> tuple[float, float, float, float]:
    """(min_x, min_y, width, height) for the SVG viewBox."""
    if not fit_to_content:
        return (-CANVAS_WIDTH / 2, -CANVAS_HEIGHT / 2, CANVAS_WIDTH, CANVAS_HEIGHT)

    nodes = list(mindmap.iter_nodes())
    min_x = min(n.x for n in nodes) - NODE_WIDTH / 2 - FIT_MARGIN
    max_x = max(n.x for n in nodes) + NODE_WIDTH / 2 + FIT_MARGIN
    min_y = min(n.y for n in nodes) - NODE_HEIGHT / 2 - FIT_MARGIN
    # Leave room below for the edge bulge
    max_y = max(n.y for n in nodes) + NODE_HEIGHT / 2 + EDGE_BULGE + FIT_MARGIN
    return (min_x, min_y, max_x - min_x, max_y - min_y)


def build_svg(mindmap: "MindMap", fit_to_content: bool = False) -> ET.Element:
    """
    Build the SVG element tree for the mind map.

    Draw order: every edge path, then every node (rect followed by its text
    lines), so boxes always sit on top of curves.
    """
    min_x, min_y, width, height = _view_box(mindmap, fit_to_content)
    svg = ET.Element("svg", {
        "width": _fmt(width),
        "height": _fmt(height),
        "viewBox": f"{_fmt(min_x)} {_fmt(min_y)} {_fmt(width)} {_fmt(height)}",
        "xmlns": SVG_NS,
    })

    positions = {node.id: node.position for node in mindmap.iter_nodes()}

    for parent_id, child_id in mindmap.edges():
        sx, sy = positions[parent_id]
        tx, ty = positions[child_id]
        cx, cy = edge_control_point((sx, sy), (tx, ty))
        ET.SubElement(svg, "path", {
            "d": f"M {_fmt(sx)} {_fmt(sy)} Q {_fmt(cx)} {_fmt(cy)}, {_fmt(tx)} {_fmt(ty)}",
            "fill": "none",
            "stroke": "black",
            "stroke-width": "2",
        })

    for node in mindmap.iter_nodes():
        ET.SubElement(svg, "rect", {
            "x": _fmt(node.x - NODE_WIDTH / 2),
            "y": _fmt(node.y - NODE_HEIGHT / 2),
            "width": _fmt(NODE_WIDTH),
            "height": _fmt(NODE_HEIGHT),
            "rx": "5",
            "fill": level_color(node.level),
            "stroke": "black",
            "stroke-width": "1",
        })

        lines = wrap_text(node.text)
        # Centre the block of lines on the node
        top = node.y - (len(lines) - 1) * LINE_PITCH / 2
        for i, line in enumerate(lines):
            text_el = ET.SubElement(svg, "text", {
                "x": _fmt(node.x),
                "y": _fmt(top + i * LINE_PITCH),
                "font-family": FONT_FAMILY,
                "font-size": str(FONT_SIZE),
                "text-anchor": "middle",
                "dominant-baseline": "middle",
            })
            text_el.text = xml_safe(line)

    return svg


def to_svg(mindmap: "MindMap", fit_to_content: bool = False) -> str:
    """Render the mind map as a self-contained SVG document string."""
    return ET.tostring(build_svg(mindmap, fit_to_content), encoding="unicode")


def save_svg(
    mindmap: "MindMap",
    file_path: str | Path,
    fit_to_content: bool = False
) -> Path:
    """
    Write the SVG document to a file.

    The document is rendered before the file is opened. Filesystem errors
    propagate to the caller as OSError; there is no retry.

    Returns:
        The path written
    """
    path = Path(file_path)
    document = to_svg(mindmap, fit_to_content)

    with open(path, "w", encoding="utf-8") as f:
        f.write(document)

    logger.info("Saved SVG with %d nodes to %s", mindmap.node_count, path)
    return path
