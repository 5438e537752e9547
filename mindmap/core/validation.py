"""
Mind map validation - Check the node table and its mirror for structural issues.

A map built only through MindMap.add_node should always validate cleanly;
these checks exist to catch drift between the two representations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import networkx as nx

from .geometry import slot_count
from .models import ROOT_ID

if TYPE_CHECKING:
    from .mindmap import MindMap


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""
    ERROR = "error"      # Invariant broken
    WARNING = "warning"  # Potential problem, should review
    INFO = "info"        # Known layout simplification


@dataclass
class ValidationIssue:
    """A single validation issue found in a mind map."""
    severity: IssueSeverity
    message: str
    node_id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "type": self.severity.value,
            "message": self.message
        }
        if self.node_id is not None:
            result["node_id"] = self.node_id
        return result


def validate_mindmap(mindmap: "MindMap") -> list[ValidationIssue]:
    """
    Validate a mind map and return a list of issues.

    Checks for:
    - Missing root, or a root not at level 0 - ERROR
    - Mirror node/edge counts out of step with the node table - ERROR
    - Non-root nodes without exactly one incoming edge from their parent - ERROR
    - Child lists that disagree with the mirror - ERROR
    - Levels that are not parent level + 1 - ERROR
    - Cycles in the mirror - ERROR
    - Parents with more children than angle slots (siblings overlap) - INFO

    Args:
        mindmap: The mind map to validate

    Returns:
        List of ValidationIssue objects
    """
    issues: list[ValidationIssue] = []
    nodes = {node.id: node for node in mindmap.iter_nodes()}
    mirror = mindmap.mirror

    root = nodes.get(ROOT_ID)
    if root is None:
        issues.append(ValidationIssue(
            severity=IssueSeverity.ERROR,
            message="Root node is missing"
        ))
        return issues
    if root.level != 0:
        issues.append(ValidationIssue(
            severity=IssueSeverity.ERROR,
            message=f"Root node has level {root.level}, expected 0",
            node_id=ROOT_ID
        ))

    if mirror.node_count != len(nodes):
        issues.append(ValidationIssue(
            severity=IssueSeverity.ERROR,
            message=f"Mirror has {mirror.node_count} nodes, map has {len(nodes)}"
        ))
    if mirror.edge_count != len(nodes) - 1:
        issues.append(ValidationIssue(
            severity=IssueSeverity.ERROR,
            message=f"Mirror has {mirror.edge_count} edges, expected {len(nodes) - 1}"
        ))

    # Parent recorded by child lists
    recorded_parent: dict[int, int] = {}
    for node in nodes.values():
        for child_id in node.children:
            if child_id not in nodes:
                issues.append(ValidationIssue(
                    severity=IssueSeverity.ERROR,
                    message=f"Child list references missing node {child_id}",
                    node_id=node.id
                ))
                continue
            recorded_parent[child_id] = node.id

    for node in nodes.values():
        if node.id == ROOT_ID:
            continue

        parent_id = recorded_parent.get(node.id)
        if parent_id is None:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message="Node is not in any child list",
                node_id=node.id
            ))
            continue

        if node.level != nodes[parent_id].level + 1:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Level {node.level} does not follow parent level {nodes[parent_id].level}",
                node_id=node.id
            ))

        if node.id not in mirror:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message="Node has no mirror entry",
                node_id=node.id
            ))
            continue

        incoming = mirror.parents_of(node.id)
        if incoming != [parent_id]:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Mirror parents {incoming} do not match recorded parent {parent_id}",
                node_id=node.id
            ))

    if not nx.is_directed_acyclic_graph(mirror.graph):
        issues.append(ValidationIssue(
            severity=IssueSeverity.ERROR,
            message="Mirror contains a cycle"
        ))

    for node in nodes.values():
        slots = slot_count(node.level + 1)
        if len(node.children) > slots:
            issues.append(ValidationIssue(
                severity=IssueSeverity.INFO,
                message=f"{len(node.children)} children share {slots} angle slots; some overlap",
                node_id=node.id
            ))

    return issues


def validation_summary(issues: list[ValidationIssue]) -> dict:
    """
    Create a summary of validation issues.

    Args:
        issues: List of validation issues

    Returns:
        Dictionary with counts by severity
    """
    return {
        "total": len(issues),
        "errors": len([i for i in issues if i.severity == IssueSeverity.ERROR]),
        "warnings": len([i for i in issues if i.severity == IssueSeverity.WARNING]),
        "info": len([i for i in issues if i.severity == IssueSeverity.INFO]),
        "valid": len([i for i in issues if i.severity == IssueSeverity.ERROR]) == 0
    }
