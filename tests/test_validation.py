from mindmap.core import (
    IssueSeverity,
    validate_mindmap,
    validation_summary,
    summarize_mindmap,
)


def test_built_map_is_valid(populated):
    issues = validate_mindmap(populated)
    assert issues == []
    assert validation_summary(issues)["valid"] is True


def test_aliased_siblings_reported_as_info(mindmap):
    for i in range(9):
        mindmap.add_node(0, f"n{i}")
    issues = validate_mindmap(mindmap)
    assert [i.severity for i in issues] == [IssueSeverity.INFO]
    assert issues[0].node_id == 0
    assert validation_summary(issues)["valid"] is True


def test_mirror_drift_is_an_error(populated):
    # Simulate drift: an extra edge the node table knows nothing about
    populated.mirror.graph.add_edge(0, 3)
    issues = validate_mindmap(populated)
    summary = validation_summary(issues)
    assert summary["valid"] is False
    assert any(i.node_id == 3 for i in issues)


def test_issue_to_dict():
    from mindmap.core import ValidationIssue
    issue = ValidationIssue(severity=IssueSeverity.ERROR, message="bad", node_id=0)
    assert issue.to_dict() == {"type": "error", "message": "bad", "node_id": 0}


def test_summary_counts(populated):
    summary = summarize_mindmap(populated)
    assert summary.root_text == "root"
    assert summary.total_nodes == 5
    assert summary.total_edges == 4
    assert summary.nodes_by_level == {0: 1, 1: 2, 2: 1, 3: 1}
    assert summary.max_depth == 3
    assert summary.leaf_count == 2
    assert summary.aliased_parents == []
    assert summary.to_dict()["nodes_by_level"] == {"0": 1, "1": 2, "2": 1, "3": 1}


def test_summary_aliased_parents(mindmap):
    for i in range(9):
        mindmap.add_node(0, f"n{i}")
    assert summarize_mindmap(mindmap).aliased_parents == [0]
