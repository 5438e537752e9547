import pytest

from mindmap.core import MindMap


@pytest.fixture
def mindmap():
    return MindMap("root")


@pytest.fixture
def populated(mindmap):
    """root -> a, b; a -> a1 -> a1x"""
    a = mindmap.add_node(0, "a")
    mindmap.add_node(0, "b")
    a1 = mindmap.add_node(a, "a1")
    mindmap.add_node(a1, "a1x")
    return mindmap
