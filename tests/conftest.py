import pytest

from huffcodec.builder import build_tree


def shape(tree, idx=None):
    """Nested (zero, one) tuples with symbols at the leaves."""
    if idx is None:
        idx = tree.root
    n = tree.nodes[idx]
    if n.is_leaf:
        return n.sym
    return (shape(tree, n.zero), shape(tree, n.one))


@pytest.fixture
def abc_tree():
    return build_tree("aaaabbbcc")
