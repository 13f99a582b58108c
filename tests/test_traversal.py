"""Tests for the lazy tree traversals."""

import pytest

from nbsubtree_mcp.parser.hierarchy import build_cell_tree, cell_tree_traversals
from nbsubtree_mcp.parser.traversal import Traversals

from test_parser import MIXED_SEQUENCES


# r
# +-- a
# |   +-- a1
# |   +-- a2
# +-- b
#     +-- b1
CHILDREN = {
    "r": ["a", "b"],
    "a": ["a1", "a2"],
    "a1": [],
    "a2": [],
    "b": ["b1"],
    "b1": [],
}
PARENTS = {child: parent for parent, children in CHILDREN.items() for child in children}


@pytest.fixture
def traversals():
    return Traversals(PARENTS.get, CHILDREN.__getitem__)


def _indices(nodes):
    return [n.cell.index for n in nodes]


class TestDepthFirst:
    def test_order(self, traversals):
        assert list(traversals.depth_first("r")) == ["r", "a", "a1", "a2", "b", "b1"]

    def test_subtree_only(self, traversals):
        assert list(traversals.depth_first("a")) == ["a", "a1", "a2"]

    def test_leaf(self, traversals):
        assert list(traversals.depth_first("b1")) == ["b1"]


class TestBreadthFirst:
    def test_order(self, traversals):
        assert list(traversals.breadth_first("r")) == ["r", "a", "b", "a1", "a2", "b1"]

    def test_subtree_only(self, traversals):
        assert list(traversals.breadth_first("b")) == ["b", "b1"]


class TestForwardAndOver:
    def test_next_sibling(self, traversals):
        assert list(traversals.forward_and_over("a1")) == ["a2", "b"]

    def test_climbs_to_ancestor_sibling(self, traversals):
        assert list(traversals.forward_and_over("a2")) == ["b"]

    def test_skips_descendants(self, traversals):
        assert list(traversals.forward_and_over("a")) == ["b"]

    def test_exhausted_at_end(self, traversals):
        assert list(traversals.forward_and_over("b1")) == []
        assert list(traversals.forward_and_over("r")) == []


class TestForwardAndUp:
    def test_document_order(self, traversals):
        assert list(traversals.forward_and_up("r")) == ["a", "a1", "a2", "b", "b1"]

    def test_from_leaf(self, traversals):
        assert list(traversals.forward_and_up("a2")) == ["b", "b1"]


class TestBackwardAndUp:
    def test_reverse_document_order(self, traversals):
        assert list(traversals.backward_and_up("b1")) == ["b", "a2", "a1", "a"]

    def test_enters_previous_subtree_at_its_end(self, traversals):
        assert next(traversals.backward_and_up("b")) == "a2"

    def test_never_yields_root(self, traversals):
        assert list(traversals.backward_and_up("a")) == []
        assert list(traversals.backward_and_up("r")) == []


class TestIteratorProtocol:
    def test_iter_returns_self(self, traversals):
        it = traversals.depth_first("r")
        assert iter(it) is it

    def test_stays_exhausted(self, traversals):
        it = traversals.forward_and_over("a1")
        assert list(it) == ["a2", "b"]
        assert next(it, None) is None
        assert list(it) == []

    def test_fresh_call_restarts(self, traversals):
        first = traversals.breadth_first("a")
        next(first)
        assert list(traversals.breadth_first("a")) == ["a", "a1", "a2"]

    def test_partial_consumption(self, traversals):
        it = traversals.forward_and_up("r")
        assert next(it) == "a"
        assert next(it) == "a1"
        assert list(it) == ["a2", "b", "b1"]

    def test_last_descendant(self, traversals):
        assert traversals.last_descendant("r") == "b1"
        assert traversals.last_descendant("a1") == "a1"


class TestCellTreeScenario:
    def test_depth_first_from_a(self, scenario_cells):
        root = build_cell_tree(scenario_cells)
        a = root.children[0]
        assert _indices(cell_tree_traversals.depth_first(a)) == [0, 1, 2, 3]

    def test_forward_and_over_from_b(self, scenario_cells):
        root = build_cell_tree(scenario_cells)
        b = root.children[0].children[1]
        assert _indices(cell_tree_traversals.forward_and_over(b)) == [4]

    def test_backward_and_up_from_c(self, scenario_cells):
        root = build_cell_tree(scenario_cells)
        c = root.children[1]
        assert next(cell_tree_traversals.backward_and_up(c)).cell.index == 3

    def test_forward_and_up_walks_document(self, scenario_cells):
        root = build_cell_tree(scenario_cells)
        a = root.children[0]
        assert _indices(cell_tree_traversals.forward_and_up(a)) == [1, 2, 3, 4]


class TestTraversalProperties:
    @pytest.mark.parametrize("sources", MIXED_SEQUENCES)
    def test_depth_and_breadth_first_visit_every_node_once(self, make_cells, sources):
        root = build_cell_tree(make_cells(*sources))
        depth = list(cell_tree_traversals.depth_first(root))
        breadth = list(cell_tree_traversals.breadth_first(root))
        assert len(depth) == len(sources) + 1
        assert len(breadth) == len(sources) + 1
        assert {id(n) for n in depth} == {id(n) for n in breadth}

    @pytest.mark.parametrize("sources", MIXED_SEQUENCES)
    def test_forward_then_backward_returns(self, make_cells, sources):
        root = build_cell_tree(make_cells(*sources))
        nodes = list(cell_tree_traversals.depth_first(root))[1:]
        for node in nodes[:-1]:
            forward = next(cell_tree_traversals.forward_and_up(node))
            assert next(cell_tree_traversals.backward_and_up(forward)) is node
        assert next(cell_tree_traversals.forward_and_up(nodes[-1]), None) is None

    @pytest.mark.parametrize("sources", MIXED_SEQUENCES)
    def test_backward_then_forward_returns(self, make_cells, sources):
        root = build_cell_tree(make_cells(*sources))
        nodes = list(cell_tree_traversals.depth_first(root))[1:]
        for node in nodes[1:]:
            backward = next(cell_tree_traversals.backward_and_up(node))
            assert next(cell_tree_traversals.forward_and_up(backward)) is node
        assert next(cell_tree_traversals.backward_and_up(nodes[0]), None) is None

    @pytest.mark.parametrize("sources", MIXED_SEQUENCES)
    def test_forward_and_up_is_document_order(self, make_cells, sources):
        root = build_cell_tree(make_cells(*sources))
        assert _indices(cell_tree_traversals.forward_and_up(root)) == list(range(len(sources)))

    def test_empty_tree(self):
        root = build_cell_tree([])
        assert list(cell_tree_traversals.depth_first(root)) == [root]
        assert list(cell_tree_traversals.forward_and_up(root)) == []
