"""Tests for navigation queries over the cell tree."""

import pytest

from nbsubtree_mcp.parser.hierarchy import build_cell_tree
from nbsubtree_mcp.parser.navigation import (
    InvalidRangeError,
    all_siblings_range,
    cell_tree_cells,
    depth_of_tree_node,
    enclosing_headline,
    find_cell_tree,
    get_cell,
    get_parent,
    heading_level_for_insert,
    headline_cells,
    sibling_range,
    subtree_range,
)
from nbsubtree_mcp.storage.notebook_store import CellRange


@pytest.fixture
def scenario_root(scenario_cells):
    return build_cell_tree(scenario_cells)


class TestCellTreeCells:
    def test_root_covers_everything(self, scenario_cells, scenario_root):
        assert cell_tree_cells(scenario_root) == scenario_cells

    def test_subtree(self, scenario_root):
        a = scenario_root.children[0]
        assert [c.index for c in cell_tree_cells(a)] == [0, 1, 2, 3]

    def test_leaf(self, scenario_root):
        c = scenario_root.children[1]
        assert [c.index for c in cell_tree_cells(c)] == [4]

    def test_get_cell_of_root(self, scenario_root):
        assert get_cell(scenario_root) is None


class TestFindCellTree:
    def test_by_cell(self, scenario_cells, scenario_root):
        node = find_cell_tree(scenario_cells[3], scenario_root)
        assert node.cell is scenario_cells[3]

    def test_by_index(self, scenario_root):
        assert find_cell_tree(2, scenario_root).cell.index == 2

    def test_missing(self, scenario_root):
        assert find_cell_tree(99, scenario_root) is None

    def test_empty_tree(self):
        assert find_cell_tree(0, build_cell_tree([])) is None


class TestDepthAndParents:
    def test_depths(self, scenario_root):
        assert depth_of_tree_node(scenario_root) == -1
        assert depth_of_tree_node(find_cell_tree(0, scenario_root)) == 0
        assert depth_of_tree_node(find_cell_tree(2, scenario_root)) == 1
        assert depth_of_tree_node(find_cell_tree(3, scenario_root)) == 2

    def test_get_parent(self, scenario_root):
        b1 = find_cell_tree(3, scenario_root)
        assert get_parent(b1).cell.index == 2
        assert get_parent(find_cell_tree(0, scenario_root)) is scenario_root
        assert get_parent(scenario_root) is None
        assert get_parent(None) is None

    def test_enclosing_headline(self, scenario_root):
        assert enclosing_headline(find_cell_tree(1, scenario_root)).cell.index == 0
        assert enclosing_headline(find_cell_tree(0, scenario_root)) is None


class TestRanges:
    def test_subtree_range(self, scenario_root):
        assert subtree_range(find_cell_tree(0, scenario_root)) == CellRange(0, 4)
        assert subtree_range(find_cell_tree(2, scenario_root)) == CellRange(2, 4)
        assert subtree_range(find_cell_tree(4, scenario_root)) == CellRange(4, 5)

    def test_sibling_range_stops_after_own_subtree(self, scenario_root):
        assert sibling_range(find_cell_tree(1, scenario_root)) == CellRange(1, 2)
        assert sibling_range(find_cell_tree(2, scenario_root)) == CellRange(1, 4)

    def test_sibling_range_under_root(self, scenario_root):
        assert sibling_range(find_cell_tree(0, scenario_root)) == CellRange(0, 4)
        assert sibling_range(find_cell_tree(4, scenario_root)) == CellRange(0, 5)

    def test_all_siblings_range(self, scenario_root):
        assert all_siblings_range(find_cell_tree(1, scenario_root)) == CellRange(1, 4)
        assert all_siblings_range(find_cell_tree(0, scenario_root)) == CellRange(0, 5)

    def test_plain_cells_share_one_sibling_set(self, make_cells):
        root = build_cell_tree(make_cells("a", "b", "c", "d", "e"))
        for i in range(5):
            assert all_siblings_range(find_cell_tree(i, root)) == CellRange(0, 5)
        assert sibling_range(find_cell_tree(4, root)) == CellRange(0, 5)
        assert sibling_range(find_cell_tree(2, root)) == CellRange(0, 3)

    @pytest.mark.parametrize("range_of", [subtree_range, sibling_range, all_siblings_range])
    def test_root_has_no_range(self, scenario_root, range_of):
        with pytest.raises(InvalidRangeError):
            range_of(scenario_root)

    def test_invalid_range_is_value_error(self):
        assert issubclass(InvalidRangeError, ValueError)


class TestHeadlineCells:
    def test_filters(self, make_cells):
        cells = make_cells("# A", "text", ("code", "# comment"), "## B")
        assert [c.index for c in headline_cells(cells)] == [0, 3]

    def test_none(self, make_cells):
        assert headline_cells(make_cells("text", ("code", "x"))) == []


class TestHeadingLevelForInsert:
    def test_under_top_level_headline(self, scenario_cells):
        assert heading_level_for_insert(scenario_cells, 2) == 2
        assert heading_level_for_insert(scenario_cells, 5) == 2

    def test_under_nested_headline(self, scenario_cells):
        assert heading_level_for_insert(scenario_cells, 4) == 3

    def test_before_everything(self, scenario_cells):
        assert heading_level_for_insert(scenario_cells, 0) == 1

    def test_empty(self):
        assert heading_level_for_insert([], 0) == 1

    def test_capped_at_six(self, make_cells):
        assert heading_level_for_insert(make_cells("###### Six"), 1) == 6

    def test_after_plain_cells(self, make_cells):
        assert heading_level_for_insert(make_cells("text", ("code", "x")), 2) == 1
