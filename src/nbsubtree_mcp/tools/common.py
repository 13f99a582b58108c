"""Helpers shared by the notebook tools."""

import logging
from typing import Optional

from ..parser.hierarchy import CellNode, build_cell_tree
from ..parser.navigation import find_cell_tree
from ..security import resolve_notebook_path
from ..storage.notebook_store import (
    CellRange,
    NotebookDocument,
    NotebookStore,
    selected_cell,
    set_selection_inclusive_cell_range,
)

logger = logging.getLogger(__name__)


def load_notebook(
    path: str,
    store: Optional[NotebookStore] = None,
) -> tuple[Optional[NotebookDocument], Optional[dict]]:
    """Validate and load a notebook, returning (document, error_dict)."""
    store = store or NotebookStore()
    try:
        resolved = resolve_notebook_path(path)
        return store.load(resolved), None
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning("Cannot load notebook %s: %s", path, e)
        return None, {"error": str(e)}


def make_selection(selection_start: Optional[int], selection_end: Optional[int]) -> Optional[CellRange]:
    """Build the current selection; a missing end selects the start cell only."""
    if selection_start is None:
        return None
    if selection_end is None:
        selection_end = selection_start + 1
    return CellRange(selection_start, selection_end)


def cell_tree(document: NotebookDocument, selection: Optional[CellRange]) -> Optional[CellNode]:
    """
    Parse the notebook and return the node of the first selected cell.

    The whole tree stays reachable from the returned node through ``parent``.
    """
    cell = selected_cell(document, selection)
    if cell is None:
        return None
    root = build_cell_tree(document.cells)
    node = find_cell_tree(cell, root)
    logger.debug("Cell tree for %s: %s top-level nodes, cell %s", document.path, len(root.children), cell.index)
    return node


def selection_result(
    document: NotebookDocument,
    start: int,
    end: int,
    reveal: bool = True,
    **extra,
) -> dict:
    """Result for a tool that moves the selection to ``start``..``end`` inclusive."""
    selection = set_selection_inclusive_cell_range(document, start, end)
    return {
        "path": str(document.path),
        "selection": selection.to_dict(),
        "reveal": reveal,
        "cells": selection.indices(),
        **extra,
    }


def no_change_result(document: NotebookDocument, **extra) -> dict:
    """Result for a tool that leaves the selection where it was."""
    return {"path": str(document.path), "selection": None, **extra}
