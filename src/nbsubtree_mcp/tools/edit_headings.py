"""Tools that rewrite notebook cells: heading level changes and heading insertion."""

import logging
from typing import Optional

from ..parser.markdown import Cell, adjust_heading_levels
from ..parser.navigation import heading_level_for_insert, headline_cells
from ..security import READ_ONLY_ENV, is_read_only
from ..storage.notebook_store import NotebookStore, selected_cell, selected_cells
from .common import load_notebook, make_selection, no_change_result, selection_result

logger = logging.getLogger(__name__)


def _read_only_error() -> dict:
    return {
        "success": False,
        "error": f"Notebook edits are disabled in read-only mode ({READ_ONLY_ENV} is set).",
    }


def increment_headings(cells: list[Cell], change: int = 1) -> dict[int, str]:
    """
    Compute new sources for every headline among ``cells``.

    Returns a mapping of cell index to rewritten source. Non-headline cells
    and headlines already clamped at the target level are not included;
    writing the sources back is up to the caller.
    """
    new_sources = {}
    for cell in headline_cells(cells):
        text = adjust_heading_levels(cell.source, change)
        if text != cell.source:
            new_sources[cell.index] = text
    return new_sources


def increment_heading(
    path: str,
    selection_start: Optional[int] = None,
    selection_end: Optional[int] = None,
    change: int = 1,
) -> dict:
    """
    Change the heading level of every selected headline cell.

    Args:
        path: Path to the notebook
        selection_start: First selected cell index
        selection_end: End of the selection (exclusive)
        change: Levels to add (negative to promote), clamped to 1..6

    Returns:
        Dict with the updated cell indices and the new selection
    """
    if is_read_only():
        return _read_only_error()

    store = NotebookStore()
    document, err = load_notebook(path, store)
    if err:
        return err

    cells = selected_cells(document, make_selection(selection_start, selection_end))
    new_sources = increment_headings(cells, change)
    if not new_sources:
        return no_change_result(document, updated=[])

    for index, text in new_sources.items():
        document.replace_source(index, text)
    store.save(document)

    updated = sorted(new_sources)
    logger.info("Changed heading levels by %s in %s: cells %s", change, document.path, updated)
    first = updated[0]
    return selection_result(document, first, first, reveal=False, updated=updated)


def insert_heading_below(
    path: str,
    selection_start: Optional[int] = None,
    selection_end: Optional[int] = None,
) -> dict:
    """
    Insert a heading cell below the selected cell.

    The new heading is one level below the headline enclosing the insertion
    point, so it opens a subsection there.

    Args:
        path: Path to the notebook
        selection_start: First selected cell index
        selection_end: End of the selection (exclusive)

    Returns:
        Dict with the new cell's index, level and the new selection
    """
    if is_read_only():
        return _read_only_error()

    store = NotebookStore()
    document, err = load_notebook(path, store)
    if err:
        return err

    cell = selected_cell(document, make_selection(selection_start, selection_end))
    if cell is None:
        return no_change_result(document)

    position = cell.index + 1
    level = heading_level_for_insert(document.cells, position)
    inserted = document.insert_markdown_cell(position, "#" * level + " ")
    store.save(document)

    logger.info("Inserted level %s heading at cell %s in %s", level, position, document.path)
    return selection_result(document, inserted.index, inserted.index, inserted=inserted.index, level=level)
