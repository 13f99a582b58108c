"""Notebook storage and retrieval."""

import json
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..parser.markdown import MARKDOWN_KIND, Cell

logger = logging.getLogger(__name__)

# Cell ids became part of the notebook format in nbformat 4.5
CELL_ID_MIN_VERSION = (4, 5)


@dataclass(frozen=True)
class CellRange:
    """A selection of cells: ``start`` inclusive, ``end`` exclusive."""
    start: int
    end: int

    @classmethod
    def inclusive(cls, first: int, last: int) -> "CellRange":
        return cls(first, last + 1)

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    def indices(self) -> list[int]:
        return list(range(self.start, self.end))

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


def _join_source(source: Union[str, list[str], None]) -> str:
    if source is None:
        return ""
    if isinstance(source, list):
        return "".join(source)
    return source


def _split_source(text: str) -> list[str]:
    return text.splitlines(keepends=True)


class NotebookDocument:
    """An ``.ipynb`` notebook loaded into memory as an ordered list of cells."""

    def __init__(self, path: Path, raw: dict):
        self.path = path
        self.raw = raw
        self._cells = self._read_cells()

    def _read_cells(self) -> list[Cell]:
        return [
            Cell(index=i, kind=c.get("cell_type", "code"), source=_join_source(c.get("source")))
            for i, c in enumerate(self.raw.get("cells", []))
        ]

    @property
    def cells(self) -> list[Cell]:
        return list(self._cells)

    @property
    def cell_count(self) -> int:
        return len(self._cells)

    def cell_at(self, index: int) -> Cell:
        return self._cells[index]

    def resolve_cell(self, cell_or_index: Union[Cell, int]) -> Optional[Cell]:
        """Resolve a cell or index to a cell of this notebook; ``None`` if out of range."""
        if isinstance(cell_or_index, Cell):
            return cell_or_index
        if cell_or_index < 0 or cell_or_index >= self.cell_count:
            return None
        return self._cells[cell_or_index]

    def _uses_cell_ids(self) -> bool:
        version = (self.raw.get("nbformat", 4), self.raw.get("nbformat_minor", 0))
        return version >= CELL_ID_MIN_VERSION

    def replace_source(self, index: int, text: str) -> Cell:
        """Replace the source of one cell."""
        self.raw["cells"][index]["source"] = _split_source(text)
        self._cells = self._read_cells()
        return self._cells[index]

    def insert_markdown_cell(self, position: int, text: str = "") -> Cell:
        """Insert a markdown cell so that it ends up at ``position``."""
        raw_cell: dict = {
            "cell_type": MARKDOWN_KIND,
            "metadata": {},
            "source": _split_source(text),
        }
        if self._uses_cell_ids():
            raw_cell = {"id": uuid.uuid4().hex[:8], **raw_cell}
        self.raw.setdefault("cells", []).insert(position, raw_cell)
        self._cells = self._read_cells()
        return self._cells[position]


class NotebookStore:
    """Loads and saves notebooks as nbformat 4 JSON."""

    def load(self, path: Union[str, Path]) -> NotebookDocument:
        """
        Load a notebook from disk.

        Raises:
            OSError: if the file cannot be read
            ValueError: if the file is not a notebook
        """
        notebook_path = Path(path)
        with open(notebook_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict) or not isinstance(raw.get("cells"), list):
            raise ValueError(f"Not a notebook: {path}")
        document = NotebookDocument(notebook_path, raw)
        logger.debug("Loaded %s (%s cells)", notebook_path, document.cell_count)
        return document

    def save(self, document: NotebookDocument) -> None:
        """Write a notebook back to the path it was loaded from."""
        with open(document.path, "w", encoding="utf-8") as f:
            json.dump(document.raw, f, indent=1, ensure_ascii=False)
            f.write("\n")
        logger.info("Saved %s (%s cells)", document.path, document.cell_count)


def set_selection_inclusive_cell_range(
    document: NotebookDocument,
    start_cell: Union[Cell, int],
    end_cell: Union[Cell, int],
) -> CellRange:
    """
    Build the selection spanning ``start_cell`` through ``end_cell``.

    Raises:
        ValueError: if either end cannot be resolved to a cell
    """
    start = document.resolve_cell(start_cell)
    end = document.resolve_cell(end_cell)
    if start is None or end is None:
        raise ValueError("Cannot find cells.")
    return CellRange.inclusive(start.index, end.index)


def selected_cell(document: NotebookDocument, selection: Optional[CellRange]) -> Optional[Cell]:
    """First selected cell, or ``None`` when nothing is selected."""
    if selection is None or selection.is_empty:
        return None
    return document.resolve_cell(selection.start)


def selected_cells(document: NotebookDocument, selection: Optional[CellRange]) -> list[Cell]:
    """Every selected cell that exists in the document."""
    if selection is None or selection.is_empty:
        return []
    resolved = (document.resolve_cell(i) for i in selection.indices())
    return [cell for cell in resolved if cell is not None]
