"""Shared test fixtures for nbsubtree MCP tests."""

import json

import pytest

from nbsubtree_mcp.parser.markdown import Cell


def _raw_cell(kind: str, source, cell_id: str) -> dict:
    cell = {"id": cell_id, "cell_type": kind, "metadata": {}, "source": source}
    if kind == "code":
        cell["execution_count"] = None
        cell["outputs"] = []
    return cell


def _write_notebook(path, cells: list[tuple[str, object]], nbformat_minor: int = 5) -> str:
    raw = {
        "cells": [_raw_cell(kind, source, f"cell{i}") for i, (kind, source) in enumerate(cells)],
        "metadata": {"kernelspec": {"name": "python3", "display_name": "Python 3", "language": "python"}},
        "nbformat": 4,
        "nbformat_minor": nbformat_minor,
    }
    if nbformat_minor < 5:
        for cell in raw["cells"]:
            del cell["id"]
    path.write_text(json.dumps(raw, indent=1), encoding="utf-8")
    return str(path)


@pytest.fixture
def make_cells():
    """
    Build cells from sources. Plain strings are markdown cells, tuples are
    (kind, source).
    """
    def _make(*sources) -> list[Cell]:
        cells = []
        for i, source in enumerate(sources):
            kind, text = source if isinstance(source, tuple) else ("markdown", source)
            cells.append(Cell(index=i, kind=kind, source=text))
        return cells
    return _make


@pytest.fixture
def scenario_cells(make_cells):
    """Headline A owning a1 and headline B (which owns b1), then headline C."""
    return make_cells("# A", "a1", "## B", "b1", "# C")


@pytest.fixture
def sample_notebook(tmp_path):
    """
    Notebook with the outline:

        0 # Intro
          1 code
          2 ## Setup
            3 code
          4 ## Usage
            5 plain markdown
        6 # Appendix
          7 code
    """
    return _write_notebook(tmp_path / "analysis.ipynb", [
        ("markdown", ["# Intro\n", "\n", "What this notebook does."]),
        ("code", "x = 1"),
        ("markdown", "## Setup"),
        ("code", ["import os\n", "import sys"]),
        ("markdown", "## Usage"),
        ("markdown", "Call `run()` to start."),
        ("markdown", "# Appendix"),
        ("code", "print(x)"),
    ])


@pytest.fixture
def plain_notebook(tmp_path):
    """Notebook with five cells and no headings."""
    return _write_notebook(tmp_path / "plain.ipynb", [
        ("code", "a = 1"),
        ("markdown", "Some notes."),
        ("code", "b = 2"),
        ("markdown", "More notes."),
        ("code", "a + b"),
    ])


@pytest.fixture
def empty_notebook(tmp_path):
    """Notebook with no cells."""
    return _write_notebook(tmp_path / "empty.ipynb", [])


@pytest.fixture
def old_format_notebook(tmp_path):
    """nbformat 4.4 notebook, whose cells carry no ids."""
    return _write_notebook(tmp_path / "old.ipynb", [
        ("markdown", "# Title"),
        ("code", "pass"),
    ], nbformat_minor=4)


@pytest.fixture
def make_notebook(tmp_path):
    """Write a notebook from (kind, source) pairs and return its path."""
    def _make(name: str, cells: list[tuple[str, object]]) -> str:
        return _write_notebook(tmp_path / name, cells)
    return _make
