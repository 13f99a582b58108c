"""Generate standardized benchmark notebooks for nbsubtree MCP."""

import json
import random
from pathlib import Path

DATASETS_DIR = Path(__file__).parent / "datasets"

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. "
    "Sed do eiusmod tempor incididunt ut labore et dolore magna aliqua. "
)

TECH_WORDS = [
    "load", "clean", "explore", "model", "evaluate",
    "features", "baseline", "tuning", "plots", "export",
]


def _markdown(source: str) -> dict:
    return {"cell_type": "markdown", "metadata": {}, "source": source}


def _code(source: str) -> dict:
    return {"cell_type": "code", "metadata": {}, "execution_count": None, "outputs": [], "source": source}


def _generate_notebook(title: str, num_sections: int = 5, cells_per_section: int = 6) -> dict:
    """Generate a notebook with nested headline cells."""
    cells = [_markdown(f"# {title}\n\n{LOREM}")]

    for _ in range(num_sections):
        cells.append(_markdown(f"## {random.choice(TECH_WORDS).title()} {random.choice(TECH_WORDS).title()}"))
        for _ in range(cells_per_section):
            if random.random() < 0.6:
                cells.append(_code(f"{random.choice(TECH_WORDS)}_result = run('{random.choice(TECH_WORDS)}')"))
            else:
                cells.append(_markdown(LOREM))

        # Add a subsection
        cells.append(_markdown(f"### {random.choice(TECH_WORDS).title()} Details"))
        for _ in range(cells_per_section // 2):
            cells.append(_code(f"plot({random.choice(TECH_WORDS)!r})"))

    return {
        "cells": cells,
        "metadata": {},
        "nbformat": 4,
        "nbformat_minor": 4,
    }


def _write(out: Path, name: str, notebook: dict) -> None:
    out.mkdir(parents=True, exist_ok=True)
    (out / name).write_text(json.dumps(notebook, indent=1), encoding="utf-8")


def generate_small():
    """Generate small notebook: ~40 cells."""
    out = DATASETS_DIR / "small"
    _write(out, "notebook.ipynb", _generate_notebook("Small", num_sections=3, cells_per_section=6))
    print(f"Small dataset in {out}")


def generate_medium():
    """Generate medium notebook: ~250 cells."""
    out = DATASETS_DIR / "medium"
    _write(out, "notebook.ipynb", _generate_notebook("Medium", num_sections=20, cells_per_section=8))
    print(f"Medium dataset in {out}")


def generate_large():
    """Generate large notebook: ~1500 cells."""
    out = DATASETS_DIR / "large"
    _write(out, "notebook.ipynb", _generate_notebook("Large", num_sections=100, cells_per_section=10))
    print(f"Large dataset in {out}")


if __name__ == "__main__":
    random.seed(42)  # Reproducible
    generate_small()
    generate_medium()
    generate_large()
    print("All datasets generated.")
