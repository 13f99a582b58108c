"""
Reproducible benchmark harness for nbsubtree MCP.

Every command reloads and reparses the notebook, so this measures:
- Tree build cost (load + parse)
- Per-command cost for each navigation and selection tool
- Session cost (walking the whole notebook one goto at a time)

Usage:
    python benchmarks/run_benchmark.py [--dataset small|medium|large] [--output results.json]
"""

import argparse
import json
import platform
import sys
import time
from pathlib import Path

# Add project src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nbsubtree_mcp.parser.hierarchy import build_cell_tree
from nbsubtree_mcp.storage.notebook_store import NotebookStore
from nbsubtree_mcp.tools.select_cells import select_subtree, select_siblings
from nbsubtree_mcp.tools.goto_cell import (
    goto_forward_and_up,
    goto_backward_and_up,
    goto_forward_and_over,
    goto_parent_cell,
)
from nbsubtree_mcp.tools.get_outline import get_outline


class BenchmarkResult:
    """Collects benchmark measurements."""

    def __init__(self, dataset_name: str):
        self.dataset = dataset_name
        self.measurements: list[dict] = []
        self.system_info = {
            "platform": platform.system(),
            "platform_version": platform.version(),
            "python_version": platform.python_version(),
            "processor": platform.processor(),
        }

    def record(self, name: str, elapsed_ms: float, **extra):
        self.measurements.append({
            "name": name,
            "elapsed_ms": round(elapsed_ms, 2),
            **extra,
        })

    def to_dict(self) -> dict:
        return {
            "dataset": self.dataset,
            "system_info": self.system_info,
            "measurements": self.measurements,
        }

    def to_markdown(self) -> str:
        lines = [
            f"# Benchmark Results: {self.dataset}",
            "",
            f"**Platform**: {self.system_info['platform']} {self.system_info['platform_version']}",
            f"**Python**: {self.system_info['python_version']}",
            "",
            "| Measurement | Time (ms) | Details |",
            "|-------------|-----------|---------|",
        ]
        for m in self.measurements:
            extra = {k: v for k, v in m.items() if k not in ("name", "elapsed_ms")}
            details = ", ".join(f"{k}={v}" for k, v in extra.items()) if extra else "-"
            lines.append(f"| {m['name']} | {m['elapsed_ms']} | {details} |")
        return "\n".join(lines)


def _timed(fn, *args, **kwargs):
    t0 = time.perf_counter()
    value = fn(*args, **kwargs)
    return value, (time.perf_counter() - t0) * 1000


def run_benchmark(notebook_path: str) -> BenchmarkResult:
    """Run full benchmark suite on a notebook."""
    result = BenchmarkResult(Path(notebook_path).parent.name)

    # 1. Load and build the tree
    document, elapsed = _timed(NotebookStore().load, notebook_path)
    result.record("load", elapsed, cell_count=document.cell_count)

    root, elapsed = _timed(build_cell_tree, document.cells)
    result.record("build_cell_tree", elapsed, top_level=len(root.children))

    middle = document.cell_count // 2

    # 2. One call per command, each reparsing from disk
    for name, tool in [
        ("select_subtree", select_subtree),
        ("select_siblings", select_siblings),
        ("goto_parent_cell", goto_parent_cell),
        ("goto_forward_and_up", goto_forward_and_up),
        ("goto_backward_and_up", goto_backward_and_up),
        ("goto_forward_and_over", goto_forward_and_over),
    ]:
        _, elapsed = _timed(tool, notebook_path, middle)
        result.record(name, elapsed, start_cell=middle)

    outline, elapsed = _timed(get_outline, notebook_path, headlines_only=True)
    result.record("get_outline", elapsed, top_level=len(outline.get("outline", [])))

    # 3. Session: walk the top-level sections with forward-and-over
    t0 = time.perf_counter()
    steps = 0
    current = 0
    while True:
        step = goto_forward_and_over(notebook_path, current)
        if step.get("selection") is None:
            break
        current = step["selection"]["start"]
        steps += 1
    result.record("session_forward_and_over", (time.perf_counter() - t0) * 1000, steps=steps)

    return result


def main():
    parser = argparse.ArgumentParser(description="nbsubtree MCP Benchmark")
    parser.add_argument("--dataset", choices=["small", "medium", "large", "all"], default="all")
    parser.add_argument("--output", default=None, help="Output JSON file path")
    parser.add_argument("--generate", action="store_true", help="Generate datasets first")
    args = parser.parse_args()

    datasets_dir = Path(__file__).parent / "datasets"

    if args.generate or not datasets_dir.exists():
        print("Generating benchmark datasets...")
        from generate_datasets import generate_small, generate_medium, generate_large
        import random
        random.seed(42)
        generate_small()
        generate_medium()
        generate_large()

    if args.dataset == "all":
        dataset_names = ["small", "medium", "large"]
    else:
        dataset_names = [args.dataset]

    all_results = []

    for name in dataset_names:
        notebook_path = datasets_dir / name / "notebook.ipynb"
        if not notebook_path.exists():
            print(f"Dataset {name} not found at {notebook_path}. Run with --generate first.")
            continue

        print(f"\nBenchmarking dataset: {name}")
        print("=" * 50)

        result = run_benchmark(str(notebook_path))
        all_results.append(result)

        print(result.to_markdown())
        print()

    # Output JSON
    if args.output:
        output_data = [r.to_dict() for r in all_results]
        with open(args.output, "w") as f:
            json.dump(output_data, f, indent=2)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
