#!/usr/bin/env python3
"""
Demo of pipe loop classification.

Usage:
    python demo.py            # run the built-in examples
    python demo.py FILE...    # classify grids read from files
    python demo.py -v ...     # with debug logging
"""

import logging
import sys

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ascii_render import render
from example_grids import EXAMPLES
from pipe_parser import load_grid, parse_grid
from pipeloop import LoopAnalysis, PipeGrid, PipeLoopError, classify


def show(console: Console, name: str, grid: PipeGrid) -> LoopAnalysis | None:
    """Classify one grid and print its rendering."""
    console.rule(name)
    try:
        analysis = classify(grid)
    except PipeLoopError as e:
        console.print(f"[bold red]✗ {e}[/]")
        return None
    console.print(Text.from_ansi(render(analysis.maze, border=True)))
    console.print()
    return analysis


def main(argv: list[str]) -> int:
    verbose = "-v" in argv
    paths = [arg for arg in argv if arg != "-v"]
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if paths:
        grids = [(path, load_grid(path)) for path in paths]
    else:
        grids = [(name, parse_grid(text)) for name, (text, _, _) in EXAMPLES.items()]

    console = Console()
    table = Table(title="Pipe loops")
    table.add_column("Grid")
    table.add_column("Size", justify="right")
    table.add_column("Loop", justify="right")
    table.add_column("Farthest", justify="right")
    table.add_column("Inverted")
    table.add_column("Enclosed", justify="right")

    failures = 0
    for name, grid in grids:
        analysis = show(console, name, grid)
        if analysis is None:
            failures += 1
            table.add_row(name, f"{grid.rows}x{grid.cols}", "-", "-", "-", "[red]error[/]")
            continue
        table.add_row(
            name,
            f"{grid.rows}x{grid.cols}",
            str(analysis.loop_length),
            str(analysis.loop_length // 2),
            "yes" if analysis.inverted else "no",
            str(analysis.enclosed),
        )

    console.print(table)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
