"""
Grid parsing utilities for pipe mazes.

Format:
- One row per line
- One character per cell: | - L J 7 F . S
- Leading/trailing blank lines and surrounding whitespace are ignored
"""

from __future__ import annotations

import logging
from pathlib import Path

from pipe_types import PipeGrid, Position, Tile

__all__ = ["parse_grid", "load_grid"]

logger = logging.getLogger(__name__)

VALID_CHARS = "".join(tile.value for tile in Tile)


def parse_grid(definition: str) -> PipeGrid:
    """
    Parse a pipe maze from its text form.

    Example:
        \"\"\"
        .....
        .S-7.
        .|.|.
        .L-J.
        .....
        \"\"\"

        Creates a 5x5 PipeGrid with start at Position(1, 1).

    Args:
        definition: Multi-line string, one grid row per line

    Returns:
        PipeGrid with the Start position recorded

    Raises:
        ValueError: On unknown characters, ragged rows, or a Start count other than one
    """
    row_strings = [line.strip() for line in definition.strip().splitlines() if line.strip()]
    if not row_strings:
        raise ValueError("Empty grid definition")

    rows: list[tuple[Tile, ...]] = []
    starts: list[Position] = []

    for row_idx, row_str in enumerate(row_strings):
        tiles: list[Tile] = []
        for col_idx, char in enumerate(row_str):
            try:
                tile = Tile(char)
            except ValueError:
                raise ValueError(
                    f"Invalid character '{char}'\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters: {' '.join(VALID_CHARS)}"
                ) from None
            if tile is Tile.START:
                starts.append(Position(row_idx, col_idx))
            tiles.append(tile)
        rows.append(tuple(tiles))

    # Validate all rows have same length
    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    if len(starts) != 1:
        located = ", ".join(f"({p.row}, {p.col})" for p in starts) or "none"
        raise ValueError(
            f"Expected exactly one start tile 'S', found {len(starts)}\n"
            f"  Positions: {located}"
        )

    logger.debug("parse_grid: %dx%d grid, start=%s", len(rows), cols, starts[0])
    return PipeGrid(tuple(rows), starts[0])


def load_grid(path: str | Path) -> PipeGrid:
    """Read and parse a pipe maze from a text file."""
    return parse_grid(Path(path).read_text(encoding="utf-8"))
