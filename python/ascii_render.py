"""
ASCII rendering for classified pipe mazes.

Loop cells are drawn with box-drawing characters; every other cell shows its
classification (I = inside, O = outside, ? = unknown).
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from pipeloop import CellState, Maze, Position, Tile

logger = logging.getLogger(__name__)

PIPE_GLYPHS = {
    Tile.NS: "│",
    Tile.EW: "─",
    Tile.NE: "└",
    Tile.NW: "┘",
    Tile.SW: "┐",
    Tile.SE: "┌",
}

STATE_GLYPHS = {
    CellState.INSIDE: "I",
    CellState.OUTSIDE: "O",
    CellState.UNKNOWN: "?",
}


def _identity(s: str) -> str:
    return s


def render_cell(maze: Maze, pos: Position) -> str:
    """Single uncoloured character for one cell."""
    state = maze.state_at(pos)
    if state is CellState.WALL:
        return PIPE_GLYPHS[maze.shape_at(pos)]
    return STATE_GLYPHS[state]


def render(maze: Maze, colorize: bool = True, border: bool = False) -> str:
    """
    Render a maze after classification.

    Args:
        maze: The maze to render (any stage of the pipeline)
        colorize: Apply ANSI colours per cell state
        border: Surround the grid with a box

    Returns:
        Rendered string, one line per grid row
    """
    palette: dict[CellState, Callable[[str], str]] = {
        CellState.WALL: chalk.white,
        CellState.INSIDE: chalk.greenBright,
        CellState.OUTSIDE: chalk.blue,
        CellState.UNKNOWN: chalk.yellow,
    }

    lines: list[str] = []
    for r in range(maze.grid.rows):
        parts: list[str] = []
        for c in range(maze.grid.cols):
            pos = Position(r, c)
            char = render_cell(maze, pos)
            if not colorize:
                parts.append(char)
            elif pos == maze.grid.start:
                # Start is highlighted (white background)
                parts.append(chalk.bgWhite.black(char))
            else:
                parts.append(palette[maze.state_at(pos)](char))
        lines.append("".join(parts))

    if border:
        frame = chalk.white if colorize else _identity
        width = maze.grid.cols
        lines = (
            [frame("┌" + "─" * width + "┐")]
            + [frame("│") + line + frame("│") for line in lines]
            + [frame("└" + "─" * width + "┘")]
        )

    logger.debug("render: %dx%d colorize=%s", maze.grid.rows, maze.grid.cols, colorize)
    return "\n".join(lines)
