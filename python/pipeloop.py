"""
Pipe loop tracer with interior/exterior classification.
Pipeline: locate entry -> walk loop -> mark sides -> correct orientation -> flood fill -> count.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterator

from pipe_parser import parse_grid
from pipe_types import (
    CellState,
    Direction,
    InvalidEntryError,
    PipeGrid,
    PipeLoopError,
    Position,
    RuleSet,
    StructuralError,
    Tile,
)

__all__ = [
    "CellState",
    "Direction",
    "InvalidEntryError",
    "LoopAnalysis",
    "LoopEntry",
    "LoopStep",
    "Maze",
    "PipeGrid",
    "PipeLoopError",
    "Position",
    "Rightmost",
    "RuleSet",
    "StructuralError",
    "Tile",
    "classify",
    "correct_orientation",
    "count_enclosed",
    "enclosed_area",
    "farthest_distance",
    "flood_fill",
    "invert_labels",
    "locate_entry",
    "mark_boundary",
    "transition",
    "walk",
]

logger = logging.getLogger(__name__)


# =============================================================================
# Transition Function
# =============================================================================


def _build_transitions() -> dict[tuple[Tile, Direction], Direction]:
    # Travelling d into a pipe means arriving through its d.inverse side
    table: dict[tuple[Tile, Direction], Direction] = {}
    for tile in Tile:
        for incoming in Direction:
            if incoming.inverse in tile.connections:
                (outgoing,) = tile.connections - {incoming.inverse}
                table[(tile, incoming)] = outgoing
    return table


_TRANSITIONS = _build_transitions()


def transition(
    tile: Tile, incoming: Direction, position: Position
) -> tuple[Direction, Position]:
    """
    Advance through one tile.

    Args:
        tile: The tile at `position`
        incoming: Direction of travel when entering the tile
        position: Where the tile sits

    Returns:
        (outgoing direction, next position). The next position is not bounds-checked.

    Raises:
        InvalidEntryError: If the tile cannot be entered travelling `incoming`
    """
    if tile is Tile.GROUND:
        raise InvalidEntryError(f"Cannot traverse empty ground at ({position.row}, {position.col})")
    if tile is Tile.START:
        raise InvalidEntryError("Start tile has no shape until the loop entry is located")

    outgoing = _TRANSITIONS.get((tile, incoming))
    if outgoing is None:
        raise InvalidEntryError(
            f"Tile {tile.name} ('{tile.value}') at ({position.row}, {position.col}) "
            f"cannot be entered travelling {incoming.name}"
        )
    return outgoing, position.step(outgoing)


# =============================================================================
# Loop Locator
# =============================================================================


@dataclass(frozen=True)
class LoopEntry:
    """How the loop leaves the Start tile."""

    start_tile: Tile  # Synthesized shape of the Start cell
    departure: Direction
    first_cell: Position


def locate_entry(grid: PipeGrid, rules: RuleSet | None = None) -> LoopEntry:
    """
    Find the two loop neighbors of the Start cell.

    Each in-bounds neighbor is probed with every incoming direction; a probe
    succeeds when the neighbor's transition lands back on Start. The first
    success (in `rules.scan_order`) gives the departure; both together give the
    Start tile's shape.

    Raises:
        StructuralError: If the Start cell does not have exactly two loop neighbors
    """
    rules = rules or RuleSet()
    start = grid.start
    connected: list[tuple[Direction, Position]] = []

    for direction in rules.scan_order:
        neighbor = start.step(direction)
        if not grid.in_bounds(neighbor):
            continue
        for incoming in Direction:
            try:
                outgoing, landing = transition(grid[neighbor], incoming, neighbor)
            except InvalidEntryError:
                continue
            if landing == start:
                connected.append((outgoing.inverse, neighbor))
                break

    if len(connected) != 2:
        raise StructuralError(
            f"Start tile at ({start.row}, {start.col}) is not loop-valid: "
            f"{len(connected)} connected neighbor(s), expected 2"
        )

    (departure, first_cell), (other, _) = connected
    start_tile = Tile.from_directions(departure, other)
    logger.debug(
        "locate_entry: start=%s shape=%s departure=%s",
        start,
        start_tile.name,
        departure.name,
    )
    return LoopEntry(start_tile, departure, first_cell)


# =============================================================================
# Maze: grid plus classification state
# =============================================================================


class Maze:
    """
    A pipe grid with a mutable classification layer.

    The Start tile's shape is resolved on first use and reused afterwards.
    """

    def __init__(self, grid: PipeGrid, rules: RuleSet | None = None) -> None:
        self.grid = grid
        self.rules = rules or RuleSet()
        self.state: list[list[CellState]] = [
            [CellState.UNKNOWN] * grid.cols for _ in range(grid.rows)
        ]
        self._entry: LoopEntry | None = None

    @property
    def entry(self) -> LoopEntry:
        if self._entry is None:
            self._entry = locate_entry(self.grid, self.rules)
        return self._entry

    def shape_at(self, pos: Position) -> Tile:
        """The tile at `pos`, with Start replaced by its synthesized shape."""
        tile = self.grid[pos]
        if tile is Tile.START:
            return self.entry.start_tile
        return tile

    def next(self, incoming: Direction, pos: Position) -> tuple[Direction, Position]:
        return transition(self.shape_at(pos), incoming, pos)

    def state_at(self, pos: Position) -> CellState:
        return self.state[pos.row][pos.col]

    def set_state(self, pos: Position, state: CellState) -> None:
        self.state[pos.row][pos.col] = state

    def positions(self) -> Iterator[Position]:
        for r in range(self.grid.rows):
            for c in range(self.grid.cols):
                yield Position(r, c)

    def count(self, state: CellState) -> int:
        return sum(row.count(state) for row in self.state)


# =============================================================================
# Loop Walker
# =============================================================================


@dataclass(frozen=True)
class LoopStep:
    """One loop cell as seen by the walker."""

    position: Position
    incoming: Direction
    # Side directions on entry and exit (a single entry when they agree)
    perpendiculars: tuple[Direction, ...]


def walk(maze: Maze) -> list[LoopStep]:
    """
    Walk the loop from the cell after Start back to Start.

    The perpendicular starts to the right of the departure direction and is
    carried through each tile with `Tile.next_perpendicular`, so every step's
    perpendiculars lie on the same side of the loop.

    Returns:
        Ordered loop steps; the last one is the Start cell

    Raises:
        StructuralError: If the walk leaves the grid or hits a tile it cannot enter
    """
    grid = maze.grid
    entry = maze.entry
    direction = entry.departure
    position = entry.first_cell
    perpendicular = direction.clockwise()
    steps: list[LoopStep] = []

    while True:
        if not grid.in_bounds(position):
            raise StructuralError(
                f"Loop does not close: walked off the grid at ({position.row}, {position.col})"
            )
        shape = maze.shape_at(position)
        try:
            outgoing, next_position = transition(shape, direction, position)
        except InvalidEntryError as e:
            raise StructuralError(f"Loop does not close: {e}") from e

        after = shape.next_perpendicular(perpendicular)
        sides = (perpendicular,) if after is perpendicular else (perpendicular, after)
        steps.append(LoopStep(position, direction, sides))

        if position == grid.start:
            break
        direction, position, perpendicular = outgoing, next_position, after

    logger.info("walk: loop length %d", len(steps))
    return steps


def farthest_distance(maze: Maze) -> int:
    """Steps along the loop from Start to the farthest loop cell."""
    return len(walk(maze)) // 2


# =============================================================================
# Boundary Marker
# =============================================================================


@dataclass(frozen=True)
class Rightmost:
    """The side directions seen at the loop's rightmost column."""

    column: int
    perpendiculars: tuple[Direction, ...]


def _label(maze: Maze, pos: Position, state: CellState) -> None:
    # Out-of-bounds cells and loop cells keep what they have
    if maze.grid.in_bounds(pos) and maze.state_at(pos) is not CellState.WALL:
        maze.set_state(pos, state)


def mark_boundary(maze: Maze, steps: list[LoopStep]) -> Rightmost:
    """
    Mark loop cells as Wall and seed their lateral neighbors.

    Neighbors in the walker's perpendicular direction(s) become provisional
    Outside. With `rules.mark_far_side`, the remaining lateral neighbors become
    provisional Inside.

    Returns:
        The perpendiculars recorded at the rightmost loop column
    """
    for step in steps:
        maze.set_state(step.position, CellState.WALL)

    rightmost = Rightmost(-1, ())
    for step in steps:
        for side in step.perpendiculars:
            _label(maze, step.position.step(side), CellState.OUTSIDE)
        if maze.rules.mark_far_side:
            shape = maze.shape_at(step.position)
            for lateral in shape.laterals - set(step.perpendiculars):
                _label(maze, step.position.step(lateral), CellState.INSIDE)
        if step.position.col >= rightmost.column:
            rightmost = Rightmost(step.position.col, step.perpendiculars)

    return rightmost


# =============================================================================
# Orientation Corrector
# =============================================================================


def invert_labels(maze: Maze) -> Maze:
    """Swap every Inside and Outside label in place."""
    for row in maze.state:
        for c, state in enumerate(row):
            row[c] = state.inverted
    return maze


def correct_orientation(maze: Maze, rightmost: Rightmost) -> bool:
    """
    Flip provisional labels if they were seeded on the wrong side.

    Anything east of the rightmost loop column is outside, so a westward
    perpendicular there means "Outside" was written on the interior.

    Returns:
        True if labels were inverted
    """
    inverted = Direction.W in rightmost.perpendiculars
    if inverted:
        invert_labels(maze)
    logger.debug(
        "correct_orientation: rightmost column=%d perpendiculars=%s inverted=%s",
        rightmost.column,
        [d.name for d in rightmost.perpendiculars],
        inverted,
    )
    return inverted


# =============================================================================
# Flood Fill
# =============================================================================


def flood_fill(maze: Maze) -> Maze:
    """
    Spread Inside/Outside labels into adjacent Unknown cells.

    Multi-source breadth-first fill; each seed spreads its own label. Wall
    cells are never relabeled and each Unknown cell is labeled at most once.
    """
    queue = deque(pos for pos in maze.positions() if maze.state_at(pos).is_side)
    while queue:
        pos = queue.popleft()
        label = maze.state_at(pos)
        for direction in Direction:
            neighbor = pos.step(direction)
            if maze.grid.in_bounds(neighbor) and maze.state_at(neighbor) is CellState.UNKNOWN:
                maze.set_state(neighbor, label)
                queue.append(neighbor)
    return maze


# =============================================================================
# Counter and pipeline
# =============================================================================


def count_enclosed(maze: Maze) -> int:
    """
    Count enclosed cells.

    Falls back to the Unknown count when nothing is labeled Inside, which
    happens with single-sided marking when the seeded side was the exterior.
    """
    inside = maze.count(CellState.INSIDE)
    if inside > 0:
        return inside
    return maze.count(CellState.UNKNOWN)


@dataclass
class LoopAnalysis:
    """Result of running the full classification pipeline."""

    maze: Maze
    steps: list[LoopStep]
    rightmost: Rightmost
    inverted: bool

    @property
    def loop_length(self) -> int:
        return len(self.steps)

    @property
    def enclosed(self) -> int:
        return count_enclosed(self.maze)


def classify(grid: PipeGrid, rules: RuleSet | None = None) -> LoopAnalysis:
    """
    Run the pipeline: locate -> walk + mark -> correct -> flood fill.

    Raises:
        StructuralError: If the grid does not hold a single loop through Start
    """
    maze = Maze(grid, rules)
    steps = walk(maze)
    rightmost = mark_boundary(maze, steps)
    inverted = correct_orientation(maze, rightmost)
    flood_fill(maze)
    logger.info(
        "classify: loop=%d inside=%d outside=%d unknown=%d",
        len(steps),
        maze.count(CellState.INSIDE),
        maze.count(CellState.OUTSIDE),
        maze.count(CellState.UNKNOWN),
    )
    return LoopAnalysis(maze, steps, rightmost, inverted)


def enclosed_area(definition: str, rules: RuleSet | None = None) -> int:
    """Number of cells enclosed by the loop in a textual grid."""
    return classify(parse_grid(definition), rules).enclosed
