"""
Shared type definitions for the pipe loop tracer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Cardinal direction for traversal."""

    N = "N"  # Up (decreasing row)
    S = "S"  # Down (increasing row)
    E = "E"  # Right (increasing col)
    W = "W"  # Left (decreasing col)

    @property
    def delta(self) -> tuple[int, int]:
        """(row_delta, col_delta) of one step in this direction."""
        return _DELTAS[self]

    @property
    def inverse(self) -> Direction:
        return _INVERSES[self]

    def is_parallel(self, other: Direction) -> bool:
        """True if both directions lie on the same axis (N/S or E/W)."""
        return self is other or self is other.inverse

    def clockwise(self) -> Direction:
        """The direction to the right of travel."""
        return _CLOCKWISE[self]


_DELTAS = {
    Direction.N: (-1, 0),
    Direction.S: (1, 0),
    Direction.E: (0, 1),
    Direction.W: (0, -1),
}

_INVERSES = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}

_CLOCKWISE = {
    Direction.N: Direction.E,
    Direction.E: Direction.S,
    Direction.S: Direction.W,
    Direction.W: Direction.N,
}


# =============================================================================
# Tiles
# =============================================================================


class Tile(Enum):
    """A grid tile, keyed by its input character."""

    GROUND = "."
    START = "S"
    NS = "|"
    EW = "-"
    NE = "L"
    NW = "J"
    SW = "7"
    SE = "F"

    @property
    def connections(self) -> frozenset[Direction]:
        """The two directions a pipe connects (empty for Ground and Start)."""
        return _CONNECTIONS.get(self, frozenset())

    @property
    def is_pipe(self) -> bool:
        return bool(self.connections)

    @property
    def is_straight(self) -> bool:
        return self in (Tile.NS, Tile.EW)

    @property
    def laterals(self) -> frozenset[Direction]:
        """The two directions a pipe does NOT connect."""
        if not self.is_pipe:
            raise ValueError(f"Tile {self.name} has no lateral sides")
        return frozenset(Direction) - self.connections

    def next_perpendicular(self, perpendicular: Direction) -> Direction:
        """
        Carry a side direction through this tile.

        Straight pipes keep the side unchanged. Elbows reflect it across the
        elbow's diagonal, so a side that pointed right of travel on the way in
        still points right of travel on the way out.
        """
        if self.is_straight:
            return perpendicular
        try:
            return _ELBOW_PERPENDICULARS[self][perpendicular]
        except KeyError:
            raise ValueError(f"Tile {self.name} cannot carry a perpendicular") from None

    @classmethod
    def from_directions(cls, first: Direction, second: Direction) -> Tile:
        """Build the pipe tile connecting two directions."""
        tile = _TILES_BY_CONNECTIONS.get(frozenset((first, second)))
        if tile is None:
            raise ValueError(
                f"No tile connects {first.name} and {second.name}"
            )
        return tile


_CONNECTIONS = {
    Tile.NS: frozenset((Direction.N, Direction.S)),
    Tile.EW: frozenset((Direction.E, Direction.W)),
    Tile.NE: frozenset((Direction.N, Direction.E)),
    Tile.NW: frozenset((Direction.N, Direction.W)),
    Tile.SW: frozenset((Direction.S, Direction.W)),
    Tile.SE: frozenset((Direction.S, Direction.E)),
}

_TILES_BY_CONNECTIONS = {conns: tile for tile, conns in _CONNECTIONS.items()}

_ELBOW_PERPENDICULARS = {
    Tile.NE: {
        Direction.N: Direction.E,
        Direction.S: Direction.W,
        Direction.E: Direction.N,
        Direction.W: Direction.S,
    },
    Tile.NW: {
        Direction.N: Direction.W,
        Direction.S: Direction.E,
        Direction.E: Direction.S,
        Direction.W: Direction.N,
    },
    Tile.SE: {
        Direction.N: Direction.W,
        Direction.S: Direction.E,
        Direction.E: Direction.S,
        Direction.W: Direction.N,
    },
    Tile.SW: {
        Direction.N: Direction.E,
        Direction.S: Direction.W,
        Direction.E: Direction.N,
        Direction.W: Direction.S,
    },
}


class CellState(Enum):
    """Classification of a grid cell."""

    UNKNOWN = "unknown"
    WALL = "wall"  # Part of the loop
    INSIDE = "inside"
    OUTSIDE = "outside"

    @property
    def inverted(self) -> CellState:
        """Swap Inside and Outside; Unknown and Wall are unchanged."""
        if self is CellState.INSIDE:
            return CellState.OUTSIDE
        if self is CellState.OUTSIDE:
            return CellState.INSIDE
        return self

    @property
    def is_side(self) -> bool:
        return self in (CellState.INSIDE, CellState.OUTSIDE)


# =============================================================================
# Grid Definition Types
# =============================================================================


@dataclass(frozen=True)
class Position:
    """A (row, col) position within the grid."""

    row: int
    col: int

    def step(self, direction: Direction) -> Position:
        """The neighboring position one cell away. No bounds checking."""
        dr, dc = direction.delta
        return Position(self.row + dr, self.col + dc)


@dataclass(frozen=True)
class PipeGrid:
    """A 2D grid of tiles with exactly one Start tile."""

    tiles: tuple[tuple[Tile, ...], ...]
    start: Position

    @property
    def rows(self) -> int:
        return len(self.tiles)

    @property
    def cols(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def __getitem__(self, pos: Position) -> Tile:
        return self.tiles[pos.row][pos.col]


@dataclass(frozen=True)
class RuleSet:
    """Rules governing loop classification."""

    # Loop Locator neighbor scan order; the first hit gives the departure direction
    scan_order: tuple[Direction, ...] = (Direction.N, Direction.S, Direction.W, Direction.E)
    # Also seed the side opposite the walker's perpendicular (as Inside)
    mark_far_side: bool = True


# =============================================================================
# Errors
# =============================================================================


class PipeLoopError(ValueError):
    """Base class for pipe loop failures."""


class InvalidEntryError(PipeLoopError):
    """A tile cannot be entered travelling in the given direction."""


class StructuralError(PipeLoopError):
    """The grid does not hold a single closed loop through the Start tile."""
