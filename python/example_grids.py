"""
Example pipe mazes with known answers.

Each entry maps a name to (grid text, farthest distance, enclosed cells);
the farthest distance is None where it is not checked.
"""

from __future__ import annotations

SQUARE = """
.....
.S-7.
.|.|.
.L-J.
.....
"""

WINDING = """
..F7.
.FJ|.
SJ.L7
|F--J
LJ...
"""

GAPPED = """
...........
.S-------7.
.|F-----7|.
.||.....||.
.||.....||.
.|L-7.F-J|.
.|..|.|..|.
.L--J.L--J.
...........
"""

SQUEEZED = """
..........
.S------7.
.|F----7|.
.||....||.
.||....||.
.|L-7F-J|.
.|..||..|.
.L--JL--J.
..........
"""

STRAY_PIPES = """
.F----7F7F7F7F-7....
.|F--7||||||||FJ....
.||.FJ||||||||L7....
FJL7L7LJLJ||LJ.L-7..
L--J.L7...LJS7F-7L7.
....F-J..F7FJ|L7L7L7
....L7.F7||L7|.L7L7|
.....|FJLJ|FJ|F7|.LJ
....FJL-7.||.||||...
....L---J.LJ.LJLJ...
"""

JUNK_EVERYWHERE = """
FF7FSF7F7F7F7F7F---7
L|LJ||||||||||||F--J
FL-7LJLJ||||||LJL-77
F--JF--7||LJLJ7F7FJ-
L---JF-JLJ.||-FJLJJ7
|F|F-JF---7F7-L7L|7|
|FFJF7L7F-JF7|JL---7
7-L-JL7||F7|L7F-7F7|
L.L7LFJ|||||FJL7||LJ
L7JLJL-JLJLJL--JLJ.L
"""

TIGHT = """
S7.
LJ.
...
"""

EXAMPLES: dict[str, tuple[str, int | None, int]] = {
    "square": (SQUARE, 4, 1),
    "winding": (WINDING, 8, 1),
    "gapped": (GAPPED, 23, 4),
    "squeezed": (SQUEEZED, 22, 4),
    "stray_pipes": (STRAY_PIPES, None, 8),
    "junk_everywhere": (JUNK_EVERYWHERE, None, 10),
    "tight": (TIGHT, 2, 0),
}


def mirror(definition: str) -> str:
    """Reflect a grid left-to-right."""
    swap = str.maketrans("LJF7", "JL7F")
    return "\n".join(line[::-1].translate(swap) for line in definition.strip().splitlines())


def flip(definition: str) -> str:
    """Reflect a grid top-to-bottom."""
    swap = str.maketrans("LFJ7", "FL7J")
    return "\n".join(line.translate(swap) for line in reversed(definition.strip().splitlines()))


def transpose(definition: str) -> str:
    """Reflect a grid across its main diagonal."""
    swap = str.maketrans("|-L7", "-|7L")
    rows = definition.strip().splitlines()
    return "\n".join("".join(col).translate(swap) for col in zip(*rows))
