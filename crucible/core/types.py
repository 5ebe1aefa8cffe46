# crucible/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any, Iterable, Sequence

from crucible.core.errors import MalformedGrid, OutOfRange

Coord = Tuple[int, int]  # (row, col)


class Direction(Enum):
    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def delta(self) -> Coord:
        return self.value

    def turn_left(self) -> "Direction":
        return _LEFT[self]

    def turn_right(self) -> "Direction":
        return _RIGHT[self]

    def opposite(self) -> "Direction":
        return _LEFT[_LEFT[self]]

    def step(self, c: Coord) -> Coord:
        dr, dc = self.value
        return (c[0] + dr, c[1] + dc)


_LEFT = {
    Direction.NORTH: Direction.WEST,
    Direction.WEST: Direction.SOUTH,
    Direction.SOUTH: Direction.EAST,
    Direction.EAST: Direction.NORTH,
}
_RIGHT = {v: k for k, v in _LEFT.items()}


@dataclass(frozen=True)
class Grid:
    cells: Tuple[Tuple[int, ...], ...]   # [row][col]

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[int]]) -> "Grid":
        table = tuple(tuple(r) for r in rows)
        if not table or not table[0]:
            raise MalformedGrid("grid must have at least one row and one column")
        width = len(table[0])
        for i, r in enumerate(table):
            if len(r) != width:
                raise MalformedGrid(f"row {i} has {len(r)} cells, expected {width}")
            for j, v in enumerate(r):
                # bool is an int subclass but never a cost
                if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                    raise MalformedGrid(f"cell ({i}, {j}) has invalid cost {v!r}")
        return cls(table)

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    def in_bounds(self, c: Coord) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def cost(self, c: Coord) -> int:
        if not self.in_bounds(c):
            raise OutOfRange(c, self.rows, self.cols)
        r, col = c
        return self.cells[r][col]

    @property
    def corner(self) -> Coord:
        """Bottom-right cell, the usual target."""
        return (self.rows - 1, self.cols - 1)


@dataclass(frozen=True)
class SearchState:
    coord: Coord
    direction: Direction
    run_length: int


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Coord] = field(default_factory=list)
    closed: List[Coord] = field(default_factory=list)
    current: Optional[Coord] = None
    path: Optional[List[Coord]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
