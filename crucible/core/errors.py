# crucible/core/errors.py
#!/usr/bin/env python3


class CrucibleError(Exception):
    """Base class for everything the engine raises."""


class MalformedGrid(CrucibleError, ValueError):
    """Empty grid, ragged rows, or a cell that is not a non-negative int."""


class OutOfRange(CrucibleError, IndexError):
    """Coordinate outside the grid."""

    def __init__(self, coord, rows: int, cols: int):
        super().__init__(f"{coord} is outside a {rows}x{cols} grid")
        self.coord = coord
        self.rows = rows
        self.cols = cols


class InvalidConstraint(CrucibleError, ValueError):
    """Run-length bounds that no path could ever satisfy."""


class Unreachable(CrucibleError, LookupError):
    """Frontier exhausted before any state satisfied the goal."""

    def __init__(self, start, popped: int):
        super().__init__(f"no path from {start} satisfies the goal ({popped} states expanded)")
        self.start = start
        self.popped = popped
