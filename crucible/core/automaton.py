# crucible/core/automaton.py
#!/usr/bin/env python3
"""
Run-length movement rules.

A mover may go straight at most `max_run` cells in a row and must go
straight at least `min_run` cells before it may turn (or stop). It never
reverses. The synthetic start state (run_length 0) may leave in any
direction.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from crucible.core.errors import InvalidConstraint
from crucible.core.types import Direction, SearchState


@dataclass(frozen=True)
class RunLengthAutomaton:
    min_run: int = 0
    max_run: Optional[int] = None   # None = unbounded

    def __post_init__(self):
        if self.min_run < 0:
            raise InvalidConstraint(f"min_run must be >= 0, got {self.min_run}")
        # (0, 0) is valid: every step after the first is a turn
        if self.max_run is not None and self.max_run < self.min_run:
            raise InvalidConstraint(
                f"max_run ({self.max_run}) is below min_run ({self.min_run})")

    def advance(self, state: SearchState, candidate: Direction) -> Optional[int]:
        """Run length after moving `candidate` from `state`, or None if illegal."""
        if state.run_length == 0:
            return 1
        if candidate == state.direction:
            if self.max_run is None or state.run_length < self.max_run:
                return state.run_length + 1
            return None
        if candidate == state.direction.opposite():
            return None
        if state.run_length >= self.min_run:
            return 1
        return None

    def successors(self, state: SearchState) -> Iterator[Tuple[Direction, int]]:
        for d in Direction:
            run = self.advance(state, d)
            if run is not None:
                yield d, run

    def allows_stop(self, run_length: int) -> bool:
        return run_length >= self.min_run
