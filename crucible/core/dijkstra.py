# crucible/core/dijkstra.py
#!/usr/bin/env python3
"""
Dijkstra over (cell, direction, run_length) states, one expansion per step().

Implements the Algorithm API expected by the viewer:
- init(grid, start, goal, automaton) - reset() - step() -> StepResult

Frontier entries are (g, seq, state). Stale entries are left in the heap and
skipped when popped. The goal is tested on pop, so the first goal state
popped is optimal.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Tuple
import heapq
from math import inf

from crucible.core.automaton import RunLengthAutomaton
from crucible.core.errors import Unreachable
from crucible.core.types import Coord, Direction, Grid, SearchState, StepResult

GoalFn = Callable[[Coord, int], bool]   # (cell, run_length) -> bool

START_FACING = Direction.EAST


def reach(target: Coord, automaton: RunLengthAutomaton) -> GoalFn:
    """Goal: stand on `target` with a run the automaton lets us stop on."""
    def goal(c: Coord, run_length: int) -> bool:
        return c == target and automaton.allows_stop(run_length)
    return goal


@dataclass
class ConstrainedDijkstra:
    name: str = "Dijkstra"

    grid: Optional[Grid] = None
    start: Optional[Coord] = None
    goal: Optional[GoalFn] = None
    automaton: RunLengthAutomaton = field(default_factory=RunLengthAutomaton)

    open_pq: List[Tuple[int, int, SearchState]] = field(default_factory=list)   # (g, seq, state)
    open_set: Set[Coord] = field(default_factory=set)     # cells, for overlay
    closed_set: Set[Coord] = field(default_factory=set)
    g: Dict[SearchState, int] = field(default_factory=dict)
    parent: Dict[SearchState, SearchState] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    goal_state: Optional[SearchState] = None
    last_state: Optional[SearchState] = None   # most recent non-stale pop
    seq: int = 0

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Coord, goal: GoalFn,
             automaton: RunLengthAutomaton) -> None:
        # fails with OutOfRange before any state exists
        grid.cost(start)
        self.grid = grid
        self.start = start
        self.goal = goal
        self.automaton = automaton
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.open_pq.clear()
        self.open_set.clear()
        self.closed_set.clear()
        self.g.clear()
        self.parent.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.goal_state = None
        self.last_state = None
        self.seq = 0

        s = self.start_state
        self.g[s] = 0
        heapq.heappush(self.open_pq, (0, self._bump(), s))
        self.open_set.add(s.coord)

    @property
    def start_state(self) -> SearchState:
        return SearchState(self.start, START_FACING, 0)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _successors(self, u: SearchState) -> List[SearchState]:
        out: List[SearchState] = []
        for d, run in self.automaton.successors(u):
            n = d.step(u.coord)
            # off-grid moves are never generated
            if self.grid.in_bounds(n):
                out.append(SearchState(n, d, run))
        return out

    def _reconstruct_path(self, end: SearchState) -> List[SearchState]:
        path: List[SearchState] = []
        cur = end
        while True:
            path.append(cur)
            if cur == self.start_state:
                break
            cur = self.parent[cur]
        path.reverse()
        return path

    def path_states(self) -> List[SearchState]:
        if self.goal_state is None:
            return []
        return self._reconstruct_path(self.goal_state)

    def path_cells(self) -> List[Coord]:
        return [s.coord for s in self.path_states()]

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE expansion:
          - Pop the cheapest state, skip it if stale.
          - If it satisfies the goal, finish.
          - Else relax every legal successor with edge cost = cost(dest).
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self.path_cells()
            return StepResult(status="done", path=path,
                              metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.open_pq:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        g_u, _, u = heapq.heappop(self.open_pq)
        if g_u > self.g.get(u, inf):
            return StepResult(status="running", current=u.coord, metrics=self._metrics())

        self.popped_count += 1
        self.last_state = u
        self.open_set.discard(u.coord)
        self.closed_set.add(u.coord)

        if self.goal(u.coord, u.run_length):
            self.done = True
            self.goal_state = u
            path = self.path_cells()
            return StepResult(status="done", closed=[u.coord], current=u.coord, path=path,
                              metrics=self._metrics(path_len=len(path)))

        opened_now: List[Coord] = []
        for v in self._successors(u):
            alt = g_u + self.grid.cost(v.coord)
            if alt < self.g.get(v, inf):
                self.g[v] = alt
                self.parent[v] = u
                heapq.heappush(self.open_pq, (alt, self._bump(), v))
                if v.coord not in self.closed_set and v.coord not in self.open_set:
                    self.open_set.add(v.coord)
                    opened_now.append(v.coord)

        return StepResult(status="running", opened=opened_now, closed=[u.coord], current=u.coord,
                          metrics=self._metrics())

    def run(self) -> StepResult:
        """Step until done or the frontier is exhausted."""
        while True:
            res = self.step()
            if res.status in ("done", "no_path", "idle"):
                return res

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_pq),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
            "total_cost": self.g[self.goal_state] if self.goal_state is not None else None,
        }


def _solve(grid: Grid, start: Coord, goal: GoalFn,
           automaton: RunLengthAutomaton) -> ConstrainedDijkstra:
    algo = ConstrainedDijkstra()
    algo.init(grid, start, goal, automaton)
    res = algo.run()
    if res.status != "done":
        raise Unreachable(start, algo.popped_count)
    return algo


def shortest_cost(grid: Grid, start: Coord, goal: GoalFn,
                  automaton: RunLengthAutomaton) -> int:
    """Minimum accumulated cost of any legal walk from `start` to a goal state."""
    algo = _solve(grid, start, goal, automaton)
    return algo.g[algo.goal_state]


def shortest_path(grid: Grid, start: Coord, goal: GoalFn,
                  automaton: RunLengthAutomaton) -> Tuple[int, List[SearchState]]:
    """Like shortest_cost, plus the states walked from the start state to the goal."""
    algo = _solve(grid, start, goal, automaton)
    return algo.g[algo.goal_state], algo.path_states()
