"""RunLengthAutomaton: straight / turn / reverse rules."""

import pytest

from crucible.core.automaton import RunLengthAutomaton
from crucible.core.errors import InvalidConstraint
from crucible.core.types import Direction, SearchState

E, W, N, S = Direction.EAST, Direction.WEST, Direction.NORTH, Direction.SOUTH


def at(direction, run):
    return SearchState((5, 5), direction, run)


def test_start_state_allows_every_direction():
    a = RunLengthAutomaton(4, 10)
    succ = dict(a.successors(at(E, 0)))
    assert succ == {N: 1, S: 1, E: 1, W: 1}


def test_straight_until_max_run():
    a = RunLengthAutomaton(0, 3)
    assert a.advance(at(E, 1), E) == 2
    assert a.advance(at(E, 2), E) == 3
    assert a.advance(at(E, 3), E) is None


def test_turn_needs_min_run():
    a = RunLengthAutomaton(4, 10)
    for run in (1, 2, 3):
        assert a.advance(at(E, run), N) is None
        assert a.advance(at(E, run), S) is None
    assert a.advance(at(E, 4), N) == 1
    assert a.advance(at(E, 4), S) == 1


@pytest.mark.parametrize("run", [1, 2, 3])
def test_reverse_is_never_legal(run):
    a = RunLengthAutomaton(0, 3)
    assert a.advance(at(E, run), W) is None
    assert a.advance(at(N, run), S) is None


def test_at_most_three_successors_after_first_step():
    a = RunLengthAutomaton(0, 3)
    assert {d for d, _ in a.successors(at(E, 1))} == {E, N, S}
    assert {d for d, _ in a.successors(at(E, 3))} == {N, S}
    assert {d for d, _ in RunLengthAutomaton(4, 10).successors(at(E, 2))} == {E}


def test_unbounded_max_run():
    a = RunLengthAutomaton(0, None)
    assert a.advance(at(E, 1000), E) == 1001


def test_allows_stop():
    a = RunLengthAutomaton(4, 10)
    assert not a.allows_stop(3)
    assert a.allows_stop(4)
    assert RunLengthAutomaton(0, 3).allows_stop(0)


@pytest.mark.parametrize("min_run,max_run", [(-1, 3), (1, 0), (5, 4)])
def test_invalid_bounds(min_run, max_run):
    with pytest.raises(InvalidConstraint):
        RunLengthAutomaton(min_run, max_run)


def test_zero_max_run_forces_a_turn_every_step():
    a = RunLengthAutomaton(0, 0)
    assert a.advance(at(E, 0), E) == 1
    assert {d for d, _ in a.successors(at(E, 1))} == {N, S}
