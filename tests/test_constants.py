import pytest

from vmsim.constants import (
    ProcState,
    Replacement,
    parse_replacement,
)


@pytest.mark.parametrize(
    "name, expected, value",
    [
        ("random", Replacement.RANDOM, 1),
        ("lru", Replacement.APPROX_LRU, 2),
        ("fifo", Replacement.FIFO, 3),
    ],
)
def test_parse_replacement_known_names(name, expected, value):
    policy = parse_replacement(name)
    assert policy is expected
    assert int(policy) == value


@pytest.mark.parametrize("name", ["", "LRU", "clock", "fifo "])
def test_parse_replacement_rejects_unknown(name):
    with pytest.raises(ValueError, match="Unknown replacement algorithm"):
        parse_replacement(name)


@pytest.mark.parametrize("name", ["random", "lru", "fifo"])
def test_parsed_policy_round_trips_through_value(name):
    policy = parse_replacement(name)
    assert Replacement(int(policy)) is policy


@pytest.mark.parametrize(
    "value, expected",
    [(1, ProcState.RUNNING), (0, ProcState.STOPPED)],
)
def test_proc_state_from_value(value, expected):
    state = ProcState(value)
    assert state is expected
    assert bool(state) == bool(value)


def test_proc_state_rejects_unknown_value():
    with pytest.raises(ValueError):
        ProcState(2)