import math

import pytest

from vmsim.stats import MEMORY_ACCESS_TIME, Stats


def test_compute_stats():
    stats = Stats(accesses=21, writebacks=5, page_faults=3)
    result = stats.compute_amat()
    assert int(result) == 81152
    assert stats.amat == result


def test_no_disk_activity_costs_one_memory_access():
    stats = Stats(accesses=10)
    assert stats.compute_amat() == MEMORY_ACCESS_TIME


def test_faults_increase_amat():
    cheap = Stats(accesses=100, page_faults=1).compute_amat()
    costly = Stats(accesses=100, page_faults=5).compute_amat()
    assert costly > cheap > MEMORY_ACCESS_TIME


def test_zero_accesses_gives_nan():
    stats = Stats()
    result = stats.compute_amat()
    assert result == pytest.approx(math.nan, nan_ok=True)
    assert str(result) == "nan"
    assert str(stats.amat) == "nan"


def test_defaults_are_zero():
    stats = Stats()
    assert (stats.accesses, stats.page_faults, stats.writebacks) == (0, 0, 0)