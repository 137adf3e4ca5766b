"""Built-in checks of address splitting, statistics and page replacement."""

import sys
from typing import Callable, List, Optional, TextIO, Tuple

from .addressing import (
    get_physical_address,
    get_vaddr_offset,
    get_vaddr_vpn,
    page_table_address,
    page_table_entry_address,
)
from .constants import OFFSET_LEN, ProcState, Replacement
from .mmu import Machine
from .stats import Stats
from .tables import Process


def _expect(condition: bool, description: str) -> None:
    if not condition:
        raise AssertionError(description)


def _test_get_vaddr_vpn() -> None:
    _expect(get_vaddr_vpn((0xFF << OFFSET_LEN) + 0x2032) == 0xFF, "get_vaddr_vpn")


def _test_get_vaddr_offset() -> None:
    _expect(get_vaddr_offset((0xFF << OFFSET_LEN) + 0x2032) == 0x2032, "get_vaddr_offset")


def _test_get_page_table() -> None:
    _expect(page_table_address(0x3) == 0xC000, "page_table_address")


def _test_get_page_table_entry() -> None:
    _expect(page_table_entry_address(0x1, 0x3) == 0xC010, "page_table_entry_address")


def _test_get_physical_address() -> None:
    _expect(get_physical_address(0x3, 0x2032) == 0xE032, "get_physical_address")


def _test_compute_stats() -> None:
    stats = Stats(accesses=21, writebacks=5, page_faults=3)
    stats.compute_amat()
    _expect(int(stats.amat) == 81152, "compute_amat")


def _test_daemon_update() -> None:
    machine = Machine(Replacement.APPROX_LRU)
    process = Process(pid=0, state=ProcState.RUNNING, saved_ptbr=0x2)

    frame = machine.frame_table[1]
    frame.process = process
    frame.vpn = 0x10
    frame.ref_count = 0
    frame.mapped = True
    frame.protected = False

    entry = machine.page_table(process.saved_ptbr)[frame.vpn]

    entry.referenced = True
    machine.daemon_update()
    _expect(frame.ref_count == 128, "daemon_update first pass")
    entry.referenced = True
    machine.daemon_update()
    _expect(frame.ref_count == 192, "daemon_update second pass")
    machine.daemon_update()
    _expect(frame.ref_count == 96, "daemon_update third pass")


def _test_select_victim_frame_approx_lru() -> None:
    machine = Machine(Replacement.APPROX_LRU)
    for frame in machine.frame_table:
        frame.protected = False
        frame.mapped = True
        frame.ref_count = 0xFF
    machine.frame_table[0].protected = True
    machine.frame_table[1].ref_count = 192
    machine.frame_table[2].ref_count = 128
    machine.frame_table[3].ref_count = 245
    _expect(machine.select_victim_frame() == 2, "select_victim_frame approx_lru")


def _test_select_victim_frame_fifo() -> None:
    machine = Machine(Replacement.FIFO)
    for frame in machine.frame_table:
        frame.protected = False
        frame.mapped = True
    machine.frame_table[0].protected = True
    machine.last_evicted = 1
    _expect(machine.select_victim_frame() == 2, "select_victim_frame fifo")


_TESTS: Tuple[Tuple[str, Callable[[], None], str], ...] = (
    ("get_vaddr_vpn", _test_get_vaddr_vpn, "Passed addressing get_vaddr_vpn() test!"),
    ("get_vaddr_offset", _test_get_vaddr_offset, "Passed addressing get_vaddr_offset() test!"),
    ("get_page_table", _test_get_page_table, "Passed addressing page_table_address() test!"),
    (
        "get_page_table_entry",
        _test_get_page_table_entry,
        "Passed addressing page_table_entry_address() test!",
    ),
    (
        "get_physical_address",
        _test_get_physical_address,
        "Passed addressing get_physical_address() test!",
    ),
    ("compute_stats", _test_compute_stats, "Passed stats compute_amat() test!"),
    ("daemon_update", _test_daemon_update, "Passed mmu daemon_update() test!"),
    (
        "select_victim_frame_approx_lru",
        _test_select_victim_frame_approx_lru,
        "Passed mmu select_victim_frame() - approx_lru test!",
    ),
    (
        "select_victim_frame_fifo",
        _test_select_victim_frame_fifo,
        "Passed mmu select_victim_frame() - FIFO test!",
    ),
)


def run_tests(out: Optional[TextIO] = None) -> List[str]:
    """Run every built-in check, reporting to ``out``; raise AssertionError on failure."""
    out = out if out is not None else sys.stdout
    passed = []
    for name, test, message in _TESTS:
        test()
        print(message, file=out)
        passed.append(name)
    print("All tests passed!", file=out)
    return passed