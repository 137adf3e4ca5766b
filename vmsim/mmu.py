"""The memory management unit: translation, page faults, replacement and processes."""

import os
from typing import Dict, List, Optional, Union

from .addressing import get_physical_address, get_vaddr_offset, get_vaddr_vpn
from .constants import MEM_SIZE, NUM_FRAMES, PAGE_SIZE, UINT8_MASK, ProcState, Replacement
from .errors import Panic
from .prng import Pcg32
from .stats import Stats
from .swap import SwapQueue, swap_exists
from .tables import FrameEntry, PageTable, Process


class Machine:
    """Physical memory, the frame table, page tables and swap of one simulated system."""

    def __init__(self, replacement: Union[Replacement, int], rng: Optional[Pcg32] = None) -> None:
        self.replacement = Replacement(replacement)
        self.rng = rng if rng is not None else Pcg32()
        self.memory = bytearray(os.urandom(MEM_SIZE))
        self.frame_table: List[FrameEntry] = [FrameEntry() for _ in range(NUM_FRAMES)]
        self.ptbr = 0
        self.current_process: Optional[Process] = None
        self.last_evicted = 0
        self.stats = Stats()
        self.swap = SwapQueue()
        self._page_tables: Dict[int, PageTable] = {}
        self.system_init()

    def system_init(self) -> None:
        """Reset the frame table; frame 0 holds the frame table and is protected."""
        for entry in self.frame_table:
            entry.protected = False
            entry.mapped = False
            entry.ref_count = 0
            entry.process = None
            entry.vpn = 0
        self.frame_table[0].protected = True

    def page_table(self, ptbr: int) -> PageTable:
        """Return the page table held in frame ``ptbr``."""
        table = self._page_tables.get(ptbr)
        if table is None:
            table = self._page_tables[ptbr] = PageTable()
        return table

    def _frame_bounds(self, pfn: int) -> slice:
        start = pfn * PAGE_SIZE
        return slice(start, start + PAGE_SIZE)

    def mem_access(self, address: int, access: str, data: int = 0) -> int:
        """Translate ``address`` and read ('r') or write any other access; return the byte."""
        vpn = get_vaddr_vpn(address)
        offset = get_vaddr_offset(address)
        entry = self.page_table(self.ptbr)[vpn]

        if not entry.valid:
            self.page_fault(address)

        entry.referenced = True
        physical = get_physical_address(entry.pfn, offset)
        self.stats.accesses += 1

        if access == "r":
            return self.memory[physical]
        data &= UINT8_MASK
        entry.dirty = True
        self.memory[physical] = data
        return data

    def page_fault(self, address: int) -> None:
        """Bring the page holding ``address`` into a frame for the current process."""
        vpn = get_vaddr_vpn(address)
        entry = self.page_table(self.ptbr)[vpn]

        pfn = self.free_frame()
        # The frame now holds page data, not a page table.
        self._page_tables.pop(pfn, None)
        bounds = self._frame_bounds(pfn)
        if swap_exists(entry):
            self.memory[bounds] = self.swap.read(entry)
        else:
            self.memory[bounds] = bytes(PAGE_SIZE)

        entry.valid = True
        entry.dirty = False
        entry.pfn = pfn

        frame = self.frame_table[pfn]
        frame.mapped = True
        frame.process = self.current_process
        frame.vpn = vpn
        frame.ref_count = 0

        self.stats.page_faults += 1

    def free_frame(self) -> int:
        """Choose a frame, evicting its page (writing it to swap if dirty); return it."""
        pfn = self.select_victim_frame()
        frame = self.frame_table[pfn]
        if frame.mapped and frame.process is not None:
            entry = self.page_table(frame.process.saved_ptbr)[frame.vpn]
            entry.valid = False
            if entry.dirty:
                self.swap.write(entry, self.memory[self._frame_bounds(pfn)])
                self.stats.writebacks += 1
        return pfn

    def select_victim_frame(self) -> int:
        """Return a free frame if any, otherwise one picked by the replacement policy."""
        for pfn, frame in enumerate(self.frame_table):
            if not frame.protected and not frame.mapped:
                return pfn

        if self.replacement is Replacement.RANDOM:
            unprotected_found = None
            for pfn, frame in enumerate(self.frame_table):
                if not frame.protected:
                    unprotected_found = pfn
                    if self.rng.random() % 2:
                        return pfn
            if unprotected_found is not None:
                return unprotected_found
        elif self.replacement is Replacement.APPROX_LRU:
            # Frame 0 is the fallback when no count is below the maximum.
            pfn_min = 0
            lowest = UINT8_MASK
            for pfn, frame in enumerate(self.frame_table):
                if not frame.protected and frame.ref_count < lowest:
                    lowest = frame.ref_count
                    pfn_min = pfn
            return pfn_min
        elif self.replacement is Replacement.FIFO:
            count = len(self.frame_table)
            for step in range(1, count):
                pfn = (step + self.last_evicted) % count
                if not self.frame_table[pfn].protected:
                    self.last_evicted = pfn
                    return pfn

        raise Panic("System ran out of memory")

    def daemon_update(self) -> None:
        """Age every mapped frame's reference counter and clear its referenced bit."""
        for frame in self.frame_table:
            if frame.mapped and frame.process is not None:
                entry = self.page_table(frame.process.saved_ptbr)[frame.vpn]
                ref_bit = 0x80 if entry.referenced else 0
                frame.ref_count = (ref_bit | (frame.ref_count >> 1)) & UINT8_MASK
                entry.referenced = False

    def proc_init(self, proc: Process) -> None:
        """Give ``proc`` a fresh, protected page table frame."""
        pfn = self.free_frame()
        proc.saved_ptbr = pfn

        frame = self.frame_table[pfn]
        frame.protected = True
        frame.mapped = False
        frame.ref_count = 0
        frame.process = proc
        frame.vpn = 0

        self.memory[self._frame_bounds(pfn)] = bytes(PAGE_SIZE)
        self._page_tables[pfn] = PageTable()

    def context_switch(self, proc: Process) -> None:
        """Make ``proc`` the running process."""
        self.current_process = proc
        self.ptbr = proc.saved_ptbr
        proc.state = ProcState.RUNNING

    def proc_cleanup(self, proc: Process) -> None:
        """Release every frame and swap entry held by ``proc``, and its page table."""
        ptbr = proc.saved_ptbr
        for entry in self.page_table(ptbr):
            if entry.valid:
                frame = self.frame_table[entry.pfn]
                frame.protected = False
                frame.mapped = False
            if swap_exists(entry):
                self.swap.free(entry)

        frame = self.frame_table[ptbr]
        frame.protected = False
        frame.mapped = False