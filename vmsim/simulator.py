"""Running memory traces against a simulated machine."""

import re
import sys
from typing import Iterable, List, Optional, TextIO, Union

from .constants import (
    DAEMON_WAKEUP_PERIOD,
    MAX_PID,
    NUM_FRAMES,
    PAGE_SIZE,
    UINT8_MASK,
    UINT32_MASK,
    ProcState,
    Replacement,
)
from .errors import Panic
from .mmu import Machine
from .tables import Process

_START = "START"
_STOP = "STOP"

_PID = re.compile(r"\s*\+?(\d+)")
_ACCESS = re.compile(
    r"\s*\+?(\d+)(?!\d)"  # pid
    r"\s*(\S)"  # access kind
    r"\s*(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)(?![0-9a-fA-F])"  # hex address
    r"\s*\+?(\d+)"  # data byte
)


class TraceError(ValueError):
    """A trace line could not be understood."""


class Simulator:
    """Drives a :class:`Machine` with START, STOP and memory access commands."""

    def __init__(
        self,
        replacement: Union[Replacement, int],
        check_corruption: bool = False,
        out: Optional[TextIO] = None,
    ) -> None:
        self.machine = Machine(replacement)
        self.check_corruption = check_corruption
        self.out = out if out is not None else sys.stdout
        self.procs: List[Process] = [Process() for _ in range(MAX_PID)]
        self.step = 0
        self.daemon_counter = 0
        if check_corruption:
            self.check_validity(0)

    def _emit(self, text: str) -> None:
        print(text, file=self.out)

    def _process(self, pid: int) -> Process:
        if not 0 <= pid < MAX_PID:
            raise TraceError(f"PID out of range: {pid}")
        return self.procs[pid]

    def run(self, lines: Iterable[str]) -> None:
        """Execute every trace line in order, advancing the step counter."""
        for line in lines:
            self.execute(line)
            self.step += 1

    def execute(self, command: str) -> None:
        """Execute one trace line."""
        if command.startswith(_START):
            match = _PID.match(command[len(_START) + 1:])
            if not match:
                raise TraceError("Unable to parse trace file: Invalid START command encountered")
            self.start_process(int(match.group(1)) & UINT32_MASK)
        elif command.startswith(_STOP):
            match = _PID.match(command[len(_STOP) + 1:])
            if not match:
                raise TraceError("Unable to parse trace file: Invalid STOP command encountered")
            self.stop_process(int(match.group(1)) & UINT32_MASK)
        else:
            match = _ACCESS.match(command)
            if not match:
                raise TraceError(
                    "Unable to parse trace file: Invalid memory access command encountered"
                )
            pid, rw, address, data = match.groups()
            self.access(
                int(pid) & UINT32_MASK,
                rw,
                int(address, 16) & UINT32_MASK,
                int(data) & UINT8_MASK,
            )

    def start_process(self, pid: int) -> None:
        """Start process ``pid`` with a fresh page table."""
        proc = self._process(pid)
        proc.pid = pid
        proc.state = ProcState.RUNNING
        self.machine.proc_init(proc)
        self._emit(f"{self.step:8d}: PID {pid} started")
        if self.check_corruption:
            self.check_validity(1)

    def stop_process(self, pid: int) -> None:
        """Stop process ``pid`` and release its memory."""
        proc = self._process(pid)
        self.machine.proc_cleanup(proc)
        proc.saved_ptbr = 0
        proc.state = ProcState.STOPPED
        self._emit(f"{self.step:8d}: PID {pid} stopped")
        if self.check_corruption:
            self.check_validity(1)

    def access(self, pid: int, rw: str, address: int, data: int) -> int:
        """Perform a read ('r') or write for ``pid``; return the byte read or written."""
        proc = self._process(pid)
        data &= UINT8_MASK

        self.daemon_counter += 1
        if (
            self.daemon_counter >= DAEMON_WAKEUP_PERIOD
            and self.machine.replacement is Replacement.APPROX_LRU
        ):
            self.machine.daemon_update()
            self.daemon_counter = 0

        current = self.machine.current_process
        if current is None or current.pid != pid:
            self.machine.context_switch(proc)

        new_data = self.machine.mem_access(address, rw, data)

        if rw == "r":
            self._emit(f"{self.step:8d}: {pid:3d}  r  0x{address:05x} -> {new_data:02x}")
        else:
            self._emit(f"{self.step:8d}: {pid:3d}  w  0x{address:05x} <- {data:02x}")

        if self.check_corruption:
            self.check_validity(1)
        return new_data

    def check_validity(self, checks: int = 1) -> None:
        """Check frame table, page tables and swap for consistency; raise Panic if broken."""
        frames = self.machine.frame_table
        protected_seen = [False] * NUM_FRAMES
        mapped_seen = [False] * NUM_FRAMES

        if not frames[0].protected:
            raise Panic("Frame 0 should be marked as protected")
        protected_seen[0] = True

        if checks < 1:
            return

        running = [proc for proc in self.procs if proc.state == ProcState.RUNNING]

        for proc in running:
            ptbr = proc.saved_ptbr
            if not 0 < ptbr < NUM_FRAMES:
                raise Panic(
                    "PTBR of running process cannot be zero or >= the number of frames in the system"
                )
            if not frames[ptbr].protected:
                raise Panic(
                    "Frames corresponding to the page tables of running processes "
                    "must be marked as protected"
                )
            protected_seen[ptbr] = True

        for pfn, frame in enumerate(frames):
            if frame.protected and not protected_seen[pfn]:
                raise Panic("Found frame marked as protected that should not be protected")

        for proc in running:
            table = self.machine.page_table(proc.saved_ptbr)
            for vpn, entry in enumerate(table):
                if entry.valid not in (0, 1):
                    raise Panic("Page table entry valid bit should either be zero or one")
                if entry.dirty not in (0, 1):
                    raise Panic("Page table entry dirty bit should either be zero or one")

                if entry.valid:
                    pfn = entry.pfn
                    if not 0 < pfn < NUM_FRAMES:
                        raise Panic(
                            "PFN of page table entry cannot be zero or >= "
                            "the number of frames in the system"
                        )
                    if protected_seen[pfn]:
                        raise Panic("Page table entry should not map to a protected frame")
                    if mapped_seen[pfn]:
                        raise Panic("Duplicate PFN found in page table")

                    frame = frames[pfn]
                    owner = frame.process
                    if (
                        owner is None
                        or not 0 <= owner.pid < MAX_PID
                        or self.procs[owner.pid] is not owner
                    ):
                        raise Panic("Mapped frame table entry contains invalid process pointer")
                    if not frame.mapped or owner.pid != proc.pid or frame.vpn != vpn:
                        raise Panic("Frame table is inconsistent with page table entry")
                    mapped_seen[pfn] = True

                if entry.sid and entry.sid not in self.machine.swap:
                    raise Panic("Page table entry points to swap entry that does not exist")

        for pfn, frame in enumerate(frames):
            if not frame.protected and frame.mapped and not mapped_seen[pfn]:
                raise Panic(
                    "Found frame table entry marked as mapped with no corresponding page table entry"
                )

    def report(self) -> str:
        """Return the end-of-run statistics as text."""
        stats = self.machine.stats
        stats.compute_amat()
        swap = self.machine.swap
        lines = [
            f"Total Accesses     : {stats.accesses}",
            f"Page Faults        : {stats.page_faults}",
            f"Writes to disk     : {stats.writebacks}",
            f"Average Memory Access Time: {stats.amat:f}",
            f"Max Swap Size      : {(swap.size_max * PAGE_SIZE) >> 10} KB",
        ]
        if len(swap) > 0:
            lines.append(f"Swap Not Freed     : {(len(swap) * PAGE_SIZE) >> 10} KB")
        return "\n".join(lines) + "\n"