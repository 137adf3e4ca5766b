"""Process control blocks, frame table entries and page tables."""

from dataclasses import dataclass, fields
from typing import Iterator, List, Optional

from .constants import NUM_PAGES, ProcState


@dataclass
class Process:
    """A process control block."""

    pid: int = 0
    state: ProcState = ProcState.STOPPED
    saved_ptbr: int = 0


@dataclass
class FrameEntry:
    """Bookkeeping for one physical frame."""

    protected: bool = False
    mapped: bool = False
    ref_count: int = 0
    process: Optional[Process] = None
    vpn: int = 0


@dataclass
class PageTableEntry:
    """One virtual page's mapping; ``sid`` is 0 when the page has no swap entry."""

    valid: bool = False
    dirty: bool = False
    pfn: int = 0
    referenced: bool = False
    sid: int = 0


class PageTable:
    """A process's page table, indexed by virtual page number."""

    def __init__(self) -> None:
        self._entries: List[PageTableEntry] = [PageTableEntry() for _ in range(NUM_PAGES)]

    def __getitem__(self, vpn: int) -> PageTableEntry:
        if not 0 <= vpn < NUM_PAGES:
            raise IndexError(f"virtual page number out of range: {vpn}")
        return self._entries[vpn]

    def __iter__(self) -> Iterator[PageTableEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Reset every entry to an unmapped page with no swap entry."""
        blank = PageTableEntry()
        for entry in self._entries:
            for field in fields(entry):
                setattr(entry, field.name, getattr(blank, field.name))