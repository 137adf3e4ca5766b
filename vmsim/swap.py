"""Swap space: a queue of saved pages identified by swap ids."""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from .constants import PAGE_SIZE
from .errors import Panic
from .tables import PageTableEntry


@dataclass
class SwapEntry:
    """One page saved to swap space."""

    id: int
    page_data: bytearray = field(default_factory=lambda: bytearray(PAGE_SIZE))


def swap_exists(pte: PageTableEntry) -> bool:
    """Return True if the page table entry has a swap entry."""
    return pte.sid != 0


class SwapQueue:
    """The swap space on disk, kept in insertion order."""

    def __init__(self) -> None:
        self._entries: Dict[int, SwapEntry] = OrderedDict()
        self._next_id = 1
        self.size_max = 0

    def create_entry(self) -> SwapEntry:
        """Create an entry with a fresh, unique id (not yet enqueued)."""
        entry = SwapEntry(self._next_id)
        self._next_id += 1
        return entry

    def enqueue(self, entry: SwapEntry) -> None:
        """Append an entry, updating the high-water mark."""
        self._entries[entry.id] = entry
        self.size_max = max(self.size_max, len(self._entries))

    def dequeue(self, sid: int) -> SwapEntry:
        """Remove and return the entry with id ``sid``."""
        try:
            return self._entries.pop(sid)
        except KeyError:
            raise KeyError(f"no swap entry with id {sid}") from None

    def find(self, sid: int) -> Optional[SwapEntry]:
        """Return the entry with id ``sid``, or None."""
        return self._entries.get(sid)

    def __contains__(self, sid: object) -> bool:
        return sid in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SwapEntry]:
        return iter(list(self._entries.values()))

    def read(self, pte: PageTableEntry) -> bytes:
        """Return the saved contents of the page that ``pte`` refers to."""
        entry = self.find(pte.sid)
        if entry is None:
            raise Panic("Attempted to read an invalid swap entry.")
        return bytes(entry.page_data)

    def write(self, pte: PageTableEntry, data) -> None:
        """Save a page's contents, allocating a swap entry for ``pte`` if needed."""
        if len(data) != PAGE_SIZE:
            raise ValueError(f"page data must be {PAGE_SIZE} bytes, got {len(data)}")
        entry = self.find(pte.sid)
        if entry is None:
            entry = self.create_entry()
            self.enqueue(entry)
            pte.sid = entry.id
        entry.page_data[:] = data

    def free(self, pte: PageTableEntry) -> None:
        """Release the swap entry of ``pte`` and clear its swap id."""
        if pte.sid not in self._entries:
            raise Panic("Attempted to free an invalid swap entry!")
        self.dequeue(pte.sid)
        pte.sid = 0