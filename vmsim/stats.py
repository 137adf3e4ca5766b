"""Counters of memory activity and the derived average access time."""

import math
from dataclasses import dataclass

MEMORY_ACCESS_TIME = 200
DISK_PAGE_READ_TIME = 150000
DISK_PAGE_WRITE_TIME = 250000


@dataclass
class Stats:
    """Access, fault and writeback counts for one simulation run."""

    accesses: int = 0
    page_faults: int = 0
    writebacks: int = 0
    amat: float = 0.0

    def compute_amat(self) -> float:
        """Compute, store and return the average memory access time."""
        total = (
            MEMORY_ACCESS_TIME * self.accesses
            + DISK_PAGE_WRITE_TIME * self.writebacks
            + DISK_PAGE_READ_TIME * self.page_faults
        )
        if self.accesses:
            self.amat = total / self.accesses
        else:
            self.amat = math.inf if total else math.nan
        return self.amat