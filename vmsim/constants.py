"""Machine geometry, process states and replacement policies."""

from enum import IntEnum

MAX_PID = 800

PADDR_LEN = 20
VADDR_LEN = 24
OFFSET_LEN = 14

PAGE_SIZE = 1 << OFFSET_LEN
MEM_SIZE = 1 << PADDR_LEN
NUM_PAGES = 1 << (VADDR_LEN - OFFSET_LEN)
NUM_FRAMES = 1 << (PADDR_LEN - OFFSET_LEN)

DAEMON_WAKEUP_PERIOD = 5

UINT8_MASK = 0xFF
UINT16_MASK = 0xFFFF
UINT32_MASK = 0xFFFFFFFF


class ProcState(IntEnum):
    """Whether a process is currently running."""

    STOPPED = 0
    RUNNING = 1


class Replacement(IntEnum):
    """Page replacement policy used when no frame is free."""

    RANDOM = 1
    APPROX_LRU = 2
    FIFO = 3


_POLICY_NAMES = {
    "random": Replacement.RANDOM,
    "lru": Replacement.APPROX_LRU,
    "fifo": Replacement.FIFO,
}


def parse_replacement(name: str) -> Replacement:
    """Return the policy named on the command line ('random', 'lru' or 'fifo')."""
    try:
        return _POLICY_NAMES[name]
    except KeyError:
        raise ValueError(f"Unknown replacement algorithm: {name}") from None