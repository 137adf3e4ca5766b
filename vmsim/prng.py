"""A small, reproducible PCG32 random number generator."""

from .constants import UINT32_MASK

_UINT64_MASK = 0xFFFFFFFFFFFFFFFF
_MULTIPLIER = 6364136223846793005

DEFAULT_STATE = 0x57424AAE4A2024BE
DEFAULT_INC = 0x28BFCF2F5A7CDFA3


class Pcg32:
    """PCG32 (XSH RR) generator giving the same stream on every platform."""

    def __init__(self, state: int = DEFAULT_STATE, inc: int = DEFAULT_INC) -> None:
        self.state = state & _UINT64_MASK
        self.inc = inc & _UINT64_MASK

    def random(self) -> int:
        """Return the next 32-bit unsigned value."""
        old = self.state
        self.state = (old * _MULTIPLIER + (self.inc | 1)) & _UINT64_MASK
        xorshifted = (((old >> 18) ^ old) >> 27) & UINT32_MASK
        rot = old >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & UINT32_MASK