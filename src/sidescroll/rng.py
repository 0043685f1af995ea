import math
from typing import Optional

MULTIPLIER = 0x5DEECE66D
ADDEND = 0xB
MASK48 = (1 << 48) - 1


def s32(v: int) -> int:
    """Interpret v as a signed 32-bit int (two's complement wrap)."""
    v &= 0xFFFFFFFF
    return v - 0x100000000 if (v & 0x80000000) else v


def s64(v: int) -> int:
    """Interpret v as a signed 64-bit int."""
    v &= 0xFFFFFFFFFFFFFFFF
    return v - 0x10000000000000000 if (v & 0x8000000000000000) else v


def scramble(seed: int) -> int:
    return (seed ^ MULTIPLIER) & MASK48


def lcg_next(state: int) -> int:
    return (state * MULTIPLIER + ADDEND) & MASK48


class JavaRandom:
    """
    48-bit linear congruential stream, draw-for-draw identical to
    java.util.Random. Levels are keyed by seed, so every draw below is part
    of the level format: changing the order or width of a draw changes
    every level generated after it.
    """
    def __init__(self, seed: int = 0):
        self.set_seed(seed)

    def set_seed(self, seed: int) -> None:
        self.state = scramble(seed)
        self._next_gaussian = 0.0
        self._have_next_gaussian = False

    def next(self, bits: int) -> int:
        self.state = lcg_next(self.state)
        return s32(self.state >> (48 - bits))

    def next_int(self, bound: Optional[int] = None) -> int:
        if bound is None:
            return self.next(32)
        # Legacy: a non-positive bound yields 0 and leaves the stream untouched.
        if bound <= 0:
            return 0
        if (bound & -bound) == bound:
            return (bound * self.next(31)) >> 31
        while True:
            bits = self.next(31)
            val = bits % bound
            if s32(bits - val + (bound - 1)) >= 0:
                return val

    def next_long(self) -> int:
        hi = self.next(32)
        lo = self.next(32)
        return s64((hi << 32) + lo)

    def next_float(self) -> float:
        return self.next(24) / float(1 << 24)

    def next_double(self) -> float:
        return ((self.next(26) << 27) + self.next(27)) / float(1 << 53)

    def next_boolean(self) -> bool:
        return self.next(1) != 0

    def next_gaussian(self) -> float:
        # Polar Box-Muller; the second value of each pair is served next call.
        if self._have_next_gaussian:
            self._have_next_gaussian = False
            return self._next_gaussian
        while True:
            v1 = 2 * self.next_double() - 1
            v2 = 2 * self.next_double() - 1
            s = v1 * v1 + v2 * v2
            if 0 < s < 1:
                break
        multiplier = math.sqrt(-2 * math.log(s) / s)
        self._next_gaussian = v2 * multiplier
        self._have_next_gaussian = True
        return v1 * multiplier
