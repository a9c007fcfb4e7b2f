"""Reference generators implementing the full capability contract."""

from dataclasses import dataclass

from .prng import UINT64_MASK, PrngBase, SeedBounds

UINT32_MASK = (1 << 32) - 1


def lcg_jump(state: int, mult: int, plus: int, delta: int, mask: int) -> int:
    """Advance ``state`` by ``delta`` LCG steps in O(log delta).

    Brown, "Random Number Generation with Arbitrary Stride" (1994).
    """

    acc_mult, acc_plus = 1, 0
    cur_mult, cur_plus = mult, plus
    while delta:
        if delta & 1:
            acc_mult = (acc_mult * cur_mult) & mask
            acc_plus = (acc_plus * cur_mult + cur_plus) & mask
        cur_plus = ((cur_mult + 1) * cur_plus) & mask
        cur_mult = (cur_mult * cur_mult) & mask
        delta >>= 1
    return (acc_mult * state + acc_plus) & mask


@dataclass(repr=False)
class Pcg32(PrngBase):
    """PCG-XSH-RR: 64-bit LCG state, 32-bit permuted output.

    The seed is loaded into the state as-is, so seeds and states are
    interchangeable and every optional capability comes from LCG algebra.
    """

    state: int = 0
    inc: int = 1442695040888963407  # default stream

    MULT = 6364136223846793005

    can_reverse = True
    can_seek = True
    can_seek_seed = True

    def __post_init__(self) -> None:
        self.inc = (self.inc | 1) & UINT64_MASK
        self.state &= UINT64_MASK

    @property
    def seed_bounds(self) -> SeedBounds:
        return SeedBounds(0, UINT64_MASK)

    def seed(self, seed: int) -> None:
        self.state = seed & UINT64_MASK

    @staticmethod
    def _output(oldstate: int) -> int:
        xorshifted = (((oldstate >> 18) ^ oldstate) >> 27) & UINT32_MASK
        rot = (oldstate >> 59) & 31
        return (xorshifted >> rot) | ((xorshifted << ((-rot) & 31)) & UINT32_MASK)

    def next(self) -> int:
        oldstate = self.state
        self.state = (oldstate * self.MULT + self.inc) & UINT64_MASK
        return self._output(oldstate)

    def _previous(self) -> int:
        inverse = pow(self.MULT, -1, 1 << 64)
        self.state = ((self.state - self.inc) * inverse) & UINT64_MASK
        return self._output(self.state)

    def _seek_ahead(self, offset: int) -> None:
        self.state = lcg_jump(self.state, self.MULT, self.inc, offset, UINT64_MASK)

    def _seek_back(self, offset: int) -> None:
        # full period 2**64, so rewinding is advancing by the complement
        self._seek_ahead(-offset & UINT64_MASK)

    def _seek_seed_ahead(self, seed: int, offset: int) -> int:
        return lcg_jump(seed, self.MULT, self.inc, offset, UINT64_MASK)

    def _seek_seed_back(self, seed: int, offset: int) -> int:
        return lcg_jump(seed, self.MULT, self.inc, -offset & UINT64_MASK, UINT64_MASK)


class MsvcRand(PrngBase):
    """MSVCRT-compatible ``rand()``.

    Matches:
      state = state * 214013 + 2531011
      return (state >> 16) & 0x7fff
    """

    MULT = 0x343FD
    PLUS = 0x269EC3

    can_reverse = True
    can_seek = True
    can_seek_seed = True

    __slots__ = ("_state",)

    def __init__(self, seed: int = 1) -> None:
        self._state = seed & UINT32_MASK

    @property
    def state(self) -> int:
        return self._state

    @property
    def seed_bounds(self) -> SeedBounds:
        return SeedBounds(0, UINT32_MASK)

    def seed(self, seed: int) -> None:
        self._state = seed & UINT32_MASK

    def next(self) -> int:
        self._state = (self._state * self.MULT + self.PLUS) & UINT32_MASK
        return (self._state >> 16) & 0x7FFF

    def _previous(self) -> int:
        value = (self._state >> 16) & 0x7FFF
        inverse = pow(self.MULT, -1, 1 << 32)
        self._state = ((self._state - self.PLUS) * inverse) & UINT32_MASK
        return value

    def _seek_ahead(self, offset: int) -> None:
        self._state = lcg_jump(self._state, self.MULT, self.PLUS, offset, UINT32_MASK)

    def _seek_back(self, offset: int) -> None:
        self._seek_ahead(-offset & UINT32_MASK)

    def _seek_seed_ahead(self, seed: int, offset: int) -> int:
        return lcg_jump(seed & UINT32_MASK, self.MULT, self.PLUS, offset, UINT32_MASK)

    def _seek_seed_back(self, seed: int, offset: int) -> int:
        return lcg_jump(seed & UINT32_MASK, self.MULT, self.PLUS, -offset & UINT32_MASK, UINT32_MASK)
