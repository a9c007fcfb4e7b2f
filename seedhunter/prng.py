"""Capability contract every searchable PRNG implements."""

from abc import ABC, abstractmethod
from typing import FrozenSet, NamedTuple

UINT64_MASK = (1 << 64) - 1


def wrap_u64(value: int) -> int:
    """Reduce ``value`` modulo 2**64, the way a hardware counter overflows."""

    return value & UINT64_MASK


def check_u64(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, received {value!r}")
    if not 0 <= value <= UINT64_MASK:
        raise ValueError(f"{name} must fit in an unsigned 64-bit integer, received {value}")
    return value


class UnsupportedOperation(NotImplementedError):
    """Raised when a guarded operation is called without its capability flag."""

    def __init__(self, prng: "PrngBase", capability: str) -> None:
        self.capability = capability
        super().__init__(f"{type(prng).__name__} does not support {capability}")


class SeedBounds(NamedTuple):
    minimum: int
    maximum: int

    @property
    def searchable(self) -> bool:
        return self.minimum <= self.maximum


class PrngBase(ABC):
    """Base class for generators the seed search can drive.

    Subclasses provide ``seed_bounds``, ``seed`` and ``next``. The optional
    capabilities are switched on by setting the matching class flag and
    implementing its hook; the public operation checks the flag first so a
    caller can branch on ``can_reverse`` and friends instead of catching.
    """

    can_reverse = False
    can_seek = False
    can_seek_seed = False

    @property
    @abstractmethod
    def seed_bounds(self) -> SeedBounds:
        """Inclusive range of seeds accepted by :meth:`seed`."""

    @abstractmethod
    def seed(self, seed: int) -> None:
        """Reinitialize the internal state from ``seed``."""

    @abstractmethod
    def next(self) -> int:
        """Return the next output and advance the state by one step."""

    def next_below(self, limit: int) -> int:
        """Return the next output reduced into ``[0, limit)``."""

        if limit <= 0:
            raise ValueError(f"limit must be positive, received {limit}")
        return self.next() % limit

    def capabilities(self) -> FrozenSet[str]:
        flags = ("can_reverse", "can_seek", "can_seek_seed")
        return frozenset(flag[4:] for flag in flags if getattr(self, flag))

    # Reversal

    def previous(self) -> int:
        """Step back one state and return the value produced from it."""

        if not self.can_reverse:
            raise UnsupportedOperation(self, "reversing")
        return self._previous()

    def previous_below(self, limit: int) -> int:
        if limit <= 0:
            raise ValueError(f"limit must be positive, received {limit}")
        return self.previous() % limit

    def _previous(self) -> int:
        raise UnsupportedOperation(self, "reversing")

    # Seeking

    def seek_ahead(self, offset: int) -> None:
        """Advance by ``offset`` states without producing output."""

        if not self.can_seek:
            raise UnsupportedOperation(self, "seeking")
        self._seek_ahead(check_u64("offset", offset))

    def seek_back(self, offset: int) -> None:
        """Rewind by ``offset`` states without producing output."""

        if not self.can_seek:
            raise UnsupportedOperation(self, "seeking")
        self._seek_back(check_u64("offset", offset))

    def _seek_ahead(self, offset: int) -> None:
        raise UnsupportedOperation(self, "seeking")

    def _seek_back(self, offset: int) -> None:
        raise UnsupportedOperation(self, "seeking")

    # Seed seeking: pure, never touches the instance state

    def seek_seed_ahead(self, seed: int, offset: int) -> int:
        """Seed whose state is ``offset`` steps after the state of ``seed``."""

        if not self.can_seek_seed:
            raise UnsupportedOperation(self, "seed seeking")
        return self._seek_seed_ahead(check_u64("seed", seed), check_u64("offset", offset))

    def seek_seed_back(self, seed: int, offset: int) -> int:
        """Seed whose state is ``offset`` steps before the state of ``seed``."""

        if not self.can_seek_seed:
            raise UnsupportedOperation(self, "seed seeking")
        return self._seek_seed_back(check_u64("seed", seed), check_u64("offset", offset))

    def _seek_seed_ahead(self, seed: int, offset: int) -> int:
        raise UnsupportedOperation(self, "seed seeking")

    def _seek_seed_back(self, seed: int, offset: int) -> int:
        raise UnsupportedOperation(self, "seed seeking")

    def __repr__(self) -> str:
        bounds = self.seed_bounds
        return f"{type(self).__name__}(seeds={bounds.minimum:#x}..{bounds.maximum:#x})"
