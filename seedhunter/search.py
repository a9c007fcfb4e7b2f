"""Brute-force seed recovery over an arithmetic progression of seeds.

Counters in this module are plain ints masked to ``word_bits`` after every
operation, so they overflow exactly like fixed-width hardware registers. The
candidate count of a full-domain search (``2**64`` seeds) wraps to ``0``; the
loops read a countdown of ``0`` as "one full cycle" and stop when the counter
comes back round to ``0``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .events import SearchCallback, SearchEvent, SearchEventType
from .prng import UINT64_MASK, PrngBase, check_u64

logger = logging.getLogger(__name__)

DEFAULT_WILDCARD = UINT64_MASK


class SearchParameterError(ValueError):
    """Search input rejected before any seed was tested."""


class InvalidRange(SearchParameterError):
    pass


class EmptyOutputSequence(SearchParameterError):
    pass


class SearchOutcome(Enum):
    COMPLETED = "completed"
    CANCELED = "canceled"


class SearchState(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    COMPLETED = "completed"
    CANCELED = "canceled"


@dataclass(frozen=True)
class SearchRange:
    """Seeds ``start, start + increment, ...`` up to and including ``end``."""

    start: int
    end: int
    increment: int = 1

    def __post_init__(self) -> None:
        for name in ("start", "end", "increment"):
            try:
                check_u64(name, getattr(self, name))
            except ValueError as exc:
                raise InvalidRange(str(exc)) from exc
        if self.increment == 0:
            raise InvalidRange("increment must be at least 1")
        if self.start > self.end:
            raise InvalidRange(f"start {self.start:#x} is past end {self.end:#x}")

    @classmethod
    def for_prng(cls, prng: PrngBase) -> "SearchRange":
        bounds = prng.seed_bounds
        if not bounds.searchable:
            raise InvalidRange(f"{prng!r} has an empty seed domain")
        return cls(bounds.minimum, bounds.maximum, 1)

    @property
    def count(self) -> int:
        """Exact number of candidate seeds."""

        return (self.end - self.start) // self.increment + 1

    def wrapped_count(self, word_bits: int = 64) -> int:
        return self.count & ((1 << word_bits) - 1)

    def __contains__(self, seed: int) -> bool:
        return self.start <= seed <= self.end and (seed - self.start) % self.increment == 0


class SeedSearch:
    """Drives one PRNG instance through a brute-force seed search.

    The instance is reseeded and advanced for every candidate, so it must not
    be shared with another search while :meth:`run` is in progress.
    ``word_bits`` is the width of the seed space and of every counter; it is
    64 outside of tests.
    """

    def __init__(self, prng: PrngBase, word_bits: int = 64) -> None:
        if not 1 <= word_bits <= 64:
            raise ValueError(f"word_bits must be between 1 and 64, received {word_bits}")
        self.prng = prng
        self.word_bits = word_bits
        self.mask = (1 << word_bits) - 1
        self.state = SearchState.IDLE
        self.tested = 0

    def run(
        self,
        search_range: SearchRange,
        output: Sequence[int],
        limit: int = 0,
        wildcard: int = DEFAULT_WILDCARD,
        callback: Optional[SearchCallback] = None,
        progress_interval: int = 0,
    ) -> SearchOutcome:
        """Test every seed in ``search_range`` against ``output``.

        Matches are reported to ``callback`` as ``DISCOVERED`` events and the
        search carries on after each one. With a positive
        ``progress_interval`` a ``PROGRESS`` event follows every chunk of that
        many seeds, including the final partial chunk. Setting ``cancel`` on
        any event stops the search at once and returns ``CANCELED``.
        """

        if self.state is SearchState.SEARCHING:
            raise RuntimeError("search already in progress on this instance")
        expected = self._validate(search_range, output, limit, wildcard, progress_interval)

        if callback is None:
            progress_interval = 0

        mask = self.mask
        start, end, increment = search_range.start, search_range.end, search_range.increment
        total = ((end - start) // increment + 1) & mask

        logger.info(
            f"Searching {self.prng!r} seeds {start:#x}..{end:#x} step {increment} "
            f"({total or 'full cycle'} candidates, {len(expected)} outputs)"
        )

        self.state = SearchState.SEARCHING
        self.tested = 0
        try:
            outcome = self._search(start, increment, total, expected, limit, wildcard, callback, progress_interval)
        finally:
            if self.state is SearchState.SEARCHING:
                self.state = SearchState.IDLE

        logger.info(f"Search {outcome.value} after {self.tested or 'full cycle'} seeds")
        return outcome

    def _validate(
        self,
        search_range: SearchRange,
        output: Sequence[int],
        limit: int,
        wildcard: int,
        progress_interval: int,
    ) -> Tuple[int, ...]:
        if not isinstance(search_range, SearchRange):
            raise TypeError(f"expected a SearchRange, received {type(search_range).__name__}")
        if search_range.end > self.mask:
            raise InvalidRange(f"end {search_range.end:#x} exceeds the {self.word_bits}-bit seed space")
        if search_range.increment > self.mask:
            raise InvalidRange(f"increment {search_range.increment:#x} exceeds the {self.word_bits}-bit seed space")

        expected = tuple(output)
        if not expected:
            raise EmptyOutputSequence("output sequence must contain at least one value")
        for position, value in enumerate(expected):
            check_u64(f"output[{position}]", value)
        check_u64("wildcard", wildcard)
        check_u64("limit", limit)
        check_u64("progress_interval", progress_interval)
        if progress_interval > self.mask:
            raise ValueError(f"progress_interval exceeds the {self.word_bits}-bit counter")
        return expected

    def _search(
        self,
        start: int,
        increment: int,
        total: int,
        expected: Tuple[int, ...],
        limit: int,
        wildcard: int,
        callback: Optional[SearchCallback],
        progress_interval: int,
    ) -> SearchOutcome:
        mask = self.mask
        remaining = total
        seed = start

        while True:
            # remaining == 0 can only be seen here on the first chunk of a full cycle
            if progress_interval == 0 or (remaining != 0 and remaining < progress_interval):
                countdown = remaining
            else:
                countdown = progress_interval
            remaining = (remaining - countdown) & mask

            while True:
                if self._matches(seed, expected, limit, wildcard):
                    attempts = (total - remaining - countdown) & mask
                    logger.debug(f"Seed {seed:#x} matches after {attempts} attempts")
                    if callback is not None and self._notify(
                        callback, SearchEventType.DISCOVERED, seed, attempts, total
                    ):
                        self.tested = (attempts + 1) & mask
                        return self._finish(SearchOutcome.CANCELED)

                seed = (seed + increment) & mask
                countdown = (countdown - 1) & mask
                if countdown == 0:
                    break

            attempts = (total - remaining) & mask
            self.tested = attempts
            if progress_interval != 0:
                logger.debug(f"Progress {attempts}/{total or 'full cycle'}, next seed {seed:#x}")
                if self._notify(callback, SearchEventType.PROGRESS, seed, attempts, total):
                    return self._finish(SearchOutcome.CANCELED)

            if remaining == 0:
                return self._finish(SearchOutcome.COMPLETED)

    def _matches(self, seed: int, expected: Tuple[int, ...], limit: int, wildcard: int) -> bool:
        prng = self.prng
        prng.seed(seed)
        if limit != 0:
            for value in expected:
                if prng.next_below(limit) != value and value != wildcard:
                    return False
        else:
            for value in expected:
                if prng.next() != value and value != wildcard:
                    return False
        return True

    def _notify(self, callback: SearchCallback, event_type: SearchEventType, seed: int, current: int, total: int) -> bool:
        event = SearchEvent(event_type, seed, current, total, self.word_bits)
        callback(event)
        return bool(event.cancel)

    def _finish(self, outcome: SearchOutcome) -> SearchOutcome:
        self.state = SearchState(outcome.value)
        return outcome


def recover_seed(
    prng: PrngBase,
    output: Sequence[int],
    limit: int = 0,
    wildcard: int = DEFAULT_WILDCARD,
    callback: Optional[SearchCallback] = None,
    progress_interval: int = 0,
) -> SearchOutcome:
    """Search the generator's whole seed domain, one seed at a time."""

    return SeedSearch(prng).run(
        SearchRange.for_prng(prng), output, limit, wildcard, callback, progress_interval
    )


def recover_seed_in_range(
    prng: PrngBase,
    start: int,
    end: int,
    increment: int,
    output: Sequence[int],
    limit: int = 0,
    wildcard: int = DEFAULT_WILDCARD,
    callback: Optional[SearchCallback] = None,
    progress_interval: int = 0,
) -> SearchOutcome:
    """Search ``start..end`` every ``increment`` seeds, for manual partitioning."""

    return SeedSearch(prng).run(
        SearchRange(start, end, increment), output, limit, wildcard, callback, progress_interval
    )


def partition_range(search_range: SearchRange, parts: int) -> List[SearchRange]:
    """Split ``search_range`` into at most ``parts`` disjoint progressions.

    Partition ``i`` starts at the ``i``-th candidate and strides ``parts``
    candidates at a time, so together the partitions cover every candidate
    exactly once. Each partition needs its own PRNG instance.
    """

    if parts < 1:
        raise ValueError(f"parts must be at least 1, received {parts}")

    parts = min(parts, search_range.count)
    stride = search_range.increment * parts
    partitions: List[SearchRange] = []
    for index in range(parts):
        first = search_range.start + index * search_range.increment
        last = first + (search_range.end - first) // stride * stride
        partitions.append(SearchRange(first, last, stride if last > first else 1))
    return partitions
