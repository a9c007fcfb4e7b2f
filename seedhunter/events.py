"""Notifications emitted by the seed search."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple


class SearchEventType(Enum):
    DISCOVERED = "discovered"
    PROGRESS = "progress"


@dataclass
class SearchEvent:
    """One notification handed to the search callback.

    A new event is built for every notification. ``cancel`` is the only field
    a callback may change; the engine reads it as soon as the callback returns.
    Attempt counters wrap like the engine's counters, so ``total_attempts == 0``
    on a full-domain search means ``2**word_bits``.
    """

    event_type: SearchEventType
    seed: int
    current_attempts: int
    total_attempts: int
    word_bits: int = 64
    cancel: bool = False

    def __setattr__(self, name: str, value) -> None:
        if name != "cancel" and name in self.__dict__:
            raise AttributeError(f"SearchEvent.{name} is read-only")
        super().__setattr__(name, value)

    def request_cancel(self) -> None:
        self.cancel = True

    @property
    def is_discovery(self) -> bool:
        return self.event_type is SearchEventType.DISCOVERED

    @property
    def fraction_complete(self) -> float:
        full_cycle = 1 << self.word_bits
        total = self.total_attempts or full_cycle
        current = self.current_attempts
        # a progress event never reports zero work, so zero is a wrapped full cycle
        if current == 0 and self.event_type is SearchEventType.PROGRESS:
            current = full_cycle
        return min(1.0, current / total)


SearchCallback = Callable[[SearchEvent], None]


class DiscoveryLog:
    """Callback that records what a search reports.

    Pass ``max_results`` to stop the search after that many discoveries and
    ``forward`` to chain another callback, which sees every event first.
    """

    def __init__(self, max_results: Optional[int] = None, forward: Optional[SearchCallback] = None) -> None:
        if max_results is not None and max_results <= 0:
            raise ValueError("max_results must be positive")
        self.max_results = max_results
        self.forward = forward
        self.seeds: List[int] = []
        self.progress: List[Tuple[int, int]] = []

    def __call__(self, event: SearchEvent) -> None:
        if self.forward is not None:
            self.forward(event)

        if event.is_discovery:
            self.seeds.append(event.seed)
            if self.max_results is not None and len(self.seeds) >= self.max_results:
                event.request_cancel()
        else:
            self.progress.append((event.current_attempts, event.total_attempts))

    @property
    def last_progress(self) -> Optional[Tuple[int, int]]:
        return self.progress[-1] if self.progress else None
