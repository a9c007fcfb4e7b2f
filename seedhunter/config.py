"""Dataclass-driven entry point that runs a search and returns a report."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from .events import DiscoveryLog, SearchCallback
from .prng import UINT64_MASK, PrngBase
from .search import SearchRange, SeedSearch


@dataclass
class SearchConfig:
    """Everything a search needs besides the generator itself."""

    output: Tuple[int, ...] = ()
    limit: int = 0  # 0 compares raw outputs
    wildcard: int = UINT64_MASK
    progress_interval: int = 0
    start: Optional[int] = None  # defaults to the generator's minimum seed
    end: Optional[int] = None  # defaults to the generator's maximum seed
    increment: int = 1
    max_results: Optional[int] = None

    def __post_init__(self) -> None:
        self.output = tuple(self.output)

    def search_range(self, prng: PrngBase) -> SearchRange:
        if self.start is None and self.end is None and self.increment == 1:
            return SearchRange.for_prng(prng)
        bounds = prng.seed_bounds
        start = bounds.minimum if self.start is None else self.start
        end = bounds.maximum if self.end is None else self.end
        return SearchRange(start, end, self.increment)


def run_seed_search(prng: PrngBase, cfg: SearchConfig, callback: Optional[SearchCallback] = None) -> Dict[str, Any]:
    """Run ``cfg`` against ``prng`` and collect the outcome into a plain dict."""

    search_range = cfg.search_range(prng)
    log = DiscoveryLog(max_results=cfg.max_results, forward=callback)
    engine = SeedSearch(prng)
    outcome = engine.run(
        search_range,
        cfg.output,
        limit=cfg.limit,
        wildcard=cfg.wildcard,
        callback=log,
        progress_interval=cfg.progress_interval,
    )

    return {
        "config": asdict(cfg),
        "generator": type(prng).__name__,
        "outcome": outcome.value,
        "seeds": list(log.seeds),
        "attempts": engine.tested,
        "total": search_range.wrapped_count(),
        "progress": [
            {"current": current, "total": total} for current, total in log.progress
        ],
    }
