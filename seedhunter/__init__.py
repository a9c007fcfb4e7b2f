"""Public package surface for the seedhunter PRNG seed recovery engine."""

from .config import SearchConfig, run_seed_search
from .events import DiscoveryLog, SearchCallback, SearchEvent, SearchEventType
from .generators import MsvcRand, Pcg32
from .prng import UINT64_MASK, PrngBase, SeedBounds, UnsupportedOperation
from .search import (
    DEFAULT_WILDCARD,
    EmptyOutputSequence,
    InvalidRange,
    SearchOutcome,
    SearchParameterError,
    SearchRange,
    SearchState,
    SeedSearch,
    partition_range,
    recover_seed,
    recover_seed_in_range,
)

__all__ = [
    "DEFAULT_WILDCARD",
    "DiscoveryLog",
    "EmptyOutputSequence",
    "InvalidRange",
    "MsvcRand",
    "Pcg32",
    "PrngBase",
    "SearchCallback",
    "SearchConfig",
    "SearchEvent",
    "SearchEventType",
    "SearchOutcome",
    "SearchParameterError",
    "SearchRange",
    "SearchState",
    "SeedBounds",
    "SeedSearch",
    "UINT64_MASK",
    "UnsupportedOperation",
    "partition_range",
    "recover_seed",
    "recover_seed_in_range",
    "run_seed_search",
]
