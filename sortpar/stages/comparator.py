from __future__ import annotations

from typing import Callable

from sortpar.config import SortConfig, SortStrategy
from sortpar.stages.filters import apply_filters
from sortpar.stages.keys import SortKey, cmp_values, key_of, version_compare

LESS, EQUAL, GREATER = -1, 0, 1


def compare(a: str, b: str, config: SortConfig) -> int:
    """Order two lines under ``config``; returns -1, 0 or 1.

    Pure and reentrant: worker threads call it concurrently.
    """
    if config.reverse:
        a, b = b, a
    fa = apply_filters(a, config.filters)
    fb = apply_filters(b, config.filters)
    if config.strategy == SortStrategy.VERSION_ORDER:
        return version_compare(fa, fb)
    return cmp_values(key_of(fa, config.strategy), key_of(fb, config.strategy))


def sort_key_func(config: SortConfig) -> Callable[[str], SortKey]:
    """Per-line key matching ``compare`` for an ascending (non-reversed) sort."""
    filters = config.filters
    strategy = config.strategy

    def sort_key(line: str) -> SortKey:
        return key_of(apply_filters(line, filters), strategy)

    return sort_key
