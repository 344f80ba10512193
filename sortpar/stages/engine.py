from __future__ import annotations

import heapq
import math
import os
from concurrent.futures import ThreadPoolExecutor
from operator import itemgetter
from typing import Iterable, List, MutableSequence, Tuple

import numpy as np

from sortpar.config import SortConfig, SortStrategy
from sortpar.stages.comparator import sort_key_func
from sortpar.utils import get_logger

logger = get_logger(__name__)

MIN_CHUNK_SIZE = 2048


def unique_lines(lines: Iterable[str]) -> List[str]:
    """First occurrence of each distinct line, in input order."""
    return list(dict.fromkeys(lines))


def _chunk_bounds(n: int, workers: int, min_chunk: int) -> List[Tuple[int, int]]:
    if n == 0:
        return []
    chunks = max(1, min(workers, math.ceil(n / max(1, min_chunk))))
    size = math.ceil(n / chunks)
    return [(start, min(start + size, n)) for start in range(0, n, size)]


def _sort_run(lines: List[str], start: int, stop: int, config: SortConfig) -> List[tuple]:
    """Key and order one contiguous chunk; returns sorted (key, index) pairs."""
    key_fn = sort_key_func(config)
    keys = [key_fn(lines[i]) for i in range(start, stop)]

    if config.strategy == SortStrategy.GENERAL_NUMERIC:
        arr = np.asarray(keys, dtype=float)
        order = np.argsort(-arr if config.reverse else arr, kind="stable" if config.stable else "quicksort")
        return [(keys[i], start + i) for i in order.tolist()]

    order = sorted(range(len(keys)), key=keys.__getitem__, reverse=config.reverse)
    return [(keys[i], start + i) for i in order]


def sort(lines: MutableSequence[str], config: SortConfig, *, min_chunk: int = MIN_CHUNK_SIZE) -> None:
    """Sort ``lines`` in place under ``config``.

    The input is cut into contiguous chunks, each chunk is keyed and sorted on
    a worker thread, and the runs are merged. Both the per-chunk sort and the
    merge keep equal keys in input order, so stable mode holds for any worker
    count.
    """
    if config.unique:
        lines[:] = unique_lines(lines)

    n = len(lines)
    if n < 2:
        return

    snapshot = list(lines)
    workers = config.parallel or os.cpu_count() or 1
    bounds = _chunk_bounds(n, workers, min_chunk)
    logger.debug(
        "sort lines=%d chunks=%d workers=%d strategy=%s stable=%s reverse=%s",
        n, len(bounds), workers, config.strategy.value, config.stable, config.reverse,
    )

    if len(bounds) == 1:
        runs = [_sort_run(snapshot, 0, n, config)]
    else:
        with ThreadPoolExecutor(max_workers=min(workers, len(bounds))) as executor:
            runs = list(executor.map(lambda b: _sort_run(snapshot, b[0], b[1], config), bounds))

    merged = heapq.merge(*runs, key=itemgetter(0), reverse=config.reverse)
    lines[:] = [snapshot[i] for _, i in merged]
