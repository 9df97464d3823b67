"""Bounded combination search over a ranked candidate pool.

Subsets are generated in lexicographic pool order and the generator stops
after ``limit`` subsets. Because the pool is ranked best-first, the early
subsets favour the strongest candidates, but the cap is a heuristic bound:
the best possible team may lie beyond it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
import itertools
import logging
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_COMBINATION_LIMIT = 100


def _combinations(pool: Sequence[T], size: int, start: int = 0) -> Iterator[tuple[T, ...]]:
    if size == 0:
        yield ()
        return
    for i in range(start, len(pool) - size + 1):
        for rest in _combinations(pool, size - 1, i + 1):
            yield (pool[i], *rest)


def generate_combinations(
    pool: Sequence[T],
    size: int,
    limit: int = DEFAULT_COMBINATION_LIMIT,
) -> list[tuple[T, ...]]:
    """Return at most *limit* distinct subsets of *size* drawn from *pool*.

    Args:
        pool: Candidates, best first.
        size: Subset size; 0 yields a single empty subset.
        limit: Hard cap on the number of subsets.

    Returns:
        ``min(C(len(pool), size), limit)`` tuples in lexicographic order.
    """
    if size < 0:
        raise ValueError("size must be non-negative")
    if limit <= 0 or size > len(pool):
        return []
    return list(itertools.islice(_combinations(pool, size), limit))


def evaluate_combinations(
    combos: Sequence[T],
    evaluate: Callable[[T], R],
    max_workers: int = 4,
) -> list[R]:
    """Apply *evaluate* to each subset on a bounded thread pool.

    Results keep the order of *combos*.
    """
    if not combos:
        return []
    if max_workers <= 1 or len(combos) == 1:
        return [evaluate(c) for c in combos]

    workers = min(max_workers, len(combos))
    logger.debug("Evaluating %d combinations on %d workers", len(combos), workers)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="hackmatch") as pool:
        return list(pool.map(evaluate, combos))
