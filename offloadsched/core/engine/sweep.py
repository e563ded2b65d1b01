"""Batched parallel evaluation into a pre-sized result buffer.

Responsibilities:
  - Split work items into contiguous batches, one per worker.
  - Write each result at its precomputed global index.

Invariants:
  - Every buffer slot is written exactly once by exactly one worker, so no
    locking is needed; results do not depend on scheduling order.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from itertools import accumulate
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")

MAX_WORKERS = 8

_UNSET = object()


def split_equal(items: Sequence[T], parts: int) -> list[list[T]]:
    if parts < 1:
        raise ValueError("parts must be >= 1")
    base, extra = divmod(len(items), parts)
    batches: list[list[T]] = []
    start = 0
    for i in range(parts):
        size = base + (1 if i < extra else 0)
        batches.append(list(items[start : start + size]))
        start += size
    return batches


def run_batched(
    items: Sequence[T],
    fn: Callable[[T], R],
    number_of_workers: int,
) -> list[R]:
    if not items:
        return []
    if number_of_workers < 1:
        raise ValueError("number_of_workers must be >= 1")

    worker_count = min(number_of_workers, MAX_WORKERS, len(items))
    batches = split_equal(items, worker_count)
    offsets = [0] + list(accumulate(len(b) for b in batches))[:-1]
    buffer: list[object] = [_UNSET] * len(items)

    def _work(batch_no: int) -> None:
        offset = offsets[batch_no]
        for position, item in enumerate(batches[batch_no]):
            buffer[offset + position] = fn(item)

    with ThreadPoolExecutor(max_workers=worker_count) as pool:
        futures = [pool.submit(_work, i) for i in range(worker_count)]
        for future in futures:
            future.result()

    if any(slot is _UNSET for slot in buffer):
        raise RuntimeError("Sweep finished with unwritten result slots")
    return buffer  # type: ignore[return-value]
