"""Batch evaluation utilities.

Responsibilities:
  - Run independent sweep points on a bounded worker pool.
  - Must not share mutable state between workers beyond disjoint buffer slots.
"""

from .sweep import MAX_WORKERS, run_batched, split_equal

__all__ = ["MAX_WORKERS", "run_batched", "split_equal"]
