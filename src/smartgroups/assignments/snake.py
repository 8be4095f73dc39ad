"""
Serpentine (snake) draft assignment.

Distributes an ordered sequence across k buckets passing left to right,
then right to left, so that cumulative value evens out across buckets.
"""

from typing import List, Sequence, TypeVar

T = TypeVar('T')


class SnakeDraft:
    """Stateful snake draft whose direction and pointer persist across calls.

    Drafting several pools one after another through the same instance
    continues the alternating pattern at pool boundaries.
    """

    def __init__(self, n_buckets: int):
        if n_buckets <= 0:
            raise ValueError(f"n_buckets must be positive, got {n_buckets}")
        self.n_buckets = n_buckets
        self.buckets: List[List] = [[] for _ in range(n_buckets)]
        self._forward = True
        self._position = 0

    def next_bucket(self) -> int:
        """Bucket receiving the next pick; advances the pointer."""
        k = self.n_buckets
        bucket = self._position if self._forward else k - 1 - self._position
        self._position += 1
        if self._position == k:
            self._position = 0
            self._forward = not self._forward
        return bucket

    def draft(self, items: Sequence[T]) -> List[List[T]]:
        for item in items:
            self.buckets[self.next_bucket()].append(item)
        return self.buckets


def snake_draft(items: Sequence[T], n_buckets: int) -> List[List[T]]:
    """One snake draft of items (already in pick order) into n_buckets."""
    return SnakeDraft(n_buckets).draft(items)


def snake_draft_pools(pools: Sequence[Sequence[T]], n_buckets: int) -> List[List[T]]:
    """Draft pools in order, continuing direction and pointer across pools."""
    drafter = SnakeDraft(n_buckets)
    for pool in pools:
        drafter.draft(pool)
    return drafter.buckets


def bounce_assign(items: Sequence[T], n_buckets: int) -> List[List[T]]:
    """Walk 0, 1, ..., k-1, k-2, ..., 0, 1, ... placing one item per step.

    Endpoints are visited once per sweep, unlike the snake draft which
    repeats them.
    """
    buckets: List[List[T]] = [[] for _ in range(n_buckets)]
    bucket = 0
    step = 1
    for item in items:
        buckets[bucket].append(item)
        if n_buckets == 1:
            continue
        if bucket == n_buckets - 1:
            step = -1
        elif bucket == 0:
            step = 1
        bucket += step
    return buckets
