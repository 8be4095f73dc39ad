# tests/test_snake.py
"""
Serpentine draft helpers.
"""

from __future__ import annotations

import pytest

from smartgroups.assignments.snake import (
    SnakeDraft, snake_draft, snake_draft_pools, bounce_assign
)


def test_snake_draft_order():
    assert snake_draft(list("abcdefg"), 3) == [["a", "f", "g"], ["b", "e"], ["c", "d"]]


def test_snake_single_bucket():
    assert snake_draft([1, 2, 3], 1) == [[1, 2, 3]]


def test_pointer_continues_across_pools():
    # Pool one ends after the turn; pool two continues the backward sweep
    buckets = snake_draft_pools([["a1", "a2", "a3"], ["b1", "b2", "b3"]], 2)
    assert buckets == [["a1", "b1", "b2"], ["a2", "a3", "b3"]]


def test_next_bucket_sequence():
    drafter = SnakeDraft(3)
    assert [drafter.next_bucket() for _ in range(8)] == [0, 1, 2, 2, 1, 0, 0, 1]


def test_bounce_does_not_repeat_endpoints():
    buckets = bounce_assign(list(range(7)), 3)
    # walk 0 1 2 1 0 1 2
    assert buckets == [[0, 4], [1, 3, 5], [2, 6]]


def test_invalid_bucket_count():
    with pytest.raises(ValueError):
        SnakeDraft(0)
