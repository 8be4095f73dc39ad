# tests/utils.py
"""
Small, reusable helpers used across the grouping test suite.

Functions:
- member_ids(groups): flat list of member ids across groups.
- assert_partition(groups, entries): every entry appears in exactly one group.
- group_of(groups, entry_id): name of the group holding an entry.
- team_averages(groups, entries, field_id): mean of a numeric field per group.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import json
import time
from collections import Counter
from contextlib import contextmanager
from typing import Any, Dict, List, Sequence

from smartgroups.base.data_structures import Entry, GroupResult


def member_ids(groups: Sequence[GroupResult]) -> List[str]:
    return [uid for group in groups for uid in group.member_ids]


def assert_partition(groups: Sequence[GroupResult], entries: Sequence[Entry]) -> None:
    """
    Assert exhaustiveness and disjointness: the multiset of member ids equals
    the multiset of entry ids.
    """
    got = Counter(member_ids(groups))
    expected = Counter(entry.id for entry in entries)
    assert got == expected, f"partition mismatch: missing={expected - got}, extra={got - expected}"


def group_of(groups: Sequence[GroupResult], entry_id: str) -> str:
    for group in groups:
        if entry_id in group.member_ids:
            return group.group_name
    raise KeyError(entry_id)


def team_averages(groups: Sequence[GroupResult], entries: Sequence[Entry],
                  field_id: str) -> List[float]:
    lookup = {entry.id: entry for entry in entries}
    averages = []
    for group in groups:
        values = [float(lookup[uid].data[field_id]) for uid in group.member_ids]
        averages.append(sum(values) / len(values))
    return averages


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("cluster", {"n": 400, "k": 4}):
    ...     model.fit(entries)

    Output
    ------
    [timing] cluster {"n":400,"k":4} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.
    """
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"), default=repr)
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
