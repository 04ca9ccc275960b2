"""Chronological ordering of events.

Quicksort with a Lomuto partition: the pivot is the last element of each
range. Dates are ``YYYY-MM-DD`` strings, so plain string comparison is
chronological comparison. The sort is not stable.

The list is permuted by moving the record objects themselves. Nothing is
copied from one record into another, so any id held elsewhere still
resolves to the same event afterwards.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from eventdesk.models import Event

T = TypeVar("T")


def _partition(items: list[T], low: int, high: int, key: Callable[[T], str]) -> int:
    pivot = key(items[high])
    i = low - 1
    for j in range(low, high):
        if key(items[j]) <= pivot:
            i += 1
            items[i], items[j] = items[j], items[i]
    items[i + 1], items[high] = items[high], items[i + 1]
    return i + 1


def quicksort(items: list[T], key: Callable[[T], str]) -> None:
    """Sort ``items`` in place by ``key``."""
    # Explicit stack: already-sorted input degrades to n-deep recursion.
    ranges = [(0, len(items) - 1)]
    while ranges:
        low, high = ranges.pop()
        if low >= high:
            continue
        p = _partition(items, low, high, key)
        ranges.append((low, p - 1))
        ranges.append((p + 1, high))


def sort_events_by_date(events: list[Event]) -> None:
    """Order events by date, earliest first, in place."""
    if len(events) <= 1:
        return
    quicksort(events, key=lambda event: event.date)
