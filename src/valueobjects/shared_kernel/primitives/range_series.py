"""
Helpers over ordered series of ranges.

Related: valueobjects.shared_kernel.primitives.temporal_range
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, Iterable

from valueobjects.platform.errors import EmptySeriesError

if TYPE_CHECKING:
    from .temporal_range import TemporalRange


def sort_ranges(ranges: Iterable[TemporalRange[Any]]) -> list[TemporalRange[Any]]:
    """
    Return a new list of ranges ordered by `compare_to`.

    Args:
        ranges: Any iterable of ranges; it is never mutated.
    Returns:
        list[TemporalRange[Any]]: Sorted copy.
    Assumptions:
        Ordering is start first, then end.
    Raises:
        TypeError: If an element is not a range.
    Side Effects:
        None.
    """
    return sorted(ranges, key=cmp_to_key(lambda left, right: left.compare_to(right)))


def is_contiguous(ranges: Iterable[TemporalRange[Any]]) -> bool:
    """
    Test that the ranges tile a timeline with no gaps and no overlaps.

    Args:
        ranges: Ranges in any order.
    Returns:
        bool: True when every adjacent pair of the sorted series abuts;
        empty and single-element series are contiguous.
    Assumptions:
        Input order is irrelevant, the caller collection is left untouched.
    Raises:
        TypeError: If an element is not a range.
    Side Effects:
        None.
    """
    ordered = sort_ranges(ranges)
    return all(lower.abuts(higher) for lower, higher in zip(ordered, ordered[1:]))


def series_start(ranges: Iterable[TemporalRange[Any]]) -> Any:
    """Earliest start across the series; empty series raise `EmptySeriesError`."""
    materialized = list(ranges)
    if not materialized:
        raise EmptySeriesError("series_start requires at least one range")
    return min(item.start for item in materialized)


def series_end(ranges: Iterable[TemporalRange[Any]]) -> Any:
    """Latest end across the series; empty series raise `EmptySeriesError`."""
    materialized = list(ranges)
    if not materialized:
        raise EmptySeriesError("series_end requires at least one range")
    return max(item.end for item in materialized)


__all__ = [
    "is_contiguous",
    "series_end",
    "series_start",
    "sort_ranges",
]
