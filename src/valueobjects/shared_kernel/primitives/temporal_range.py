from __future__ import annotations

from dataclasses import dataclass
from datetime import date, tzinfo
from enum import Enum
from typing import Any, ClassVar, Generic, Iterable, TypeVar

from valueobjects.platform.errors import FormatError, RangeError

from . import range_series
from .instant_granularity import InstantGranularity, InstantT
from .range_bounds import RangeBounds

RangeT = TypeVar("RangeT", bound="TemporalRange[Any]")

_INTERVAL_SEPARATOR = "/"


class RangeBoundedness(str, Enum):
    """
    RangeBoundedness — explicit view of which sides of a range sit on a sentinel.
    """

    BOUNDED = "bounded"
    SEMI_BOUNDED_PAST = "semi_bounded_past"
    SEMI_BOUNDED_FUTURE = "semi_bounded_future"
    INFINITE = "infinite"


@dataclass(frozen=True, slots=True)
class TemporalRange(Generic[InstantT]):
    """
    TemporalRange — closed interval [start, end] over ordered instants.

    Semantics:
    - both bounds are included;
    - start > end is a legal value and means "empty" (never rejected, never reordered);
    - the far-past/far-future sentinels (`PAST`/`FUTURE`) stand in for unbounded sides.

    Concrete ranges bind `granularity` (instant type, one-unit step, text format)
    and the sentinel literals; all algebra lives here. Operands of another
    granularity are coerced into the receiver's one, so results always come back
    as the receiver's class.

    Related:
      - src/valueobjects/shared_kernel/primitives/date_range.py
      - src/valueobjects/shared_kernel/primitives/date_time_range.py
      - src/valueobjects/shared_kernel/primitives/range_series.py
    """

    start: InstantT
    end: InstantT

    granularity: ClassVar[InstantGranularity[Any]]
    PAST: ClassVar[str]
    FUTURE: ClassVar[str]

    def __post_init__(self) -> None:
        # Bounds are pinned to the receiver granularity, e.g. naive -> aware.
        object.__setattr__(self, "start", self.granularity.coerce(self.start))
        object.__setattr__(self, "end", self.granularity.coerce(self.end))

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    @classmethod
    def past_instant(cls) -> InstantT:
        """Instant of the `PAST` sentinel in this granularity."""
        return cls.granularity.parse(cls.PAST)

    @classmethod
    def future_instant(cls) -> InstantT:
        """Instant of the `FUTURE` sentinel in this granularity."""
        return cls.granularity.parse(cls.FUTURE)

    @classmethod
    def from_iso8601(
        cls: type[RangeT],
        text: str,
        *,
        default_tz: tzinfo | None = None,
    ) -> RangeT:
        """
        Build a range from an ISO-8601 `<instant>/<instant>` interval string.

        Args:
            text: Interval string, split on the first `/`.
            default_tz: Zone attached to naive halves (date-time ranges only).
        Returns:
            RangeT: New range of the calling class.
        Assumptions:
            Duration forms (`P...`) are not supported on either side.
        Raises:
            FormatError: If the separator is missing or a half cannot be parsed.
        Side Effects:
            None.
        """
        if not isinstance(text, str):
            raise FormatError(
                f"interval must be a string, got {type(text).__name__}",
                details={"value": text},
            )
        parts = text.split(_INTERVAL_SEPARATOR, 1)
        if len(parts) < 2:
            raise FormatError(
                "interval is expected in the form <start>/<end>",
                details={"value": text},
            )
        return cls(
            cls.granularity.parse(parts[0], default_tz=default_tz),
            cls.granularity.parse(parts[1], default_tz=default_tz),
        )

    @classmethod
    def from_bounds(cls: type[RangeT], bounds: RangeBounds[Any]) -> RangeT:
        """
        Build a range from an optional start/end pair.

        Args:
            bounds: Typed optional pair; a missing side is unbounded.
        Returns:
            RangeT: `infinite()`, `up_to(end)`, `starting_on(start)` or `[start, end]`.
        Assumptions:
            Bounds are already typed instants (adapters do the parsing).
        Raises:
            TypeError: If `bounds` is not a `RangeBounds`.
        Side Effects:
            None.
        """
        if not isinstance(bounds, RangeBounds):
            raise TypeError(f"expected RangeBounds, got {type(bounds).__name__}")
        if bounds.start is None and bounds.end is None:
            return cls.infinite()
        if bounds.start is None:
            return cls.up_to(bounds.end)
        if bounds.end is None:
            return cls.starting_on(bounds.start)
        return cls(bounds.start, bounds.end)

    @classmethod
    def infinite(cls: type[RangeT]) -> RangeT:
        return cls(cls.past_instant(), cls.future_instant())

    @classmethod
    def up_to(cls: type[RangeT], end: InstantT) -> RangeT:
        return cls(cls.past_instant(), end)

    @classmethod
    def starting_on(cls: type[RangeT], start: InstantT) -> RangeT:
        return cls(start, cls.future_instant())

    # ------------------------------------------------------------------
    # predicates
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        return self.end < self.start

    def is_past(self) -> bool:
        """
        True when the start equals the `PAST` sentinel.

        This is a value check: a finite range that happens to start on the
        sentinel instant also reports True. See `boundedness()`.
        """
        return self.start == self.past_instant()

    def is_future(self) -> bool:
        """True when the end equals the `FUTURE` sentinel (value check)."""
        return self.end == self.future_instant()

    def is_infinite(self) -> bool:
        return self.is_past() and self.is_future()

    def boundedness(self) -> RangeBoundedness:
        past = self.is_past()
        future = self.is_future()
        if past and future:
            return RangeBoundedness.INFINITE
        if past:
            return RangeBoundedness.SEMI_BOUNDED_PAST
        if future:
            return RangeBoundedness.SEMI_BOUNDED_FUTURE
        return RangeBoundedness.BOUNDED

    def equals(self, other: TemporalRange[Any]) -> bool:
        """Bound-wise equality, across granularities (compared at the finer one)."""
        start, end, other_start, other_end = self._comparable_bounds(other)
        return start == other_start and end == other_end

    def includes(self, item: date | TemporalRange[Any]) -> bool:
        """
        Test whether an instant or a whole range falls inside this range.

        Args:
            item: Instant (`date`/`datetime`) or another range.
        Returns:
            bool: For an instant `start <= item <= end`; for a range, both of its
            bounds are individually included.
        Assumptions:
            Range containment is literal bound-wise, so an empty range whose
            bounds lie inside is reported as included.
        Raises:
            TypeError: If `item` is neither an instant nor a range.
        Side Effects:
            None.
        """
        if isinstance(item, TemporalRange):
            return self.includes(item.start) and self.includes(item.end)
        if isinstance(item, date):
            instant = self.granularity.coerce(item)
            return self.start <= instant <= self.end
        raise TypeError(
            f"expected date, datetime or range, got {type(item).__name__}"
        )

    def overlaps(self, other: TemporalRange[Any]) -> bool:
        """
        Test whether two ranges share at least one instant.

        Args:
            other: Range of either granularity.
        Returns:
            bool: True when either bound of this range lies inside `other`, or
            `other` lies inside this range.
        Assumptions:
            Mixed granularities are compared at the finer one, a calendar date
            standing for its midnight, so the result is symmetric.
        Raises:
            TypeError: If `other` is not a range.
        Side Effects:
            None.
        """
        start, end, other_start, other_end = self._comparable_bounds(other)
        return (
            other_start <= start <= other_end
            or other_start <= end <= other_end
            or (start <= other_start <= end and start <= other_end <= end)
        )

    def gap(self, other: TemporalRange[Any]) -> int | None:
        """
        Count whole units strictly between two non-overlapping ranges.

        Args:
            other: Range of either granularity.
        Returns:
            int | None: `None` when the ranges overlap; otherwise the units between
            the lower range's end and the higher range's start, minus one
            (0 means adjacent).
        Assumptions:
            Units are days for date ranges and seconds for date-time ranges;
            a date range against a date-time range counts seconds.
        Raises:
            TypeError: If `other` is not a range.
        Side Effects:
            None.
        """
        if self.overlaps(other):
            return None

        start, end, other_start, other_end = self._comparable_bounds(other)
        if self.compare_to(other) < 0:
            lower_end, higher_start = end, other_start
        else:
            lower_end, higher_start = other_end, start

        granularity = self._finer_granularity(other)
        return granularity.units_between(lower_end, higher_start) - 1

    def abuts(self, other: TemporalRange[Any]) -> bool:
        return not self.overlaps(other) and self.gap(other) == 0

    # ------------------------------------------------------------------
    # difference
    # ------------------------------------------------------------------

    def diff(self: RangeT, other: TemporalRange[Any]) -> RangeT:
        """
        Remove the overlap with `other` from this range.

        Args:
            other: Range of either granularity that overlaps this one from one side.
        Returns:
            RangeT: Remaining contiguous piece, in the receiver's class.
        Assumptions:
            The receiver is never split in two: `other` must start before and end
            inside this range, or start inside and end after it.
        Raises:
            RangeError: If the ranges do not overlap, or `other` lies strictly
                inside this range on both sides.
        Side Effects:
            None.
        """
        if not self.overlaps(other):
            raise RangeError(
                "argument must overlap this range",
                details={"range": str(self), "argument": str(other)},
            )

        other_start, other_end = self._coerced_bounds(other)
        if self.start < other_start and self.end > other_end:
            raise RangeError(
                "argument must not be exclusively contained within this range",
                details={"range": str(self), "argument": str(other)},
            )

        if self.start < other_start:
            return type(self)(self.start, self.granularity.step(other_start, -1))
        return type(self)(self.granularity.step(other_end, 1), self.end)

    # ------------------------------------------------------------------
    # ordering
    # ------------------------------------------------------------------

    def compare_to(self, other: TemporalRange[Any]) -> int:
        """Return -1, 0 or 1 ordering by start, then by end."""
        start, end, other_start, other_end = self._comparable_bounds(other)
        if start == other_start and end == other_end:
            return 0
        if start != other_start:
            return -1 if start < other_start else 1
        return -1 if end < other_end else 1

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TemporalRange):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, TemporalRange):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, TemporalRange):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, TemporalRange):
            return NotImplemented
        return self.compare_to(other) >= 0

    # ------------------------------------------------------------------
    # series
    # ------------------------------------------------------------------

    @staticmethod
    def is_contiguous(ranges: Iterable[TemporalRange[Any]]) -> bool:
        return range_series.is_contiguous(ranges)

    @staticmethod
    def series_start(ranges: Iterable[TemporalRange[Any]]) -> Any:
        return range_series.series_start(ranges)

    @staticmethod
    def series_end(ranges: Iterable[TemporalRange[Any]]) -> Any:
        return range_series.series_end(ranges)

    def __str__(self) -> str:
        # ISO-8601 interval; empty ranges have no textual form.
        if self.is_empty():
            return ""
        return (
            f"{self.granularity.format(self.start)}"
            f"{_INTERVAL_SEPARATOR}"
            f"{self.granularity.format(self.end)}"
        )

    def _finer_granularity(self, other: TemporalRange[Any]) -> InstantGranularity[Any]:
        if other.granularity.unit < self.granularity.unit:
            return other.granularity
        return self.granularity

    def _comparable_bounds(self, other: TemporalRange[Any]) -> tuple[Any, Any, Any, Any]:
        # Both ranges' bounds at the finer granularity, so no instant is truncated.
        self._require_range(other)
        granularity = self._finer_granularity(other)
        return (
            granularity.coerce(self.start),
            granularity.coerce(self.end),
            granularity.coerce(other.start),
            granularity.coerce(other.end),
        )

    def _coerced_bounds(self, other: TemporalRange[Any]) -> tuple[Any, Any]:
        self._require_range(other)
        return (
            self.granularity.coerce(other.start),
            self.granularity.coerce(other.end),
        )

    @staticmethod
    def _require_range(other: object) -> None:
        if not isinstance(other, TemporalRange):
            raise TypeError(f"expected a range, got {type(other).__name__}")
