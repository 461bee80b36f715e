from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import TYPE_CHECKING, Protocol, TypeVar

from dateutil import parser as date_parser

from valueobjects.platform.errors import FormatError, RangeError

if TYPE_CHECKING:
    from valueobjects.platform.config import ValueObjectsConfig

InstantT = TypeVar("InstantT", bound=date)


class InstantGranularity(Protocol[InstantT]):
    """
    InstantGranularity — capability the range algebra is parameterized over.

    An implementation fixes the concrete instant type (calendar `date` or aware
    `datetime`), the "one unit" step used by `diff`/`gap`, and the canonical
    text form used by `__str__`.

    Related:
      - src/valueobjects/shared_kernel/primitives/temporal_range.py
      - src/valueobjects/shared_kernel/primitives/date_range.py
      - src/valueobjects/shared_kernel/primitives/date_time_range.py
    """

    unit: timedelta

    def parse(self, text: str, *, default_tz: tzinfo | None = None) -> InstantT:
        """
        Parse flexible instant text into this granularity.

        Args:
            text: Instant text, e.g. `2009-06-07` or `2009-06-07T09:06:07Z`.
            default_tz: Zone attached to naive text, granularity default when omitted.
        Returns:
            InstantT: Parsed instant.
        Assumptions:
            Duration shorthand (`P...`) is not an instant.
        Raises:
            FormatError: If the text cannot be parsed.
        Side Effects:
            None.
        """
        ...

    def coerce(self, value: date) -> InstantT:
        """Bring a date or datetime of either granularity into this one."""
        ...

    def format(self, value: InstantT) -> str:
        """Canonical ISO-8601 text of one instant."""
        ...

    def step(self, value: InstantT, units: int) -> InstantT:
        """Shift an instant by a signed number of units."""
        ...

    def units_between(self, earlier: InstantT, later: InstantT) -> int:
        """Absolute count of whole units elapsed between two instants."""
        ...


@dataclass(frozen=True, slots=True)
class CalendarDayGranularity:
    """
    CalendarDayGranularity — plain dates, one unit is one day, format `YYYY-MM-DD`.
    """

    unit: timedelta = timedelta(days=1)

    def parse(self, text: str, *, default_tz: tzinfo | None = None) -> date:
        return _parse_datetime(text).date()

    def coerce(self, value: date) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        raise TypeError(f"expected date or datetime, got {type(value).__name__}")

    def format(self, value: date) -> str:
        return value.isoformat()

    def step(self, value: date, units: int) -> date:
        return _checked_step(value, self.unit * units)

    def units_between(self, earlier: date, later: date) -> int:
        return abs(later - earlier) // self.unit


@dataclass(frozen=True, slots=True)
class WallClockSecondGranularity:
    """
    WallClockSecondGranularity — timezone-aware datetimes, one unit is one second.

    Naive datetimes and bare dates are pinned to `default_tz` (midnight for dates),
    so every instant handled by the algebra is aware and mutually comparable.
    Format is ISO-8601 with a numeric UTC offset, e.g. `2006-09-06T06:09:06+00:00`.
    """

    default_tz: tzinfo = field(default=timezone.utc)
    unit: timedelta = timedelta(seconds=1)

    def parse(self, text: str, *, default_tz: tzinfo | None = None) -> datetime:
        parsed = _parse_datetime(text)
        if parsed.tzinfo is None or parsed.utcoffset() is None:
            parsed = parsed.replace(tzinfo=default_tz or self.default_tz)
        return parsed

    def coerce(self, value: date) -> datetime:
        if isinstance(value, datetime):
            if value.tzinfo is None or value.utcoffset() is None:
                return value.replace(tzinfo=self.default_tz)
            return value
        if isinstance(value, date):
            return datetime.combine(value, time(), tzinfo=self.default_tz)
        raise TypeError(f"expected date or datetime, got {type(value).__name__}")

    def format(self, value: datetime) -> str:
        return value.isoformat(timespec="seconds")

    def step(self, value: datetime, units: int) -> datetime:
        # Elapsed time, not wall-clock: shift in UTC, then back to the original zone.
        try:
            shifted = value.astimezone(timezone.utc) + self.unit * units
            return shifted.astimezone(value.tzinfo)
        except OverflowError as error:
            raise RangeError(
                f"stepping {value!r} by {units} seconds leaves the representable calendar",
                details={"value": value.isoformat(), "delta_seconds": units},
            ) from error

    def units_between(self, earlier: datetime, later: datetime) -> int:
        # Same-zone subtraction ignores the offset change, so remove it explicitly.
        wall_clock = later.replace(tzinfo=None) - earlier.replace(tzinfo=None)
        elapsed = wall_clock - (later.utcoffset() - earlier.utcoffset())
        return abs(elapsed) // self.unit

    @classmethod
    def from_config(cls, config: ValueObjectsConfig) -> WallClockSecondGranularity:
        """Granularity that pins naive instants to the configured zone."""
        return cls(default_tz=config.naive_tzinfo())


CALENDAR_DAY = CalendarDayGranularity()
UTC_SECOND = WallClockSecondGranularity()


def _parse_datetime(text: str) -> datetime:
    """
    Parse instant text with dateutil's flexible recognition.

    Args:
        text: Raw instant text.
    Returns:
        datetime: Parsed (possibly naive) datetime.
    Assumptions:
        Missing date components are filled by dateutil defaults.
    Raises:
        FormatError: If the text is not a string or cannot be parsed.
    Side Effects:
        None.
    """
    if not isinstance(text, str):
        raise FormatError(
            f"instant text must be a string, got {type(text).__name__}",
            details={"value": text},
        )
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError) as error:
        raise FormatError(
            f"unparsable instant text: {text!r}",
            details={"value": text},
        ) from error


def _checked_step(value: InstantT, delta: timedelta) -> InstantT:
    try:
        return value + delta
    except OverflowError as error:
        raise RangeError(
            f"stepping {value!r} by {delta} leaves the representable calendar",
            details={"value": value.isoformat(), "delta_seconds": delta.total_seconds()},
        ) from error
