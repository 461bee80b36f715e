from datetime import date, datetime, timezone

import pytest
from dateutil import tz

from valueobjects.platform.errors import FormatError, RangeError
from valueobjects.shared_kernel.primitives import DateRange, DateTimeRange


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _dtr(start: str, end: str) -> DateTimeRange:
    return DateTimeRange(_ts(start), _ts(end))


def test_date_time_range_from_iso8601_parses_both_halves() -> None:
    dr = DateTimeRange.from_iso8601("2009-06-07T09:06:07Z/2011-05-04T11:05:04Z")

    assert dr.start == datetime(2009, 6, 7, 9, 6, 7, tzinfo=timezone.utc)
    assert dr.end == datetime(2011, 5, 4, 11, 5, 4, tzinfo=timezone.utc)

    with pytest.raises(FormatError):
        DateTimeRange.from_iso8601("2009-06-07T09:06:07Z")


def test_date_time_range_from_iso8601_applies_default_tz_to_naive_text() -> None:
    plus_one = tz.tzoffset(None, 3600)

    dr = DateTimeRange.from_iso8601(
        "2006-07-01T10:00:00/2006-07-02T10:00:00",
        default_tz=plus_one,
    )

    assert str(dr) == "2006-07-01T10:00:00+01:00/2006-07-02T10:00:00+01:00"
    assert dr.start == datetime(2006, 7, 1, 9, 0, 0, tzinfo=timezone.utc)


def test_date_time_range_pins_naive_and_date_bounds_to_utc() -> None:
    dr = DateTimeRange(datetime(2006, 7, 1, 6, 7, 1), date(2006, 7, 2))

    assert dr.start == datetime(2006, 7, 1, 6, 7, 1, tzinfo=timezone.utc)
    assert dr.end == datetime(2006, 7, 2, 0, 0, 0, tzinfo=timezone.utc)
    assert dr.start.tzinfo is not None


def test_date_time_range_gap_counts_seconds_between() -> None:
    dr1 = _dtr("2006-07-08T06:07:08Z", "2006-09-05T06:09:05Z")
    dr2 = _dtr("2006-09-09T06:09:09Z", "2006-09-15T06:09:15Z")

    # 4 days and 4 seconds between the ranges, minus the adjacency second.
    assert dr2.gap(dr1) == 4 * 86400 + 4 - 1
    assert dr1.gap(dr2) == 4 * 86400 + 4 - 1

    dr3 = _dtr("2006-09-04T06:09:04Z", "2006-09-15T06:09:15Z")

    assert dr1.gap(dr3) is None
    assert dr3.gap(dr1) is None


def test_date_time_range_abuts_on_consecutive_seconds() -> None:
    dr1 = _dtr("2006-07-08T06:07:08Z", "2006-09-05T06:09:05Z")
    dr2 = _dtr("2006-09-05T06:09:06Z", "2006-09-15T06:09:15Z")

    assert dr2.abuts(dr1)
    assert dr1.abuts(dr2)

    dr3 = _dtr("2006-09-06T06:09:06Z", "2006-09-15T06:09:15Z")

    assert not dr1.abuts(dr3)
    assert not dr3.abuts(dr1)


def test_date_time_range_diff_steps_by_one_second() -> None:
    dr1 = _dtr("2006-07-01T06:07:01Z", "2006-08-01T06:08:01Z")
    dr2 = _dtr("2006-07-15T06:07:15Z", "2006-08-15T06:08:15Z")
    dr3 = _dtr("2006-07-02T06:07:02Z", "2006-07-13T06:07:13Z")

    assert dr1.diff(dr2) == _dtr("2006-07-01T06:07:01Z", "2006-07-15T06:07:14Z")
    assert dr2.diff(dr1) == _dtr("2006-08-01T06:08:02Z", "2006-08-15T06:08:15Z")

    with pytest.raises(RangeError):
        dr1.diff(dr3)


def test_date_time_range_diff_with_date_range_keeps_receiver_granularity() -> None:
    dr1 = _dtr("2006-07-01T06:07:01Z", "2006-08-01T06:08:01Z")
    dr2 = DateRange(date(2006, 7, 15), date(2006, 8, 15))

    left = dr1.diff(dr2)
    right = dr2.diff(dr1)

    assert isinstance(left, DateTimeRange)
    assert str(left) == "2006-07-01T06:07:01+00:00/2006-07-14T23:59:59+00:00"
    assert isinstance(right, DateRange)
    assert str(right) == "2006-08-02/2006-08-15"


def test_date_time_range_diff_reports_overflow_past_future_sentinel() -> None:
    tail = DateTimeRange.starting_on(_ts("2006-07-01T00:00:00Z"))
    wider = DateTimeRange.starting_on(_ts("2000-01-01T00:00:00Z"))

    with pytest.raises(RangeError):
        tail.diff(wider)


def test_date_time_range_to_string() -> None:
    dr = _dtr("2006-09-06T06:09:06Z", "2006-09-15T06:09:15Z")

    assert str(dr) == "2006-09-06T06:09:06+00:00/2006-09-15T06:09:15+00:00"
    assert DateTimeRange.from_iso8601(str(dr)) == dr


def test_date_time_range_is_future_and_is_past() -> None:
    dr1 = _dtr("2006-07-01T06:07:01Z", "2006-08-01T06:08:01Z")
    dr2 = DateTimeRange(DateTimeRange.past_instant(), _ts("2006-08-01T06:08:01Z"))
    dr3 = DateTimeRange(_ts("2006-07-01T06:07:01Z"), DateTimeRange.future_instant())
    dr4 = DateTimeRange(DateTimeRange.past_instant(), DateTimeRange.future_instant())

    assert (dr1.is_past(), dr1.is_future(), dr1.is_infinite()) == (False, False, False)
    assert (dr2.is_past(), dr2.is_future(), dr2.is_infinite()) == (True, False, False)
    assert (dr3.is_past(), dr3.is_future(), dr3.is_infinite()) == (False, True, False)
    assert (dr4.is_past(), dr4.is_future(), dr4.is_infinite()) == (True, True, True)


def test_date_time_range_infinite_uses_timestamp_sentinels() -> None:
    infinite = DateTimeRange.infinite()

    assert infinite.is_infinite()
    assert str(infinite) == "1000-01-01T00:00:00+00:00/9999-12-31T23:59:59+00:00"

    # Sentinel check is by value: a naive instant equal to PAST counts as past.
    assert DateTimeRange(datetime(1000, 1, 1), datetime(2000, 1, 1)).is_past()


def test_date_time_range_equality_is_class_strict_but_equals_is_not() -> None:
    dtr = _dtr("2006-07-15T00:00:00Z", "2006-08-15T00:00:00Z")
    dr = DateRange(date(2006, 7, 15), date(2006, 8, 15))

    assert dtr != dr
    assert dtr.equals(dr)
    assert dr.equals(dtr)


def test_date_time_range_diff_rejects_date_range_ending_before_sub_day_start() -> None:
    dtr = _dtr("2006-07-01T12:00:00Z", "2006-07-05T00:00:00Z")
    earlier_days = DateRange(date(2006, 6, 1), date(2006, 7, 1))

    # The date range ends at midnight of 07-01, before the noon start.
    assert not dtr.overlaps(earlier_days)
    assert not earlier_days.overlaps(dtr)

    with pytest.raises(RangeError):
        dtr.diff(earlier_days)


def test_date_time_range_diff_with_date_range_stays_within_receiver() -> None:
    dtr = _dtr("2006-07-01T12:00:00Z", "2006-07-05T00:00:00Z")
    days = DateRange(date(2006, 6, 1), date(2006, 7, 2))

    remainder = dtr.diff(days)

    assert remainder == _dtr("2006-07-02T00:00:01Z", "2006-07-05T00:00:00Z")
    assert dtr.includes(remainder)


def test_mixed_granularity_overlap_gap_and_order_are_symmetric() -> None:
    ranges = [
        _dtr("2006-07-01T12:00:00Z", "2006-07-05T00:00:00Z"),
        _dtr("2006-07-01T00:00:00Z", "2006-07-01T00:00:00Z"),
        _dtr("2006-06-30T23:59:59Z", "2006-06-30T23:59:59Z"),
        _dtr("2006-07-05T00:00:01Z", "2006-07-06T18:30:00Z"),
        DateRange(date(2006, 7, 1), date(2006, 7, 1)),
        DateRange(date(2006, 6, 1), date(2006, 7, 1)),
        DateRange(date(2006, 7, 5), date(2006, 7, 6)),
        DateRange(date(2006, 7, 7), date(2006, 7, 9)),
    ]

    for a in ranges:
        for b in ranges:
            assert a.overlaps(b) == b.overlaps(a), (str(a), str(b))
            assert a.compare_to(b) == -b.compare_to(a), (str(a), str(b))
            assert a.equals(b) == b.equals(a), (str(a), str(b))
            if not a.overlaps(b):
                assert a.gap(b) == b.gap(a), (str(a), str(b))
                assert a.gap(b) >= 0, (str(a), str(b))


def test_mixed_granularity_gap_counts_seconds() -> None:
    dtr = _dtr("2006-07-01T12:00:00Z", "2006-07-05T00:00:00Z")
    next_day = DateRange(date(2006, 7, 6), date(2006, 7, 9))

    assert dtr.gap(next_day) == 86400 - 1
    assert next_day.gap(dtr) == 86400 - 1
    assert not dtr.abuts(next_day)
    assert _dtr("2006-06-20T00:00:00Z", "2006-06-30T23:59:59Z").abuts(
        DateRange(date(2006, 7, 1), date(2006, 7, 3))
    )


def test_date_time_range_gap_counts_elapsed_seconds_across_dst_change() -> None:
    new_york = tz.gettz("America/New_York")
    winter = DateTimeRange(
        datetime(2006, 3, 1, 0, 0, 0, tzinfo=new_york),
        datetime(2006, 3, 12, 1, 59, 59, tzinfo=new_york),
    )
    spring = DateTimeRange(
        datetime(2006, 4, 2, 3, 0, 0, tzinfo=new_york),
        datetime(2006, 4, 10, 0, 0, 0, tzinfo=new_york),
    )

    # 21 days and one second of elapsed time; the skipped local hour is not counted.
    assert winter.gap(spring) == 21 * 86400
    assert spring.gap(winter) == 21 * 86400


def test_date_time_range_diff_steps_over_missing_local_hour() -> None:
    new_york = tz.gettz("America/New_York")
    day = DateTimeRange(
        datetime(2006, 4, 2, 0, 0, 0, tzinfo=new_york),
        datetime(2006, 4, 2, 6, 0, 0, tzinfo=new_york),
    )
    night = DateTimeRange(
        datetime(2006, 4, 1, 20, 0, 0, tzinfo=new_york),
        datetime(2006, 4, 2, 1, 59, 59, tzinfo=new_york),
    )

    remainder = day.diff(night)

    assert str(remainder) == "2006-04-02T03:00:00-04:00/2006-04-02T06:00:00-04:00"
