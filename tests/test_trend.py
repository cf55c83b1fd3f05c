"""Tests for the day-bucketed sales trend."""

from datetime import date, datetime, timedelta, timezone

import pytest

from lottery_core.exceptions import ValidationError
from lottery_core.sales.trend import (
    NO_SALES_LABEL,
    TrendPoint,
    bucket_trend,
    daily_totals,
    relative_day_label,
)

# Wednesday
NOW = datetime(2025, 1, 15, 18, 0)


def _sale(day: date, total, hour: int = 10) -> dict:
    return {"total": total, "created_at": datetime(day.year, day.month, day.day, hour).isoformat()}


def test_relative_day_label() -> None:
    """Test Today / Yesterday / weekday labelling."""
    today = NOW.date()
    assert relative_day_label(today, today) == "Today"
    assert relative_day_label(today - timedelta(days=1), today) == "Yesterday"
    # weekday of the date itself, not offset by the day difference
    assert relative_day_label(date(2025, 1, 13), today) == "Mon"
    assert relative_day_label(date(2025, 1, 12), today) == "Sun"
    assert relative_day_label(date(2025, 1, 11), today) == "Sat"
    # dates after the reference day also get a weekday label
    assert relative_day_label(date(2025, 1, 16), today) == "Thu"


def test_today_and_yesterday_only() -> None:
    """Test that records spanning yesterday and today are labelled in order."""
    records = [
        _sale(date(2025, 1, 15), "10", hour=9),
        _sale(date(2025, 1, 14), "4"),
        _sale(date(2025, 1, 15), "5", hour=17),
    ]
    trend = bucket_trend(records, reference_now=NOW)
    assert [p.label for p in trend] == ["Yesterday", "Today"]
    assert [p.value for p in trend] == pytest.approx([4.0, 15.0])


def test_empty_records_give_no_sales_point() -> None:
    """Test the synthetic point for an empty record list."""
    assert bucket_trend([], reference_now=NOW) == [TrendPoint(NO_SALES_LABEL, 0.0)]


def test_only_undated_records_give_no_sales_point() -> None:
    """Test that records without a parseable date cannot form buckets."""
    records = [{"total": 10, "created_at": "garbage"}, {"total": 5}]
    assert bucket_trend(records, reference_now=NOW) == [TrendPoint("No Sales", 0.0)]


def test_undated_records_are_excluded_from_buckets() -> None:
    records = [_sale(date(2025, 1, 15), 10), {"total": 99, "created_at": None}]
    trend = bucket_trend(records, reference_now=NOW)
    assert trend == [TrendPoint("Today", 10.0)]


def test_non_finite_epoch_is_excluded_from_buckets() -> None:
    records = [_sale(date(2025, 1, 15), 10), {"total": 99, "created_at": float("inf")}]
    assert bucket_trend(records, reference_now=NOW) == [TrendPoint("Today", 10.0)]


def test_window_takes_most_recent_days_with_sales() -> None:
    """Test that buckets are distinct sale dates, not consecutive calendar days."""
    days = [date(2024, 12, 1) + timedelta(days=3 * i) for i in range(10)]
    records = [_sale(d, i + 1) for i, d in enumerate(days)]

    trend = bucket_trend(records, reference_now=NOW)

    assert len(trend) == 7
    # the 7 latest sale dates, oldest first
    assert [p.value for p in trend] == [4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0]
    expected_labels = [["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"][d.weekday()] for d in days[3:]]
    assert [p.label for p in trend] == expected_labels


def test_fewer_days_than_window() -> None:
    records = [_sale(date(2025, 1, 10), 3), _sale(date(2025, 1, 15), 2)]
    trend = bucket_trend(records, reference_now=NOW)
    assert [p.label for p in trend] == ["Fri", "Today"]


def test_all_zero_values_are_returned_as_is() -> None:
    """Test that a zero-valued series is not replaced by the synthetic point."""
    records = [_sale(date(2025, 1, 14), "abc"), _sale(date(2025, 1, 15), None)]
    trend = bucket_trend(records, reference_now=NOW)
    assert trend == [TrendPoint("Yesterday", 0.0), TrendPoint("Today", 0.0)]


def test_bucket_value_is_sum_of_day() -> None:
    records = [_sale(date(2025, 1, 15), v, hour=h) for h, v in [(0, 1), (12, "2.5"), (23, 3)]]
    assert bucket_trend(records, reference_now=NOW) == [TrendPoint("Today", 6.5)]


@pytest.mark.parametrize("window_days", [1, 3, 7])
def test_length_and_order_bounds(window_days: int) -> None:
    """Test that the trend length is within [1, window] and ascending."""
    # 1..12 January, each day's total equal to its day of month
    days = [date(2025, 1, 1) + timedelta(days=i) for i in range(12)]
    records = [_sale(d, d.day) for d in reversed(days)]
    trend = bucket_trend(records, reference_now=NOW, window_days=window_days)

    assert 1 <= len(trend) <= window_days
    kept = days[-window_days:]
    assert [p.value for p in trend] == [float(d.day) for d in kept]
    assert [p.label for p in trend] == [["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"][d.weekday()] for d in kept]


def test_window_days_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        bucket_trend([], reference_now=NOW, window_days=0)


def test_reference_now_with_offset() -> None:
    """Test calendar days in an explicit zone for offset-aware timestamps."""
    ist = timezone(timedelta(hours=5, minutes=30))
    records = [
        {"total": 10, "created_at": "2025-01-14T20:00:00Z"},  # 15 Jan 01:30 IST
        {"total": 5, "created_at": "2025-01-14T10:00:00Z"},  # 14 Jan 15:30 IST
    ]
    now = datetime(2025, 1, 15, 12, 0, tzinfo=ist)
    trend = bucket_trend(records, reference_now=now, tz=ist)
    assert trend == [TrendPoint("Yesterday", 5.0), TrendPoint("Today", 10.0)]


def test_daily_totals_index_is_dates() -> None:
    records = [_sale(date(2025, 1, 14), 2), _sale(date(2025, 1, 14), 3), _sale(date(2025, 1, 15), 1)]
    totals = daily_totals(records)
    assert list(totals.index) == [date(2025, 1, 14), date(2025, 1, 15)]
    assert list(totals.values) == pytest.approx([5.0, 1.0])
