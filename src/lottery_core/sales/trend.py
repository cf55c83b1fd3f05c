"""Day-bucketed sales trend with relative labels.

The dashboard chart shows one point per calendar day for the most recent
days that actually have sales. Labels are relative to a reference time:
``Today``, ``Yesterday``, otherwise the weekday abbreviation of the date.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Any, Optional, Sequence

import pandas as pd

from lottery_core.config import DEFAULT_WINDOW_DAYS
from lottery_core.exceptions import ValidationError
from lottery_core.sales.parsing import to_local_naive
from lottery_core.sales.records import coerce_records, records_to_frame

logger = logging.getLogger(__name__)

TODAY_LABEL = "Today"
YESTERDAY_LABEL = "Yesterday"
NO_SALES_LABEL = "No Sales"

# English weekday abbreviations (Monday through Sunday), independent of locale
DAY_ABBREVIATIONS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


@dataclass(frozen=True)
class TrendPoint:
    """One chart point: a day label and the summed sales of that day."""

    label: str
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "value": self.value}


def relative_day_label(day: date, today: date) -> str:
    """Label a calendar day relative to ``today``.

    Examples:
        >>> relative_day_label(date(2025, 1, 15), date(2025, 1, 15))
        'Today'
        >>> relative_day_label(date(2025, 1, 14), date(2025, 1, 15))
        'Yesterday'
        >>> relative_day_label(date(2025, 1, 10), date(2025, 1, 15))
        'Fri'
    """
    diff_days = (today - day).days
    if diff_days == 0:
        return TODAY_LABEL
    if diff_days == 1:
        return YESTERDAY_LABEL
    return DAY_ABBREVIATIONS[day.weekday()]


def daily_totals(records: Sequence[Any], tz: Optional[tzinfo] = None) -> pd.Series:
    """Sum line totals per local calendar date.

    Records whose ``created_at`` cannot be parsed have no calendar date and
    are left out.

    Returns:
        Float Series indexed by ``datetime.date``, ascending.
    """
    df = records_to_frame(coerce_records(records), tz)
    dated = df[df["created_at"].notna()]

    skipped = len(df) - len(dated)
    if skipped:
        logger.debug("Skipping %d record(s) without a parseable created_at", skipped)

    if dated.empty:
        return pd.Series(dtype=float)

    day = dated["created_at"].dt.date
    return dated.groupby(day)["amount"].sum().sort_index()


def bucket_trend(
    records: Sequence[Any],
    reference_now: Optional[datetime] = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[tzinfo] = None,
) -> list[TrendPoint]:
    """Build the sales trend series for the most recent days with sales.

    Buckets are the ``window_days`` most recent distinct calendar dates
    that contain at least one record, not the last ``window_days`` days of
    the calendar. Gaps between sale days are therefore not filled.

    Args:
        records: List of SaleRecord or decoded record dicts.
        reference_now: Time the labels are relative to. Defaults to now.
        window_days: Maximum number of points (default: 7).
        tz: Zone used for calendar dates of offset-aware timestamps.

    Returns:
        TrendPoints in ascending date order, between 1 and ``window_days``
        long. Without any dated record, a single ``No Sales`` point of 0.

    Raises:
        ValidationError: If ``window_days`` < 1 or records are malformed.
    """
    if window_days < 1:
        raise ValidationError(f"window_days must be at least 1, got {window_days}")

    now = datetime.now(tz) if reference_now is None else reference_now
    today = to_local_naive(now, tz).date()

    totals = daily_totals(records, tz)
    if totals.empty:
        return [TrendPoint(NO_SALES_LABEL, 0.0)]

    window = totals.sort_index(ascending=False).head(window_days).sort_index()

    points = [
        TrendPoint(relative_day_label(day, today), float(value))
        for day, value in window.items()
    ]
    logger.debug("Built trend of %d point(s) relative to %s", len(points), today)
    return points
