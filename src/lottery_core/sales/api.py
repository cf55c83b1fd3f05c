"""Public API for the sales dashboard.

This module composes grouping, trend bucketing and summary derivation into
the dashboard view. It:

- does NOT perform HTTP requests or read files,
- does NOT read the clock unless ``reference_now`` is omitted,
- MAY log progress via the logging module.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Optional, Sequence

from lottery_core.config import DEFAULT_RECENT_COUNT, DEFAULT_WINDOW_DAYS
from lottery_core.exceptions import ValidationError
from lottery_core.sales.grouping import TransactionView, group_transactions, recent_transactions
from lottery_core.sales.records import coerce_records
from lottery_core.sales.summary import Summary, summary_from_aggregate
from lottery_core.sales.trend import TrendPoint, bucket_trend

logger = logging.getLogger(__name__)


@dataclass
class DashboardView:
    """Everything the dashboard screen displays.

    Attributes:
        summary: Headline figures from the upstream aggregate.
        grouped_transactions: Most recent purchases, newest first.
        trend_series: Daily sales points in ascending date order.
        metadata: reference_now, record counts and window settings.
    """

    summary: Summary
    grouped_transactions: list[TransactionView]
    trend_series: list[TrendPoint]
    metadata: dict[str, object] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "grouped_transactions": [t.to_dict() for t in self.grouped_transactions],
            "trend_series": [p.to_dict() for p in self.trend_series],
        }


def build_dashboard(
    records: Sequence[Any],
    aggregate: Optional[Mapping[str, Any]] = None,
    reference_now: Optional[datetime] = None,
    recent_count: int = DEFAULT_RECENT_COUNT,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[tzinfo] = None,
) -> DashboardView:
    """Compute the dashboard view from fetched line items and the aggregate.

    Every call is a full recomputation; nothing is cached between calls.

    Args:
        records: Decoded ``report`` line items (or SaleRecords).
        aggregate: Decoded ``summary`` object with ``total_amount`` and
            ``total_records``, or None.
        reference_now: Time the trend labels are relative to. Defaults to now.
        recent_count: Number of grouped transactions to keep (default: 5).
        window_days: Maximum number of trend points (default: 7).
        tz: Zone used for ordering and calendar dates of offset-aware timestamps.

    Returns:
        DashboardView.

    Raises:
        ValidationError: If records or aggregate have the wrong shape, or a
            count parameter is out of range.
    """
    if aggregate is not None and not isinstance(aggregate, Mapping):
        raise ValidationError(
            f"Expected the aggregate summary to be an object, got {type(aggregate).__name__}"
        )
    if recent_count < 0:
        raise ValidationError(f"recent_count must be >= 0, got {recent_count}")

    if reference_now is None:
        reference_now = datetime.now(tz)

    sale_records = coerce_records(records)

    summary = summary_from_aggregate(aggregate)
    grouped = group_transactions(sale_records, tz)
    trend = bucket_trend(sale_records, reference_now, window_days, tz)

    logger.info(
        "Dashboard: %d record(s), %d transaction(s), %d trend point(s)",
        len(sale_records),
        len(grouped),
        len(trend),
    )

    return DashboardView(
        summary=summary,
        grouped_transactions=recent_transactions(grouped, recent_count),
        trend_series=trend,
        metadata={
            "reference_now": reference_now.isoformat(),
            "record_count": len(sale_records),
            "transaction_count": len(grouped),
            "recent_count": recent_count,
            "window_days": window_days,
        },
    )


def unwrap_payload(payload: Any) -> tuple[list[Any], Optional[Mapping[str, Any]]]:
    """Split a decoded sales report response into (records, aggregate).

    Accepts ``{"summary": {...}, "report": [...]}`` or the same object wrapped
    in ``{"data": ...}`` as the API returns it. A missing ``report`` is an
    empty list.

    Raises:
        ValidationError: If the payload is not an object.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError(
            f"Expected the sales report to be an object, got {type(payload).__name__}"
        )
    if isinstance(payload.get("data"), Mapping):
        payload = payload["data"]

    records = payload.get("report")
    if records is None:
        records = []
    return records, payload.get("summary")


def build_dashboard_from_payload(
    payload: Any,
    reference_now: Optional[datetime] = None,
    recent_count: int = DEFAULT_RECENT_COUNT,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[tzinfo] = None,
) -> DashboardView:
    """Build the dashboard straight from a decoded sales report response."""
    records, aggregate = unwrap_payload(payload)
    return build_dashboard(
        records,
        aggregate,
        reference_now=reference_now,
        recent_count=recent_count,
        window_days=window_days,
        tz=tz,
    )
