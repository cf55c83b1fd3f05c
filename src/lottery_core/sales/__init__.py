"""Sales aggregation module.

This module turns fetched sale line items into the views shown on the
dashboard:

- **grouped transactions**: line items grouped by invoice number into
  purchases (GroupedTransaction / SingleTransaction), newest first.
- **trend series**: daily totals for the most recent days with sales,
  labelled Today / Yesterday / weekday.
- **summary**: total sales, transaction count and average sale from the
  server-side aggregate.

Example:
    >>> from datetime import datetime
    >>> from lottery_core.sales import build_dashboard
    >>>
    >>> records = [
    ...     {"id": 1, "invoice_number": "A", "total": "10", "created_at": "2025-01-15T09:00:00"},
    ...     {"id": 2, "invoice_number": "A", "total": "20", "created_at": "2025-01-15T09:00:00"},
    ... ]
    >>> view = build_dashboard(
    ...     records,
    ...     {"total_amount": 30, "total_records": 2},
    ...     reference_now=datetime(2025, 1, 15, 18, 0),
    ... )
    >>> view.trend_series
    [TrendPoint(label='Today', value=30.0)]
"""

from lottery_core.sales.api import (
    DashboardView,
    build_dashboard,
    build_dashboard_from_payload,
)
from lottery_core.sales.grouping import (
    GroupedTransaction,
    SingleTransaction,
    TransactionView,
    group_transactions,
)
from lottery_core.sales.records import SaleRecord
from lottery_core.sales.report import InvoiceReport, build_invoice_report
from lottery_core.sales.summary import Summary, derive_summary
from lottery_core.sales.trend import TrendPoint, bucket_trend

__all__ = [
    "DashboardView",
    "GroupedTransaction",
    "InvoiceReport",
    "SaleRecord",
    "SingleTransaction",
    "Summary",
    "TransactionView",
    "TrendPoint",
    "bucket_trend",
    "build_dashboard",
    "build_dashboard_from_payload",
    "build_invoice_report",
    "derive_summary",
    "group_transactions",
]
