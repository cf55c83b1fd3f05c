"""Lottery Core - sales aggregation for the lottery point-of-sale dashboard.

This package turns the line items returned by the sales report endpoint
into the views shown on the dashboard:

- **Grouped transactions**: line items grouped by invoice into purchases
- **Trend series**: daily totals of the most recent days with sales
- **Summary**: total sales, transaction count and average sale

Module Structure:
    lottery_core.sales: Aggregation engine (grouping, trend, summary, invoice report)
    lottery_core.reporting: HTTP client for the sales report endpoints
    lottery_core.formatters: Console rendering of dashboard views
    lottery_core.config: ReportConfig settings
    lottery_core.cli: ``lottery-dashboard`` command

Quick Start:
    >>> from lottery_core import ReportConfig
    >>> from lottery_core.reporting import ReportClient
    >>> from lottery_core.sales import build_dashboard_from_payload
    >>>
    >>> client = ReportClient(ReportConfig.from_env(), token="...")
    >>> payload = client.get_sales_report(limit=10)
    >>> view = build_dashboard_from_payload(payload)
    >>> view.summary.total_sales
"""

__version__ = "0.1.0"

from lottery_core.config import ReportConfig
from lottery_core.exceptions import (
    ConfigError,
    FetchError,
    LotteryCoreError,
    UnauthenticatedError,
    ValidationError,
)

__all__ = [
    "ConfigError",
    "FetchError",
    "LotteryCoreError",
    "ReportConfig",
    "UnauthenticatedError",
    "ValidationError",
    "__version__",
]
