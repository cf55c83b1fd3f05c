"""Console output formatting utilities."""

from __future__ import annotations

import re

from lottery_core.sales.api import DashboardView
from lottery_core.sales.grouping import TransactionView
from lottery_core.sales.parsing import to_timestamp

CURRENCY = "Rs."


def sanitize_for_console(text: str) -> str:
    """Remove non-ASCII characters (e.g. the rupee sign) from text.

    Prevents UnicodeEncodeError on consoles using a legacy code page.
    """
    return re.sub(r"[^\x00-\x7F]+", "", text)


def format_amount(value: float) -> str:
    return f"{CURRENCY} {value:,.2f}"


def _transaction_title(view: TransactionView) -> str:
    if view.is_group:
        return f"Invoice #{view.invoice_number} ({len(view.items)} items)"
    return view.product_name or f"Order #{view.id}"


def _transaction_when(view: TransactionView) -> str:
    ts = to_timestamp(view.created_at)
    if ts is None:
        return "--"
    return ts.strftime("%d %b %H:%M")


def format_dashboard_for_console(view: DashboardView) -> str:
    """Build a human-readable text rendering of the dashboard view.

    Args:
        view: DashboardView from build_dashboard.

    Returns:
        Multi-line text with summary, trend and recent transactions.
    """
    lines = []
    lines.append("Sales Dashboard")
    lines.append("=" * 48)
    lines.append(f"Total Sales:   {format_amount(view.summary.total_sales)}")
    lines.append(f"Transactions:  {view.summary.total_transactions}")
    lines.append(f"Average Sale:  {format_amount(view.summary.average_sale)}")
    lines.append("")

    lines.append("Sales Trends:")
    lines.append("-" * 48)
    for point in view.trend_series:
        lines.append(f"  {point.label:<10} {format_amount(point.value):>20}")
    lines.append("")

    lines.append("Recent Transactions:")
    lines.append("-" * 48)
    if not view.grouped_transactions:
        lines.append("  No transactions yet")
    for tx in view.grouped_transactions:
        title = sanitize_for_console(_transaction_title(tx))[:28]
        lines.append(f"  {title:<28} {_transaction_when(tx):>12}  +{format_amount(tx.total)}")

    return "\n".join(lines)
