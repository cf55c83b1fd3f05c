"""Invoice-wise sales report.

Builds the tabular content of the printed sales report: line items listed
under their invoice, per-invoice subtotals and grand totals. Unlike the
dashboard grouping, a line without a usable ``total`` falls back to
``qty * unit_price`` here, and records without an invoice number are not
listed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

import pandas as pd

from lottery_core.sales.parsing import to_float
from lottery_core.sales.records import SaleRecord, coerce_records

logger = logging.getLogger(__name__)

LINE_COLUMNS = [
    "invoice_number",
    "line_no",
    "product_name",
    "desc",
    "qty",
    "unit_price",
    "amount",
]
INVOICE_COLUMNS = ["invoice_number", "items", "qty", "amount"]


@dataclass
class InvoiceReport:
    """Result of build_invoice_report.

    Attributes:
        lines: One row per line item, grouped by invoice (LINE_COLUMNS).
        invoices: One row per invoice with item count, quantity and amount.
        total_qty: Grand total quantity (upstream figure when supplied).
        total_amount: Grand total amount (upstream figure when supplied).
    """

    lines: pd.DataFrame
    invoices: pd.DataFrame
    total_qty: float
    total_amount: float


def line_amount(record: SaleRecord) -> float:
    """Line amount, falling back to qty * unit_price when total is 0 or missing."""
    amount = record.amount
    if amount:
        return amount
    qty = to_float(record.qty) or 0.0
    price = to_float(record.unit_price) or 0.0
    return qty * price


def _invoice_order(keys: list[str]) -> list[str]:
    # numeric invoice series sort by value, anything else lexically
    if keys and all(k.isdigit() for k in keys):
        return sorted(keys, key=int)
    return sorted(keys)


def build_invoice_report(
    records: Sequence[Any],
    summary: Optional[Mapping[str, Any]] = None,
) -> InvoiceReport:
    """Build the invoice-wise report tables.

    Args:
        records: List of SaleRecord or decoded record dicts.
        summary: Optional upstream aggregate; ``total_quantity`` and
            ``total_amount`` override the computed grand totals when set.

    Returns:
        InvoiceReport with lines, per-invoice subtotals and grand totals.
    """
    sale_records = coerce_records(records)

    by_invoice: dict[str, list[SaleRecord]] = {}
    for rec in sale_records:
        if rec.invoice_number:
            by_invoice.setdefault(rec.invoice_number, []).append(rec)

    rows = []
    for invoice in _invoice_order(list(by_invoice)):
        for line_no, rec in enumerate(by_invoice[invoice], start=1):
            rows.append(
                {
                    "invoice_number": invoice,
                    "line_no": line_no,
                    "product_name": rec.product_name or "",
                    "desc": rec.extra.get("desc") or "-",
                    "qty": to_float(rec.qty) or 0.0,
                    "unit_price": to_float(rec.unit_price) or 0.0,
                    "amount": line_amount(rec),
                }
            )

    if rows:
        lines = pd.DataFrame(rows, columns=LINE_COLUMNS)
        invoices = (
            lines.groupby("invoice_number", sort=False)
            .agg(items=("line_no", "size"), qty=("qty", "sum"), amount=("amount", "sum"))
            .reset_index()
        )
    else:
        lines = pd.DataFrame(columns=LINE_COLUMNS)
        invoices = pd.DataFrame(columns=INVOICE_COLUMNS)

    computed_qty = float(lines["qty"].sum()) if rows else 0.0
    computed_amount = float(lines["amount"].sum()) if rows else 0.0

    summary = summary or {}
    upstream_qty = to_float(summary.get("total_quantity"))
    upstream_amount = to_float(summary.get("total_amount"))

    skipped = len(sale_records) - len(rows)
    if skipped:
        logger.debug("Left %d line(s) without invoice number out of the report", skipped)

    return InvoiceReport(
        lines=lines,
        invoices=invoices,
        total_qty=upstream_qty if upstream_qty else computed_qty,
        total_amount=upstream_amount if upstream_amount else computed_amount,
    )
