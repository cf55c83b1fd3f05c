"""Example: Building the Sales Dashboard from a Sales Report

This example demonstrates how to turn a sales report response into the
dashboard views: grouped recent transactions, the daily trend and the
summary, plus the invoice-wise report tables.

Prerequisites:
- Either a saved response of GET /sales/report (JSON file), or
- LOTTERY_API_BASE and LOTTERY_API_TOKEN set to fetch it live
"""

import json
import os
from datetime import datetime
from pathlib import Path

from lottery_core import ReportConfig
from lottery_core.formatters import format_dashboard_for_console
from lottery_core.reporting import ReportClient
from lottery_core.sales import build_dashboard_from_payload, build_invoice_report
from lottery_core.sales.api import unwrap_payload

# Modify this path to point to a saved sales report response
report_file = Path("data/sales_report.json")

print("=" * 80)
print("Example 1: Dashboard from a Sales Report")
print("=" * 80)

if report_file.exists():
    print(f"\nLoading report from: {report_file}")
    payload = json.loads(report_file.read_text(encoding="utf-8"))
elif os.environ.get("LOTTERY_API_BASE"):
    print("\nFetching report from the API...")
    client = ReportClient(ReportConfig.from_env(), token=os.environ.get("LOTTERY_API_TOKEN"))
    payload = client.get_sales_report(limit=50)
else:
    print(f"\nNo report at {report_file} and LOTTERY_API_BASE is not set, using sample data")
    payload = {
        "summary": {"total_amount": 420.0, "total_records": 4, "total_quantity": 7},
        "report": [
            {"id": 4, "invoice_number": "1002", "product_name": "Kerala Lottery", "qty": 2, "unit_price": 40, "total": 80, "created_at": "2025-01-15T16:45:00"},
            {"id": 5, "invoice_number": "1002", "product_name": "Dear Lottery", "qty": 3, "unit_price": 60, "total": 180, "created_at": "2025-01-15T16:45:00"},
            {"id": 3, "invoice_number": None, "product_name": "Scratch Card", "qty": 1, "unit_price": 100, "total": 100, "created_at": "2025-01-14T11:00:00"},
            {"id": 2, "invoice_number": "1001", "product_name": "Dear Lottery", "qty": 1, "unit_price": 60, "total": 60, "created_at": "2025-01-13T09:15:00"},
        ],
    }

view = build_dashboard_from_payload(payload, reference_now=datetime(2025, 1, 15, 18, 0))

print("\n" + format_dashboard_for_console(view))
print(f"\nMetadata: {view.metadata}")

# Example 2: Invoice-wise report tables
print("\n" + "=" * 80)
print("Example 2: Invoice-wise Report")
print("=" * 80)

records, summary = unwrap_payload(payload)
report = build_invoice_report(records, summary)

print("\nLine items:")
print(report.lines.to_string(index=False))
print("\nInvoices:")
print(report.invoices.to_string(index=False))
print(f"\nGrand total: qty={report.total_qty:g} amount={report.total_amount:,.2f}")
