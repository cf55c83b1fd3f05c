"""Tests for the dashboard API composing grouping, trend and summary."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from lottery_core.exceptions import ValidationError
from lottery_core.sales import (
    DashboardView,
    GroupedTransaction,
    Summary,
    TrendPoint,
    build_dashboard,
    build_dashboard_from_payload,
)
from lottery_core.sales.api import unwrap_payload

NOW = datetime(2025, 1, 15, 18, 0)


@pytest.fixture
def report_payload() -> dict:
    """A sales report response as returned by the API."""
    return {
        "success": True,
        "data": {
            "summary": {"total_amount": 1250.0, "total_records": 40, "total_quantity": 52},
            "report": [
                {"id": 101, "invoice_number": "5001", "product_name": "Kerala Lottery", "qty": 2, "unit_price": 40, "total": "80.00", "created_at": "2025-01-15T16:45:00"},
                {"id": 102, "invoice_number": "5001", "product_name": "Dear Lottery", "qty": 1, "unit_price": 60, "total": "60.00", "created_at": "2025-01-15T16:45:00"},
                {"id": 100, "invoice_number": "5000", "product_name": "Kerala Lottery", "qty": 1, "unit_price": 40, "total": "40.00", "created_at": "2025-01-15T12:10:00"},
                {"id": 99, "invoice_number": None, "product_name": "Scratch", "qty": 1, "unit_price": 20, "total": "20", "created_at": "2025-01-14T19:00:00"},
                {"id": 98, "invoice_number": "4999", "product_name": "Dear Lottery", "qty": 3, "unit_price": 60, "total": "180", "created_at": "2025-01-13T10:00:00"},
                {"id": 97, "invoice_number": "4998", "product_name": "Dear Lottery", "qty": 1, "unit_price": 60, "total": "60", "created_at": "2025-01-10T10:00:00"},
                {"id": 96, "invoice_number": "4997", "product_name": "Kerala Lottery", "qty": 1, "unit_price": 40, "total": "40", "created_at": "2025-01-09T10:00:00"},
            ],
        },
    }


def test_build_dashboard_from_payload(report_payload: dict) -> None:
    view = build_dashboard_from_payload(report_payload, reference_now=NOW)

    assert isinstance(view, DashboardView)
    assert view.summary == Summary(total_sales=1250.0, total_transactions=40, average_sale=31.25)

    assert len(view.grouped_transactions) == 5
    first = view.grouped_transactions[0]
    assert isinstance(first, GroupedTransaction)
    assert first.invoice_number == "5001"
    assert first.total == pytest.approx(140.0)
    assert [t.id for t in view.grouped_transactions] == [101, 100, 99, 98, 97]

    assert [p.label for p in view.trend_series] == ["Thu", "Fri", "Mon", "Yesterday", "Today"]
    assert [p.value for p in view.trend_series] == pytest.approx([40.0, 60.0, 180.0, 20.0, 180.0])


def test_empty_records_scenario() -> None:
    """Test the empty dashboard: no transactions, synthetic trend, zero summary."""
    view = build_dashboard([], None, reference_now=NOW)
    assert view.grouped_transactions == []
    assert view.trend_series == [TrendPoint("No Sales", 0.0)]
    assert view.summary == Summary(0.0, 0, 0.0)


def test_summary_is_not_recomputed_from_line_items() -> None:
    """Test that the aggregate and the fetched window are reported independently."""
    records = [{"id": 1, "total": 10, "created_at": "2025-01-15T10:00:00"}]
    view = build_dashboard(records, {"total_amount": 500, "total_records": 20}, reference_now=NOW)
    assert view.summary.total_sales == 500.0
    assert sum(p.value for p in view.trend_series) == 10.0


def test_recent_count_limits_transactions(report_payload: dict) -> None:
    view = build_dashboard_from_payload(report_payload, reference_now=NOW, recent_count=2)
    assert len(view.grouped_transactions) == 2
    assert view.metadata["transaction_count"] == 6
    assert view.metadata["record_count"] == 7


def test_recomputation_is_pure(report_payload: dict) -> None:
    """Test that repeated calls give equal results and leave the input untouched."""
    before = json.dumps(report_payload, sort_keys=True)
    first = build_dashboard_from_payload(report_payload, reference_now=NOW)
    second = build_dashboard_from_payload(report_payload, reference_now=NOW)
    assert first.to_dict() == second.to_dict()
    assert json.dumps(report_payload, sort_keys=True) == before


def test_to_dict_is_json_serializable(report_payload: dict) -> None:
    view = build_dashboard_from_payload(report_payload, reference_now=NOW)
    data = json.loads(json.dumps(view.to_dict()))
    assert data["summary"]["average_sale"] == 31.25
    assert data["grouped_transactions"][0]["is_group"] is True
    assert len(data["grouped_transactions"][0]["items"]) == 2
    assert data["grouped_transactions"][2]["product_name"] == "Scratch"
    assert data["trend_series"][-1] == {"label": "Today", "value": 180.0}


def test_unwrap_payload_variants() -> None:
    records, aggregate = unwrap_payload({"summary": {"total_amount": 1}, "report": [{"id": 1}]})
    assert records == [{"id": 1}]
    assert aggregate == {"total_amount": 1}

    records, aggregate = unwrap_payload({"data": {"summary": None}})
    assert records == []
    assert aggregate is None


@pytest.mark.parametrize("payload", [None, [], "report"])
def test_payload_must_be_object(payload) -> None:
    with pytest.raises(ValidationError):
        build_dashboard_from_payload(payload, reference_now=NOW)


def test_aggregate_must_be_object() -> None:
    with pytest.raises(ValidationError):
        build_dashboard([], [1, 2], reference_now=NOW)


def test_report_must_be_list() -> None:
    with pytest.raises(ValidationError):
        build_dashboard_from_payload({"report": {"id": 1}}, reference_now=NOW)


def test_negative_recent_count_raises() -> None:
    with pytest.raises(ValidationError):
        build_dashboard([], reference_now=NOW, recent_count=-1)


def test_tz_applies_to_grouping_and_trend() -> None:
    """Test that one zone decides both the recent order and the trend days."""
    ist = timezone(timedelta(hours=5, minutes=30))
    records = [
        {"id": "naive", "total": 10, "created_at": "2025-01-15T10:00:00"},
        # 10:30 on 15 Jan in IST
        {"id": "aware", "total": 5, "created_at": "2025-01-15T05:00:00Z"},
    ]
    view = build_dashboard(records, reference_now=datetime(2025, 1, 15, 18, 0, tzinfo=ist), tz=ist)
    assert [t.id for t in view.grouped_transactions] == ["aware", "naive"]
    assert view.trend_series == [TrendPoint("Today", 15.0)]
