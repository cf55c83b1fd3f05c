"""Group sale line items into purchase-level transactions.

Line items sharing an invoice number were sold together and are shown as
one purchase. The result is a list of TransactionView values, a tagged
variant of:

- **GroupedTransaction** (``is_group=True``): two or more line items of one
  invoice, with the summed total.
- **SingleTransaction** (``is_group=False``): exactly one line item, either
  without an invoice number or the only line of its invoice. Descriptive
  fields are copied up from that item.

Every input record ends up in exactly one view's ``items``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Optional, Sequence, Union

from lottery_core.sales.records import SaleRecord, coerce_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupedTransaction:
    """A purchase made of several line items under one invoice number."""

    id: Any
    invoice_number: str
    created_at: Any
    total: float
    items: tuple[SaleRecord, ...]
    is_group: bool = field(default=True, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "invoice_number": self.invoice_number,
            "created_at": self.created_at,
            "total": self.total,
            "items": [item.to_dict() for item in self.items],
            "is_group": self.is_group,
        }


@dataclass(frozen=True)
class SingleTransaction:
    """A purchase made of exactly one line item."""

    id: Any
    invoice_number: Optional[str]
    created_at: Any
    total: float
    items: tuple[SaleRecord, ...]
    product_name: Optional[str] = None
    qty: Any = None
    unit_price: Any = None
    is_group: bool = field(default=False, init=False)

    @classmethod
    def from_record(cls, record: SaleRecord) -> SingleTransaction:
        return cls(
            id=record.id,
            invoice_number=record.invoice_number,
            created_at=record.created_at,
            total=record.amount,
            items=(record,),
            product_name=record.product_name,
            qty=record.qty,
            unit_price=record.unit_price,
        )

    def to_dict(self) -> dict[str, Any]:
        out = self.items[0].to_dict()
        out.update(
            {
                "id": self.id,
                "invoice_number": self.invoice_number,
                "created_at": self.created_at,
                "total": self.total,
                "items": [item.to_dict() for item in self.items],
                "is_group": self.is_group,
            }
        )
        return out


TransactionView = Union[GroupedTransaction, SingleTransaction]


@dataclass
class _InvoiceAccumulator:
    members: list[SaleRecord] = field(default_factory=list)
    total: float = 0.0

    def add(self, record: SaleRecord) -> None:
        self.members.append(record)
        self.total += record.amount

    def to_view(self, invoice_number: str) -> TransactionView:
        if len(self.members) == 1:
            return SingleTransaction.from_record(self.members[0])
        first = self.members[0]
        return GroupedTransaction(
            id=first.id,
            invoice_number=invoice_number,
            created_at=first.created_at,
            total=self.total,
            items=tuple(self.members),
        )


def _sort_key(view: TransactionView, tz: Optional[tzinfo] = None) -> datetime:
    # undated purchases sort after everything else in descending order
    ts = view.items[0].timestamp(tz)
    return ts if ts is not None else datetime.min


def group_transactions(
    records: Sequence[Any], tz: Optional[tzinfo] = None
) -> list[TransactionView]:
    """Group line items by invoice number into purchase-level views.

    Algorithm:
    1. Records with a non-empty invoice number are accumulated per invoice
       (members in encounter order, running total, ``created_at`` of the
       first member).
    2. Invoices with one member and records without an invoice number
       become SingleTransaction; invoices with two or more members become
       GroupedTransaction.
    3. Views are sorted by ``created_at`` descending. Unparseable
       timestamps sort last, and ties keep the position of each purchase's
       first line item in the input.

    Args:
        records: List of SaleRecord or decoded record dicts.
        tz: Zone offset-aware timestamps are converted to before comparing
            (default: local zone). Naive timestamps are taken as local.

    Returns:
        List of TransactionView, most recent first.

    Raises:
        ValidationError: If ``records`` is not a list of record objects.

    Examples:
        >>> views = group_transactions([
        ...     {"id": 1, "invoice_number": "A", "total": "10", "created_at": "2025-01-15"},
        ...     {"id": 2, "invoice_number": "A", "total": "20", "created_at": "2025-01-15"},
        ... ])
        >>> views[0].is_group, views[0].total, len(views[0].items)
        (True, 30.0, 2)
    """
    sale_records = coerce_records(records)

    # slot per purchase in first-appearance order; invoices share one slot
    slots: list[Union[SaleRecord, str]] = []
    invoices: dict[str, _InvoiceAccumulator] = {}

    for record in sale_records:
        key = record.invoice_number
        if not key:
            slots.append(record)
            continue
        acc = invoices.get(key)
        if acc is None:
            acc = invoices[key] = _InvoiceAccumulator()
            slots.append(key)
        acc.add(record)

    views: list[TransactionView] = []
    for slot in slots:
        if isinstance(slot, SaleRecord):
            views.append(SingleTransaction.from_record(slot))
        else:
            views.append(invoices[slot].to_view(slot))

    # sorted() is stable with reverse=True, so ties keep slot order
    views = sorted(views, key=lambda v: _sort_key(v, tz), reverse=True)

    logger.debug(
        "Grouped %d record(s) into %d transaction(s) (%d invoice group(s))",
        len(sale_records),
        len(views),
        sum(1 for v in views if v.is_group),
    )
    return views


def recent_transactions(views: Sequence[TransactionView], count: int = 5) -> list[TransactionView]:
    """Return the ``count`` most recent views from a grouped list."""
    return list(views[: max(count, 0)])
