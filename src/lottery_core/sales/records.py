"""Sale line-item records.

A SaleRecord is one sold product as returned by the sales report endpoint
(``report`` array). Records are built from JSON-decoded dictionaries; the
raw ``total`` and ``created_at`` values are kept and normalized lazily so
that partially populated records never fail to load.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Optional

import pandas as pd

from lottery_core.exceptions import ValidationError
from lottery_core.sales.parsing import strip_invisibles, to_amount, to_float, to_timestamp

logger = logging.getLogger(__name__)

# Keys read into named fields; everything else lands in SaleRecord.extra
_KNOWN_KEYS = ("id", "invoice_number", "created_at", "total", "product_name", "qty", "unit_price")

FRAME_COLUMNS = [
    "id",
    "invoice_number",
    "created_at",
    "product_name",
    "qty",
    "unit_price",
    "amount",
]


@dataclass(frozen=True)
class SaleRecord:
    """One sold line item.

    Attributes:
        id: Opaque unique identifier.
        invoice_number: Invoice the line belongs to, None when ungrouped.
        created_at: Raw timestamp value as received.
        total: Raw line total as received (number, string or None).
        product_name: Optional product display name.
        qty: Optional quantity, raw.
        unit_price: Optional unit price, raw.
        extra: Any other fields of the source object, verbatim.
    """

    id: Any = None
    invoice_number: Optional[str] = None
    created_at: Any = None
    total: Any = None
    product_name: Optional[str] = None
    qty: Any = None
    unit_price: Any = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SaleRecord:
        """Build a record from a decoded JSON object.

        Examples:
            >>> rec = SaleRecord.from_mapping({"id": 1, "invoice_number": " 42 ", "total": "10"})
            >>> rec.invoice_number, rec.amount
            ('42', 10.0)
        """
        invoice = strip_invisibles(data.get("invoice_number"))
        return cls(
            id=data.get("id"),
            invoice_number=invoice or None,
            created_at=data.get("created_at"),
            total=data.get("total"),
            product_name=data.get("product_name"),
            qty=data.get("qty"),
            unit_price=data.get("unit_price"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    @property
    def amount(self) -> float:
        """Numeric line total; missing or unparseable totals count as 0."""
        return to_amount(self.total)

    @property
    def quantity(self) -> Optional[float]:
        return to_float(self.qty)

    @property
    def price(self) -> Optional[float]:
        return to_float(self.unit_price)

    def timestamp(self, tz: Optional[tzinfo] = None) -> Optional[datetime]:
        """Parsed ``created_at`` as naive local time, or None."""
        return to_timestamp(self.created_at, tz)

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a JSON-ready dict in the source layout."""
        out: dict[str, Any] = {
            "id": self.id,
            "invoice_number": self.invoice_number,
            "created_at": self.created_at,
            "total": self.total,
            "product_name": self.product_name,
            "qty": self.qty,
            "unit_price": self.unit_price,
        }
        out.update(self.extra)
        return out


def coerce_records(records: Any) -> list[SaleRecord]:
    """Validate the shape of aggregation input and convert it to SaleRecords.

    Accepts a list or tuple whose elements are SaleRecord instances or
    mappings. Anything else (a dict, a string, None, a list of numbers) is
    not a record collection at all and raises ValidationError.

    Args:
        records: Decoded ``report`` array or list of SaleRecords.

    Returns:
        List of SaleRecord in input order.

    Raises:
        ValidationError: If ``records`` is not a list of record objects.
    """
    if not isinstance(records, (list, tuple)):
        raise ValidationError(
            f"Expected a list of sale records, got {type(records).__name__}"
        )

    out: list[SaleRecord] = []
    for i, rec in enumerate(records):
        if isinstance(rec, SaleRecord):
            out.append(rec)
        elif isinstance(rec, Mapping):
            out.append(SaleRecord.from_mapping(rec))
        else:
            raise ValidationError(
                f"Sale record at index {i} must be an object, got {type(rec).__name__}"
            )
    logger.debug("Loaded %d sale record(s)", len(out))
    return out


def records_to_frame(
    records: Iterable[SaleRecord],
    tz: Optional[tzinfo] = None,
) -> pd.DataFrame:
    """Build a line-item DataFrame with normalized columns.

    Columns: id, invoice_number, created_at (naive local datetime or NaT),
    product_name, qty, unit_price, amount (float, never NaN).
    """
    rows = [
        {
            "id": rec.id,
            "invoice_number": rec.invoice_number,
            "created_at": rec.timestamp(tz),
            "product_name": rec.product_name,
            "qty": rec.quantity,
            "unit_price": rec.price,
            "amount": rec.amount,
        }
        for rec in records
    ]
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df["created_at"] = pd.to_datetime(df["created_at"])
    df["amount"] = df["amount"].astype(float)
    return df
