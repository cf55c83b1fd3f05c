"""Dashboard summary statistics from the upstream aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from lottery_core.sales.parsing import to_amount, to_int


@dataclass(frozen=True)
class Summary:
    """Headline figures of the sales dashboard.

    Attributes:
        total_sales: Total sold amount, two decimals.
        total_transactions: Number of sale records counted upstream.
        average_sale: total_sales / total_transactions, two decimals, 0 if no sales.
    """

    total_sales: float = 0.0
    total_transactions: int = 0
    average_sale: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_sales": self.total_sales,
            "total_transactions": self.total_transactions,
            "average_sale": self.average_sale,
        }


def derive_summary(total_amount: Any = None, total_records: Any = None) -> Summary:
    """Derive summary statistics from server-computed aggregate counters.

    The figures are taken as reported by the server and are not recomputed
    from line items, so they can differ from sums over a truncated
    ``report`` window.

    Args:
        total_amount: Aggregate ``total_amount``; None or unparseable is 0.
        total_records: Aggregate ``total_records``; None or unparseable is 0.

    Returns:
        Summary with ``average_sale`` guarded to 0 when there are no records.

    Examples:
        >>> derive_summary(100, 4)
        Summary(total_sales=100.0, total_transactions=4, average_sale=25.0)
        >>> derive_summary(None, 0)
        Summary(total_sales=0.0, total_transactions=0, average_sale=0.0)
    """
    amount = to_amount(total_amount)
    count = to_int(total_records)

    average = round(amount / count, 2) if count > 0 else 0.0
    return Summary(
        total_sales=round(amount, 2),
        total_transactions=count,
        average_sale=average,
    )


def summary_from_aggregate(aggregate: Optional[Mapping[str, Any]]) -> Summary:
    """Derive the summary from a decoded ``summary`` object (or None)."""
    if not aggregate:
        return Summary()
    return derive_summary(aggregate.get("total_amount"), aggregate.get("total_records"))
