"""Aggregates over a (usually filtered) set of expenses."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Mapping

from .models import Expense

__all__ = [
    "ExpenseSummary",
    "category_breakdown",
    "category_shares",
    "chart_data",
    "format_currency",
    "summarize",
]

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class ExpenseSummary:
    total: Decimal
    paid_total: Decimal
    unpaid_total: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {
            "total": f"{self.total:.2f}",
            "paid_total": f"{self.paid_total:.2f}",
            "unpaid_total": f"{self.unpaid_total:.2f}",
        }


def summarize(expenses: Iterable[Expense]) -> ExpenseSummary:
    """Total, paid and remaining sums; non-numeric amounts count as zero."""
    total = ZERO
    paid_total = ZERO
    for expense in expenses:
        amount = expense.numeric_amount or ZERO
        total += amount
        if expense.paid:
            paid_total += amount
    return ExpenseSummary(total=total, paid_total=paid_total, unpaid_total=total - paid_total)


def category_breakdown(expenses: Iterable[Expense]) -> Dict[str, Decimal]:
    """Sum amounts per category, keeping the order in which categories first appear."""
    buckets: Dict[str, Decimal] = {}
    for expense in expenses:
        amount = expense.numeric_amount
        if amount is None:
            continue
        buckets[expense.category] = buckets.get(expense.category, ZERO) + amount
    return buckets


def chart_data(breakdown: Mapping[str, Decimal]) -> List[Dict[str, Any]]:
    """Convert a breakdown into the ``{name, value}`` pairs a chart widget consumes."""
    return [{"name": name, "value": float(value)} for name, value in breakdown.items()]


def category_shares(breakdown: Mapping[str, Decimal]) -> List[Dict[str, Any]]:
    """Chart pairs annotated with each slice's whole-number percentage of the total."""
    grand_total = sum(breakdown.values(), ZERO)
    shares: List[Dict[str, Any]] = []
    for name, value in breakdown.items():
        if grand_total > 0:
            percent = int((value * 100 / grand_total).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        else:
            percent = 0
        shares.append({"name": name, "value": float(value), "percent": percent})
    return shares


def format_currency(amount: Decimal) -> str:
    return f"${amount:,.2f}"
