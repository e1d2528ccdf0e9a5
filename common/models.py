"""Data models for the expense tracker domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Union

__all__ = ["CATEGORIES", "Draft", "Expense", "parse_due_date"]

CATEGORIES = (
    "Utilities",
    "Credit Card",
    "Groceries",
    "Rent/Mortgage",
    "Transportation",
    "Entertainment",
    "Other",
)

# Stored amounts are normally numeric, but a hand-edited or legacy blob may hold
# anything; those values are kept verbatim so a save does not rewrite them.
RawAmount = Union[Decimal, str, None]


def parse_due_date(value: object) -> Optional[date]:
    """Return the calendar date of an ISO date/datetime string, or None if unparseable."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        # The wall-clock date as written, without shifting the offset to UTC.
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def _coerce_paid(raw: object) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() == "true"
    return bool(raw)


def _coerce_amount(raw: object) -> RawAmount:
    if raw is None or isinstance(raw, bool):
        return None if raw is None else str(raw)
    try:
        amount = Decimal(str(raw).strip())
    except InvalidOperation:
        return str(raw)
    if not amount.is_finite():
        return str(raw)
    return amount


@dataclass(frozen=True)
class Draft:
    """User-supplied fields for creating or updating an expense."""

    name: str
    amount: Decimal
    due_date: str
    category: str


@dataclass(frozen=True)
class Expense:
    id: int
    name: str
    amount: RawAmount
    due_date: str
    category: str
    paid: bool = False

    @property
    def numeric_amount(self) -> Optional[Decimal]:
        """The amount as a finite Decimal, or None when the stored value is not numeric."""
        if isinstance(self.amount, Decimal) and self.amount.is_finite():
            return self.amount
        return None

    @property
    def due_on(self) -> Optional[date]:
        return parse_due_date(self.due_date)

    def is_past_due(self, today: date) -> bool:
        due = self.due_on
        return not self.paid and due is not None and due < today

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to the persisted JSON layout."""
        amount = str(self.amount) if isinstance(self.amount, Decimal) else self.amount
        return {
            "id": self.id,
            "name": self.name,
            "amount": amount,
            "dueDate": self.due_date,
            "category": self.category,
            "paid": self.paid,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Expense":
        """Hydrate an Expense from JSON-native data."""
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            amount=_coerce_amount(data.get("amount")),
            due_date=str(data.get("dueDate") or ""),
            category=str(data.get("category") or ""),
            paid=_coerce_paid(data.get("paid", False)),
        )
