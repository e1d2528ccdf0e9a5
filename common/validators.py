"""Validation helpers shared across expense tracker entry points."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Mapping, Optional, Union

from .exceptions import ValidationError
from .models import CATEGORIES, Draft, parse_due_date

REQUIRED_MESSAGE = "All fields are required."
AMOUNT_MESSAGE = "Amount must be greater than zero."
DUE_DATE_MESSAGE = "Due date must be a valid date."

ALL = "All"


def _quantize_two_decimals(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_amount(raw: object) -> Decimal:
    """Convert raw input to a positive Decimal with exactly two fraction digits."""
    if isinstance(raw, bool):
        raise ValidationError(AMOUNT_MESSAGE)
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError) as exc:
        raise ValidationError(AMOUNT_MESSAGE) from exc

    if not amount.is_finite() or amount <= 0:
        raise ValidationError(AMOUNT_MESSAGE)

    try:
        quantized = _quantize_two_decimals(amount)
    except InvalidOperation as exc:
        # Too many digits to hold at cent precision.
        raise ValidationError(AMOUNT_MESSAGE) from exc
    # Sub-cent amounts such as 0.001 would otherwise round down to zero.
    if quantized <= 0:
        raise ValidationError(AMOUNT_MESSAGE)
    return quantized


def validate_due_date(value: object) -> str:
    due = parse_due_date(value)
    if due is None:
        raise ValidationError(DUE_DATE_MESSAGE)
    return due.isoformat()


def validate_category(value: object) -> str:
    if not isinstance(value, str) or value.strip() not in CATEGORIES:
        raise ValidationError(f"Category must be one of: {', '.join(CATEGORIES)}")
    return value.strip()


def validate_draft(payload: Mapping[str, object]) -> Draft:
    """Check a submitted form and build a Draft; nothing is created on failure.

    Accepts either the persisted ``dueDate`` key or the Pythonic ``due_date``.
    """
    due_date = payload.get("dueDate", payload.get("due_date"))
    fields = (payload.get("name"), payload.get("amount"), due_date, payload.get("category"))
    if any(_is_blank(value) for value in fields):
        raise ValidationError(REQUIRED_MESSAGE)

    name = str(payload["name"]).strip()
    amount = parse_amount(payload["amount"])
    return Draft(
        name=name,
        amount=amount,
        due_date=validate_due_date(due_date),
        category=validate_category(payload["category"]),
    )


def parse_filter_number(value: Union[str, int, None], field: str) -> Optional[int]:
    """Normalise a month/year filter: None means 'All', otherwise an integer."""
    if value is None or value == ALL:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} filter must be 'All' or an integer")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"{field} filter must be 'All' or an integer") from exc
