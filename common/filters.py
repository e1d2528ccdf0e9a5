"""Filtering and ordering of expense collections for display."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Sequence, Union

from .models import CATEGORIES, Expense
from .validators import ALL, parse_filter_number

__all__ = [
    "CATEGORY_FILTERS",
    "MONTH_NAMES",
    "FilterSelection",
    "available_years",
    "filter_expenses",
    "sort_by_due_date",
]

CATEGORY_FILTERS = (ALL,) + CATEGORIES

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

FilterValue = Union[str, int]


def filter_expenses(
    expenses: Iterable[Expense],
    category: str = ALL,
    month: FilterValue = ALL,
    year: FilterValue = ALL,
) -> List[Expense]:
    """Return the expenses matching every active filter, in input order.

    ``month`` is zero-indexed (0 is January). Records whose due date cannot be
    parsed never match, whatever the selection.
    """
    month_number = parse_filter_number(month, "month")
    year_number = parse_filter_number(year, "year")

    def matches(expense: Expense) -> bool:
        due = expense.due_on
        if due is None:
            return False
        if category != ALL and expense.category != category:
            return False
        if year_number is not None and due.year != year_number:
            return False
        if month_number is not None and due.month - 1 != month_number:
            return False
        return True

    return [expense for expense in expenses if matches(expense)]


@dataclass(frozen=True)
class FilterSelection:
    """The (category, month, year) triple chosen in a view."""

    category: str = ALL
    month: FilterValue = ALL
    year: FilterValue = ALL

    def apply(self, expenses: Iterable[Expense]) -> List[Expense]:
        return filter_expenses(expenses, self.category, self.month, self.year)


def available_years(expenses: Iterable[Expense]) -> List[FilterValue]:
    """Distinct due-date years, newest first, prefixed with 'All'."""
    years = {expense.due_on.year for expense in expenses if expense.due_on is not None}
    return [ALL, *sorted(years, reverse=True)]


def sort_by_due_date(expenses: Sequence[Expense]) -> List[Expense]:
    # Unparseable dates sort last; the sort is stable for equal dates.
    return sorted(expenses, key=lambda exp: exp.due_on or date.max)
