"""Framework-agnostic business services for the expense tracker."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .exceptions import PersistenceReadError, PersistenceWriteError, RecordNotFoundError
from .filters import FilterSelection, FilterValue, available_years, sort_by_due_date
from .models import Expense
from .storage import JSONStorage
from .summaries import ExpenseSummary, category_breakdown, chart_data, summarize
from .validators import validate_draft

logger = logging.getLogger(__name__)

Listener = Callable[[Tuple[Expense, ...]], None]


class ExpenseService:
    """Owns the in-memory expense collection and mirrors it to storage."""

    def __init__(
        self,
        storage: JSONStorage,
        resource: str = "expenses.json",
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self._resource = resource
        self._clock = clock
        self._expenses: Dict[int, Expense] = {}
        self._last_id = 0
        self._listeners: List[Listener] = []
        self.load()  # Hydrate in-memory cache from persistence on construction.

    # Public API -----------------------------------------------------------
    def add(self, payload: Mapping[str, object]) -> Expense:
        draft = validate_draft(payload)
        expense = Expense(
            id=self._next_id(),
            name=draft.name,
            amount=draft.amount,
            due_date=draft.due_date,
            category=draft.category,
            paid=False,
        )
        self._expenses[expense.id] = expense
        logger.debug("Added expense %s", expense.id)
        self._commit()
        return expense

    def update(self, expense_id: int, payload: Mapping[str, object]) -> Expense:
        existing = self._get_or_raise(expense_id)
        draft = validate_draft(payload)
        # Re-assigning an existing key keeps the record's position in the dict.
        updated = replace(
            existing,
            name=draft.name,
            amount=draft.amount,
            due_date=draft.due_date,
            category=draft.category,
        )
        self._expenses[expense_id] = updated
        logger.debug("Updated expense %s", expense_id)
        self._commit()
        return updated

    def delete(self, expense_id: int) -> None:
        """Remove an expense; unknown ids are ignored."""
        if self._expenses.pop(expense_id, None) is None:
            logger.debug("Delete of unknown expense %s ignored", expense_id)
            return
        logger.debug("Deleted expense %s", expense_id)
        self._commit()

    def toggle_paid(self, expense_id: int) -> Expense:
        existing = self._get_or_raise(expense_id)
        toggled = replace(existing, paid=not existing.paid)
        self._expenses[expense_id] = toggled
        logger.debug("Expense %s marked %s", expense_id, "paid" if toggled.paid else "unpaid")
        self._commit()
        return toggled

    def get(self, expense_id: int) -> Expense:
        """Return an expense or raise if it does not exist."""
        return self._get_or_raise(expense_id)

    def all(self) -> Tuple[Expense, ...]:
        """Snapshot of the collection in insertion order."""
        return tuple(self._expenses.values())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot after every change; returns an unsubscribe hook."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load(self) -> None:
        """Load existing expenses from persistence, starting empty if the blob is unusable."""
        try:
            raw_records = self._storage.load(self._resource)
            expenses = [Expense.from_dict(payload) for payload in raw_records]
        except PersistenceReadError as exc:
            logger.warning("Starting with no expenses: %s", exc)
            expenses = []
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Starting with no expenses: malformed record in %s (%s)", self._resource, exc)
            expenses = []

        self._last_id = max((expense.id for expense in expenses), default=0)
        self._expenses = {}
        for expense in expenses:
            if expense.id in self._expenses:
                fresh = replace(expense, id=self._next_id())
                logger.warning("Duplicate expense id %s in %s re-keyed as %s", expense.id, self._resource, fresh.id)
                expense = fresh
            self._expenses[expense.id] = expense

    # Internal helpers -----------------------------------------------------
    def _next_id(self) -> int:
        # Millisecond timestamps, bumped when two adds land in the same tick.
        candidate = max(int(self._clock() * 1000), self._last_id + 1)
        self._last_id = candidate
        return candidate

    def _commit(self) -> None:
        self._persist()
        snapshot = self.all()
        for listener in list(self._listeners):
            listener(snapshot)

    def _persist(self) -> None:
        try:
            # Persist current snapshot; storage layer handles atomic writes.
            self._storage.save(self._resource, [expense.to_dict() for expense in self._expenses.values()])
        except PersistenceWriteError as exc:
            # The in-memory collection stays authoritative for the rest of the session.
            logger.error("Expenses not saved, stored copy is now stale: %s", exc)

    def _get_or_raise(self, expense_id: int) -> Expense:
        try:
            return self._expenses[expense_id]
        except KeyError as exc:
            raise RecordNotFoundError(f"Expense {expense_id} not found") from exc


@dataclass(frozen=True)
class Dashboard:
    """Everything a view needs to render one filter selection."""

    selection: FilterSelection
    expenses: List[Expense]
    summary: ExpenseSummary
    available_years: List[FilterValue]
    category_breakdown: Dict[str, Decimal]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [expense.to_dict() for expense in self.expenses],
            **self.summary.to_dict(),
            "available_years": list(self.available_years),
            "category_breakdown": chart_data(self.category_breakdown),
        }


class DashboardService:
    """Derives filtered lists and aggregates from an ExpenseService on every read."""

    def __init__(self, expense_service: ExpenseService) -> None:
        self._expenses = expense_service

    def filtered(self, selection: Optional[FilterSelection] = None) -> List[Expense]:
        selection = selection or FilterSelection()
        return sort_by_due_date(selection.apply(self._expenses.all()))

    def build(self, selection: Optional[FilterSelection] = None) -> Dashboard:
        selection = selection or FilterSelection()
        everything = self._expenses.all()
        matching = selection.apply(everything)
        return Dashboard(
            selection=selection,
            expenses=sort_by_due_date(matching),
            summary=summarize(matching),
            available_years=available_years(everything),
            # Buckets follow storage order, not the display order.
            category_breakdown=category_breakdown(matching),
        )
