"""Core business logic package for the expense tracker."""

from .config import Settings, get_settings
from .exceptions import (
    PersistenceError,
    PersistenceReadError,
    PersistenceWriteError,
    RecordNotFoundError,
    ValidationError,
)
from .filters import FilterSelection, available_years, filter_expenses, sort_by_due_date
from .models import CATEGORIES, Draft, Expense
from .services import Dashboard, DashboardService, ExpenseService
from .storage import JSONStorage
from .summaries import ExpenseSummary, category_breakdown, chart_data, summarize
from .validators import validate_draft

__all__ = [
    "CATEGORIES",
    "Dashboard",
    "DashboardService",
    "Draft",
    "Expense",
    "ExpenseService",
    "ExpenseSummary",
    "FilterSelection",
    "JSONStorage",
    "PersistenceError",
    "PersistenceReadError",
    "PersistenceWriteError",
    "RecordNotFoundError",
    "Settings",
    "ValidationError",
    "available_years",
    "category_breakdown",
    "chart_data",
    "filter_expenses",
    "get_settings",
    "sort_by_due_date",
    "summarize",
    "validate_draft",
]
