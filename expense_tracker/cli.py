"""Console interface for the expense tracker."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from common.config import get_settings
from common.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from common.filters import CATEGORY_FILTERS, MONTH_NAMES, FilterSelection
from common.models import CATEGORIES, Expense
from common.services import DashboardService, ExpenseService
from common.storage import JSONStorage
from common.summaries import category_shares, format_currency
from common.validators import ALL


def _parse_month(value: str) -> str:
    """Accept 'All', a zero-based month index, or an English month name."""
    if value == ALL:
        return value
    for index, name in enumerate(MONTH_NAMES):
        if value.lower() in (name.lower(), name[:3].lower()):
            return str(index)
    if value.isdigit() and int(value) < len(MONTH_NAMES):
        return value
    raise argparse.ArgumentTypeError(
        f"Invalid month '{value}'. Use All, 0-11 or a month name."
    )


def _load_services(data_dir: Path) -> Tuple[ExpenseService, DashboardService]:
    settings = get_settings()
    storage = JSONStorage(data_dir, quota_bytes=settings.quota_bytes)
    expenses = ExpenseService(storage, settings.resource)
    return expenses, DashboardService(expenses)


def _format_expense(expense: Expense, today: date) -> str:
    if expense.paid:
        status = "paid"
    elif expense.is_past_due(today):
        status = "PAST DUE"
    else:
        status = "unpaid"
    amount = expense.numeric_amount
    shown = format_currency(amount) if amount is not None else str(expense.amount)
    return (
        f"[{expense.id}] {expense.due_date} {shown} ({status})\n"
        f"  {expense.name} | Category: {expense.category}\n"
    )


def _confirm(prompt: str, ask: Callable[[str], str]) -> bool:
    answer = ask(f"{prompt} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def handle_command(
    args: argparse.Namespace,
    service: ExpenseService,
    dashboard: DashboardService,
    ask: Callable[[str], str] = input,
) -> None:
    today = date.today()
    if args.command == "add":
        payload = {
            "name": args.name,
            "amount": args.amount,
            "dueDate": args.due_date,
            "category": args.category,
        }
        expense = service.add(payload)
        print("Expense added:\n" + _format_expense(expense, today))
    elif args.command == "list":
        selection = FilterSelection(category=args.category, month=args.month, year=args.year)
        view = dashboard.build(selection)
        if not view.expenses:
            print("No expenses found for the selected filters.")
            return
        print(
            f"Found {len(view.expenses)} expenses "
            f"(total {format_currency(view.summary.total)}):"
        )
        for expense in view.expenses:
            print(_format_expense(expense, today))
    elif args.command == "edit":
        existing = service.get(args.id)
        # Unspecified options keep the current values, as a pre-filled form would.
        payload = {
            "name": args.name if args.name is not None else existing.name,
            "amount": args.amount if args.amount is not None else existing.amount,
            "dueDate": args.due_date if args.due_date is not None else existing.due_date,
            "category": args.category if args.category is not None else existing.category,
        }
        expense = service.update(args.id, payload)
        print("Expense updated:\n" + _format_expense(expense, today))
    elif args.command == "delete":
        if not args.yes and not _confirm("Are you sure you want to delete this expense?", ask):
            print("Delete cancelled.")
            return
        service.delete(args.id)
        print(f"Expense {args.id} deleted.")
    elif args.command == "toggle":
        expense = service.toggle_paid(args.id)
        state = "paid" if expense.paid else "unpaid"
        print(f"Expense {expense.id} marked as {state}.")
    elif args.command == "summary":
        selection = FilterSelection(category=args.category, month=args.month, year=args.year)
        view = dashboard.build(selection)
        years = ", ".join(str(year) for year in view.available_years)
        print(f"Total expenses: {format_currency(view.summary.total)}")
        print(f"Paid:           {format_currency(view.summary.paid_total)}")
        print(f"Remaining:      {format_currency(view.summary.unpaid_total)}")
        print(f"Years:          {years}")
        shares = category_shares(view.category_breakdown)
        if not shares:
            print("No data to display for the current filters.")
            return
        print("Spending by category:")
        for share in shares:
            print(f"  {share['name']}: ${share['value']:,.2f} ({share['percent']}%)")


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--category", choices=CATEGORY_FILTERS, default=ALL)
    parser.add_argument("--month", type=_parse_month, default=ALL)
    parser.add_argument("--year", default=ALL)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Expense Tracker CLI")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory to store JSON data (default: $EXPENSE_TRACKER_DATA_DIR or ./data)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Add a new expense")
    add.add_argument("name")
    add.add_argument("amount")
    add.add_argument("due_date", help="Due date as YYYY-MM-DD")
    add.add_argument("category", choices=CATEGORIES)

    listing = subparsers.add_parser("list", help="List expenses by due date")
    _add_filter_arguments(listing)

    edit = subparsers.add_parser("edit", help="Edit an existing expense")
    edit.add_argument("id", type=int)
    edit.add_argument("--name")
    edit.add_argument("--amount")
    edit.add_argument("--due-date")
    edit.add_argument("--category", choices=CATEGORIES)

    delete = subparsers.add_parser("delete", help="Delete an expense")
    delete.add_argument("id", type=int)
    delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    toggle = subparsers.add_parser("toggle", help="Mark an expense as paid or unpaid")
    toggle.add_argument("id", type=int)

    summary = subparsers.add_parser("summary", help="Show totals and the category breakdown")
    _add_filter_arguments(summary)

    return parser


def main(argv: Optional[List[str]] = None, ask: Callable[[str], str] = input) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    service, dashboard = _load_services(args.data_dir or settings.data_dir)

    try:
        handle_command(args, service, dashboard, ask)
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
