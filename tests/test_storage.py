import json
from decimal import Decimal
from pathlib import Path

import pytest

from common.exceptions import PersistenceReadError, PersistenceWriteError
from common.models import Expense
from common.storage import JSONStorage


def test_missing_resource_loads_empty(storage: JSONStorage) -> None:
    assert storage.load("expenses.json") == []


def test_save_then_load_round_trips_expenses(storage: JSONStorage) -> None:
    expenses = [
        Expense(id=1, name="Rent", amount=Decimal("1000.00"), due_date="2025-01-01", category="Rent/Mortgage"),
        Expense(id=2, name="Bus pass", amount=Decimal("45.50"), due_date="2025-01-05", category="Transportation", paid=True),
    ]

    storage.save("expenses.json", [expense.to_dict() for expense in expenses])
    loaded = [Expense.from_dict(payload) for payload in storage.load("expenses.json")]

    assert loaded == expenses
    assert not (storage.base_path / "expenses.json.tmp").exists()


def test_persisted_layout_uses_camel_case_due_date(storage: JSONStorage) -> None:
    expense = Expense(id=7, name="Phone", amount=Decimal("30.00"), due_date="2025-03-03", category="Utilities")

    storage.save("expenses.json", [expense.to_dict()])
    raw = json.loads((storage.base_path / "expenses.json").read_text(encoding="utf-8"))

    assert raw == [
        {"id": 7, "name": "Phone", "amount": "30.00", "dueDate": "2025-03-03", "category": "Utilities", "paid": False}
    ]


def test_corrupt_blob_raises_read_error(storage: JSONStorage) -> None:
    (storage.base_path / "expenses.json").write_text("not json", encoding="utf-8")

    with pytest.raises(PersistenceReadError):
        storage.load("expenses.json")


def test_non_list_payload_raises_read_error(storage: JSONStorage) -> None:
    (storage.base_path / "expenses.json").write_text('{"id": 1}', encoding="utf-8")

    with pytest.raises(PersistenceReadError):
        storage.load("expenses.json")


def test_quota_exceeded_keeps_previous_blob(tmp_path: Path) -> None:
    storage = JSONStorage(tmp_path, quota_bytes=200)
    storage.save("expenses.json", [{"id": 1}])
    before = (tmp_path / "expenses.json").read_text(encoding="utf-8")

    with pytest.raises(PersistenceWriteError):
        storage.save("expenses.json", [{"id": n, "name": "x" * 50} for n in range(10)])

    assert (tmp_path / "expenses.json").read_text(encoding="utf-8") == before
    assert not (tmp_path / "expenses.json.tmp").exists()


@pytest.mark.parametrize(("stored", "expected"), [("false", False), ("True", True), (False, False), (True, True)])
def test_paid_flag_strings_are_read_literally(stored: object, expected: bool) -> None:
    expense = Expense.from_dict(
        {"id": 3, "name": "Water", "amount": "12", "dueDate": "2025-04-01", "category": "Utilities", "paid": stored}
    )

    assert expense.paid is expected
