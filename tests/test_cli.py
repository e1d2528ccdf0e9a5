import json
from pathlib import Path

import pytest

from expense_tracker.cli import main


def _run(data_dir: Path, *argv: str, answer: str = "y") -> int:
    return main(["--data-dir", str(data_dir), *argv], ask=lambda prompt: answer)


def _stored(data_dir: Path) -> list:
    return json.loads((data_dir / "expenses.json").read_text(encoding="utf-8"))


def test_add_and_list(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert _run(tmp_path, "add", "Rent", "1000", "2025-01-01", "Rent/Mortgage") == 0
    assert _run(tmp_path, "list", "--year", "2025", "--month", "January") == 0

    out = capsys.readouterr().out
    assert "Expense added" in out
    assert "Found 1 expenses (total $1,000.00)" in out


def test_invalid_amount_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert _run(tmp_path, "add", "Rent", "-5", "2025-01-01", "Rent/Mortgage") == 1

    assert "Amount must be greater than zero." in capsys.readouterr().err
    assert not (tmp_path / "expenses.json").exists()


def test_edit_keeps_unspecified_fields(tmp_path: Path) -> None:
    _run(tmp_path, "add", "Rent", "1000", "2025-01-01", "Rent/Mortgage")
    expense_id = _stored(tmp_path)[0]["id"]

    assert _run(tmp_path, "edit", str(expense_id), "--amount", "950") == 0

    record = _stored(tmp_path)[0]
    assert record["name"] == "Rent"
    assert record["amount"] == "950.00"


def test_toggle_and_summary(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    _run(tmp_path, "add", "Rent", "800", "2025-01-01", "Rent/Mortgage")
    _run(tmp_path, "add", "Power", "200", "2025-01-10", "Utilities")
    expense_id = _stored(tmp_path)[0]["id"]

    assert _run(tmp_path, "toggle", str(expense_id)) == 0
    assert _run(tmp_path, "summary") == 0

    out = capsys.readouterr().out
    assert "marked as paid" in out
    assert "Paid:           $800.00" in out
    assert "Remaining:      $200.00" in out
    assert "Rent/Mortgage: $800.00 (80%)" in out


def test_delete_requires_confirmation(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    _run(tmp_path, "add", "Rent", "1000", "2025-01-01", "Rent/Mortgage")
    expense_id = str(_stored(tmp_path)[0]["id"])

    assert _run(tmp_path, "delete", expense_id, answer="n") == 0
    assert len(_stored(tmp_path)) == 1

    assert _run(tmp_path, "delete", expense_id, answer="yes") == 0
    assert _stored(tmp_path) == []
    assert "Delete cancelled." in capsys.readouterr().out


def test_toggle_unknown_id(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert _run(tmp_path, "toggle", "5") == 1
    assert "Expense 5 not found" in capsys.readouterr().err
