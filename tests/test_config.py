from pathlib import Path

import pytest

from common.config import get_settings, load_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXPENSE_TRACKER_DATA_DIR")

    settings = load_settings()

    assert settings.data_dir == Path("data")
    assert settings.resource == "expenses.json"
    assert settings.quota_bytes is None
    assert settings.log_level == "INFO"
    assert not settings.is_dev


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPENSE_TRACKER_QUOTA_BYTES", "5000")
    monkeypatch.setenv("EXPENSE_TRACKER_ENV", "Development")
    monkeypatch.setenv("EXPENSE_TRACKER_ALLOWED_ORIGINS", "http://a.test, ,http://b.test")
    monkeypatch.setenv("EXPENSE_TRACKER_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.quota_bytes == 5000
    assert settings.is_dev
    assert settings.allowed_origins == ["http://a.test", "http://b.test"]
    assert settings.log_level == "DEBUG"


def test_invalid_quota_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPENSE_TRACKER_QUOTA_BYTES", "-1")

    with pytest.raises(ValueError):
        load_settings()
