from pathlib import Path
from typing import Iterator

import pytest

from common.config import get_settings
from common.services import DashboardService, ExpenseService
from common.storage import JSONStorage


class FrozenClock:
    def __init__(self, now: float = 1_735_689_600.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for name in (
        "EXPENSE_TRACKER_RESOURCE",
        "EXPENSE_TRACKER_QUOTA_BYTES",
        "EXPENSE_TRACKER_LOG_LEVEL",
        "EXPENSE_TRACKER_ENV",
        "EXPENSE_TRACKER_ALLOWED_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("EXPENSE_TRACKER_DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def storage(tmp_path: Path) -> JSONStorage:
    return JSONStorage(tmp_path / "store")


@pytest.fixture
def service(storage: JSONStorage, clock: FrozenClock) -> ExpenseService:
    return ExpenseService(storage, clock=clock)


@pytest.fixture
def dashboard(service: ExpenseService) -> DashboardService:
    return DashboardService(service)
