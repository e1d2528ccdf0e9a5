"""Environment-driven settings shared by the API and the console."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    resource: str
    quota_bytes: Optional[int]
    log_level: str
    env_name: str
    allowed_origins: List[str]

    @property
    def is_dev(self) -> bool:
        return self.env_name in {"dev", "development"}


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    value = int(raw)
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer")
    return value


def load_settings() -> Settings:
    """Read settings from ``EXPENSE_TRACKER_*`` environment variables."""
    origins = os.getenv("EXPENSE_TRACKER_ALLOWED_ORIGINS", "")
    return Settings(
        data_dir=Path(os.getenv("EXPENSE_TRACKER_DATA_DIR", "data")),
        resource=os.getenv("EXPENSE_TRACKER_RESOURCE", "expenses.json"),
        quota_bytes=_optional_int("EXPENSE_TRACKER_QUOTA_BYTES"),
        log_level=os.getenv("EXPENSE_TRACKER_LOG_LEVEL", "INFO").upper(),
        env_name=os.getenv("EXPENSE_TRACKER_ENV", "prod").lower(),
        allowed_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
