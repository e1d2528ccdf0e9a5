"""Persistence utilities for the expense tracker core services."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import PersistenceReadError, PersistenceWriteError

logger = logging.getLogger(__name__)


class JSONStorage:
    """File-based key-value store: each resource name maps to one JSON blob."""

    def __init__(self, base_path: Path, *, quota_bytes: Optional[int] = None) -> None:
        self._base_path = base_path
        self._base_path.mkdir(parents=True, exist_ok=True)
        self._quota_bytes = quota_bytes

    def load(self, resource: str) -> List[Dict[str, Any]]:
        path = self._base_path / resource
        if not path.exists():
            return []
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise PersistenceReadError(f"Corrupted JSON data in {path}") from exc
        except OSError as exc:
            raise PersistenceReadError(f"Unable to read from {path}") from exc

        if not isinstance(payload, list):
            raise PersistenceReadError(f"Expected list payload in {path}")
        return payload

    def save(self, resource: str, records: Iterable[Dict[str, Any]]) -> None:
        path = self._base_path / resource
        blob = json.dumps(list(records), indent=2)
        size = len(blob.encode("utf-8"))
        if self._quota_bytes is not None and size > self._quota_bytes:
            raise PersistenceWriteError(
                f"Payload of {size} bytes exceeds storage quota of {self._quota_bytes} bytes"
            )

        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                handle.write(blob)
                handle.flush()
            # Use replace for atomic move on POSIX; ensures crash-safe persistence.
            temp_path.replace(path)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise PersistenceWriteError(f"Unable to write to {path}") from exc
        logger.debug("Saved %d bytes to %s", size, path)

    @property
    def base_path(self) -> Path:
        return self._base_path
