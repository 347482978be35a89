"""
JSON File Storage Implementation

DESIGN DECISION: All state lives in one small JSON document on disk,
mapping each key to its serialized value. This mirrors the browser
prototype's localStorage: every read loads the whole document and every
write rewrites it.

TRADEOFFS:
- Not suitable for many concurrent writers (last write wins)
- No transactions (each write is a single atomic file replace)
- Fine for a handful of stores and a few thousand entries

The implementation follows the abstract interface, so we can swap
to SQLite/PostgreSQL later without changing business logic.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from safe_cash.services.storage.interface import (
    CorruptStateError,
    KeyValueStoreInterface,
    StorageError,
)


class JsonFileKeyValueStore(KeyValueStoreInterface):
    """Key-value store persisted as a single JSON object."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read {self._path}: {e}") from e

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStateError(str(self._path), str(e)) from e

        if not isinstance(data, dict):
            raise CorruptStateError(str(self._path), "top-level value is not an object")

        return data

    def _write_all(self, data: dict[str, str]) -> None:
        """Write to a temp file in the same directory, then replace."""
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=".tmp-", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp, self._path)
            finally:
                if os.path.exists(tmp):
                    os.remove(tmp)
        except OSError as e:
            raise StorageError(f"Could not write {self._path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise CorruptStateError(key, "value is not a serialized string")
        return value

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
