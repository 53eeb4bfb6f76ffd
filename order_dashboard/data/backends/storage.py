from __future__ import annotations

import contextlib
import json
import os
from pathlib import Path
from typing import Dict, Optional

from ..interface import KeyValueStorage
from ...errors import StorageError


class JsonFileStorage(KeyValueStorage):
    """
    Key-value storage persisted as one JSON object on disk.
    - Every call re-reads the file, so two dashboards sharing a path see each other's writes.
    - Writes go to a temp file that replaces the original, so a crash never leaves half a file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

        # Relative paths are resolved against the working directory once, up front
        if not self.path.is_absolute():
            self.path = Path.cwd() / self.path

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            raise StorageError(f"Error reading local storage {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Local storage {self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageError(f"Error writing local storage {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return None if value is None else str(value)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


class InMemoryStorage(KeyValueStorage):
    """Process-local storage; used by tests and the `memory` storage kind."""

    def __init__(self, items: Optional[Dict[str, str]] = None) -> None:
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)
