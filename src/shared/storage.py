"""Durable key/value local storage backed by a single JSON file.

Follows the browser localStorage contract the kiosk shell was built around:
string keys, string values, and the whole document rewritten on every write.
Callers decide what a failure means; this module only reports it as
StorageError.
"""

import json
import os
from pathlib import Path

DEFAULT_STORAGE_PATH = "data/kiosk_storage.json"


class StorageError(Exception):
    """Raised when the storage file cannot be read, parsed, or written."""


class LocalStorage:
    """File-backed key/value store surviving process restarts."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or os.environ.get("KIOSK_STORAGE_PATH", DEFAULT_STORAGE_PATH))

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read storage file {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self.path} does not contain a JSON object")
        return data

    def _write(self, data: dict) -> None:
        # Write to a sibling file first so a crash never leaves half a document behind
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StorageError(f"Cannot write storage file {self.path}: {exc}") from exc
