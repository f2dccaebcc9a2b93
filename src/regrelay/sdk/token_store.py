from __future__ import annotations

import json
import threading
from pathlib import Path

from ..core.errors import StoreError

REGISTRATION_ID_KEY = "registration_id"


class MemoryTokenStore:
    """Holds the last registration token issued to this client.

    A failed write leaves the previous value in place and raises `StoreError`.
    """

    def __init__(self, token: str = "") -> None:
        self._lock = threading.RLock()
        self._values: dict[str, str] = {}
        if token:
            self._values[REGISTRATION_ID_KEY] = str(token)

    def get(self) -> str:
        with self._lock:
            return self._values.get(REGISTRATION_ID_KEY, "")

    def set(self, token: str) -> None:
        with self._lock:
            previous = dict(self._values)
            self._values[REGISTRATION_ID_KEY] = str(token)
            self._commit(previous)

    def clear(self) -> None:
        with self._lock:
            previous = dict(self._values)
            self._values.pop(REGISTRATION_ID_KEY, None)
            self._commit(previous)

    def _commit(self, previous: dict[str, str]) -> None:
        try:
            self._flush()
        except StoreError:
            self._values = previous
            raise
        except OSError as ex:
            self._values = previous
            raise StoreError(f"Cannot write token store: {ex}") from ex

    def _flush(self) -> None:
        pass


class FileTokenStore(MemoryTokenStore):
    """Token store persisted as a small JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        self._values = self._load()

    def _load(self) -> dict[str, str]:
        try:
            if not self.path.exists():
                return {}
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as ex:
            raise StoreError(f"Corrupt token store {self.path}: {ex}") from ex
        except OSError as ex:
            raise StoreError(f"Cannot read token store {self.path}: {ex}") from ex
        if not isinstance(data, dict):
            raise StoreError(f"Corrupt token store {self.path}: expected a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _flush(self) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(self._values, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as ex:
            raise StoreError(f"Cannot write token store {self.path}: {ex}") from ex
