from __future__ import annotations

"""Key-value stores holding string blobs (JSON text) under named keys.

`KeyValueStore` defines get/set/clear plus `append`, a read-modify-write of
a JSON array. There is no locking: two writers appending to the same key
can lose one of the appends.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import StoreError


class KeyValueStore:
    """Abstract base for string key-value stores."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def clear(self, key: str) -> None:
        raise NotImplementedError

    def get_list(self, key: str) -> List[Any]:
        """Decode the JSON array stored under `key` ([] when absent)."""
        raw = self.get(key)
        if raw is None or raw == "":
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreError(f"Value under '{key}' is not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise StoreError(f"Value under '{key}' is not a JSON array")
        return data

    def append(self, key: str, item: Any) -> None:
        items = self.get_list(key)
        items.append(item)
        self.set(key, json.dumps(items, ensure_ascii=False, separators=(",", ":")))


class MemoryStore(KeyValueStore):
    """In-process dict store, used by tests and one-shot runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def clear(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._data)


class JsonFileStore(KeyValueStore):
    """File-backed store: one JSON object mapping key -> string.

    Writes go to a temporary sibling file first and are moved into place
    with `os.replace`.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        p = self._path
        if not p.exists():
            return {}
        try:
            with p.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreError(f"Store file {p} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Store file {p} does not hold a JSON object")
        return {str(k): v if isinstance(v, str) else json.dumps(v, ensure_ascii=False) for k, v in data.items()}

    def _save(self, data: Dict[str, str]) -> None:
        p = self._path
        p.parent.mkdir(parents=True, exist_ok=True)
        tmp = p.with_suffix(p.suffix + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(str(tmp), str(p))
        except Exception:
            tmp.unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self._save(data)

    def clear(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
