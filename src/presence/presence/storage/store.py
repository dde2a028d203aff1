from __future__ import annotations

import copy
import json
from typing import Any, Optional, Protocol

from ..core.enums import StoreKey


class RecordStore(Protocol):
    """Key-value store interface keyed by logical category.

    Values are JSON-serializable (a list of records, or the config object).
    set() replaces the whole value.
    """

    def get(self, key: StoreKey) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: StoreKey, value: Any) -> None:
        raise NotImplementedError


class InMemoryStore(RecordStore):
    """Process-local store. Values are copied in and out, like a real backend."""

    def __init__(self, initial: Optional[dict] = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(StoreKey(key), value)

    def get(self, key: StoreKey) -> Optional[Any]:
        raw = self._data.get(StoreKey(key).value)
        return None if raw is None else json.loads(raw)

    def set(self, key: StoreKey, value: Any) -> None:
        self._data[StoreKey(key).value] = json.dumps(copy.deepcopy(value), ensure_ascii=False)
