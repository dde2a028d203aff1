from __future__ import annotations

from typing import Protocol

from ..core.enums import StoreKey
from ..storage.store import RecordStore
from .model import SchoolConfig


class ConfigRepository(Protocol):
    def get(self) -> SchoolConfig:
        raise NotImplementedError

    def save(self, config: SchoolConfig) -> None:
        raise NotImplementedError


class StoreConfigRepository(ConfigRepository):
    """Singleton config; returns the built-in default when nothing is saved."""

    def __init__(self, store: RecordStore):
        self._store = store

    def get(self) -> SchoolConfig:
        data = self._store.get(StoreKey.CONFIG)
        if not data:
            return SchoolConfig()
        return SchoolConfig.from_dict(data)

    def save(self, config: SchoolConfig) -> None:
        self._store.set(StoreKey.CONFIG, config.to_dict())
