from __future__ import annotations

from typing import Protocol

from ..core.enums import StoreKey
from ..storage.repository import ListRepository, StoreListRepository
from ..storage.store import RecordStore
from .model import TardinessRecord


class TardinessRepository(ListRepository[TardinessRecord], Protocol):
    """Append-only tardiness list; several entries per teacher and day are allowed."""


def store_tardiness_repository(store: RecordStore) -> StoreListRepository[TardinessRecord]:
    return StoreListRepository(
        store,
        StoreKey.TARDINESS,
        decode=TardinessRecord.from_dict,
        encode=TardinessRecord.to_dict,
    )
