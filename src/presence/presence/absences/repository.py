from __future__ import annotations

from typing import Protocol

from ..core.enums import StoreKey
from ..storage.repository import ListRepository, StoreListRepository
from ..storage.store import RecordStore
from .model import AbsenceRecord


class AbsenceRepository(ListRepository[AbsenceRecord], Protocol):
    """Append-only absence list; delete by id, never updated in place."""


def store_absence_repository(store: RecordStore) -> StoreListRepository[AbsenceRecord]:
    return StoreListRepository(
        store,
        StoreKey.ABSENCES,
        decode=AbsenceRecord.from_dict,
        encode=AbsenceRecord.to_dict,
    )
