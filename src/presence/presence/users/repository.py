from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import StoreKey
from ..storage.repository import ListRepository, StoreListRepository
from ..storage.store import RecordStore
from .model import UserRecord


class UserRepository(ListRepository[UserRecord], Protocol):
    """Credential list. remove_by_id takes the (lower-cased) email."""


def store_user_repository(store: RecordStore) -> StoreListRepository[UserRecord]:
    return StoreListRepository(
        store,
        StoreKey.USERS,
        decode=UserRecord.from_dict,
        encode=UserRecord.to_dict,
    )


def find_by_email(users: UserRepository, email: str) -> Optional[UserRecord]:
    needle = (email or "").strip().lower()
    return next((u for u in users.list() if u.email.lower() == needle), None)
