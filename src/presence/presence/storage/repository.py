from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, Protocol, TypeVar

from ..core.enums import StoreKey
from .store import RecordStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ListRepository(Protocol[T]):
    """Append-only list of entities with delete by id.

    Call sites depend on this interface only, so a transactional backend can
    replace the whole-list implementation below.
    """

    def list(self) -> list[T]:
        raise NotImplementedError

    def append(self, item: T) -> None:
        raise NotImplementedError

    def remove_by_id(self, item_id: str) -> bool:
        raise NotImplementedError

    def replace_all(self, items: Iterable[T]) -> None:
        raise NotImplementedError


class StoreListRepository(Generic[T]):
    """ListRepository over one store category (read-all, mutate, write-all)."""

    def __init__(
        self,
        store: RecordStore,
        key: StoreKey,
        *,
        decode: Callable[[dict], T],
        encode: Callable[[T], dict],
    ):
        self._store = store
        self._key = key
        self._decode = decode
        self._encode = encode

    def _raw(self) -> list[dict]:
        return list(self._store.get(self._key) or [])

    def list(self) -> list[T]:
        return [self._decode(row) for row in self._raw()]

    def append(self, item: T) -> None:
        rows = self._raw()
        rows.append(self._encode(item))
        self._store.set(self._key, rows)

    def remove_by_id(self, item_id: str) -> bool:
        rows = self._raw()
        kept = [row for row in rows if self._decode(row).id != item_id]
        if len(kept) == len(rows):
            return False
        self._store.set(self._key, kept)
        logger.debug("Removed %s from %s", item_id, self._key.value)
        return True

    def replace_all(self, items: Iterable[T]) -> None:
        self._store.set(self._key, [self._encode(item) for item in items])
