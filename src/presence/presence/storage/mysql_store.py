from __future__ import annotations

import json
from typing import Any, Optional

import mysql.connector

from ..core.enums import StoreKey
from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .store import RecordStore


class MySQLKeyValueStore(RecordStore):
    """RecordStore backed by the presence_kv table (one JSON value per key)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: StoreKey) -> Optional[Any]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT store_value FROM presence_kv WHERE store_key=%s",
                    (StoreKey(key).value,),
                )
                row = fetchone(cur)
        except mysql.connector.Error as e:
            raise StoreError(f"Failed to read {StoreKey(key).value}") from e
        if not row:
            return None
        return json.loads(row["store_value"])

    def set(self, key: StoreKey, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO presence_kv(store_key, store_value)
                    VALUES(%s, %s)
                    ON DUPLICATE KEY UPDATE store_value=VALUES(store_value)
                    """,
                    (StoreKey(key).value, payload),
                )
        except mysql.connector.Error as e:
            raise StoreError(f"Failed to write {StoreKey(key).value}") from e
