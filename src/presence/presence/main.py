from __future__ import annotations

import logging

from dotenv import load_dotenv

from config import load_settings

from .actions import PresenceActions
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DatabaseConnection, DBConfig
from .storage.mysql_store import MySQLKeyValueStore
from .storage.store import InMemoryStore, RecordStore

logger = logging.getLogger(__name__)


def _build_store(settings) -> RecordStore:
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    if backend == "memory":
        return InMemoryStore()
    if backend != "mysql":
        raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")

    db_config = getattr(settings, "DB_CONFIG")
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(conn)
        logger.info("Schema ready (tables=%d)", len(list_tables(conn)))
    return MySQLKeyValueStore(conn)


def create_application() -> tuple[Container, PresenceActions]:
    """Start-up sequence: settings, logging, store, services, default admin."""
    load_dotenv(override=False)

    settings = load_settings()

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("[presence] settings=%s store=%s", settings.__name__, getattr(settings, "STORE_BACKEND", "memory"))

    container = build_container(store=_build_store(settings), locale=getattr(settings, "LOCALE", "ar"))

    # Seeds the default admin only when no users are stored yet.
    container.user_service.ensure_bootstrapped(
        email=getattr(settings, "DEFAULT_ADMIN_EMAIL"),
        password=getattr(settings, "DEFAULT_ADMIN_PASSWORD"),
    )

    return container, PresenceActions(container)
