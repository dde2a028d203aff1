from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "presence"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import load_settings

from presence.container import build_container
from presence.database.bootstrap import apply_schema, list_tables
from presence.database.connection import DatabaseConnection, DBConfig
from presence.storage.mysql_store import MySQLKeyValueStore


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    db_config = dict(settings.DB_CONFIG)

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    apply_schema(conn)
    tables = list_tables(conn)

    container = build_container(store=MySQLKeyValueStore(conn), locale=getattr(settings, "LOCALE", "ar"))
    created = container.user_service.ensure_bootstrapped(
        email=settings.DEFAULT_ADMIN_EMAIL,
        password=settings.DEFAULT_ADMIN_PASSWORD,
    )

    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)}, admin_created={created})"
    )


if __name__ == "__main__":
    main()
