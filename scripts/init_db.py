from __future__ import annotations

import importlib

from dotenv import load_dotenv

from workforce_attendance.database.bootstrap import apply_schema, list_tables
from workforce_attendance.database.connection import DBConfig, DatabaseConnection
from workforce_attendance.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG))

    apply_schema(conn)
    tables = list_tables(conn)
    cfg = conn.config
    print(f"OK: Applied schema.sql -> {cfg.user}@{cfg.host}:{cfg.port}/{cfg.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
