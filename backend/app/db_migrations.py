from __future__ import annotations

from sqlalchemy import Engine

# create_all() never alters a table that already exists, so a SQLite file created
# before one of these columns was declared on the models gets it added here.
# Indexes stay on the models' __table_args__.
_TABLE_COLUMNS: dict[str, list[tuple[str, str]]] = {
    "assessments": [
        ("completed_at", "DATETIME NULL"),
    ],
    "assessment_results": [
        ("ai_explanations", "TEXT NOT NULL DEFAULT '{}'"),
        ("explanation_status", "TEXT NOT NULL DEFAULT 'fallback'"),
        ("explanation_error", "TEXT NULL"),
    ],
}


def run_db_migrations(engine: Engine) -> None:
    if engine.dialect.name != "sqlite":
        return

    with engine.begin() as conn:
        for table_name, columns in _TABLE_COLUMNS.items():
            if not _table_exists(conn, table_name):
                continue

            existing_columns = _existing_columns(conn, table_name)
            for column_name, ddl in columns:
                if column_name in existing_columns:
                    continue
                conn.exec_driver_sql(f"ALTER TABLE {table_name} ADD COLUMN {column_name} {ddl}")
                existing_columns.add(column_name)


def _table_exists(conn, table_name: str) -> bool:
    row = conn.exec_driver_sql(
        "SELECT name FROM sqlite_master WHERE type='table' AND name = ?",
        (table_name,),
    ).first()
    return bool(row)


def _existing_columns(conn, table_name: str) -> set[str]:
    rows = conn.exec_driver_sql(f"PRAGMA table_info({table_name})").all()
    return {str(row[1]) for row in rows}
