"""Database connection and schema management."""

from pathlib import Path

import duckdb

from tatedig.schema import (
    CREATE_ARTISTS,
    CREATE_ARTWORKS,
    CREATE_INDEXES,
    CREATE_MACROS,
    DERIVED_COLUMNS,
)

DEFAULT_DB_PATH = Path("output/tate.duckdb")


def _existing_columns(conn: duckdb.DuckDBPyConnection, table: str) -> set[str]:
    rows = conn.execute(
        "SELECT column_name FROM information_schema.columns WHERE table_name = ?",
        [table],
    ).fetchall()
    return {row[0] for row in rows}


def ensure_derived_columns(conn: duckdb.DuckDBPyConnection) -> list[str]:
    """Add any missing derived columns. Existing columns and data are left alone.

    Returns the names of the columns that were added.
    """
    added = []
    for table, columns in DERIVED_COLUMNS.items():
        existing = _existing_columns(conn, table)
        for col in columns:
            if col.name in existing:
                continue
            conn.execute(f"ALTER TABLE {table} ADD COLUMN {col.name} {col.sql_type}")
            added.append(col.name)
    return added


def ensure_schema(conn: duckdb.DuckDBPyConnection):
    conn.execute(CREATE_ARTWORKS)
    conn.execute(CREATE_ARTISTS)
    ensure_derived_columns(conn)
    for stmt in CREATE_MACROS:
        conn.execute(stmt)
    for stmt in CREATE_INDEXES:
        conn.execute(stmt)


class TateDB:
    """Manages DuckDB connection and schema for the Tate collection."""

    def __init__(self, path: Path = DEFAULT_DB_PATH):
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = duckdb.connect(str(self.path))
        ensure_schema(self.conn)

    def close(self):
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
