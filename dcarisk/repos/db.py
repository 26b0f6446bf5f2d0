"""SQLite storage for saved strategy parameters.

``init_db`` creates the ``saved_params`` table from the migration script
when it is missing; repos open short-lived connections via
``get_connection``.
"""

import pathlib
import sqlite3


_MIGRATION_DIR = pathlib.Path(__file__).resolve().parent.parent.parent / "db" / "migrations"
_SCHEMA_FILE = "001_initial_schema.sql"


def _has_table(conn: sqlite3.Connection, name: str) -> bool:
    row = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?", (name,),
    ).fetchone()
    return row is not None


def init_db(db_path: str) -> None:
    """Prepare *db_path* for ``ParamsRepo``.

    Safe to call on every start; an existing ``saved_params`` table is left
    untouched.  The parent directory of a file database is created first.

    Args:
        db_path: SQLite file path, or ``":memory:"``.
    """
    if db_path != ":memory:":
        pathlib.Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        if not _has_table(conn, "saved_params"):
            conn.executescript(
                (_MIGRATION_DIR / _SCHEMA_FILE).read_text(encoding="utf-8")
            )
    finally:
        conn.close()


def get_connection(db_path: str) -> sqlite3.Connection:
    """Open *db_path* with rows addressable by column name.

    The caller closes it.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn
