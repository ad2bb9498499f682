# SafePass - Central SQLite Connection Helper
#
# Every SafePass database access goes through `connect()` instead of raw
# `sqlite3.connect()`, so the vault file always gets the same PRAGMAs:
#
#   - busy_timeout so a second interactive session waits instead of
#     failing immediately with SQLITE_BUSY
#   - synchronous=FULL so an acknowledged INSERT/DELETE survives a crash
#
# Connections are short-lived: open, run one statement, commit, close.

import sqlite3
from pathlib import Path
from typing import Union

BUSY_TIMEOUT_MS = 5000


def connect(db_path: Union[str, Path]) -> sqlite3.Connection:
    """Open a SQLite connection to the vault database.

    Args:
        db_path: Path to the database file. The parent directory is
            created if it does not exist yet.

    Returns:
        sqlite3.Connection with busy_timeout, synchronous=FULL and
        sqlite3.Row rows.
    """
    path = Path(db_path)
    if str(path) != ":memory:":
        path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(path))
    conn.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}")
    conn.execute("PRAGMA synchronous=FULL")
    conn.row_factory = sqlite3.Row
    return conn
