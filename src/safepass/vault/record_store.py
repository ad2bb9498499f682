# SafePass - Record Store
#
# Plain data access for the `services` table. No cryptography here:
# the password column only ever receives tokens from the vault manager.
# Every statement uses bound parameters, user-supplied search terms
# included.

import logging
import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Iterator, List, Union

from ..core.db import connect as db_connect
from .exceptions import StorageError
from .models import Record

logger = logging.getLogger(__name__)

TABLE = "services"


class RecordStore:
    """SQLite-backed table of encrypted service records.

    Args:
        db_path: Path to the SQLite file. Created on first use.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self.ensure_table()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection, committing on success and always closing it.

        Any sqlite3 error, and any OS error while preparing the database
        directory, is re-raised as StorageError with the original chained
        as __cause__.
        """
        try:
            with closing(db_connect(self.db_path)) as conn:
                with conn:
                    yield conn
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Storage error on {self.db_path}: {e}")
            raise StorageError(f"Database error: {e}") from e

    def ensure_table(self) -> None:
        """Create the services table if it does not exist yet."""
        with self._connect() as conn:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {TABLE} (
                    id INTEGER PRIMARY KEY,
                    name TEXT NOT NULL,
                    password TEXT NOT NULL,
                    username TEXT NOT NULL
                )
            """)

    @staticmethod
    def _to_record(row: sqlite3.Row) -> Record:
        return Record(
            id=row["id"],
            name=row["name"],
            username=row["username"],
            password=row["password"],
        )

    def insert(self, record: Record) -> int:
        """Append one row. Duplicates are allowed. Returns the new row id."""
        with self._connect() as conn:
            cur = conn.execute(
                f"INSERT INTO {TABLE} (name, password, username) VALUES (?, ?, ?)",
                (record.name, record.password, record.username),
            )
            return cur.lastrowid

    def all(self) -> List[Record]:
        """Return every record, in whatever order SQLite yields them."""
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT id, name, password, username FROM {TABLE}"
            ).fetchall()
        return [self._to_record(row) for row in rows]

    def search(self, substring: str) -> List[Record]:
        """Return records whose name contains ``substring`` (case-sensitive).

        instr() compares literally, so % and _ in the term are not
        wildcards the way they would be with LIKE.
        """
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT id, name, password, username FROM {TABLE} WHERE instr(name, ?) > 0",
                (substring,),
            ).fetchall()
        return [self._to_record(row) for row in rows]

    def delete_by_identity(self, name: str, username: str) -> int:
        """Delete every row matching (name, username). Returns rows removed."""
        with self._connect() as conn:
            cur = conn.execute(
                f"DELETE FROM {TABLE} WHERE name = ? AND username = ?",
                (name, username),
            )
            return cur.rowcount

    def delete_all(self) -> int:
        """Delete every row. Returns rows removed."""
        with self._connect() as conn:
            removed = conn.execute(f"SELECT COUNT(*) FROM {TABLE}").fetchone()[0]
            conn.execute(f"DELETE FROM {TABLE}")
            return removed

    def count(self) -> int:
        with self._connect() as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {TABLE}").fetchone()[0]
