"""
Repository Pattern - proficiency statistics storage.

Each flashcard set gets its own table of per-card statistics keyed by the
card's ordinal id. Backends can be swapped without touching the practice core.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, Optional

from ..config import Config
from ..errors import PersistenceError
from ..utils.helpers import ensure_dir, set_table_name

logger = logging.getLogger(__name__)

StatsRecord = Dict[str, Any]


class ProficiencyStore(ABC):
    """
    Abstract base class for proficiency stores.

    Defines the contract the session controller relies on. Absent records
    are simply missing from ``load_all``; callers fill in defaults.
    """

    @abstractmethod
    def load_all(self, set_key: str) -> Dict[int, StatsRecord]:
        """
        Load all stored statistics for a set.

        Returns:
            Mapping of card id to {certainty, time_to_answer, last_seen}

        Raises:
            PersistenceError: if the backend cannot be read
        """
        pass

    @abstractmethod
    def save(
        self,
        set_key: str,
        card_id: int,
        certainty: float,
        time_to_answer: float,
        last_seen: int,
    ) -> bool:
        """Insert or replace one card's statistics. Returns True if successful."""
        pass


class InMemoryProficiencyStore(ProficiencyStore):
    """Dict-backed store. Nothing survives the process."""

    def __init__(self):
        self._tables: Dict[str, Dict[int, StatsRecord]] = {}

    def load_all(self, set_key: str) -> Dict[int, StatsRecord]:
        table = self._tables.get(set_key, {})
        return {card_id: dict(record) for card_id, record in table.items()}

    def save(
        self,
        set_key: str,
        card_id: int,
        certainty: float,
        time_to_answer: float,
        last_seen: int,
    ) -> bool:
        self._tables.setdefault(set_key, {})[card_id] = {
            "certainty": certainty,
            "time_to_answer": time_to_answer,
            "last_seen": last_seen,
        }
        return True


class SQLiteProficiencyStore(ProficiencyStore):
    """
    SQLite-based proficiency store.

    Provides:
    - One table per set, created on first use
    - Upsert semantics on save (replace on conflict)
    - Failure reporting without corrupting stored rows
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize SQLite store.

        Args:
            db_path: Path to SQLite database file (Config.DB_PATH by default)
        """
        self.db_path = Path(db_path or Config.DB_PATH)
        self._known_tables: set = set()
        ensure_dir(str(self.db_path.parent))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get database connection with context manager."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _ensure_table(self, conn: sqlite3.Connection, set_key: str) -> str:
        """Create the set's table if needed and return its name."""
        table = set_table_name(set_key)
        if table in self._known_tables:
            return table

        conn.execute(f"""
            CREATE TABLE IF NOT EXISTS "{table}" (
                id INTEGER NOT NULL PRIMARY KEY,
                certainty REAL DEFAULT 0 NOT NULL,
                time_to_answer REAL DEFAULT 10 NOT NULL,
                last_seen INTEGER DEFAULT 0 NOT NULL
            )
        """)
        conn.commit()
        self._known_tables.add(table)
        return table

    def load_all(self, set_key: str) -> Dict[int, StatsRecord]:
        """Load every stored row of the set's table."""
        try:
            with self._get_connection() as conn:
                table = self._ensure_table(conn, set_key)
                rows = conn.execute(
                    f'SELECT id, certainty, time_to_answer, last_seen FROM "{table}" ORDER BY id'
                ).fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not load statistics for '{set_key}': {e}") from e

        return {
            row["id"]: {
                "certainty": row["certainty"],
                "time_to_answer": row["time_to_answer"],
                "last_seen": row["last_seen"],
            }
            for row in rows
        }

    def save(
        self,
        set_key: str,
        card_id: int,
        certainty: float,
        time_to_answer: float,
        last_seen: int,
    ) -> bool:
        """Upsert one card's statistics."""
        try:
            with self._get_connection() as conn:
                table = self._ensure_table(conn, set_key)
                conn.execute(
                    f'INSERT OR REPLACE INTO "{table}" (id, certainty, time_to_answer, last_seen) '
                    "VALUES (?, ?, ?, ?)",
                    (card_id, certainty, time_to_answer, last_seen),
                )
                conn.commit()
                return True
        except sqlite3.Error as e:
            logger.error("Error saving card %s of '%s': %s", card_id, set_key, e)
            return False

    def count(self, set_key: str) -> int:
        """Number of stored records for a set."""
        try:
            with self._get_connection() as conn:
                table = self._ensure_table(conn, set_key)
                return conn.execute(f'SELECT COUNT(*) FROM "{table}"').fetchone()[0]
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not count records for '{set_key}': {e}") from e
