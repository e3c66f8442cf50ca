# chatreader/data/store.py
"""
Read-only access to the ItemTable key-value store inside editor state backups.
"""

import sqlite3
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from loguru import logger


ITEM_TABLE = 'ItemTable'


def decode_value(value: Union[str, bytes, None]) -> str:
    """Store values are TEXT or BLOB; both come back as text."""
    if value is None:
        return ''
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8', errors='replace')
    return str(value)


class BackupStore:
    """Opens one backup database read-only and yields matching key/value rows."""

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self.connection: Optional[sqlite3.Connection] = None

    def open(self) -> 'BackupStore':
        if self.connection is None:
            uri = f"{self.db_path.resolve().as_uri()}?mode=ro"
            self.connection = sqlite3.connect(uri, uri=True)
        return self

    def close(self) -> None:
        """Close database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def iter_items(self, key_patterns: Iterable[str]) -> Iterator[Tuple[str, str]]:
        """Yield (key, value) rows whose key contains any of the patterns.

        Matching uses SQL LIKE, which SQLite evaluates case-insensitively for
        ASCII characters.
        """
        patterns = list(key_patterns)
        if not patterns:
            return

        self.open()
        conditions = ' OR '.join('key LIKE ?' for _ in patterns)
        query = f"SELECT key, value FROM {ITEM_TABLE} WHERE {conditions}"
        cursor = self.connection.execute(query, [f"%{pattern}%" for pattern in patterns])

        for key, value in cursor:
            yield str(key), decode_value(value)

    def fetch_items(self, key_patterns: Iterable[str]) -> List[Tuple[str, str]]:
        items = list(self.iter_items(key_patterns))
        logger.debug(f"{self.db_path.name}: {len(items)} matching rows in {ITEM_TABLE}")
        return items
