# chatreader/data/loaders.py
"""
Locating backup files on disk and loading their chat records.
"""

import re
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from loguru import logger

from .config import DEFAULT_KEY_PATTERNS, ReaderConfig
from .store import BackupStore


DATE_IN_NAME_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}')


def find_backup_files(backup_dir: Union[str, Path],
                      pattern: Union[str, 're.Pattern[str]'] = r'vscdb.*backup') -> List[Path]:
    """
    List backup files in a directory whose names match the backup pattern.

    Args:
        backup_dir: Directory holding the backups
        pattern: Regex searched in each file name (case-insensitive when given as str)

    Returns:
        Matching file paths sorted by name; empty if the directory is missing
    """
    directory = Path(backup_dir)
    if not directory.is_dir():
        logger.warning(f"Backup directory not found: {directory}")
        return []

    if isinstance(pattern, str):
        pattern = re.compile(pattern, re.IGNORECASE)

    return sorted(
        path for path in directory.iterdir()
        if path.is_file() and pattern.search(path.name)
    )


def backup_date_from_name(filename: str) -> Optional[date]:
    """Date embedded in a backup file name as YYYY-MM-DD, if any."""
    match = DATE_IN_NAME_PATTERN.search(filename)
    if not match:
        return None
    try:
        return datetime.strptime(match.group(0), '%Y-%m-%d').date()
    except ValueError:
        return None


def load_records(backup_path: Union[str, Path],
                 key_patterns: Iterable[str] = DEFAULT_KEY_PATTERNS) -> List[Tuple[str, str]]:
    """Read the (key, value) chat records of one backup."""
    logger.info(f"Loading chat records from {Path(backup_path).name}")
    with BackupStore(backup_path) as store:
        return store.fetch_items(key_patterns)


class BackupLoader:
    """Discovers backups for a configuration and loads their records."""

    def __init__(self, config: ReaderConfig):
        self.config = config

    def discover(self) -> List[Dict[str, Any]]:
        """Describe every backup found: path, embedded date and record count."""
        discoveries = []
        for path in self.find():
            info = {
                'path': path,
                'backup_date': backup_date_from_name(path.name),
                'records_count': None,
            }
            try:
                info['records_count'] = len(self.load(path))
            except sqlite3.Error as e:
                logger.error(f"Could not read {path.name}: {e}")
                info['error'] = str(e)
            discoveries.append(info)
        logger.info(f"Discovered {len(discoveries)} backup files")
        return discoveries

    def find(self) -> List[Path]:
        return find_backup_files(self.config.backup_path, self.config.backup_regex)

    def load(self, backup_path: Union[str, Path]) -> List[Tuple[str, str]]:
        return load_records(backup_path, self.config.key_patterns)
