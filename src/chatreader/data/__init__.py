"""
Configuration, backup discovery and key-value store access.
"""

from .config import AnalysisConfig, ReaderConfig, get_default_config, slugify, format_date
from .loaders import BackupLoader, find_backup_files, load_records
from .store import BackupStore

__all__ = [
    'AnalysisConfig',
    'ReaderConfig',
    'get_default_config',
    'slugify',
    'format_date',
    'BackupLoader',
    'find_backup_files',
    'load_records',
    'BackupStore',
]
