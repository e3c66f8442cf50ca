# chatreader/data/config.py
"""
Configuration for backup locations, analysis parameters and note formatting.
"""

import os
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple, Union

from .stop_words import COMMON_STOP_WORDS, TECHNICAL_STOP_WORDS


DEFAULT_KEY_PATTERNS = ('chat', 'conversation', 'history')


@dataclass
class AnalysisConfig:
    """Parameters consumed by the analyzers and the renderer."""

    # conversations shorter than this (in characters) are not saved
    min_text_length: int = 100
    max_terms: int = 10
    common_stop_words: List[str] = field(default_factory=lambda: list(COMMON_STOP_WORDS))
    technical_stop_words: List[str] = field(default_factory=lambda: list(TECHNICAL_STOP_WORDS))

    @property
    def stop_words(self) -> FrozenSet[str]:
        """Both stop word lists merged and lower-cased."""
        return frozenset(
            word.lower() for word in self.common_stop_words + self.technical_stop_words
        )


@dataclass
class ReaderConfig:
    """Where backups are found and where notes are written."""

    backup_dir: str = './backup'
    target_dir: str = './chatReader'
    backup_pattern: str = r'vscdb.*backup'
    key_patterns: Tuple[str, ...] = DEFAULT_KEY_PATTERNS
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)

    @property
    def backup_path(self) -> Path:
        return Path(self.backup_dir)

    @property
    def target_path(self) -> Path:
        return Path(self.target_dir)

    @property
    def backup_regex(self) -> 're.Pattern[str]':
        return re.compile(self.backup_pattern, re.IGNORECASE)


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def get_default_config() -> ReaderConfig:
    """Get the default configuration, with environment overrides."""
    analysis = AnalysisConfig(
        min_text_length=_int_from_env('CHATREADER_MIN_TEXT_LENGTH', 100),
        max_terms=_int_from_env('CHATREADER_MAX_TERMS', 10),
    )
    return ReaderConfig(
        backup_dir=os.getenv('CHATREADER_BACKUP_DIR', './backup'),
        target_dir=os.getenv('CHATREADER_TARGET_DIR', './chatReader'),
        analysis=analysis,
    )


def slugify(title: str) -> str:
    """Turn a conversation title into a lowercase, hyphen-delimited filename stem."""
    slug = re.sub(r'[^a-z0-9]', '-', title, flags=re.IGNORECASE).lower()
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')


def format_date(value: Union[date, datetime, None]) -> Optional[str]:
    """Format a date as YYYY-MM-DD; aware datetimes use their UTC calendar date."""
    if value is None:
        return None
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime('%Y-%m-%d')
