# tests/chatreader/conftest.py
"""
Shared test fixtures and configuration.
"""
from pathlib import Path
import sys
PATH = str((Path(__file__).parent.parent.parent / 'src').absolute())
if PATH not in sys.path:
    sys.path.append(PATH)

import sqlite3
from datetime import datetime, timezone

import pytest
from loguru import logger

from chatreader.core.message import Message, Role
from chatreader.core.normalizer import SchemaNormalizer
from chatreader.data.config import AnalysisConfig, ReaderConfig


FIXED_NOW = datetime(2024, 5, 6, 12, 0, tzinfo=timezone.utc)
FIXED_NOW_MS = int(FIXED_NOW.timestamp() * 1000)


class UpperStemmer:
    """Predictable stemmer for tests: upper-cases and drops a trailing 's'."""

    def stem(self, token: str) -> str:
        token = token.upper()
        return token[:-1] if token.endswith('S') else token


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def fixed_now_ms():
    return FIXED_NOW_MS


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def upper_stemmer():
    return UpperStemmer()


@pytest.fixture
def normalizer(fixed_clock):
    return SchemaNormalizer(clock=fixed_clock)


@pytest.fixture
def user_message():
    return Message(Role.USER, 'How do I write a Python function?')


@pytest.fixture
def assistant_message():
    return Message(Role.ASSISTANT, 'Use the def keyword:\n```python\ndef f():\n    return 1\n```')


@pytest.fixture
def tabbed_value():
    """Tabbed layout with two chats."""
    return {
        'tabs': [
            {
                'chatTitle': 'Fix flexbox layout',
                'bubbles': [
                    {'type': 'user', 'text': 'My flexbox layout breaks on mobile', 'id': 'b1'},
                    {'type': 'ai', 'text': 'Set flex-wrap on the container', 'id': 'b2'},
                ]
            },
            {
                'bubbles': [
                    {'type': 'user', 'text': 'hello', 'id': 'b3'},
                ]
            },
        ]
    }


@pytest.fixture
def timeline_value():
    """Flat timeline layout with one user and one assistant message."""
    return [
        {'isUser': True, 'text': 'Why does my query return duplicates?', 'timestamp': 1704067200000},
        {'isUser': False, 'text': 'Add DISTINCT to the select list.', 'timestamp': 1704067260000},
    ]


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda msg: messages.append(msg.record['message']), level='DEBUG')
    yield messages
    logger.remove(handler_id)


def create_backup(path: Path, rows) -> Path:
    """Create a state database with an ItemTable holding the given rows."""
    connection = sqlite3.connect(str(path))
    connection.execute('CREATE TABLE ItemTable (key TEXT UNIQUE ON CONFLICT REPLACE, value BLOB)')
    connection.executemany('INSERT INTO ItemTable (key, value) VALUES (?, ?)', rows)
    connection.commit()
    connection.close()
    return path


@pytest.fixture
def make_backup(tmp_path):
    """Factory fixture: make_backup(name, rows) -> path inside tmp_path/backup."""
    backup_dir = tmp_path / 'backup'
    backup_dir.mkdir(exist_ok=True)

    def _make(name, rows):
        return create_backup(backup_dir / name, rows)

    return _make


@pytest.fixture
def reader_config(tmp_path):
    return ReaderConfig(
        backup_dir=str(tmp_path / 'backup'),
        target_dir=str(tmp_path / 'notes'),
        analysis=AnalysisConfig(min_text_length=50, max_terms=5),
    )