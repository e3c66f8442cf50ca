# tests/chatreader/test_data_config.py
"""
Tests for configuration and formatting helpers.
"""

from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

from chatreader.data.config import (
    AnalysisConfig,
    ReaderConfig,
    format_date,
    get_default_config,
    slugify,
)


class TestAnalysisConfig:

    def test_defaults(self):
        config = AnalysisConfig()
        assert config.min_text_length == 100
        assert config.max_terms == 10

    def test_stop_words_are_merged_and_lowercased(self):
        config = AnalysisConfig(common_stop_words=['This', 'that'], technical_stop_words=['Array'])
        assert config.stop_words == frozenset({'this', 'that', 'array'})

    def test_default_stop_words_cover_both_languages(self):
        stop_words = AnalysisConfig().stop_words
        assert 'function' in stop_words
        assert 'callback' in stop_words
        assert 'чтобы' in stop_words


class TestReaderConfig:

    def test_defaults(self):
        config = ReaderConfig()
        assert config.backup_path == Path('./backup')
        assert config.target_path == Path('./chatReader')
        assert config.key_patterns == ('chat', 'conversation', 'history')

    def test_backup_regex_is_case_insensitive(self):
        regex = ReaderConfig().backup_regex
        assert regex.search('state.VSCDB.Backup')
        assert not regex.search('state.vscdb')


class TestDefaultConfig:

    def test_without_environment(self, monkeypatch):
        for name in ('CHATREADER_BACKUP_DIR', 'CHATREADER_TARGET_DIR',
                     'CHATREADER_MIN_TEXT_LENGTH', 'CHATREADER_MAX_TERMS'):
            monkeypatch.delenv(name, raising=False)

        config = get_default_config()

        assert config.backup_dir == './backup'
        assert config.analysis.min_text_length == 100

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv('CHATREADER_BACKUP_DIR', str(tmp_path / 'in'))
        monkeypatch.setenv('CHATREADER_TARGET_DIR', str(tmp_path / 'out'))
        monkeypatch.setenv('CHATREADER_MIN_TEXT_LENGTH', '20')
        monkeypatch.setenv('CHATREADER_MAX_TERMS', '4')

        config = get_default_config()

        assert config.backup_dir == str(tmp_path / 'in')
        assert config.target_dir == str(tmp_path / 'out')
        assert config.analysis.min_text_length == 20
        assert config.analysis.max_terms == 4

    def test_invalid_integer(self, monkeypatch):
        monkeypatch.setenv('CHATREADER_MAX_TERMS', 'ten')
        with pytest.raises(ValueError, match='CHATREADER_MAX_TERMS'):
            get_default_config()


class TestSlugify:

    @pytest.mark.parametrize('title,expected', [
        ('Hello, World!!', 'hello-world'),
        ('--Already__Sluggy--', 'already-sluggy'),
        ('Chat-2024-01-01', 'chat-2024-01-01'),
        ('  spaced   out  ', 'spaced-out'),
        ('Отладка', ''),
        ('', ''),
    ])
    def test_slugify(self, title, expected):
        assert slugify(title) == expected


class TestFormatDate:

    def test_date(self):
        assert format_date(date(2020, 5, 6)) == '2020-05-06'

    def test_aware_datetime_uses_utc_calendar_date(self):
        moment = datetime(2024, 1, 2, 1, 0, tzinfo=timezone(timedelta(hours=5)))
        assert format_date(moment) == '2024-01-01'

    def test_naive_datetime(self):
        assert format_date(datetime(2024, 1, 2, 23, 59)) == '2024-01-02'

    def test_none(self):
        assert format_date(None) is None
