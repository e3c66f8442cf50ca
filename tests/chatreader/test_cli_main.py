# tests/chatreader/test_cli_main.py
"""
Tests for the command-line interface.
"""

import json

import pytest
from loguru import logger

from chatreader.cli.console import console_main
from chatreader.cli.main import build_config, create_cli_parser, main


ENV_NAMES = ('CHATREADER_BACKUP_DIR', 'CHATREADER_TARGET_DIR',
             'CHATREADER_MIN_TEXT_LENGTH', 'CHATREADER_MAX_TERMS')


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    yield
    # main() installs its own stderr handler
    logger.remove()


@pytest.fixture
def chat_backup(make_backup):
    value = {
        'tabs': [{
            'chatTitle': 'Git rebase help',
            'bubbles': [
                {'type': 'user', 'text': 'How do I rebase my feature branch onto main with git?', 'id': 'b1'},
                {'type': 'ai', 'text': 'Run git fetch, then git rebase origin/main from the feature branch.', 'id': 'b2'},
            ]
        }]
    }
    return make_backup('state.vscdb.backup', [('aichat.chatdata', json.dumps(value))])


class TestParser:

    def test_process_arguments(self):
        args = create_cli_parser().parse_args([
            'process', '--backup-dir', 'in', '--target-dir', 'out',
            '--min-text-length', '10', '--max-terms', '3', '--no-notes',
        ])
        assert args.command == 'process'
        assert args.backup_dir == 'in'
        assert args.target_dir == 'out'
        assert args.min_text_length == 10
        assert args.max_terms == 3
        assert args.no_notes is True

    def test_verbose_flag(self):
        args = create_cli_parser().parse_args(['-v', 'discover'])
        assert args.verbose is True
        assert args.command == 'discover'


class TestBuildConfig:

    def test_overrides(self, tmp_path):
        config = build_config(backup_dir=str(tmp_path), min_text_length=5, max_terms=2)

        assert config.backup_dir == str(tmp_path)
        assert config.target_dir == './chatReader'
        assert config.analysis.min_text_length == 5
        assert config.analysis.max_terms == 2

    def test_no_overrides_keeps_defaults(self):
        config = build_config()
        assert config.analysis.min_text_length == 100
        assert config.analysis.max_terms == 10


class TestMain:

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_setup_creates_directories(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv('CHATREADER_BACKUP_DIR', str(tmp_path / 'in'))
        monkeypatch.setenv('CHATREADER_TARGET_DIR', str(tmp_path / 'out'))

        assert main(['setup']) == 0
        assert (tmp_path / 'in').is_dir()
        assert (tmp_path / 'out').is_dir()

    def test_discover_without_backups(self, tmp_path, capsys):
        assert main(['discover', '--backup-dir', str(tmp_path)]) == 1
        assert 'No backup files found' in capsys.readouterr().out

    def test_discover_lists_backups(self, chat_backup, capsys):
        assert main(['discover', '--backup-dir', str(chat_backup.parent)]) == 0
        out = capsys.readouterr().out
        assert 'state.vscdb.backup' in out
        assert 'Chat records: 1' in out

    def test_process_writes_notes(self, chat_backup, tmp_path, capsys):
        target = tmp_path / 'notes'

        code = main([
            'process',
            '--backup-dir', str(chat_backup.parent),
            '--target-dir', str(target),
            '--min-text-length', '20',
        ])

        assert code == 0
        assert (target / 'git-rebase-help.md').exists()
        assert 'Generated 1 notes' in capsys.readouterr().out

    def test_process_without_notes(self, chat_backup, tmp_path, capsys):
        target = tmp_path / 'notes'

        code = main([
            'process', '--no-notes',
            '--backup-dir', str(chat_backup.parent),
            '--target-dir', str(target),
        ])

        assert code == 0
        assert list(target.iterdir()) == []

    def test_process_without_backups(self, tmp_path, capsys):
        code = main([
            'process',
            '--backup-dir', str(tmp_path / 'empty'),
            '--target-dir', str(tmp_path / 'notes'),
        ])
        assert code == 1

    def test_invalid_environment_value(self, monkeypatch, capsys):
        monkeypatch.setenv('CHATREADER_MIN_TEXT_LENGTH', 'lots')
        assert main(['discover']) == 1
        assert 'CHATREADER_MIN_TEXT_LENGTH' in capsys.readouterr().out


def test_console_main_exits_with_status(capsys):
    with pytest.raises(SystemExit) as exc_info:
        console_main([])
    assert exc_info.value.code == 1
