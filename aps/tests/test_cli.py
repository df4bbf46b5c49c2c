"""Tests for CLI"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from aps.cli import main as cli_main
from aps.core.config import Config, ConfigError

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class RecordingDispatcher:
    """Replaces Dispatcher in main()."""

    instances = []

    def __init__(self, config, runner=None):
        self.config = config
        self.tokens = None
        RecordingDispatcher.instances.append(self)

    def dispatch(self, tokens):
        self.tokens = list(tokens)
        return 7


@pytest.fixture(autouse=True)
def isolated(monkeypatch):
    RecordingDispatcher.instances = []
    monkeypatch.delenv('APS_VERBOSE', raising=False)
    monkeypatch.setattr(cli_main, 'load_config', lambda: Config(apt='/fake/apt'))
    monkeypatch.setattr(cli_main, 'Dispatcher', RecordingDispatcher)


class TestMain:
    """Tests for the entry point."""

    def test_forwards_argv_untouched(self):
        assert cli_main.main(['--version']) == 7
        dispatcher = RecordingDispatcher.instances[0]
        assert dispatcher.tokens == ['--version']
        assert dispatcher.config.apt == '/fake/apt'

    def test_defaults_to_sys_argv(self, monkeypatch):
        monkeypatch.setattr('sys.argv', ['aps', 'in', 'curl'])
        cli_main.main()
        assert RecordingDispatcher.instances[0].tokens == ['in', 'curl']

    def test_config_error(self, monkeypatch, capsys):
        def bad_config():
            raise ConfigError("/etc/aps/config.yaml: unknown setting(s): foo")

        monkeypatch.setattr(cli_main, 'load_config', bad_config)
        assert cli_main.main(['up']) == 1
        assert 'Error: /etc/aps/config.yaml' in capsys.readouterr().err
        assert RecordingDispatcher.instances == []

    def test_keyboard_interrupt(self, monkeypatch):
        def interrupted(self, tokens):
            raise KeyboardInterrupt

        monkeypatch.setattr(RecordingDispatcher, 'dispatch', interrupted)
        assert cli_main.main(['up']) == 130


class TestVerbose:

    @pytest.mark.parametrize('value,expected', [
        ('', False), ('0', False), ('1', True), ('yes', True),
    ])
    def test_verbose_flag(self, value, expected):
        assert cli_main._verbose_requested({'APS_VERBOSE': value}) is expected

    def test_unset(self):
        assert cli_main._verbose_requested({}) is False


class TestOutputOrder:
    """Output of aps and of its children share stdout."""

    def test_notices_precede_child_output_when_piped(self, tmp_path):
        fake_apt = tmp_path / 'apt'
        fake_apt.write_text('#!/bin/sh\necho "APT $*"\n')
        fake_apt.chmod(0o755)

        env = {k: v for k, v in os.environ.items()
               if k != 'PYTHONUNBUFFERED' and not k.startswith('APS_')}
        env.update({
            'APS_APT': str(fake_apt),
            'APS_ELEVATE': '',
            'APS_CONFIG': str(tmp_path / 'absent.yaml'),
            'PYTHONPATH': os.pathsep.join(
                p for p in (str(PROJECT_ROOT), env.get('PYTHONPATH')) if p),
        })

        result = subprocess.run(
            [sys.executable, '-m', 'aps', 'full-upgrade', '-y'],
            stdout=subprocess.PIPE, env=env, text=True,
        )

        lines = result.stdout.splitlines()
        assert result.returncode == 0
        assert len(lines) == 4
        assert lines[0].startswith('Note:')
        assert 'soft-upgrade' in lines[1]
        assert lines[2:] == ['APT update', 'APT full-upgrade -y']
