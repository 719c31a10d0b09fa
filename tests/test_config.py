"""
Tests for environment configuration
"""

import os
from unittest.mock import patch

import pytest

from liveosc.config import (
    DEFAULT_LIVE_PORT, DEFAULT_PORT, LiveOSCConfig, apply_env_file, load_env_file,
)


class TestFromEnv:

    def test_defaults(self):
        config = LiveOSCConfig.from_env({})
        assert config.host == '127.0.0.1'
        assert config.port == DEFAULT_PORT == 9006
        assert config.live_port == DEFAULT_LIVE_PORT == 9005
        assert config.wait_time == 1.0
        assert config.verbose is False

    def test_overrides(self):
        config = LiveOSCConfig.from_env({
            'LIVEOSC_HOST': '0.0.0.0',
            'LIVEOSC_PORT': '9106',
            'LIVEOSC_LIVE_HOST': '10.0.0.5',
            'LIVEOSC_LIVE_PORT': '9105',
            'LIVEOSC_WAIT_TIME': '2.5',
            'LIVEOSC_VERBOSE': 'yes',
        })
        assert config == LiveOSCConfig('0.0.0.0', 9106, '10.0.0.5', 9105, 2.5, True)

    def test_bad_port_names_variable(self):
        with pytest.raises(ValueError, match='LIVEOSC_PORT'):
            LiveOSCConfig.from_env({'LIVEOSC_PORT': 'nine'})

    def test_port_out_of_range(self):
        with pytest.raises(ValueError, match='LIVEOSC_LIVE_PORT'):
            LiveOSCConfig.from_env({'LIVEOSC_LIVE_PORT': '70000'})

    def test_negative_wait_time(self):
        with pytest.raises(ValueError, match='LIVEOSC_WAIT_TIME'):
            LiveOSCConfig.from_env({'LIVEOSC_WAIT_TIME': '-1'})

    def test_reads_os_environ_by_default(self):
        with patch.dict(os.environ, {'LIVEOSC_PORT': '9999'}):
            assert LiveOSCConfig.from_env().port == 9999


class TestEnvFile:

    def test_load_env_file(self, tmp_path):
        env_file = tmp_path / '.env.liveosc'
        env_file.write_text(
            "# LiveOSC settings\n"
            "\n"
            "LIVEOSC_LIVE_HOST=10.0.0.5  # studio machine\n"
            "LIVEOSC_VERBOSE = 1\n"
            "not a setting\n"
        )
        assert load_env_file(str(env_file)) == {
            'LIVEOSC_LIVE_HOST': '10.0.0.5',
            'LIVEOSC_VERBOSE': '1',
        }

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv('HOME', str(tmp_path))
        assert load_env_file('.does-not-exist') == {}

    def test_apply_does_not_override(self, tmp_path):
        env_file = tmp_path / '.env.liveosc'
        env_file.write_text("LIVEOSC_HOST=1.2.3.4\nLIVEOSC_LIVE_HOST=5.6.7.8\n")

        with patch.dict(os.environ, {'LIVEOSC_HOST': '9.9.9.9'}, clear=False):
            os.environ.pop('LIVEOSC_LIVE_HOST', None)
            apply_env_file(str(env_file))
            assert os.environ['LIVEOSC_HOST'] == '9.9.9.9'
            assert os.environ['LIVEOSC_LIVE_HOST'] == '5.6.7.8'
