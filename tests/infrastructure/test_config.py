"""Tests for configuration module."""

import json
import os
import pytest
from unittest.mock import patch

from hearth.domain.value_objects.server_target import ServerTarget
from hearth.domain.value_objects.timings import LifecycleTimings
from hearth.infrastructure.config import (
    HearthConfig,
    MetricsConfig,
    ResultsConfig,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_env():
    env = {k: v for k, v in os.environ.items() if not k.startswith("HEARTH_")}
    with patch.dict(os.environ, env, clear=True):
        yield


class TestDefaultConfig:
    def test_defaults(self):
        config = load_config(path="/nonexistent/hearth.json")
        assert config.log_level == "WARNING"
        assert config.json_logs is False
        assert config.server.tmux_session == "mons"
        assert config.server.ssh_host == ""
        assert config.timing.ready_timeout == 900
        assert config.timing.stop_timeout == 90
        assert config.results.db_path == ""

    def test_all_sections_present(self):
        config = load_config(path="/nonexistent/hearth.json")
        assert isinstance(config, HearthConfig)
        assert isinstance(config.server, ServerTarget)
        assert isinstance(config.timing, LifecycleTimings)
        assert isinstance(config.results, ResultsConfig)
        assert isinstance(config.metrics, MetricsConfig)


class TestFileConfig:
    def test_load_from_file(self, tmp_path):
        config_file = tmp_path / "hearth.json"
        config_file.write_text(json.dumps({
            "log_level": "INFO",
            "server": {
                "ssh_host": "10.0.0.5",
                "tmux_session": "survival",
                "server_dir": "/srv/survival",
                "ssh_port": 2222,
            },
            "timing": {"ready_timeout": 600, "settle": 1.5},
            "results": {"db_path": "/var/lib/hearth/results.db"},
        }))

        config = load_config(path=str(config_file))

        assert config.log_level == "INFO"
        assert config.server.ssh_host == "10.0.0.5"
        assert config.server.tmux_session == "survival"
        assert config.server.ssh_port == 2222
        assert config.timing.ready_timeout == 600
        assert config.timing.settle == 1.5
        assert config.timing.stop_timeout == 90
        assert config.results.db_path == "/var/lib/hearth/results.db"

    def test_unknown_keys_ignored(self, tmp_path):
        config_file = tmp_path / "hearth.json"
        config_file.write_text(json.dumps({"server": {"ssh_host": "h1", "color": "blue"}}))

        config = load_config(path=str(config_file))

        assert config.server.ssh_host == "h1"

    def test_invalid_json_falls_back_to_defaults(self, tmp_path):
        config_file = tmp_path / "hearth.json"
        config_file.write_text("{not json")

        config = load_config(path=str(config_file))

        assert config.server.ssh_host == ""

    def test_invalid_timing_rejected(self, tmp_path):
        config_file = tmp_path / "hearth.json"
        config_file.write_text(json.dumps({"timing": {"stop_interval": 120}}))

        with pytest.raises(ValueError, match="stop_interval"):
            load_config(path=str(config_file))

    def test_retry_window_without_interval_rejected(self, tmp_path):
        config_file = tmp_path / "hearth.json"
        config_file.write_text(json.dumps(
            {"timing": {"status_retry_window": 5, "status_retry_interval": 0}}
        ))

        with pytest.raises(ValueError, match="status_retry_interval"):
            load_config(path=str(config_file))


class TestEnvOverride:
    def test_env_overrides_file(self, tmp_path):
        config_file = tmp_path / "hearth.json"
        config_file.write_text(json.dumps({"server": {"ssh_host": "from-file"}}))

        with patch.dict(os.environ, {
            "HEARTH_SERVER_SSH_HOST": "10.0.0.9",
            "HEARTH_TIMING_READY_TIMEOUT": "300",
            "HEARTH_TIMING_SETTLE": "0.5",
        }):
            config = load_config(path=str(config_file))

        assert config.server.ssh_host == "10.0.0.9"
        assert config.timing.ready_timeout == 300
        assert config.timing.settle == 0.5

    def test_top_level_keys(self):
        with patch.dict(os.environ, {"HEARTH_LOG_LEVEL": "DEBUG", "HEARTH_JSON_LOGS": "true"}):
            config = load_config(path="/nonexistent/hearth.json")

        assert config.log_level == "DEBUG"
        assert config.json_logs is True

    def test_custom_prefix(self):
        with patch.dict(os.environ, {"GAME_SERVER_TMUX_SESSION": "creative"}):
            config = load_config(path="/nonexistent/hearth.json", env_prefix="GAME")

        assert config.server.tmux_session == "creative"
