"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from calendar_events.config import ClientConfig, config_from_env, load_config
from calendar_events.const import DEFAULT_BASE_URL, DEFAULT_REQUEST_TIMEOUT_SECONDS
from calendar_events.exceptions import ConfigError


class TestLoadConfig:
    def test_defaults(self):
        assert load_config({}) == ClientConfig(
            base_url=DEFAULT_BASE_URL,
            request_timeout=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        )

    def test_values_are_coerced(self):
        config = load_config(
            {"base_url": "https://calendar.example.com/", "request_timeout": "2.5"}
        )
        assert config.base_url == "https://calendar.example.com"
        assert config.request_timeout == 2.5

    @pytest.mark.parametrize(
        "data",
        [
            {"base_url": "not a url"},
            {"request_timeout": 0},
            {"request_timeout": "soon"},
            {"retries": 3},
        ],
    )
    def test_invalid(self, data):
        with pytest.raises(ConfigError):
            load_config(data)


class TestConfigFromEnv:
    def test_reads_variables(self):
        config = config_from_env(
            {
                "CALENDAR_EVENTS_BASE_URL": "http://10.0.0.5:3000",
                "CALENDAR_EVENTS_REQUEST_TIMEOUT": "4",
            }
        )
        assert config == ClientConfig(base_url="http://10.0.0.5:3000", request_timeout=4.0)

    def test_empty_variables_use_defaults(self):
        config = config_from_env({"CALENDAR_EVENTS_BASE_URL": ""})
        assert config.base_url == DEFAULT_BASE_URL

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("CALENDAR_EVENTS_BASE_URL", "http://events.internal")
        monkeypatch.delenv("CALENDAR_EVENTS_REQUEST_TIMEOUT", raising=False)
        assert config_from_env().base_url == "http://events.internal"
