"""Client configuration loading and validation."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import voluptuous as vol

from .const import (
    CONF_BASE_URL,
    CONF_REQUEST_TIMEOUT,
    DEFAULT_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ENV_BASE_URL,
    ENV_REQUEST_TIMEOUT,
)
from .exceptions import ConfigError

_LOGGER = logging.getLogger(__name__)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_BASE_URL, default=DEFAULT_BASE_URL): vol.All(str, vol.Url()),
        vol.Optional(
            CONF_REQUEST_TIMEOUT, default=DEFAULT_REQUEST_TIMEOUT_SECONDS
        ): vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False)),
    }
)


@dataclass(frozen=True)
class ClientConfig:
    """Settings for ``EventsApiClient``."""

    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS


def load_config(data: Mapping[str, Any]) -> ClientConfig:
    """Validate a settings mapping and build a ``ClientConfig``.

    Missing keys fall back to their defaults.

    Raises:
        ConfigError: If a value is malformed or an unknown key is present.
    """
    try:
        validated = CONFIG_SCHEMA(dict(data))
    except vol.Invalid as err:
        raise ConfigError(f"Invalid configuration: {err}") from err
    return ClientConfig(
        base_url=validated[CONF_BASE_URL].rstrip("/"),
        request_timeout=validated[CONF_REQUEST_TIMEOUT],
    )


def config_from_env(environ: Mapping[str, str] | None = None) -> ClientConfig:
    """Build a ``ClientConfig`` from ``CALENDAR_EVENTS_*`` variables."""
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}
    if env.get(ENV_BASE_URL):
        data[CONF_BASE_URL] = env[ENV_BASE_URL]
    if env.get(ENV_REQUEST_TIMEOUT):
        data[CONF_REQUEST_TIMEOUT] = env[ENV_REQUEST_TIMEOUT]
    config = load_config(data)
    _LOGGER.debug("Loaded configuration from environment: %s", config)
    return config
