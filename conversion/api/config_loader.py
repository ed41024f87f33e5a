"""Startup configuration for the conversion API server.

Values come from three layers, later ones winning:

- a JSON file (``config/server.json`` by default, see ``config/server.example.json``)
- ``PREVIEW_CONVERSION_*`` environment variables (``.env`` is loaded first)
- command-line flags applied by ``main``

Nothing here is ever written back to disk.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import pendulum

from ..dates import DEFAULT_LOCALE, normalize_locale

logger = logging.getLogger(__name__)

ENV_PREFIX = "PREVIEW_CONVERSION_"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


@dataclass
class ServerSettings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


@dataclass
class DisplaySettings:
    locale: str = DEFAULT_LOCALE
    timezone: str | None = None


@dataclass
class AppConfig:
    server: ServerSettings = field(default_factory=ServerSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppConfig":
        server_data = data.get("server", {})
        if not isinstance(server_data, dict):
            server_data = {}
        display_data = data.get("display", {})
        if not isinstance(display_data, dict):
            display_data = {}

        return cls(
            server=ServerSettings(
                host=_sanitize_host(server_data.get("host")),
                port=_sanitize_port(server_data.get("port")),
            ),
            display=DisplaySettings(
                locale=normalize_locale(display_data.get("locale")),
                timezone=_sanitize_timezone(display_data.get("timezone")),
            ),
        )


def _sanitize_host(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_HOST


def _sanitize_port(value: Any) -> int:
    if value is None:
        return DEFAULT_PORT
    try:
        port = int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid port %r; using %d", value, DEFAULT_PORT)
        return DEFAULT_PORT
    if not 0 < port < 65536:
        logger.warning("Port %d out of range; using %d", port, DEFAULT_PORT)
        return DEFAULT_PORT
    return port


def _sanitize_timezone(value: Any) -> str | None:
    if value is None:
        return None
    name = str(value).strip()
    if not name or name.lower() == "local":
        return None
    try:
        pendulum.timezone(name)
    except Exception:
        logger.warning("Unknown timezone %r; falling back to the local zone", name)
        return None
    return name


def apply_env_overrides(
    config: AppConfig, environ: Mapping[str, str] | None = None
) -> AppConfig:
    env = os.environ if environ is None else environ
    host = env.get(f"{ENV_PREFIX}HOST")
    if host:
        config.server.host = _sanitize_host(host)
    port = env.get(f"{ENV_PREFIX}PORT")
    if port:
        config.server.port = _sanitize_port(port)
    locale = env.get(f"{ENV_PREFIX}LOCALE")
    if locale:
        config.display.locale = normalize_locale(locale)
    timezone = env.get(f"{ENV_PREFIX}TIMEZONE")
    if timezone:
        config.display.timezone = _sanitize_timezone(timezone)
    return config


def load_config(
    path: str | Path | None, environ: Mapping[str, str] | None = None
) -> AppConfig:
    """Load configuration from ``path`` (defaults when None) plus the environment.

    Raises:
        FileNotFoundError: ``path`` was given but does not exist.
        ValueError: the file is not a JSON object.
    """
    if path is None:
        config = AppConfig()
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(config_path)
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {config_path}")
        config = AppConfig.from_dict(data)
        logger.info("Loaded configuration from %s", config_path)
    return apply_env_overrides(config, environ)


__all__ = [
    "AppConfig",
    "DisplaySettings",
    "ServerSettings",
    "apply_env_overrides",
    "load_config",
]
