"""Runtime settings read from the environment.

Values are read at call time so tests and CLI options can override them.
"""

from __future__ import annotations

import os
from pathlib import Path

STATE_DIR_ENV = "PARAMSET_STATE_DIR"
API_TOKEN_ENV = "PARAMSET_API_TOKEN"
HOST_ENV = "PARAMSET_HOST"
PORT_ENV = "PARAMSET_PORT"
LOG_LEVEL_ENV = "PARAMSET_LOG_LEVEL"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"


def state_dir() -> Path:
    """Return the host store root, honoring env overrides."""
    explicit = os.getenv(STATE_DIR_ENV)
    if explicit:
        return Path(explicit)
    xdg = os.getenv("XDG_STATE_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "state"
    return base / "paramset"


def api_token() -> str | None:
    """Return the bearer token guarding the HTTP API, if configured."""
    token = os.getenv(API_TOKEN_ENV, "").strip()
    return token or None


def server_host() -> str:
    return os.getenv(HOST_ENV) or DEFAULT_HOST


def server_port() -> int:
    """Return the HTTP port; invalid values fall back to the default."""
    raw = os.getenv(PORT_ENV)
    if raw is None:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        return DEFAULT_PORT
    return port if 0 < port < 65536 else DEFAULT_PORT


_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def log_level() -> str:
    """Return the log level name; unknown names fall back to the default."""
    level = (os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
    return level if level in _LOG_LEVELS else DEFAULT_LOG_LEVEL
