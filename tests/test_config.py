from pathlib import Path

import pytest

from paramset.core import config


def test_state_dir_prefers_explicit_env(monkeypatch, tmp_path):
    monkeypatch.setenv(config.STATE_DIR_ENV, str(tmp_path / "explicit"))

    assert config.state_dir() == tmp_path / "explicit"


def test_state_dir_falls_back_to_xdg(monkeypatch, tmp_path):
    monkeypatch.delenv(config.STATE_DIR_ENV, raising=False)
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))

    assert config.state_dir() == Path(tmp_path) / "paramset"


@pytest.mark.parametrize(("raw", "expected"), [("9000", 9000), ("abc", 8080), ("0", 8080)])
def test_server_port(monkeypatch, raw, expected):
    monkeypatch.setenv(config.PORT_ENV, raw)

    assert config.server_port() == expected


def test_blank_token_is_none(monkeypatch):
    monkeypatch.setenv(config.API_TOKEN_ENV, "   ")

    assert config.api_token() is None


@pytest.mark.parametrize(("raw", "expected"), [("debug", "DEBUG"), ("loud", "INFO")])
def test_log_level(monkeypatch, raw, expected):
    monkeypatch.setenv(config.LOG_LEVEL_ENV, raw)

    assert config.log_level() == expected
