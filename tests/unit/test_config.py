"""Tests for configuration loading."""

import pytest

from satoken.config import load_config
from satoken.constants import DEFAULT_INTROSPECT_ENDPOINT, DEFAULT_TOKEN_ENDPOINT
from satoken.errors import ConfigError


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
endpoints:
  token: https://idp.example/token
http:
  timeout: 2.5
log_level: debug
"""
    )
    monkeypatch.setenv("SATOKEN_CONFIG", str(config_path))

    config = load_config()
    assert config.endpoints.token == "https://idp.example/token"
    assert config.endpoints.introspect == DEFAULT_INTROSPECT_ENDPOINT
    assert config.http.timeout == 2.5
    assert config.log_level == "DEBUG"


def test_missing_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("SATOKEN_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)

    config = load_config()
    assert config.endpoints.token == DEFAULT_TOKEN_ENDPOINT
    assert config.http.timeout is None
    assert config.log_level == "WARNING"


def test_env_overrides_file(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("endpoints:\n  token: https://from-file/token\n")
    monkeypatch.setenv("SATOKEN_TOKEN_ENDPOINT", "https://from-env/token")
    monkeypatch.setenv("SATOKEN_INTROSPECT_ENDPOINT", "https://from-env/info")
    monkeypatch.setenv("SATOKEN_TIMEOUT", "7")

    config = load_config(str(config_path))
    assert config.endpoints.token == "https://from-env/token"
    assert config.endpoints.introspect == "https://from-env/info"
    assert config.http.timeout == 7.0


def test_env_override_does_not_leak_into_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SATOKEN_TOKEN_ENDPOINT", "https://from-env/token")
    load_config()
    monkeypatch.delenv("SATOKEN_TOKEN_ENDPOINT")

    assert load_config().endpoints.token == DEFAULT_TOKEN_ENDPOINT


def test_invalid_yaml_raises_config_error(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("endpoints: [unclosed\n")

    with pytest.raises(ConfigError):
        load_config(str(config_path))


def test_invalid_value_raises_config_error(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("log_level: LOUD\n")

    with pytest.raises(ConfigError):
        load_config(str(config_path))


def test_bad_timeout_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SATOKEN_TIMEOUT", "soon")

    with pytest.raises(ConfigError):
        load_config()
