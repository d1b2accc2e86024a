"""Tests for environment-driven settings."""

import os

import pytest
from rpcserver.settings import Settings

_KEYS = ("RPC_HOST", "RPC_PORT", "LOG_LEVEL", "RPC_STRICT_NOTIFICATIONS", "RPC_MAX_WORKERS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _KEYS:
        monkeypatch.delenv(name, raising=False)
    yield
    # load_dotenv writes straight into os.environ
    for name in _KEYS:
        os.environ.pop(name, None)


def test_defaults(tmp_path):
    settings = Settings.from_env(tmp_path / "missing.env")
    assert settings == Settings()
    assert settings.port == 8100
    assert settings.strict_notifications is True


def test_env_file(tmp_path):
    env = tmp_path / ".env"
    env.write_text("RPC_PORT=9001\nRPC_STRICT_NOTIFICATIONS=false\nRPC_MAX_WORKERS=8\n")

    settings = Settings.from_env(env)
    assert settings.port == 9001
    assert settings.strict_notifications is False
    assert settings.max_workers == 8


def test_environment_wins_over_env_file(monkeypatch, tmp_path):
    env = tmp_path / ".env"
    env.write_text("RPC_HOST=10.0.0.1\n")
    monkeypatch.setenv("RPC_HOST", "0.0.0.0")
    assert Settings.from_env(env).host == "0.0.0.0"
