import pytest

from models.server_settings import ServerSettings

ENV_NAMES = (
    "HOST",
    "PORT",
    "SWEEP_INTERVAL_SECONDS",
    "IDLE_TIMEOUT_SECONDS",
    "CHAT_LOG_CAPACITY",
    "AUTO_REPLY_MIN_DELAY",
    "AUTO_REPLY_MAX_DELAY",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = ServerSettings.from_env()
    assert settings.host == "127.0.0.1"
    assert settings.port == 8080
    assert settings.sweep_interval == 60.0
    assert settings.idle_timeout == 300.0
    assert settings.chat_log_capacity == 100
    assert (settings.auto_reply_min_delay, settings.auto_reply_max_delay) == (2.0, 5.0)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("IDLE_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = ServerSettings.from_env()

    assert settings.host == "0.0.0.0"
    assert settings.port == 9001
    assert settings.idle_timeout == 30.0
    assert settings.log_level == "DEBUG"


def test_invalid_numbers_name_the_variable(monkeypatch):
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(RuntimeError, match="PORT"):
        ServerSettings.from_env()


def test_inverted_reply_delays_are_rejected(monkeypatch):
    monkeypatch.setenv("AUTO_REPLY_MIN_DELAY", "6")
    with pytest.raises(RuntimeError):
        ServerSettings.from_env()
