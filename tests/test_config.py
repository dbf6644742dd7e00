import pytest

from horizons_fetcher.config import (
    DEFAULT_API_URL,
    DEFAULT_BACKOFF,
    DEFAULT_CENTER,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    AppConfig,
    load_config,
)


def test_defaults_without_environment():
    config = load_config({})
    assert config == AppConfig()
    assert config.api_url == DEFAULT_API_URL
    assert config.timeout == DEFAULT_TIMEOUT
    assert config.retries == DEFAULT_RETRIES
    assert config.backoff == DEFAULT_BACKOFF
    assert config.center == DEFAULT_CENTER
    assert config.log_level == "INFO"


def test_environment_overrides():
    config = load_config(
        {
            "HORIZONS_API_URL": "http://localhost:8080/api",
            "HORIZONS_USER_AGENT": "observatory-bot/2.0",
            "HORIZONS_TIMEOUT": "12.5",
            "HORIZONS_RETRIES": "5",
            "HORIZONS_BACKOFF": "0",
            "HORIZONS_CENTER": "500@399",
            "HORIZONS_LOG_LEVEL": "debug",
        }
    )
    assert config.api_url == "http://localhost:8080/api"
    assert config.user_agent == "observatory-bot/2.0"
    assert config.timeout == 12.5
    assert config.retries == 5
    assert config.backoff == 0.0
    assert config.center == "500@399"
    assert config.log_level == "DEBUG"


def test_blank_values_fall_back_to_defaults():
    config = load_config({"HORIZONS_TIMEOUT": "  ", "HORIZONS_RETRIES": "", "HORIZONS_CENTER": ""})
    assert config.timeout == DEFAULT_TIMEOUT
    assert config.retries == DEFAULT_RETRIES
    assert config.center == DEFAULT_CENTER


@pytest.mark.parametrize(
    "env, key",
    [
        ({"HORIZONS_TIMEOUT": "soon"}, "HORIZONS_TIMEOUT"),
        ({"HORIZONS_TIMEOUT": "-1"}, "HORIZONS_TIMEOUT"),
        ({"HORIZONS_RETRIES": "two"}, "HORIZONS_RETRIES"),
        ({"HORIZONS_RETRIES": "0"}, "HORIZONS_RETRIES"),
        ({"HORIZONS_BACKOFF": "-0.5"}, "HORIZONS_BACKOFF"),
    ],
)
def test_invalid_values_name_the_variable(env, key):
    with pytest.raises(ValueError, match=key):
        load_config(env)


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("HORIZONS_CENTER", "500@0")
    assert load_config().center == "500@0"


def test_log_format_choice():
    assert load_config({}).log_format == "json"
    assert load_config({"HORIZONS_LOG_FORMAT": "TEXT"}).log_format == "text"
    with pytest.raises(ValueError, match="HORIZONS_LOG_FORMAT"):
        load_config({"HORIZONS_LOG_FORMAT": "xml"})
