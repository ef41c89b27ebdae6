"""Tests du chargement de la configuration."""

from pathlib import Path
from unittest.mock import patch

import pytest

from newsdesk.config import DEFAULT_API_URL, ConfigError, load_config

ENV_VARS = (
    "NEWSDESK_API_URL",
    "NEWSDESK_TOKEN_PATH",
    "NEWSDESK_TIMEOUT",
    "NEWSDESK_PAGE_SIZE",
    "NEWSDESK_CHAT_DELAY_MS",
    "NEWSDESK_INTERESTS_ENDPOINT",
    "NEWSDESK_LOG_LEVEL",
    "NEWSDESK_THEME",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    with patch("newsdesk.config.load_dotenv"):
        yield monkeypatch


def test_defaults():
    config = load_config()
    assert config.api_base_url == DEFAULT_API_URL
    assert config.page_size == 12
    assert config.chat_delay_ms == 1000
    assert config.interests_endpoint == "profile"
    assert config.theme == "dark"


def test_reads_environment(clean_env, tmp_path):
    clean_env.setenv("NEWSDESK_API_URL", "https://news.example.com/api/")
    clean_env.setenv("NEWSDESK_TOKEN_PATH", str(tmp_path / "t.json"))
    clean_env.setenv("NEWSDESK_TIMEOUT", "2.5")
    clean_env.setenv("NEWSDESK_INTERESTS_ENDPOINT", "Interests")
    clean_env.setenv("NEWSDESK_LOG_LEVEL", "debug")

    config = load_config()

    assert config.api_base_url == "https://news.example.com/api"
    assert config.token_path == Path(tmp_path / "t.json")
    assert config.request_timeout == 2.5
    assert config.interests_endpoint == "interests"
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("NEWSDESK_API_URL", "ftp://nope"),
        ("NEWSDESK_TIMEOUT", "soon"),
        ("NEWSDESK_PAGE_SIZE", "0"),
        ("NEWSDESK_INTERESTS_ENDPOINT", "settings"),
        ("NEWSDESK_THEME", "blue"),
        ("NEWSDESK_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_raise_config_error(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(ConfigError):
        load_config()
