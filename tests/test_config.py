"""Tests for environment-based configuration."""

from pathlib import Path

import pytest

from config import DEFAULT_API_BASE, DEFAULT_HEDGE_PHRASES, Config


@pytest.fixture
def clean_env(monkeypatch):
    for key in (
        "VALYU_API_KEY", "VALYU_API_BASE", "DATA_MAX_PRICE", "SEARCH_MAX_RESULTS",
        "HEDGE_PHRASES", "REQUEST_TIMEOUT_SECONDS", "REPORTS_DIR", "LOG_LEVEL", "LOG_FORMAT",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = Config.load()

    assert config.valyu_api_key == ""
    assert config.api_base_url == DEFAULT_API_BASE
    assert config.data_max_price == 100.0
    assert config.hedge_phrases == list(DEFAULT_HEDGE_PHRASES)
    assert config.validate() == "VALYU_API_KEY environment variable is required"


def test_load_from_environment(clean_env):
    clean_env.setenv("VALYU_API_KEY", "k")
    clean_env.setenv("VALYU_API_BASE", "http://localhost:8000/v1/")
    clean_env.setenv("DATA_MAX_PRICE", "25.5")
    clean_env.setenv("HEDGE_PHRASES", "no data| unknown |")
    clean_env.setenv("REPORTS_DIR", "out")
    clean_env.setenv("LOG_LEVEL", "debug")

    config = Config.load()

    assert config.api_base_url == "http://localhost:8000/v1"
    assert config.data_max_price == 25.5
    assert config.hedge_phrases == ["no data", "unknown"]
    assert config.reports_dir == Path("out")
    assert config.log_level == "DEBUG"
    assert config.validate() is None


def test_invalid_number_raises(clean_env):
    clean_env.setenv("SEARCH_MAX_RESULTS", "many")

    with pytest.raises(ValueError, match="SEARCH_MAX_RESULTS"):
        Config.load()


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("data_max_price", 0, "DATA_MAX_PRICE"),
        ("search_max_results", 0, "SEARCH_MAX_RESULTS"),
        ("request_timeout_seconds", -1, "REQUEST_TIMEOUT_SECONDS"),
        ("log_format", "xml", "LOG_FORMAT"),
    ],
)
def test_validate_rejects_bad_values(field, value, message):
    config = Config(valyu_api_key="k")
    setattr(config, field, value)

    assert message in config.validate()
