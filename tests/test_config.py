"""Tests for randomorg.config.

Covers:
- API key resolution (argument, environment, .env loading)
- Proxy and timeout resolution
- ConfigError on missing key or bad timeout
"""

import pytest

import randomorg.config as config
from randomorg.config import (
    API_KEY_ENV,
    DEFAULT_TIMEOUT,
    PROXY_ENV,
    TIMEOUT_ENV,
    resolve_api_key,
    resolve_proxy,
    resolve_timeout,
)
from randomorg.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test with no settings in the environment and .env already handled."""
    for name in (API_KEY_ENV, PROXY_ENV, TIMEOUT_ENV):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "_dotenv_loaded", True)


class TestResolveApiKey:
    def test_explicit_key_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(API_KEY_ENV, "from-env")
        assert resolve_api_key("explicit") == "explicit"

    def test_key_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(API_KEY_ENV, "  from-env  ")
        assert resolve_api_key() == "from-env"

    def test_missing_key(self) -> None:
        with pytest.raises(ConfigError, match=API_KEY_ENV):
            resolve_api_key()

    def test_empty_explicit_key_does_not_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(API_KEY_ENV, "from-env")
        with pytest.raises(ConfigError):
            resolve_api_key("")

    def test_dotenv_loaded_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = []

        def fake_load_dotenv() -> bool:
            calls.append(1)
            monkeypatch.setenv(API_KEY_ENV, "from-dotenv")
            return True

        monkeypatch.setattr(config, "_dotenv_loaded", False)
        monkeypatch.setattr(config, "load_dotenv", fake_load_dotenv)

        assert resolve_api_key() == "from-dotenv"
        assert resolve_api_key() == "from-dotenv"
        assert len(calls) == 1


class TestResolveProxy:
    def test_default_none(self) -> None:
        assert resolve_proxy() is None

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(PROXY_ENV, "http://proxy:3128")
        assert resolve_proxy() == "http://proxy:3128"

    def test_empty_string_disables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(PROXY_ENV, "http://proxy:3128")
        assert resolve_proxy("") is None


class TestResolveTimeout:
    def test_default(self) -> None:
        assert resolve_timeout() == DEFAULT_TIMEOUT

    def test_explicit(self) -> None:
        assert resolve_timeout(2) == 2.0

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(TIMEOUT_ENV, "7.5")
        assert resolve_timeout() == 7.5

    @pytest.mark.parametrize("raw", ["soon", "0", "-3"])
    def test_invalid_environment_value(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv(TIMEOUT_ENV, raw)
        with pytest.raises(ConfigError, match=TIMEOUT_ENV):
            resolve_timeout()
