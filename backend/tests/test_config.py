"""Tests for Settings."""

from pathlib import Path

import pytest

from stocktracker.config import Settings


class TestSettingsFromEnv:
    """Environment parsing."""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings == Settings()
        assert settings.poll_interval == 5.0
        assert settings.write_timeout == 5.0
        assert settings.request_timeout == 10.0
        assert settings.default_symbol == "AAPL"
        assert not settings.has_api_key

    def test_overrides(self):
        settings = Settings.from_env(
            {
                "FINNHUB_API_KEY": " secret ",
                "FINNHUB_BASE_URL": "https://example.test/api/v1/",
                "STOCKTRACKER_POLL_INTERVAL": "2.5",
                "STOCKTRACKER_WRITE_TIMEOUT": "1",
                "STOCKTRACKER_REQUEST_TIMEOUT": "3",
                "STOCKTRACKER_DEFAULT_SYMBOL": "MSFT",
                "STOCKTRACKER_STATIC_DIR": "/srv/www",
                "STOCKTRACKER_HOST": "127.0.0.1",
                "STOCKTRACKER_PORT": "9000",
                "STOCKTRACKER_LOG_LEVEL": "debug",
            }
        )
        assert settings.api_key == "secret"
        assert settings.has_api_key
        assert settings.base_url == "https://example.test/api/v1"
        assert settings.poll_interval == 2.5
        assert settings.write_timeout == 1.0
        assert settings.request_timeout == 3.0
        assert settings.default_symbol == "MSFT"
        assert settings.static_dir == Path("/srv/www")
        assert settings.host == "127.0.0.1"
        assert settings.port == 9000
        assert settings.log_level == "DEBUG"

    def test_blank_api_key_is_unset(self):
        assert not Settings.from_env({"FINNHUB_API_KEY": "   "}).has_api_key

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_bad_interval_rejected(self, value):
        with pytest.raises(ValueError, match="STOCKTRACKER_POLL_INTERVAL"):
            Settings.from_env({"STOCKTRACKER_POLL_INTERVAL": value})

    @pytest.mark.parametrize("value", ["http", "0", "70000"])
    def test_bad_port_rejected(self, value):
        with pytest.raises(ValueError, match="STOCKTRACKER_PORT"):
            Settings.from_env({"STOCKTRACKER_PORT": value})

    def test_api_key_not_in_repr(self):
        assert "secret" not in repr(Settings(api_key="secret"))

    def test_immutable(self):
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.poll_interval = 1.0
