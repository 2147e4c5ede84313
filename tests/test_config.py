"""Tests for environment-based settings."""

import pytest

from tour_analytics.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_REFRESH_INTERVAL,
    get_settings,
)

ENV_VARS = [
    "TRAVEL_API_BASE_URL",
    "TRAVEL_API_TOKEN",
    "TRAVEL_API_HTTP_TIMEOUT",
    "ANALYTICS_REFRESH_INTERVAL",
    "ANALYTICS_REAL_TIME_UPDATES",
    "TRAVEL_API_PAGE_LIMIT",
    "COMPANY_NAME",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield str(tmp_path / "missing.env")
    get_settings.cache_clear()


class TestGetSettings:
    def test_defaults(self, clean_env):
        settings = get_settings(clean_env)

        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.api_token == ""
        assert not settings.has_credentials
        assert settings.http_timeout == DEFAULT_HTTP_TIMEOUT
        assert settings.refresh_interval == DEFAULT_REFRESH_INTERVAL
        assert settings.real_time_updates is True
        assert settings.page_limit == DEFAULT_PAGE_LIMIT
        assert settings.company.name == "Pather Khonje"

    def test_environment_overrides(self, clean_env, monkeypatch):
        monkeypatch.setenv("TRAVEL_API_BASE_URL", "https://admin.example.com/api")
        monkeypatch.setenv("TRAVEL_API_TOKEN", "abc")
        monkeypatch.setenv("ANALYTICS_REFRESH_INTERVAL", "5")
        monkeypatch.setenv("ANALYTICS_REAL_TIME_UPDATES", "off")
        monkeypatch.setenv("TRAVEL_API_PAGE_LIMIT", "50")
        monkeypatch.setenv("COMPANY_NAME", "Test Tours")

        settings = get_settings(clean_env)

        assert settings.api_base_url == "https://admin.example.com/api"
        assert settings.has_credentials
        assert settings.refresh_interval == 5.0
        assert settings.real_time_updates is False
        assert settings.page_limit == 50
        assert settings.company.name == "Test Tours"

    @pytest.mark.parametrize("raw", ["abc", "-3", "0"])
    def test_invalid_numbers_fall_back(self, clean_env, monkeypatch, raw):
        monkeypatch.setenv("TRAVEL_API_HTTP_TIMEOUT", raw)
        monkeypatch.setenv("TRAVEL_API_PAGE_LIMIT", raw)

        settings = get_settings(clean_env)

        assert settings.http_timeout == DEFAULT_HTTP_TIMEOUT
        assert settings.page_limit == DEFAULT_PAGE_LIMIT

    def test_cached(self, clean_env):
        assert get_settings(clean_env) is get_settings(clean_env)
