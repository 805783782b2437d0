import pytest

from config import Settings
from errors import ConfigurationError


def test_defaults(monkeypatch):
    monkeypatch.delenv("CACHE_MAX_ENTRIES", raising=False)
    monkeypatch.delenv("CACHE_TTL_SECONDS", raising=False)
    s = Settings()
    assert s.cache_max_entries == 200
    assert s.cache_ttl_seconds == 600


def test_reads_cache_limits_from_env(monkeypatch):
    monkeypatch.setenv("CACHE_MAX_ENTRIES", " 50 ")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "30")
    s = Settings()
    assert s.cache_max_entries == 50
    assert s.cache_ttl_seconds == 30


@pytest.mark.parametrize("var", ["CACHE_MAX_ENTRIES", "CACHE_TTL_SECONDS"])
def test_non_integer_env_raises_configuration_error(monkeypatch, var):
    monkeypatch.setenv(var, "ten")
    with pytest.raises(ConfigurationError, match=var):
        Settings()


def test_validate_reports_missing_api_key(monkeypatch):
    monkeypatch.delenv("OPENWEATHERMAP_API_KEY", raising=False)
    assert Settings().validate() == ["OPENWEATHERMAP_API_KEY"]
