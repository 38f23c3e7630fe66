from datetime import date

from workdesk import settings as settings_module
from workdesk.clock import local_now, local_today


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv("API_KEY", "k")
    monkeypatch.setenv("API_TIMEOUT_SECONDS", "3")
    settings_module.reset_settings()

    settings = settings_module.get_settings()

    assert settings.api_base_url == "https://api.example.com"
    assert settings.api_key == "k"
    assert settings.request_timeout == 3
    assert settings_module.get_settings() is settings


def test_local_now_uses_configured_timezone(monkeypatch):
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "Asia/Tokyo")
    settings_module.reset_settings()
    assert local_now().utcoffset().total_seconds() == 9 * 3600
    assert isinstance(local_today(), date)


def test_unknown_timezone_falls_back(monkeypatch):
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "Mars/Olympus")
    settings_module.reset_settings()
    assert local_now().tzinfo is not None
