"""Tests for environment-driven configuration.

Run with: pytest tests/test_config.py -v
"""

import pytest
from pydantic import ValidationError

from events_api.config import DjangoSettings, EventsSettings, LogSettings


class TestEventsSettings:
    def test_defaults(self, monkeypatch):
        for name in [
            "EVENTS_STORE_BACKEND",
            "EVENTS_REMINDER_WINDOW_HOURS",
            "EVENTS_DEFAULT_PAGE_SIZE",
            "EVENTS_MAX_PAGE_SIZE",
        ]:
            monkeypatch.delenv(name, raising=False)

        config = EventsSettings()

        assert config.store_backend == "django"
        assert config.reminder_window_hours == 24
        assert (config.default_page_size, config.max_page_size) == (20, 100)

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("EVENTS_STORE_BACKEND", "memory")
        monkeypatch.setenv("EVENTS_REMINDER_WINDOW_HOURS", "6")

        config = EventsSettings()

        assert config.store_backend == "memory"
        assert config.reminder_window_hours == 6

    @pytest.mark.parametrize(
        "name, value",
        [
            ("EVENTS_MAX_PAGE_SIZE", "lots"),
            ("EVENTS_DEFAULT_PAGE_SIZE", "0"),
            ("EVENTS_STORE_BACKEND", "redis"),
        ],
    )
    def test_malformed_values_are_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            EventsSettings()


class TestDjangoSettings:
    def test_host_list_and_database_path(self, monkeypatch):
        monkeypatch.setenv("DJANGO_ALLOWED_HOSTS", "api.example.com, localhost,")
        monkeypatch.setenv("DJANGO_DEBUG", "true")
        monkeypatch.setenv("DATABASE_PATH", "/tmp/events.sqlite3")

        config = DjangoSettings()

        assert config.host_list == ["api.example.com", "localhost"]
        assert config.debug is True
        assert config.database_path == "/tmp/events.sqlite3"


class TestLogSettings:
    def test_environment_falls_back_to_env(self, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("ENV", "staging")
        monkeypatch.setenv("LOG_DIR", "/var/log/events")

        config = LogSettings()

        assert config.environment == "staging"
        assert config.dir == "/var/log/events"
