from __future__ import annotations

from presence.main import create_application
from presence.storage.store import InMemoryStore


def test_create_application_with_testing_settings(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    container, actions = create_application()

    assert isinstance(container.store, InMemoryStore)
    assert actions.login("admin@presence.app", "admin123").success is True


def test_settings_module_selection(monkeypatch):
    from config import get_settings_module

    monkeypatch.setenv("APP_ENV", "prod")
    assert get_settings_module() == "config.production"
    monkeypatch.setenv("APP_ENV", "TEST")
    assert get_settings_module() == "config.testing"
    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"


def test_load_settings_returns_module(monkeypatch):
    from config import load_settings

    monkeypatch.setenv("APP_ENV", "testing")
    settings = load_settings()
    assert settings.__name__ == "config.testing"
    assert settings.STORE_BACKEND == "memory"
