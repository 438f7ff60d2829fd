"""Settings tests."""

from datetime import timedelta
from pathlib import Path

import pytest

from console_api.app import build_service
from console_api.config import Settings
from console_api.tree import Catalog


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Defaults sort ascending, keep drafts a week and bound the gather."""
    monkeypatch.chdir(Path(__file__).parent)
    settings = Settings()

    assert settings.sort_ascending is True
    assert settings.draft_retention == timedelta(days=7)
    assert settings.gather_timeout == 60.0
    assert settings.security_enabled is True


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """CONSOLE_-prefixed variables override the defaults."""
    monkeypatch.setenv("CONSOLE_TREE_SORT", "descending")
    monkeypatch.setenv("CONSOLE_DRAFT_RETENTION_DAYS", "2")
    monkeypatch.setenv("CONSOLE_SECURITY_ENABLED", "false")
    monkeypatch.setenv("CONSOLE_GATHER_MAX_WORKERS", "3")

    settings = Settings()

    assert settings.sort_ascending is False
    assert settings.draft_retention == timedelta(days=2)
    assert settings.security_enabled is False
    assert settings.gather_max_workers == 3


def test_build_service_applies_settings(settings: Settings) -> None:
    """The service is configured from settings."""
    settings = settings.model_copy(
        update={"tree_sort": "descending", "security_enabled": False}
    )

    service = build_service(settings, Catalog())

    assert service.ascending is False
    assert service.security_enabled is False
    assert service.timeout == 60.0
    assert service.drafts.root == settings.drafts_dir
