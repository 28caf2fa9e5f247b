"""Settings tests."""

import os

import pytest
from pydantic import ValidationError

from filemonitor.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Defaults watch the current directory with a match-all filter."""
    for name in list(os.environ):
        if name.upper().startswith("FILEMONITOR_"):
            monkeypatch.delenv(name)
    settings = Settings(_env_file=None)

    assert settings.name_filter == "*.*"
    assert settings.recursive is False
    assert settings.propagate_observer_errors is False
    assert settings.directory_path == os.path.abspath(".")


def test_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """FILEMONITOR_* variables override defaults."""
    monkeypatch.setenv("FILEMONITOR_DIRECTORY", str(tmp_path))
    monkeypatch.setenv("FILEMONITOR_NAME_FILTER", "*.txt")
    monkeypatch.setenv("FILEMONITOR_RECURSIVE", "true")
    monkeypatch.setenv("FILEMONITOR_DEBUG", "1")

    settings = Settings(_env_file=None)

    assert settings.directory_path == str(tmp_path)
    assert settings.name_filter == "*.txt"
    assert settings.recursive is True
    assert settings.debug is True


def test_invalid_value_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unparseable values raise a validation error."""
    monkeypatch.setenv("FILEMONITOR_SHUTDOWN_TIMEOUT", "soon")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
