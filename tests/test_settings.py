"""Typed smoke tests for the settings loader.

These tests verify three guarantees:
1) Importing the module-level `settings` yields a `Settings` instance.
2) Environment variables override defaults after clearing the loader cache.
3) `get_logger()` respects the configured LOG_LEVEL when constructing loggers.
"""

from __future__ import annotations

import logging
from typing import Any

import pytest
from pydantic import ValidationError

from blockmodel.core.settings import (
    Settings,
    get_logger,
    load_settings,
    settings,
)


@pytest.fixture(autouse=True)
def reset_settings() -> Any:
    """Rebuild settings from the restored environment after each test."""
    yield
    load_settings.cache_clear()


def test_settings_instance_type() -> None:
    assert isinstance(settings, Settings)
    assert len(settings.csv_delimiter) == 1


def test_defaults_read_plain_and_bom_utf8() -> None:
    s = Settings()
    assert s.csv_encoding == "utf-8-sig"
    assert "x,y".encode().decode(s.csv_encoding) == "x,y"
    assert "\ufeffx,y".encode().decode(s.csv_encoding) == "x,y"
    assert not hasattr(s, "environment")


def test_env_overrides_with_cache_clear(monkeypatch: Any) -> None:
    """Changing env vars should take effect after `load_settings.cache_clear()`."""
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("BLOCKMODEL_CSV_DELIMITER", "\t")
    monkeypatch.setenv("BLOCKMODEL_ALIGNMENT_TOLERANCE", "0.001")

    load_settings.cache_clear()
    s = load_settings()

    assert s.log_level == "DEBUG"
    assert s.csv_delimiter == "\t"
    assert s.alignment_tolerance == pytest.approx(0.001)


def test_tolerance_must_stay_below_half(monkeypatch: Any) -> None:
    monkeypatch.setenv("BLOCKMODEL_ALIGNMENT_TOLERANCE", "0.5")
    load_settings.cache_clear()
    with pytest.raises(ValidationError):
        load_settings()


def test_get_logger_respects_level(monkeypatch: Any) -> None:
    """`get_logger()` should apply the numeric level derived from `LOG_LEVEL`."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    load_settings.cache_clear()

    logger = get_logger("blockmodel.tests.settings")

    assert logger.level == logging.ERROR
    assert logger.handlers, "Expected at least one StreamHandler to be attached."
