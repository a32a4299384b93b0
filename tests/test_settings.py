"""Unit tests for environment-driven settings."""

import logging
from pathlib import Path

import pytest

from qrbill.config import (
    get_app_name,
    get_app_version,
    get_default_version,
    get_log_level,
    get_profiles_dir,
    get_strict_mode,
)


def test_app_name_and_version():
    """Test application name and packaged version."""
    assert get_app_name() == "QR Bill Codec"
    assert get_app_version() == "0.1.0"


@pytest.mark.parametrize("value,expected", [("true", True), ("TRUE", True), ("false", False), ("0", False)])
def test_strict_mode(monkeypatch, value, expected):
    """Test reading QRBILL_STRICT."""
    monkeypatch.setenv("QRBILL_STRICT", value)
    assert get_strict_mode() is expected


def test_strict_mode_default():
    """Test that strict mode is on by default."""
    assert get_strict_mode() is True


@pytest.mark.parametrize("value,expected", [("0100", "0100"), (" 0200 ", "0200"), ("0300", "0200"), ("2.0", "0200")])
def test_default_version(monkeypatch, value, expected):
    """Test reading QRBILL_DEFAULT_VERSION with fallback."""
    monkeypatch.setenv("QRBILL_DEFAULT_VERSION", value)
    assert get_default_version() == expected


def test_default_version_unset():
    """Test the default version without environment."""
    assert get_default_version() == "0200"


@pytest.mark.parametrize(
    "value,expected",
    [("debug", logging.DEBUG), ("INFO", logging.INFO), ("nonsense", logging.WARNING)],
)
def test_log_level(monkeypatch, value, expected):
    """Test reading QRBILL_LOG_LEVEL."""
    monkeypatch.setenv("QRBILL_LOG_LEVEL", value)
    assert get_log_level() == expected


def test_log_level_default():
    """Test the default log level."""
    assert get_log_level() == logging.WARNING


def test_profiles_dir(monkeypatch, tmp_path):
    """Test reading QRBILL_PROFILES_DIR."""
    monkeypatch.setenv("QRBILL_PROFILES_DIR", str(tmp_path))
    assert get_profiles_dir() == tmp_path


def test_profiles_dir_default():
    """Test the shipped profiles directory."""
    profiles_dir = get_profiles_dir()

    assert profiles_dir == Path(__file__).resolve().parent.parent / "configs" / "profiles"
    assert (profiles_dir / "default.yaml").exists()
