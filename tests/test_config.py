"""
Tests for config module: error handling utilities and file locations.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from pathlib import Path

import pytest

import sfcatalog.config as cfg
from sfcatalog.config import (
    ErrorMode,
    set_error_mode,
    get_error_mode,
    handle_error,
    get_documents_dir,
    get_database_path,
    get_active_state_path,
    get_resources_dir,
)
from sfcatalog.errors import TaggingError


class TestErrorMode:
    """Test ErrorMode enum."""

    def test_strict_mode_value(self):
        """STRICT has value 'strict'."""
        assert ErrorMode.STRICT.value == "strict"

    def test_lenient_mode_value(self):
        """LENIENT has value 'lenient'."""
        assert ErrorMode.LENIENT.value == "lenient"


class TestGetSetErrorMode:
    """Test get/set error mode functions."""

    def setup_method(self):
        self._original_mode = get_error_mode()

    def teardown_method(self):
        set_error_mode(self._original_mode)

    def test_default_is_strict(self):
        """The default mode is valid and strict can be set."""
        assert cfg.DEFAULT_ERROR_MODE in (ErrorMode.STRICT, ErrorMode.LENIENT)
        set_error_mode(ErrorMode.STRICT)
        assert get_error_mode() == ErrorMode.STRICT

    def test_set_lenient(self):
        """Lenient mode can be set and read back."""
        set_error_mode(ErrorMode.LENIENT)
        assert get_error_mode() == ErrorMode.LENIENT


class TestHandleError:
    """Test handle_error utility function."""

    def setup_method(self):
        self._original_mode = get_error_mode()

    def teardown_method(self):
        set_error_mode(self._original_mode)

    def test_strict_mode_raises(self):
        """Strict mode raises the error."""
        set_error_mode(ErrorMode.STRICT)
        with pytest.raises(RuntimeError, match="test error"):
            handle_error("test error")

    def test_lenient_mode_warns(self, caplog):
        """Lenient mode logs a warning and returns True."""
        set_error_mode(ErrorMode.LENIENT)
        result = handle_error("test warning")
        assert result is True
        assert "test warning" in caplog.text

    def test_fatal_always_raises_in_lenient(self):
        """Fatal errors raise even in lenient mode."""
        set_error_mode(ErrorMode.LENIENT)
        with pytest.raises(RuntimeError, match="fatal error"):
            handle_error("fatal error", fatal=True)

    def test_custom_exception_class(self):
        """The given exception class is raised."""
        set_error_mode(ErrorMode.STRICT)
        with pytest.raises(TaggingError, match="already tagged"):
            handle_error("already tagged", exception_class=TaggingError)

    def test_override_mode_parameter(self):
        """error_mode overrides the global lenient setting."""
        set_error_mode(ErrorMode.STRICT)
        assert handle_error("override test", error_mode=ErrorMode.LENIENT) is True

    def test_override_to_strict_raises(self):
        """error_mode overrides the global strict setting."""
        set_error_mode(ErrorMode.LENIENT)
        with pytest.raises(RuntimeError, match="override test"):
            handle_error("override test", error_mode=ErrorMode.STRICT)


class TestLocations:
    """Test documents, database, active-state and resource locations."""

    def test_documents_dir_from_environment(self, monkeypatch, tmp_path):
        """The documents directory comes from the environment."""
        monkeypatch.setenv(cfg.HOME_ENV, str(tmp_path))
        assert get_documents_dir() == tmp_path

    def test_documents_dir_default(self, monkeypatch):
        """The default documents directory is named sfcatalog."""
        monkeypatch.delenv(cfg.HOME_ENV, raising=False)
        assert get_documents_dir().name == "sfcatalog"

    def test_database_and_state_files(self, monkeypatch, tmp_path):
        """Database and state files live in the documents directory."""
        monkeypatch.setenv(cfg.HOME_ENV, str(tmp_path))
        assert get_database_path() == tmp_path / "db.sqlite"
        assert get_active_state_path() == tmp_path / "activeState.json"

    def test_resources_dir_from_environment(self, monkeypatch, tmp_path):
        """The resources directory comes from the environment."""
        monkeypatch.setenv(cfg.RESOURCES_ENV, str(tmp_path))
        assert get_resources_dir() == tmp_path

    def test_resources_dir_default_is_package_data(self, monkeypatch):
        """The default resources directory is the package data."""
        monkeypatch.delenv(cfg.RESOURCES_ENV, raising=False)
        expected = Path(cfg.__file__).resolve().parent / "data"
        assert get_resources_dir() == expected
