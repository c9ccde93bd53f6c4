"""
Tests for bundled resource lookup.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

import pytest

import sfcatalog.config as cfg
from sfcatalog.errors import NotFoundError, ResourceNotFound
from sfcatalog.resources import BuiltinSoundFont, ResourceFiles


class TestBuiltinSoundFont:
    """Test built-in resource names."""

    def test_names(self):
        """Built-ins have display and file names."""
        assert [(f.display_name, f.file_name) for f in BuiltinSoundFont] == [
            ("FreeFont", "FreeFont"),
            ("MuseScore", "GeneralUser GS MuseScore v1.442"),
            ("Roland Piano", "RolandNicePiano"),
        ]


class TestResourceFiles:
    """Test resolving names to files."""

    def test_resolve_with_suffix(self, tmp_path):
        """A name resolves to its .sf2 file."""
        (tmp_path / "FreeFont.sf2").write_bytes(b"")
        assert ResourceFiles(tmp_path).resolve("FreeFont") == tmp_path / "FreeFont.sf2"

    def test_resolve_exact_name(self, tmp_path):
        """A name resolves without a suffix when that file exists."""
        (tmp_path / "custom.bin").write_bytes(b"")
        assert ResourceFiles(tmp_path).resolve("custom.bin") == tmp_path / "custom.bin"

    def test_missing_raises(self, tmp_path):
        """A missing resource raises ResourceNotFound."""
        with pytest.raises(ResourceNotFound):
            ResourceFiles(tmp_path).resolve("FreeFont")

    def test_not_found_error_kinds(self):
        """ResourceNotFound is a NotFoundError."""
        assert issubclass(ResourceNotFound, NotFoundError)
        assert issubclass(ResourceNotFound, FileNotFoundError)

    def test_available(self, tmp_path):
        """available lists only built-ins that are present."""
        (tmp_path / "RolandNicePiano.sf2").write_bytes(b"")
        (tmp_path / "FreeFont.sf2").write_bytes(b"")
        assert ResourceFiles(tmp_path).available() == [
            BuiltinSoundFont.FREE_FONT,
            BuiltinSoundFont.ROLAND_PIANO,
        ]

    def test_default_directory(self, monkeypatch, tmp_path):
        """The default directory comes from configuration."""
        monkeypatch.setenv(cfg.RESOURCES_ENV, str(tmp_path))
        assert ResourceFiles().directory == tmp_path
