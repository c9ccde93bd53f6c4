"""
Shared fixtures: a migrated in-memory catalog, a fake engine and a builder
for small SF2 files.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

import struct
from pathlib import Path

import pytest

from sfcatalog import (
    ErrorMode,
    LoadFailure,
    PresetDescriptor,
    ResourceFiles,
    SF2FileInfo,
    app_database,
    set_error_mode,
)

DEFAULT_PRESETS = [
    PresetDescriptor("Piano", 0, 0),
    PresetDescriptor("Strings", 0, 48),
    PresetDescriptor("Drums", 128, 0),
]


class FakeEngine:
    """Engine returning canned metadata; paths listed in failing raise LoadFailure."""

    def __init__(self, infos=None, failing=()):
        self.infos = dict(infos or {})
        self.failing = set(failing)
        self.loaded = []

    def load(self, path):
        path = str(path)
        self.loaded.append(path)
        if path in self.failing:
            raise LoadFailure(f"cannot load {path}")
        return self.infos.get(
            path,
            SF2FileInfo(
                embedded_name="Embedded",
                embedded_author="Author",
                embedded_comment="Comment",
                embedded_copyright="Copyright",
                presets=list(DEFAULT_PRESETS),
            ),
        )


def _chunk(chunk_id: bytes, body: bytes) -> bytes:
    data = chunk_id + struct.pack("<I", len(body)) + body
    if len(body) % 2:
        data += b"\x00"
    return data


def _zstr(text: str) -> bytes:
    data = text.encode("latin-1") + b"\x00"
    if len(data) % 2:
        data += b"\x00"
    return data


def _phdr_record(name: str, program: int, bank: int, zone: int) -> bytes:
    raw = name.encode("latin-1")[:20].ljust(20, b"\x00")
    return raw + struct.pack("<HHHiii", program, bank, zone, 0, 0, 0)


def build_sf2(
    presets=(("Piano", 0, 0),),
    name="Test Bank",
    author="",
    comment="",
    copyright="",
) -> bytes:
    """
    Return the bytes of a minimal SF2 file.

    presets holds (name, bank, program) tuples in file order; the terminal
    'EOP' record is appended.
    """
    info = _chunk(b"ifil", struct.pack("<HH", 2, 1)) + _chunk(b"isng", _zstr("EMU8000"))
    if name:
        info += _chunk(b"INAM", _zstr(name))
    if author:
        info += _chunk(b"IENG", _zstr(author))
    if comment:
        info += _chunk(b"ICMT", _zstr(comment))
    if copyright:
        info += _chunk(b"ICOP", _zstr(copyright))
    info += _chunk(b"ISFT", _zstr("tests"))

    sdta = _chunk(b"smpl", b"\x00\x00" * 46)

    records = b"".join(
        _phdr_record(preset_name, program, bank, zone)
        for zone, (preset_name, bank, program) in enumerate(presets)
    )
    records += _phdr_record("EOP", 0, 0, len(presets))
    pdta = _chunk(b"phdr", records) + _chunk(b"pbag", b"\x00" * 4 * (len(presets) + 1))

    body = (
        b"sfbk"
        + _chunk(b"LIST", b"INFO" + info)
        + _chunk(b"LIST", b"sdta" + sdta)
        + _chunk(b"LIST", b"pdta" + pdta)
    )
    return _chunk(b"RIFF", body)


@pytest.fixture
def sf2_file(tmp_path):
    """Factory writing build_sf2() output to a file and returning its path."""
    counter = iter(range(1000))

    def make(file_name=None, **kwargs) -> Path:
        path = tmp_path / (file_name or f"font{next(counter)}.sf2")
        path.write_bytes(build_sf2(**kwargs))
        return path

    return make


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def empty_resources(tmp_path):
    directory = tmp_path / "no-resources"
    directory.mkdir()
    return ResourceFiles(directory)


@pytest.fixture
def db(engine, empty_resources):
    """A migrated in-memory catalog with no sound fonts."""
    database = app_database(":memory:", engine=engine, resources=empty_resources)
    yield database
    database.close()


@pytest.fixture
def restore_error_mode():
    yield
    set_error_mode(ErrorMode.STRICT)
