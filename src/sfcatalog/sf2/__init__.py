"""
Minimal SoundFont 2 reader.

Reads only what a catalog needs from an SF2 file: the INFO descriptive
fields and the preset headers. Layout follows the SoundFont 2.04 RIFF format
(little-endian, 'sfbk' form).

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from sfcatalog.sf2.exceptions import SF2FormatError
from sfcatalog.sf2.info import SoundFontInfo
from sfcatalog.sf2.preset_header import PresetHeader
from sfcatalog.sf2.soundfont import SoundFontMetadata

__all__ = [
    "SF2FormatError",
    "SoundFontInfo",
    "PresetHeader",
    "SoundFontMetadata",
]
