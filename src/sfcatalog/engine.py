"""
Engine interface used to load sound font metadata.

The catalog never renders audio; it only asks an engine to open a file and
report its embedded fields and presets.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Union

from sfcatalog.errors import LoadFailure
from sfcatalog.logger import get_logger
from sfcatalog.sf2 import SF2FormatError, SoundFontMetadata

logger = get_logger(__name__)


@dataclass(frozen=True)
class PresetDescriptor:
    name: str
    bank: int
    program: int


@dataclass(frozen=True)
class SF2FileInfo:
    """Metadata reported by an engine for one file. Presets are in catalog order."""
    embedded_name: str = ""
    embedded_author: str = ""
    embedded_comment: str = ""
    embedded_copyright: str = ""
    presets: list[PresetDescriptor] = field(default_factory=list)


class SoundFontEngine(Protocol):
    def load(self, path: Union[str, Path]) -> SF2FileInfo:
        """
        Read the metadata of the file at path.

        Raises:
            LoadFailure: if the file cannot be opened or parsed
        """
        ...


class SF2MetadataEngine:
    """Engine backed by the bundled SF2 reader."""

    def load(self, path: Union[str, Path]) -> SF2FileInfo:
        try:
            metadata = SoundFontMetadata.from_file(path)
        except (OSError, SF2FormatError) as exc:
            raise LoadFailure(f"cannot load sound font {str(path)!r}: {exc}") from exc

        presets = sorted(
            (
                PresetDescriptor(h.name, h.bank_number, h.patch_number)
                for h in metadata.preset_headers
            ),
            key=lambda p: (p.bank, p.program),
        )
        logger.debug(f"Loaded {len(presets)} presets from {path}")
        return SF2FileInfo(
            embedded_name=metadata.info.bank_name,
            embedded_author=metadata.info.author,
            embedded_comment=metadata.info.comments,
            embedded_copyright=metadata.info.copyright,
            presets=presets,
        )
