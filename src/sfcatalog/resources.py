"""
Lookup of the sound font files bundled with the application.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from sfcatalog.config import get_resources_dir
from sfcatalog.errors import ResourceNotFound
from sfcatalog.logger import get_logger

logger = get_logger(__name__)

SF2_SUFFIX = ".sf2"


class BuiltinSoundFont(Enum):
    """Bundled sound fonts: (display name, resource file name without suffix)."""
    FREE_FONT = ("FreeFont", "FreeFont")
    MUSE_SCORE = ("MuseScore", "GeneralUser GS MuseScore v1.442")
    ROLAND_PIANO = ("Roland Piano", "RolandNicePiano")

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def file_name(self) -> str:
        return self.value[1]


class ResourceFiles:
    """
    Resolve bundled resource names to files in one directory.

    Args:
        directory: Where the bundled SF2 files live. If None, uses
            get_resources_dir().
    """

    def __init__(self, directory: Optional[Path] = None):
        self._directory = Path(directory) if directory is not None else get_resources_dir()

    @property
    def directory(self) -> Path:
        return self._directory

    def resolve(self, name: str) -> Path:
        """
        Return the path of the resource named name, with or without '.sf2'.

        Raises:
            ResourceNotFound: if no such file exists
        """
        for candidate in (name + SF2_SUFFIX, name):
            path = self._directory / candidate
            if path.is_file():
                return path
        raise ResourceNotFound(f"could not find resource named {name!r} in {self._directory}")

    def resolve_builtin(self, font: BuiltinSoundFont) -> Path:
        return self.resolve(font.file_name)

    def available(self) -> list[BuiltinSoundFont]:
        """The built-in sound fonts whose files are present, in canonical order."""
        found = []
        for font in BuiltinSoundFont:
            try:
                self.resolve_builtin(font)
            except ResourceNotFound:
                logger.debug(f"Built-in resource {font.file_name!r} is not present")
                continue
            found.append(font)
        return found
