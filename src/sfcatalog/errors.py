"""
Exception types raised by the catalog.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""


class SoundFontsError(Exception):
    """Base error for the sfcatalog package."""


class NotFoundError(SoundFontsError):
    """Raised when a referenced sound font, preset, favorite or tag does not exist."""


class ResourceNotFound(NotFoundError, FileNotFoundError):
    """Raised when a bundled resource cannot be located."""


class DuplicateError(SoundFontsError):
    """Raised when a write would violate a uniqueness constraint."""


class DuplicateTagError(DuplicateError):
    """Raised when creating or renaming a tag to a name already in use."""

    def __init__(self, name: str) -> None:
        super().__init__(f"a tag named {name!r} already exists")
        self.name = name


class InvalidTagNameError(SoundFontsError):
    """Raised when a tag name is empty after trimming whitespace."""


class UbiquitousTagError(SoundFontsError):
    """Raised on an attempt to delete, rename or manage membership of a system tag."""


class TaggingError(SoundFontsError):
    """Raised when tagging a sound font already tagged, or untagging one that is not."""


class LoadFailure(SoundFontsError):
    """Raised when the engine cannot load a sound font file."""


class MigrationError(SoundFontsError):
    """Raised when the schema cannot be brought up to date."""


class StorageError(SoundFontsError):
    """Raised when the underlying store fails."""
