"""
sfcatalog - A persistent catalog of SoundFont 2 files, presets and tags.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from sfcatalog.config import ErrorMode, set_error_mode, get_error_mode, handle_error
from sfcatalog.errors import (
    SoundFontsError,
    NotFoundError,
    ResourceNotFound,
    DuplicateError,
    DuplicateTagError,
    InvalidTagNameError,
    UbiquitousTagError,
    TaggingError,
    LoadFailure,
    MigrationError,
    StorageError,
)
from sfcatalog.logger import set_global_logging, get_logger
from sfcatalog.note import Note, C4, A4, note_from_label, label_from_note
from sfcatalog.tuning import (
    TuningSetting,
    STANDARD_TUNING,
    SCIENTIFIC_TUNING,
    cents_to_frequency,
    frequency_to_cents,
    clamp_and_quantize_tuning,
    tuning_from_frequency,
)
from sfcatalog.overrides import ZoneOverrides, GLOBAL_ZONE
from sfcatalog.models import (
    AudioSettings,
    DelayConfig,
    Favorite,
    Location,
    LocationKind,
    Preset,
    ReverbConfig,
    SoundFont,
    Tag,
    TagInfo,
    UbiquitousTag,
)
from sfcatalog.database import Database
from sfcatalog.migrations import Migrator
from sfcatalog.engine import (
    PresetDescriptor,
    SF2FileInfo,
    SoundFontEngine,
    SF2MetadataEngine,
)
from sfcatalog.resources import BuiltinSoundFont, ResourceFiles
from sfcatalog.active_state import ActiveState, ActiveStateStore
from sfcatalog.app_database import app_database

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "ErrorMode",
    "set_error_mode",
    "get_error_mode",
    "handle_error",
    "set_global_logging",
    "get_logger",
    # Errors
    "SoundFontsError",
    "NotFoundError",
    "ResourceNotFound",
    "DuplicateError",
    "DuplicateTagError",
    "InvalidTagNameError",
    "UbiquitousTagError",
    "TaggingError",
    "LoadFailure",
    "MigrationError",
    "StorageError",
    # Notes and tuning
    "Note",
    "C4",
    "A4",
    "note_from_label",
    "label_from_note",
    "TuningSetting",
    "STANDARD_TUNING",
    "SCIENTIFIC_TUNING",
    "cents_to_frequency",
    "frequency_to_cents",
    "clamp_and_quantize_tuning",
    "tuning_from_frequency",
    "ZoneOverrides",
    "GLOBAL_ZONE",
    # Entities
    "AudioSettings",
    "DelayConfig",
    "Favorite",
    "Location",
    "LocationKind",
    "Preset",
    "ReverbConfig",
    "SoundFont",
    "Tag",
    "TagInfo",
    "UbiquitousTag",
    # Store
    "Database",
    "Migrator",
    "app_database",
    "ActiveState",
    "ActiveStateStore",
    # Engine and resources
    "PresetDescriptor",
    "SF2FileInfo",
    "SoundFontEngine",
    "SF2MetadataEngine",
    "BuiltinSoundFont",
    "ResourceFiles",
]
