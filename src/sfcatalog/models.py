"""
Catalog entities.

These are plain records read from and written to the store. Lifecycle,
uniqueness and cascade rules live in the store layer (schema, catalog and
tags modules), not here. Each record can be built from a row of its table
with from_row().

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from sfcatalog.note import Note
from sfcatalog.overrides import ZoneOverrides

Row = Mapping[str, Any]


class LocationKind(Enum):
    """Where a sound font file lives."""
    BUILTIN = "builtin"
    INSTALLED = "installed"
    BOOKMARK = "bookmark"


class UbiquitousTag(Enum):
    """
    System tags that always exist, in their canonical display order.

    ALL holds every sound font, BUILT_IN the bundled files, ADDED every file
    the user added, and EXTERNAL the added files that were referenced in place
    rather than copied (a subset of ADDED).
    """
    ALL = "All"
    BUILT_IN = "Built-in"
    ADDED = "Added"
    EXTERNAL = "External"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def ordering(self) -> int:
        return list(UbiquitousTag).index(self)


@dataclass(frozen=True)
class Location:
    """
    Reference to a sound font file.

    Attributes:
        kind: builtin resource, installed copy, or bookmark to an outside file
        path: absolute path of the file
        bookmark: resolved bookmark bytes for BOOKMARK locations
    """
    kind: LocationKind
    path: str
    bookmark: Optional[bytes] = None

    @property
    def is_builtin(self) -> bool:
        return self.kind is LocationKind.BUILTIN

    @property
    def is_installed(self) -> bool:
        return self.kind is LocationKind.INSTALLED

    @property
    def is_bookmark(self) -> bool:
        return self.kind is LocationKind.BOOKMARK

    @property
    def ubiquitous_tags(self) -> list[UbiquitousTag]:
        """The system tags a sound font at this location belongs to."""
        tags = [UbiquitousTag.ALL]
        if self.kind is LocationKind.BUILTIN:
            tags.append(UbiquitousTag.BUILT_IN)
        elif self.kind is LocationKind.INSTALLED:
            tags.append(UbiquitousTag.ADDED)
        else:
            tags += [UbiquitousTag.ADDED, UbiquitousTag.EXTERNAL]
        return tags

    def __str__(self) -> str:
        return self.path or "<unknown>"


@dataclass
class SoundFont:
    id: int
    display_name: str
    location: Location
    original_name: str
    embedded_name: str = ""
    embedded_author: str = ""
    embedded_comment: str = ""
    embedded_copyright: str = ""
    notes: str = ""
    visible: bool = True

    @classmethod
    def from_row(cls, row: Row) -> SoundFont:
        return cls(
            id=row["id"],
            display_name=row["display_name"],
            location=Location(
                LocationKind(row["location_kind"]),
                row["location_path"],
                row["location_bookmark"],
            ),
            original_name=row["original_name"],
            embedded_name=row["embedded_name"],
            embedded_author=row["embedded_author"],
            embedded_comment=row["embedded_comment"],
            embedded_copyright=row["embedded_copyright"],
            notes=row["notes"],
            visible=bool(row["visible"]),
        )


@dataclass
class Preset:
    id: int
    sound_font_id: int
    index: int
    bank: int
    program: int
    original_name: str
    display_name: str
    notes: str = ""
    visible: bool = True

    @classmethod
    def from_row(cls, row: Row) -> Preset:
        return cls(
            id=row["id"],
            sound_font_id=row["sound_font_id"],
            index=row["preset_index"],
            bank=row["bank"],
            program=row["program"],
            original_name=row["original_name"],
            display_name=row["display_name"],
            notes=row["notes"],
            visible=bool(row["visible"]),
        )


@dataclass
class Favorite:
    id: int
    preset_id: int
    display_name: str
    notes: str = ""

    @classmethod
    def from_row(cls, row: Row) -> Favorite:
        return cls(
            id=row["id"],
            preset_id=row["preset_id"],
            display_name=row["display_name"],
            notes=row["notes"],
        )


@dataclass
class AudioSettings:
    """
    Tunable state of a preset or favorite.

    keyboard_lowest_note is only applied when keyboard_lowest_note_enabled is
    set; the two together distinguish "no override" from an override that was
    cleared. preset_tuning is a cents offset. Exactly one of preset_id and
    favorite_id is set, except for the single global row that has neither.
    """
    id: int
    preset_id: Optional[int] = None
    favorite_id: Optional[int] = None
    keyboard_lowest_note: Optional[Note] = None
    keyboard_lowest_note_enabled: bool = False
    pitch_bend_range: Optional[int] = None
    preset_transpose: Optional[int] = None
    preset_tuning: float = 0.0
    gain: float = 1.0
    pan: float = 0.0
    overrides: ZoneOverrides = field(default_factory=ZoneOverrides)

    @property
    def is_global(self) -> bool:
        return self.preset_id is None and self.favorite_id is None

    @classmethod
    def from_row(cls, row: Row) -> AudioSettings:
        lowest = row["keyboard_lowest_note"]
        return cls(
            id=row["id"],
            preset_id=row["preset_id"],
            favorite_id=row["favorite_id"],
            keyboard_lowest_note=Note(lowest) if lowest is not None else None,
            keyboard_lowest_note_enabled=bool(row["keyboard_lowest_note_enabled"]),
            pitch_bend_range=row["pitch_bend_range"],
            preset_transpose=row["preset_transpose"],
            preset_tuning=row["preset_tuning"],
            gain=row["gain"],
            pan=row["pan"],
            overrides=ZoneOverrides.from_json(row["overrides"]),
        )


@dataclass
class DelayConfig:
    id: Optional[int] = None
    audio_settings_id: Optional[int] = None
    time: float = 0.25
    feedback: float = 0.70
    cutoff: float = 2000.0
    wet_dry_mix: float = 25.0
    enabled: bool = False

    @classmethod
    def from_row(cls, row: Row) -> DelayConfig:
        return cls(
            id=row["id"],
            audio_settings_id=row["audio_settings_id"],
            time=row["time"],
            feedback=row["feedback"],
            cutoff=row["cutoff"],
            wet_dry_mix=row["wet_dry_mix"],
            enabled=bool(row["enabled"]),
        )


@dataclass
class ReverbConfig:
    """room_preset is an index into the engine's list of reverb room presets."""
    id: Optional[int] = None
    audio_settings_id: Optional[int] = None
    room_preset: int = 0
    wet_dry_mix: float = 25.0
    enabled: bool = False

    @classmethod
    def from_row(cls, row: Row) -> ReverbConfig:
        return cls(
            id=row["id"],
            audio_settings_id=row["audio_settings_id"],
            room_preset=row["room_preset"],
            wet_dry_mix=row["wet_dry_mix"],
            enabled=bool(row["enabled"]),
        )


@dataclass
class Tag:
    id: int
    name: str
    ordering: int
    ubiquitous: bool = False

    @property
    def is_user_defined(self) -> bool:
        return not self.ubiquitous

    @classmethod
    def from_row(cls, row: Row) -> Tag:
        return cls(
            id=row["id"],
            name=row["name"],
            ordering=row["ordering"],
            ubiquitous=bool(row["ubiquitous"]),
        )


@dataclass(frozen=True)
class TagInfo:
    """A tag along with the number of sound fonts that carry it."""
    tag: Tag
    sound_fonts_count: int
