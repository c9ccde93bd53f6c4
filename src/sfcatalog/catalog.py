"""
Sound fonts, presets, favorites and their audio settings.

The catalog owns the lifecycle of these records. Importing a sound font
creates its presets, one AudioSettings row per preset, and the memberships
of the ubiquitous tags its location implies. Deleting a sound font cascades
to its presets, their favorites, every AudioSettings row they own and the
delay and reverb configs attached to those.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

import sqlite3
from pathlib import Path
from typing import Callable, Iterable, Optional, TypeVar, Union

from sfcatalog.database import Database
from sfcatalog.engine import SF2FileInfo, SoundFontEngine
from sfcatalog.errors import (
    DuplicateError,
    LoadFailure,
    NotFoundError,
    ResourceNotFound,
    UbiquitousTagError,
)
from sfcatalog.logger import get_logger
from sfcatalog.models import (
    AudioSettings,
    DelayConfig,
    Favorite,
    Location,
    LocationKind,
    Preset,
    ReverbConfig,
    SoundFont,
)
from sfcatalog.resources import BuiltinSoundFont, ResourceFiles
from sfcatalog.tags import fetch_tag, insert_memberships, ubiquitous_tag

logger = get_logger(__name__)

T = TypeVar("T")

FAVORITE_NAME_FORMAT = "{preset} - {count}"

_AUDIO_SETTINGS_COLUMNS = (
    "keyboard_lowest_note",
    "keyboard_lowest_note_enabled",
    "pitch_bend_range",
    "preset_transpose",
    "preset_tuning",
    "gain",
    "pan",
    "overrides",
)


def _fetch_one(
    conn: sqlite3.Connection,
    sql: str,
    params: tuple,
    factory: Callable[[sqlite3.Row], T],
    what: str,
) -> T:
    row = conn.execute(sql, params).fetchone()
    if row is None:
        raise NotFoundError(f"no {what}")
    return factory(row)


def _audio_settings_values(settings: AudioSettings) -> tuple:
    lowest = settings.keyboard_lowest_note
    return (
        lowest.midi_value if lowest is not None else None,
        int(settings.keyboard_lowest_note_enabled),
        settings.pitch_bend_range,
        settings.preset_transpose,
        float(settings.preset_tuning),
        float(settings.gain),
        float(settings.pan),
        settings.overrides.to_json(),
    )


# ---------------------------------------------------------------------------
# Sound fonts
# ---------------------------------------------------------------------------

def add_sound_font(
    db: Database,
    engine: SoundFontEngine,
    display_name: str,
    location: Location,
    tags: Iterable[int] = (),
) -> SoundFont:
    """
    Import the sound font at location.

    The engine is asked for the file's metadata first; the sound font, its
    presets and their audio settings, and its tag memberships are then
    written in one transaction.

    Args:
        db: store handle
        engine: source of the file's metadata
        display_name: name shown for the sound font
        location: where the file lives
        tags: ids of user tags to add the sound font to

    Raises:
        LoadFailure: if the engine cannot read the file
        DuplicateError: if a sound font with the same path is already cataloged
        NotFoundError: if a tag id does not exist
        UbiquitousTagError: if a tag id names a system tag
    """
    info: SF2FileInfo = engine.load(location.path)
    original_name = Path(location.path).stem

    with db.write() as conn:
        existing = conn.execute(
            "SELECT id FROM sound_fonts WHERE location_path = ?", (location.path,)
        ).fetchone()
        if existing is not None:
            raise DuplicateError(f"sound font at {location.path!r} is already cataloged")

        cursor = conn.execute(
            "INSERT INTO sound_fonts(display_name, location_kind, location_path, "
            "location_bookmark, original_name, embedded_name, embedded_author, "
            "embedded_comment, embedded_copyright) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                display_name,
                location.kind.value,
                location.path,
                location.bookmark,
                original_name,
                info.embedded_name,
                info.embedded_author,
                info.embedded_comment,
                info.embedded_copyright,
            ),
        )
        sound_font_id = cursor.lastrowid

        for index, descriptor in enumerate(info.presets):
            cursor = conn.execute(
                "INSERT INTO presets(sound_font_id, preset_index, bank, program, "
                "original_name, display_name) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    sound_font_id,
                    index,
                    descriptor.bank,
                    descriptor.program,
                    descriptor.name,
                    descriptor.name,
                ),
            )
            conn.execute(
                "INSERT INTO audio_settings(preset_id) VALUES (?)", (cursor.lastrowid,)
            )

        tag_ids = [ubiquitous_tag(db, kind).id for kind in location.ubiquitous_tags]
        for tag_id in tags:
            tag = fetch_tag(conn, tag_id)
            if tag.ubiquitous:
                raise UbiquitousTagError(
                    f"membership of system tag {tag.name!r} is fixed"
                )
            tag_ids.append(tag_id)
        insert_memberships(conn, sound_font_id, tag_ids)

        sound_font = _fetch_one(
            conn,
            "SELECT * FROM sound_fonts WHERE id = ?",
            (sound_font_id,),
            SoundFont.from_row,
            f"sound font with id {sound_font_id}",
        )

    logger.info(
        "Added sound font %r with %d presets from %s",
        display_name,
        len(info.presets),
        location.path,
    )
    return sound_font


def add_builtin_sound_fonts(
    db: Database, engine: SoundFontEngine, resources: ResourceFiles
) -> list[SoundFont]:
    """
    Import every built-in sound font whose file resolves and is not cataloged.

    A built-in whose resource is missing or cannot be loaded is skipped with
    a warning; the others are still imported.

    Returns:
        The sound fonts added by this call
    """
    added = []
    for font in BuiltinSoundFont:
        try:
            path = resources.resolve_builtin(font)
        except ResourceNotFound as exc:
            logger.warning("Skipping built-in sound font %r: %s", font.display_name, exc)
            continue
        location = Location(LocationKind.BUILTIN, str(path))
        if find_sound_font(db, location.path) is not None:
            continue
        try:
            added.append(add_sound_font(db, engine, font.display_name, location))
        except LoadFailure as exc:
            logger.warning("Skipping built-in sound font %r: %s", font.display_name, exc)
    return added


def get_sound_font(db: Database, sound_font_id: int) -> SoundFont:
    with db.read() as conn:
        return _fetch_one(
            conn,
            "SELECT * FROM sound_fonts WHERE id = ?",
            (sound_font_id,),
            SoundFont.from_row,
            f"sound font with id {sound_font_id}",
        )


def find_sound_font(db: Database, path: Union[str, Path]) -> Optional[SoundFont]:
    """Return the sound font cataloged at path, or None."""
    with db.read() as conn:
        row = conn.execute(
            "SELECT * FROM sound_fonts WHERE location_path = ?", (str(path),)
        ).fetchone()
    return SoundFont.from_row(row) if row is not None else None


def sound_fonts(db: Database, include_hidden: bool = True) -> list[SoundFont]:
    """All sound fonts ordered by display name."""
    sql = "SELECT * FROM sound_fonts"
    if not include_hidden:
        sql += " WHERE visible = 1"
    sql += " ORDER BY display_name COLLATE NOCASE, id"
    with db.read() as conn:
        rows = conn.execute(sql).fetchall()
    return [SoundFont.from_row(row) for row in rows]


def _update_sound_font(db: Database, sound_font_id: int, column: str, value) -> SoundFont:
    with db.write() as conn:
        cursor = conn.execute(
            f"UPDATE sound_fonts SET {column} = ? WHERE id = ?", (value, sound_font_id)
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"no sound font with id {sound_font_id}")
    return get_sound_font(db, sound_font_id)


def rename_sound_font(db: Database, sound_font_id: int, display_name: str) -> SoundFont:
    return _update_sound_font(db, sound_font_id, "display_name", display_name)


def set_notes(db: Database, sound_font_id: int, notes: str) -> SoundFont:
    return _update_sound_font(db, sound_font_id, "notes", notes)


def set_sound_font_visibility(db: Database, sound_font_id: int, visible: bool) -> SoundFont:
    return _update_sound_font(db, sound_font_id, "visible", int(visible))


def delete_sound_font(db: Database, sound_font_id: int) -> None:
    """
    Delete a sound font with its presets, favorites and their settings.

    Tags are untouched apart from losing this sound font as a member.

    Raises:
        NotFoundError: if the sound font does not exist
    """
    with db.write() as conn:
        sound_font = _fetch_one(
            conn,
            "SELECT * FROM sound_fonts WHERE id = ?",
            (sound_font_id,),
            SoundFont.from_row,
            f"sound font with id {sound_font_id}",
        )
        conn.execute("DELETE FROM sound_fonts WHERE id = ?", (sound_font_id,))
    logger.info("Deleted sound font %r", sound_font.display_name)


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

def presets(db: Database, sound_font_id: int, include_hidden: bool = False) -> list[Preset]:
    """
    The presets of a sound font ordered by index.

    Raises:
        NotFoundError: if the sound font does not exist
    """
    sql = "SELECT * FROM presets WHERE sound_font_id = ?"
    if not include_hidden:
        sql += " AND visible = 1"
    sql += " ORDER BY preset_index"
    with db.read() as conn:
        if conn.execute(
            "SELECT 1 FROM sound_fonts WHERE id = ?", (sound_font_id,)
        ).fetchone() is None:
            raise NotFoundError(f"no sound font with id {sound_font_id}")
        rows = conn.execute(sql, (sound_font_id,)).fetchall()
    return [Preset.from_row(row) for row in rows]


def get_preset(db: Database, preset_id: int) -> Preset:
    with db.read() as conn:
        return _fetch_one(
            conn,
            "SELECT * FROM presets WHERE id = ?",
            (preset_id,),
            Preset.from_row,
            f"preset with id {preset_id}",
        )


def _update_preset(db: Database, preset_id: int, column: str, value) -> Preset:
    with db.write() as conn:
        cursor = conn.execute(
            f"UPDATE presets SET {column} = ? WHERE id = ?", (value, preset_id)
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"no preset with id {preset_id}")
    return get_preset(db, preset_id)


def rename_preset(db: Database, preset_id: int, display_name: str) -> Preset:
    return _update_preset(db, preset_id, "display_name", display_name)


def set_preset_notes(db: Database, preset_id: int, notes: str) -> Preset:
    return _update_preset(db, preset_id, "notes", notes)


def set_preset_visibility(db: Database, preset_id: int, visible: bool) -> Preset:
    return _update_preset(db, preset_id, "visible", int(visible))


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------

def create_favorite(
    db: Database, preset_id: int, display_name: Optional[str] = None
) -> Favorite:
    """
    Create a favorite of a preset.

    The favorite starts with a copy of the preset's audio settings, including
    its delay and reverb configs. Without a display_name it is named
    "<preset name> - <n>", n counting the preset's favorites.

    Raises:
        NotFoundError: if the preset does not exist
    """
    with db.write() as conn:
        preset = _fetch_one(
            conn,
            "SELECT * FROM presets WHERE id = ?",
            (preset_id,),
            Preset.from_row,
            f"preset with id {preset_id}",
        )
        if display_name is None:
            (count,) = conn.execute(
                "SELECT COUNT(*) FROM favorites WHERE preset_id = ?", (preset_id,)
            ).fetchone()
            display_name = FAVORITE_NAME_FORMAT.format(
                preset=preset.display_name, count=count + 1
            )

        cursor = conn.execute(
            "INSERT INTO favorites(preset_id, display_name) VALUES (?, ?)",
            (preset_id, display_name),
        )
        favorite_id = cursor.lastrowid

        source = _fetch_one(
            conn,
            "SELECT * FROM audio_settings WHERE preset_id = ?",
            (preset_id,),
            AudioSettings.from_row,
            f"audio settings for preset {preset_id}",
        )
        columns = ", ".join(_AUDIO_SETTINGS_COLUMNS)
        placeholders = ", ".join("?" for _ in _AUDIO_SETTINGS_COLUMNS)
        cursor = conn.execute(
            f"INSERT INTO audio_settings(favorite_id, {columns}) VALUES (?, {placeholders})",
            (favorite_id,) + _audio_settings_values(source),
        )
        settings_id = cursor.lastrowid
        conn.execute(
            "INSERT INTO delay_configs(audio_settings_id, time, feedback, cutoff, "
            "wet_dry_mix, enabled) SELECT ?, time, feedback, cutoff, wet_dry_mix, "
            "enabled FROM delay_configs WHERE audio_settings_id = ?",
            (settings_id, source.id),
        )
        conn.execute(
            "INSERT INTO reverb_configs(audio_settings_id, room_preset, wet_dry_mix, "
            "enabled) SELECT ?, room_preset, wet_dry_mix, enabled FROM reverb_configs "
            "WHERE audio_settings_id = ?",
            (settings_id, source.id),
        )
        favorite = _fetch_one(
            conn,
            "SELECT * FROM favorites WHERE id = ?",
            (favorite_id,),
            Favorite.from_row,
            f"favorite with id {favorite_id}",
        )
    logger.info("Created favorite %r of preset %r", display_name, preset.display_name)
    return favorite


def favorites(db: Database, preset_id: int) -> list[Favorite]:
    """The favorites of a preset ordered by display name."""
    with db.read() as conn:
        rows = conn.execute(
            "SELECT * FROM favorites WHERE preset_id = ? "
            "ORDER BY display_name COLLATE NOCASE, id",
            (preset_id,),
        ).fetchall()
    return [Favorite.from_row(row) for row in rows]


def get_favorite(db: Database, favorite_id: int) -> Favorite:
    with db.read() as conn:
        return _fetch_one(
            conn,
            "SELECT * FROM favorites WHERE id = ?",
            (favorite_id,),
            Favorite.from_row,
            f"favorite with id {favorite_id}",
        )


def rename_favorite(db: Database, favorite_id: int, display_name: str) -> Favorite:
    with db.write() as conn:
        cursor = conn.execute(
            "UPDATE favorites SET display_name = ? WHERE id = ?",
            (display_name, favorite_id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"no favorite with id {favorite_id}")
    return get_favorite(db, favorite_id)


def delete_favorite(db: Database, favorite_id: int) -> None:
    with db.write() as conn:
        cursor = conn.execute("DELETE FROM favorites WHERE id = ?", (favorite_id,))
        if cursor.rowcount == 0:
            raise NotFoundError(f"no favorite with id {favorite_id}")
    logger.info("Deleted favorite %d", favorite_id)


# ---------------------------------------------------------------------------
# Audio settings
# ---------------------------------------------------------------------------

def audio_settings_for_preset(db: Database, preset_id: int) -> AudioSettings:
    with db.read() as conn:
        return _fetch_one(
            conn,
            "SELECT * FROM audio_settings WHERE preset_id = ?",
            (preset_id,),
            AudioSettings.from_row,
            f"audio settings for preset {preset_id}",
        )


def audio_settings_for_favorite(db: Database, favorite_id: int) -> AudioSettings:
    with db.read() as conn:
        return _fetch_one(
            conn,
            "SELECT * FROM audio_settings WHERE favorite_id = ?",
            (favorite_id,),
            AudioSettings.from_row,
            f"audio settings for favorite {favorite_id}",
        )


def global_audio_settings(db: Database) -> AudioSettings:
    """
    The settings row owned by neither a preset nor a favorite.

    Raises:
        NotFoundError: if the store was not migrated
    """
    with db.read() as conn:
        return _fetch_one(
            conn,
            "SELECT * FROM audio_settings WHERE preset_id IS NULL "
            "AND favorite_id IS NULL ORDER BY id LIMIT 1",
            (),
            AudioSettings.from_row,
            "global audio settings",
        )


def ensure_global_audio_settings(db: Database) -> AudioSettings:
    """Create the global settings row with its delay and reverb configs if missing."""
    with db.write() as conn:
        row = conn.execute(
            "SELECT id FROM audio_settings WHERE preset_id IS NULL AND favorite_id IS NULL"
        ).fetchone()
        if row is None:
            settings_id = conn.execute(
                "INSERT INTO audio_settings DEFAULT VALUES"
            ).lastrowid
            conn.execute(
                "INSERT INTO delay_configs(audio_settings_id) VALUES (?)", (settings_id,)
            )
            conn.execute(
                "INSERT INTO reverb_configs(audio_settings_id) VALUES (?)", (settings_id,)
            )
            logger.info("Created global audio settings")
    return global_audio_settings(db)


def save_audio_settings(db: Database, settings: AudioSettings) -> AudioSettings:
    """
    Write every field of settings back to its row.

    Raises:
        NotFoundError: if the row does not exist
    """
    assignments = ", ".join(f"{column} = ?" for column in _AUDIO_SETTINGS_COLUMNS)
    with db.write() as conn:
        cursor = conn.execute(
            f"UPDATE audio_settings SET {assignments} WHERE id = ?",
            _audio_settings_values(settings) + (settings.id,),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"no audio settings with id {settings.id}")
    return settings


def _modify_overrides(
    db: Database, settings_id: int, change: Callable[[AudioSettings], None]
) -> AudioSettings:
    with db.write() as conn:
        settings = _fetch_one(
            conn,
            "SELECT * FROM audio_settings WHERE id = ?",
            (settings_id,),
            AudioSettings.from_row,
            f"audio settings with id {settings_id}",
        )
        change(settings)
        conn.execute(
            "UPDATE audio_settings SET overrides = ? WHERE id = ?",
            (settings.overrides.to_json(), settings_id),
        )
    return settings


def set_zone_override(
    db: Database, settings_id: int, zone: int, generator: int, value: float
) -> AudioSettings:
    return _modify_overrides(
        db, settings_id, lambda s: s.overrides.set_override(zone, generator, value)
    )


def remove_zone_override(
    db: Database, settings_id: int, zone: int, generator: int
) -> AudioSettings:
    return _modify_overrides(
        db, settings_id, lambda s: s.overrides.remove_override(zone, generator)
    )


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------

def _require_audio_settings(conn: sqlite3.Connection, settings_id: int) -> None:
    row = conn.execute(
        "SELECT 1 FROM audio_settings WHERE id = ?", (settings_id,)
    ).fetchone()
    if row is None:
        raise NotFoundError(f"no audio settings with id {settings_id}")


def delay_config(db: Database, settings_id: int) -> Optional[DelayConfig]:
    """The delay config attached to an AudioSettings row, or None."""
    with db.read() as conn:
        row = conn.execute(
            "SELECT * FROM delay_configs WHERE audio_settings_id = ?", (settings_id,)
        ).fetchone()
    return DelayConfig.from_row(row) if row is not None else None


def save_delay_config(db: Database, settings_id: int, config: DelayConfig) -> DelayConfig:
    """Insert or replace the delay config of an AudioSettings row."""
    with db.write() as conn:
        _require_audio_settings(conn, settings_id)
        conn.execute(
            "INSERT INTO delay_configs(audio_settings_id, time, feedback, cutoff, "
            "wet_dry_mix, enabled) VALUES (?, ?, ?, ?, ?, ?) "
            "ON CONFLICT(audio_settings_id) DO UPDATE SET time = excluded.time, "
            "feedback = excluded.feedback, cutoff = excluded.cutoff, "
            "wet_dry_mix = excluded.wet_dry_mix, enabled = excluded.enabled",
            (
                settings_id,
                float(config.time),
                float(config.feedback),
                float(config.cutoff),
                float(config.wet_dry_mix),
                int(config.enabled),
            ),
        )
    return delay_config(db, settings_id)


def reverb_config(db: Database, settings_id: int) -> Optional[ReverbConfig]:
    """The reverb config attached to an AudioSettings row, or None."""
    with db.read() as conn:
        row = conn.execute(
            "SELECT * FROM reverb_configs WHERE audio_settings_id = ?", (settings_id,)
        ).fetchone()
    return ReverbConfig.from_row(row) if row is not None else None


def save_reverb_config(db: Database, settings_id: int, config: ReverbConfig) -> ReverbConfig:
    """Insert or replace the reverb config of an AudioSettings row."""
    with db.write() as conn:
        _require_audio_settings(conn, settings_id)
        conn.execute(
            "INSERT INTO reverb_configs(audio_settings_id, room_preset, wet_dry_mix, "
            "enabled) VALUES (?, ?, ?, ?) "
            "ON CONFLICT(audio_settings_id) DO UPDATE SET "
            "room_preset = excluded.room_preset, "
            "wet_dry_mix = excluded.wet_dry_mix, enabled = excluded.enabled",
            (
                settings_id,
                int(config.room_preset),
                float(config.wet_dry_mix),
                int(config.enabled),
            ),
        )
    return reverb_config(db, settings_id)
