"""
Table definitions for the catalog store.

Each TableSpec lists the tables it references through foreign keys.
creation_order() sorts specs so that every referenced table is created
before the table that references it.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from typing import Iterable, NamedTuple

from sfcatalog.errors import MigrationError


class TableSpec(NamedTuple):
    """
    Definition of one table.

    Attributes:
        name: table name
        columns: column definitions and table constraints, in order
        references: names of the tables this one has foreign keys to
        indexes: extra CREATE INDEX statements
    """

    name: str
    columns: tuple[str, ...]
    references: tuple[str, ...] = ()
    indexes: tuple[str, ...] = ()

    @property
    def create_sql(self) -> str:
        body = ",\n    ".join(self.columns)
        return f"CREATE TABLE IF NOT EXISTS {self.name} (\n    {body}\n)"


SOUND_FONTS = TableSpec(
    "sound_fonts",
    (
        "id INTEGER PRIMARY KEY AUTOINCREMENT",
        "display_name TEXT NOT NULL",
        "location_kind TEXT NOT NULL CHECK (location_kind IN ('builtin', 'installed', 'bookmark'))",
        "location_path TEXT NOT NULL UNIQUE",
        "location_bookmark BLOB",
        "original_name TEXT NOT NULL",
        "embedded_name TEXT NOT NULL DEFAULT ''",
        "embedded_author TEXT NOT NULL DEFAULT ''",
        "embedded_comment TEXT NOT NULL DEFAULT ''",
        "embedded_copyright TEXT NOT NULL DEFAULT ''",
        "notes TEXT NOT NULL DEFAULT ''",
        "visible INTEGER NOT NULL DEFAULT 1",
    ),
)

PRESETS = TableSpec(
    "presets",
    (
        "id INTEGER PRIMARY KEY AUTOINCREMENT",
        "sound_font_id INTEGER NOT NULL REFERENCES sound_fonts(id) ON DELETE CASCADE",
        "preset_index INTEGER NOT NULL",
        "bank INTEGER NOT NULL",
        "program INTEGER NOT NULL",
        "original_name TEXT NOT NULL",
        "display_name TEXT NOT NULL",
        "notes TEXT NOT NULL DEFAULT ''",
        "visible INTEGER NOT NULL DEFAULT 1",
        "UNIQUE (sound_font_id, preset_index)",
    ),
    references=("sound_fonts",),
)

FAVORITES = TableSpec(
    "favorites",
    (
        "id INTEGER PRIMARY KEY AUTOINCREMENT",
        "preset_id INTEGER NOT NULL REFERENCES presets(id) ON DELETE CASCADE",
        "display_name TEXT NOT NULL",
        "notes TEXT NOT NULL DEFAULT ''",
    ),
    references=("presets",),
    indexes=("CREATE INDEX IF NOT EXISTS idx_favorites_preset ON favorites(preset_id)",),
)

AUDIO_SETTINGS = TableSpec(
    "audio_settings",
    (
        "id INTEGER PRIMARY KEY AUTOINCREMENT",
        "preset_id INTEGER UNIQUE REFERENCES presets(id) ON DELETE CASCADE",
        "favorite_id INTEGER UNIQUE REFERENCES favorites(id) ON DELETE CASCADE",
        "keyboard_lowest_note INTEGER CHECK (keyboard_lowest_note BETWEEN 0 AND 127)",
        "keyboard_lowest_note_enabled INTEGER NOT NULL DEFAULT 0",
        "pitch_bend_range INTEGER",
        "preset_transpose INTEGER",
        "preset_tuning REAL NOT NULL DEFAULT 0.0",
        "gain REAL NOT NULL DEFAULT 1.0",
        "pan REAL NOT NULL DEFAULT 0.0",
        "overrides TEXT NOT NULL DEFAULT '{}'",
        "CHECK (preset_id IS NULL OR favorite_id IS NULL)",
    ),
    references=("presets", "favorites"),
)

DELAY_CONFIGS = TableSpec(
    "delay_configs",
    (
        "id INTEGER PRIMARY KEY AUTOINCREMENT",
        "audio_settings_id INTEGER NOT NULL UNIQUE REFERENCES audio_settings(id) ON DELETE CASCADE",
        "time REAL NOT NULL DEFAULT 0.25",
        "feedback REAL NOT NULL DEFAULT 0.7",
        "cutoff REAL NOT NULL DEFAULT 2000.0",
        "wet_dry_mix REAL NOT NULL DEFAULT 25.0",
        "enabled INTEGER NOT NULL DEFAULT 0",
    ),
    references=("audio_settings",),
)

REVERB_CONFIGS = TableSpec(
    "reverb_configs",
    (
        "id INTEGER PRIMARY KEY AUTOINCREMENT",
        "audio_settings_id INTEGER NOT NULL UNIQUE REFERENCES audio_settings(id) ON DELETE CASCADE",
        "room_preset INTEGER NOT NULL DEFAULT 0",
        "wet_dry_mix REAL NOT NULL DEFAULT 25.0",
        "enabled INTEGER NOT NULL DEFAULT 0",
    ),
    references=("audio_settings",),
)

TAGS = TableSpec(
    "tags",
    (
        "id INTEGER PRIMARY KEY AUTOINCREMENT",
        "name TEXT NOT NULL UNIQUE",
        "ordering INTEGER NOT NULL",
        "ubiquitous INTEGER NOT NULL DEFAULT 0",
    ),
)

TAGGED_SOUND_FONTS = TableSpec(
    "tagged_sound_fonts",
    (
        "sound_font_id INTEGER NOT NULL REFERENCES sound_fonts(id) ON DELETE CASCADE",
        "tag_id INTEGER NOT NULL REFERENCES tags(id) ON DELETE CASCADE",
        "PRIMARY KEY (sound_font_id, tag_id)",
    ),
    references=("sound_fonts", "tags"),
    indexes=("CREATE INDEX IF NOT EXISTS idx_tagged_sound_fonts_tag ON tagged_sound_fonts(tag_id)",),
)

TABLES: tuple[TableSpec, ...] = (
    SOUND_FONTS,
    PRESETS,
    FAVORITES,
    AUDIO_SETTINGS,
    DELAY_CONFIGS,
    REVERB_CONFIGS,
    TAGS,
    TAGGED_SOUND_FONTS,
)


def creation_order(tables: Iterable[TableSpec] = TABLES) -> list[TableSpec]:
    """
    Order tables so that each one follows every table it references.

    The sort is stable: among tables whose references are satisfied, the one
    listed first is created first. References to the table itself are
    ignored.

    Raises:
        MigrationError: on duplicate names, a reference to an unknown table,
            or a reference cycle
    """
    remaining = list(tables)
    names = [spec.name for spec in remaining]
    if len(set(names)) != len(names):
        raise MigrationError(f"duplicate table names in {names}")

    known = set(names)
    for spec in remaining:
        for ref in spec.references:
            if ref not in known:
                raise MigrationError(
                    f"table {spec.name!r} references unknown table {ref!r}"
                )

    ordered: list[TableSpec] = []
    created: set[str] = set()
    while remaining:
        for spec in remaining:
            if all(ref in created or ref == spec.name for ref in spec.references):
                break
        else:
            cycle = ", ".join(spec.name for spec in remaining)
            raise MigrationError(f"foreign key cycle among tables: {cycle}")
        remaining.remove(spec)
        ordered.append(spec)
        created.add(spec.name)
    return ordered
