"""
Opening the application's catalog.

app_database() opens the store, registers the table creation steps and the
upgrade stages, and migrates before handing the store to the caller. No
other catalog access should happen before it returns.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from pathlib import Path
from typing import Optional, Union

from sfcatalog.catalog import add_builtin_sound_fonts, ensure_global_audio_settings
from sfcatalog.config import get_database_path
from sfcatalog.database import Database
from sfcatalog.engine import SF2MetadataEngine, SoundFontEngine
from sfcatalog.errors import MigrationError
from sfcatalog.logger import get_logger
from sfcatalog.migrations import Migrator
from sfcatalog.resources import ResourceFiles
from sfcatalog.schema import TABLES, creation_order
from sfcatalog.tags import ensure_ubiquitous_tags

logger = get_logger(__name__)

ADD_UBIQUITOUS_TAGS = "Add ubiquitous tags"
ADD_BUILTIN_FONTS = "Add builtin fonts"
ADD_GLOBAL_AUDIO_CONFIGS = "Add global audio configs"


def build_migrator(
    engine: SoundFontEngine, resources: ResourceFiles
) -> Migrator:
    """The application's migration steps in order."""
    migrator = Migrator()
    for spec in creation_order(TABLES):
        migrator.register_table(spec)
    migrator.register_migration(ADD_UBIQUITOUS_TAGS, ensure_ubiquitous_tags)
    migrator.register_migration(
        ADD_BUILTIN_FONTS, lambda db: add_builtin_sound_fonts(db, engine, resources)
    )
    migrator.register_migration(ADD_GLOBAL_AUDIO_CONFIGS, ensure_global_audio_settings)
    return migrator


def app_database(
    path: Optional[Union[str, Path]] = None,
    engine: Optional[SoundFontEngine] = None,
    resources: Optional[ResourceFiles] = None,
) -> Database:
    """
    Open and migrate the catalog.

    Args:
        path: Database file or ":memory:". If None, uses get_database_path().
        engine: Metadata source for built-in imports. If None, uses
            SF2MetadataEngine.
        resources: Bundled file lookup. If None, uses ResourceFiles().

    Raises:
        StorageError: if the store cannot be opened
        MigrationError: if migration fails; the store is closed
    """
    db = Database(path if path is not None else get_database_path())
    migrator = build_migrator(
        engine if engine is not None else SF2MetadataEngine(),
        resources if resources is not None else ResourceFiles(),
    )
    try:
        applied = migrator.migrate(db)
    except MigrationError:
        db.close()
        raise
    logger.info("Opened catalog %s (%d migrations applied)", db.path, len(applied))
    return db
