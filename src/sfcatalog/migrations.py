"""
Schema versioning.

A Migrator holds an ordered list of named steps: table creation steps
followed by upgrade stages. migrate() applies every step not yet recorded in
the schema_migrations marker table, all inside one write transaction, so a
store is either fully migrated or left exactly as it was.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from typing import Callable, NamedTuple

from sfcatalog.database import Database
from sfcatalog.errors import MigrationError
from sfcatalog.logger import get_logger
from sfcatalog.schema import TableSpec

logger = get_logger(__name__)

MARKER_TABLE = "schema_migrations"

MigrationFunction = Callable[[Database], None]


class MigrationStep(NamedTuple):
    name: str
    apply: MigrationFunction


def _table_step_name(table_name: str) -> str:
    return f"Create {table_name}"


class Migrator:
    """
    Ordered, named migration steps applied exactly once per store.

    Example:
        migrator = Migrator()
        for spec in creation_order():
            migrator.register_table(spec)
        migrator.register_migration("Add ubiquitous tags", ensure_ubiquitous_tags)
        migrator.migrate(db)
    """

    def __init__(self) -> None:
        self._steps: list[MigrationStep] = []

    @property
    def names(self) -> list[str]:
        return [step.name for step in self._steps]

    def register_table(self, spec: TableSpec) -> None:
        """
        Add a step that creates a table and its indexes.

        Raises:
            MigrationError: if a referenced table has no earlier creation step
        """
        registered = set(self.names)
        for ref in spec.references:
            if ref != spec.name and _table_step_name(ref) not in registered:
                raise MigrationError(
                    f"table {spec.name!r} registered before referenced table {ref!r}"
                )

        def create(db: Database) -> None:
            with db.write() as conn:
                conn.execute(spec.create_sql)
                for statement in spec.indexes:
                    conn.execute(statement)

        self._add(MigrationStep(_table_step_name(spec.name), create))

    def register_migration(self, name: str, fn: MigrationFunction) -> None:
        """Add a named upgrade stage; fn receives the store handle."""
        self._add(MigrationStep(name, fn))

    def _add(self, step: MigrationStep) -> None:
        if step.name in self.names:
            raise MigrationError(f"migration {step.name!r} is already registered")
        self._steps.append(step)

    def applied(self, db: Database) -> list[str]:
        """Names of the steps recorded as applied, in application order."""
        with db.read() as conn:
            exists = conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
                (MARKER_TABLE,),
            ).fetchone()
            if exists is None:
                return []
            rows = conn.execute(
                f"SELECT name FROM {MARKER_TABLE} ORDER BY ordinal"
            ).fetchall()
        return [row["name"] for row in rows]

    def pending(self, db: Database) -> list[str]:
        done = set(self.applied(db))
        return [name for name in self.names if name not in done]

    def migrate(self, db: Database) -> list[str]:
        """
        Apply every pending step.

        Returns:
            Names of the steps applied by this call (empty when up to date)

        Raises:
            MigrationError: if any step fails; nothing is applied in that case
        """
        current = None
        newly_applied: list[str] = []
        try:
            with db.write() as conn:
                conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {MARKER_TABLE} ("
                    "name TEXT PRIMARY KEY, "
                    "ordinal INTEGER NOT NULL, "
                    "applied_at TEXT NOT NULL DEFAULT (CURRENT_TIMESTAMP))"
                )
                done = set(self.applied(db))
                for step in self._steps:
                    if step.name in done:
                        continue
                    current = step.name
                    logger.debug("Applying migration %r", step.name)
                    step.apply(db)
                    ordinal = len(done) + len(newly_applied)
                    conn.execute(
                        f"INSERT INTO {MARKER_TABLE}(name, ordinal) VALUES (?, ?)",
                        (step.name, ordinal),
                    )
                    newly_applied.append(step.name)
                current = None
                version = len(done) + len(newly_applied)
                conn.execute(f"PRAGMA user_version = {int(version)}")
        except MigrationError:
            raise
        except Exception as exc:
            where = f"migration {current!r}" if current else "migration"
            logger.error("%s failed: %s", where, exc)
            raise MigrationError(f"{where} failed: {exc}") from exc

        for name in newly_applied:
            logger.info("Applied migration %r", name)
        return newly_applied