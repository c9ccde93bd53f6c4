"""
Durable record of the active and selected sound font, preset and tag.

The record is a small JSON document kept outside the catalog store.
Updates are whole-record read-modify-write cycles serialized by a lock, and
the file is replaced atomically so readers never see a partial write.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Optional, Union

from sfcatalog.config import get_active_state_path, handle_error
from sfcatalog.database import Database
from sfcatalog.errors import NotFoundError, StorageError
from sfcatalog.logger import get_logger
from sfcatalog.models import UbiquitousTag
from sfcatalog.tags import ubiquitous_tag

logger = get_logger(__name__)

_KEYS = {
    "active_sound_font_id": "activeSoundFontId",
    "selected_sound_font_id": "selectedSoundFontId",
    "active_preset_id": "activePresetId",
    "active_tag_id": "activeTagId",
}


def _optional_id(value: Any) -> Optional[int]:
    # bool is an int subclass but never a valid id
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


@dataclass(frozen=True)
class ActiveState:
    """
    Which sound font and preset drive audio, which sound font is being
    browsed, and which tag filters the list. Every field may be None.
    """

    active_sound_font_id: Optional[int] = None
    selected_sound_font_id: Optional[int] = None
    active_preset_id: Optional[int] = None
    active_tag_id: Optional[int] = None

    @property
    def preset_source(self) -> Optional[int]:
        """The sound font whose presets are listed: the selected one, else the active one."""
        if self.selected_sound_font_id is not None:
            return self.selected_sound_font_id
        return self.active_sound_font_id

    def to_dict(self) -> dict[str, Optional[int]]:
        return {key: getattr(self, attr) for attr, key in _KEYS.items()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ActiveState:
        """Build a state from a decoded document; unknown keys are ignored."""
        values = {attr: _optional_id(data.get(key)) for attr, key in _KEYS.items()}
        if values["selected_sound_font_id"] is None:
            values["selected_sound_font_id"] = values["active_sound_font_id"]
        return cls(**values)

    @classmethod
    def from_json(cls, text: str) -> ActiveState:
        """
        Raises:
            ValueError: if text is not a JSON object
        """
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("active state document must be a JSON object")
        return cls.from_dict(data)


class ActiveStateStore:
    """
    The active-state document at a fixed path.

    Args:
        path: Location of the document. If None, uses get_active_state_path().
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._path = Path(path) if path is not None else get_active_state_path()
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ActiveState:
        """
        Read the document.

        A missing document yields the defaults. A corrupt one goes through
        handle_error() with StorageError and yields the defaults in lenient mode.
        """
        with self._lock:
            return self._load()

    def _load(self) -> ActiveState:
        try:
            data = self._path.read_bytes()
        except FileNotFoundError:
            return ActiveState()
        except OSError as exc:
            raise StorageError(f"cannot read {self._path}: {exc}") from exc
        try:
            return ActiveState.from_json(data.decode("utf-8"))
        except ValueError as exc:
            handle_error(
                f"corrupt active state document {self._path}: {exc}",
                exception_class=StorageError,
            )
            return ActiveState()

    def save(self, state: ActiveState) -> None:
        with self._lock:
            self._save(state)

    def _save(self, state: ActiveState) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=self._path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(state.to_json())
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"cannot write {self._path}: {exc}") from exc
        logger.debug("Saved active state to %s", self._path)

    def update(self, fn: Callable[[ActiveState], ActiveState]) -> ActiveState:
        """
        Replace the record with fn(current record) as one serialized step.

        Example:
            store.update(lambda s: replace(s, active_preset_id=preset.id))
        """
        with self._lock:
            state = fn(self._load())
            self._save(state)
            return state

    def resolve(self, db: Database) -> ActiveState:
        """
        Load the record with references checked against the catalog.

        Ids of sound fonts, presets or tags that no longer exist become None,
        and a missing tag falls back to the "All" tag.
        """
        state = self.load()
        with db.read() as conn:
            def exists(table: str, row_id: Optional[int]) -> bool:
                if row_id is None:
                    return False
                return conn.execute(
                    f"SELECT 1 FROM {table} WHERE id = ?", (row_id,)
                ).fetchone() is not None

            checks = {
                "active_sound_font_id": "sound_fonts",
                "selected_sound_font_id": "sound_fonts",
                "active_preset_id": "presets",
                "active_tag_id": "tags",
            }
            changes: dict[str, Optional[int]] = {}
            for attr, table in checks.items():
                value = getattr(state, attr)
                if value is not None and not exists(table, value):
                    logger.warning("Dropping dangling %s %d", attr, value)
                    changes[attr] = None

        state = replace(state, **changes)
        if state.selected_sound_font_id is None:
            state = replace(state, selected_sound_font_id=state.active_sound_font_id)
        if state.active_tag_id is None:
            try:
                state = replace(state, active_tag_id=ubiquitous_tag(db, UbiquitousTag.ALL).id)
            except NotFoundError:
                logger.warning("No 'All' tag to default the active tag to")
        return state
