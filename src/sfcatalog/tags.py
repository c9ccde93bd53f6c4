"""
Tags: named groups of sound fonts.

Four ubiquitous tags (All, Built-in, Added, External) always exist; their
membership follows from each sound font's location and is maintained by the
catalog. User tags can be created, renamed, reordered and deleted, and their
membership is managed with tag_sound_font() and untag_sound_font().

Every function takes the store handle first.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

import sqlite3
from typing import Iterable, Sequence

from sfcatalog.config import handle_error
from sfcatalog.database import Database
from sfcatalog.errors import (
    DuplicateTagError,
    InvalidTagNameError,
    NotFoundError,
    TaggingError,
    UbiquitousTagError,
)
from sfcatalog.logger import get_logger
from sfcatalog.models import SoundFont, Tag, TagInfo, UbiquitousTag

logger = get_logger(__name__)

TAG_LIST_SEPARATOR = ", "


def fetch_tag(conn: sqlite3.Connection, tag_id: int) -> Tag:
    row = conn.execute("SELECT * FROM tags WHERE id = ?", (tag_id,)).fetchone()
    if row is None:
        raise NotFoundError(f"no tag with id {tag_id}")
    return Tag.from_row(row)


def _require_sound_font(conn: sqlite3.Connection, sound_font_id: int) -> None:
    row = conn.execute(
        "SELECT 1 FROM sound_fonts WHERE id = ?", (sound_font_id,)
    ).fetchone()
    if row is None:
        raise NotFoundError(f"no sound font with id {sound_font_id}")


def _name_in_use(conn: sqlite3.Connection, name: str) -> bool:
    row = conn.execute("SELECT 1 FROM tags WHERE name = ?", (name,)).fetchone()
    return row is not None


def _clean_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise InvalidTagNameError("tag names cannot be empty")
    return cleaned


def ensure_ubiquitous_tags(db: Database) -> list[Tag]:
    """
    Create whichever ubiquitous tags are missing.

    Tags are looked up by name and created in canonical order, so running
    this any number of times leaves exactly one tag per system name.

    Returns:
        The four ubiquitous tags in canonical order
    """
    tags = []
    with db.write() as conn:
        for kind in UbiquitousTag:
            row = conn.execute(
                "SELECT * FROM tags WHERE name = ?", (kind.display_name,)
            ).fetchone()
            if row is None:
                cursor = conn.execute(
                    "INSERT INTO tags(name, ordering, ubiquitous) VALUES (?, ?, 1)",
                    (kind.display_name, kind.ordering),
                )
                logger.info("Created ubiquitous tag %r", kind.display_name)
                tags.append(fetch_tag(conn, cursor.lastrowid))
                continue
            tag = Tag.from_row(row)
            if not tag.ubiquitous:
                # a user tag that took a system name before the upgrade
                conn.execute("UPDATE tags SET ubiquitous = 1 WHERE id = ?", (tag.id,))
                tag.ubiquitous = True
            tags.append(tag)
    return tags


def ubiquitous_tag(db: Database, kind: UbiquitousTag) -> Tag:
    """
    Return the stored tag for a system tag kind.

    Raises:
        NotFoundError: if ensure_ubiquitous_tags() has not run on this store
    """
    with db.read() as conn:
        row = conn.execute(
            "SELECT * FROM tags WHERE name = ? AND ubiquitous = 1", (kind.display_name,)
        ).fetchone()
    if row is None:
        raise NotFoundError(f"ubiquitous tag {kind.display_name!r} is missing")
    return Tag.from_row(row)


def get_tag(db: Database, tag_id: int) -> Tag:
    with db.read() as conn:
        return fetch_tag(conn, tag_id)


def all_tags(db: Database) -> list[Tag]:
    """Every tag in display order."""
    with db.read() as conn:
        rows = conn.execute("SELECT * FROM tags ORDER BY ordering, id").fetchall()
    return [Tag.from_row(row) for row in rows]


def tag_infos(db: Database) -> list[TagInfo]:
    """Every tag in display order with the number of sound fonts carrying it."""
    with db.read() as conn:
        rows = conn.execute(
            "SELECT t.*, COUNT(ts.sound_font_id) AS sound_fonts_count "
            "FROM tags t LEFT JOIN tagged_sound_fonts ts ON ts.tag_id = t.id "
            "GROUP BY t.id ORDER BY t.ordering, t.id"
        ).fetchall()
    return [TagInfo(Tag.from_row(row), row["sound_fonts_count"]) for row in rows]


def tags_for_sound_font(db: Database, sound_font_id: int) -> list[Tag]:
    """
    The tags of a sound font in display order, each at most once.

    Raises:
        NotFoundError: if the sound font does not exist
    """
    with db.read() as conn:
        _require_sound_font(conn, sound_font_id)
        rows = conn.execute(
            "SELECT t.* FROM tags t "
            "JOIN tagged_sound_fonts ts ON ts.tag_id = t.id "
            "WHERE ts.sound_font_id = ? ORDER BY t.ordering, t.id",
            (sound_font_id,),
        ).fetchall()
    return [Tag.from_row(row) for row in rows]


def sound_fonts_tagged(db: Database, tag_id: int) -> list[SoundFont]:
    """
    The sound fonts carrying a tag, ordered by display name.

    Raises:
        NotFoundError: if the tag does not exist
    """
    with db.read() as conn:
        fetch_tag(conn, tag_id)
        rows = conn.execute(
            "SELECT sf.* FROM sound_fonts sf "
            "JOIN tagged_sound_fonts ts ON ts.sound_font_id = sf.id "
            "WHERE ts.tag_id = ? ORDER BY sf.display_name COLLATE NOCASE, sf.id",
            (tag_id,),
        ).fetchall()
    return [SoundFont.from_row(row) for row in rows]


def generate_tags_list(tags: Iterable[Tag]) -> str:
    """Join tag names with ', ' in the order given. No tags yields ''."""
    return TAG_LIST_SEPARATOR.join(tag.name for tag in tags)


def unique_tag_name(db: Database, base: str) -> str:
    """Return base, or the first of 'base 1', 'base 2', ... not already in use."""
    with db.read() as conn:
        if not _name_in_use(conn, base):
            return base
        suffix = 1
        while _name_in_use(conn, f"{base} {suffix}"):
            suffix += 1
    return f"{base} {suffix}"


def create_tag(db: Database, name: str) -> Tag:
    """
    Create a user tag placed after all existing tags.

    Raises:
        InvalidTagNameError: if the name is empty after trimming
        DuplicateTagError: if a tag with that name exists
    """
    name = _clean_name(name)
    with db.write() as conn:
        if _name_in_use(conn, name):
            raise DuplicateTagError(name)
        (ordering,) = conn.execute(
            "SELECT COALESCE(MAX(ordering) + 1, 0) FROM tags"
        ).fetchone()
        cursor = conn.execute(
            "INSERT INTO tags(name, ordering, ubiquitous) VALUES (?, ?, 0)",
            (name, ordering),
        )
        tag = fetch_tag(conn, cursor.lastrowid)
    logger.info("Created tag %r", name)
    return tag


def rename_tag(db: Database, tag_id: int, name: str) -> Tag:
    """
    Rename a user tag.

    Raises:
        NotFoundError: if the tag does not exist
        UbiquitousTagError: if the tag is a system tag
        InvalidTagNameError: if the name is empty after trimming
        DuplicateTagError: if another tag has that name
    """
    name = _clean_name(name)
    with db.write() as conn:
        tag = fetch_tag(conn, tag_id)
        if tag.ubiquitous:
            raise UbiquitousTagError(f"cannot rename system tag {tag.name!r}")
        if name == tag.name:
            return tag
        if _name_in_use(conn, name):
            raise DuplicateTagError(name)
        conn.execute("UPDATE tags SET name = ? WHERE id = ?", (name, tag_id))
    logger.info("Renamed tag %r to %r", tag.name, name)
    tag.name = name
    return tag


def reorder_tags(db: Database, tag_ids: Sequence[int]) -> list[Tag]:
    """
    Put the given tags first, in the given order.

    Tags not listed keep their relative order after the listed ones. Orderings
    are renumbered from zero.

    Returns:
        Every tag in the new display order

    Raises:
        NotFoundError: if an id does not name a tag
        ValueError: if an id is listed twice
    """
    if len(set(tag_ids)) != len(tag_ids):
        raise ValueError("tag ids must be unique")
    with db.write() as conn:
        current = [
            row["id"]
            for row in conn.execute("SELECT id FROM tags ORDER BY ordering, id")
        ]
        known = set(current)
        for tag_id in tag_ids:
            if tag_id not in known:
                raise NotFoundError(f"no tag with id {tag_id}")
        listed = set(tag_ids)
        order = list(tag_ids) + [tag_id for tag_id in current if tag_id not in listed]
        conn.executemany(
            "UPDATE tags SET ordering = ? WHERE id = ?",
            [(position, tag_id) for position, tag_id in enumerate(order)],
        )
    return all_tags(db)


def delete_tag(db: Database, tag_id: int) -> None:
    """
    Delete a user tag. Sound fonts that carried it are left untouched.

    Raises:
        NotFoundError: if the tag does not exist
        UbiquitousTagError: if the tag is a system tag
    """
    with db.write() as conn:
        tag = fetch_tag(conn, tag_id)
        if tag.ubiquitous:
            raise UbiquitousTagError(f"cannot delete system tag {tag.name!r}")
        conn.execute("DELETE FROM tagged_sound_fonts WHERE tag_id = ?", (tag_id,))
        conn.execute("DELETE FROM tags WHERE id = ?", (tag_id,))
    logger.info("Deleted tag %r", tag.name)


def insert_memberships(
    conn: sqlite3.Connection, sound_font_id: int, tag_ids: Iterable[int]
) -> None:
    """Add memberships inside an open write transaction, ignoring existing ones."""
    conn.executemany(
        "INSERT OR IGNORE INTO tagged_sound_fonts(sound_font_id, tag_id) VALUES (?, ?)",
        [(sound_font_id, tag_id) for tag_id in tag_ids],
    )


def tag_sound_font(db: Database, sound_font_id: int, tag_id: int) -> None:
    """
    Add a sound font to a user tag.

    Tagging a sound font that already carries the tag is a soft conflict
    handled by handle_error() with TaggingError.

    Raises:
        NotFoundError: if the sound font or tag does not exist
        UbiquitousTagError: if the tag is a system tag
    """
    with db.write() as conn:
        _require_sound_font(conn, sound_font_id)
        tag = fetch_tag(conn, tag_id)
        if tag.ubiquitous:
            raise UbiquitousTagError(f"membership of system tag {tag.name!r} is fixed")
        existing = conn.execute(
            "SELECT 1 FROM tagged_sound_fonts WHERE sound_font_id = ? AND tag_id = ?",
            (sound_font_id, tag_id),
        ).fetchone()
        if existing is not None:
            handle_error(
                f"sound font {sound_font_id} is already tagged {tag.name!r}",
                exception_class=TaggingError,
            )
            return
        insert_memberships(conn, sound_font_id, [tag_id])


def untag_sound_font(db: Database, sound_font_id: int, tag_id: int) -> None:
    """
    Remove a sound font from a user tag.

    Untagging a sound font that does not carry the tag is a soft conflict
    handled by handle_error() with TaggingError.

    Raises:
        NotFoundError: if the sound font or tag does not exist
        UbiquitousTagError: if the tag is a system tag
    """
    with db.write() as conn:
        _require_sound_font(conn, sound_font_id)
        tag = fetch_tag(conn, tag_id)
        if tag.ubiquitous:
            raise UbiquitousTagError(f"membership of system tag {tag.name!r} is fixed")
        cursor = conn.execute(
            "DELETE FROM tagged_sound_fonts WHERE sound_font_id = ? AND tag_id = ?",
            (sound_font_id, tag_id),
        )
        if cursor.rowcount == 0:
            handle_error(
                f"sound font {sound_font_id} is not tagged {tag.name!r}",
                exception_class=TaggingError,
            )
