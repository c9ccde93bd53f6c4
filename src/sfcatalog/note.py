"""
MIDI note values and their textual labels.

Octave numbering follows the convention where MIDI 60 is "C4", so the valid
MIDI range [0, 127] spans "C-1" to "G9".

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

MIDI_MIN = 0
MIDI_MAX = 127

SHARP_TAG = "♯"
FLAT_TAG = "♭"
SHARP_TAGS = (SHARP_TAG, "#")
FLAT_TAGS = (FLAT_TAG, "b")

LABELS_WITH_SHARPS = (
    "C", "C♯", "D", "D♯", "E", "F", "F♯", "G", "G♯", "A", "A♯", "B",
)
LABELS_WITH_FLATS = (
    "C", "D♭", "D", "E♭", "E", "F", "G♭", "G", "A♭", "A", "B♭", "B",
)
SOLFEGE_LABELS = (
    "Do", "Do", "Re", "Re", "Mi", "Fa", "Fa", "Sol", "Sol", "La", "La", "Ti",
)
ACCENTED_INDICES = frozenset({1, 3, 6, 8, 10})

_OCTAVE_PATTERN = re.compile(r"-?[0-9]")


@dataclass(frozen=True, order=True)
class Note:
    """
    A MIDI v1 note.

    Notes compare and hash by MIDI value. Construction outside [0, 127]
    raises ValueError; use note_from_label() for untrusted input.
    """

    midi_value: int

    def __post_init__(self) -> None:
        if not MIDI_MIN <= self.midi_value <= MIDI_MAX:
            raise ValueError(f"invalid MIDI note value {self.midi_value}")

    @property
    def note_index(self) -> int:
        """Position within the octave: C is 0, C♯ is 1, B is 11."""
        return self.midi_value % 12

    @property
    def octave(self) -> int:
        return self.midi_value // 12 - 1

    @property
    def accented(self) -> bool:
        """True for the black keys."""
        return self.note_index in ACCENTED_INDICES

    @property
    def label_with_sharps(self) -> str:
        return f"{LABELS_WITH_SHARPS[self.note_index]}{self.octave}"

    @property
    def label_with_flats(self) -> str:
        return f"{LABELS_WITH_FLATS[self.note_index]}{self.octave}"

    @property
    def label(self) -> str:
        return self.label_with_sharps

    @property
    def solfege(self) -> str:
        return SOLFEGE_LABELS[self.note_index]

    def offset(self, semitones: int) -> Note:
        """Return the note the given number of semitones away."""
        return Note(self.midi_value + semitones)

    def __str__(self) -> str:
        return self.label


C4 = Note(60)
A4 = Note(69)


def note_from_label(label: str) -> Optional[Note]:
    """
    Parse a note label such as "C4", "F#3", "B♭-1" or "G9".

    Valid labels hold an upper-case letter A-G, an optional single accidental
    from "#♯b♭", and an octave in [-1, 9]. The resulting MIDI value must lie in
    [0, 127].

    Returns:
        The Note, or None if the label is malformed or out of range
    """
    if not isinstance(label, str) or not 1 < len(label) < 5:
        return None

    letter, remaining = label[0], label[1:]
    if letter not in "ABCDEFG":
        return None
    offset = LABELS_WITH_SHARPS.index(letter)

    if remaining[:1] in SHARP_TAGS:
        offset += 1
        remaining = remaining[1:]
    elif remaining[:1] in FLAT_TAGS:
        offset -= 1
        remaining = remaining[1:]

    if not _OCTAVE_PATTERN.fullmatch(remaining):
        return None
    octave = int(remaining)

    midi_value = (octave + 1) * 12 + offset
    if not MIDI_MIN <= midi_value <= MIDI_MAX:
        return None

    return Note(midi_value)


def label_from_note(midi_value: int, prefer_sharps: bool = True) -> str:
    """
    Return the label for a MIDI value.

    Args:
        midi_value: MIDI note value in [0, 127]
        prefer_sharps: spell accidentals with sharps (default) or flats

    Raises:
        ValueError: if midi_value is outside [0, 127]
    """
    note = Note(midi_value)
    return note.label_with_sharps if prefer_sharps else note.label_with_flats
