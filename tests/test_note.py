"""
Tests for MIDI notes and note labels.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

import pytest

from sfcatalog.note import (
    Note,
    C4,
    A4,
    note_from_label,
    label_from_note,
)


class TestNote:
    """Test Note properties."""

    def test_middle_c(self):
        """Note 60 is C4."""
        assert C4.midi_value == 60
        assert C4.octave == 4
        assert C4.note_index == 0
        assert C4.label == "C4"

    def test_lowest_and_highest(self):
        """The MIDI range ends are labeled."""
        assert Note(0).label == "C-1"
        assert Note(127).label == "G9"

    def test_out_of_range_raises(self):
        """Values outside 0-127 raise ValueError."""
        with pytest.raises(ValueError):
            Note(128)
        with pytest.raises(ValueError):
            Note(-1)

    def test_labels_with_sharps_and_flats(self):
        """Accidentals are spelled both ways."""
        note = Note(61)
        assert note.label_with_sharps == "C♯4"
        assert note.label_with_flats == "D♭4"

    def test_accented_are_black_keys(self):
        """Accented notes are the black keys."""
        accented = [Note(v).accented for v in range(60, 72)]
        assert accented == [
            False, True, False, True, False, False,
            True, False, True, False, True, False,
        ]

    def test_solfege(self):
        """Solfege names follow the pitch class."""
        assert C4.solfege == "Do"
        assert A4.solfege == "La"
        assert Note(71).solfege == "Ti"

    def test_offset(self):
        """offset moves by semitones."""
        assert A4.offset(3) == Note(72)
        assert A4.offset(-69) == Note(0)

    def test_ordering_and_hashing(self):
        """Notes order and hash by MIDI value."""
        assert Note(60) < Note(61)
        assert len({Note(60), Note(60), Note(61)}) == 2

    def test_str(self):
        """str uses the sharp label."""
        assert str(A4) == "A4"


class TestNoteFromLabel:
    """Test parsing of note labels."""

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("C4", 60),
            ("C-1", 0),
            ("G9", 127),
            ("A4", 69),
            ("F#3", 54),
            ("C♯4", 61),
            ("Db4", 61),
            ("D♭4", 61),
            ("B♭-1", 10),
            ("C#-1", 1),
        ],
    )
    def test_valid_labels(self, label, expected):
        """Valid labels parse to their notes."""
        assert note_from_label(label).midi_value == expected

    @pytest.mark.parametrize(
        "label",
        [
            "",
            "C",
            "c4",
            "H4",
            "G#9",
            "Cb-1",
            "Cbb1",
            "C10",
            "C-2",
            "C#-10",
            "C 4",
            "4C",
        ],
    )
    def test_invalid_labels(self, label):
        """Invalid labels parse to None."""
        assert note_from_label(label) is None

    def test_non_string(self):
        """Non-string input parses to None."""
        assert note_from_label(None) is None


class TestLabelFromNote:
    """Test label rendering and the label round trip."""

    def test_prefer_flats(self):
        """Flats are used when asked for."""
        assert label_from_note(70, prefer_sharps=False) == "B♭4"
        assert label_from_note(70) == "A♯4"

    def test_out_of_range_raises(self):
        """Labels for values outside 0-127 raise ValueError."""
        with pytest.raises(ValueError):
            label_from_note(200)

    def test_round_trip_with_sharps(self):
        """Every sharp label parses back to its note."""
        for value in range(128):
            assert note_from_label(label_from_note(value, prefer_sharps=True)).midi_value == value

    def test_round_trip_with_flats(self):
        """Every flat label parses back to its note."""
        for value in range(128):
            assert note_from_label(label_from_note(value, prefer_sharps=False)).midi_value == value
