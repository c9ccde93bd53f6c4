"""
Tests for tuning conversions and quantization.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

import pytest
import numpy as np

from sfcatalog.tuning import (
    STANDARD_TUNING,
    SCIENTIFIC_TUNING,
    TuningSetting,
    cents_to_frequency,
    frequency_to_cents,
    clamp_and_quantize_tuning,
    tuning_from_frequency,
)


class TestCentsFrequencyConversions:
    """Test cents <-> frequency conversions."""

    def test_zero_cents_is_a440(self):
        """Zero cents is 440 Hz."""
        assert cents_to_frequency(0) == pytest.approx(440.0)

    def test_octave_doubles(self):
        """1200 cents doubles the frequency."""
        assert cents_to_frequency(1200) == pytest.approx(880.0)
        assert cents_to_frequency(-1200) == pytest.approx(220.0)

    def test_frequency_to_cents_octave(self):
        """880 Hz is 1200 cents."""
        assert frequency_to_cents(880.0) == pytest.approx(1200.0)

    def test_array_input(self):
        """Conversions accept arrays."""
        cents = np.array([-1200.0, 0.0, 1200.0])
        np.testing.assert_allclose(cents_to_frequency(cents), [220.0, 440.0, 880.0])

    def test_round_trip_over_range(self):
        """frequency_to_cents inverts cents_to_frequency within 1e-6."""
        cents = np.linspace(-2400.0, 2400.0, 4801)
        roundtrip = frequency_to_cents(cents_to_frequency(cents))
        np.testing.assert_allclose(roundtrip, cents, atol=1e-6)


class TestClampAndQuantize:
    """Test clamp_and_quantize_tuning."""

    def test_zero_is_no_offset(self):
        """Zero cents is the unshifted setting."""
        assert clamp_and_quantize_tuning(0) == TuningSetting(0.0, 440.0, "None")

    def test_clamps_low(self):
        """Offsets below -2400 clamp."""
        setting = clamp_and_quantize_tuning(-2500)
        assert setting.cents == -2400.0
        assert setting.frequency == pytest.approx(110.0)
        assert setting.label == "A2"

    def test_clamps_high(self):
        """Offsets above 2400 clamp."""
        setting = clamp_and_quantize_tuning(3000)
        assert setting.cents == 2400.0
        assert setting.frequency == pytest.approx(1760.0)
        assert setting.label == "A6"

    def test_semitone_up_uses_sharps(self):
        """Upward semitones are spelled with sharps."""
        setting = clamp_and_quantize_tuning(100)
        assert setting.label == "A♯4"
        assert setting.frequency == pytest.approx(466.1638, rel=1e-6)

    def test_semitone_down_uses_flats(self):
        """Downward semitones are spelled with flats."""
        assert clamp_and_quantize_tuning(-100).label == "A♭4"
        assert clamp_and_quantize_tuning(-300).label == "G♭4"

    def test_fractional_semitone_has_no_label(self):
        """Fractional semitones get the placeholder label."""
        setting = clamp_and_quantize_tuning(50)
        assert setting.label == "-"
        assert setting.cents == 50.0
        assert setting.frequency == pytest.approx(cents_to_frequency(50))

    def test_nan_is_standard_tuning(self):
        """NaN cents quantize to the zero offset."""
        assert clamp_and_quantize_tuning(float("nan")) == TuningSetting(0.0, 440.0, "None")

    def test_infinity_clamps(self):
        """Infinite offsets clamp to the range limits."""
        assert clamp_and_quantize_tuning(float("inf")).cents == 2400.0
        assert clamp_and_quantize_tuning(float("-inf")).cents == -2400.0


class TestTuningFromFrequency:
    """Test the frequency entry path."""

    def test_standard(self):
        """440 Hz is standard tuning."""
        assert tuning_from_frequency(STANDARD_TUNING) == TuningSetting(0.0, 440.0, "None")

    def test_scientific_keeps_entered_frequency(self):
        """Off-grid frequencies keep the entered value."""
        setting = tuning_from_frequency(SCIENTIFIC_TUNING)
        assert setting.label == "-"
        assert setting.cents == -32.0
        assert setting.frequency == 432.0

    def test_octave_up(self):
        """880 Hz is an octave up."""
        setting = tuning_from_frequency(880.0)
        assert setting.cents == 1200.0
        assert setting.label == "A5"

    def test_equal_tempered_semitone(self):
        """An equal-tempered semitone gets a note label."""
        frequency = float(cents_to_frequency(100))
        assert tuning_from_frequency(frequency).label == "A♯4"

    def test_clamped(self):
        """Frequencies outside the range clamp."""
        setting = tuning_from_frequency(100000.0)
        assert setting.cents == 2400.0
        assert setting.label == "A6"

    def test_non_positive_falls_back_to_standard(self):
        """Zero or negative frequencies mean standard tuning."""
        assert tuning_from_frequency(0.0).label == "None"
        assert tuning_from_frequency(-5.0).frequency == 440.0
