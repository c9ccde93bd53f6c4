"""
Pitch tuning conversions.

Tuning is expressed as a cents offset of A4 from 440 Hz. The conversion
functions are vectorized and work with numpy arrays or scalars.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike

from sfcatalog.note import A4

REFERENCE_FREQUENCY = 440.0
STANDARD_TUNING = 440.0
SCIENTIFIC_TUNING = 432.0

CENTS_PER_OCTAVE = 1200.0
CENTS_PER_SEMITONE = 100
MIN_TUNING_CENTS = -2400.0
MAX_TUNING_CENTS = 2400.0

NO_OFFSET_LABEL = "None"
NO_NOTE_LABEL = "-"


class TuningSetting(NamedTuple):
    """Result of quantizing a tuning value for display."""

    cents: float
    frequency: float
    label: str


def cents_to_frequency(cents: ArrayLike) -> np.ndarray:
    """
    Convert a cents offset from A4 to the frequency of A4 in Hz.

    Uses the formula: frequency = 440 * 2^(cents / 1200)

    Example:
        >>> cents_to_frequency(0)
        440.0
        >>> cents_to_frequency(1200)
        880.0
    """
    cents = np.asarray(cents, dtype=np.float64)
    return REFERENCE_FREQUENCY * np.power(2.0, cents / CENTS_PER_OCTAVE)


def frequency_to_cents(frequency: ArrayLike) -> np.ndarray:
    """
    Convert an A4 frequency in Hz to a cents offset from 440 Hz.

    Uses the formula: cents = 1200 * log2(frequency / 440)

    Args:
        frequency: Frequency in Hz. Must be positive.

    Example:
        >>> frequency_to_cents(880.0)
        1200.0
    """
    frequency = np.asarray(frequency, dtype=np.float64)
    return CENTS_PER_OCTAVE * np.log2(frequency / REFERENCE_FREQUENCY)


def clamp_and_quantize_tuning(cents: float) -> TuningSetting:
    """
    Clamp a tuning offset and find the note A4 would be shifted to.

    The offset is clamped to [-2400, 2400]. When the clamped value is a whole
    number of semitones, the label is the note that many semitones from A4,
    spelled with flats below A4 and sharps above. Zero yields "None" and
    exactly 440 Hz. Fractional semitone offsets yield the "-" placeholder.
    NaN means standard tuning; infinite offsets clamp like any other.
    """
    cents = float(cents)
    if np.isnan(cents):
        cents = 0.0
    clamped = min(max(cents, MIN_TUNING_CENTS), MAX_TUNING_CENTS)
    frequency = float(cents_to_frequency(clamped))
    semitones = round(clamped / CENTS_PER_SEMITONE)

    if semitones * CENTS_PER_SEMITONE != clamped:
        return TuningSetting(clamped, frequency, NO_NOTE_LABEL)

    if semitones == 0:
        return TuningSetting(clamped, REFERENCE_FREQUENCY, NO_OFFSET_LABEL)

    note = A4.offset(semitones)
    label = note.label_with_flats if note < A4 else note.label_with_sharps
    return TuningSetting(clamped, frequency, label)


def tuning_from_frequency(frequency: float) -> TuningSetting:
    """
    Quantize an A4 frequency entered directly.

    The frequency is converted to cents and quantized the same way as
    clamp_and_quantize_tuning(); the resulting cents are rounded to an integer.
    Zero or negative frequencies fall back to standard tuning.
    """
    if frequency <= 0.0:
        frequency = STANDARD_TUNING
    # log2 of an equal-tempered ratio is rarely exact
    cents = round(float(frequency_to_cents(frequency)), 6)
    setting = clamp_and_quantize_tuning(cents)
    if setting.label == NO_NOTE_LABEL and setting.cents == cents:
        return setting._replace(cents=float(round(cents)), frequency=float(frequency))
    return setting._replace(cents=float(round(setting.cents)))
