"""
Fretboard primitives - standard guitar tuning.

Strings are numbered 1 (high E) to 6 (low E), matching chord charts.
"""

from __future__ import annotations

from .pitch import PitchClass

# Open-string MIDI notes for strings 1 -> 6 (E4 B3 G3 D3 A2 E2)
STANDARD_TUNING: tuple[int, ...] = (64, 59, 55, 50, 45, 40)


def string_open_midi(string: int) -> int:
    """MIDI note of an open string."""
    if not 1 <= string <= len(STANDARD_TUNING):
        raise ValueError(f"String must be 1-{len(STANDARD_TUNING)}, got {string}")
    return STANDARD_TUNING[string - 1]


def string_pitch_class(string: int, fret: int) -> PitchClass:
    """Pitch class sounded by a string at a fret."""
    return PitchClass.from_midi(string_open_midi(string) + fret)


def find_frets_for_note(
    note: PitchClass,
    string: int,
    max_fret: int = 17,
    min_fret: int = 0,
) -> list[int]:
    """All frets on a string (inclusive range) that sound a pitch class."""
    return [
        fret
        for fret in range(min_fret, max_fret + 1)
        if string_pitch_class(string, fret) == note
    ]
