"""
Pitch primitives - PitchClass and note-name normalization.

PitchClass represents the 12 chromatic pitches (octave-independent).
Spelling is a display concern: chord symbols use one canonical name per
pitch class, with both sharp and flat spellings accepted on input.
"""

from __future__ import annotations

import logging
from enum import IntEnum

logger = logging.getLogger(__name__)

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
_FLAT_NAMES: list[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]
_CANONICAL_NAMES: list[str] = ["C", "C#", "D", "Eb", "E", "F", "F#", "G", "Ab", "A", "Bb", "B"]

NOTE_TO_PC: dict[str, int] = {
    **{name: pc for pc, name in enumerate(_SHARP_NAMES)},
    **{name: pc for pc, name in enumerate(_FLAT_NAMES)},
}


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C3 and C4 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def interval_to(self, other: PitchClass) -> int:
        """Ascending semitones (0-11) from this pitch class to another."""
        return (other.value - self.value) % 12

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self, prefer_flats: bool | None = None) -> str:
        """
        Get human-readable name.

        With no preference, the canonical chord-symbol spelling is used
        (C# and F# sharp, Eb/Ab/Bb flat).
        """
        if prefer_flats is None:
            return _CANONICAL_NAMES[self.value]
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'C#', 'Db'."""
        name = name.strip()
        if name in NOTE_TO_PC:
            return cls(NOTE_TO_PC[name])

        # Case-insensitive fallback ('eb', 'F#')
        if name:
            candidate = name[0].upper() + name[1:].lower()
            if candidate in NOTE_TO_PC:
                return cls(NOTE_TO_PC[candidate])

        raise ValueError(f"Unknown pitch class: {name}")


def normalize_note_name(text: str, default: str = "C") -> str:
    """
    Normalize free text to a note name.

    Takes the first two characters if they spell a note ('Bb7' -> 'Bb'),
    else the first character, else falls back to ``default``. Never raises.
    """
    trimmed = text.strip()
    for size in (2, 1):
        head = trimmed[:size]
        if not head:
            continue
        head = head[0].upper() + head[1:]
        if head in NOTE_TO_PC:
            return head
    logger.debug("Unrecognized note name %r, using %s", text, default)
    return default


def to_pitch_class(note: str) -> PitchClass:
    """Lenient conversion of a note name to its pitch class."""
    return PitchClass(NOTE_TO_PC[normalize_note_name(note)])


def interval_between(root: str, note: str) -> int:
    """Ascending semitones (0-11) from ``root`` to ``note``."""
    return to_pitch_class(root).interval_to(to_pitch_class(note))
