"""
Core music primitives.

These are the invariants the harmony engine and voicing builder compose on:
- PitchClass: The 12 chromatic pitch classes (0-11)
- ScaleType / Key: Step patterns and mode resolution
- HarmonicState: Roman-numeral state tokens with accidental and suffix
- ChordKind: Interval sets for normalized chord suffixes
- Standard guitar tuning helpers
"""

from chuk_mcp_fretboard.core.chord import (
    CHORD_KINDS,
    ChordKind,
    format_voicing_id,
    get_chord_kind,
    minor_suffix,
    resolve_chord_kind,
    split_chord_symbol,
)
from chuk_mcp_fretboard.core.fretboard import (
    STANDARD_TUNING,
    find_frets_for_note,
    string_open_midi,
    string_pitch_class,
)
from chuk_mcp_fretboard.core.pitch import (
    PitchClass,
    interval_between,
    normalize_note_name,
    to_pitch_class,
)
from chuk_mcp_fretboard.core.roman import HarmonicState, detect_function
from chuk_mcp_fretboard.core.scale import Key, ScaleType, is_minor_mode, resolve_mode

__all__ = [
    # Pitch
    "PitchClass",
    "interval_between",
    "normalize_note_name",
    "to_pitch_class",
    # Scale
    "ScaleType",
    "Key",
    "resolve_mode",
    "is_minor_mode",
    # Harmonic state
    "HarmonicState",
    "detect_function",
    # Chord
    "CHORD_KINDS",
    "ChordKind",
    "format_voicing_id",
    "get_chord_kind",
    "minor_suffix",
    "resolve_chord_kind",
    "split_chord_symbol",
    # Fretboard
    "STANDARD_TUNING",
    "find_frets_for_note",
    "string_open_midi",
    "string_pitch_class",
]
