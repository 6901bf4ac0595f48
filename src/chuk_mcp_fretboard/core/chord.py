"""
Chord primitives - ChordKind registry and chord-symbol parsing.

A chord kind is a normalized quality token ('m7', 'maj9#11') plus the set of
intervals (semitones from the root, mod 12) a voicing of that kind may sound.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .pitch import normalize_note_name


@dataclass(frozen=True)
class ChordKind:
    """
    A chord quality defined by its intervals from the root.

    Intervals are measured from the root, not stacked, and reduced mod 12
    (a ninth is 2, an eleventh is 5).

    Immutable and hashable.
    """

    token: str
    intervals: frozenset[int]
    label: str = ""

    def allows(self, interval: int) -> bool:
        """Whether an interval (any octave) belongs to this kind."""
        return interval % 12 in self.intervals

    @property
    def third(self) -> int | None:
        """The chord's third (3 or 4 semitones), if present."""
        for candidate in (4, 3):
            if candidate in self.intervals:
                return candidate
        return None

    @property
    def seventh(self) -> int | None:
        """The chord's seventh (10 or 11), if present."""
        for candidate in (10, 11):
            if candidate in self.intervals:
                return candidate
        return None

    def __str__(self) -> str:
        return self.label or self.token or "major"


def _kind(token: str, intervals: tuple[int, ...], label: str) -> ChordKind:
    return ChordKind(token, frozenset(intervals), label)


CHORD_KINDS: dict[str, ChordKind] = {
    kind.token: kind
    for kind in (
        _kind("", (0, 4, 7), "Major"),
        _kind("m", (0, 3, 7), "Minor"),
        _kind("6", (0, 4, 7, 9), "6"),
        _kind("m6", (0, 3, 7, 9), "Minor 6"),
        _kind("6/9", (0, 4, 7, 9, 2), "6/9"),
        _kind("add9", (0, 4, 7, 2), "Add 9"),
        _kind("madd9", (0, 3, 7, 2), "Minor add 9"),
        _kind("7", (0, 4, 7, 10), "Dominant 7"),
        _kind("m7", (0, 3, 7, 10), "Minor 7"),
        _kind("maj7", (0, 4, 7, 11), "Major 7"),
        _kind("9", (0, 4, 7, 10, 2), "9"),
        _kind("m9", (0, 3, 7, 10, 2), "Minor 9"),
        _kind("maj9", (0, 4, 7, 11, 2), "Major 9"),
        _kind("maj9#11", (0, 4, 7, 11, 2, 6), "Major 9 #11"),
        _kind("m11", (0, 3, 7, 10, 2, 5), "Minor 11"),
        _kind("13", (0, 4, 7, 10, 2, 9), "13"),
        _kind("7b9", (0, 4, 7, 10, 1), "7 b9"),
        _kind("7#9", (0, 4, 7, 10, 3), "7 #9"),
        _kind("sus", (0, 5, 7), "Sus4"),
        _kind("sus2", (0, 2, 7), "Sus2"),
        _kind("7sus4", (0, 5, 7, 10), "7 sus4"),
        _kind("9sus4", (0, 5, 7, 10, 2), "9 sus4"),
        _kind("7sus2", (0, 2, 7, 10), "7 sus2"),
        _kind("dim", (0, 3, 6, 9), "Diminished"),
        _kind("m7b5", (0, 3, 6, 10), "Half-diminished"),
        _kind("aug", (0, 4, 8), "Augmented"),
    )
}

# Case-sensitive aliases checked first ('M7' is major, 'm7' is minor)
_EXACT_ALIASES: dict[str, str] = {
    "M": "",
    "M7": "maj7",
    "M9": "maj9",
    "Δ": "maj7",
    "Δ7": "maj7",
    "Δ9": "maj9",
    "°": "dim",
    "°7": "dim",
    "ø": "m7b5",
    "ø7": "m7b5",
    "+": "aug",
}

# Lowercased aliases
_KIND_ALIASES: dict[str, str] = {
    "maj": "",
    "major": "",
    "min": "m",
    "minor": "m",
    "-": "m",
    "add6": "6",
    "maj6": "6",
    "min6": "m6",
    "minor6": "m6",
    "69": "6/9",
    "6add9": "6/9",
    "add2": "add9",
    "madd2": "madd9",
    "dom7": "7",
    "min7": "m7",
    "minor7": "m7",
    "-7": "m7",
    "ma7": "maj7",
    "major7": "maj7",
    "min9": "m9",
    "minor9": "m9",
    "m7(9)": "m9",
    "ma9": "maj9",
    "maj7(9)": "maj9",
    "maj7add9": "maj9",
    "maj7#11": "maj9#11",
    "lyd": "maj9#11",
    "min11": "m11",
    "m7(11)": "m11",
    "b9": "7b9",
    "7(b9)": "7b9",
    "#9": "7#9",
    "7(#9)": "7#9",
    "sus4": "sus",
    "7sus": "7sus4",
    "9sus": "9sus4",
    "dim7": "dim",
    "diminished": "dim",
    "m7-5": "m7b5",
    "min7b5": "m7b5",
    "halfdim": "m7b5",
    "augmented": "aug",
}


def resolve_chord_kind(raw: str) -> str:
    """
    Normalize a chord suffix to a registered kind token.

    Unknown suffixes are returned with whitespace removed so the caller can
    still label a fallback voicing with them.
    """
    cleaned = re.sub(r"\s+", "", raw)
    if cleaned in CHORD_KINDS:
        return cleaned
    if cleaned in _EXACT_ALIASES:
        return _EXACT_ALIASES[cleaned]
    lowered = cleaned.lower()
    if lowered in CHORD_KINDS:
        return lowered
    return _KIND_ALIASES.get(lowered, cleaned)


def get_chord_kind(token: str) -> ChordKind | None:
    """Look up a chord kind after alias normalization."""
    return CHORD_KINDS.get(resolve_chord_kind(token))


_SYMBOL_PATTERN = re.compile(r"^([A-Ga-g][b#]?)(.*)$")


def split_chord_symbol(symbol: str) -> tuple[str, str] | None:
    """
    Split a chord symbol into (root, kind token).

    'Bbm7' -> ('Bb', 'm7'), 'F#maj9#11' -> ('F#', 'maj9#11').
    Returns None if the symbol does not start with a note letter.
    """
    match = _SYMBOL_PATTERN.match(symbol.strip())
    if not match:
        return None
    raw_root, raw_kind = match.groups()
    return normalize_note_name(raw_root), resolve_chord_kind(raw_kind)


# Extensions with no registered minor form, mapped to the nearest minor kind
_MINOR_SUBSTITUTES: dict[str, str] = {
    "6/9": "m9",
    "13": "m11",
    "7b9": "m7",
    "7#9": "m7",
    "maj9#11": "m9",
    "aug": "m",
}


def minor_suffix(suffix: str) -> str:
    """
    Give a suffix minor quality for a lowercase numeral.

    Suffixes that already say minor, suspended or diminished are kept;
    kinds with no minor counterpart take the nearest registered minor kind;
    'maj...' becomes 'm...'; anything else gets an 'm' prefix.

    Examples:
        minor_suffix("7") -> "m7"
        minor_suffix("maj9") -> "m9"
        minor_suffix("m11") -> "m11"
        minor_suffix("6/9") -> "m9"
        minor_suffix("sus4") -> "sus4"
    """
    substitute = _MINOR_SUBSTITUTES.get(resolve_chord_kind(suffix))
    if substitute is not None:
        return substitute
    if suffix.startswith("maj"):
        return "m" + suffix[3:]
    if suffix.startswith("m") or "sus" in suffix:
        return suffix
    if "dim" in suffix or "°" in suffix or "ø" in suffix:
        return suffix
    return "m" + suffix


def format_voicing_id(root: str, kind: str, variant: str) -> str:
    """Stable identifier for a voicing: 'C:maj:open-c-shape'."""
    return f"{root}:{kind or 'maj'}:{variant}"
