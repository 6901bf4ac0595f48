"""
Scale primitives - ScaleType, Key and mode-name resolution.

Scales are interval patterns from a root. Keys are scale types applied to a
root pitch. Mode names arrive as free text from the editor, so resolution is
lenient and falls back to the major scale.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import ClassVar

from .pitch import PitchClass, to_pitch_class

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaleType:
    """
    A scale defined by its step pattern in semitones.

    The steps are from one degree to the next (not cumulative).
    A major scale is: W W H W W W H (2 2 1 2 2 2 1 semitones).
    Pentatonic and hexatonic collections have fewer steps.

    Immutable and hashable.
    """

    steps: tuple[int, ...]
    name: str = ""

    # Common scale types (defined after class)
    MAJOR: ClassVar[ScaleType]
    NATURAL_MINOR: ClassVar[ScaleType]
    HARMONIC_MINOR: ClassVar[ScaleType]
    MELODIC_MINOR: ClassVar[ScaleType]
    DORIAN: ClassVar[ScaleType]
    PHRYGIAN: ClassVar[ScaleType]
    LYDIAN: ClassVar[ScaleType]
    MIXOLYDIAN: ClassVar[ScaleType]
    LOCRIAN: ClassVar[ScaleType]
    MAJOR_PENTATONIC: ClassVar[ScaleType]
    MINOR_PENTATONIC: ClassVar[ScaleType]
    BLUES_HEXATONIC: ClassVar[ScaleType]

    def __post_init__(self) -> None:
        total = sum(self.steps)
        if total != 12:
            raise ValueError(f"Scale steps must sum to 12 semitones, got {total}")

    @property
    def size(self) -> int:
        """Number of distinct notes in the scale."""
        return len(self.steps)

    def offsets(self) -> list[int]:
        """Cumulative semitone offsets of each degree from the root."""
        result = [0]
        for step in self.steps[:-1]:
            result.append(result[-1] + step)
        return result

    def get_pitches(self, root: PitchClass) -> list[PitchClass]:
        """All pitch classes in this scale starting from root (octave excluded)."""
        return [root.transpose(offset) for offset in self.offsets()]

    def __str__(self) -> str:
        return self.name or f"ScaleType({self.steps})"


ScaleType.MAJOR = ScaleType((2, 2, 1, 2, 2, 2, 1), "major")
ScaleType.NATURAL_MINOR = ScaleType((2, 1, 2, 2, 1, 2, 2), "natural minor")
ScaleType.HARMONIC_MINOR = ScaleType((2, 1, 2, 2, 1, 3, 1), "harmonic minor")
ScaleType.MELODIC_MINOR = ScaleType((2, 1, 2, 2, 2, 2, 1), "melodic minor")
ScaleType.DORIAN = ScaleType((2, 1, 2, 2, 2, 1, 2), "dorian")
ScaleType.PHRYGIAN = ScaleType((1, 2, 2, 2, 1, 2, 2), "phrygian")
ScaleType.LYDIAN = ScaleType((2, 2, 2, 1, 2, 2, 1), "lydian")
ScaleType.MIXOLYDIAN = ScaleType((2, 2, 1, 2, 2, 1, 2), "mixolydian")
ScaleType.LOCRIAN = ScaleType((1, 2, 2, 1, 2, 2, 2), "locrian")
ScaleType.MAJOR_PENTATONIC = ScaleType((2, 2, 3, 2, 3), "major pentatonic")
ScaleType.MINOR_PENTATONIC = ScaleType((3, 2, 2, 3, 2), "minor pentatonic")
ScaleType.BLUES_HEXATONIC = ScaleType((3, 2, 1, 1, 3, 2), "blues hexatonic")


# Keys are mode names with case, spaces, underscores and hyphens removed
_MODE_MAP: dict[str, ScaleType] = {
    "ionian": ScaleType.MAJOR,
    "major": ScaleType.MAJOR,
    "aeolian": ScaleType.NATURAL_MINOR,
    "minor": ScaleType.NATURAL_MINOR,
    "naturalminor": ScaleType.NATURAL_MINOR,
    "dorian": ScaleType.DORIAN,
    "melodicminor": ScaleType.MELODIC_MINOR,
    "harmonicminor": ScaleType.HARMONIC_MINOR,
    "mixolydian": ScaleType.MIXOLYDIAN,
    "phrygian": ScaleType.PHRYGIAN,
    "lydian": ScaleType.LYDIAN,
    "locrian": ScaleType.LOCRIAN,
    "majorpentatonic": ScaleType.MAJOR_PENTATONIC,
    "minorpentatonic": ScaleType.MINOR_PENTATONIC,
    "blueshexatonic": ScaleType.BLUES_HEXATONIC,
}

_MINOR_MODES: frozenset[str] = frozenset(
    {
        "aeolian",
        "minor",
        "naturalminor",
        "dorian",
        "phrygian",
        "locrian",
        "melodicminor",
        "harmonicminor",
        "minorpentatonic",
        "blueshexatonic",
    }
)


def _mode_key(name: str) -> str:
    return re.sub(r"[\s_\-]+", "", name).lower()


def resolve_mode(name: str) -> ScaleType:
    """
    Resolve a mode name ('ionian', 'natural minor', 'melodicMinor', ...).

    Unknown names fall back to the major scale.
    """
    scale = _MODE_MAP.get(_mode_key(name))
    if scale is None:
        logger.debug("Unknown mode %r, using major scale", name)
        return ScaleType.MAJOR
    return scale


def is_minor_mode(name: str) -> bool:
    """Whether a mode has a minor third above its tonic."""
    return _mode_key(name) in _MINOR_MODES


@dataclass(frozen=True)
class Key:
    """
    A key is a root pitch class plus a scale type.

    This is the context for resolving scale degrees to actual pitches.

    Examples:
        Key(PitchClass.C, ScaleType.MAJOR) = C major
        Key(PitchClass.D, ScaleType.DORIAN) = D dorian
    """

    root: PitchClass
    scale: ScaleType

    def get_pitches(self) -> list[PitchClass]:
        """Get all pitch classes in this key."""
        return self.scale.get_pitches(self.root)

    def degree_to_pitch(self, degree: int, alteration: int = 0) -> PitchClass:
        """
        Resolve a zero-based scale degree to a pitch class.

        Degrees past the end of a short scale (pentatonic vii) resolve to the
        tonic. Alteration is in semitones: -1 = flat, +1 = sharp.
        """
        pitches = self.get_pitches()
        base = pitches[degree] if 0 <= degree < len(pitches) else pitches[0]
        return base.transpose(alteration)

    def __str__(self) -> str:
        return f"{self.root.spell()} {self.scale}"

    @classmethod
    def from_names(cls, key: str, mode: str) -> Key:
        """Build a key from lenient note and mode names."""
        return cls(to_pitch_class(key), resolve_mode(mode))
