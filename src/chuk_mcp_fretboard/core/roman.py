"""
Harmonic state tokens - Roman numerals with accidental and extension.

A state token like 'bVIImaj7' or 'iim9' is the vocabulary of the style
transition tables. It is parsed once into a HarmonicState and carried through
generation; the string form is only used to look up transition tables.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from chuk_mcp_fretboard.constants import (
    DEGREE_FUNCTIONS,
    MINOR_DEGREE_FUNCTIONS,
    HarmonicFunction,
)

from .scale import is_minor_mode

ROMAN_TO_DEGREE: dict[str, int] = {
    "I": 0,
    "II": 1,
    "III": 2,
    "IV": 3,
    "V": 4,
    "VI": 5,
    "VII": 6,
}

_STATE_PATTERN = re.compile(r"^([b#]?)([IViv]+)(.*)$")


@dataclass(frozen=True)
class HarmonicState:
    """
    A parsed state token.

    Case of the numeral carries quality: uppercase is major-ish, lowercase is
    minor-ish. ``valid`` is False for tokens whose numeral could not be read;
    those keep the whole token as ``numeral`` and act as a tonic.

    Examples:
        HarmonicState.parse("bVIImaj7") -> accidental="b", numeral="VII", suffix="maj7"
        HarmonicState.parse("iim9")     -> accidental="", numeral="ii", suffix="m9"
    """

    accidental: str
    numeral: str
    suffix: str = ""
    valid: bool = True

    @classmethod
    def parse(cls, token: str) -> HarmonicState:
        """Parse a state token. Malformed tokens degrade, never raise."""
        text = token.strip()
        match = _STATE_PATTERN.match(text)
        if match:
            accidental, numeral, suffix = match.groups()
            cased = numeral.isupper() or numeral.islower()
            if cased and numeral.upper() in ROMAN_TO_DEGREE:
                return cls(accidental, numeral, suffix.strip())
        return cls("", text, "", valid=False)

    @property
    def roman(self) -> str:
        """Numeral portion including its accidental ('bVII', 'ii')."""
        return f"{self.accidental}{self.numeral}"

    @property
    def degree(self) -> int | None:
        """Zero-based scale degree, or None for malformed tokens."""
        if not self.valid:
            return None
        return ROMAN_TO_DEGREE[self.numeral.upper()]

    @property
    def alteration(self) -> int:
        """Semitone alteration from the accidental."""
        return {"b": -1, "#": 1}.get(self.accidental, 0)

    @property
    def is_minor(self) -> bool:
        return self.valid and self.numeral.islower()

    @property
    def is_borrowed(self) -> bool:
        """Built on an altered (non-diatonic) degree."""
        return bool(self.accidental)

    def with_suffix(self, suffix: str) -> HarmonicState:
        return HarmonicState(self.accidental, self.numeral, suffix, self.valid)

    def __str__(self) -> str:
        return f"{self.roman}{self.suffix}"


def detect_function(state: HarmonicState, mode: str) -> HarmonicFunction:
    """
    Classify a state's harmonic function from its scale degree.

    Major-ish and minor-ish modes share the same degree table; malformed
    states are treated as tonic.
    """
    degree = state.degree
    if degree is None:
        return HarmonicFunction.TONIC
    table = MINOR_DEGREE_FUNCTIONS if is_minor_mode(mode) else DEGREE_FUNCTIONS
    return table[degree]
