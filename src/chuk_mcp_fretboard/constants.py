"""
Constants and enums for the fretboard harmony engine.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class HarmonicFunction(str, Enum):
    """
    Role of a chord within the key.

    Values are the wire tokens consumed by playback and the editor UI.
    """

    TONIC = "T"
    SUBDOMINANT = "SD"
    DOMINANT = "D"


# Canonical flow T -> SD -> D -> T
FUNCTION_FLOW: dict[HarmonicFunction, HarmonicFunction] = {
    HarmonicFunction.TONIC: HarmonicFunction.SUBDOMINANT,
    HarmonicFunction.SUBDOMINANT: HarmonicFunction.DOMINANT,
    HarmonicFunction.DOMINANT: HarmonicFunction.TONIC,
}

# Scale-degree index (0-6) to function, shared by major and minor-ish modes
DEGREE_FUNCTIONS: tuple[HarmonicFunction, ...] = (
    HarmonicFunction.TONIC,
    HarmonicFunction.SUBDOMINANT,
    HarmonicFunction.TONIC,
    HarmonicFunction.SUBDOMINANT,
    HarmonicFunction.DOMINANT,
    HarmonicFunction.TONIC,
    HarmonicFunction.DOMINANT,
)

# Minor-ish modes keep the same roles per degree (iv and bVI stay SD/T)
MINOR_DEGREE_FUNCTIONS: tuple[HarmonicFunction, ...] = DEGREE_FUNCTIONS

Resolution = Literal["1/2", "1/1"]

CELLS_PER_BAR = 2

DEFAULT_KEY = "C"
DEFAULT_MODE = "ionian"
DEFAULT_STYLE = "neo-soul"
DEFAULT_STATE = "I"

# Cadences used when a style pack does not declare its own
DEFAULT_MAJOR_CADENCE: tuple[str, str, str] = ("ii", "V", "I")
DEFAULT_MINOR_CADENCE: tuple[str, str, str] = ("iv", "V", "i")

# Transition scoring
MIN_TRANSITION_WEIGHT = 0.001
MIN_SAMPLE_WEIGHT = 0.0001
BORROW_PENALTY = 0.8
REPEAT_PENALTY = 0.4
TRIPLE_REPEAT_PENALTY = 0.6
SAME_FUNCTION_PENALTY = 0.15
FUNCTION_FLOW_BONUS = 0.1
OFF_FLOW_PENALTY = 0.15
CADENCE_APPROACH_BONUS = 0.3
CADENCE_ARRIVAL_BONUS = 0.5
SCORE_JITTER = 0.25

# Fretboard limits
STRING_COUNT = 6
MAX_FRET = 20
MAX_SPAN = 5
UNPLAYED = -1


class ErrorMessages:
    """Standardized error messages."""

    NO_VOICING = "No voicing options supplied for '{symbol}'."
    STYLE_NOT_FOUND = "Style '{name}' not found."
    INVALID_CELL = "Invalid harmony cell: {detail}"
    INVALID_TEMPLATE = "Voicing template '{template_id}' is invalid: {detail}"
    INVALID_BARS = "Invalid bar count: {bars}. Must be a positive integer."


class SuccessMessages:
    """Standardized success messages."""

    PROGRESSION_GENERATED = "Generated {cells} cells over {bars} bars in '{style}'."
    CELL_REHARMONIZED = "Reharmonized cell {index} to {symbol}."
