"""
Voicing system - templates, builder and continuity selection.

Templates are movable interval layouts; the builder places them on a
standard-tuned neck and the continuity selector threads one voicing per
chord through a progression.
"""

from chuk_mcp_fretboard.voicings.builder import (
    build_voicings,
    get_default_library,
    get_voicings_for_symbol,
    playability_score,
)
from chuk_mcp_fretboard.voicings.continuity import (
    NoVoicingAvailableError,
    choose_voicing,
    movement_cost,
)
from chuk_mcp_fretboard.voicings.catalog import TemplateLibrary

__all__ = [
    "NoVoicingAvailableError",
    "TemplateLibrary",
    "build_voicings",
    "choose_voicing",
    "get_default_library",
    "get_voicings_for_symbol",
    "movement_cost",
    "playability_score",
]
