"""
Harmony engine - progression generation, reharmonization and voicing.
"""

from chuk_mcp_fretboard.harmony.generator import (
    HarmonyGenerator,
    cells_per_bar,
    contains_cadence,
    generate_progression,
)
from chuk_mcp_fretboard.harmony.realize import realize_state, state_of_cell
from chuk_mcp_fretboard.harmony.reharmonizer import reharmonize, reharmonize_cell
from chuk_mcp_fretboard.harmony.sampling import score_candidates, weighted_pick
from chuk_mcp_fretboard.harmony.voicing_pass import assign_voicings

__all__ = [
    "HarmonyGenerator",
    "assign_voicings",
    "cells_per_bar",
    "contains_cadence",
    "generate_progression",
    "realize_state",
    "reharmonize",
    "reharmonize_cell",
    "score_candidates",
    "state_of_cell",
    "weighted_pick",
]
