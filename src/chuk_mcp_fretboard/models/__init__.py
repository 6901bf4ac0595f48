"""
Pydantic models for the fretboard harmony engine.

This module provides:
- HarmonyCell: One slot of a generated progression
- HarmonyContext / ProgressionRequest: Generation parameters
- StylePack: Per-genre transition tables
- Voicing / StringFret: Fretted chord shapes
- VoicingTemplate: Movable interval layouts
"""

from chuk_mcp_fretboard.models.harmony import (
    HarmonyCell,
    HarmonyContext,
    ProgressionRequest,
    progression_from_wire,
    progression_to_wire,
)
from chuk_mcp_fretboard.models.style import Cadences, StyleMetadata, StylePack
from chuk_mcp_fretboard.models.voicing import StringFret, Voicing, VoicingTemplate

__all__ = [
    "Cadences",
    "HarmonyCell",
    "HarmonyContext",
    "ProgressionRequest",
    "StringFret",
    "StyleMetadata",
    "StylePack",
    "Voicing",
    "VoicingTemplate",
    "progression_from_wire",
    "progression_to_wire",
]
