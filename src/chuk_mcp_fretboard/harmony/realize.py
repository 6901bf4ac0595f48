"""
State realization - turn a harmonic state into a concrete HarmonyCell.
"""

from __future__ import annotations

from chuk_mcp_fretboard.constants import HarmonicFunction
from chuk_mcp_fretboard.core.chord import minor_suffix, split_chord_symbol
from chuk_mcp_fretboard.core.roman import HarmonicState, detect_function
from chuk_mcp_fretboard.core.scale import Key
from chuk_mcp_fretboard.models.harmony import HarmonyCell
from chuk_mcp_fretboard.models.style import StylePack


def realize_state(
    state: HarmonicState,
    index: int,
    key: Key,
    mode: str,
    style: StylePack,
    locked: bool = False,
) -> HarmonyCell:
    """
    Realize a state at a cell position.

    The suffix is the state's own, else the style's default extension for the
    state's function cycled by ``index``. Lowercase numerals get a minor
    suffix. Malformed states sound the tonic and keep the raw token as roman.

    Examples:
        ii  in C ionian, pop, index 0 -> Dmadd9
        bVIImaj7 in C ionian           -> Bbmaj7
    """
    if not state.valid:
        suffix = style.extension_for(HarmonicFunction.TONIC, index)
        return HarmonyCell(
            index=index,
            roman=state.roman,
            symbol=f"{key.root.spell()}{suffix}",
            func=HarmonicFunction.TONIC,
            locked=locked,
        )

    func = detect_function(state, mode)
    suffix = state.suffix or style.extension_for(func, index)
    if state.is_minor:
        suffix = minor_suffix(suffix)

    degree = state.degree if state.degree is not None else 0
    root = key.degree_to_pitch(degree, state.alteration)
    return HarmonyCell(
        index=index,
        roman=state.roman,
        symbol=f"{root.spell()}{suffix}",
        func=func,
        locked=locked,
    )


def state_of_cell(cell: HarmonyCell) -> HarmonicState:
    """Recover a cell's state: its roman plus the suffix of its symbol."""
    state = HarmonicState.parse(cell.roman)
    parts = split_chord_symbol(cell.symbol)
    if parts is None or not state.valid:
        return state
    _, suffix = parts
    return state.with_suffix(suffix)
