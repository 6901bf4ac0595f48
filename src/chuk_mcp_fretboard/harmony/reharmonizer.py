"""
Reharmonizer - swap one cell for another chord the style would accept.

Unlike the generator, the draw ignores neighbouring cells: the transition row
of the cell's own numeral is sampled by plain weight.
"""

from __future__ import annotations

import logging
import random

from chuk_mcp_fretboard.constants import DEFAULT_STATE
from chuk_mcp_fretboard.core.roman import HarmonicState
from chuk_mcp_fretboard.core.scale import Key
from chuk_mcp_fretboard.harmony.realize import realize_state
from chuk_mcp_fretboard.harmony.sampling import weighted_pick
from chuk_mcp_fretboard.models.harmony import HarmonyCell, HarmonyContext
from chuk_mcp_fretboard.styles import StyleLoader, get_default_loader

logger = logging.getLogger(__name__)


def reharmonize(
    cell: HarmonyCell,
    context: HarmonyContext,
    styles: StyleLoader | None = None,
    rng: random.Random | None = None,
) -> HarmonyCell:
    """
    Draw a replacement for a cell.

    The row is looked up by the cell's roman numeral, falling back to the
    style's start weights. The new cell keeps the index and ``locked`` flag;
    its voicing is dropped since the symbol changed.
    """
    styles = styles or get_default_loader()
    rng = rng or random.Random()
    pack = styles.resolve(context.style)

    weights = pack.transitions_from(HarmonicState.parse(cell.roman))
    token = weighted_pick(weights, rng)
    if token is None:
        logger.debug("Nothing to draw for %s in %s, using %s", cell.roman, pack.name, DEFAULT_STATE)
        token = DEFAULT_STATE

    return realize_state(
        HarmonicState.parse(token),
        cell.index,
        Key.from_names(context.key, context.mode),
        context.mode,
        pack,
        locked=cell.locked,
    )


def reharmonize_cell(
    cell: HarmonyCell,
    context: HarmonyContext,
    seed: int | None = None,
) -> HarmonyCell:
    """Reharmonize with the built-in style library; ``seed`` pins the draw."""
    return reharmonize(cell, context, rng=random.Random(seed))
