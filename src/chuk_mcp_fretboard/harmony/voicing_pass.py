"""
Voicing pass - one voicing per cell, chosen for smooth hand movement.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from chuk_mcp_fretboard.models.harmony import HarmonyCell
from chuk_mcp_fretboard.models.voicing import Voicing
from chuk_mcp_fretboard.voicings import TemplateLibrary, choose_voicing, get_voicings_for_symbol

logger = logging.getLogger(__name__)


def assign_voicings(
    cells: Sequence[HarmonyCell],
    library: TemplateLibrary | None = None,
    previous: Voicing | None = None,
) -> list[HarmonyCell]:
    """
    Attach a voicing to every cell, threading the previous choice forward.

    Locked cells that already carry a voicing keep it and become the
    reference for the next cell. Cells whose symbol has no readable root
    (rests) are left unvoiced and do not move the reference.

    Args:
        cells: Progression in playing order
        library: Template catalog (defaults to the built-in one)
        previous: Voicing sounding before the first cell, if any
    """
    result: list[HarmonyCell] = []
    for cell in cells:
        if cell.locked and cell.voicing is not None:
            result.append(cell)
            previous = cell.voicing
            continue

        candidates = get_voicings_for_symbol(cell.symbol, library)
        if not candidates:
            logger.debug("Cell %d %r has no voicings, leaving it unvoiced", cell.index, cell.symbol)
            result.append(cell.model_copy(update={"voicing": None}))
            continue

        voicing = choose_voicing(previous, candidates, cell.symbol)
        logger.debug("Cell %d %s -> %s", cell.index, cell.symbol, voicing.layout())
        result.append(cell.model_copy(update={"voicing": voicing}))
        previous = voicing
    return result
