"""
Harmony tools - MCP tools for generating and editing progressions.
"""

from __future__ import annotations

import json
import logging
import random
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.constants import SuccessMessages
from chuk_mcp_fretboard.harmony import HarmonyGenerator, assign_voicings, reharmonize
from chuk_mcp_fretboard.models.harmony import (
    HarmonyCell,
    HarmonyContext,
    progression_from_wire,
    progression_to_wire,
)
from chuk_mcp_fretboard.voicings import TemplateLibrary

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _rng_for(seed: int | None) -> random.Random | None:
    return random.Random(seed) if seed is not None else None


def register_harmony_tools(
    mcp: ChukMCPServer,
    generator: HarmonyGenerator,
    library: TemplateLibrary,
) -> dict[str, Any]:
    """
    Register progression tools with the MCP server.

    Args:
        mcp: The MCP server instance
        generator: The harmony generator (owns the style loader)
        library: The voicing template library

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_generate_progression(
        key: str = "C",
        mode: str = "ionian",
        bars: int = 4,
        style: str = "neo-soul",
        resolution: str = "1/2",
        locked: list[dict[str, Any]] | None = None,
        seed: int | None = None,
        with_voicings: bool = False,
    ) -> str:
        """
        Generate a chord progression.

        Locked cells are kept exactly as given and the style's cadence is
        placed in the last unlocked stretch if the walk doesn't reach it.

        Args:
            key: Tonic note name (e.g., 'C', 'F#', 'Bb')
            mode: Mode name (e.g., 'ionian', 'dorian', 'natural minor')
            bars: Number of bars
            style: Style pack ('neo-soul', 'pop', 'lofi', 'blues')
            resolution: '1/2' for two chords per bar, '1/1' for one
            locked: Cells to keep, as {index, roman, symbol, func, locked}
            seed: Optional random seed for a reproducible result
            with_voicings: Also pick a guitar voicing for every cell

        Returns:
            JSON string with the generated cells

        Example:
            fretboard_generate_progression(key="A", mode="dorian", bars=4, style="lofi")
        """
        try:
            pinned = {cell.index: cell for cell in progression_from_wire(locked or [])}
            cells = generator.generate(
                key=key,
                mode=mode,
                bars=bars,
                style=style,
                resolution=resolution,
                locked=pinned,
                rng=_rng_for(seed),
            )
            if with_voicings:
                cells = assign_voicings(cells, library)

            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.PROGRESSION_GENERATED.format(
                        cells=len(cells), bars=bars, style=style
                    ),
                    "cells": progression_to_wire(cells),
                    "symbols": [cell.symbol for cell in cells],
                }
            )
        except Exception as e:
            logger.exception("Failed to generate progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_generate_progression"] = fretboard_generate_progression

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_reharmonize_cell(
        cell: dict[str, Any],
        key: str = "C",
        mode: str = "ionian",
        style: str = "neo-soul",
        seed: int | None = None,
    ) -> str:
        """
        Replace one cell with another chord the style allows after it.

        The new cell keeps the index and lock flag of the old one.

        Args:
            cell: The cell to replace, as {index, roman, symbol, func, locked}
            key: Tonic note name
            mode: Mode name
            style: Style pack name
            seed: Optional random seed

        Returns:
            JSON string with the new cell

        Example:
            fretboard_reharmonize_cell(
                cell={"index": 2, "roman": "ii", "symbol": "Dm7", "func": "SD"},
                key="C",
                style="neo-soul",
            )
        """
        try:
            original = HarmonyCell.from_wire(cell)
            context = HarmonyContext(key=key, mode=mode, style=style)
            new_cell = reharmonize(
                original, context, styles=generator.styles, rng=_rng_for(seed)
            )

            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.CELL_REHARMONIZED.format(
                        index=new_cell.index, symbol=new_cell.symbol
                    ),
                    "cell": new_cell.to_wire(),
                }
            )
        except Exception as e:
            logger.exception("Failed to reharmonize cell")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_reharmonize_cell"] = fretboard_reharmonize_cell

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_assign_voicings(cells: list[dict[str, Any]]) -> str:
        """
        Pick a voicing for every cell of an existing progression.

        Each choice stays as close as possible to the one before it. Locked
        cells with a voicing keep it.

        Args:
            cells: Progression cells in wire format

        Returns:
            JSON string with the cells, each carrying a voicing

        Example:
            fretboard_assign_voicings(
                cells=[{"index": 0, "roman": "I", "symbol": "C", "func": "T"}]
            )
        """
        try:
            voiced = assign_voicings(progression_from_wire(cells), library)

            return json.dumps(
                {
                    "status": "success",
                    "cells": progression_to_wire(voiced),
                    "layouts": [cell.voicing.layout() for cell in voiced if cell.voicing],
                }
            )
        except Exception as e:
            logger.exception("Failed to assign voicings")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_assign_voicings"] = fretboard_assign_voicings

    return tools
