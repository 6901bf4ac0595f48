"""
Voicing tools - MCP tools for chord shapes on the fretboard.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.models.voicing import Voicing
from chuk_mcp_fretboard.voicings import (
    TemplateLibrary,
    build_voicings,
    choose_voicing,
    get_voicings_for_symbol,
    movement_cost,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _summarize(voicings: list[Voicing]) -> list[dict[str, Any]]:
    return [{**voicing.to_wire(), "layout": voicing.layout()} for voicing in voicings]


def register_voicing_tools(
    mcp: ChukMCPServer,
    library: TemplateLibrary,
) -> dict[str, Any]:
    """
    Register voicing tools with the MCP server.

    Args:
        mcp: The MCP server instance
        library: The voicing template library

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_get_voicings(symbol: str) -> str:
        """
        List playable voicings for a chord symbol, easiest first.

        Args:
            symbol: Chord symbol (e.g., 'C', 'Dm7', 'Bbmaj9', 'F#m7b5')

        Returns:
            JSON string with voicings; 'layout' reads low E to high E, X = not played

        Example:
            fretboard_get_voicings(symbol="Ebmaj7")
        """
        try:
            voicings = get_voicings_for_symbol(symbol, library)
            if not voicings:
                return json.dumps(
                    {"status": "error", "message": f"Unreadable chord symbol: {symbol}"}
                )

            return json.dumps(
                {
                    "status": "success",
                    "symbol": symbol,
                    "voicings": _summarize(voicings),
                    "count": len(voicings),
                }
            )
        except Exception as e:
            logger.exception("Failed to get voicings")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_get_voicings"] = fretboard_get_voicings

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_build_voicings(root: str, chord_kind: str = "") -> str:
        """
        Build voicings from a root and chord kind.

        Args:
            root: Root note name (e.g., 'G', 'Bb')
            chord_kind: Chord kind ('' for major, 'm7', 'maj9#11', 'sus2', ...)

        Returns:
            JSON string with voicings, easiest first

        Example:
            fretboard_build_voicings(root="G", chord_kind="7")
        """
        try:
            voicings = build_voicings(root, chord_kind, library)

            return json.dumps(
                {
                    "status": "success",
                    "voicings": _summarize(voicings),
                    "count": len(voicings),
                }
            )
        except Exception as e:
            logger.exception("Failed to build voicings")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_build_voicings"] = fretboard_build_voicings

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_choose_voicing(
        candidates: list[dict[str, Any]],
        previous: dict[str, Any] | None = None,
    ) -> str:
        """
        Choose the candidate voicing nearest to the previous one.

        With no previous voicing the first candidate is chosen.

        Args:
            candidates: Voicings in wire format ({chordKind, root, strings: [{str, fret}]})
            previous: The voicing played before, if any

        Returns:
            JSON string with the chosen voicing and its movement cost

        Example:
            fretboard_choose_voicing(candidates=[...], previous={...})
        """
        try:
            options = [Voicing.from_wire(item) for item in candidates]
            before = Voicing.from_wire(previous) if previous else None
            chosen = choose_voicing(before, options)

            return json.dumps(
                {
                    "status": "success",
                    "voicing": chosen.to_wire(),
                    "layout": chosen.layout(),
                    "index": options.index(chosen),
                    "cost": movement_cost(before, chosen) if before else 0.0,
                }
            )
        except Exception as e:
            logger.exception("Failed to choose voicing")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_choose_voicing"] = fretboard_choose_voicing

    return tools
