"""
Style tools - MCP tools for style discovery.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.constants import ErrorMessages
from chuk_mcp_fretboard.styles import StyleLoader

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_style_tools(
    mcp: ChukMCPServer,
    style_loader: StyleLoader,
) -> dict[str, Any]:
    """
    Register style tools with the MCP server.

    Args:
        mcp: The MCP server instance
        style_loader: The style loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_styles() -> str:
        """
        List available styles.

        Returns:
            JSON string with list of style summaries

        Example:
            fretboard_list_styles()
        """
        try:
            styles = style_loader.list_styles()

            return json.dumps(
                {
                    "status": "success",
                    "styles": [style.model_dump() for style in styles],
                    "count": len(styles),
                }
            )
        except Exception as e:
            logger.exception("Failed to list styles")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_styles"] = fretboard_list_styles

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_describe_style(name: str) -> str:
        """
        Get the transition table and defaults of a style.

        Args:
            name: Style name

        Returns:
            JSON string with style details

        Example:
            fretboard_describe_style(name="blues")
        """
        try:
            style = style_loader.get_style(name)
            if style is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.STYLE_NOT_FOUND.format(name=name)}
                )

            return json.dumps(
                {
                    "status": "success",
                    "style": {
                        "name": style.name,
                        "display_name": style.display_name,
                        "description": style.description,
                        "start": style.start,
                        "transitions": style.transitions,
                        "allowed_borrowed": sorted(style.allowed_borrowed),
                        "default_extensions": {
                            func.value: suffixes
                            for func, suffixes in style.default_extensions.items()
                        },
                        "templates": style.templates,
                        "cadences": {
                            "major": list(style.cadences.major),
                            "minor": list(style.cadences.minor),
                        },
                        "rest_probability": style.rest_probability,
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to describe style")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_describe_style"] = fretboard_describe_style

    return tools
