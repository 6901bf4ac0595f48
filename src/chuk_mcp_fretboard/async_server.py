#!/usr/bin/env python3
"""
Async Fretboard MCP Server using chuk-mcp-server

This server provides MCP tools for writing guitar chord progressions.
Progressions come from per-genre style packs (YAML) that you can override
from your own project's styles directory.

The server provides tools for:
- Generating progressions with locked cells and a guaranteed cadence
- Reharmonizing single cells
- Finding playable voicings for any chord symbol
- Threading voicings through a progression with minimal hand movement
- Style discovery
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_fretboard.harmony import HarmonyGenerator
from chuk_mcp_fretboard.styles import StyleLoader
from chuk_mcp_fretboard.tools import (
    register_harmony_tools,
    register_style_tools,
    register_voicing_tools,
)
from chuk_mcp_fretboard.voicings import TemplateLibrary

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-fretboard")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
STYLES_DIR = Path(os.environ.get("CHUK_FRETBOARD_STYLES_DIR", BASE_PATH / "styles"))
STYLES_LIBRARY_PATH = Path(__file__).parent / "styles" / "library"
TEMPLATES_PATH = Path(__file__).parent / "voicings" / "library" / "templates.yaml"

# Shared read-only registries
style_loader = StyleLoader(
    library_path=STYLES_LIBRARY_PATH,
    project_path=STYLES_DIR,
)
template_library = TemplateLibrary(TEMPLATES_PATH)
generator = HarmonyGenerator(styles=style_loader)

# Register all tools
harmony_tools = register_harmony_tools(mcp, generator, template_library)
voicing_tools = register_voicing_tools(mcp, template_library)
style_tools = register_style_tools(mcp, style_loader)

# Export tool functions for direct access
fretboard_generate_progression = harmony_tools["fretboard_generate_progression"]
fretboard_reharmonize_cell = harmony_tools["fretboard_reharmonize_cell"]
fretboard_assign_voicings = harmony_tools["fretboard_assign_voicings"]

fretboard_get_voicings = voicing_tools["fretboard_get_voicings"]
fretboard_build_voicings = voicing_tools["fretboard_build_voicings"]
fretboard_choose_voicing = voicing_tools["fretboard_choose_voicing"]

fretboard_list_styles = style_tools["fretboard_list_styles"]
fretboard_describe_style = style_tools["fretboard_describe_style"]

logger.info("CHUK Fretboard MCP Server initialized")
logger.info(f"  Styles library: {STYLES_LIBRARY_PATH}")
logger.info(f"  Project styles: {STYLES_DIR}")
logger.info(f"  Voicing templates: {len(template_library)}")
