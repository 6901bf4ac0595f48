"""
MCP tool implementations.

Tools are organized by domain:
- harmony - Progression generation, reharmonization, voicing assignment
- voicings - Voicing lookup and continuity selection
- styles - Style discovery
"""

from chuk_mcp_fretboard.tools.harmony import register_harmony_tools
from chuk_mcp_fretboard.tools.styles import register_style_tools
from chuk_mcp_fretboard.tools.voicings import register_voicing_tools

__all__ = [
    "register_harmony_tools",
    "register_style_tools",
    "register_voicing_tools",
]
