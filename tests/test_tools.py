"""
Tests for MCP tools.

Tests the MCP tool implementations for progressions, voicings and styles.
"""

import json

import pytest

from chuk_mcp_fretboard.harmony import HarmonyGenerator
from chuk_mcp_fretboard.styles import StyleLoader
from chuk_mcp_fretboard.tools.harmony import register_harmony_tools
from chuk_mcp_fretboard.tools.styles import register_style_tools
from chuk_mcp_fretboard.tools.voicings import register_voicing_tools
from chuk_mcp_fretboard.voicings import TemplateLibrary


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def harmony_tools(generator: HarmonyGenerator, template_library: TemplateLibrary) -> dict:
    return register_harmony_tools(MockMCPServer("test"), generator, template_library)


@pytest.fixture
def voicing_tools(template_library: TemplateLibrary) -> dict:
    return register_voicing_tools(MockMCPServer("test"), template_library)


@pytest.fixture
def style_tools(style_loader: StyleLoader) -> dict:
    return register_style_tools(MockMCPServer("test"), style_loader)


class TestRegistration:
    """Tools land on the server under their names."""

    def test_names(self, generator, template_library, style_loader):
        """Every tool is registered with the server."""
        mcp = MockMCPServer("test")
        register_harmony_tools(mcp, generator, template_library)
        register_voicing_tools(mcp, template_library)
        register_style_tools(mcp, style_loader)
        assert set(mcp.tools) == {
            "fretboard_generate_progression",
            "fretboard_reharmonize_cell",
            "fretboard_assign_voicings",
            "fretboard_get_voicings",
            "fretboard_build_voicings",
            "fretboard_choose_voicing",
            "fretboard_list_styles",
            "fretboard_describe_style",
        }


class TestHarmonyTools:
    """Tests for progression tools."""

    @pytest.mark.asyncio
    async def test_generate(self, harmony_tools: dict):
        """Generate a pop progression."""
        result = await harmony_tools["fretboard_generate_progression"](
            key="C", mode="ionian", bars=4, style="pop", seed=42
        )
        data = json.loads(result)
        assert data["status"] == "success"
        assert len(data["cells"]) == 8
        assert [cell["index"] for cell in data["cells"]] == list(range(8))
        assert data["symbols"] == [cell["symbol"] for cell in data["cells"]]
        assert all(cell["func"] in ("T", "SD", "D") for cell in data["cells"])

    @pytest.mark.asyncio
    async def test_generate_seeded(self, harmony_tools: dict):
        """The same seed gives the same cells."""
        tool = harmony_tools["fretboard_generate_progression"]
        first = json.loads(await tool(bars=8, style="lofi", seed=7))
        second = json.loads(await tool(bars=8, style="lofi", seed=7))
        assert first["symbols"] == second["symbols"]

    @pytest.mark.asyncio
    async def test_generate_with_locked(self, harmony_tools: dict):
        """Locked wire cells come back unchanged."""
        locked = [{"index": 0, "roman": "IV", "symbol": "Fadd9", "func": "SD"}]
        result = await harmony_tools["fretboard_generate_progression"](
            bars=4, style="neo-soul", locked=locked, seed=1
        )
        data = json.loads(result)
        assert data["status"] == "success"
        first = data["cells"][0]
        assert first["symbol"] == "Fadd9"
        assert first["roman"] == "IV"
        assert first["locked"] is True

    @pytest.mark.asyncio
    async def test_generate_with_voicings(self, harmony_tools: dict):
        """Voicings carry all six strings."""
        result = await harmony_tools["fretboard_generate_progression"](
            bars=2, style="pop", seed=3, with_voicings=True
        )
        data = json.loads(result)
        assert data["status"] == "success"
        for cell in data["cells"]:
            strings = cell["voicing"]["strings"]
            assert sorted(entry["str"] for entry in strings) == [1, 2, 3, 4, 5, 6]

    @pytest.mark.asyncio
    async def test_generate_invalid_bars(self, harmony_tools: dict):
        """Zero bars is an error."""
        result = await harmony_tools["fretboard_generate_progression"](bars=0)
        data = json.loads(result)
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_generate_bad_locked_cell(self, harmony_tools: dict):
        """Malformed locked cells are an error."""
        result = await harmony_tools["fretboard_generate_progression"](
            locked=[{"index": 0, "roman": "I"}]
        )
        data = json.loads(result)
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_reharmonize(self, harmony_tools: dict):
        """Reharmonize keeps the index."""
        result = await harmony_tools["fretboard_reharmonize_cell"](
            cell={"index": 3, "roman": "V", "symbol": "G7", "func": "D"},
            key="C",
            style="pop",
            seed=5,
        )
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["cell"]["index"] == 3
        assert data["cell"]["roman"] in ("I", "vi")

    @pytest.mark.asyncio
    async def test_assign_voicings(self, harmony_tools: dict):
        """Every cell gets a voicing."""
        cells = [
            {"index": 0, "roman": "I", "symbol": "C", "func": "T"},
            {"index": 1, "roman": "vi", "symbol": "Am", "func": "T"},
        ]
        result = await harmony_tools["fretboard_assign_voicings"](cells=cells)
        data = json.loads(result)
        assert data["status"] == "success"
        assert len(data["layouts"]) == 2
        assert data["layouts"][0] == "X32010"

    @pytest.mark.asyncio
    async def test_assign_voicings_with_rest(self, harmony_tools: dict):
        """Rest cells come back without a voicing."""
        cells = [
            {"index": 0, "roman": "I", "symbol": "C", "func": "T"},
            {"index": 1, "roman": "-", "symbol": "Rest", "func": "T", "locked": True},
            {"index": 2, "roman": "IV", "symbol": "F", "func": "SD"},
        ]
        result = await harmony_tools["fretboard_assign_voicings"](cells=cells)
        data = json.loads(result)
        assert data["status"] == "success"
        assert "voicing" not in data["cells"][1]
        assert len(data["layouts"]) == 2


class TestVoicingTools:
    """Tests for voicing tools."""

    @pytest.mark.asyncio
    async def test_get_voicings(self, voicing_tools: dict):
        """Open C comes first."""
        result = await voicing_tools["fretboard_get_voicings"](symbol="C")
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["count"] == len(data["voicings"])
        assert data["voicings"][0]["layout"] == "X32010"
        assert data["voicings"][0]["chordKind"] == ""

    @pytest.mark.asyncio
    async def test_get_voicings_unreadable(self, voicing_tools: dict):
        """Symbols without a root are an error."""
        result = await voicing_tools["fretboard_get_voicings"](symbol="H7")
        data = json.loads(result)
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_build_voicings(self, voicing_tools: dict):
        """G7 includes the open shape."""
        result = await voicing_tools["fretboard_build_voicings"](root="G", chord_kind="7")
        data = json.loads(result)
        assert data["status"] == "success"
        assert "320001" in [voicing["layout"] for voicing in data["voicings"]]

    @pytest.mark.asyncio
    async def test_choose_voicing(self, voicing_tools: dict):
        """The nearest candidate wins."""
        c = json.loads(await voicing_tools["fretboard_get_voicings"](symbol="C"))["voicings"]
        f = json.loads(await voicing_tools["fretboard_get_voicings"](symbol="F"))["voicings"]
        result = await voicing_tools["fretboard_choose_voicing"](candidates=f, previous=c[0])
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["layout"] == f[data["index"]]["layout"]
        assert data["cost"] >= 0

    @pytest.mark.asyncio
    async def test_choose_without_previous(self, voicing_tools: dict):
        """Without a previous voicing the first candidate is chosen."""
        g = json.loads(await voicing_tools["fretboard_get_voicings"](symbol="G"))["voicings"]
        result = await voicing_tools["fretboard_choose_voicing"](candidates=g)
        data = json.loads(result)
        assert data["index"] == 0
        assert data["cost"] == 0.0

    @pytest.mark.asyncio
    async def test_choose_empty(self, voicing_tools: dict):
        """No candidates is an error."""
        result = await voicing_tools["fretboard_choose_voicing"](candidates=[])
        data = json.loads(result)
        assert data["status"] == "error"
        assert "No voicing" in data["message"]


class TestStyleTools:
    """Tests for style tools."""

    @pytest.mark.asyncio
    async def test_list_styles(self, style_tools: dict):
        """All library styles are listed."""
        result = await style_tools["fretboard_list_styles"]()
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["count"] == 4
        names = {style["name"] for style in data["styles"]}
        assert names == {"neo-soul", "pop", "lofi", "blues"}

    @pytest.mark.asyncio
    async def test_describe_style(self, style_tools: dict):
        """Describe the blues pack."""
        result = await style_tools["fretboard_describe_style"](name="blues")
        data = json.loads(result)
        assert data["status"] == "success"
        assert len(data["style"]["templates"]) == 3
        assert data["style"]["cadences"]["major"] == ["V7", "IV7", "I7"]
        assert set(data["style"]["default_extensions"]) == {"T", "SD", "D"}

    @pytest.mark.asyncio
    async def test_describe_style_not_found(self, style_tools: dict):
        """Unknown styles are an error."""
        result = await style_tools["fretboard_describe_style"](name="polka")
        data = json.loads(result)
        assert data["status"] == "error"
