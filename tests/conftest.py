"""
Pytest configuration and shared fixtures.
"""

import random
import tempfile
from pathlib import Path

import pytest

from chuk_mcp_fretboard.harmony import HarmonyGenerator
from chuk_mcp_fretboard.styles import StyleLoader
from chuk_mcp_fretboard.voicings import TemplateLibrary


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def styles_library_path() -> Path:
    """Path to the built-in style library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_fretboard" / "styles" / "library"


@pytest.fixture
def style_loader(styles_library_path: Path) -> StyleLoader:
    """Loader over the built-in style packs only."""
    return StyleLoader(library_path=styles_library_path)


@pytest.fixture
def template_library() -> TemplateLibrary:
    """The built-in voicing template catalog."""
    return TemplateLibrary()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def generator(style_loader: StyleLoader, rng: random.Random) -> HarmonyGenerator:
    """Generator with a seeded random source."""
    return HarmonyGenerator(styles=style_loader, rng=rng)

