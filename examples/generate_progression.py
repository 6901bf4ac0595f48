#!/usr/bin/env python3
"""
Example: Generating and voicing a progression.

This walks a style pack's transition table, locks a chord, reharmonizes
another and prints the chosen guitar shapes.

Usage:
    python examples/generate_progression.py
"""

from chuk_mcp_fretboard.constants import HarmonicFunction
from chuk_mcp_fretboard.harmony import assign_voicings, generate_progression, reharmonize_cell
from chuk_mcp_fretboard.models.harmony import HarmonyCell, HarmonyContext
from chuk_mcp_fretboard.styles import get_default_loader


def print_cells(cells: list[HarmonyCell]) -> None:
    for cell in cells:
        layout = cell.voicing.layout() if cell.voicing else "-"
        lock = " (locked)" if cell.locked else ""
        print(
            f"  {cell.index:2d}  {cell.roman:5s} {cell.symbol:10s} "
            f"{cell.func.value:2s}  {layout}{lock}"
        )


def main() -> None:
    """Demonstrate generation, locking and reharmonization."""
    print("CHUK Fretboard Harmony Demo")
    print("=" * 40)
    print()

    print("Available styles:")
    for style in get_default_loader().list_styles():
        print(f"  {style.name}: {style.description}")
    print()

    # Four bars of neo-soul in C
    cells = generate_progression(key="C", bars=4, style="neo-soul", seed=7, with_voicings=True)
    print("Neo-soul in C major:")
    print_cells(cells)
    print()

    # Keep the first chord, regenerate the rest
    pinned = HarmonyCell(index=0, roman="IV", symbol="Fadd9", func=HarmonicFunction.SUBDOMINANT)
    cells = generate_progression(key="C", bars=4, style="pop", locked={0: pinned}, seed=3)
    print("Pop in C with the first cell locked:")
    print_cells(assign_voicings(cells))
    print()

    # Swap one chord
    context = HarmonyContext(key="C", mode="ionian", style="pop")
    replacement = reharmonize_cell(cells[3], context, seed=11)
    print(f"Reharmonized cell 3: {cells[3].symbol} -> {replacement.symbol}")
    print()

    # Twelve bar blues in A, one chord per bar
    cells = generate_progression(key="A", bars=12, style="blues", resolution="1/1", seed=1)
    print("Blues in A:")
    print("  " + " | ".join(cell.symbol for cell in cells))


if __name__ == "__main__":
    main()
