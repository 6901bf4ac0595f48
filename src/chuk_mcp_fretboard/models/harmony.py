"""
Harmony models - progression cells and generation context.

A progression is an ordered list of HarmonyCell, one per half bar (or bar).
Cells are plain records so save/load and export layers can exchange them as
``{index, roman, symbol, func, voicing?, locked}``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chuk_mcp_fretboard.constants import (
    DEFAULT_KEY,
    DEFAULT_MODE,
    DEFAULT_STYLE,
    HarmonicFunction,
    Resolution,
)
from chuk_mcp_fretboard.models.voicing import Voicing


class HarmonyCell(BaseModel):
    """
    One harmonic slot in the progression grid.

    ``locked`` cells are passed back into generation unchanged.
    """

    index: int = Field(..., ge=0, description="Position in the sequence (0-based)")
    roman: str = Field(..., description="Roman numeral portion of the state ('bVII', 'ii')")
    symbol: str = Field(..., description="Realized chord symbol ('Dm7')")
    func: HarmonicFunction = Field(..., description="Harmonic function (T, SD, D)")
    voicing: Voicing | None = Field(None, description="Chosen fretboard shape")
    locked: bool = Field(False, description="Immutable across regeneration")

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the exchange format."""
        data = self.model_dump(mode="json", by_alias=True, exclude={"voicing"})
        if self.voicing is not None:
            data["voicing"] = self.voicing.to_wire()
        return data

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> HarmonyCell:
        return cls.model_validate(data)


class HarmonyContext(BaseModel):
    """Key, mode and style a cell is realized against."""

    key: str = Field(DEFAULT_KEY, description="Tonic pitch-class name")
    mode: str = Field(DEFAULT_MODE, description="Mode name ('ionian', 'dorian', ...)")
    style: str = Field(DEFAULT_STYLE, description="Style pack name")

    model_config = {"frozen": True}


class ProgressionRequest(HarmonyContext):
    """Parameters for a full progression generation."""

    bars: int = Field(4, gt=0, description="Length in bars")
    resolution: Resolution = Field("1/2", description="Cells per bar: '1/2' = two, '1/1' = one")
    locked: dict[int, HarmonyCell] = Field(
        default_factory=dict, description="Pinned cells by index"
    )


def progression_to_wire(cells: list[HarmonyCell]) -> list[dict[str, Any]]:
    """Serialize a progression in index order."""
    return [cell.to_wire() for cell in sorted(cells, key=lambda c: c.index)]


def progression_from_wire(data: list[dict[str, Any]]) -> list[HarmonyCell]:
    """Deserialize a progression, ordering cells by index."""
    cells = [HarmonyCell.from_wire(item) for item in data]
    return sorted(cells, key=lambda c: c.index)
