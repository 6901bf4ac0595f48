"""
Style pack models - per-genre transition tables.

A style pack is a weighted directed graph over harmonic state tokens plus the
defaults that turn a bare numeral into a chord symbol. Packs are frozen: they
are loaded once and shared by every generation call.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_fretboard.constants import (
    DEFAULT_MAJOR_CADENCE,
    DEFAULT_MINOR_CADENCE,
    HarmonicFunction,
)
from chuk_mcp_fretboard.core.roman import HarmonicState
from chuk_mcp_fretboard.core.scale import is_minor_mode


class Cadences(BaseModel):
    """Closing 3-state patterns for major-ish and minor-ish modes."""

    major: tuple[str, str, str] = Field(default=DEFAULT_MAJOR_CADENCE)
    minor: tuple[str, str, str] = Field(default=DEFAULT_MINOR_CADENCE)

    model_config = {"frozen": True}


class StylePack(BaseModel):
    """
    A genre's harmonic vocabulary.

    Transition weights are relative, not probabilities; they need not sum to 1.
    """

    name: str = Field(..., description="Style name")
    display_name: str = Field("", description="Label for pickers")
    description: str = Field("", description="Style description")
    start: dict[str, float] = Field(..., description="Weights for the first cell")
    transitions: dict[str, dict[str, float]] = Field(
        default_factory=dict, description="state -> next state -> weight"
    )
    allowed_borrowed: frozenset[str] = Field(
        default_factory=frozenset, description="Altered degrees exempt from the borrow penalty"
    )
    default_extensions: dict[HarmonicFunction, list[str]] = Field(
        ..., description="Suffixes cycled by cell index when a state has none"
    )
    templates: list[list[str]] = Field(
        default_factory=list, description="Fixed per-bar state sequences (e.g. 12-bar blues)"
    )
    cadences: Cadences = Field(default_factory=Cadences)
    rest_probability: float = Field(0.0, ge=0.0, le=1.0, description="Chance of a resting cell")

    model_config = {"frozen": True}

    @field_validator("start")
    @classmethod
    def validate_start(cls, v: dict[str, float]) -> dict[str, float]:
        """Start weights are positive."""
        _check_weights("start", v)
        return v

    @field_validator("transitions")
    @classmethod
    def validate_transitions(
        cls, v: dict[str, dict[str, float]]
    ) -> dict[str, dict[str, float]]:
        """Transition weights are positive."""
        for state, weights in v.items():
            _check_weights(state, weights)
        return v

    @field_validator("default_extensions")
    @classmethod
    def validate_extensions(
        cls, v: dict[HarmonicFunction, list[str]]
    ) -> dict[HarmonicFunction, list[str]]:
        """Every function has at least one extension."""
        missing = [func.value for func in HarmonicFunction if not v.get(func)]
        if missing:
            raise ValueError(f"Missing default extensions for {missing}")
        return v

    @property
    def has_templates(self) -> bool:
        return bool(self.templates)

    def cadence_for(self, mode: str) -> tuple[str, str, str]:
        """The cadence pattern for a mode's quality."""
        return self.cadences.minor if is_minor_mode(mode) else self.cadences.major

    def transitions_from(self, state: HarmonicState | None) -> Mapping[str, float]:
        """
        Candidate weights following a state, as a read-only view.

        Looks up the exact token first, then any table key with the same
        roman numeral; falls back to the start weights.
        """
        return MappingProxyType(self._row_for(state))

    def _row_for(self, state: HarmonicState | None) -> dict[str, float]:
        if state is None:
            return self.start
        exact = self.transitions.get(str(state))
        if exact:
            return exact
        for token, weights in self.transitions.items():
            if HarmonicState.parse(token).roman == state.roman and weights:
                return weights
        return self.start

    def is_borrow_allowed(self, state: HarmonicState) -> bool:
        """Diatonic states and listed borrowed degrees carry no penalty."""
        return not state.is_borrowed or state.roman in self.allowed_borrowed

    def extension_for(self, func: HarmonicFunction, index: int) -> str:
        """Default suffix for a function, cycled by cell index."""
        options = self.default_extensions[func]
        return options[index % len(options)]


class StyleMetadata(BaseModel):
    """Lightweight metadata for listing styles."""

    name: str
    display_name: str
    description: str
    has_templates: bool

    model_config = {"frozen": True}

    @classmethod
    def from_style(cls, style: StylePack) -> StyleMetadata:
        """Create metadata from a style pack."""
        return cls(
            name=style.name,
            display_name=style.display_name or style.name,
            description=style.description,
            has_templates=style.has_templates,
        )


def _check_weights(table: str, weights: dict[str, Any]) -> None:
    for token, weight in weights.items():
        if weight <= 0:
            raise ValueError(f"Weight for '{table} -> {token}' must be positive, got {weight}")
