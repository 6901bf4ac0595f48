"""
Voicing models - fretted chord shapes and the templates that produce them.

A Voicing is the wire shape consumed by the chord-diagram renderer and the
playback scheduler: six string entries, high fret numbers or -1 for a string
that is not played.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_mcp_fretboard.constants import STRING_COUNT, UNPLAYED, ErrorMessages
from chuk_mcp_fretboard.core.chord import CHORD_KINDS, resolve_chord_kind


class StringFret(BaseModel):
    """One string of a voicing. ``fret == -1`` means the string is not played."""

    string: int = Field(..., ge=1, le=STRING_COUNT, alias="str", description="String number")
    fret: int = Field(..., ge=UNPLAYED, description="Fret number, -1 = not played")

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def played(self) -> bool:
        return self.fret >= 0


class Voicing(BaseModel):
    """
    A concrete fretted realization of a chord.

    Strings are ordered 6 -> 1 (low E first), the way chord charts read.
    """

    chord_kind: str = Field(..., alias="chordKind", description="Normalized chord kind")
    root: str = Field(..., description="Root pitch-class name")
    strings: list[StringFret] = Field(..., description="One entry per string")
    name: str | None = Field(None, description="Human label")
    id: str | None = Field(None, description="Stable identifier")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("strings")
    @classmethod
    def validate_strings(cls, v: list[StringFret]) -> list[StringFret]:
        """Every physical string appears exactly once."""
        numbers = sorted(entry.string for entry in v)
        if numbers != list(range(1, STRING_COUNT + 1)):
            raise ValueError(f"Voicing needs one entry per string, got {numbers}")
        return v

    @property
    def played(self) -> list[StringFret]:
        """Strings that sound."""
        return [entry for entry in self.strings if entry.played]

    @property
    def fret_map(self) -> dict[int, int]:
        """String number -> fret for played strings."""
        return {entry.string: entry.fret for entry in self.played}

    @property
    def span(self) -> int:
        """Distance between the highest and lowest played fret."""
        frets = [entry.fret for entry in self.played]
        return max(frets) - min(frets) if frets else 0

    def layout(self) -> str:
        """Chart notation, low E first: 'X32010'."""
        return "".join(
            str(entry.fret) if entry.played else "X"
            for entry in sorted(self.strings, key=lambda e: -e.string)
        )

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the exchange format ({chordKind, root, strings: [{str, fret}], ...})."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Voicing:
        return cls.model_validate(data)


class VoicingTemplate(BaseModel):
    """
    A movable interval layout.

    Combined with a root pitch, a template yields a Voicing: the root is
    placed on ``root_string`` and every layout entry sounds ``interval``
    semitones above it (raised by octaves to fit the string).
    """

    id: str = Field(..., description="Template identifier")
    name: str = Field("", description="Human label")
    kinds: list[str] = Field(..., min_length=1, description="Applicable chord kinds")
    root_string: int = Field(..., ge=1, le=STRING_COUNT, description="String carrying the root")
    layout: list[tuple[int, int]] = Field(
        ..., min_length=1, description="(string, semitones above root) pairs"
    )
    muted: list[int] = Field(default_factory=list, description="Strings left unplayed")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_layout(self) -> VoicingTemplate:
        """Root sits on its string and every interval belongs to each known kind."""
        strings = [string for string, _ in self.layout]
        if len(set(strings)) != len(strings):
            raise ValueError(
                ErrorMessages.INVALID_TEMPLATE.format(
                    template_id=self.id, detail="string listed twice"
                )
            )
        if (self.root_string, 0) not in self.layout:
            raise ValueError(
                ErrorMessages.INVALID_TEMPLATE.format(
                    template_id=self.id, detail="root string must carry interval 0"
                )
            )
        for kind_token in self.kinds:
            kind = CHORD_KINDS.get(resolve_chord_kind(kind_token))
            if kind is None:
                continue
            stray = [interval for _, interval in self.layout if not kind.allows(interval)]
            if stray:
                raise ValueError(
                    ErrorMessages.INVALID_TEMPLATE.format(
                        template_id=self.id,
                        detail=f"intervals {stray} are not in kind '{kind_token}'",
                    )
                )
        return self

    def applies_to(self, kind: str) -> bool:
        """Case/whitespace-insensitive kind match."""
        wanted = _kind_key(kind)
        return any(_kind_key(candidate) == wanted for candidate in self.kinds)


def _kind_key(kind: str) -> str:
    return "".join(kind.split()).lower()
