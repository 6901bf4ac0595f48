"""
Voicing Builder - turns templates into concrete fretted voicings.

For a root and chord kind, every matching template is placed on the neck:
the root is found on the template's root string within the first octave,
each layout interval is raised by octaves until it fits its string, and the
resulting shape is kept only if it stays within reach.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from chuk_mcp_fretboard.constants import MAX_FRET, MAX_SPAN, STRING_COUNT, UNPLAYED
from chuk_mcp_fretboard.core.chord import (
    format_voicing_id,
    get_chord_kind,
    resolve_chord_kind,
    split_chord_symbol,
)
from chuk_mcp_fretboard.core.fretboard import find_frets_for_note, string_open_midi
from chuk_mcp_fretboard.core.pitch import normalize_note_name, to_pitch_class
from chuk_mcp_fretboard.models.voicing import StringFret, Voicing, VoicingTemplate
from chuk_mcp_fretboard.voicings.catalog import TemplateLibrary

logger = logging.getLogger(__name__)

# Fallback shell: root on the A string, then third, flat seventh and ninth
FALLBACK_ID = "fallback-shell"
FALLBACK_ROOT_STRING = 5
_FALLBACK_UPPER: tuple[tuple[int, int], ...] = ((3, 10), (2, 14))

OPEN_STRING_BONUS = 0.5
SPAN_WEIGHT = 0.5


@lru_cache(maxsize=1)
def get_default_library() -> TemplateLibrary:
    """Process-wide template library, loaded on first use."""
    return TemplateLibrary()


def build_voicings(
    root: str,
    chord_kind: str,
    library: TemplateLibrary | None = None,
) -> list[Voicing]:
    """
    Build every playable voicing of a chord.

    Args:
        root: Root note name ('C', 'Bb', 'f#')
        chord_kind: Chord suffix ('m7', 'maj9#11', 'M7', ...)
        library: Template catalog (defaults to the built-in one)

    Returns:
        Voicings sorted easiest first. Never empty: when no template fits,
        a generic shell voicing is synthesized.
    """
    library = library or get_default_library()
    root_name = normalize_note_name(root)
    kind = resolve_chord_kind(chord_kind)

    voicings: list[Voicing] = []
    seen: set[str] = set()
    for template in library.templates_for(kind):
        voicing = _realize_template(template, root_name, kind)
        if voicing is None:
            continue
        layout = voicing.layout()
        if layout in seen:
            continue
        seen.add(layout)
        voicings.append(voicing)

    if not voicings:
        logger.debug("No template fits %s%s, using fallback shell", root_name, kind)
        return [_fallback_voicing(root_name, kind)]

    return sorted(voicings, key=playability_score)


def get_voicings_for_symbol(
    symbol: str,
    library: TemplateLibrary | None = None,
) -> list[Voicing]:
    """
    Build voicings for a chord symbol such as 'Dm7' or 'Bbmaj9'.

    Returns an empty list if the symbol has no readable root.
    """
    parts = split_chord_symbol(symbol)
    if parts is None:
        logger.debug("Unreadable chord symbol %r", symbol)
        return []
    root, kind = parts
    return build_voicings(root, kind, library)


def playability_score(voicing: Voicing) -> float:
    """
    Lower is easier: average fret plus half the span, with a bonus for
    ringing open strings.
    """
    frets = [entry.fret for entry in voicing.played]
    if not frets:
        return float("inf")
    score = sum(frets) / len(frets) + SPAN_WEIGHT * voicing.span
    if 0 in frets:
        score -= OPEN_STRING_BONUS
    return score


def _realize_template(template: VoicingTemplate, root: str, kind: str) -> Voicing | None:
    """Place a template on the neck, or None if the shape is unplayable."""
    root_frets = find_frets_for_note(
        to_pitch_class(root), template.root_string, max_fret=11
    )
    if not root_frets:
        logger.debug("Root %s not found on string %d", root, template.root_string)
        return None

    frets = _resolve_frets(template.layout, template.root_string, root_frets[0])
    if not _is_playable(frets):
        logger.debug("Template %s unplayable for %s%s: %s", template.id, root, kind, frets)
        return None

    return _to_voicing(frets, root, kind, template.name, template.id)


def _resolve_frets(
    layout: list[tuple[int, int]] | tuple[tuple[int, int], ...],
    root_string: int,
    root_fret: int,
) -> dict[int, int]:
    """Fret per layout string for a root placed at ``root_fret``."""
    root_pitch = string_open_midi(root_string) + root_fret
    frets: dict[int, int] = {}
    for string, interval in layout:
        open_pitch = string_open_midi(string)
        target = root_pitch + interval
        while target < open_pitch:
            target += 12
        frets[string] = target - open_pitch
    return frets


def _is_playable(frets: dict[int, int]) -> bool:
    values = list(frets.values())
    return max(values) <= MAX_FRET and max(values) - min(values) <= MAX_SPAN


def _to_voicing(
    frets: dict[int, int],
    root: str,
    kind: str,
    name: str,
    variant: str,
) -> Voicing:
    strings = [
        StringFret(string=string, fret=frets.get(string, UNPLAYED))
        for string in range(STRING_COUNT, 0, -1)
    ]
    return Voicing(
        chord_kind=kind,
        root=root,
        strings=strings,
        name=name or None,
        id=format_voicing_id(root, kind, variant),
    )


def _fallback_voicing(root: str, kind: str) -> Voicing:
    """Shell voicing for chords no template covers."""
    layout = ((FALLBACK_ROOT_STRING, 0), (4, _guess_third(kind)), *_FALLBACK_UPPER)
    low = find_frets_for_note(to_pitch_class(root), FALLBACK_ROOT_STRING, max_fret=11)[0]

    frets = _resolve_frets(layout, FALLBACK_ROOT_STRING, low)
    if not _is_playable(frets):
        frets = _resolve_frets(layout, FALLBACK_ROOT_STRING, low + 12)

    label = f"{root}{kind} shell"
    return _to_voicing(frets, root, kind, label, FALLBACK_ID)


def _guess_third(kind: str) -> int:
    """The kind's third, else minor for 'm...' suffixes (not 'maj'), else major."""
    chord_kind = get_chord_kind(kind)
    if chord_kind is not None and chord_kind.third is not None:
        return chord_kind.third
    if kind.startswith("m") and not kind.startswith("maj"):
        return 3
    return 4
