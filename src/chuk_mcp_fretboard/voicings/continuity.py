"""
Voicing continuity - keep the fretting hand where it already is.

Given the voicing just played and the candidates for the next chord, pick the
candidate that needs the least movement.
"""

from __future__ import annotations

from chuk_mcp_fretboard.constants import ErrorMessages
from chuk_mcp_fretboard.models.voicing import Voicing

NEW_STRING_PENALTY = 1.0
DROPPED_NOTE_FACTOR = 0.5


class NoVoicingAvailableError(ValueError):
    """Raised when a chord has no candidate voicing at all."""

    def __init__(self, symbol: str = ""):
        self.symbol = symbol
        super().__init__(ErrorMessages.NO_VOICING.format(symbol=symbol))


def movement_cost(previous: Voicing, candidate: Voicing) -> float:
    """
    Hand movement from one voicing to another, string by string.

    - both played: fret distance
    - newly played string: flat penalty of 1
    - dropped string: half the fret the dropped note was held at
    - both silent: free
    """
    before = previous.fret_map
    after = candidate.fret_map
    total = 0.0
    for entry in candidate.strings:
        held = before.get(entry.string)
        placed = after.get(entry.string)
        if placed is not None and held is not None:
            total += abs(placed - held)
        elif placed is not None:
            total += NEW_STRING_PENALTY
        elif held is not None:
            total += held * DROPPED_NOTE_FACTOR
    return total


def choose_voicing(
    previous: Voicing | None,
    candidates: list[Voicing],
    symbol: str = "",
) -> Voicing:
    """
    Pick the candidate closest to the previous voicing.

    With no previous voicing the first (preferred) candidate wins. Ties keep
    the earliest candidate.

    Raises:
        NoVoicingAvailableError: If ``candidates`` is empty
    """
    if not candidates:
        raise NoVoicingAvailableError(symbol)
    if previous is None:
        return candidates[0]

    best = candidates[0]
    best_cost = movement_cost(previous, best)
    for candidate in candidates[1:]:
        cost = movement_cost(previous, candidate)
        if cost < best_cost:
            best, best_cost = candidate, cost
    return best
