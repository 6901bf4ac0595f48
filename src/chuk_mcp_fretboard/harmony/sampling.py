"""
Weighted next-state selection.

Transition weights from a style pack are turned into log-scores, nudged by a
handful of voice-leading heuristics and a little jitter, then sampled
proportionally. All randomness comes from the ``random.Random`` passed in.
"""

from __future__ import annotations

import math
import random
from collections.abc import Mapping, Sequence

from chuk_mcp_fretboard.constants import (
    BORROW_PENALTY,
    CADENCE_APPROACH_BONUS,
    CADENCE_ARRIVAL_BONUS,
    FUNCTION_FLOW,
    FUNCTION_FLOW_BONUS,
    MIN_SAMPLE_WEIGHT,
    MIN_TRANSITION_WEIGHT,
    OFF_FLOW_PENALTY,
    REPEAT_PENALTY,
    SAME_FUNCTION_PENALTY,
    SCORE_JITTER,
    TRIPLE_REPEAT_PENALTY,
)
from chuk_mcp_fretboard.core.roman import HarmonicState, detect_function
from chuk_mcp_fretboard.models.style import StylePack


def weighted_pick(weights: Mapping[str, float], rng: random.Random) -> str | None:
    """
    Draw one key proportionally to its weight.

    A single uniform draw is compared against the running cumulative sum.
    Returns None when there is nothing to draw from.
    """
    items = [(token, weight) for token, weight in weights.items() if weight > 0]
    if not items:
        return None

    total = sum(weight for _, weight in items)
    threshold = rng.random() * total
    cumulative = 0.0
    for token, weight in items:
        cumulative += weight
        if threshold < cumulative:
            return token
    return items[-1][0]


def score_candidates(
    candidates: Mapping[str, float],
    style: StylePack,
    mode: str,
    history: Sequence[HarmonicState | None],
    cadence: Sequence[HarmonicState],
    rng: random.Random,
) -> dict[str, float]:
    """
    Adjust raw transition weights for one cell.

    Args:
        candidates: Raw weights (transition row or start weights)
        style: Pack supplying the allowed borrowed degrees
        mode: Mode name, for harmonic function lookup
        history: States already placed before this cell, oldest first
        cadence: The style's three cadence states
        rng: Source of the score jitter

    Returns:
        Positive sampling weights keyed like ``candidates``
    """
    previous = history[-1] if history else None
    before_previous = history[-2] if len(history) > 1 else None
    previous_func = detect_function(previous, mode) if previous is not None else None

    scored: dict[str, float] = {}
    for token, weight in candidates.items():
        state = HarmonicState.parse(token)
        score = math.log(max(weight, MIN_TRANSITION_WEIGHT))

        if not style.is_borrow_allowed(state):
            score -= BORROW_PENALTY

        if previous is not None and token == str(previous):
            score -= REPEAT_PENALTY
            if before_previous is not None and token == str(before_previous):
                score -= TRIPLE_REPEAT_PENALTY

        if previous_func is not None:
            func = detect_function(state, mode)
            if func == previous_func:
                score -= SAME_FUNCTION_PENALTY
            elif FUNCTION_FLOW[previous_func] == func:
                score += FUNCTION_FLOW_BONUS
            else:
                score -= OFF_FLOW_PENALTY

        if previous is not None:
            score += _cadence_bonus(previous, state, cadence)

        score += rng.random() * SCORE_JITTER
        scored[token] = max(math.exp(score), MIN_SAMPLE_WEIGHT)

    return scored


def _cadence_bonus(
    previous: HarmonicState,
    candidate: HarmonicState,
    cadence: Sequence[HarmonicState],
) -> float:
    approach, dominant, arrival = (state.roman for state in cadence)
    if previous.roman == approach and candidate.roman == dominant:
        return CADENCE_APPROACH_BONUS
    if previous.roman == dominant and candidate.roman == arrival:
        return CADENCE_ARRIVAL_BONUS
    return 0.0
