"""
Harmony Generator - weighted walk over a style's transition graph.

The generator fills a progression grid one cell at a time:

1. Locked cells are kept exactly as given.
2. Styles with fixed bar templates (12-bar blues) hand the grid to one
   template as soon as the first unlocked cell is reached.
3. Other styles pick each state from the transition row of the previous one,
   scored by the heuristics in ``sampling``.
4. A closing cadence is forced into the last fully unlocked window if the
   walk did not produce one.
5. Every state is realized into a chord symbol against the key.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence

from chuk_mcp_fretboard.constants import (
    CELLS_PER_BAR,
    DEFAULT_KEY,
    DEFAULT_MODE,
    DEFAULT_STATE,
    DEFAULT_STYLE,
    ErrorMessages,
    Resolution,
)
from chuk_mcp_fretboard.core.roman import HarmonicState
from chuk_mcp_fretboard.core.scale import Key
from chuk_mcp_fretboard.harmony.realize import realize_state, state_of_cell
from chuk_mcp_fretboard.harmony.sampling import score_candidates, weighted_pick
from chuk_mcp_fretboard.harmony.voicing_pass import assign_voicings
from chuk_mcp_fretboard.models.harmony import HarmonyCell
from chuk_mcp_fretboard.models.style import StylePack
from chuk_mcp_fretboard.styles import StyleLoader, get_default_loader

logger = logging.getLogger(__name__)

CADENCE_LENGTH = 3


def cells_per_bar(resolution: str) -> int:
    """'1/2' is two cells per bar; anything else is one."""
    return CELLS_PER_BAR if resolution == "1/2" else 1


class HarmonyGenerator:
    """
    Generates progressions from style packs.

    The style loader is shared and read-only. Randomness comes from the
    generator's own ``random.Random`` unless a call supplies one, so tests can
    pin a seed.
    """

    def __init__(
        self,
        styles: StyleLoader | None = None,
        rng: random.Random | None = None,
    ):
        self.styles = styles or get_default_loader()
        self.rng = rng or random.Random()

    def generate(
        self,
        key: str = DEFAULT_KEY,
        mode: str = DEFAULT_MODE,
        bars: int = 4,
        style: str = DEFAULT_STYLE,
        resolution: Resolution | str = "1/2",
        locked: Mapping[int, HarmonyCell] | None = None,
        rng: random.Random | None = None,
    ) -> list[HarmonyCell]:
        """
        Generate a progression.

        Args:
            key: Tonic note name (unknown names fall back to C)
            mode: Mode name (unknown names fall back to major)
            bars: Number of bars, at least 1
            style: Style pack name (unknown names fall back to the default pack)
            resolution: '1/2' for two cells per bar, '1/1' for one
            locked: Cells pinned by index; kept unchanged with ``locked=True``
            rng: Random source for this call only

        Returns:
            ``bars * cells_per_bar`` cells with ``cell.index == position``

        Raises:
            ValueError: If ``bars`` is not a positive integer
        """
        if isinstance(bars, bool) or not isinstance(bars, int) or bars < 1:
            raise ValueError(ErrorMessages.INVALID_BARS.format(bars=bars))

        rng = rng or self.rng
        pack = self.styles.resolve(style)
        per_bar = cells_per_bar(resolution)
        total = bars * per_bar
        cadence = [HarmonicState.parse(token) for token in pack.cadence_for(mode)]

        pinned = {
            index: cell.model_copy(update={"index": index, "locked": True})
            for index, cell in (locked or {}).items()
            if 0 <= index < total
        }
        states: list[HarmonicState | None] = [None] * total
        for index, cell in pinned.items():
            states[index] = state_of_cell(cell)

        template: list[str] | None = None
        for index in range(total):
            if index in pinned:
                continue
            if pack.has_templates:
                template = rng.choice(pack.templates)
                break
            states[index] = self._next_state(pack, mode, states[:index], cadence, rng)

        if template is not None:
            _fill_from_template(states, template, bars, per_bar)

        filled = [state or HarmonicState.parse(DEFAULT_STATE) for state in states]
        _enforce_cadence(filled, cadence, set(pinned))

        logger.debug(
            "Plan for %s (%s %s, %d bars): template=%s states=%s",
            pack.name,
            key,
            mode,
            bars,
            template,
            [str(state) for state in filled],
        )

        tonality = Key.from_names(key, mode)
        return [
            pinned[index]
            if index in pinned
            else realize_state(state, index, tonality, mode, pack)
            for index, state in enumerate(filled)
        ]

    def _next_state(
        self,
        pack: StylePack,
        mode: str,
        history: Sequence[HarmonicState | None],
        cadence: Sequence[HarmonicState],
        rng: random.Random,
    ) -> HarmonicState:
        previous = history[-1] if history else None
        candidates = pack.transitions_from(previous)
        weights = score_candidates(candidates, pack, mode, history, cadence, rng)
        token = weighted_pick(weights, rng)
        if token is None:
            logger.debug(
                "No transitions from %s in %s, using %s", previous, pack.name, DEFAULT_STATE
            )
            token = DEFAULT_STATE
        return HarmonicState.parse(token)


def _fill_from_template(
    states: list[HarmonicState | None],
    template: Sequence[str],
    bars: int,
    per_bar: int,
) -> None:
    """Write one template state per bar into every empty cell, repeating the template."""
    for bar in range(bars):
        state = HarmonicState.parse(template[bar % len(template)])
        for offset in range(per_bar):
            index = bar * per_bar + offset
            if states[index] is None:
                states[index] = state


def contains_cadence(states: Sequence[HarmonicState], cadence: Sequence[HarmonicState]) -> bool:
    """Whether the cadence romans appear as a contiguous run."""
    target = [state.roman for state in cadence]
    romans = [state.roman for state in states]
    return any(
        romans[start : start + CADENCE_LENGTH] == target
        for start in range(len(romans) - CADENCE_LENGTH + 1)
    )


def _enforce_cadence(
    states: list[HarmonicState],
    cadence: Sequence[HarmonicState],
    locked: set[int],
) -> None:
    if contains_cadence(states, cadence):
        return
    for start in range(len(states) - CADENCE_LENGTH, -1, -1):
        window = range(start, start + CADENCE_LENGTH)
        if not locked.intersection(window):
            states[start : start + CADENCE_LENGTH] = list(cadence)
            return
    logger.debug("No unlocked window for cadence %s", [str(state) for state in cadence])


def generate_progression(
    key: str = DEFAULT_KEY,
    mode: str = DEFAULT_MODE,
    bars: int = 4,
    style: str = DEFAULT_STYLE,
    resolution: Resolution | str = "1/2",
    locked: Mapping[int, HarmonyCell] | None = None,
    seed: int | None = None,
    rng: random.Random | None = None,
    with_voicings: bool = False,
) -> list[HarmonyCell]:
    """
    Generate a progression with the built-in style library.

    ``seed`` makes the result reproducible; ``with_voicings`` also assigns a
    voicing to every cell.
    """
    if rng is None and seed is not None:
        rng = random.Random(seed)
    cells = HarmonyGenerator(rng=rng).generate(
        key=key,
        mode=mode,
        bars=bars,
        style=style,
        resolution=resolution,
        locked=locked,
    )
    if with_voicings:
        cells = assign_voicings(cells)
    return cells
