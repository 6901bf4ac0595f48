"""
Tests for the voicing system.

Tests cover:
- VoicingTemplate validation and the template catalog
- build_voicings / get_voicings_for_symbol
- Movement cost and continuity selection
"""

from pathlib import Path

import pytest

from chuk_mcp_fretboard.constants import MAX_FRET, MAX_SPAN, STRING_COUNT, UNPLAYED
from chuk_mcp_fretboard.core import CHORD_KINDS, PitchClass, string_pitch_class, to_pitch_class
from chuk_mcp_fretboard.models.voicing import StringFret, Voicing, VoicingTemplate
from chuk_mcp_fretboard.voicings import (
    NoVoicingAvailableError,
    TemplateLibrary,
    build_voicings,
    choose_voicing,
    get_voicings_for_symbol,
    movement_cost,
    playability_score,
)

ROOTS = [pc.spell() for pc in PitchClass]


def voicing_from_layout(layout: str, root: str = "C", kind: str = "") -> Voicing:
    """Build a voicing from chart notation, low E first ('X32010')."""
    strings = [
        StringFret(string=STRING_COUNT - offset, fret=UNPLAYED if char == "X" else int(char))
        for offset, char in enumerate(layout)
    ]
    return Voicing(chord_kind=kind, root=root, strings=strings)


def layouts(voicings) -> list[str]:
    return [voicing.layout() for voicing in voicings]


class TestVoicingTemplate:
    """Tests for the VoicingTemplate model."""

    def test_valid_template(self):
        """A template with the root on its root string."""
        template = VoicingTemplate(
            id="power",
            kinds=["", "m"],
            root_string=6,
            layout=[(6, 0), (5, 7), (4, 12)],
        )
        assert template.applies_to("") is True
        assert template.applies_to(" M ") is True
        assert template.applies_to("m7") is False

    def test_root_must_sit_on_root_string(self):
        """The root string carries interval 0."""
        with pytest.raises(ValueError):
            VoicingTemplate(id="bad", kinds=[""], root_string=5, layout=[(6, 0), (5, 7)])

    def test_intervals_must_belong_to_kind(self):
        """A flat seventh is not part of a major triad."""
        with pytest.raises(ValueError):
            VoicingTemplate(id="bad", kinds=[""], root_string=5, layout=[(5, 0), (4, 10)])

    def test_string_listed_once(self):
        """Each string appears at most once."""
        with pytest.raises(ValueError):
            VoicingTemplate(id="bad", kinds=[""], root_string=5, layout=[(5, 0), (5, 7)])

    def test_unknown_kinds_skip_interval_check(self):
        """Kinds outside the registry are accepted as labels."""
        template = VoicingTemplate(
            id="quartal", kinds=["quartal"], root_string=5, layout=[(5, 0), (4, 5), (3, 10)]
        )
        assert template.applies_to("QUARTAL") is True


class TestTemplateLibrary:
    """Tests for the template catalog."""

    def test_catalog_loads(self, template_library: TemplateLibrary):
        """The built-in catalog loads and validates."""
        assert len(template_library) > 50

    def test_covers_every_kind(self, template_library: TemplateLibrary):
        """Every registered chord kind has at least one template."""
        for kind in CHORD_KINDS:
            assert template_library.templates_for(kind), f"no template for {kind!r}"

    def test_preference_order(self, template_library: TemplateLibrary):
        """File order is kept."""
        ids = [template.id for template in template_library.templates_for("")]
        assert ids[0] == "open-c-shape"
        assert ids.index("open-a-shape") < ids.index("e-shape-barre")

    def test_kind_match_is_insensitive(self, template_library: TemplateLibrary):
        """Kind matching ignores case and whitespace."""
        ids = [template.id for template in template_library.templates_for(" MAJ7 ")]
        assert "cmaj7-shape" in ids

    def test_get_template(self, template_library: TemplateLibrary):
        """Lookup by id."""
        template = template_library.get_template("lydian-upper-structure")
        assert template is not None
        assert template.kinds == ["maj9#11"]
        assert template_library.get_template("missing") is None

    def test_invalid_catalog_raises(self, temp_dir: Path):
        """A malformed template is a configuration error."""
        path = temp_dir / "templates.yaml"
        path.write_text(
            "templates:\n"
            "  - id: wrong\n"
            "    kinds: ['']\n"
            "    root_string: 5\n"
            "    layout: [[5, 0], [4, 10]]\n"
        )
        library = TemplateLibrary(path)
        with pytest.raises(ValueError):
            library.templates

    def test_from_templates(self):
        """Libraries can be built in memory."""
        template = VoicingTemplate(
            id="only", kinds=[""], root_string=6, layout=[(6, 0), (5, 7), (4, 12)]
        )
        library = TemplateLibrary.from_templates([template])
        assert layouts(build_voicings("A", "", library)) == ["577XXX"]


class TestBuildVoicings:
    """Tests for build_voicings."""

    def test_open_c_first(self):
        """C major starts with the open cowboy chord."""
        voicings = build_voicings("C", "")
        assert voicings[0].layout() == "X32010"
        assert voicings[0].id == "C:maj:open-c-shape"
        assert voicings[0].chord_kind == ""
        assert voicings[0].root == "C"

    def test_open_a_minor_first(self):
        """A minor starts with the open shape."""
        assert build_voicings("A", "m")[0].layout() == "X02210"

    @pytest.mark.parametrize(
        "root,kind,layout",
        [
            ("F", "", "133211"),
            ("G", "7", "320001"),
            ("Bb", "m7", "X13121"),
            ("Eb", "maj7", "X68786"),
            ("G", "9", "3X3435"),
        ],
    )
    def test_known_shapes(self, root: str, kind: str, layout: str):
        """Familiar shapes are produced."""
        assert layout in layouts(build_voicings(root, kind))

    def test_strings_ordered_low_to_high(self):
        """Strings run 6 -> 1."""
        voicing = build_voicings("C", "")[0]
        assert [entry.string for entry in voicing.strings] == [6, 5, 4, 3, 2, 1]
        assert voicing.strings[0].fret == -1

    def test_aliases_normalized(self):
        """Kind aliases resolve before matching."""
        voicings = build_voicings("c", "M7")
        assert all(voicing.chord_kind == "maj7" for voicing in voicings)
        assert all(voicing.root == "C" for voicing in voicings)

    def test_sorted_by_playability(self):
        """Candidates come easiest first."""
        scores = [playability_score(voicing) for voicing in build_voicings("D", "m7")]
        assert scores == sorted(scores)

    def test_no_duplicate_layouts(self):
        """Identical shapes from different templates appear once."""
        for root in ROOTS:
            found = layouts(build_voicings(root, "7"))
            assert len(found) == len(set(found))

    def test_every_voicing_sounds_its_kind(self):
        """Played strings sound only intervals of the chord kind."""
        for root in ROOTS:
            root_pc = to_pitch_class(root)
            for token, kind in CHORD_KINDS.items():
                for voicing in build_voicings(root, token):
                    assert not voicing.id.endswith("fallback-shell"), f"{root}{token}"
                    for entry in voicing.played:
                        interval = root_pc.interval_to(string_pitch_class(entry.string, entry.fret))
                        assert interval in kind.intervals, f"{voicing.id} {voicing.layout()}"

    def test_every_voicing_is_reachable(self):
        """Frets stay on the neck and within one hand span."""
        for root in ROOTS:
            for token in CHORD_KINDS:
                for voicing in build_voicings(root, token):
                    assert voicing.span <= MAX_SPAN, f"{voicing.id} {voicing.layout()}"
                    assert max(entry.fret for entry in voicing.strings) <= MAX_FRET

    def test_fallback_shell(self):
        """Unknown kinds get a single shell voicing."""
        voicings = build_voicings("C", "weird")
        assert len(voicings) == 1
        assert voicings[0].layout() == "X3233X"
        assert voicings[0].id == "C:weird:fallback-shell"

    def test_fallback_guesses_minor_third(self):
        """Suffixes starting with 'm' get a minor third."""
        assert build_voicings("C", "mystery")[0].layout() == "X3133X"

    def test_fallback_moves_up_an_octave(self):
        """A low root that cannot fit the shell moves up twelve frets."""
        voicing = build_voicings("A", "weird")[0]
        assert voicing.strings[1].fret == 12
        assert voicing.span <= MAX_SPAN


class TestVoicingsForSymbol:
    """Tests for get_voicings_for_symbol."""

    def test_symbol(self):
        """Symbols split into root and kind."""
        voicings = get_voicings_for_symbol("Dm7")
        assert voicings
        assert {voicing.chord_kind for voicing in voicings} == {"m7"}
        assert {voicing.root for voicing in voicings} == {"D"}

    def test_extended_alias(self):
        """Aliased suffixes in symbols are normalized."""
        voicings = get_voicings_for_symbol("Fmaj7(9)")
        assert voicings[0].chord_kind == "maj9"

    def test_unreadable_symbol(self):
        """Symbols without a root give nothing."""
        assert get_voicings_for_symbol("H7") == []
        assert get_voicings_for_symbol("") == []


class TestMovementCost:
    """Tests for movement_cost."""

    def test_identical(self):
        """No movement between identical voicings."""
        c = voicing_from_layout("X32010")
        assert movement_cost(c, c) == 0

    def test_fret_distance(self):
        """Strings played in both add their fret distance."""
        assert movement_cost(voicing_from_layout("X32010"), voicing_from_layout("X35553")) == 15

    def test_new_string(self):
        """Picking up a silent string costs one."""
        assert movement_cost(voicing_from_layout("X32010"), voicing_from_layout("332010")) == 1

    def test_dropped_string(self):
        """Dropping a note costs half its fret."""
        assert movement_cost(voicing_from_layout("332010"), voicing_from_layout("X32010")) == 1.5

    def test_silent_strings_are_free(self):
        """Strings silent in both cost nothing."""
        assert movement_cost(voicing_from_layout("XX0232"), voicing_from_layout("XX0232")) == 0


class TestChooseVoicing:
    """Tests for choose_voicing."""

    def test_no_previous_returns_first(self):
        """Without a previous voicing the first candidate wins."""
        first = voicing_from_layout("8X998X")
        second = voicing_from_layout("X32010")
        assert choose_voicing(None, [first, second]) is first

    def test_picks_lowest_cost(self):
        """The nearest candidate wins."""
        previous = voicing_from_layout("X32010")
        far = voicing_from_layout("X35553")
        near = voicing_from_layout("X32013")
        assert choose_voicing(previous, [far, near]) is near

    def test_ties_keep_first(self):
        """Equal costs keep the earlier candidate."""
        previous = voicing_from_layout("X02210", root="A", kind="m")
        up = voicing_from_layout("X02220", root="A", kind="m")
        down = voicing_from_layout("X02200", root="A", kind="m")
        assert movement_cost(previous, up) == movement_cost(previous, down)
        assert choose_voicing(previous, [up, down]) is up
        assert choose_voicing(previous, [down, up]) is down

    def test_empty_candidates(self):
        """No candidates is a hard failure."""
        with pytest.raises(NoVoicingAvailableError):
            choose_voicing(None, [], symbol="C")

    def test_error_is_value_error(self):
        """The failure is also a ValueError and names the chord."""
        with pytest.raises(ValueError, match="Cmaj7"):
            choose_voicing(voicing_from_layout("X32010"), [], symbol="Cmaj7")

    def test_threads_through_progression(self):
        """Chained choices stay near the previous shape."""
        previous = None
        for symbol in ["C", "Am", "F", "G7"]:
            chosen = choose_voicing(previous, get_voicings_for_symbol(symbol), symbol)
            if previous is not None:
                assert chosen.span <= MAX_SPAN
            previous = chosen
        assert previous is not None
        assert previous.root == "G"
