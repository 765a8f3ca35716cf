import random

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fretwise.base import MatchException
from fretwise.chords import ChordSpec, ChordType
from fretwise.grammar import (
    MAX_SHORT_LENGTH,
    Degree,
    Intent,
    SecondaryDominant,
    SeedRole,
    TritoneSub,
    classify_seed,
    extend_chord_type,
    key_family,
    resolve_root,
)
from fretwise.progression import (
    ProgressionGenerator,
    Strategy,
    default_progression,
    degree_chord,
    diatonic_chords,
    generate,
    template_weight,
)
from fretwise.scale import MAJOR, MINOR, KeyFamily, NoteName
from fretwise.templates import (
    ANCHORED_TEMPLATES,
    DEFAULT_TEMPLATES,
    PATTERN_TEMPLATES,
    WALK_NUMERALS,
)
from tests.fretwise.hypo import configure_hypo

configure_hypo()

C = NoteName.C


def _chord(root: NoteName, chord_type: ChordType = ChordType.Major) -> ChordSpec:
    return ChordSpec(root, chord_type)


@pytest.mark.parametrize(
    "spec,expected",
    [
        (Degree(0), NoteName.C),
        (Degree(4), NoteName.G),
        (Degree(6, ChordType.Major, -1), NoteName.Bb),
        (SecondaryDominant(5), NoteName.E),
        (SecondaryDominant(4), NoteName.D),
        (TritoneSub(0), NoteName.Db),
        (TritoneSub(1), NoteName.Eb),
    ],
)
def test_resolve_root_in_c_major(spec: Degree, expected: NoteName) -> None:
    assert resolve_root(spec, C, MAJOR) == expected


def test_resolve_root_rejects_unknown() -> None:
    with pytest.raises(MatchException):
        resolve_root("V", C, MAJOR)  # type: ignore


def test_resolve_root_in_a_minor() -> None:
    assert resolve_root(Degree(2), NoteName.A, MINOR) == NoteName.C
    assert resolve_root(Degree(6, ChordType.Diminished, 1), NoteName.A, MINOR) == NoteName.Ab


@pytest.mark.parametrize(
    "chord_type,dominant,expected",
    [
        (ChordType.Major, False, ChordType.Major7),
        (ChordType.Major, True, ChordType.Dominant7),
        (ChordType.Minor, True, ChordType.Minor7),
        (ChordType.Diminished, False, ChordType.HalfDiminished7),
        (ChordType.Augmented, False, ChordType.Augmented7),
        (ChordType.Sus4, False, ChordType.SevenSus4),
        (ChordType.Dominant7, False, ChordType.Dominant7),
        (ChordType.Minor9, False, ChordType.Minor9),
    ],
)
def test_extend_chord_type(chord_type: ChordType, dominant: bool, expected: ChordType) -> None:
    assert extend_chord_type(chord_type, dominant) == expected


@pytest.mark.parametrize(
    "chord_type,family,role",
    [
        (ChordType.Major, KeyFamily.Major, SeedRole.Major),
        (ChordType.Sus4, KeyFamily.Major, SeedRole.Major),
        (ChordType.Minor, KeyFamily.Minor, SeedRole.Minor),
        (ChordType.Dominant7, KeyFamily.Major, SeedRole.Dominant),
        (ChordType.Dominant13, KeyFamily.Major, SeedRole.Dominant),
        (ChordType.Diminished, KeyFamily.Minor, SeedRole.Diminished),
        (ChordType.HalfDiminished7, KeyFamily.Minor, SeedRole.Diminished),
        (ChordType.Major7, KeyFamily.Major, SeedRole.ExtendedMajor),
        (ChordType.Add9, KeyFamily.Major, SeedRole.ExtendedMajor),
        (ChordType.Minor7, KeyFamily.Minor, SeedRole.ExtendedMinor),
    ],
)
def test_seed_classification(chord_type: ChordType, family: KeyFamily, role: SeedRole) -> None:
    seed = _chord(C, chord_type)
    assert key_family(seed) == family
    assert classify_seed(seed) == role


def test_every_role_has_anchored_templates() -> None:
    roles = {t.role for t in ANCHORED_TEMPLATES}
    assert roles == set(SeedRole)


@pytest.mark.parametrize("family", list(KeyFamily))
@pytest.mark.parametrize("extended", [False, True])
def test_pattern_length_policy(family: KeyFamily, extended: bool) -> None:
    for template in PATTERN_TEMPLATES[family] + [DEFAULT_TEMPLATES[family]]:
        for root in NoteName:
            seed = _chord(root, ChordType.Minor7 if extended else ChordType.Minor)
            chords = template.realize(seed.root, extended)
            assert len(chords) == len(template.degrees)
            if template.intent.truncates:
                assert min(len(chords), MAX_SHORT_LENGTH) >= 2
            else:
                assert 5 <= len(chords) <= 8


def test_pop_axis_extended() -> None:
    template = next(t for t in PATTERN_TEMPLATES[KeyFamily.Major] if t.name == "Pop Axis")
    assert [str(c) for c in template.realize(C)] == ["C", "G", "Am", "F"]
    assert [str(c) for c in template.realize(C, extended=True)] == [
        "Cmaj7",
        "G7",
        "Am7",
        "Fmaj7",
    ]


def test_secondary_dominant_phrase() -> None:
    template = next(
        t
        for t in PATTERN_TEMPLATES[KeyFamily.Major]
        if t.name == "Secondary Dominant Phrase"
    )
    assert [str(c) for c in template.realize(NoteName.G)] == [
        "G",
        "B7",
        "Em",
        "C",
        "A7",
        "D",
        "G",
    ]


def test_tritone_turnaround() -> None:
    template = next(
        t for t in PATTERN_TEMPLATES[KeyFamily.Major] if t.name == "Tritone Turnaround"
    )
    assert [str(c) for c in template.realize(C)] == ["C", "Am", "Dm", "C#7"]


def test_minor_dominant_extends_to_seventh() -> None:
    template = next(t for t in PATTERN_TEMPLATES[KeyFamily.Minor] if t.name == "Picardy Close")
    assert [str(c) for c in template.realize(NoteName.A, extended=True)] == [
        "Am7",
        "Dm7",
        "E7",
        "Amaj7",
    ]


def test_anchored_realization_keeps_seed() -> None:
    for template in ANCHORED_TEMPLATES:
        seed = _chord(NoteName.E, ChordType.Minor9)
        chords = template.realize(seed, extended=True)
        assert chords[template.anchor] == seed
        assert template.anchor < MAX_SHORT_LENGTH or not template.intent.truncates


@pytest.mark.parametrize("complexity", [1, 2, 3])
@pytest.mark.parametrize("strategy", list(Strategy))
@pytest.mark.parametrize(
    "chord_type",
    [
        ChordType.Major,
        ChordType.Minor,
        ChordType.Dominant7,
        ChordType.Diminished,
        ChordType.Major7,
        ChordType.Minor7,
        ChordType.Power,
    ],
)
def test_generate_length_policy(
    complexity: int, strategy: Strategy, chord_type: ChordType
) -> None:
    rng = random.Random(complexity)
    for root in NoteName:
        seed = _chord(root, chord_type)
        progression = generate(seed, complexity, rng, strategy)
        assert progression.chords
        if progression.intent.truncates:
            assert len(progression) <= MAX_SHORT_LENGTH
        else:
            assert 5 <= len(progression) <= 8
        if progression.selected_index is not None:
            assert progression.chords[progression.selected_index] == seed


@given(
    st.sampled_from(list(NoteName)),
    st.sampled_from(list(ChordType)),
    st.integers(min_value=0, max_value=1000),
)
def test_anchored_selects_seed(root: NoteName, chord_type: ChordType, seed_value: int) -> None:
    seed = _chord(root, chord_type)
    progression = generate(seed, rng=random.Random(seed_value), strategy=Strategy.Anchored)
    assert progression.selected_index is not None
    assert progression.chords[progression.selected_index] == seed


@given(st.sampled_from(list(Strategy)), st.integers(min_value=0, max_value=1000))
def test_seeded_generation_is_deterministic(strategy: Strategy, seed_value: int) -> None:
    seed = _chord(NoteName.D, ChordType.Minor7)
    first = generate(seed, 3, random.Random(seed_value), strategy)
    second = generate(seed, 3, random.Random(seed_value), strategy)
    assert first == second


@given(st.integers(min_value=0, max_value=1000))
def test_walk(seed_value: int) -> None:
    seed = _chord(C)
    progression = ProgressionGenerator(random.Random(seed_value)).walk(seed)
    assert 4 <= len(progression) <= 7
    assert progression.intent == (Intent.Phrase if len(progression) >= 5 else Intent.Loop)
    assert progression.chords[0] in (_chord(C), _chord(NoteName.D, ChordType.Minor))
    assert progression.chords[-1] in (
        _chord(C),
        _chord(NoteName.G),
        _chord(NoteName.F),
    )
    assert len(progression.description.split("-")) == len(progression)


def test_walk_minor_leading_tone() -> None:
    vii = WALK_NUMERALS[KeyFamily.Minor]["vii°"]
    assert resolve_root(vii, NoteName.A, MINOR) == NoteName.Ab
    seen = set()
    generator = ProgressionGenerator(random.Random(3))
    for _ in range(50):
        seen.update(generator.walk(_chord(NoteName.A, ChordType.Minor)).chords)
    assert _chord(NoteName.G, ChordType.Diminished) not in seen
    assert _chord(NoteName.E) in seen


def test_default_progression() -> None:
    progression = default_progression(_chord(NoteName.A, ChordType.Minor))
    assert str(progression) == "Am - Dm - Em - Am"
    assert progression.selected_index == 0
    assert str(default_progression(_chord(C))) == "C - F - G - C"


def test_template_weight() -> None:
    assert template_weight(3, 1) == 1
    assert template_weight(3, 2) == 3
    assert template_weight(3, 3) == 9
    assert template_weight(1, 3) == 1


def test_complexity_is_checked() -> None:
    with pytest.raises(ValueError):
        ProgressionGenerator(complexity=0)
    with pytest.raises(ValueError):
        generate(_chord(C), complexity=4)


@pytest.mark.parametrize(
    "degree,seventh,ninth,expected",
    [
        (0, False, False, "C"),
        (1, False, False, "Dm"),
        (6, False, False, "Bdim"),
        (0, True, False, "Cmaj7"),
        (4, True, False, "G7"),
        (6, True, False, "Bm7b5"),
        (1, True, True, "Dm9"),
        (2, True, True, "Em7b9"),
        (4, True, True, "G9"),
        (6, True, True, "Bm7b5"),
    ],
)
def test_degree_chord(degree: int, seventh: bool, ninth: bool, expected: str) -> None:
    assert str(degree_chord(C, KeyFamily.Major, degree, seventh, ninth)) == expected


def test_diatonic_chords_in_minor() -> None:
    chords = diatonic_chords(NoteName.A, KeyFamily.Minor)
    assert [str(c) for c in chords] == ["Am", "Bdim", "C", "Dm", "Em", "F", "G"]
    with pytest.raises(ValueError):
        degree_chord(C, KeyFamily.Major, 7)
