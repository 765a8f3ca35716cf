"""The progression template library.

Pattern templates are written in scale degrees and realized from the seed's
root. Anchored templates place the seed chord at a declared slot and derive
the other chords by fixed offsets from it. The walk tables describe which
roman numerals may follow which for the random-walk strategy.

The tables are checked at import time.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from fretwise.chords import ChordType
from fretwise.grammar import (
    FULL_LENGTH_RANGE,
    MAX_SHORT_LENGTH,
    SEED,
    AnchoredStep,
    AnchoredTemplate,
    Degree,
    Intent,
    PatternTemplate,
    SecondaryDominant,
    SeedRole,
    TritoneSub,
)
from fretwise.scale import DORIAN, LYDIAN, MIXOLYDIAN, PHRYGIAN, KeyFamily

Maj = ChordType.Major
Min = ChordType.Minor
Dim = ChordType.Diminished
Maj7 = ChordType.Major7
Min7 = ChordType.Minor7
Dom7 = ChordType.Dominant7

I = Degree(0)
i = Degree(0, Min)
ii = Degree(1, Min)
ii_dim = Degree(1, Dim)
iii = Degree(2, Min)
III = Degree(2)
IV = Degree(3)
iv = Degree(3, Min)
V = Degree(4)
v = Degree(4, Min)
vi = Degree(5, Min)
VI = Degree(5)
vii_dim = Degree(6, Dim)
VII = Degree(6)

MAJOR_TEMPLATES: List[PatternTemplate] = [
    PatternTemplate(
        "Pop Axis",
        "The four-chord loop behind countless pop songs",
        Intent.Loop,
        KeyFamily.Major,
        1,
        (I, V, vi, IV),
    ),
    PatternTemplate(
        "Doo-Wop",
        "Fifties ballad changes",
        Intent.Loop,
        KeyFamily.Major,
        1,
        (I, vi, IV, V),
    ),
    PatternTemplate(
        "Three Chord",
        "Tonic, subdominant, dominant and home",
        Intent.Loop,
        KeyFamily.Major,
        1,
        (I, IV, V, I),
    ),
    PatternTemplate(
        "Plagal Vamp",
        "Rocking between tonic and subdominant",
        Intent.Vamp,
        KeyFamily.Major,
        1,
        (I, IV),
    ),
    PatternTemplate(
        "Sensitive",
        "The pop axis started from the relative minor",
        Intent.Loop,
        KeyFamily.Major,
        1,
        (vi, IV, I, V),
    ),
    PatternTemplate(
        "Canon Loop",
        "Pachelbel's descending bass, cut to its opening bar",
        Intent.Loop,
        KeyFamily.Major,
        1,
        (I, V, vi, iii, IV, I, IV, V),
    ),
    PatternTemplate(
        "Jazz Turnaround",
        "I-vi-ii-V back to the top",
        Intent.Turnaround,
        KeyFamily.Major,
        2,
        (I, vi, ii, V),
    ),
    PatternTemplate(
        "Two-Five-One",
        "The cadence at the heart of jazz harmony",
        Intent.Turnaround,
        KeyFamily.Major,
        2,
        (ii, V, I),
    ),
    PatternTemplate(
        "Mixolydian Rock",
        "Flat-seven rock vamp borrowed from the Mixolydian mode",
        Intent.Vamp,
        KeyFamily.Major,
        2,
        (I, VII, IV, I),
        MIXOLYDIAN,
    ),
    PatternTemplate(
        "Lydian Float",
        "Major tonic against the bright Lydian II",
        Intent.Vamp,
        KeyFamily.Major,
        2,
        (I, Degree(1)),
        LYDIAN,
    ),
    PatternTemplate(
        "Minor Plagal",
        "Subdominant turned minor on the way home",
        Intent.Loop,
        KeyFamily.Major,
        2,
        (I, IV, iv, I),
    ),
    PatternTemplate(
        "Royal Road",
        "IV-V-iii-vi, the J-pop staple",
        Intent.Loop,
        KeyFamily.Major,
        2,
        (IV, V, iii, vi),
    ),
    PatternTemplate(
        "Backdoor",
        "Home through the borrowed flat-seven dominant",
        Intent.Turnaround,
        KeyFamily.Major,
        2,
        (IV, iv, Degree(6, Dom7, -1), I),
    ),
    PatternTemplate(
        "Circle Descent",
        "Every diatonic chord down the circle of fifths",
        Intent.Phrase,
        KeyFamily.Major,
        2,
        (I, IV, vii_dim, iii, vi, ii, V, I),
    ),
    PatternTemplate(
        "Secondary Dominant Phrase",
        "Tonicizing vi and V on the way to the cadence",
        Intent.Phrase,
        KeyFamily.Major,
        3,
        (I, SecondaryDominant(5), vi, IV, SecondaryDominant(4), V, I),
    ),
    PatternTemplate(
        "Tritone Turnaround",
        "Jazz turnaround with the dominant swapped for its tritone substitute",
        Intent.Turnaround,
        KeyFamily.Major,
        3,
        (I, vi, ii, TritoneSub(0)),
    ),
    PatternTemplate(
        "Rhythm Changes",
        "The A section of the rhythm changes bridge into ii",
        Intent.Phrase,
        KeyFamily.Major,
        3,
        (I, vi, ii, V, iii, SecondaryDominant(1), ii, V),
    ),
    PatternTemplate(
        "Epic Borrowed",
        "Flat-six and flat-seven borrowed from the parallel minor",
        Intent.Cinematic,
        KeyFamily.Major,
        3,
        (I, Degree(5, Maj, -1), Degree(6, Maj, -1), I, iv, I),
    ),
    PatternTemplate(
        "Chromatic Mediant",
        "A flat-three mediant shift before the minor plagal close",
        Intent.Cinematic,
        KeyFamily.Major,
        3,
        (I, Degree(2, Maj, -1), IV, iv, I),
    ),
    PatternTemplate(
        "Heroic Ascent",
        "Relative minor climbing to a borrowed flat-six, flat-seven, one",
        Intent.Cinematic,
        KeyFamily.Major,
        3,
        (vi, IV, I, V, Degree(5, Maj, -1), Degree(6, Maj, -1), I),
    ),
    PatternTemplate(
        "Lydian Dream",
        "A floating phrase in the Lydian mode",
        Intent.Phrase,
        KeyFamily.Major,
        3,
        (I, Degree(1), vi, V, I),
        LYDIAN,
    ),
]
"""Templates for major-key seeds."""

MINOR_TEMPLATES: List[PatternTemplate] = [
    PatternTemplate(
        "Aeolian Loop",
        "i-VI-III-VII, the natural-minor workhorse",
        Intent.Loop,
        KeyFamily.Minor,
        1,
        (i, VI, III, VII),
    ),
    PatternTemplate(
        "Minor Cadence",
        "Tonic, minor subdominant, minor dominant",
        Intent.Loop,
        KeyFamily.Minor,
        1,
        (i, iv, v, i),
    ),
    PatternTemplate(
        "Andalusian Cadence",
        "Stepwise descent to the major dominant",
        Intent.Loop,
        KeyFamily.Minor,
        1,
        (i, VII, VI, V),
    ),
    PatternTemplate(
        "Minor Vamp",
        "Tonic against the subtonic",
        Intent.Vamp,
        KeyFamily.Minor,
        1,
        (i, VII),
    ),
    PatternTemplate(
        "Minor Rock",
        "i-VII-VI-VII",
        Intent.Loop,
        KeyFamily.Minor,
        1,
        (i, VII, VI, VII),
    ),
    PatternTemplate(
        "Epic Minor Loop",
        "A long minor cycle, cut to its first four chords",
        Intent.Loop,
        KeyFamily.Minor,
        1,
        (i, VI, III, VII, iv, V),
    ),
    PatternTemplate(
        "Minor Two-Five-One",
        "Half-diminished ii, major V, minor i",
        Intent.Turnaround,
        KeyFamily.Minor,
        2,
        (ii_dim, V, i),
    ),
    PatternTemplate(
        "Dorian Vamp",
        "Minor tonic against the major IV of the Dorian mode",
        Intent.Vamp,
        KeyFamily.Minor,
        2,
        (i, IV),
        DORIAN,
    ),
    PatternTemplate(
        "Phrygian Vamp",
        "Minor tonic against the flat-two of the Phrygian mode",
        Intent.Vamp,
        KeyFamily.Minor,
        2,
        (i, Degree(1)),
        PHRYGIAN,
    ),
    PatternTemplate(
        "Picardy Close",
        "Minor cadence that resolves to a major tonic",
        Intent.Loop,
        KeyFamily.Minor,
        2,
        (i, iv, V, I),
    ),
    PatternTemplate(
        "Minor Journey",
        "Through the relative major and back via the major dominant",
        Intent.Phrase,
        KeyFamily.Minor,
        2,
        (i, VI, III, VII, iv, V),
    ),
    PatternTemplate(
        "Dorian Phrase",
        "Stepwise climb through the Dorian mode",
        Intent.Phrase,
        KeyFamily.Minor,
        2,
        (i, ii, III, IV, v, IV),
        DORIAN,
    ),
    PatternTemplate(
        "Minor Secondary Phrase",
        "Tonicizing iv, then around the circle to the dominant",
        Intent.Phrase,
        KeyFamily.Minor,
        3,
        (i, SecondaryDominant(3), iv, VII, III, VI, ii_dim, V),
    ),
    PatternTemplate(
        "Neapolitan Drama",
        "Minor cycle ending through the Neapolitan flat-two",
        Intent.Cinematic,
        KeyFamily.Minor,
        3,
        (i, VI, III, VII, iv, Degree(1, Maj, -1), V, i),
    ),
    PatternTemplate(
        "Minor Tritone Turnaround",
        "Minor turnaround with a tritone-substitute dominant",
        Intent.Turnaround,
        KeyFamily.Minor,
        3,
        (i, VI, ii_dim, TritoneSub(0)),
    ),
    PatternTemplate(
        "Lament",
        "Descending lament bass with a double cadence",
        Intent.Cinematic,
        KeyFamily.Minor,
        3,
        (i, VII, VI, V, iv, V, i),
    ),
    PatternTemplate(
        "Phrygian Shadow",
        "Dark Phrygian colour around the flat-two",
        Intent.Cinematic,
        KeyFamily.Minor,
        3,
        (i, Degree(1), Degree(6, Min), iv, Degree(1), i),
        PHRYGIAN,
    ),
]
"""Templates for minor-key seeds."""

PATTERN_TEMPLATES: Dict[KeyFamily, List[PatternTemplate]] = {
    KeyFamily.Major: MAJOR_TEMPLATES,
    KeyFamily.Minor: MINOR_TEMPLATES,
}

DEFAULT_TEMPLATES: Dict[KeyFamily, PatternTemplate] = {
    KeyFamily.Major: PatternTemplate(
        "Default Loop",
        "I-IV-V-I",
        Intent.Loop,
        KeyFamily.Major,
        1,
        (I, IV, V, I),
    ),
    KeyFamily.Minor: PatternTemplate(
        "Default Loop",
        "i-iv-v-i",
        Intent.Loop,
        KeyFamily.Minor,
        1,
        (i, iv, v, i),
    ),
}
"""Used when no template can be chosen."""


def _step(offset: int, chord_type: ChordType) -> AnchoredStep:
    return AnchoredStep(offset % 12, chord_type)


ANCHORED_TEMPLATES: List[AnchoredTemplate] = [
    # Plain major seeds
    AnchoredTemplate(
        "I-IV-V-I",
        "Seed as the tonic of a three-chord loop",
        Intent.Loop,
        SeedRole.Major,
        (SEED, _step(5, Maj), _step(7, Maj), _step(0, Maj)),
    ),
    AnchoredTemplate(
        "I-IV-V-I (from IV)",
        "Seed as the subdominant of a three-chord loop",
        Intent.Loop,
        SeedRole.Major,
        (_step(7, Maj), SEED, _step(2, Maj), _step(7, Maj)),
    ),
    AnchoredTemplate(
        "I-V-vi-IV (from V)",
        "Seed as the dominant of the pop axis",
        Intent.Loop,
        SeedRole.Major,
        (_step(5, Maj), SEED, _step(2, Min), _step(10, Maj)),
    ),
    AnchoredTemplate(
        "Royal Road (from IV)",
        "Seed as the subdominant opening of IV-V-iii-vi",
        Intent.Loop,
        SeedRole.Major,
        (SEED, _step(2, Maj), _step(11, Min), _step(4, Min)),
    ),
    AnchoredTemplate(
        "Major Phrase",
        "Seed as the tonic of an eight-bar phrase",
        Intent.Phrase,
        SeedRole.Major,
        (
            SEED,
            _step(9, Min),
            _step(5, Maj),
            _step(7, Maj),
            _step(4, Min),
            _step(5, Maj),
            _step(7, Maj),
            _step(0, Maj),
        ),
    ),
    # Plain minor seeds
    AnchoredTemplate(
        "i-VI-III-VII",
        "Seed as the minor tonic of the Aeolian loop",
        Intent.Loop,
        SeedRole.Minor,
        (SEED, _step(8, Maj), _step(3, Maj), _step(10, Maj)),
    ),
    AnchoredTemplate(
        "i-iv-V-i",
        "Seed as the minor tonic of a harmonic-minor cadence",
        Intent.Loop,
        SeedRole.Minor,
        (SEED, _step(5, Min), _step(7, Maj), _step(0, Min)),
    ),
    AnchoredTemplate(
        "ii-V-I (from ii)",
        "Seed as the ii of a major cadence",
        Intent.Turnaround,
        SeedRole.Minor,
        (SEED, _step(5, Dom7), _step(10, Maj)),
    ),
    AnchoredTemplate(
        "iii-vi-ii-V-I (from iii)",
        "Seed as the mediant starting a circle-of-fifths cadence",
        Intent.Phrase,
        SeedRole.Minor,
        (SEED, _step(5, Min), _step(10, Min), _step(3, Dom7), _step(8, Maj)),
    ),
    # Dominant seeds
    AnchoredTemplate(
        "ii-V-I (from V)",
        "Seed as the V7 of a ii-V-I",
        Intent.Turnaround,
        SeedRole.Dominant,
        (_step(7, Min7), SEED, _step(5, Maj7)),
    ),
    AnchoredTemplate(
        "Perfect Cadence",
        "Seed resolving straight to its tonic",
        Intent.Turnaround,
        SeedRole.Dominant,
        (SEED, _step(5, Maj)),
    ),
    AnchoredTemplate(
        "I-VI7-ii-V (from V)",
        "Seed closing a secondary-dominant turnaround",
        Intent.Turnaround,
        SeedRole.Dominant,
        (_step(5, Maj7), _step(2, Dom7), _step(7, Min7), SEED),
    ),
    AnchoredTemplate(
        "Blues Vamp",
        "Seed as the I7 of a blues",
        Intent.Vamp,
        SeedRole.Dominant,
        (SEED, _step(5, Dom7), _step(0, Dom7), _step(7, Dom7)),
    ),
    AnchoredTemplate(
        "Blues Phrase",
        "Seed as the I7 of a compressed twelve-bar",
        Intent.Phrase,
        SeedRole.Dominant,
        (
            SEED,
            _step(5, Dom7),
            _step(0, Dom7),
            _step(7, Dom7),
            _step(5, Dom7),
            _step(0, Dom7),
            _step(7, Dom7),
        ),
    ),
    # Diminished seeds
    AnchoredTemplate(
        "ii°-V-i (from ii°)",
        "Seed as the half-diminished ii of a minor cadence",
        Intent.Turnaround,
        SeedRole.Diminished,
        (SEED, _step(5, Dom7), _step(10, Min)),
    ),
    AnchoredTemplate(
        "I-IV-vii°-I (from vii°)",
        "Seed as the leading-tone chord",
        Intent.Loop,
        SeedRole.Diminished,
        (_step(1, Maj), _step(6, Maj), SEED, _step(1, Maj)),
    ),
    AnchoredTemplate(
        "Passing Diminished",
        "Seed as a chromatic passing chord between I and ii",
        Intent.Turnaround,
        SeedRole.Diminished,
        (_step(11, Maj), SEED, _step(1, Min7), _step(6, Dom7)),
    ),
    AnchoredTemplate(
        "Minor Descent (from ii°)",
        "Seed as the ii° inside a minor phrase",
        Intent.Phrase,
        SeedRole.Diminished,
        (
            _step(10, Min),
            _step(3, Min),
            SEED,
            _step(5, Dom7),
            _step(10, Min),
            _step(6, Maj),
        ),
    ),
    # Extended major seeds
    AnchoredTemplate(
        "Imaj7-vi7-ii7-V7",
        "Seed as the major-seventh tonic of a jazz turnaround",
        Intent.Turnaround,
        SeedRole.ExtendedMajor,
        (SEED, _step(9, Min7), _step(2, Min7), _step(7, Dom7)),
    ),
    AnchoredTemplate(
        "IVmaj7-iii7-ii7-Imaj7",
        "Seed as the subdominant of a stepwise descent",
        Intent.Loop,
        SeedRole.ExtendedMajor,
        (SEED, _step(11, Min7), _step(9, Min7), _step(7, Maj7)),
    ),
    AnchoredTemplate(
        "Neo-Soul Phrase",
        "Seed as the tonic of a lush seventh-chord phrase",
        Intent.Phrase,
        SeedRole.ExtendedMajor,
        (
            SEED,
            _step(5, Maj7),
            _step(4, Min7),
            _step(9, Min7),
            _step(2, Min7),
            _step(7, Dom7),
        ),
    ),
    # Extended minor seeds
    AnchoredTemplate(
        "ii7-V7-Imaj7",
        "Seed as the ii7 of a jazz cadence",
        Intent.Turnaround,
        SeedRole.ExtendedMinor,
        (SEED, _step(5, Dom7), _step(10, Maj7)),
    ),
    AnchoredTemplate(
        "Minor Seventh Vamp",
        "Seed against the minor seventh a fourth up",
        Intent.Vamp,
        SeedRole.ExtendedMinor,
        (SEED, _step(5, Min7)),
    ),
    AnchoredTemplate(
        "ii-V-I-vi-ii-V",
        "Seed as the ii7 of a cycling jazz phrase",
        Intent.Phrase,
        SeedRole.ExtendedMinor,
        (
            SEED,
            _step(5, Dom7),
            _step(10, Maj7),
            _step(7, Min7),
            _step(0, Min7),
            _step(5, Dom7),
        ),
    ),
]
"""Templates that keep the seed chord at a declared slot."""

WALK_NUMERALS: Dict[KeyFamily, Dict[str, Degree]] = {
    KeyFamily.Major: {
        "I": I,
        "ii": ii,
        "iii": iii,
        "IV": IV,
        "V": V,
        "vi": vi,
        "vii°": vii_dim,
    },
    KeyFamily.Minor: {
        "i": i,
        "ii°": ii_dim,
        "III": III,
        "iv": iv,
        "V": V,
        "VI": VI,
        "VII": VII,
        # Leading-tone diminished, a semitone below the tonic
        "vii°": Degree(6, Dim, 1),
    },
}
"""Roman numerals available to the random walk, per key family."""

WALK_RULES: Dict[KeyFamily, Dict[str, Tuple[str, ...]]] = {
    KeyFamily.Major: {
        "I": ("ii", "iii", "IV", "V", "vi", "vii°"),
        "ii": ("V", "vii°"),
        "iii": ("vi", "IV"),
        "IV": ("ii", "V", "vii°"),
        "V": ("I", "vii°", "vi"),
        "vi": ("IV",),
        "vii°": ("I", "vi", "V"),
    },
    KeyFamily.Minor: {
        "i": ("ii°", "III", "iv", "V", "VI", "VII", "vii°"),
        "ii°": ("V", "vii°"),
        "III": ("iv", "ii°", "VI"),
        "iv": ("ii°", "V", "vii°"),
        "V": ("i", "vii°", "VI"),
        "VI": ("iv", "ii°"),
        "vii°": ("i", "VI", "V"),
        "VII": ("III", "iv", "ii°"),
    },
}
"""Which numeral may follow which."""

WALK_STARTS: Dict[KeyFamily, Tuple[str, ...]] = {
    KeyFamily.Major: ("I", "ii"),
    KeyFamily.Minor: ("i", "ii°"),
}

WALK_ENDINGS: Dict[KeyFamily, Tuple[str, ...]] = {
    KeyFamily.Major: ("I", "V", "IV"),
    KeyFamily.Minor: ("VII", "III", "iv"),
}


def _validate_pattern(template: PatternTemplate) -> None:
    assert 1 <= template.richness <= 3, template.name
    assert len(template.degrees) >= 2, template.name
    if not template.intent.truncates:
        low, high = FULL_LENGTH_RANGE
        assert low <= len(template.degrees) <= high, template.name
    for spec in template.degrees:
        slot = spec.degree if isinstance(spec, Degree) else spec.target
        assert 0 <= slot <= 6, template.name
        if isinstance(spec, Degree):
            assert spec.alteration in (-1, 0, 1), template.name


def _validate_anchored(template: AnchoredTemplate) -> None:
    assert template.steps.count(SEED) == 1, template.name
    if template.intent.truncates:
        assert len(template.steps) <= MAX_SHORT_LENGTH, template.name
    else:
        low, high = FULL_LENGTH_RANGE
        assert low <= len(template.steps) <= high, template.name


def _validate_walk() -> None:
    for family, rules in WALK_RULES.items():
        numerals = WALK_NUMERALS[family]
        for source, targets in rules.items():
            assert source in numerals
            for target in targets:
                assert target in numerals
        for numeral in WALK_STARTS[family] + WALK_ENDINGS[family]:
            assert numeral in numerals


for _family, _templates in PATTERN_TEMPLATES.items():
    for _template in _templates:
        assert _template.family == _family, _template.name
        _validate_pattern(_template)
for _template in DEFAULT_TEMPLATES.values():
    _validate_pattern(_template)
for _anchored in ANCHORED_TEMPLATES:
    _validate_anchored(_anchored)
_validate_walk()
