"""Building blocks of the progression template grammar.

A pattern template is a sequence of degree specifications realized against
a key. Each degree is one of three variants:

- `Degree`: a scale degree (0-6) with a chord type and an optional
  chromatic alteration for borrowed chords,
- `SecondaryDominant`: the dominant a fifth above some target degree,
- `TritoneSub`: the dominant a tritone away from that secondary dominant.

An anchored template instead lists fixed semitone offsets from a seed chord
and marks the slot the seed itself occupies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, FrozenSet, Optional, Sequence, Tuple, Union

from fretwise.base import MatchException
from fretwise.chords import ChordSpec, ChordType
from fretwise.scale import KeyFamily, NoteName, Scale

PERFECT_FIFTH = 7
TRITONE = 6
DOMINANT_DEGREE = 4

MAX_SHORT_LENGTH = 4
"""Most chords emitted for loop, vamp and turnaround templates."""
FULL_LENGTH_RANGE = (5, 8)
"""Inclusive length range of phrase and cinematic templates."""


@unique
class Intent(Enum):
    """The musical function of a progression, which governs its length."""

    Loop = "loop"
    Phrase = "phrase"
    Turnaround = "turnaround"
    Cinematic = "cinematic"
    Vamp = "vamp"

    @property
    def truncates(self) -> bool:
        """True for intents emitted at no more than four chords."""
        return self in (Intent.Loop, Intent.Vamp, Intent.Turnaround)


@dataclass(frozen=True)
class Degree:
    """A chord on a scale degree of the key."""

    degree: int
    """Zero-based scale degree (0-6)."""
    chord_type: ChordType = ChordType.Major
    alteration: int = 0
    """Chromatic shift of the root (-1, 0 or +1) for borrowed chords."""


@dataclass(frozen=True)
class SecondaryDominant:
    """The dominant of another degree: a perfect fifth above the target."""

    target: int
    """The degree being tonicized."""
    chord_type: ChordType = ChordType.Dominant7


@dataclass(frozen=True)
class TritoneSub:
    """The tritone substitute for the secondary dominant of a target degree."""

    target: int
    chord_type: ChordType = ChordType.Dominant7


DegreeSpec = Union[Degree, SecondaryDominant, TritoneSub]


def resolve_root(spec: DegreeSpec, key: NoteName, scale: Scale) -> NoteName:
    """Find the root of a degree specification in a key.

    Args:
        spec: The degree specification.
        key: The key's tonic.
        scale: The scale used for degree lookup.

    Returns:
        The chord root.

    Raises:
        MatchException: If the specification is not a known variant.
    """
    if isinstance(spec, Degree):
        return scale.note_at(key, spec.degree).add_steps(spec.alteration)
    elif isinstance(spec, SecondaryDominant):
        return scale.note_at(key, spec.target).add_steps(PERFECT_FIFTH)
    elif isinstance(spec, TritoneSub):
        return scale.note_at(key, spec.target).add_steps(PERFECT_FIFTH + TRITONE)
    else:
        raise MatchException(spec)


def is_dominant_position(spec: DegreeSpec) -> bool:
    """True for specs that sound as a dominant (V, V/x, subV/x)."""
    if isinstance(spec, Degree):
        return (
            spec.degree == DOMINANT_DEGREE
            and spec.alteration == 0
            and not spec.chord_type.has_minor_third
        )
    return True


_EXTENSIONS: Dict[ChordType, ChordType] = {
    ChordType.Major: ChordType.Major7,
    ChordType.Minor: ChordType.Minor7,
    ChordType.Diminished: ChordType.HalfDiminished7,
    ChordType.Augmented: ChordType.Augmented7,
    ChordType.Sus4: ChordType.SevenSus4,
    ChordType.Sus2: ChordType.SevenSus2,
}


def extend_chord_type(chord_type: ChordType, dominant: bool = False) -> ChordType:
    """Upgrade a triad to its matching seventh chord.

    Args:
        chord_type: The chord type to upgrade. Types that are already
            extended are returned unchanged.
        dominant: Whether the chord sits in a dominant position, which turns
            a major triad into a dominant seventh rather than a major seventh.

    Returns:
        The extended chord type.
    """
    if dominant and chord_type == ChordType.Major:
        return ChordType.Dominant7
    return _EXTENSIONS.get(chord_type, chord_type)


@dataclass(frozen=True)
class PatternTemplate:
    """A progression written in scale degrees, realized from any key root."""

    name: str
    description: str
    intent: Intent
    family: KeyFamily
    """The key family this template is written for."""
    richness: int
    """Harmonic richness from 1 (plain) to 3 (chromatic, long)."""
    degrees: Tuple[DegreeSpec, ...]
    scale: Optional[Scale] = None
    """Modal scale for degree lookup, replacing the family's default."""

    @property
    def key_scale(self) -> Scale:
        return self.scale if self.scale is not None else self.family.scale

    def realize(self, key: NoteName, extended: bool = False) -> Tuple[ChordSpec, ...]:
        """Turn the degrees into chords in a key.

        Args:
            key: The key's tonic.
            extended: Whether to upgrade every chord to its seventh form.

        Returns:
            The chords, one per degree, before any length policy.
        """
        scale = self.key_scale
        chords = []
        for spec in self.degrees:
            chord_type = spec.chord_type
            if extended:
                chord_type = extend_chord_type(chord_type, is_dominant_position(spec))
            chords.append(ChordSpec(resolve_root(spec, key, scale), chord_type))
        return tuple(chords)


@unique
class SeedRole(Enum):
    """How a seed chord functions, used to pick anchored templates."""

    Major = "major"
    Minor = "minor"
    Dominant = "dominant"
    Diminished = "diminished"
    ExtendedMajor = "extended-major"
    ExtendedMinor = "extended-minor"


@dataclass(frozen=True)
class AnchoredStep:
    """A chord at a fixed distance from the seed root."""

    offset: int
    """Semitones above the seed root."""
    chord_type: Optional[ChordType]
    """The chord type, or None for the seed's own slot."""


SEED = AnchoredStep(0, None)
"""Marks the slot the seed chord occupies in an anchored template."""


@dataclass(frozen=True)
class AnchoredTemplate:
    """A progression built around a seed chord at a declared slot."""

    name: str
    description: str
    intent: Intent
    role: SeedRole
    steps: Tuple[AnchoredStep, ...]

    @property
    def anchor(self) -> int:
        """Index of the seed's slot."""
        return self.steps.index(SEED)

    def realize(self, seed: ChordSpec, extended: bool = False) -> Tuple[ChordSpec, ...]:
        """Place the seed at its slot and derive every other chord from it."""
        chords = []
        for step in self.steps:
            if step.chord_type is None:
                chords.append(seed)
                continue
            chord_type = step.chord_type
            if extended:
                chord_type = extend_chord_type(chord_type)
            chords.append(ChordSpec(seed.root.add_steps(step.offset), chord_type))
        return tuple(chords)


def apply_length_policy(
    chords: Sequence[ChordSpec], intent: Intent
) -> Tuple[ChordSpec, ...]:
    """Truncate loop, vamp and turnaround progressions to four chords."""
    if intent.truncates:
        return tuple(chords[:MAX_SHORT_LENGTH])
    return tuple(chords)


MINOR_FAMILY: FrozenSet[ChordType] = frozenset(
    [
        ChordType.Minor,
        ChordType.Minor6,
        ChordType.MinorSixNine,
        ChordType.Minor7,
        ChordType.MinorMajor7,
        ChordType.MinorAdd9,
        ChordType.Minor9,
        ChordType.MinorMajor9,
        ChordType.Minor7Flat9,
        ChordType.Minor11,
        ChordType.Minor13,
        ChordType.Minor7No5,
        ChordType.Minor9No5,
        ChordType.Diminished,
        ChordType.HalfDiminished7,
        ChordType.Diminished7,
    ]
)
"""Chord types whose root is heard as a minor tonic."""


def key_family(seed: ChordSpec) -> KeyFamily:
    """Infer the key family implied by a seed chord."""
    return KeyFamily.Minor if seed.chord_type in MINOR_FAMILY else KeyFamily.Major


def classify_seed(seed: ChordSpec) -> SeedRole:
    """Classify a seed chord by the role it can play in a progression."""
    chord_type = seed.chord_type
    if chord_type.is_dominant:
        return SeedRole.Dominant
    if chord_type.is_diminished:
        return SeedRole.Diminished
    minor = chord_type in MINOR_FAMILY
    if chord_type.is_extended:
        return SeedRole.ExtendedMinor if minor else SeedRole.ExtendedMajor
    return SeedRole.Minor if minor else SeedRole.Major
