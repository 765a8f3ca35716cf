"""Chord type catalog and chord specifications.

The catalog is a closed enumeration of chord qualities, each mapped to an
immutable formula of semitone offsets from an implicit root. Declaration
order matters: recognition scans the table in this order and the first
match wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from fretwise.scale import MAX_NOTES, NoteName, parse_note_name


@unique
class ChordType(Enum):
    """Closed enumeration of chord qualities.

    Values are the suffixes used when writing a chord symbol
    (``C`` + ``m7`` = ``Cm7``).
    """

    # Triads and dyads
    Major = ""
    Minor = "m"
    Diminished = "dim"
    Augmented = "aug"
    Sus2 = "sus2"
    Sus4 = "sus4"
    Power = "5"
    # Sixths
    Major6 = "6"
    Minor6 = "m6"
    SixNine = "6/9"
    MinorSixNine = "m6/9"
    # Sevenths
    Major7 = "maj7"
    Minor7 = "m7"
    Dominant7 = "7"
    Diminished7 = "dim7"
    HalfDiminished7 = "m7b5"
    MinorMajor7 = "m(maj7)"
    Augmented7 = "7#5"
    AugmentedMajor7 = "maj7#5"
    SevenSus4 = "7sus4"
    SevenSus2 = "7sus2"
    SevenFlat5 = "7b5"
    # Added tones
    Add9 = "add9"
    MinorAdd9 = "m(add9)"
    Add11 = "add11"
    # Ninths
    Major9 = "maj9"
    Minor9 = "m9"
    Dominant9 = "9"
    MinorMajor9 = "m(maj9)"
    NineSus4 = "9sus4"
    # Altered dominants
    SevenFlat9 = "7b9"
    SevenSharp9 = "7#9"
    Minor7Flat9 = "m7b9"
    SevenFlat5Flat9 = "7b5b9"
    SevenFlat5Sharp9 = "7b5#9"
    SevenSharp5Flat9 = "7#5b9"
    SevenSharp5Sharp9 = "7#5#9"
    SevenFlat13 = "7b13"
    # Elevenths
    Major11 = "maj11"
    Dominant11 = "11"
    Minor11 = "m11"
    SevenSharp11 = "7#11"
    Major7Sharp11 = "maj7#11"
    # Thirteenths
    Major13 = "maj13"
    Dominant13 = "13"
    Minor13 = "m13"
    ThirteenFlat9 = "13b9"
    # Omissions
    Major7No5 = "maj7no5"
    Dominant7No5 = "7no5"
    Minor7No5 = "m7no5"
    Major7No3 = "maj7no3"
    Dominant7No3 = "7no3"
    SixNo3 = "6no3"
    Major9No5 = "maj9no5"
    Dominant9No5 = "9no5"
    Minor9No5 = "m9no5"
    ThirteenNo5 = "13no5"
    ThirteenNo11 = "13no11"

    @property
    def formula(self) -> Tuple[int, ...]:
        """Semitone offsets from the root, root first, in chord-tone order."""
        return _CHORD_FORMULAS[self]

    @property
    def pitch_classes(self) -> FrozenSet[int]:
        """The formula reduced mod 12."""
        return _CHORD_PITCH_CLASSES[self]

    @property
    def is_extended(self) -> bool:
        """True when the chord carries a sixth, seventh or added tone."""
        return len(self.pitch_classes) >= 4 or any(
            o in (9, 10, 11) or o > MAX_NOTES for o in self.formula
        )

    @property
    def has_minor_third(self) -> bool:
        return 3 in self.pitch_classes and 4 not in self.pitch_classes

    @property
    def is_dominant(self) -> bool:
        """True for chords with a flat seventh over a major third or suspension."""
        pcs = self.pitch_classes
        return 10 in pcs and 3 not in pcs and (4 in pcs or 5 in pcs)

    @property
    def is_diminished(self) -> bool:
        """True for chords built on a diminished triad."""
        pcs = self.pitch_classes
        return 3 in pcs and 6 in pcs and 7 not in pcs and 4 not in pcs


_CHORD_FORMULAS: Dict[ChordType, Tuple[int, ...]] = {
    ChordType.Major: (0, 4, 7),
    ChordType.Minor: (0, 3, 7),
    ChordType.Diminished: (0, 3, 6),
    ChordType.Augmented: (0, 4, 8),
    ChordType.Sus2: (0, 2, 7),
    ChordType.Sus4: (0, 5, 7),
    ChordType.Power: (0, 7),
    ChordType.Major6: (0, 4, 7, 9),
    ChordType.Minor6: (0, 3, 7, 9),
    ChordType.SixNine: (0, 4, 7, 9, 14),
    ChordType.MinorSixNine: (0, 3, 7, 9, 14),
    ChordType.Major7: (0, 4, 7, 11),
    ChordType.Minor7: (0, 3, 7, 10),
    ChordType.Dominant7: (0, 4, 7, 10),
    ChordType.Diminished7: (0, 3, 6, 9),
    ChordType.HalfDiminished7: (0, 3, 6, 10),
    ChordType.MinorMajor7: (0, 3, 7, 11),
    ChordType.Augmented7: (0, 4, 8, 10),
    ChordType.AugmentedMajor7: (0, 4, 8, 11),
    ChordType.SevenSus4: (0, 5, 7, 10),
    ChordType.SevenSus2: (0, 2, 7, 10),
    ChordType.SevenFlat5: (0, 4, 6, 10),
    ChordType.Add9: (0, 4, 7, 14),
    ChordType.MinorAdd9: (0, 3, 7, 14),
    ChordType.Add11: (0, 4, 7, 17),
    ChordType.Major9: (0, 4, 7, 11, 14),
    ChordType.Minor9: (0, 3, 7, 10, 14),
    ChordType.Dominant9: (0, 4, 7, 10, 14),
    ChordType.MinorMajor9: (0, 3, 7, 11, 14),
    ChordType.NineSus4: (0, 5, 7, 10, 14),
    ChordType.SevenFlat9: (0, 4, 7, 10, 13),
    ChordType.SevenSharp9: (0, 4, 7, 10, 15),
    ChordType.Minor7Flat9: (0, 3, 7, 10, 13),
    ChordType.SevenFlat5Flat9: (0, 4, 6, 10, 13),
    ChordType.SevenFlat5Sharp9: (0, 4, 6, 10, 15),
    ChordType.SevenSharp5Flat9: (0, 4, 8, 10, 13),
    ChordType.SevenSharp5Sharp9: (0, 4, 8, 10, 15),
    ChordType.SevenFlat13: (0, 4, 7, 10, 20),
    ChordType.Major11: (0, 4, 7, 11, 14, 17),
    ChordType.Dominant11: (0, 4, 7, 10, 14, 17),
    ChordType.Minor11: (0, 3, 7, 10, 14, 17),
    ChordType.SevenSharp11: (0, 4, 7, 10, 18),
    ChordType.Major7Sharp11: (0, 4, 7, 11, 18),
    ChordType.Major13: (0, 4, 7, 11, 14, 21),
    ChordType.Dominant13: (0, 4, 7, 10, 14, 17, 21),
    ChordType.Minor13: (0, 3, 7, 10, 14, 17, 21),
    ChordType.ThirteenFlat9: (0, 4, 7, 10, 13, 21),
    ChordType.Major7No5: (0, 4, 11),
    ChordType.Dominant7No5: (0, 4, 10),
    ChordType.Minor7No5: (0, 3, 10),
    ChordType.Major7No3: (0, 7, 11),
    ChordType.Dominant7No3: (0, 7, 10),
    ChordType.SixNo3: (0, 7, 9),
    ChordType.Major9No5: (0, 4, 11, 14),
    ChordType.Dominant9No5: (0, 4, 10, 14),
    ChordType.Minor9No5: (0, 3, 10, 14),
    ChordType.ThirteenNo5: (0, 4, 10, 14, 17, 21),
    ChordType.ThirteenNo11: (0, 4, 7, 10, 14, 21),
}


def _build_pitch_classes() -> Dict[ChordType, FrozenSet[int]]:
    d: Dict[ChordType, FrozenSet[int]] = {}
    for chord_type in ChordType:
        formula = _CHORD_FORMULAS[chord_type]
        assert formula[0] == 0
        pcs = frozenset(o % MAX_NOTES for o in formula)
        assert len(pcs) == len(formula), chord_type
        d[chord_type] = pcs
    return d


_CHORD_PITCH_CLASSES = _build_pitch_classes()

OMISSION_TOLERANT: Tuple[ChordType, ...] = (
    ChordType.Dominant7No5,
    ChordType.Major7No5,
    ChordType.SixNo3,
    ChordType.Minor7No5,
    ChordType.Dominant7No3,
    ChordType.Major7No3,
    ChordType.Dominant9No5,
    ChordType.Major9No5,
    ChordType.Minor9No5,
    ChordType.ThirteenNo11,
    ChordType.ThirteenNo5,
)
"""Chord types that may match a strict subset of their formula.

Smaller formulas come first so the most specific reading wins.
"""

_CHORD_ALIASES: Dict[str, ChordType] = {
    "maj": ChordType.Major,
    "M": ChordType.Major,
    "major": ChordType.Major,
    "min": ChordType.Minor,
    "-": ChordType.Minor,
    "minor": ChordType.Minor,
    "o": ChordType.Diminished,
    "diminished": ChordType.Diminished,
    "+": ChordType.Augmented,
    "augmented": ChordType.Augmented,
    "major6": ChordType.Major6,
    "minor6": ChordType.Minor6,
    "69": ChordType.SixNine,
    "m69": ChordType.MinorSixNine,
    "M7": ChordType.Major7,
    "major7": ChordType.Major7,
    "min7": ChordType.Minor7,
    "minor7": ChordType.Minor7,
    "dom7": ChordType.Dominant7,
    "dominant7": ChordType.Dominant7,
    "o7": ChordType.Diminished7,
    "diminished7": ChordType.Diminished7,
    "ø": ChordType.HalfDiminished7,
    "ø7": ChordType.HalfDiminished7,
    "min7b5": ChordType.HalfDiminished7,
    "mmaj7": ChordType.MinorMajor7,
    "+7": ChordType.Augmented7,
    "aug7": ChordType.Augmented7,
    "majoradd9": ChordType.Add9,
    "minoradd9": ChordType.MinorAdd9,
    "madd9": ChordType.MinorAdd9,
    "M9": ChordType.Major9,
    "major9": ChordType.Major9,
    "minor9": ChordType.Minor9,
    "dom9": ChordType.Dominant9,
    "dom11": ChordType.Dominant11,
    "dom13": ChordType.Dominant13,
}


def _build_lower_aliases() -> Dict[str, ChordType]:
    d: Dict[str, ChordType] = {}
    for chord_type in ChordType:
        d[chord_type.name.lower()] = chord_type
        if len(chord_type.value) > 2:
            d.setdefault(chord_type.value.lower(), chord_type)
    for alias, chord_type in _CHORD_ALIASES.items():
        # Single letters are case-sensitive (M vs m)
        if len(alias) > 2:
            d.setdefault(alias.lower(), chord_type)
    return d


_LOWER_ALIASES = _build_lower_aliases()


def parse_chord_type(name: str) -> Optional[ChordType]:
    """Parse a chord quality name into a ChordType.

    Accepts chord-symbol suffixes (``m7``, ``7b9``), enum member names
    (``HalfDiminished7``) and common long-form aliases (``dominant7``).

    Args:
        name: The quality to parse. Exact matches are tried first, then a
            case-insensitive match on the longer names.

    Returns:
        The ChordType if found, None otherwise.
    """
    for chord_type in ChordType:
        if chord_type.value == name:
            return chord_type
    if name in _CHORD_ALIASES:
        return _CHORD_ALIASES[name]
    return _LOWER_ALIASES.get(name.lower())


def chord_type_for_intervals(intervals: Iterable[int]) -> Optional[ChordType]:
    """Find the first chord type whose pitch-class set equals the given intervals.

    Args:
        intervals: Semitone offsets from the root (reduced mod 12 here).

    Returns:
        The first matching ChordType in declaration order, or None.
    """
    pcs = frozenset(i % MAX_NOTES for i in intervals)
    for chord_type in ChordType:
        if chord_type.pitch_classes == pcs:
            return chord_type
    return None


def get_all_chord_types() -> List[ChordType]:
    """Get all chord types in declaration order."""
    return list(ChordType)


@dataclass(frozen=True)
class ChordSpec:
    """A chord quality rooted on a pitch class."""

    root: NoteName
    """The root pitch class."""
    chord_type: ChordType
    """The chord quality."""

    def notes(self) -> List[NoteName]:
        """The required pitch classes in formula order (root first)."""
        return [self.root.add_steps(o) for o in self.chord_type.formula]

    def transpose(self, steps: int) -> ChordSpec:
        return ChordSpec(self.root.add_steps(steps), self.chord_type)

    def __str__(self) -> str:
        return f"{self.root.sharp_name}{self.chord_type.value}"


def parse_chord_spec(symbol: str) -> Optional[ChordSpec]:
    """Parse a chord symbol such as ``"C"``, ``"F#m7"`` or ``"Bbmaj9"``.

    Args:
        symbol: Root letter, optional accidental, then a quality accepted
            by `parse_chord_type`.

    Returns:
        The ChordSpec, or None if either part fails to parse.
    """
    symbol = symbol.strip()
    if not symbol:
        return None
    split = 2 if len(symbol) > 1 and symbol[1] in "#b♯♭" else 1
    root = parse_note_name(symbol[:split])
    if root is None:
        return None
    chord_type = parse_chord_type(symbol[split:])
    if chord_type is None:
        return None
    return ChordSpec(root, chord_type)
