"""Chord and interval recognition from tapped positions or note names.

Two distinct pitch classes are reported as an interval measured from the
first note supplied. Three or more are matched against the chord catalog.
Candidate roots are tried in ascending pitch order measured upward from the
first note, so the result only depends on the notes' relative positions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Union

from fretwise.chords import OMISSION_TOLERANT, ChordSpec, ChordType
from fretwise.fretboard import Fretboard, FretPos
from fretwise.scale import NoteName, parse_note_name

INTERVAL_NAMES: Dict[int, str] = {
    0: "perfect unison",
    1: "minor 2nd",
    2: "major 2nd",
    3: "minor 3rd",
    4: "major 3rd",
    5: "perfect 4th",
    6: "tritone",
    7: "perfect 5th",
    8: "minor 6th",
    9: "major 6th",
    10: "minor 7th",
    11: "major 7th",
    12: "octave",
    13: "minor 9th",
    14: "major 9th",
}
"""Interval names by semitone distance, compound intervals included."""


@dataclass(frozen=True)
class IntervalMatch:
    """Two notes recognized as an interval above a root."""

    root: NoteName
    """The first note supplied."""
    name: str
    """The interval name, e.g. ``"perfect 5th"``."""
    semitones: int
    """Upward distance from the root in semitones."""

    def __str__(self) -> str:
        return f"{self.root.sharp_name} {self.name}"


@dataclass(frozen=True)
class ChordMatch:
    """Three or more notes recognized as a chord."""

    root: NoteName
    chord_type: ChordType

    @property
    def spec(self) -> ChordSpec:
        return ChordSpec(self.root, self.chord_type)

    def __str__(self) -> str:
        return str(self.spec)


RecognitionResult = Union[IntervalMatch, ChordMatch]


def distinct_pitch_classes(notes: Iterable[NoteName]) -> List[NoteName]:
    """Deduplicate pitch classes, keeping the first occurrence of each."""
    seen: List[NoteName] = []
    for note in notes:
        if note not in seen:
            seen.append(note)
    return seen


def find_interval(notes: Sequence[NoteName]) -> Optional[IntervalMatch]:
    """Name the interval from the first note to the second.

    Args:
        notes: Exactly two pitch classes; order is significant.

    Returns:
        The interval, or None if not given exactly two notes.
    """
    if len(notes) != 2:
        return None
    root, other = notes
    semitones = root.steps_to(other)
    return IntervalMatch(root=root, name=INTERVAL_NAMES[semitones], semitones=semitones)


def _relative(notes: Sequence[NoteName], root: NoteName) -> FrozenSet[int]:
    return frozenset(root.steps_to(note) for note in notes)


def find_chord(notes: Sequence[NoteName]) -> Optional[ChordMatch]:
    """Match distinct pitch classes against the chord catalog.

    Every note is tried as the root, in ascending order upward from the
    first note. An exact match on any root wins; only when none exists are
    the omission-tolerant types allowed to match a strict subset of their
    formula.

    Args:
        notes: Distinct pitch classes, first-supplied first.

    Returns:
        The first match, or None.
    """
    if len(notes) < 3:
        return None
    first = notes[0]
    roots = sorted(notes, key=first.steps_to)
    for root in roots:
        intervals = _relative(notes, root)
        for chord_type in ChordType:
            if chord_type.pitch_classes == intervals:
                return ChordMatch(root, chord_type)
    for root in roots:
        intervals = _relative(notes, root)
        for chord_type in OMISSION_TOLERANT:
            if intervals < chord_type.pitch_classes:
                return ChordMatch(root, chord_type)
    return None


def recognize_pitch_classes(notes: Iterable[NoteName]) -> Optional[RecognitionResult]:
    """Recognize an interval or chord from pitch classes.

    Args:
        notes: Pitch classes in the order they were supplied. Duplicates
            are ignored.

    Returns:
        An IntervalMatch for two distinct notes, a ChordMatch for a
        recognized chord, or None.
    """
    distinct = distinct_pitch_classes(notes)
    if len(distinct) == 2:
        result: Optional[RecognitionResult] = find_interval(distinct)
    elif len(distinct) > 2:
        result = find_chord(distinct)
    else:
        result = None
    logging.debug("Recognized %s as %s", [str(n) for n in distinct], result)
    return result


def recognize_names(names: Iterable[str]) -> Optional[RecognitionResult]:
    """Recognize from note names. Names that are not notes are skipped."""
    notes = [n for n in (parse_note_name(name) for name in names) if n is not None]
    return recognize_pitch_classes(notes)


def recognize(
    positions: Iterable[FretPos], fretboard: Fretboard
) -> Optional[RecognitionResult]:
    """Recognize the interval or chord sounded by a set of positions.

    Args:
        positions: Tapped positions, in the order they were supplied.
        fretboard: The fretboard used to look up each position's pitch class.

    Returns:
        An IntervalMatch, a ChordMatch, or None.

    Raises:
        ValueError: If a position is off the fretboard.
    """
    return recognize_pitch_classes(fretboard.pitch_class(pos) for pos in positions)
