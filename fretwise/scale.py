"""Pitch classes, note names and scale definitions.

This module provides the twelve chromatic pitch classes, note-name parsing
and display, and the seven-note scales used to turn scale degrees into chord
roots. All arithmetic is relative (mod 12), so everything built on top of it
is transposition-invariant.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, List, Optional, Tuple


@unique
class NoteName(Enum):
    """Enumeration of the twelve chromatic pitch classes.

    Values correspond to semitone offsets from C within an octave.
    Member names use flat notation; see `sharp_name` for display.
    """

    C = 0
    Db = 1
    D = 2
    Eb = 3
    E = 4
    F = 5
    Gb = 6
    G = 7
    Ab = 8
    A = 9
    Bb = 10
    B = 11

    def add_steps(self, steps: int) -> NoteName:
        """Add semitone steps to this note name.

        Args:
            steps: Number of semitones to add (can be negative).

        Returns:
            The resulting note name after adding the steps.
        """
        return NOTE_LOOKUP[(self.value + steps) % MAX_NOTES]

    def steps_to(self, other: NoteName) -> int:
        """Return the upward distance in semitones (0-11) from this note to another."""
        return (other.value - self.value) % MAX_NOTES

    @property
    def sharp_name(self) -> str:
        """The canonical display name, using sharps for accidentals."""
        return SHARP_NAMES[self.value]

    def __str__(self) -> str:
        return self.sharp_name


MAX_NOTES = 12
"""Number of distinct pitch classes in the chromatic scale."""

SHARP_NAMES: List[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
"""Canonical display names indexed by pitch class."""


def _build_note_lookup() -> Dict[int, NoteName]:
    d: Dict[int, NoteName] = {}
    for n in NoteName:
        d[n.value] = n
    assert len(d) == MAX_NOTES
    return d


NOTE_LOOKUP = _build_note_lookup()
"""Lookup table from semitone offset (0-11) to NoteName."""

_ACCIDENTALS: Dict[str, int] = {"": 0, "#": 1, "b": -1}


def parse_note_name(name: str) -> Optional[NoteName]:
    """Parse a note name such as ``"C"``, ``"f#"`` or ``"Bb"``.

    Sharps and flats are both accepted and the letter is case-insensitive.

    Args:
        name: The note name to parse.

    Returns:
        The matching NoteName, or None if the name is not a note.
    """
    name = name.strip()
    if not name or len(name) > 2:
        return None
    letter = name[0].upper()
    accidental = name[1:].replace("♯", "#").replace("♭", "b")
    if letter not in "ABCDEFG" or accidental not in _ACCIDENTALS:
        return None
    natural = NoteName[letter]
    return natural.add_steps(_ACCIDENTALS[accidental])


def name_and_octave_from_note(note: int) -> Tuple[NoteName, int]:
    """Extract pitch class and octave from a MIDI note number.

    Args:
        note: MIDI note number (0-127).

    Returns:
        Tuple of (note_name, octave) in scientific pitch notation
        (MIDI 60 is C4).
    """
    return NOTE_LOOKUP[note % MAX_NOTES], note // MAX_NOTES - 1


@dataclass(frozen=True)
class Scale:
    """A seven-note scale used for degree lookup.

    The intervals always start with 0 (the root) and ascend strictly
    within one octave.
    """

    name: str
    """The human-readable name of this scale."""
    intervals: Tuple[int, ...]
    """Semitone offsets from the root, one per degree."""

    def offset(self, degree: int) -> int:
        """Get the semitone offset of a scale degree.

        Args:
            degree: Zero-based degree. Degrees past the seventh wrap into
                the next octave.

        Returns:
            Semitones above the root.
        """
        octave, index = divmod(degree, len(self.intervals))
        return octave * MAX_NOTES + self.intervals[index]

    def note_at(self, root: NoteName, degree: int) -> NoteName:
        """Get the pitch class of a degree of this scale built on a root."""
        return root.add_steps(self.offset(degree))

    def validate(self) -> None:
        """Check the interval table.

        Raises:
            AssertionError: If the intervals are not seven ascending steps
                starting at 0.
        """
        assert len(self.intervals) == 7
        assert self.intervals[0] == 0
        last_steps = -1
        for steps in self.intervals:
            assert 0 <= steps < MAX_NOTES
            assert steps > last_steps
            last_steps = steps


MAJOR = Scale("Major", (0, 2, 4, 5, 7, 9, 11))
MINOR = Scale("Minor", (0, 2, 3, 5, 7, 8, 10))
DORIAN = Scale("Dorian", (0, 2, 3, 5, 7, 9, 10))
PHRYGIAN = Scale("Phrygian", (0, 1, 3, 5, 7, 8, 10))
LYDIAN = Scale("Lydian", (0, 2, 4, 6, 7, 9, 11))
MIXOLYDIAN = Scale("Mixolydian", (0, 2, 4, 5, 7, 9, 10))

SCALES: List[Scale] = [
    MAJOR,
    MINOR,
    DORIAN,
    PHRYGIAN,
    LYDIAN,
    MIXOLYDIAN,
]
"""Seven-note scales available for degree lookup."""

for _scale in SCALES:
    _scale.validate()


@unique
class KeyFamily(Enum):
    """Major or minor key context."""

    Major = "major"
    Minor = "minor"

    @property
    def scale(self) -> Scale:
        """The default scale for degree lookup in this family."""
        return MAJOR if self == KeyFamily.Major else MINOR
