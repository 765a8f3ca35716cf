"""Fretboard grid, fret positions and voicings.

The fretboard maps every (string, fret) position of a tuned instrument to
its pitch class. String 0 is the lowest-pitched string and fret 0 is the
open string. A fretboard is built once from a tuning and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Generator, Iterable, List, Optional, Sequence, Tuple

from fretwise.scale import MAX_NOTES, NoteName


@dataclass(frozen=True, order=True)
class FretPos:
    """A finger placement: a string and a fret on that string."""

    string: int
    """The string index (0-based, lowest-pitched string first)."""
    fret: int
    """The fret number (0 is the open string)."""


@dataclass(frozen=True)
class Voicing:
    """A set of fret positions with at most one position per string.

    Positions are kept sorted by string. The empty voicing stands for
    silence. Use `Voicing.mk` to build one from unsorted positions.
    """

    positions: Tuple[FretPos, ...]
    """The placements, ordered by string index."""

    def __post_init__(self) -> None:
        seen = set()
        last = -1
        for pos in self.positions:
            if pos.string in seen:
                raise ValueError(f"Voicing has two positions on string {pos.string}")
            if pos.string < last:
                raise ValueError("Voicing positions must be ordered by string")
            seen.add(pos.string)
            last = pos.string

    @staticmethod
    def mk(positions: Iterable[FretPos]) -> Voicing:
        """Build a voicing from positions in any order.

        Raises:
            ValueError: If two positions share a string.
        """
        return Voicing(tuple(sorted(positions)))

    @staticmethod
    def empty() -> Voicing:
        return _EMPTY_VOICING

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Generator[FretPos, None, None]:
        yield from self.positions

    def strings(self) -> List[int]:
        return [pos.string for pos in self.positions]

    def frets(self) -> List[int]:
        return [pos.fret for pos in self.positions]

    def fret_on(self, string: int) -> Optional[int]:
        """Get the fret played on a string, or None if the string is unused."""
        for pos in self.positions:
            if pos.string == string:
                return pos.fret
        return None

    def center(self) -> float:
        """Average fret of the voicing, or 0 when empty."""
        if not self.positions:
            return 0.0
        return sum(pos.fret for pos in self.positions) / len(self.positions)

    def span(self) -> int:
        """Fret span of the fretted (non-open) positions."""
        fretted = [pos.fret for pos in self.positions if pos.fret > 0]
        if not fretted:
            return 0
        return max(fretted) - min(fretted)

    def __str__(self) -> str:
        if not self.positions:
            return "<silent>"
        return " ".join(f"{pos.string}:{pos.fret}" for pos in self.positions)


_EMPTY_VOICING = Voicing(())


class Fretboard:
    """Immutable grid mapping each string and fret to a pitch class.

    The tuning is kept as MIDI note numbers so absolute pitch is available
    for MIDI output; everything else works on pitch classes.
    """

    def __init__(self, tuning: Sequence[int], num_frets: int) -> None:
        """Build the grid.

        Args:
            tuning: MIDI note numbers of the open strings, lowest string first.
            num_frets: Number of fret positions per string, counting the open
                string (frets ``0 .. num_frets - 1``).

        Raises:
            ValueError: If the tuning is empty or the fret count is not positive.
        """
        if not tuning:
            raise ValueError("Tuning must name at least one string")
        if num_frets <= 0:
            raise ValueError(f"Invalid fret count: {num_frets}")
        self._tuning = tuple(tuning)
        self._num_frets = num_frets
        self._grid: Tuple[Tuple[NoteName, ...], ...] = tuple(
            tuple(
                NoteName((open_note + fret) % MAX_NOTES) for fret in range(num_frets)
            )
            for open_note in self._tuning
        )
        index: Dict[Tuple[int, NoteName], Tuple[int, ...]] = {}
        for string, row in enumerate(self._grid):
            for name in NoteName:
                index[(string, name)] = tuple(
                    fret for fret, cell in enumerate(row) if cell == name
                )
        self._frets_by_note = index

    @staticmethod
    def from_note_names(
        names: Sequence[NoteName], num_frets: int, base_note: int = 48
    ) -> Fretboard:
        """Build a fretboard from open-string pitch classes.

        Open strings are lifted to MIDI numbers as an ascending stack starting
        in the octave of ``base_note``.

        Args:
            names: Open-string pitch classes, lowest string first.
            num_frets: Number of fret positions per string.
            base_note: MIDI note of C in the octave of the lowest string.

        Returns:
            The fretboard.
        """
        tuning: List[int] = []
        for name in names:
            note = base_note + name.value
            if tuning:
                while note <= tuning[-1]:
                    note += MAX_NOTES
            tuning.append(note)
        return Fretboard(tuning, num_frets)

    @property
    def tuning(self) -> Tuple[int, ...]:
        return self._tuning

    @property
    def num_strings(self) -> int:
        return len(self._tuning)

    @property
    def num_frets(self) -> int:
        return self._num_frets

    def open_names(self) -> List[NoteName]:
        return [row[0] for row in self._grid]

    def __contains__(self, pos: FretPos) -> bool:
        return 0 <= pos.string < self.num_strings and 0 <= pos.fret < self._num_frets

    def _check(self, pos: FretPos) -> None:
        if pos not in self:
            raise ValueError(
                f"Position {pos} is outside a {self.num_strings}x{self._num_frets} fretboard"
            )

    def pitch_class(self, pos: FretPos) -> NoteName:
        """Get the pitch class sounded at a position.

        Raises:
            ValueError: If the position is off the fretboard.
        """
        self._check(pos)
        return self._grid[pos.string][pos.fret]

    def midi_note(self, pos: FretPos) -> int:
        """Get the MIDI note number sounded at a position.

        Raises:
            ValueError: If the position is off the fretboard.
        """
        self._check(pos)
        return self._tuning[pos.string] + pos.fret

    def frets_for(self, string: int, name: NoteName) -> Tuple[int, ...]:
        """All frets on a string that sound the given pitch class, ascending."""
        return self._frets_by_note[(string, name)]

    def positions_of(self, name: NoteName) -> List[FretPos]:
        """All positions on the fretboard that sound the given pitch class."""
        return [
            FretPos(string, fret)
            for string in range(self.num_strings)
            for fret in self.frets_for(string, name)
        ]

    def pitch_classes(self, voicing: Iterable[FretPos]) -> List[NoteName]:
        """Pitch classes of a set of positions, in the order given."""
        return [self.pitch_class(pos) for pos in voicing]

    def __repr__(self) -> str:
        return f"Fretboard(tuning={list(self._tuning)}, num_frets={self._num_frets})"
