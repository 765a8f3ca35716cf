"""Constrained backtracking search for playable voicings.

The search assigns each required note to a string and fret in turn. A
placement is only tried when it keeps the hand-span invariant: the used
strings lie within a small window and every used fret is close to every
other. The per-string fret assignment lives in one array that is mutated
and restored as the search backtracks.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from fretwise.chords import ChordSpec
from fretwise.config import SearchConfig
from fretwise.fretboard import Fretboard, FretPos, Voicing
from fretwise.recognize import distinct_pitch_classes
from fretwise.scale import NoteName

_UNUSED = -1


def partial_minimum(num_notes: int) -> int:
    """The relaxed note count accepted for large chords.

    Chords of five or more notes rarely fit under one hand, so voicings
    covering three or four of their notes are accepted.

    Args:
        num_notes: Number of distinct notes in the chord.

    Returns:
        The minimum number of notes a voicing must cover.
    """
    if num_notes >= 5:
        return max(3, min(4, num_notes - 1))
    return num_notes


class VoicingSearch:
    """Enumerates the voicings of a note set on one fretboard."""

    def __init__(
        self, fretboard: Fretboard, config: Optional[SearchConfig] = None
    ) -> None:
        self._fretboard = fretboard
        self._config = config if config is not None else SearchConfig()
        self._max_notes = min(self._config.max_notes, fretboard.num_strings)

    @property
    def fretboard(self) -> Fretboard:
        return self._fretboard

    def search(
        self, required_notes: Sequence[NoteName], minimum_count: Optional[int] = None
    ) -> List[Voicing]:
        """Find every playable voicing of the required notes.

        Args:
            required_notes: Pitch classes to place, root first. Duplicates
                are ignored.
            minimum_count: Fewest notes a voicing may cover. Defaults to all
                of them; smaller values let the search omit notes.

        Returns:
            All accepted voicings, in search order. Empty when nothing fits.

        Raises:
            ValueError: If minimum_count is below 1 or above the note count.
        """
        notes = distinct_pitch_classes(required_notes)
        if not notes:
            return []
        minimum = len(notes) if minimum_count is None else minimum_count
        if minimum < 1 or minimum > len(notes):
            raise ValueError(
                f"Minimum count must be between 1 and {len(notes)}. Got: {minimum}"
            )
        frets = [_UNUSED] * self._fretboard.num_strings
        found: List[Voicing] = []
        self._walk(notes, 0, frets, 0, minimum, found)
        logging.debug(
            "Found %d voicings for %s (minimum %d)",
            len(found),
            [str(n) for n in notes],
            minimum,
        )
        return found

    def search_chord(self, chord: ChordSpec, allow_partial: bool = False) -> List[Voicing]:
        """Find voicings of a chord, optionally omitting notes of large chords."""
        notes = chord.notes()
        minimum = partial_minimum(len(notes)) if allow_partial else len(notes)
        return self.search(notes, minimum)

    def _fits(self, frets: List[int], string: int, fret: int) -> bool:
        low = high = string
        for other, placed in enumerate(frets):
            if placed == _UNUSED:
                continue
            if abs(placed - fret) > self._config.max_fret_span:
                return False
            low = min(low, other)
            high = max(high, other)
        return high - low <= self._config.max_string_span

    def _walk(
        self,
        notes: List[NoteName],
        index: int,
        frets: List[int],
        placed: int,
        minimum: int,
        found: List[Voicing],
    ) -> None:
        if index == len(notes):
            if minimum <= placed <= self._max_notes:
                found.append(
                    Voicing(
                        tuple(
                            FretPos(string, fret)
                            for string, fret in enumerate(frets)
                            if fret != _UNUSED
                        )
                    )
                )
            return
        note = notes[index]
        if placed < self._max_notes:
            for string in range(len(frets)):
                if frets[string] != _UNUSED:
                    continue
                for fret in self._fretboard.frets_for(string, note):
                    if self._fits(frets, string, fret):
                        frets[string] = fret
                        self._walk(notes, index + 1, frets, placed + 1, minimum, found)
                        frets[string] = _UNUSED
        # Skip this note if the rest can still reach the minimum
        remaining = len(notes) - index - 1
        if minimum < len(notes) and placed + remaining >= minimum:
            self._walk(notes, index + 1, frets, placed, minimum, found)


def search(
    fretboard: Fretboard,
    required_notes: Sequence[NoteName],
    minimum_count: Optional[int] = None,
    config: Optional[SearchConfig] = None,
) -> List[Voicing]:
    """Find every playable voicing of a note set. See `VoicingSearch.search`."""
    return VoicingSearch(fretboard, config).search(required_notes, minimum_count)


def search_chord(
    fretboard: Fretboard,
    chord: ChordSpec,
    allow_partial: bool = False,
    config: Optional[SearchConfig] = None,
) -> List[Voicing]:
    """Find voicings of a chord. See `VoicingSearch.search_chord`."""
    return VoicingSearch(fretboard, config).search_chord(chord, allow_partial)
