from itertools import product
from typing import List, Set

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fretwise.chords import ChordSpec, ChordType
from fretwise.config import Instrument, SearchConfig
from fretwise.fretboard import Fretboard, FretPos, Voicing
from fretwise.search import VoicingSearch, partial_minimum, search, search_chord
from fretwise.scale import NoteName
from tests.fretwise.hypo import configure_hypo

configure_hypo()

GUITAR = Fretboard(Instrument.StandardGuitar.tuning, 18)


def _brute_force(board: Fretboard, notes: List[NoteName], minimum: int) -> Set[Voicing]:
    found = set()
    options = [[None] + list(range(board.num_frets)) for _ in range(board.num_strings)]
    for frets in product(*options):
        positions = [FretPos(s, f) for s, f in enumerate(frets) if f is not None]
        if not minimum <= len(positions) <= 6:
            continue
        pcs = board.pitch_classes(positions)
        if len(set(pcs)) != len(pcs) or not set(pcs) <= set(notes):
            continue
        used = [p.fret for p in positions]
        strings = [p.string for p in positions]
        if max(used) - min(used) > 3 or max(strings) - min(strings) > 3:
            continue
        found.add(Voicing(tuple(positions)))
    return found


def test_toy_search() -> None:
    board = Fretboard.from_note_names([NoteName.C, NoteName.E, NoteName.G], 5)
    voicings = search(board, [NoteName.C, NoteName.E, NoteName.G])
    assert voicings == [Voicing((FretPos(0, 0), FretPos(1, 0), FretPos(2, 0)))]


@pytest.mark.parametrize("minimum", [1, 2, 3])
def test_toy_search_is_complete(minimum: int) -> None:
    board = Fretboard.from_note_names([NoteName.C, NoteName.E, NoteName.G], 5)
    notes = [NoteName.C, NoteName.E, NoteName.G]
    voicings = search(board, notes, minimum)
    assert len(voicings) == len(set(voicings))
    assert set(voicings) == _brute_force(board, notes, minimum)


def test_small_guitar_search_is_complete() -> None:
    board = Fretboard(Instrument.StandardGuitar.tuning, 6)
    notes = ChordSpec(NoteName.C, ChordType.Major).notes()
    assert set(search(board, notes)) == _brute_force(board, notes, 3)


def test_open_c_is_found() -> None:
    chord = ChordSpec(NoteName.C, ChordType.Major)
    voicings = search_chord(GUITAR, chord)
    assert Voicing.mk([FretPos(1, 3), FretPos(2, 2), FretPos(3, 0)]) in voicings


def test_duplicate_notes_are_ignored() -> None:
    notes = [NoteName.C, NoteName.E, NoteName.G]
    assert search(GUITAR, notes + [NoteName.C]) == search(GUITAR, notes)


def test_empty_and_invalid() -> None:
    assert search(GUITAR, []) == []
    with pytest.raises(ValueError):
        search(GUITAR, [NoteName.C, NoteName.E], 0)
    with pytest.raises(ValueError):
        search(GUITAR, [NoteName.C, NoteName.E], 3)


def test_no_match_is_empty() -> None:
    board = Fretboard.from_note_names([NoteName.C, NoteName.E], 2)
    assert search(board, [NoteName.D, NoteName.Gb, NoteName.A]) == []


def test_too_many_notes_for_strings() -> None:
    board = Fretboard.from_note_names([NoteName.C, NoteName.E, NoteName.G], 12)
    chord = ChordSpec(NoteName.C, ChordType.Major7)
    assert search_chord(board, chord) == []
    assert search_chord(board, ChordSpec(NoteName.C, ChordType.Dominant9), True) == []


@pytest.mark.parametrize("n,expected", [(1, 1), (2, 2), (3, 3), (4, 4), (5, 4), (6, 4), (7, 4)])
def test_partial_minimum(n: int, expected: int) -> None:
    assert partial_minimum(n) == expected


def test_partial_search_for_large_chords() -> None:
    chord = ChordSpec(NoteName.C, ChordType.Dominant13)
    voicings = VoicingSearch(GUITAR).search_chord(chord, allow_partial=True)
    assert voicings
    assert all(len(v) >= 4 for v in voicings)


def test_narrow_config() -> None:
    config = SearchConfig(max_string_span=2, max_fret_span=1, max_notes=3)
    chord = ChordSpec(NoteName.G, ChordType.Major)
    for voicing in search_chord(GUITAR, chord, config=config):
        strings = voicing.strings()
        frets = voicing.frets()
        assert max(strings) - min(strings) <= 2
        assert max(frets) - min(frets) <= 1


@given(
    st.sampled_from(list(ChordType)),
    st.sampled_from(list(NoteName)),
    st.booleans(),
)
def test_search_soundness(chord_type: ChordType, root: NoteName, partial: bool) -> None:
    chord = ChordSpec(root, chord_type)
    notes = chord.notes()
    minimum = partial_minimum(len(notes)) if partial else len(notes)
    for voicing in search_chord(GUITAR, chord, allow_partial=partial):
        pcs = GUITAR.pitch_classes(voicing)
        assert len(set(pcs)) == len(pcs)
        assert set(pcs) <= set(notes)
        assert minimum <= len(voicing) <= 6
        strings = voicing.strings()
        frets = voicing.frets()
        assert max(strings) - min(strings) <= 3
        assert max(frets) - min(frets) <= 3
