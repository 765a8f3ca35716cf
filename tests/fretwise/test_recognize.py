from typing import List, Optional

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fretwise.chords import ChordType
from fretwise.fretboard import Fretboard, FretPos
from fretwise.recognize import (
    ChordMatch,
    IntervalMatch,
    RecognitionResult,
    recognize,
    recognize_names,
    recognize_pitch_classes,
)
from fretwise.scale import NoteName
from tests.fretwise.hypo import configure_hypo

configure_hypo()


@st.composite
def distinct_notes(draw: st.DrawFn, min_size: int = 2, max_size: int = 6) -> List[NoteName]:
    return draw(
        st.lists(
            st.sampled_from(list(NoteName)),
            min_size=min_size,
            max_size=max_size,
            unique=True,
        )
    )


def _transpose(result: Optional[RecognitionResult], steps: int) -> Optional[RecognitionResult]:
    if isinstance(result, IntervalMatch):
        return IntervalMatch(result.root.add_steps(steps), result.name, result.semitones)
    elif isinstance(result, ChordMatch):
        return ChordMatch(result.root.add_steps(steps), result.chord_type)
    return result


def test_toy_interval() -> None:
    board = Fretboard.from_note_names([NoteName.C, NoteName.E, NoteName.G], 5)
    result = recognize([FretPos(0, 0), FretPos(2, 0)], board)
    assert result == IntervalMatch(NoteName.C, "perfect 5th", 7)
    assert str(result) == "C perfect 5th"


@pytest.mark.parametrize(
    "names,expected",
    [
        (["C", "E", "G"], ChordMatch(NoteName.C, ChordType.Major)),
        (["E", "G", "C"], ChordMatch(NoteName.C, ChordType.Major)),
        (["A", "C", "E", "G"], ChordMatch(NoteName.A, ChordType.Minor7)),
        (["G", "B", "D", "F"], ChordMatch(NoteName.G, ChordType.Dominant7)),
        (["B", "D", "F", "A"], ChordMatch(NoteName.B, ChordType.HalfDiminished7)),
        (["C", "E", "Bb"], ChordMatch(NoteName.C, ChordType.Dominant7No5)),
        (["C", "Bb", "D"], ChordMatch(NoteName.C, ChordType.Dominant9No5)),
        (["D", "A"], IntervalMatch(NoteName.D, "perfect 5th", 7)),
        (["G", "C"], IntervalMatch(NoteName.G, "perfect 4th", 5)),
        (["C", "H", "G"], IntervalMatch(NoteName.C, "perfect 5th", 7)),
        (["C", "c", "E"], IntervalMatch(NoteName.C, "major 3rd", 4)),
        (["C", "Db", "D"], None),
        (["C"], None),
        (["C", "C"], None),
        ([], None),
    ],
)
def test_recognize_names(names: List[str], expected: Optional[RecognitionResult]) -> None:
    assert recognize_names(names) == expected


def test_recognize_guitar_shape() -> None:
    board = Fretboard((40, 45, 50, 55, 59, 64), 18)
    # x32010
    shape = [FretPos(1, 3), FretPos(2, 2), FretPos(3, 0), FretPos(4, 1), FretPos(5, 0)]
    result = recognize(shape, board)
    assert result == ChordMatch(NoteName.C, ChordType.Major)
    assert isinstance(result, ChordMatch)
    assert str(result) == "C"


def test_recognize_off_board() -> None:
    board = Fretboard.from_note_names([NoteName.C, NoteName.E, NoteName.G], 5)
    with pytest.raises(ValueError):
        recognize([FretPos(0, 0), FretPos(3, 0)], board)


@given(distinct_notes(min_size=2, max_size=2))
def test_two_note_rule(notes: List[NoteName]) -> None:
    result = recognize_pitch_classes(notes)
    assert isinstance(result, IntervalMatch)
    assert result.root == notes[0]
    assert result.semitones == notes[0].steps_to(notes[1])


@given(distinct_notes(), st.integers(min_value=0, max_value=11))
def test_transposition_invariance(notes: List[NoteName], steps: int) -> None:
    shifted = [n.add_steps(steps) for n in notes]
    assert recognize_pitch_classes(shifted) == _transpose(
        recognize_pitch_classes(notes), steps
    )


@given(st.sampled_from(list(ChordType)), st.sampled_from(list(NoteName)))
def test_chord_tones_recognized(chord_type: ChordType, root: NoteName) -> None:
    notes = [root.add_steps(o) for o in chord_type.formula]
    result = recognize_pitch_classes(notes)
    if len(notes) == 2:
        assert isinstance(result, IntervalMatch)
    else:
        # Some other reading may win, but it names the same pitch classes
        assert isinstance(result, ChordMatch)
        assert set(result.spec.notes()) == set(notes)
