from typing import Optional, Tuple

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fretwise.scale import (
    MAJOR,
    MINOR,
    SCALES,
    KeyFamily,
    NoteName,
    name_and_octave_from_note,
    parse_note_name,
)
from tests.fretwise.hypo import configure_hypo

configure_hypo()


@pytest.mark.parametrize(
    "name,expected",
    [
        ("C", NoteName.C),
        ("c", NoteName.C),
        ("C#", NoteName.Db),
        ("db", NoteName.Db),
        ("Bb", NoteName.Bb),
        ("A#", NoteName.Bb),
        ("F♯", NoteName.Gb),
        ("E#", NoteName.F),
        ("Cb", NoteName.B),
        (" g ", NoteName.G),
        ("H", None),
        ("", None),
        ("C##", None),
        ("Cx", None),
    ],
)
def test_parse_note_name(name: str, expected: Optional[NoteName]) -> None:
    assert parse_note_name(name) == expected


def test_sharp_names() -> None:
    assert [str(n) for n in NoteName] == [
        "C",
        "C#",
        "D",
        "D#",
        "E",
        "F",
        "F#",
        "G",
        "G#",
        "A",
        "A#",
        "B",
    ]


@pytest.mark.parametrize(
    "note,expected",
    [
        (60, (NoteName.C, 4)),
        (40, (NoteName.E, 2)),
        (69, (NoteName.A, 4)),
        (0, (NoteName.C, -1)),
    ],
)
def test_name_and_octave(note: int, expected: Tuple[NoteName, int]) -> None:
    assert name_and_octave_from_note(note) == expected


@given(st.sampled_from(list(NoteName)), st.integers(min_value=-48, max_value=48))
def test_add_steps_round_trip(note: NoteName, steps: int) -> None:
    moved = note.add_steps(steps)
    assert moved.add_steps(-steps) == note
    assert note.steps_to(moved) == steps % 12


def test_steps_to_is_upward() -> None:
    assert NoteName.B.steps_to(NoteName.C) == 1
    assert NoteName.C.steps_to(NoteName.B) == 11
    assert NoteName.G.steps_to(NoteName.G) == 0


def test_scale_offsets_wrap() -> None:
    assert MAJOR.offset(0) == 0
    assert MAJOR.offset(4) == 7
    assert MAJOR.offset(7) == 12
    assert MAJOR.offset(9) == 16
    assert MINOR.offset(2) == 3


def test_note_at() -> None:
    assert [MAJOR.note_at(NoteName.G, d) for d in range(7)] == [
        NoteName.G,
        NoteName.A,
        NoteName.B,
        NoteName.C,
        NoteName.D,
        NoteName.E,
        NoteName.Gb,
    ]


def test_scales_are_valid() -> None:
    for scale in SCALES:
        scale.validate()


def test_key_family_scale() -> None:
    assert KeyFamily.Major.scale == MAJOR
    assert KeyFamily.Minor.scale == MINOR
