import random

from hypothesis import given
from hypothesis import strategies as st

from fretwise.chords import ChordSpec, ChordType
from fretwise.config import Instrument
from fretwise.fretboard import Fretboard, FretPos, Voicing
from fretwise.grammar import Intent
from fretwise.pipeline import realize
from fretwise.progression import Progression, Strategy, default_progression, generate
from fretwise.scale import NoteName
from fretwise.tab import parse_shape
from fretwise.voice_leading import connection_score
from tests.fretwise.hypo import configure_hypo

configure_hypo()

GUITAR = Fretboard(Instrument.StandardGuitar.tuning, 18)
C_MAJOR = ChordSpec(NoteName.C, ChordType.Major)


def test_realize_default_loop() -> None:
    progression = default_progression(C_MAJOR)
    realized = realize(GUITAR, progression, preferred_center=3)
    assert len(realized) == 4
    assert realized.chords == progression.chords
    assert len(realized.connections) == 3
    for voicing, chord in zip(realized.voicings, realized.chords):
        assert voicing
        assert set(GUITAR.pitch_classes(voicing)) == set(chord.notes())
    assert realized.connections[0] == connection_score(
        realized.voicings[0], realized.voicings[1]
    )


def test_anchor_is_kept_at_selected_chord() -> None:
    open_c = parse_shape(GUITAR, "x32010")
    progression = default_progression(C_MAJOR)
    realized = realize(GUITAR, progression, anchor=open_c)
    assert realized.voicings[0] == open_c


def test_anchor_ignored_without_selected_chord() -> None:
    open_c = parse_shape(GUITAR, "x32010")
    progression = Progression(
        chords=(ChordSpec(NoteName.F, ChordType.Major), ChordSpec(NoteName.G, ChordType.Major)),
        name="Test",
        description="IV-V",
        intent=Intent.Vamp,
    )
    realized = realize(GUITAR, progression, anchor=open_c)
    assert open_c not in realized.voicings
    assert all(realized.voicings)


def test_unplayable_chords_fall_back() -> None:
    board = Fretboard.from_note_names([NoteName.C, NoteName.E, NoteName.G], 5)
    progression = Progression(
        chords=(ChordSpec(NoteName.C, ChordType.Major7),),
        name="Test",
        description="Imaj7",
        intent=Intent.Loop,
    )
    realized = realize(board, progression)
    assert realized.voicings == (Voicing((FretPos(0, 0), FretPos(1, 0), FretPos(2, 0))),)
    assert realized.connections == ()


def test_unplayable_chords_fall_back_around_anchor() -> None:
    board = Fretboard.from_note_names([NoteName.C, NoteName.E, NoteName.G], 5)
    progression = Progression(
        chords=(ChordSpec(NoteName.C, ChordType.Major7), ChordSpec(NoteName.G, ChordType.Dominant7)),
        name="Test",
        description="Imaj7-V7",
        intent=Intent.Loop,
        selected_index=0,
    )
    held = Voicing((FretPos(0, 0), FretPos(1, 0), FretPos(2, 0)))
    realized = realize(board, progression, anchor=held)
    assert realized.voicings == (
        held,
        Voicing((FretPos(0, 2), FretPos(1, 3), FretPos(2, 4))),
    )


@given(
    st.sampled_from(list(NoteName)),
    st.sampled_from([ChordType.Major, ChordType.Minor7, ChordType.Dominant7]),
    st.sampled_from(list(Strategy)),
    st.integers(min_value=0, max_value=100),
)
def test_realized_voicings_sound_the_chords(
    root: NoteName, chord_type: ChordType, strategy: Strategy, seed_value: int
) -> None:
    seed = ChordSpec(root, chord_type)
    progression = generate(seed, 3, random.Random(seed_value), strategy)
    realized = realize(GUITAR, progression)
    assert len(realized.voicings) == len(progression.chords)
    for voicing, chord in zip(realized.voicings, realized.chords):
        assert voicing
        assert set(GUITAR.pitch_classes(voicing)) <= set(chord.notes())
