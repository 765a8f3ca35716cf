"""MIDI message bridge.

Voicings become `note_on` messages (lowest string first) and note messages
read back become pitch classes for recognition. Messages are mido
`FrozenMessage`s so they can be hashed and shared.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, cast

from mido.frozen import FrozenMessage

from fretwise.fretboard import Fretboard, Voicing
from fretwise.recognize import RecognitionResult, recognize_pitch_classes
from fretwise.scale import NoteName, name_and_octave_from_note

DEFAULT_VELOCITY = 100


def is_note_msg(msg: FrozenMessage) -> bool:
    """True for note_on and note_off messages."""
    return cast(bool, msg.type == "note_on" or msg.type == "note_off")


def is_note_on_msg(msg: FrozenMessage) -> bool:
    """True for note_on messages with a non-zero velocity."""
    return cast(bool, msg.type == "note_on" and msg.velocity > 0)


def is_note_off_msg(msg: FrozenMessage) -> bool:
    """True for note_off messages and note_on messages with zero velocity."""
    return cast(
        bool, (msg.type == "note_on" and msg.velocity == 0) or msg.type == "note_off"
    )


def voicing_messages(
    fretboard: Fretboard,
    voicing: Voicing,
    velocity: int = DEFAULT_VELOCITY,
    channel: int = 0,
) -> List[FrozenMessage]:
    """Note-on messages sounding a voicing, lowest string first.

    Raises:
        ValueError: If a position is off the fretboard, or the velocity or
            channel is out of the MIDI range.
    """
    return [
        FrozenMessage(
            "note_on", channel=channel, note=fretboard.midi_note(pos), velocity=velocity
        )
        for pos in voicing
    ]


def release_messages(
    fretboard: Fretboard, voicing: Voicing, channel: int = 0
) -> List[FrozenMessage]:
    """Note-off messages matching `voicing_messages`."""
    return [
        FrozenMessage("note_off", channel=channel, note=fretboard.midi_note(pos))
        for pos in voicing
    ]


def held_notes(msgs: Iterable[FrozenMessage]) -> List[int]:
    """MIDI notes still held after a message stream, in press order."""
    held: List[int] = []
    for msg in msgs:
        if is_note_on_msg(msg):
            if msg.note not in held:
                held.append(msg.note)
        elif is_note_off_msg(msg):
            if msg.note in held:
                held.remove(msg.note)
    return held


def pitch_classes_from_messages(msgs: Iterable[FrozenMessage]) -> List[NoteName]:
    """Pitch classes of the held notes, first pressed first."""
    return [name_and_octave_from_note(note)[0] for note in held_notes(msgs)]


def recognize_messages(msgs: Iterable[FrozenMessage]) -> Optional[RecognitionResult]:
    """Recognize the interval or chord held at the end of a message stream."""
    return recognize_pitch_classes(pitch_classes_from_messages(msgs))
