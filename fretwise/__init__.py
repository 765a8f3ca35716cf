"""Chord voicings, recognition, progressions and voice leading for fretted instruments."""

from fretwise.chords import ChordSpec, ChordType, parse_chord_spec
from fretwise.fretboard import Fretboard, FretPos, Voicing
from fretwise.pipeline import RealizedProgression, realize
from fretwise.progression import Progression, Strategy, generate
from fretwise.recognize import recognize_names, recognize_pitch_classes
from fretwise.scale import NoteName
from fretwise.voice_leading import VoiceLeader, optimize

__all__ = [
    "ChordSpec",
    "ChordType",
    "parse_chord_spec",
    "Fretboard",
    "FretPos",
    "Voicing",
    "RealizedProgression",
    "realize",
    "Progression",
    "Strategy",
    "generate",
    "recognize_names",
    "recognize_pitch_classes",
    "NoteName",
    "VoiceLeader",
    "optimize",
]
