"""Configuration for fretwise.

This module defines the instrument presets and the tunable constants of the
voicing search, voice leading and progression generation. Configurations
are frozen dataclasses; derive variants with `dataclasses.replace`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Dict, Optional, Tuple

from fretwise.fretboard import Fretboard


@unique
class Instrument(Enum):
    """Preset tunings for common fretted instruments."""

    StandardGuitar = "guitar"
    DropDGuitar = "drop-d"
    OpenGGuitar = "open-g"
    OpenDGuitar = "open-d"
    DadgadGuitar = "dadgad"
    StandardBass = "bass"
    FiveStringBass = "bass5"
    Ukulele = "ukulele"
    Mandolin = "mandolin"

    @property
    def tuning(self) -> Tuple[int, ...]:
        """MIDI note numbers of the open strings, lowest string first."""
        return TUNINGS[self]


TUNINGS: Dict[Instrument, Tuple[int, ...]] = {
    Instrument.StandardGuitar: (40, 45, 50, 55, 59, 64),  # E2 A2 D3 G3 B3 E4
    Instrument.DropDGuitar: (38, 45, 50, 55, 59, 64),  # D2 A2 D3 G3 B3 E4
    Instrument.OpenGGuitar: (38, 43, 50, 55, 59, 62),  # D2 G2 D3 G3 B3 D4
    Instrument.OpenDGuitar: (38, 45, 50, 54, 57, 62),  # D2 A2 D3 F#3 A3 D4
    Instrument.DadgadGuitar: (38, 45, 50, 55, 57, 62),  # D2 A2 D3 G3 A3 D4
    Instrument.StandardBass: (28, 33, 38, 43),  # E1 A1 D2 G2
    Instrument.FiveStringBass: (23, 28, 33, 38, 43),  # B0 E1 A1 D2 G2
    Instrument.Ukulele: (67, 60, 64, 69),  # G4 C4 E4 A4 (reentrant)
    Instrument.Mandolin: (55, 62, 69, 76),  # G3 D4 A4 E5
}

DEFAULT_NUM_FRETS = 18
"""Fret positions per string, counting the open string."""


@dataclass(frozen=True)
class SearchConfig:
    """Hand-span limits for the voicing search."""

    max_string_span: int = 3
    """Largest allowed distance between the outermost used strings."""
    max_fret_span: int = 3
    """Largest allowed distance between any two used frets."""
    max_notes: int = 6
    """Most positions a voicing may use (one hand, one note per string)."""


@dataclass(frozen=True)
class LeadingConfig:
    """Weights for scoring voicing transitions."""

    mismatch_penalty: float = 5.0
    """Cost of a string used by only one of two voicings."""
    span_weight: float = 0.2
    """Cost per fret of a candidate's own span."""
    center_weight: float = 0.3
    """Cost per fret of movement of the hand's average position."""
    three_note_bonus: float = 0.3
    """Score reduction for candidates with at least three notes."""
    four_note_bonus: float = 0.2
    """Further reduction for candidates with at least four notes."""
    closest_max_span: int = 4
    """Span limit preferred when picking the voicing nearest a target fret."""
    fallback_fret: int = 5
    """Target fret for synthesized fallback voicings."""


@dataclass(frozen=True)
class Config:
    """Top-level configuration."""

    instrument: Instrument
    num_frets: int
    complexity: int
    seed: Optional[int]
    search: SearchConfig = field(default_factory=SearchConfig)
    leading: LeadingConfig = field(default_factory=LeadingConfig)

    def fretboard(self) -> Fretboard:
        """Build the fretboard for the configured instrument."""
        return Fretboard(self.instrument.tuning, self.num_frets)


def init_config(
    instrument: Instrument = Instrument.StandardGuitar,
    num_frets: int = DEFAULT_NUM_FRETS,
    complexity: int = 2,
    seed: Optional[int] = None,
) -> Config:
    """Create a configuration with default search and leading settings.

    Args:
        instrument: The instrument preset.
        num_frets: Fret positions per string.
        complexity: Progression complexity (1-3).
        seed: Seed for progression randomness, or None for a fresh source.

    Returns:
        The configuration.

    Raises:
        ValueError: If the complexity is out of range.
    """
    if complexity not in (1, 2, 3):
        raise ValueError(f"Complexity must be 1, 2 or 3. Got: {complexity}")
    return Config(
        instrument=instrument,
        num_frets=num_frets,
        complexity=complexity,
        seed=seed,
    )
