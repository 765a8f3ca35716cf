"""From a progression to a playable sequence of voicings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from fretwise.chords import ChordSpec
from fretwise.config import LeadingConfig, SearchConfig
from fretwise.fretboard import Fretboard, Voicing
from fretwise.progression import Progression
from fretwise.search import VoicingSearch
from fretwise.voice_leading import VoiceLeader, connection_score


@dataclass(frozen=True)
class RealizedProgression:
    """A progression with one chosen voicing per chord."""

    progression: Progression
    voicings: Tuple[Voicing, ...]
    connections: Tuple[float, ...]
    """Connection score between each consecutive pair of voicings."""

    @property
    def chords(self) -> Tuple[ChordSpec, ...]:
        return self.progression.chords

    def __len__(self) -> int:
        return len(self.voicings)


def voicings_for_chord(
    search: VoicingSearch, chord: ChordSpec, allow_partial: bool = True
) -> List[Voicing]:
    """Candidate voicings for one chord. Large chords may omit notes."""
    return search.search_chord(chord, allow_partial)


def realize(
    fretboard: Fretboard,
    progression: Progression,
    preferred_center: Optional[float] = None,
    anchor: Optional[Voicing] = None,
    allow_partial: bool = True,
    search_config: Optional[SearchConfig] = None,
    leading_config: Optional[LeadingConfig] = None,
) -> RealizedProgression:
    """Search every chord of a progression and voice-lead through them.

    Args:
        fretboard: The instrument.
        progression: The chords to realize.
        preferred_center: Fret the first voicing should sit near.
        anchor: A voicing to keep for the progression's selected chord, for
            example the shape the user is already holding.
        allow_partial: Accept voicings that omit notes of 5+ note chords.
        search_config: Hand-span limits.
        leading_config: Voice-leading weights.

    Returns:
        The realized progression.
    """
    search = VoicingSearch(fretboard, search_config)
    candidates = [voicings_for_chord(search, c, allow_partial) for c in progression.chords]
    anchor_index = 0
    if anchor is not None:
        if progression.selected_index is None:
            logging.debug("No selected chord in %r; anchor ignored", progression.name)
            anchor = None
        else:
            anchor_index = progression.selected_index
    leader = VoiceLeader(fretboard, leading_config, search_config)
    voicings = leader.optimize(
        candidates,
        anchor=anchor,
        preferred_center=preferred_center,
        anchor_index=anchor_index,
        chords=progression.chords,
    )
    connections = tuple(connection_score(a, b) for a, b in zip(voicings, voicings[1:]))
    return RealizedProgression(progression, tuple(voicings), connections)
