"""Voice leading: choosing one voicing per chord so the hand moves little.

Selection is greedy. Each step picks the candidate with the lowest score
against the previous step's choice, where the score is the per-string
movement cost plus penalties for wide shapes and for jumps of the hand's
average position, less a bonus for fuller chords. A step that offers the
previous choice again keeps it.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from fretwise.chords import ChordSpec
from fretwise.config import LeadingConfig, SearchConfig
from fretwise.fretboard import Fretboard, FretPos, Voicing
from fretwise.search import VoicingSearch

PERFECT_FIFTH = 7
COMMON_TONE_BONUS = 2.0
CENTER_JUMP_WEIGHT = 0.5
DISCONNECTED_SCORE = 100.0
"""Connection score when either voicing is silent."""

_DEFAULT_CONFIG = LeadingConfig()


def pair_cost(a: Voicing, b: Voicing, config: Optional[LeadingConfig] = None) -> float:
    """Average per-string movement between two voicings.

    A string used by both costs the fret distance. A string used by only one
    costs the mismatch penalty.

    Returns:
        The mean cost over compared strings, or infinity when neither
        voicing uses any string.
    """
    config = config if config is not None else _DEFAULT_CONFIG
    strings = sorted(set(a.strings()) | set(b.strings()))
    if not strings:
        return math.inf
    total = 0.0
    for string in strings:
        fret_a = a.fret_on(string)
        fret_b = b.fret_on(string)
        if fret_a is not None and fret_b is not None:
            total += abs(fret_a - fret_b)
        else:
            total += config.mismatch_penalty
    return total / len(strings)


def selection_score(
    reference: Voicing, candidate: Voicing, config: Optional[LeadingConfig] = None
) -> float:
    """Score a candidate against the previous choice. Lower is better."""
    config = config if config is not None else _DEFAULT_CONFIG
    score = (
        pair_cost(reference, candidate, config)
        + config.span_weight * candidate.span()
        + config.center_weight * abs(candidate.center() - reference.center())
    )
    if len(candidate) >= 3:
        score -= config.three_note_bonus
    if len(candidate) >= 4:
        score -= config.four_note_bonus
    return score


def connection_score(a: Voicing, b: Voicing) -> float:
    """How well two consecutive voicings connect. Lower is better.

    Shared positions count as common tones and reduce the score; the jump
    of the average fret increases it.
    """
    if not a or not b:
        return DISCONNECTED_SCORE
    common = len(set(a.positions) & set(b.positions))
    return (
        pair_cost(a, b)
        - COMMON_TONE_BONUS * common
        + CENTER_JUMP_WEIGHT * abs(a.center() - b.center())
    )


def total_cost(voicings: Sequence[Voicing], config: Optional[LeadingConfig] = None) -> float:
    """Sum of pair costs between consecutive non-silent voicings."""
    sounding = [v for v in voicings if v]
    return sum(pair_cost(a, b, config) for a, b in zip(sounding, sounding[1:]))


def closest_voicing(
    voicings: Sequence[Voicing], target: float, max_span: int = 4
) -> Optional[Voicing]:
    """Pick the voicing whose average fret is nearest a target fret.

    Voicings within `max_span` are preferred when any exist. Ties keep the
    earliest candidate.

    Returns:
        The closest voicing, or None when there are no candidates.
    """
    if not voicings:
        return None
    narrow = [v for v in voicings if v.span() <= max_span]
    pool = narrow if narrow else list(voicings)
    return min(pool, key=lambda v: abs(v.center() - target))


def fullest_voicing(voicings: Sequence[Voicing]) -> Optional[Voicing]:
    """The earliest voicing with the most notes, or None."""
    if not voicings:
        return None
    return max(voicings, key=len)


def best_next(
    reference: Voicing,
    candidates: Sequence[Voicing],
    config: Optional[LeadingConfig] = None,
) -> Voicing:
    """The lowest-scoring candidate against the reference, earliest on ties.

    A candidate identical to the reference is always kept.
    """
    if reference in candidates:
        return reference
    best = candidates[0]
    best_score = selection_score(reference, best, config)
    for candidate in candidates[1:]:
        score = selection_score(reference, candidate, config)
        if score < best_score:
            best = candidate
            best_score = score
    return best


def _sweep(
    reference: Voicing,
    steps: Sequence[Sequence[Voicing]],
    config: LeadingConfig,
) -> List[Voicing]:
    chosen: List[Voicing] = []
    for candidates in steps:
        if not candidates:
            chosen.append(Voicing.empty())
            continue
        if reference:
            pick = best_next(reference, candidates, config)
        else:
            pick = fullest_voicing(candidates) or Voicing.empty()
        chosen.append(pick)
        reference = pick
    return chosen


def _first_choice(
    candidates: Sequence[Voicing],
    preferred_center: Optional[float],
    config: LeadingConfig,
) -> Voicing:
    if not candidates:
        return Voicing.empty()
    if preferred_center is not None:
        pick = closest_voicing(candidates, preferred_center, config.closest_max_span)
    else:
        pick = fullest_voicing(candidates)
    return pick if pick is not None else Voicing.empty()


def optimize(
    candidates: Sequence[Sequence[Voicing]],
    anchor: Optional[Voicing] = None,
    preferred_center: Optional[float] = None,
    anchor_index: int = 0,
    config: Optional[LeadingConfig] = None,
) -> List[Voicing]:
    """Choose one voicing per step.

    Args:
        candidates: Candidate voicings for each step. A step with no
            candidates yields the empty voicing.
        anchor: A voicing fixed at `anchor_index`. Selection sweeps away
            from it in both directions.
        preferred_center: Without an anchor, the first step takes the
            candidate whose average fret is nearest this.
        anchor_index: The step the anchor occupies.
        config: Scoring weights.

    Returns:
        One voicing per step.

    Raises:
        ValueError: If the anchor index is outside the steps.
    """
    config = config if config is not None else _DEFAULT_CONFIG
    if not candidates:
        return []
    if anchor is None:
        first = _first_choice(candidates[0], preferred_center, config)
        return [first] + _sweep(first, candidates[1:], config)
    if not 0 <= anchor_index < len(candidates):
        raise ValueError(
            f"Anchor index must be between 0 and {len(candidates) - 1}. Got: {anchor_index}"
        )
    before = _sweep(anchor, list(reversed(candidates[:anchor_index])), config)
    after = _sweep(anchor, candidates[anchor_index + 1 :], config)
    return list(reversed(before)) + [anchor] + after


class VoiceLeader:
    """Voice leading on one fretboard, with fallbacks for unplayable chords."""

    def __init__(
        self,
        fretboard: Fretboard,
        config: Optional[LeadingConfig] = None,
        search_config: Optional[SearchConfig] = None,
    ) -> None:
        self._fretboard = fretboard
        self._config = config if config is not None else _DEFAULT_CONFIG
        self._search = VoicingSearch(fretboard, search_config)

    @property
    def config(self) -> LeadingConfig:
        return self._config

    def optimize(
        self,
        candidates: Sequence[Sequence[Voicing]],
        anchor: Optional[Voicing] = None,
        preferred_center: Optional[float] = None,
        anchor_index: int = 0,
        chords: Optional[Sequence[ChordSpec]] = None,
    ) -> List[Voicing]:
        """Choose one voicing per step, synthesizing shapes when none exist.

        When `chords` is given (one per step) and every step is empty, a
        fallback voicing is built for each chord so every step is playable.
        An anchor still occupies its own step. See `optimize` for the other
        arguments.

        Raises:
            ValueError: If `chords` does not have one chord per step.
        """
        if chords is not None and len(chords) != len(candidates):
            raise ValueError("Expected one chord per step")
        steps: Sequence[Sequence[Voicing]] = candidates
        if chords is not None and all(not c for c in candidates):
            target = (
                preferred_center if preferred_center is not None else self._config.fallback_fret
            )
            steps = []
            for chord in chords:
                fallback = self.fallback_voicing(chord, target)
                steps.append([fallback] if fallback else [])
        return optimize(steps, anchor, preferred_center, anchor_index, self._config)

    def fallback_voicing(self, chord: ChordSpec, target: float) -> Voicing:
        """Build a simple playable shape for a chord near a target fret.

        Tries a three-note shape from the chord's first three notes, then a
        root and fifth, then the root alone, then the chord tone nearest
        the target.

        Returns:
            The shape, or the empty voicing when no chord tone is on the
            fretboard at all.
        """
        notes = chord.notes()
        attempts = []
        if len(notes) >= 3:
            attempts.append(notes[:3])
        fifth = chord.root.add_steps(PERFECT_FIFTH)
        if fifth in notes:
            attempts.append([chord.root, fifth])
        attempts.append([chord.root])
        for attempt in attempts:
            pick = closest_voicing(
                self._search.search(attempt), target, self._config.closest_max_span
            )
            if pick is not None:
                logging.debug("Fallback for %s: %s", chord, pick)
                return pick
        positions: List[FretPos] = []
        for note in notes:
            positions.extend(self._fretboard.positions_of(note))
        if not positions:
            return Voicing.empty()
        nearest = min(positions, key=lambda pos: abs(pos.fret - target))
        logging.debug("Fallback for %s: single note %s", chord, nearest)
        return Voicing((nearest,))
