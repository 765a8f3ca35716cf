"""Chord progression generation from a seed chord.

Three strategies are available:

- `Strategy.Pattern` picks a scale-degree template for the seed's key
  family, weighted by harmonic richness, and realizes it from the seed root.
- `Strategy.Anchored` classifies the seed's role and picks a template that
  keeps the seed chord at a declared slot.
- `Strategy.Walk` takes a random walk over a roman-numeral transition graph.

Generation never fails: when nothing can be chosen the default
I-IV-V-I (or i-iv-v-i) loop is returned.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, unique
from typing import List, Optional, Sequence, Tuple

from fretwise.base import MatchException
from fretwise.chords import ChordSpec, chord_type_for_intervals
from fretwise.grammar import (
    FULL_LENGTH_RANGE,
    AnchoredTemplate,
    Intent,
    PatternTemplate,
    apply_length_policy,
    classify_seed,
    key_family,
)
from fretwise.scale import KeyFamily, NoteName, Scale
from fretwise.templates import (
    ANCHORED_TEMPLATES,
    DEFAULT_TEMPLATES,
    PATTERN_TEMPLATES,
    WALK_ENDINGS,
    WALK_NUMERALS,
    WALK_RULES,
    WALK_STARTS,
)

MIN_WALK_CHORDS = 3
WALK_LENGTH_RANGE = (4, 7)
"""Inclusive length range accepted from the random walk."""
MAX_WALK_STEPS = 16
MAX_WALK_ATTEMPTS = 100


@unique
class Strategy(Enum):
    """How a progression is chosen for a seed chord.

    Pattern picks a weighted template for the key. Anchored picks a template
    that keeps the seed at a fixed position. Walk follows a roman-numeral
    graph from a starting chord until it lands on an ending chord. In minor
    keys the walk's vii° is built on the raised seventh (G#dim in A minor),
    not on the natural seventh.
    """

    Pattern = "pattern"
    Anchored = "anchored"
    Walk = "walk"


@dataclass(frozen=True)
class Progression:
    """A generated chord progression."""

    chords: Tuple[ChordSpec, ...]
    name: str
    description: str
    intent: Intent
    selected_index: Optional[int] = None
    """Index of the seed chord in `chords`, when it appears there."""

    def __len__(self) -> int:
        return len(self.chords)

    def __str__(self) -> str:
        return " - ".join(str(chord) for chord in self.chords)


def template_weight(richness: int, complexity: int) -> int:
    """Selection weight of a template: richness ** (complexity - 1)."""
    return richness ** (complexity - 1)


def _check_complexity(complexity: int) -> None:
    if complexity not in (1, 2, 3):
        raise ValueError(f"Complexity must be 1, 2 or 3. Got: {complexity}")


def _index_of(chords: Sequence[ChordSpec], seed: ChordSpec) -> Optional[int]:
    for index, chord in enumerate(chords):
        if chord == seed:
            return index
    return None


class ProgressionGenerator:
    """Generates progressions around seed chords.

    Args:
        rng: Source of randomness. Pass a seeded `random.Random` for
            reproducible output.
        complexity: 1 favours plain templates equally, 3 strongly favours
            rich ones.

    Raises:
        ValueError: If the complexity is not 1, 2 or 3.
    """

    def __init__(self, rng: Optional[random.Random] = None, complexity: int = 2) -> None:
        _check_complexity(complexity)
        self._rng = rng if rng is not None else random.Random()
        self._complexity = complexity

    @property
    def complexity(self) -> int:
        return self._complexity

    def generate(self, seed: ChordSpec, strategy: Strategy = Strategy.Pattern) -> Progression:
        if strategy == Strategy.Pattern:
            return self.pattern(seed)
        elif strategy == Strategy.Anchored:
            return self.anchored(seed)
        elif strategy == Strategy.Walk:
            return self.walk(seed)
        else:
            raise MatchException(strategy)

    def pattern(self, seed: ChordSpec) -> Progression:
        """Realize a weighted random template of the seed's key family."""
        family = key_family(seed)
        pool = PATTERN_TEMPLATES.get(family, [])
        if not pool:
            return default_progression(seed)
        weights = [template_weight(t.richness, self._complexity) for t in pool]
        template = self._rng.choices(pool, weights=weights)[0]
        logging.debug("Chose %s template %r for %s", family.value, template.name, seed)
        return _from_pattern(template, seed)

    def anchored(self, seed: ChordSpec) -> Progression:
        """Realize a random template that keeps the seed at its slot."""
        role = classify_seed(seed)
        pool = [t for t in ANCHORED_TEMPLATES if t.role == role]
        if not pool:
            return default_progression(seed)
        template = self._rng.choice(pool)
        logging.debug("Chose %s template %r for %s", role.value, template.name, seed)
        return _from_anchored(template, seed)

    def walk(self, seed: ChordSpec) -> Progression:
        """Random walk over roman numerals, resampled until 4-7 chords long."""
        family = key_family(seed)
        low, high = WALK_LENGTH_RANGE
        for attempt in range(MAX_WALK_ATTEMPTS):
            numerals = self._walk_numerals(family)
            if low <= len(numerals) <= high:
                logging.debug("Walk %s after %d attempts", numerals, attempt + 1)
                return _from_walk(numerals, family, seed)
        return default_progression(seed)

    def _walk_numerals(self, family: KeyFamily) -> List[str]:
        rules = WALK_RULES[family]
        endings = WALK_ENDINGS[family]
        current = self._rng.choice(WALK_STARTS[family])
        numerals = [current]
        while len(numerals) < MIN_WALK_CHORDS or current not in endings:
            following = rules.get(current, ())
            if not following or len(numerals) >= MAX_WALK_STEPS:
                break
            current = self._rng.choice(following)
            numerals.append(current)
        if current not in endings:
            numerals.append(self._rng.choice(endings))
        return numerals


def _from_pattern(template: PatternTemplate, seed: ChordSpec) -> Progression:
    chords = apply_length_policy(
        template.realize(seed.root, seed.chord_type.is_extended), template.intent
    )
    return Progression(
        chords=chords,
        name=template.name,
        description=template.description,
        intent=template.intent,
        selected_index=_index_of(chords, seed),
    )


def _from_anchored(template: AnchoredTemplate, seed: ChordSpec) -> Progression:
    chords = apply_length_policy(
        template.realize(seed, seed.chord_type.is_extended), template.intent
    )
    return Progression(
        chords=chords,
        name=template.name,
        description=template.description,
        intent=template.intent,
        selected_index=template.anchor,
    )


def _from_walk(numerals: List[str], family: KeyFamily, seed: ChordSpec) -> Progression:
    table = WALK_NUMERALS[family]
    low, _ = FULL_LENGTH_RANGE
    walked = PatternTemplate(
        name="Random Walk",
        description="-".join(numerals),
        intent=Intent.Phrase if len(numerals) >= low else Intent.Loop,
        family=family,
        richness=1,
        degrees=tuple(table[n] for n in numerals),
    )
    chords = walked.realize(seed.root, seed.chord_type.is_extended)
    return Progression(
        chords=chords,
        name=walked.name,
        description=walked.description,
        intent=walked.intent,
        selected_index=_index_of(chords, seed),
    )


def default_progression(seed: ChordSpec) -> Progression:
    """The fallback loop for the seed's key family, rooted on the seed."""
    return _from_pattern(DEFAULT_TEMPLATES[key_family(seed)], seed)


def generate(
    seed: ChordSpec,
    complexity: int = 2,
    rng: Optional[random.Random] = None,
    strategy: Strategy = Strategy.Pattern,
) -> Progression:
    """Generate a progression around a seed chord.

    Args:
        seed: The chord the progression is built from. Its root is the key.
        complexity: Template richness preference (1-3).
        rng: Source of randomness; a fresh one when None.
        strategy: The generation strategy.

    Returns:
        The progression. Never empty.

    Raises:
        ValueError: If the complexity is not 1, 2 or 3.
    """
    return ProgressionGenerator(rng, complexity).generate(seed, strategy)


def degree_chord(
    key: NoteName,
    family: KeyFamily,
    degree: int,
    seventh: bool = False,
    ninth: bool = False,
    scale: Optional[Scale] = None,
) -> ChordSpec:
    """Build the diatonic chord on a scale degree by stacking thirds.

    The stacked intervals are looked up in the chord catalog. When the
    ninth (or then the seventh) gives an interval set the catalog does not
    know, that extension is dropped.

    Args:
        key: The key's tonic.
        family: The key family, which picks the default scale.
        degree: Zero-based scale degree (0-6).
        seventh: Whether to add the seventh.
        ninth: Whether to add the ninth (implies the seventh).
        scale: A modal scale replacing the family's default.

    Returns:
        The chord on that degree.

    Raises:
        ValueError: If the degree is out of range.
        MatchException: If even the triad is not in the catalog.
    """
    if not 0 <= degree <= 6:
        raise ValueError(f"Degree must be between 0 and 6. Got: {degree}")
    lookup = scale if scale is not None else family.scale
    base = lookup.offset(degree)
    stack = [lookup.offset(degree + 2 * k) - base for k in range(5)]
    size = 5 if ninth else 4 if seventh else 3
    while size >= 3:
        chord_type = chord_type_for_intervals(stack[:size])
        if chord_type is not None:
            return ChordSpec(key.add_steps(base), chord_type)
        size -= 1
    raise MatchException(stack)


def diatonic_chords(
    key: NoteName,
    family: KeyFamily,
    seventh: bool = False,
    ninth: bool = False,
    scale: Optional[Scale] = None,
) -> List[ChordSpec]:
    """The chords on all seven degrees of a key."""
    return [degree_chord(key, family, d, seventh, ninth, scale) for d in range(7)]
