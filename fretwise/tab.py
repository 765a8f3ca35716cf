"""Text tablature and chord-shape strings.

A tab has one line per string, highest-pitched string on top::

    e|0---3-|
    B|1---0-|
    G|0---0-|
    D|2---0-|
    A|3---2-|
    E|----3-|

A shape string lists one fret per string, lowest string first, with ``x``
for an unused string (``x32010`` is an open C major).
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from fretwise.fretboard import Fretboard, FretPos, Voicing

MUTED = "x"
MIN_COLUMN_WIDTH = 2
SEPARATOR = "--"


def string_labels(fretboard: Fretboard) -> List[str]:
    """Labels for each string, lowest first.

    When the highest string has the same name as the lowest, it is written
    in lower case to tell them apart.
    """
    labels = [name.sharp_name for name in fretboard.open_names()]
    if len(labels) > 1 and labels[-1] == labels[0]:
        labels[-1] = labels[-1].lower()
    return labels


def _column(voicing: Voicing, num_strings: int) -> List[str]:
    cells: List[Optional[str]] = [None] * num_strings
    for pos in voicing:
        cells[pos.string] = str(pos.fret)
    width = max([MIN_COLUMN_WIDTH] + [len(c) for c in cells if c is not None])
    column = []
    for cell in cells:
        if cell is None:
            column.append("-" * width)
        else:
            left = (width - len(cell)) // 2
            column.append("-" * left + cell + "-" * (width - len(cell) - left))
    return column


def render_tab(fretboard: Fretboard, voicings: Sequence[Voicing]) -> str:
    """Render voicings as text tablature, one column per voicing.

    Args:
        fretboard: The instrument, for string count and labels.
        voicings: The voicings, left to right. Silent voicings leave an
            empty column.

    Returns:
        The tab, one line per string, highest string first.
    """
    num_strings = fretboard.num_strings
    lines: List[List[str]] = [[] for _ in range(num_strings)]
    for index, voicing in enumerate(voicings):
        if index > 0:
            for line in lines:
                line.append(SEPARATOR)
        for string, cell in enumerate(_column(voicing, num_strings)):
            lines[string].append(cell)
    labels = string_labels(fretboard)
    return "\n".join(
        f"{labels[string]}|{''.join(lines[string])}|"
        for string in reversed(range(num_strings))
    )


def shape_string(fretboard: Fretboard, voicing: Voicing) -> str:
    """Write a voicing as a shape string, lowest string first.

    Frets above 9 make the shape ambiguous as one character per string, so
    such shapes are written with a space between strings.
    """
    cells = []
    for string in range(fretboard.num_strings):
        fret = voicing.fret_on(string)
        cells.append(MUTED if fret is None else str(fret))
    if any(len(cell) > 1 for cell in cells):
        return " ".join(cells)
    return "".join(cells)


_SPLIT = re.compile(r"[\s,]+")


def parse_shape(fretboard: Fretboard, shape: str) -> Voicing:
    """Read a shape string such as ``x32010`` or ``x 10 12 12 11 x``.

    Args:
        fretboard: The instrument the shape is played on.
        shape: One fret or ``x`` per string, lowest string first. Use
            spaces or commas between strings for frets above 9.

    Returns:
        The voicing.

    Raises:
        ValueError: If the shape has the wrong number of strings, a cell is
            not a fret, or a fret is off the fretboard.
    """
    shape = shape.strip()
    cells = [c for c in _SPLIT.split(shape) if c] if _SPLIT.search(shape) else list(shape)
    if len(cells) != fretboard.num_strings:
        raise ValueError(
            f"Shape {shape!r} has {len(cells)} strings; expected {fretboard.num_strings}"
        )
    positions = []
    for string, cell in enumerate(cells):
        if cell.lower() == MUTED:
            continue
        if not cell.isdigit():
            raise ValueError(f"Invalid fret {cell!r} in shape {shape!r}")
        pos = FretPos(string, int(cell))
        if pos not in fretboard:
            raise ValueError(f"Fret {pos.fret} is off the fretboard on string {string}")
        positions.append(pos)
    return Voicing(tuple(positions))
