"""Command-line entry point for fretwise.

Subcommands:

- ``recognize``: name the chord or interval of some notes or a shape,
- ``search``: list the voicings of a chord,
- ``progress``: generate a progression from a seed chord and print it as tab.
"""

import logging
import random
from argparse import ArgumentParser, Namespace
from typing import List, Optional

from fretwise.chords import ChordSpec, parse_chord_spec
from fretwise.config import DEFAULT_NUM_FRETS, Config, Instrument, init_config
from fretwise.pipeline import realize
from fretwise.progression import ProgressionGenerator, Strategy
from fretwise.recognize import recognize, recognize_names
from fretwise.search import VoicingSearch
from fretwise.tab import parse_shape, render_tab, shape_string
from fretwise.voice_leading import closest_voicing


def _config(args: Namespace) -> Config:
    return init_config(
        instrument=Instrument(args.instrument),
        num_frets=args.frets,
        complexity=getattr(args, "complexity", 2),
        seed=getattr(args, "seed", None),
    )


def _chord(parser: ArgumentParser, symbol: str) -> ChordSpec:
    chord = parse_chord_spec(symbol)
    if chord is None:
        parser.error(f"Unknown chord symbol: {symbol}")
    return chord


def run_recognize(parser: ArgumentParser, args: Namespace) -> None:
    config = _config(args)
    if args.shape is not None:
        fretboard = config.fretboard()
        try:
            voicing = parse_shape(fretboard, args.shape)
        except ValueError as e:
            parser.error(str(e))
        result = recognize(voicing, fretboard)
    else:
        result = recognize_names(args.notes)
    print(result if result is not None else "No match")


def run_search(parser: ArgumentParser, args: Namespace) -> None:
    config = _config(args)
    fretboard = config.fretboard()
    chord = _chord(parser, args.chord)
    voicings = VoicingSearch(fretboard, config.search).search_chord(chord, args.partial)
    if args.center is not None:
        voicings.sort(key=lambda v: abs(v.center() - args.center))
    for voicing in voicings[: args.limit]:
        print(shape_string(fretboard, voicing))
    logging.info("%d voicings of %s", len(voicings), chord)


def run_progress(parser: ArgumentParser, args: Namespace) -> None:
    config = _config(args)
    fretboard = config.fretboard()
    seed = _chord(parser, args.chord)
    generator = ProgressionGenerator(random.Random(config.seed), config.complexity)
    progression = generator.generate(seed, Strategy(args.strategy))
    anchor = None
    if args.center is not None:
        seed_voicings = VoicingSearch(fretboard, config.search).search_chord(seed, True)
        anchor = closest_voicing(seed_voicings, args.center, config.leading.closest_max_span)
    realized = realize(
        fretboard,
        progression,
        preferred_center=args.center,
        anchor=anchor,
        search_config=config.search,
        leading_config=config.leading,
    )
    print(f"{progression.name} ({progression.intent.value}): {progression}")
    print(render_tab(fretboard, realized.voicings))
    logging.info("Connection scores: %s", [round(c, 2) for c in realized.connections])


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser.

    Returns:
        An ArgumentParser with the recognize, search and progress subcommands.
    """
    parser = ArgumentParser(prog="fretwise")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument(
        "--instrument",
        default=Instrument.StandardGuitar.value,
        choices=[i.value for i in Instrument],
    )
    parser.add_argument("--frets", type=int, default=DEFAULT_NUM_FRETS)
    subparsers = parser.add_subparsers(dest="command", required=True)

    rec = subparsers.add_parser("recognize", help="name a chord or interval")
    rec.add_argument("notes", nargs="*", help="note names, root first")
    rec.add_argument("--shape", help="a shape such as x32010, lowest string first")
    rec.set_defaults(run=run_recognize)

    sea = subparsers.add_parser("search", help="list the voicings of a chord")
    sea.add_argument("chord", help="chord symbol, e.g. C#m7")
    sea.add_argument("--partial", action="store_true", help="allow omitted notes")
    sea.add_argument("--center", type=float, help="sort by distance from this fret")
    sea.add_argument("--limit", type=int, default=20)
    sea.set_defaults(run=run_search)

    pro = subparsers.add_parser("progress", help="generate a progression")
    pro.add_argument("chord", help="seed chord symbol, e.g. Am")
    pro.add_argument(
        "--strategy",
        default=Strategy.Pattern.value,
        choices=[s.value for s in Strategy],
    )
    pro.add_argument("--complexity", type=int, default=2, choices=[1, 2, 3])
    pro.add_argument("--seed", type=int)
    pro.add_argument("--center", type=float, help="fret to keep the hand near")
    pro.set_defaults(run=run_progress)
    return parser


def configure_logging(log_level: str) -> None:
    """Configure the logging system with the specified log level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=log_level,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments, configure logging and run the chosen subcommand."""
    parser = make_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    args.run(parser, args)


if __name__ == "__main__":
    main()
