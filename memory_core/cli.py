from __future__ import annotations

import argparse
import logging
from typing import Callable, List, Optional, Tuple

from .board import Coord, check_dimensions
from .deal import make_rng
from .engine import GameEngine
from .errors import CardAlreadyMatched, DuplicateSelection, InvalidDimensions, MemoryGameError
from .render import render_board, render_status

DEFAULT_SIZE = (4, 4)

PARSE_FAILED = 'parse_failed'
BAD_DIMENSIONS = 'bad_dimensions'

_FALLBACK_MESSAGES = {
    PARSE_FAILED: 'Invalid input. Using default 4x4.',
    BAD_DIMENSIONS: 'Invalid board dimensions. Using default 4x4.',
}


def _split_pair(text: str) -> Optional[Tuple[int, int]]:
    sep = ',' if ',' in text else None
    parts = [t for t in text.strip().split(sep) if t.strip() != '']
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def parse_position(text: str, rows: int, cols: int) -> Optional[Coord]:
    """Parses '2 3' or '2,3' (1-based) into a 0-based coordinate; None if unusable."""
    pair = _split_pair(text)
    if pair is None:
        return None
    r, c = pair[0] - 1, pair[1] - 1
    if 0 <= r < rows and 0 <= c < cols:
        return (r, c)
    return None


def parse_dimensions(
    text: str, default: Tuple[int, int] = DEFAULT_SIZE
) -> Tuple[int, int, Optional[str]]:
    """
    Parses 'rows cols'. Empty input means the default size.
    Returns (rows, cols, problem). problem is None when the input was usable,
    PARSE_FAILED when it was not two integers, and BAD_DIMENSIONS when the
    size was odd or not positive; in both failure cases the default is returned.
    """
    if not text.strip():
        return default[0], default[1], None
    pair = _split_pair(text)
    if pair is None:
        return default[0], default[1], PARSE_FAILED
    try:
        check_dimensions(*pair)
    except InvalidDimensions:
        return default[0], default[1], BAD_DIMENSIONS
    return pair[0], pair[1], None


def read_position(
    prompt: str,
    rows: int,
    cols: int,
    input_fn: Optional[Callable[[str], str]] = None,
    out: Optional[Callable[..., None]] = None,
) -> Coord:
    input_fn = input_fn or input
    out = out or print
    while True:
        pos = parse_position(input_fn(prompt), rows, cols)
        if pos is not None:
            return pos
        out("Invalid input. Use: <row> <col>  (e.g. 2 3)")


def play(
    engine: GameEngine,
    input_fn: Optional[Callable[[str], str]] = None,
    out: Optional[Callable[..., None]] = None,
    show_coords: bool = True,
) -> int:
    """Runs the console game until every pair is matched. Returns the move count."""
    input_fn = input_fn or input
    out = out or print
    out("Memory Puzzle (no timers, press Enter when asked)")
    out(f"Board: {engine.rows}x{engine.cols}")
    out("Choose cards by entering row and column numbers separated by space.")
    input_fn("Press Enter to start...")

    def show() -> None:
        out(render_board(engine.snapshot(), show_coords))

    while not engine.is_complete():
        show()
        out(render_status(engine.move_count))

        r1, c1 = read_position("Select first card (row col): ", engine.rows, engine.cols, input_fn, out)
        try:
            engine.select_first(r1, c1)
        except CardAlreadyMatched:
            out("That card is already matched. Choose another.")
            continue
        show()

        r2, c2 = read_position("Select second card (row col): ", engine.rows, engine.cols, input_fn, out)
        try:
            outcome = engine.select_second(r2, c2)
        except DuplicateSelection:
            out("You selected the same card twice. Try again.")
            continue
        except CardAlreadyMatched:
            out("Second card already matched. Try again.")
            continue
        show()

        if outcome.is_match:
            out(f"MATCH! ({outcome.symbol})")
        else:
            out("Not a match.")
            input_fn("Press Enter to continue and hide the two cards...")
            engine.acknowledge_mismatch()

    show()
    out("CONGRATULATIONS! All pairs matched.")
    out(f"Total moves: {engine.move_count}")
    return engine.move_count


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Memory puzzle: match every pair of cards')
    parser.add_argument('--rows', type=int, default=None, help='Board rows (prompted if omitted)')
    parser.add_argument('--cols', type=int, default=None, help='Board columns (prompted if omitted)')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the shuffle')
    parser.add_argument('--strict-symbols', action='store_true',
                        help='Refuse boards with more pairs than distinct symbols')
    parser.add_argument('--no-coords', action='store_true', help='Hide row/column labels')
    parser.add_argument('--verbose', action='store_true', help='Log turn resolution')
    args = parser.parse_args(argv)
    if (args.rows is None) != (args.cols is None):
        parser.error('--rows and --cols must be given together')

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    if args.rows is None or args.cols is None:
        line = input('Enter board size (rows cols) or press Enter for default 4 4:\n> ')
        rows, cols, problem = parse_dimensions(line)
        if problem is not None:
            print(_FALLBACK_MESSAGES[problem])
    else:
        rows, cols = args.rows, args.cols

    try:
        engine = GameEngine(rows, cols, rng=make_rng(args.seed),
                            allow_wraparound=not args.strict_symbols)
    except MemoryGameError as e:
        print(f"Error: {e}")
        return 1

    try:
        play(engine, show_coords=not args.no_coords)
    except (EOFError, KeyboardInterrupt):
        print('\nGame abandoned.')
        return 1
    return 0
