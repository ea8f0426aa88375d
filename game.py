from __future__ import annotations

# Facade module that re-exports the memory puzzle core.
# Used by the Flask app and tests; single-responsibility modules live under memory_core/*.

from memory_core.board import HIDDEN_GLYPH, Board, Card, CardView, Coord, Symbol, check_dimensions
from memory_core.deal import (
    SYMBOL_POOL,
    RandomSource,
    Unshuffled,
    build_deck,
    deal_board,
    make_rng,
    make_symbols,
)
from memory_core.engine import GameEngine
from memory_core.errors import (
    CardAlreadyMatched,
    DuplicateSelection,
    GameAlreadyComplete,
    InvalidDimensions,
    MemoryGameError,
    OutOfBounds,
    TurnError,
    TurnOrderError,
)
from memory_core.render import render_board, render_status
from memory_core.state import OutcomeKind, TurnOutcome, TurnPhase


def main() -> None:
    # CLI driver delegated to memory_core.cli
    from memory_core.cli import main as _main
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
