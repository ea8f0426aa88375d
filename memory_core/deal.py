from __future__ import annotations

import logging
import random
from typing import List, MutableSequence, Optional, Protocol

from .board import Board, Symbol, check_dimensions
from .errors import InvalidDimensions

logger = logging.getLogger(__name__)

# Uppercase, lowercase, digits, then punctuation: 70 symbols.
SYMBOL_POOL = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789"
    "!@#$%^&*"
)


class RandomSource(Protocol):
    """Anything that permutes a list in place, uniformly. random.Random fits."""

    def shuffle(self, x: MutableSequence) -> None: ...


class Unshuffled:
    """Random source that leaves the deck in pool order. For reproducible layouts."""

    def shuffle(self, x: MutableSequence) -> None:
        return None


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Mersenne Twister seeded from `seed`, or from OS entropy when seed is None."""
    return random.Random(seed)


def make_symbols(pair_count: int, allow_wraparound: bool = True) -> List[Symbol]:
    """
    Picks `pair_count` symbols from SYMBOL_POOL in order.

    Boards with more pairs than the pool has symbols cycle through the pool
    again, so some symbols end up on four (or more) cards. That is logged; with
    allow_wraparound=False it is refused with InvalidDimensions instead.
    """
    if pair_count > len(SYMBOL_POOL):
        if not allow_wraparound:
            raise InvalidDimensions(
                f"{pair_count} pairs requested but only {len(SYMBOL_POOL)} distinct symbols exist"
            )
        logger.warning(
            "board needs %d pairs; reusing symbols past the %d-symbol pool",
            pair_count, len(SYMBOL_POOL),
        )
    return [SYMBOL_POOL[i % len(SYMBOL_POOL)] for i in range(pair_count)]


def build_deck(pair_count: int, allow_wraparound: bool = True) -> List[Symbol]:
    """Two cards per symbol, unshuffled: A A B B C C ..."""
    deck: List[Symbol] = []
    for symbol in make_symbols(pair_count, allow_wraparound):
        deck.append(symbol)
        deck.append(symbol)
    return deck


def deal_board(
    rows: int,
    cols: int,
    rng: Optional[RandomSource] = None,
    allow_wraparound: bool = True,
) -> Board:
    """Builds the deck for a rows x cols board, shuffles it and lays it out row-major."""
    check_dimensions(rows, cols)
    deck = build_deck((rows * cols) // 2, allow_wraparound)
    if rng is None:
        rng = make_rng()
    rng.shuffle(deck)
    logger.debug("dealt %dx%d board", rows, cols)
    return Board(rows, cols, deck)
