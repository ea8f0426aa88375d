from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .errors import InvalidDimensions, OutOfBounds

Symbol = str  # one printable character
Coord = Tuple[int, int]  # (row, col), 0-based

HIDDEN_GLYPH = '*'


@dataclass(frozen=True)
class CardView:
    """Read-only copy of a card. In a masked snapshot, hidden symbols read as '*'."""
    symbol: Symbol
    revealed: bool
    matched: bool


@dataclass
class Card:
    """A single face-down/face-up card. Matched cards stay visible for good."""
    symbol: Symbol
    revealed: bool = False
    matched: bool = False

    def reveal(self) -> None:
        if not self.matched:
            self.revealed = True

    def hide(self) -> None:
        if not self.matched:
            self.revealed = False

    def set_matched(self) -> None:
        self.matched = True
        self.revealed = True

    def view(self, masked: bool = False) -> CardView:
        visible = self.revealed or self.matched
        symbol = self.symbol if (visible or not masked) else HIDDEN_GLYPH
        return CardView(symbol=symbol, revealed=visible, matched=self.matched)


def check_dimensions(rows: int, cols: int) -> None:
    """Raises InvalidDimensions unless rows, cols > 0 and rows * cols is even."""
    if rows <= 0 or cols <= 0 or (rows * cols) % 2 != 0:
        raise InvalidDimensions(
            f"board must have positive rows/cols and an even number of cells (got {rows}x{cols})"
        )


class Board:
    """
    Grid of cards stored row-major in one flat list.

    Rep:
      - len(cards) == rows * cols, rows > 0, cols > 0, rows * cols even
      - every symbol occurs an even number of times (exactly twice unless the
        deck was dealt past the end of the symbol pool)
      - matched => revealed
    Symbols never change once the board is built.
    """

    def __init__(self, rows: int, cols: int, symbols: Sequence[Symbol]):
        check_dimensions(rows, cols)
        if len(symbols) != rows * cols:
            raise ValueError(f"expected {rows * cols} symbols, got {len(symbols)}")
        odd = sorted(s for s, n in Counter(symbols).items() if n % 2 != 0)
        if odd:
            raise ValueError(f"symbols without a partner: {''.join(odd)}")

        self._rows = rows
        self._cols = cols
        self._cards: List[Card] = [Card(symbol=s) for s in symbols]

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def size(self) -> int:
        return self._rows * self._cols

    def index(self, r: int, c: int) -> int:
        """Row-major index of (r, c). Raises OutOfBounds; there is no wraparound."""
        if not (0 <= r < self._rows and 0 <= c < self._cols):
            raise OutOfBounds(r, c, self._rows, self._cols)
        return r * self._cols + c

    def at(self, r: int, c: int) -> Card:
        return self._cards[self.index(r, c)]

    def peek(self, r: int, c: int) -> CardView:
        return self.at(r, c).view()

    def coords(self) -> Iterable[Coord]:
        for r in range(self._rows):
            for c in range(self._cols):
                yield (r, c)

    def reveal_at(self, r: int, c: int) -> None:
        self.at(r, c).reveal()

    def hide_at(self, r: int, c: int) -> None:
        self.at(r, c).hide()

    def match_at(self, r: int, c: int) -> None:
        self.at(r, c).set_matched()

    def matched_count(self) -> int:
        return sum(1 for card in self._cards if card.matched)

    def all_matched(self) -> bool:
        return all(card.matched for card in self._cards)

    def symbols(self) -> Tuple[Symbol, ...]:
        """All symbols in row-major order, hidden or not. Not for display."""
        return tuple(card.symbol for card in self._cards)

    def snapshot(self) -> Tuple[Tuple[CardView, ...], ...]:
        """Masked rows of CardView for rendering; unrevealed symbols read as '*'."""
        return tuple(
            tuple(self._cards[r * self._cols + c].view(masked=True) for c in range(self._cols))
            for r in range(self._rows)
        )
