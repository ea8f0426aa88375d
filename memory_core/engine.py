from __future__ import annotations

import logging
from typing import Optional, Tuple

from .board import Board, CardView, Coord
from .deal import RandomSource, deal_board
from .errors import (
    CardAlreadyMatched,
    DuplicateSelection,
    GameAlreadyComplete,
    TurnOrderError,
)
from .state import OutcomeKind, TurnOutcome, TurnPhase

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Turn state machine for one single-player game.

    A turn is select_first -> select_second. A mismatch leaves both cards face
    up in MISMATCH_PENDING until acknowledge_mismatch() hides them. Rejected
    calls raise a TurnError subclass and leave the engine as it was, except that
    a rejected second selection (duplicate or matched card) hides the first card
    and ends the turn without counting it.

    Not thread-safe; callers serialize access.
    """

    def __init__(
        self,
        rows: int = 4,
        cols: int = 4,
        rng: Optional[RandomSource] = None,
        allow_wraparound: bool = True,
    ):
        self._board = deal_board(rows, cols, rng=rng, allow_wraparound=allow_wraparound)
        self._moves = 0
        self._first: Optional[Coord] = None
        self._mismatch: Optional[Tuple[Coord, Coord]] = None
        self._phase = TurnPhase.AWAITING_FIRST

    @classmethod
    def from_board(cls, board: Board) -> 'GameEngine':
        """Wraps an already dealt board. The engine takes ownership of it."""
        engine = cls.__new__(cls)
        engine._board = board
        engine._moves = 0
        engine._first = None
        engine._mismatch = None
        engine._phase = TurnPhase.COMPLETE if board.all_matched() else TurnPhase.AWAITING_FIRST
        return engine

    # ---------- queries ----------

    @property
    def board(self) -> Board:
        return self._board

    @property
    def rows(self) -> int:
        return self._board.rows

    @property
    def cols(self) -> int:
        return self._board.cols

    @property
    def phase(self) -> TurnPhase:
        return self._phase

    @property
    def move_count(self) -> int:
        return self._moves

    @property
    def pending_selection(self) -> Optional[Coord]:
        """First card of the turn in progress, if any."""
        return self._first

    @property
    def pending_mismatch(self) -> Optional[Tuple[Coord, Coord]]:
        return self._mismatch

    def is_complete(self) -> bool:
        return self._phase is TurnPhase.COMPLETE

    def snapshot(self) -> Tuple[Tuple[CardView, ...], ...]:
        return self._board.snapshot()

    # ---------- turn API ----------

    def _require_phase(self, expected: TurnPhase, action: str) -> None:
        if self._phase is TurnPhase.COMPLETE:
            raise GameAlreadyComplete()
        if self._phase is TurnPhase.MISMATCH_PENDING and expected is not TurnPhase.MISMATCH_PENDING:
            raise TurnOrderError(f"cannot {action}: acknowledge the mismatch first")
        if self._phase is not expected:
            raise TurnOrderError(f"cannot {action} while {self._phase.value}")

    def select_first(self, row: int, col: int) -> None:
        """Turns up the first card of a turn."""
        self._require_phase(TurnPhase.AWAITING_FIRST, "select a first card")
        card = self._board.at(row, col)
        if card.matched:
            raise CardAlreadyMatched(row, col)
        self._board.reveal_at(row, col)
        self._first = (row, col)
        self._phase = TurnPhase.AWAITING_SECOND

    def select_second(self, row: int, col: int) -> TurnOutcome:
        """Turns up the second card and resolves the turn."""
        self._require_phase(TurnPhase.AWAITING_SECOND, "select a second card")
        assert self._first is not None
        r1, c1 = self._first
        card = self._board.at(row, col)

        if (row, col) == (r1, c1):
            self._abandon_turn()
            raise DuplicateSelection(row, col)
        if card.matched:
            self._abandon_turn()
            raise CardAlreadyMatched(row, col)

        self._board.reveal_at(row, col)
        self._moves += 1
        self._first = None
        s1 = self._board.at(r1, c1).symbol
        s2 = card.symbol

        if s1 == s2:
            self._board.match_at(r1, c1)
            self._board.match_at(row, col)
            complete = self._board.all_matched()
            self._phase = TurnPhase.COMPLETE if complete else TurnPhase.AWAITING_FIRST
            logger.debug("move %d: match %r at %s and %s", self._moves, s1, (r1, c1), (row, col))
            if complete:
                logger.info("all pairs matched in %d moves", self._moves)
            return TurnOutcome(OutcomeKind.MATCH, (r1, c1), (row, col), s1, s2, self._moves, complete)

        self._mismatch = ((r1, c1), (row, col))
        self._phase = TurnPhase.MISMATCH_PENDING
        logger.debug("move %d: mismatch %r/%r", self._moves, s1, s2)
        return TurnOutcome(OutcomeKind.MISMATCH, (r1, c1), (row, col), s1, s2, self._moves)

    def acknowledge_mismatch(self) -> None:
        """Hides the two cards of the last mismatch and starts the next turn."""
        self._require_phase(TurnPhase.MISMATCH_PENDING, "acknowledge a mismatch")
        assert self._mismatch is not None
        (r1, c1), (r2, c2) = self._mismatch
        self._board.hide_at(r1, c1)
        self._board.hide_at(r2, c2)
        self._mismatch = None
        self._phase = TurnPhase.AWAITING_FIRST

    def _abandon_turn(self) -> None:
        assert self._first is not None
        self._board.hide_at(*self._first)
        self._first = None
        self._phase = TurnPhase.AWAITING_FIRST
