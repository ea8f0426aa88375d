from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Coord, Symbol


class TurnPhase(Enum):
    """Where the engine is within a turn."""
    AWAITING_FIRST = "awaiting_first"
    AWAITING_SECOND = "awaiting_second"
    MISMATCH_PENDING = "mismatch_pending"  # both cards face up until acknowledged
    COMPLETE = "complete"


class OutcomeKind(Enum):
    MATCH = "match"
    MISMATCH = "mismatch"


@dataclass(frozen=True)
class TurnOutcome:
    """Result of a counted turn (a second selection that was accepted)."""
    kind: OutcomeKind
    first: Coord
    second: Coord
    first_symbol: Symbol
    second_symbol: Symbol
    move_count: int
    complete: bool = False

    @property
    def is_match(self) -> bool:
        return self.kind is OutcomeKind.MATCH

    @property
    def symbol(self) -> Optional[Symbol]:
        """The matched symbol, or None for a mismatch."""
        return self.first_symbol if self.is_match else None
