from __future__ import annotations


class MemoryGameError(Exception):
    """Base class for every error raised by the memory engine."""
    code = "memory_error"


class InvalidDimensions(MemoryGameError, ValueError):
    """Rows/cols are not positive or their product is odd."""
    code = "invalid_dimensions"


class TurnError(MemoryGameError):
    """A selection was rejected. Engine state is unchanged unless noted."""
    code = "turn_error"


class OutOfBounds(TurnError, IndexError):
    code = "out_of_bounds"

    def __init__(self, row: int, col: int, rows: int, cols: int):
        super().__init__(f"position ({row}, {col}) is outside a {rows}x{cols} board")
        self.row = row
        self.col = col


class CardAlreadyMatched(TurnError):
    code = "card_already_matched"

    def __init__(self, row: int, col: int):
        super().__init__(f"card at ({row}, {col}) is already matched")
        self.row = row
        self.col = col


class DuplicateSelection(TurnError):
    code = "duplicate_selection"

    def __init__(self, row: int, col: int):
        super().__init__(f"card at ({row}, {col}) was selected twice")
        self.row = row
        self.col = col


class GameAlreadyComplete(TurnError):
    code = "game_already_complete"

    def __init__(self) -> None:
        super().__init__("all pairs are matched; the game is over")


class TurnOrderError(TurnError):
    """Call made in the wrong phase of a turn (e.g. second pick with no first pick)."""
    code = "turn_order"
