import unittest

from game import (
    Board,
    CardAlreadyMatched,
    DuplicateSelection,
    GameAlreadyComplete,
    GameEngine,
    InvalidDimensions,
    OutcomeKind,
    OutOfBounds,
    TurnError,
    TurnOrderError,
    TurnPhase,
    Unshuffled,
    make_rng,
)

# Unshuffled 4x4 layout:
#   A A B B
#   C C D D
#   E E F F
#   G G H H
PAIRS_4X4 = [((r, c), (r, c + 1)) for r in range(4) for c in (0, 2)]


def fixed_engine(rows=4, cols=4):
    return GameEngine(rows, cols, rng=Unshuffled())


def card_states(engine):
    return [(engine.board.at(*rc).revealed, engine.board.at(*rc).matched) for rc in engine.board.coords()]


class TestEngineScenarios(unittest.TestCase):
    def test_given_fixed_layout_when_first_selected_then_card_revealed_and_awaiting_second(self):
        engine = fixed_engine()
        self.assertIsNone(engine.select_first(0, 0))
        self.assertTrue(engine.board.at(0, 0).revealed)
        self.assertEqual(engine.snapshot()[0][0].symbol, 'A')
        self.assertEqual(engine.phase, TurnPhase.AWAITING_SECOND)
        self.assertEqual(engine.pending_selection, (0, 0))
        self.assertEqual(engine.move_count, 0)

    def test_given_matching_pair_when_second_selected_then_match_and_move_counted(self):
        engine = fixed_engine()
        engine.select_first(0, 0)
        outcome = engine.select_second(0, 1)
        self.assertEqual(outcome.kind, OutcomeKind.MATCH)
        self.assertTrue(outcome.is_match)
        self.assertEqual(outcome.symbol, 'A')
        self.assertEqual(outcome.move_count, 1)
        self.assertFalse(outcome.complete)
        self.assertTrue(engine.board.at(0, 0).matched)
        self.assertTrue(engine.board.at(0, 1).matched)
        self.assertEqual(engine.move_count, 1)
        self.assertEqual(engine.phase, TurnPhase.AWAITING_FIRST)
        self.assertIsNone(engine.pending_selection)

    def test_given_different_symbols_when_second_selected_then_mismatch_stays_revealed_until_acknowledged(self):
        engine = fixed_engine()
        engine.select_first(0, 0)
        engine.select_second(0, 1)
        engine.select_first(0, 2)
        outcome = engine.select_second(1, 2)
        self.assertEqual(outcome.kind, OutcomeKind.MISMATCH)
        self.assertIsNone(outcome.symbol)
        self.assertEqual((outcome.first_symbol, outcome.second_symbol), ('B', 'D'))
        self.assertEqual(engine.move_count, 2)
        self.assertEqual(engine.phase, TurnPhase.MISMATCH_PENDING)
        self.assertEqual(engine.pending_mismatch, ((0, 2), (1, 2)))
        self.assertTrue(engine.board.at(0, 2).revealed)
        self.assertTrue(engine.board.at(1, 2).revealed)

        engine.acknowledge_mismatch()
        self.assertFalse(engine.board.at(0, 2).revealed)
        self.assertFalse(engine.board.at(1, 2).revealed)
        self.assertEqual(engine.phase, TurnPhase.AWAITING_FIRST)
        self.assertIsNone(engine.pending_mismatch)
        self.assertEqual(engine.move_count, 2)

    def test_given_matched_card_when_selected_first_then_rejected_without_changes(self):
        engine = fixed_engine()
        engine.select_first(0, 0)
        engine.select_second(0, 1)
        before = card_states(engine)
        with self.assertRaises(CardAlreadyMatched):
            engine.select_first(0, 0)
        self.assertEqual(engine.move_count, 1)
        self.assertEqual(engine.phase, TurnPhase.AWAITING_FIRST)
        self.assertEqual(card_states(engine), before)

    def test_given_all_pairs_matched_when_playing_through_then_complete_after_last_match(self):
        engine = fixed_engine()
        for i, (a, b) in enumerate(PAIRS_4X4):
            self.assertFalse(engine.is_complete())
            engine.select_first(*a)
            outcome = engine.select_second(*b)
            self.assertTrue(outcome.is_match)
            self.assertEqual(outcome.complete, i == len(PAIRS_4X4) - 1)
        self.assertTrue(engine.is_complete())
        self.assertTrue(engine.board.all_matched())
        self.assertEqual(engine.move_count, 8)
        self.assertEqual(engine.phase, TurnPhase.COMPLETE)

    def test_given_odd_board_when_constructing_then_invalid_dimensions(self):
        with self.assertRaises(InvalidDimensions):
            GameEngine(3, 3)
        for rows, cols in [(0, 4), (4, 0), (-1, -2)]:
            with self.assertRaises(InvalidDimensions):
                GameEngine(rows, cols)


class TestEngineRejections(unittest.TestCase):
    def test_given_same_card_twice_when_second_selected_then_duplicate_and_first_hidden(self):
        engine = fixed_engine()
        engine.select_first(2, 1)
        with self.assertRaises(DuplicateSelection):
            engine.select_second(2, 1)
        self.assertFalse(engine.board.at(2, 1).revealed)
        self.assertEqual(engine.phase, TurnPhase.AWAITING_FIRST)
        self.assertIsNone(engine.pending_selection)
        self.assertEqual(engine.move_count, 0)

    def test_given_matched_second_card_when_selected_then_rejected_and_first_hidden(self):
        engine = fixed_engine()
        engine.select_first(0, 0)
        engine.select_second(0, 1)
        engine.select_first(3, 3)
        with self.assertRaises(CardAlreadyMatched):
            engine.select_second(0, 1)
        self.assertFalse(engine.board.at(3, 3).revealed)
        self.assertTrue(engine.board.at(0, 1).matched)
        self.assertEqual(engine.phase, TurnPhase.AWAITING_FIRST)
        self.assertEqual(engine.move_count, 1)

    def test_given_out_of_range_selection_when_selecting_then_nothing_changes(self):
        engine = fixed_engine()
        before = card_states(engine)
        with self.assertRaises(OutOfBounds):
            engine.select_first(4, 0)
        with self.assertRaises(OutOfBounds):
            engine.select_first(0, -1)
        self.assertEqual(card_states(engine), before)
        self.assertEqual(engine.phase, TurnPhase.AWAITING_FIRST)

        engine.select_first(1, 1)
        mid = card_states(engine)
        with self.assertRaises(OutOfBounds):
            engine.select_second(-1, 0)
        self.assertEqual(card_states(engine), mid)
        self.assertEqual(engine.pending_selection, (1, 1))
        self.assertEqual(engine.phase, TurnPhase.AWAITING_SECOND)
        self.assertEqual(engine.move_count, 0)
        # Turn can still be finished after the rejection
        self.assertTrue(engine.select_second(1, 0).is_match)

    def test_given_complete_game_when_selecting_then_game_already_complete_and_nothing_changes(self):
        engine = fixed_engine(1, 2)
        engine.select_first(0, 0)
        engine.select_second(0, 1)
        self.assertTrue(engine.is_complete())
        before = card_states(engine)
        with self.assertRaises(GameAlreadyComplete):
            engine.select_first(0, 0)
        with self.assertRaises(GameAlreadyComplete):
            engine.select_second(0, 1)
        with self.assertRaises(GameAlreadyComplete):
            engine.select_first(9, 9)
        with self.assertRaises(GameAlreadyComplete):
            engine.acknowledge_mismatch()
        self.assertEqual(card_states(engine), before)
        self.assertEqual(engine.move_count, 1)

    def test_given_wrong_phase_when_calling_then_turn_order_error_without_changes(self):
        engine = fixed_engine()
        with self.assertRaises(TurnOrderError):
            engine.select_second(0, 0)
        with self.assertRaises(TurnOrderError):
            engine.acknowledge_mismatch()

        engine.select_first(0, 0)
        with self.assertRaises(TurnOrderError):
            engine.select_first(1, 1)
        self.assertFalse(engine.board.at(1, 1).revealed)
        self.assertEqual(engine.pending_selection, (0, 0))

        engine.select_second(1, 1)  # A vs C
        before = card_states(engine)
        with self.assertRaises(TurnOrderError):
            engine.select_first(2, 2)
        with self.assertRaises(TurnOrderError):
            engine.select_second(2, 2)
        self.assertEqual(card_states(engine), before)
        self.assertEqual(engine.phase, TurnPhase.MISMATCH_PENDING)
        self.assertEqual(engine.move_count, 1)

    def test_given_any_rejection_when_caught_then_it_is_a_turn_error(self):
        engine = fixed_engine()
        engine.select_first(0, 0)
        with self.assertRaises(TurnError):
            engine.select_second(0, 0)


class TestEngineMoveCounting(unittest.TestCase):
    def test_given_mixed_turns_when_playing_then_only_completed_turns_counted(self):
        engine = fixed_engine()
        engine.select_first(0, 0)
        engine.select_second(1, 0)          # mismatch: 1
        engine.acknowledge_mismatch()
        engine.select_first(0, 0)
        with self.assertRaises(DuplicateSelection):
            engine.select_second(0, 0)      # rejected: still 1
        engine.select_first(0, 0)
        engine.select_second(0, 1)          # match: 2
        engine.select_first(1, 0)
        with self.assertRaises(CardAlreadyMatched):
            engine.select_second(0, 0)      # rejected: still 2
        with self.assertRaises(CardAlreadyMatched):
            engine.select_first(0, 1)       # rejected: still 2
        engine.select_first(1, 0)
        engine.select_second(1, 1)          # match: 3
        self.assertEqual(engine.move_count, 3)

    def test_given_random_game_when_solved_with_full_knowledge_then_moves_equal_pairs(self):
        engine = GameEngine(4, 6, rng=make_rng(99))
        positions = {}
        for rc in engine.board.coords():
            positions.setdefault(engine.board.at(*rc).symbol, []).append(rc)
        for a, b in positions.values():
            engine.select_first(*a)
            engine.select_second(*b)
        self.assertTrue(engine.is_complete())
        self.assertEqual(engine.move_count, 12)


class TestEngineFromBoard(unittest.TestCase):
    def test_given_prepared_board_when_wrapping_then_engine_plays_it(self):
        board = Board(1, 4, ['x', 'y', 'y', 'x'])
        engine = GameEngine.from_board(board)
        self.assertIs(engine.board, board)
        self.assertEqual((engine.rows, engine.cols), (1, 4))
        engine.select_first(0, 0)
        self.assertTrue(engine.select_second(0, 3).is_match)
        engine.select_first(0, 1)
        with self.assertLogs('memory_core.engine', level='INFO'):
            outcome = engine.select_second(0, 2)
        self.assertEqual(outcome.symbol, 'y')
        self.assertTrue(engine.is_complete())

    def test_given_snapshot_when_cards_hidden_then_symbols_not_exposed(self):
        engine = fixed_engine(2, 2)
        engine.select_first(1, 0)
        snap = engine.snapshot()
        self.assertEqual([[c.symbol for c in row] for row in snap], [['*', '*'], ['B', '*']])


if __name__ == '__main__':
    unittest.main(verbosity=2)
