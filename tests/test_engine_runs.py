import random
import unittest

from tableau.Core import DEAL_COLUMN, REMOVED_COLUMN, Card, Suit, TableauState
from tableau.Engine import NO_HINT, Engine


def up(suit, rank):
    return Card(suit, rank, True)


def down(suit, rank):
    return Card(suit, rank, False)


def full_run(suit):
    return [up(suit, rank) for rank in range(13, 0, -1)]


def make_engine(columns, stock=None, suits=1):
    state = TableauState(suits)
    for i, column in enumerate(columns):
        state.columns[i] = list(column)
    state.stock = list(stock or [])
    return Engine(state)


def snapshot(state):
    return (
        [[(id(c), c.faceUp) for c in column] for column in state.columns],
        [(id(c), c.faceUp) for c in state.stock],
        state.score,
        state.completedRuns,
        state.remainingDeals,
    )


S = Suit.SPADES
H = Suit.HEARTS


class DealTestCase(unittest.TestCase):
    def test_deal_puts_one_face_up_card_on_each_column(self):
        engine = Engine.newGame(1, random.Random(3))
        state = engine.state
        expected = list(reversed(state.stock[-10:]))
        sizes = [len(c) for c in state.columns]

        self.assertTrue(engine.deal())
        self.assertEqual([s + 1 for s in sizes], [len(c) for c in state.columns])
        self.assertEqual(expected, [c[-1] for c in state.columns])
        self.assertTrue(all(c[-1].faceUp for c in state.columns))
        self.assertEqual(40, len(state.stock))
        self.assertEqual(4, state.remainingDeals)
        self.assertEqual(500, state.score)
        record = state.undoLog[-1]
        self.assertEqual((DEAL_COLUMN, DEAL_COLUMN), (record.fromColumn, record.toColumn))
        self.assertEqual(expected, record.movedCards)

    def test_undo_deal_restores_stock(self):
        # columns are unwound last to first so the stock order comes back exactly
        engine = Engine.newGame(2, random.Random(8))
        before = snapshot(engine.state)
        self.assertTrue(engine.deal())
        self.assertTrue(engine.undo())
        after = snapshot(engine.state)
        self.assertEqual(before[:2], after[:2])
        self.assertEqual(501, engine.state.score)
        self.assertEqual(5, engine.state.remainingDeals)

    def test_deal_without_remaining_deals_fails(self):
        engine = Engine.newGame(1, random.Random(4))
        engine.state.remainingDeals = 0
        before = snapshot(engine.state)
        self.assertFalse(engine.deal())
        self.assertEqual(before, snapshot(engine.state))
        self.assertEqual([], engine.state.undoLog)

    def test_deal_with_empty_column_fails(self):
        engine = Engine.newGame(1, random.Random(4))
        engine.state.columns[6] = []
        self.assertGreaterEqual(len(engine.state.stock), 10)
        before = snapshot(engine.state)
        self.assertFalse(engine.deal())
        self.assertEqual(before, snapshot(engine.state))

    def test_deal_with_short_stock_fails(self):
        columns = [[up(S, 5)] for _ in range(10)]
        engine = make_engine(columns, stock=[down(S, 1) for _ in range(9)])
        self.assertFalse(engine.deal())
        self.assertEqual(9, len(engine.state.stock))

    def test_five_deals_exhaust_the_counter(self):
        engine = Engine.newGame(1, random.Random(12))
        for _ in range(5):
            self.assertTrue(engine.deal())
        self.assertEqual(0, engine.state.remainingDeals)
        self.assertFalse(engine.deal())


class CompleteRunTestCase(unittest.TestCase):
    def test_complete_run_is_removed(self):
        hidden = down(H, 5)
        run = full_run(S)
        other = [up(H, 9)]
        engine = make_engine([[up(S, 4)], other, [hidden] + run], suits=2)
        state = engine.state

        self.assertTrue(engine.checkAndRemoveCompleteRuns())
        self.assertEqual([hidden], state.columns[2])
        self.assertTrue(hidden.faceUp)
        self.assertEqual(1, state.completedRuns)
        self.assertEqual(600, state.score)
        self.assertEqual(other, state.columns[1])
        self.assertEqual(1, len(state.columns[0]))
        record = state.undoLog[-1]
        self.assertEqual((2, REMOVED_COLUMN), (record.fromColumn, record.toColumn))
        self.assertEqual(run, record.movedCards)

    def test_undo_run_removal(self):
        # the card revealed by the removal goes face-down again on undo
        hidden = down(H, 5)
        run = full_run(S)
        engine = make_engine([[], [], [hidden] + run], suits=2)
        engine.checkAndRemoveCompleteRuns()
        self.assertTrue(engine.undo())
        self.assertEqual([hidden] + run, engine.state.columns[2])
        self.assertFalse(hidden.faceUp)
        self.assertEqual(0, engine.state.completedRuns)
        self.assertEqual(501, engine.state.score)
        self.assertFalse(engine.isWon())

    def test_several_columns_complete_in_one_pass(self):
        engine = make_engine([full_run(S), [], full_run(H)], suits=2)
        self.assertTrue(engine.checkAndRemoveCompleteRuns())
        self.assertEqual(2, engine.state.completedRuns)
        self.assertEqual(700, engine.state.score)
        self.assertEqual([], engine.state.columns[0])
        self.assertEqual([], engine.state.columns[2])

    def test_incomplete_runs_are_left_alone(self):
        mixed = full_run(S)
        mixed[5] = up(H, mixed[5].rank)
        hidden = full_run(S)
        hidden[0].flip()
        short = full_run(S)[1:]
        not_ace_top = full_run(S) + [up(H, 9)]
        engine = make_engine([mixed, hidden, short, not_ace_top], suits=2)
        self.assertFalse(engine.checkAndRemoveCompleteRuns())
        self.assertEqual(0, engine.state.completedRuns)
        self.assertEqual([], engine.state.undoLog)

    def test_run_on_top_of_longer_column(self):
        base = [down(S, 2), up(S, 7)]
        engine = make_engine([base + full_run(S)])
        self.assertTrue(engine.checkAndRemoveCompleteRuns())
        self.assertEqual(base, engine.state.columns[0])
        self.assertFalse(base[0].faceUp)

    def test_eighth_run_wins(self):
        engine = make_engine([full_run(S)])
        engine.state.completedRuns = 7
        self.assertFalse(engine.isWon())
        engine.checkAndRemoveCompleteRuns()
        self.assertTrue(engine.isWon())

    def test_undo_does_not_rerun_detection(self):
        engine = make_engine([full_run(S)[:-1], [up(S, 1)]])
        self.assertTrue(engine.move(1, 0, 1))
        self.assertTrue(engine.checkAndRemoveCompleteRuns())
        self.assertTrue(engine.undo())
        self.assertEqual(13, len(engine.state.columns[0]))
        self.assertEqual(0, engine.state.completedRuns)
        self.assertEqual(499 + 100 - 100 + 1, engine.state.score)


class HintTestCase(unittest.TestCase):
    def blocked_columns(self):
        return [[up(H, 13)] for _ in range(10)]

    def test_hint_reports_longest_run_to_first_destination(self):
        columns = self.blocked_columns()
        columns[0] = [down(S, 4), up(S, 9), up(S, 8)]
        columns[3] = [down(S, 13), up(H, 10)]
        columns[7] = [up(S, 10)]
        engine = make_engine(columns, suits=2)
        self.assertEqual((0, 3, 2), engine.findHint())
        self.assertEqual("Hint: move 2 card(s) from column 1 to column 4", engine.hint())

    def test_hint_does_not_try_shorter_runs(self):
        columns = self.blocked_columns()
        columns[0] = [up(S, 9), up(S, 8)]
        columns[4] = [up(H, 9)]
        engine = make_engine(columns, suits=2)
        self.assertTrue(engine.canMove(0, 4, 1))
        self.assertIsNone(engine.findHint())
        self.assertEqual(NO_HINT, engine.hint())

    def test_hint_takes_first_legal_destination_even_if_empty(self):
        columns = self.blocked_columns()
        columns[0] = [up(S, 6)]
        columns[5] = []
        columns[8] = [up(H, 7)]
        engine = make_engine(columns, suits=2)
        self.assertEqual((0, 5, 1), engine.findHint())

    def test_movable_run_length(self):
        engine = make_engine(
            [
                [up(S, 10), up(S, 9), up(S, 8)],
                [down(S, 10), up(S, 9), up(S, 8)],
                [up(H, 9), up(S, 8)],
                [],
                [up(S, 5), down(S, 4)],
            ],
            suits=2,
        )
        self.assertEqual(3, engine.movableRunLength(0))
        self.assertEqual(2, engine.movableRunLength(1))
        self.assertEqual(1, engine.movableRunLength(2))
        self.assertEqual(0, engine.movableRunLength(3))
        self.assertEqual(0, engine.movableRunLength(4))

    def test_hint_does_not_change_state(self):
        engine = Engine.newGame(1, random.Random(21))
        before = snapshot(engine.state)
        engine.hint()
        self.assertEqual(before, snapshot(engine.state))
        self.assertEqual([], engine.state.undoLog)


if __name__ == "__main__":
    unittest.main()
