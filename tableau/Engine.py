import random

from tableau.Core import (
    COLUMN_COUNT,
    DEAL_COLUMN,
    REMOVED_COLUMN,
    RUN_BONUS,
    RUN_LENGTH,
    WINNING_RUNS,
    Move,
    TableauState,
    lastOf,
)

NO_HINT = "No hint available"


class Engine:
    """
    Rules of the tableau. Every operation mutates `self.state` in place and records what is
    needed to reverse it on `state.undoLog`. Illegal requests never raise, they return False.
    """

    def __init__(self, state: TableauState):
        self.state = state

    @staticmethod
    def newGame(difficulty, rng: random.Random = None):
        return Engine(TableauState.deal(difficulty, rng))

    def stockCount(self):
        return len(self.state.stock)

    def cardCount(self):
        return self.state.cardCount()

    @staticmethod
    def __isValidColumn(idx):
        return isinstance(idx, int) and 0 <= idx < COLUMN_COUNT

    @staticmethod
    def __isWellOrdered(run):
        base = run[0]
        if not base.faceUp:
            return False
        for upper in run[1:]:
            if not upper.faceUp or not base.continuesRun(upper):
                return False
            base = upper
        return True

    def canMove(self, src: int, dest: int, count: int) -> bool:
        if not (self.__isValidColumn(src) and self.__isValidColumn(dest)) or src == dest:
            return False
        if count < 1:
            return False
        srcStack = self.state.columns[src]
        destStack = self.state.columns[dest]
        if len(srcStack) < count:
            return False
        run = srcStack[len(srcStack) - count:]
        if not self.__isWellOrdered(run):
            return False
        base = run[0]
        if len(destStack) == 0:
            return True
        if base.rank == RUN_LENGTH:  # kings only go to empty columns
            return False
        destTop = lastOf(destStack)
        if base.rank == 1:
            return destTop.rank == 2
        return destTop.rank == base.rank + 1

    @staticmethod
    def __revealTop(stack):
        """Flips a face-down top card, returning it, or None if nothing was flipped."""
        if len(stack) == 0:
            return None
        top = lastOf(stack)
        if top.faceUp:
            return None
        top.flip()
        return top

    def move(self, src: int, dest: int, count: int) -> bool:
        if not self.canMove(src, dest, count):
            return False
        state = self.state
        srcStack = state.columns[src]
        moved = srcStack[len(srcStack) - count:]
        del srcStack[len(srcStack) - count:]
        state.columns[dest].extend(moved)

        flipped = self.__revealTop(srcStack)
        state.undoLog.append(Move(src, dest, moved, flipped is not None, flipped is None, flipped))
        state.score -= 1
        return True

    def undo(self) -> bool:
        state = self.state
        if len(state.undoLog) == 0:
            return False
        move = state.undoLog.pop()
        if move.isDeal():
            # last column first, so the stock gets back its exact order
            for column in reversed(state.columns):
                if len(column) != 0:
                    card = column.pop()
                    card.flip()
                    state.stock.append(card)
            state.remainingDeals += 1
        elif move.isRunRemoval():
            column = state.columns[move.fromColumn]
            if move.causedFlip and not move.flippedCardWasFaceUpBefore:
                move.flippedCard.flip()
            column.extend(move.movedCards)
            state.completedRuns -= 1
            state.score -= RUN_BONUS
        else:
            srcStack = state.columns[move.fromColumn]
            destStack = state.columns[move.toColumn]
            count = len(move.movedCards)
            srcStack.extend(destStack[len(destStack) - count:])
            del destStack[len(destStack) - count:]
            if move.causedFlip and move.flippedCard is not None and not move.flippedCardWasFaceUpBefore:
                move.flippedCard.flip()
        state.score += 1
        return True

    def deal(self) -> bool:
        state = self.state
        if state.remainingDeals <= 0:
            return False
        for column in state.columns:
            if len(column) == 0:
                return False
        if len(state.stock) < COLUMN_COUNT:
            return False
        dealt = []
        for column in state.columns:
            card = state.stock.pop()
            card.flip()
            column.append(card)
            dealt.append(card)
        state.undoLog.append(Move(DEAL_COLUMN, DEAL_COLUMN, dealt))
        state.remainingDeals -= 1
        return True

    @staticmethod
    def __isCompleteRun(column):
        if len(column) < RUN_LENGTH or lastOf(column).rank != 1:
            return False
        run = column[len(column) - RUN_LENGTH:]
        suit = run[0].suit
        for i, card in enumerate(run):
            if not card.faceUp or card.suit != suit or card.rank != RUN_LENGTH - i:
                return False
        return True

    def checkAndRemoveCompleteRuns(self) -> bool:
        state = self.state
        removed = False
        for i, column in enumerate(state.columns):
            if not self.__isCompleteRun(column):
                continue
            run = column[len(column) - RUN_LENGTH:]
            del column[len(column) - RUN_LENGTH:]
            flipped = self.__revealTop(column)
            state.undoLog.append(Move(i, REMOVED_COLUMN, run, flipped is not None, flipped is None, flipped))
            state.completedRuns += 1
            state.score += RUN_BONUS
            removed = True
        return removed

    def isWon(self) -> bool:
        return self.state.completedRuns == WINNING_RUNS

    def movableRunLength(self, idx: int) -> int:
        """Length of the face-up, same-suit, descending run anchored at the top of a column."""
        column = self.state.columns[idx]
        if len(column) == 0 or not lastOf(column).faceUp:
            return 0
        count = 1
        for i in range(len(column) - 2, -1, -1):
            lower = column[i]
            if not lower.faceUp or not lower.continuesRun(column[i + 1]):
                break
            count += 1
        return count

    def findHint(self):
        """Greedy: the longest top run of each column, first legal destination in column order."""
        for src in range(COLUMN_COUNT):
            count = self.movableRunLength(src)
            if count == 0:
                continue
            for dest in range(COLUMN_COUNT):
                if dest != src and self.canMove(src, dest, count):
                    return src, dest, count
        return None

    def hint(self) -> str:
        found = self.findHint()
        if found is None:
            return NO_HINT
        src, dest, count = found
        return f"Hint: move {count} card(s) from column {src + 1} to column {dest + 1}"
