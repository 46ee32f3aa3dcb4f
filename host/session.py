import logging
import random
from dataclasses import dataclass, field

from host.achievement_store import Achievement, AchievementTracker
from host.game_store import GameStore
from tableau.Engine import Engine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnResult:
    moved: bool
    runs_removed: bool = False
    won: bool = False
    total_wins: int | None = None
    unlocked: tuple[Achievement, ...] = field(default_factory=tuple)


class GameSession:
    """
    Drives one game for an interactive host: every accepted move is followed by run
    detection, and the first time the game is won the win is handed to the tracker.
    """

    def __init__(self, engine: Engine, achievements: AchievementTracker, store: GameStore = None):
        self.engine = engine
        self.achievements = achievements
        self.store = store
        self.win_recorded = engine.isWon()

    @staticmethod
    def new(difficulty, achievements: AchievementTracker, store: GameStore = None, rng: random.Random = None):
        engine = Engine.newGame(difficulty, rng)
        logger.info("New game with %d suit(s)", difficulty)
        return GameSession(engine, achievements, store)

    @staticmethod
    def resume(achievements: AchievementTracker, store: GameStore):
        state = store.load()
        if state is None:
            return None
        logger.info("Resumed saved game (score %d)", state.score)
        return GameSession(Engine(state), achievements, store)

    @property
    def state(self):
        return self.engine.state

    def move(self, src: int, dest: int, count: int) -> TurnResult:
        if not self.engine.move(src, dest, count):
            logger.debug("Rejected move %d -> %d (%d)", src, dest, count)
            return TurnResult(moved=False)
        removed = self.engine.checkAndRemoveCompleteRuns()
        if removed:
            logger.debug("Completed runs: %d", self.state.completedRuns)
        if not self.engine.isWon():
            return TurnResult(moved=True, runs_removed=removed)
        if self.win_recorded:
            return TurnResult(moved=True, runs_removed=removed, won=True)
        self.win_recorded = True
        total, unlocked = self.achievements.record_win()
        logger.info("Game won, %d win(s) in total", total)
        return TurnResult(moved=True, runs_removed=removed, won=True, total_wins=total, unlocked=tuple(unlocked))

    def deal(self) -> bool:
        dealt = self.engine.deal()
        if not dealt:
            logger.debug("Deal refused, %d deal(s) left", self.state.remainingDeals)
        return dealt

    def undo(self) -> bool:
        return self.engine.undo()

    def hint(self) -> str:
        return self.engine.hint()

    def save(self) -> bool:
        if self.store is None:
            return False
        return self.store.save(self.state)
