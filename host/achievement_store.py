import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ACHIEVEMENTS_PATH = Path(__file__).with_name("achievements.json")


@dataclass
class Achievement:
    id: str
    name: str
    description: str
    requiredWins: int
    unlocked: bool = False


def default_achievements() -> list[Achievement]:
    return [
        Achievement("newbie", "Card Novice", "Win 3 games", 3),
        Achievement("master", "Card Master", "Win 10 games", 10),
        Achievement("king", "Card King", "Win 50 games", 50),
    ]


def _as_int(value, default=0):
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _parse_achievement(raw) -> Achievement | None:
    if not isinstance(raw, dict):
        return None
    ach_id = raw.get("id")
    if not isinstance(ach_id, str) or not ach_id:
        return None
    return Achievement(
        id=ach_id,
        name=str(raw.get("name", ach_id)),
        description=str(raw.get("description", "")),
        requiredWins=max(0, _as_int(raw.get("requiredWins"))),
        unlocked=raw.get("unlocked") is True,
    )


class AchievementTracker:
    """
    Win counter with win-count achievements, persisted as JSON.
    The owner calls open() at start-up and close() at shutdown (or uses it as a context manager).
    """

    def __init__(self, path: Path = None):
        self.path = Path(path) if path is not None else ACHIEVEMENTS_PATH
        self._total_wins = 0
        self._achievements: list[Achievement] = []
        self._opened = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def open(self):
        if self._opened:
            return self
        self._opened = True
        if not self.path.exists():
            self._reset_defaults()
            self.save()
            return self
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Unreadable achievements file %s: %s", self.path.name, e)
            self._reset_defaults()
            return self
        if not isinstance(data, dict):
            self._reset_defaults()
            return self
        self._total_wins = max(0, _as_int(data.get("totalWins")))
        raw = data.get("achievements")
        parsed = [_parse_achievement(a) for a in raw] if isinstance(raw, list) else []
        self._achievements = [a for a in parsed if a is not None]
        if not self._achievements:
            self._achievements = default_achievements()
        return self

    def close(self):
        if not self._opened:
            return
        self.save()
        self._opened = False

    def _require_open(self):
        if not self._opened:
            raise RuntimeError("achievement tracker is not open")

    def _reset_defaults(self):
        self._achievements = default_achievements()
        self._total_wins = 0

    def save(self) -> bool:
        data = {
            "totalWins": self._total_wins,
            "achievements": [asdict(a) for a in self._achievements],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError:
            logger.exception("Failed to write %s", self.path.name)
            return False
        return True

    @property
    def total_wins(self) -> int:
        self._require_open()
        return self._total_wins

    def achievements(self) -> list[Achievement]:
        self._require_open()
        return list(self._achievements)

    def unlocked(self) -> list[Achievement]:
        return [a for a in self.achievements() if a.unlocked]

    def locked(self) -> list[Achievement]:
        return [a for a in self.achievements() if not a.unlocked]

    def record_win(self) -> tuple[int, list[Achievement]]:
        self._require_open()
        self._total_wins += 1
        newly = []
        for a in self._achievements:
            if not a.unlocked and self._total_wins >= a.requiredWins:
                a.unlocked = True
                newly.append(a)
        for a in newly:
            logger.info("Achievement unlocked: %s", a.id)
        self.save()
        return self._total_wins, newly

    def reset(self):
        self._require_open()
        self._total_wins = 0
        for a in self._achievements:
            a.unlocked = False
        self.save()
