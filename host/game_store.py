import json
import logging
import time
from pathlib import Path

from tableau.Core import TableauState, decodeState, encodeState

logger = logging.getLogger(__name__)

SLOT_COUNT = 3
SAVE_PREFIX = "savegame_slot"
SAVE_SUFFIX = ".json"
FORMAT_VERSION = 1


def _slot_path(slot: int) -> Path:
    return Path(__file__).with_name(f"{SAVE_PREFIX}{slot}{SAVE_SUFFIX}")


def _valid_slot(slot: int) -> int:
    try:
        slot_int = int(slot)
    except (TypeError, ValueError):
        slot_int = 1
    if slot_int < 1:
        slot_int = 1
    if slot_int > SLOT_COUNT:
        slot_int = SLOT_COUNT
    return slot_int


def has_saved_game(slot: int = 1) -> bool:
    path = _slot_path(_valid_slot(slot))
    return path.exists() and path.is_file()


def save_game(state: TableauState, slot: int = 1) -> bool:
    path = _slot_path(_valid_slot(slot))
    try:
        # Encode fully before touching the file so a failure leaves both state and file alone.
        text = json.dumps(
            {
                "version": FORMAT_VERSION,
                "date": time.strftime("%Y-%m-%d %H:%M:%S", time.localtime()),
                "state": encodeState(state),
            },
            ensure_ascii=False,
        )
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except (OSError, TypeError, ValueError, AttributeError):
        logger.exception("Failed to save game to %s", path.name)
        return False
    logger.info("Saved game to %s", path.name)
    return True


def load_game(slot: int = 1) -> TableauState | None:
    path = _slot_path(_valid_slot(slot))
    if not path.exists() or not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict) or data.get("version") != FORMAT_VERSION:
            raise ValueError("unsupported save format")
        state = decodeState(data.get("state"))
    except (OSError, ValueError) as e:
        logger.warning("Could not load %s: %s", path.name, e)
        return None
    logger.info("Loaded game from %s", path.name)
    return state


def clear_game(slot: int = 1) -> bool:
    path = _slot_path(_valid_slot(slot))
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.exception("Failed to remove %s", path.name)
        return False
    return True


def list_slot_status() -> list[dict]:
    rows = []
    for slot in range(1, SLOT_COUNT + 1):
        path = _slot_path(slot)
        exists = path.exists() and path.is_file()
        rows.append({"slot": slot, "exists": exists, "path": str(path.name)})
    return rows


class GameStore:
    """Persistence collaborator bound to one save slot."""

    def __init__(self, slot: int = 1):
        self.slot = _valid_slot(slot)

    def save(self, state: TableauState) -> bool:
        return save_game(state, self.slot)

    def load(self) -> TableauState | None:
        return load_game(self.slot)

    def exists(self) -> bool:
        return has_saved_game(self.slot)

    def clear(self) -> bool:
        return clear_game(self.slot)
