import configparser
from pathlib import Path

from host.game_store import SLOT_COUNT
from host.logger import LOG_LEVELS
from tableau.Core import SUITS_BY_DIFFICULTY

SETTINGS_PATH = Path(__file__).with_name("settings.ini")
SECTION = "game"

DEFAULT_SETTINGS = {
    "suit_count": "1",
    "save_slot": "1",
    "log_level": "INFO",
}


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS})

    try:
        suit_count = int(data["suit_count"])
    except (TypeError, ValueError):
        suit_count = int(DEFAULT_SETTINGS["suit_count"])
    if suit_count not in SUITS_BY_DIFFICULTY:
        suit_count = int(DEFAULT_SETTINGS["suit_count"])
    data["suit_count"] = str(suit_count)

    try:
        slot = int(data["save_slot"])
    except (TypeError, ValueError):
        slot = int(DEFAULT_SETTINGS["save_slot"])
    if slot < 1:
        slot = 1
    if slot > SLOT_COUNT:
        slot = SLOT_COUNT
    data["save_slot"] = str(slot)

    level = str(data["log_level"]).strip().upper()
    if level not in LOG_LEVELS:
        level = DEFAULT_SETTINGS["log_level"]
    data["log_level"] = level
    return data


def load_settings():
    parser = configparser.ConfigParser()
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except configparser.Error:
        return dict(DEFAULT_SETTINGS)
    if SECTION not in parser:
        return dict(DEFAULT_SETTINGS)
    return _sanitize(dict(parser[SECTION]))


def save_settings(settings):
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser[SECTION] = data
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)
    return data
