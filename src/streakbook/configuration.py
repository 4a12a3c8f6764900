# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "streakbook"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_ID_MAP_PATH: Path = DATA_PATH / "id_map.yaml"
DATA_HABITS_DIR: Path = DATA_PATH / "habits"
DATA_DAILY_LOGS_DIR: Path = DATA_PATH / "daily_logs"
DATA_HABIT_GROUPS_DIR: Path = DATA_PATH / "habit_groups"
DATA_JOURNAL_NOTES_DIR: Path = DATA_PATH / "journal_notes"


class Configuration(TypedDict):
    show_header: bool
    data_path: Optional[str]
    clear_ids_on_view: bool
    good_day_streak_cap: int
    rate_window_days: int
    log_level: NotRequired[str]
    wake_time: NotRequired[str]  # HH:mm
    bed_time: NotRequired[str]  # HH:mm


DEFAULT_CONFIGURATION: Configuration = {
    "show_header": True,
    "data_path": None,
    "clear_ids_on_view": True,
    "good_day_streak_cap": 365,
    "rate_window_days": 30,
    "log_level": "WARNING",
    "wake_time": "07:00",
    "bed_time": "23:00",
}


def set_data_path(data_path: Path) -> None:
    """Point every data location at data_path."""
    global \
        DATA_PATH, \
        DATA_ID_MAP_PATH, \
        DATA_HABITS_DIR, \
        DATA_DAILY_LOGS_DIR, \
        DATA_HABIT_GROUPS_DIR, \
        DATA_JOURNAL_NOTES_DIR

    DATA_PATH = data_path
    DATA_ID_MAP_PATH = DATA_PATH / "id_map.yaml"
    DATA_HABITS_DIR = DATA_PATH / "habits"
    DATA_DAILY_LOGS_DIR = DATA_PATH / "daily_logs"
    DATA_HABIT_GROUPS_DIR = DATA_PATH / "habit_groups"
    DATA_JOURNAL_NOTES_DIR = DATA_PATH / "journal_notes"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are used.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
