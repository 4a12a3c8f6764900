# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from streakbook import configuration
from streakbook import state as app_state
from streakbook.logger import setup_logging
from streakbook.model.id_map import IdMap
from streakbook.repository.configuration import CONFIGURATION_REPO
from streakbook.repository.journal_note import JOURNAL_NOTE_REPO
from streakbook.service.journal import lock_expired_notes
from streakbook.template.id_map import get_id_map_template
from streakbook.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    setup_logging(config.get("log_level", "WARNING"))
    view_state.set_show_header(config["show_header"])
    app_state.set_clear_ids(config["clear_ids_on_view"])

    lock_expired_notes(JOURNAL_NOTE_REPO.get_all_journal_notes())


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.write_text(
            dump(dict(configuration.DEFAULT_CONFIGURATION), Dumper=Dumper)
        )


def __ensure_data_files() -> None:
    if not configuration.DATA_ID_MAP_PATH.is_file():
        id_map: IdMap = get_id_map_template()
        configuration.DATA_ID_MAP_PATH.write_text(dump(id_map, Dumper=Dumper))

    # Directory-based entity stores (one file per entity)
    for directory in (
        configuration.DATA_HABITS_DIR,
        configuration.DATA_DAILY_LOGS_DIR,
        configuration.DATA_HABIT_GROUPS_DIR,
        configuration.DATA_JOURNAL_NOTES_DIR,
    ):
        if not directory.is_dir():
            directory.mkdir(parents=True, exist_ok=True)
            (directory / ".gitkeep").touch()
