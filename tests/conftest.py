"""Shared fixtures for streakbook tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from streakbook import configuration
from streakbook.repository.configuration import CONFIGURATION_REPO
from streakbook.repository.daily_log import DAILY_LOG_REPO
from streakbook.repository.habit import HABIT_REPO
from streakbook.repository.habit_group import HABIT_GROUP_REPO
from streakbook.repository.id_map import ID_MAP_REPO
from streakbook.repository.journal_note import JOURNAL_NOTE_REPO

REPOSITORIES = [
    CONFIGURATION_REPO,
    ID_MAP_REPO,
    HABIT_REPO,
    DAILY_LOG_REPO,
    HABIT_GROUP_REPO,
    JOURNAL_NOTE_REPO,
]


def reset_repositories() -> None:
    """Drop every repository's in-memory state so the next read reloads from disk."""
    for repository in REPOSITORIES:
        repository.__init__()  # type: ignore[misc]


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point configuration and data storage at a temporary directory."""
    original_data_path = configuration.DATA_PATH
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", tmp_path / "config.yaml")

    configuration.set_data_path(tmp_path / "data")
    for directory in (
        configuration.DATA_HABITS_DIR,
        configuration.DATA_DAILY_LOGS_DIR,
        configuration.DATA_HABIT_GROUPS_DIR,
        configuration.DATA_JOURNAL_NOTES_DIR,
    ):
        directory.mkdir(parents=True)
    reset_repositories()

    yield tmp_path / "data"

    reset_repositories()
    configuration.set_data_path(original_data_path)
