# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from streakbook import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if configuration.APP_CONFIG_PATH.is_file():
            self._config = load(
                configuration.APP_CONFIG_PATH.read_text(), Loader=Loader
            )
        if self._config is None:
            self._config = deepcopy(configuration.DEFAULT_CONFIGURATION)
            self.is_dirty = True
            return

        # Migration: fill settings added after the file was written
        for key, value in configuration.DEFAULT_CONFIGURATION.items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]
                self.is_dirty = True

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        show_header: Optional[bool] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        clear_ids_on_view: Optional[bool] = None,
        good_day_streak_cap: Optional[int] = None,
        rate_window_days: Optional[int] = None,
        log_level: Optional[str] = None,
        wake_time: Optional[str] = None,
        bed_time: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if show_header is not None:
            self.config["show_header"] = show_header
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if clear_ids_on_view is not None:
            self.config["clear_ids_on_view"] = clear_ids_on_view
        if good_day_streak_cap is not None:
            self.config["good_day_streak_cap"] = good_day_streak_cap
        if rate_window_days is not None:
            self.config["rate_window_days"] = rate_window_days
        if log_level is not None:
            self.config["log_level"] = log_level
        if wake_time is not None:
            self.config["wake_time"] = wake_time
        if bed_time is not None:
            self.config["bed_time"] = bed_time


CONFIGURATION_REPO = ConfigurationRepository()
