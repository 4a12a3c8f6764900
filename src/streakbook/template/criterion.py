# SPDX-License-Identifier: MIT

from streakbook.model.criterion import CriterionEntry

DEFAULT_TIME_OF_DAY = (7, 0)


def get_criterion_template() -> CriterionEntry:
    return {
        "mode": "measure",
        "value": "",
        "unit": "",
        "is_custom_unit": False,
        "time_of_day": DEFAULT_TIME_OF_DAY,
    }
