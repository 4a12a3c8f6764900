# SPDX-License-Identifier: MIT

from streakbook.model.id_map import IdMap


def get_id_map_template() -> IdMap:
    return {
        "habits": {"synthetic_to_real": {}, "real_to_synthetic": {}},
        "habit_groups": {"synthetic_to_real": {}, "real_to_synthetic": {}},
    }
