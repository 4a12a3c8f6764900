# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

CriterionMode = Literal["measure", "by_time"]


class CriterionEntry(TypedDict):
    mode: CriterionMode
    value: str  # "3", "2.5" or a range like "2-3"
    unit: str  # canonical unit, or the custom text when is_custom_unit
    is_custom_unit: bool
    time_of_day: tuple[int, int]  # (hour, minute), by_time only
