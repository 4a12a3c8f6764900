# SPDX-License-Identifier: MIT


class StreakbookError(Exception):
    """Base class for errors surfaced to callers of the habit engine."""

    pass


class ValidationError(StreakbookError):
    """Raised when construction or mutation input is malformed.

    Raised before any state is changed.
    """

    pass


class NotFoundError(StreakbookError):
    """Raised when a habit, group or note id does not exist."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        super().__init__(f"No {entity_type} with id '{entity_id}'")
        self.entity_type = entity_type
        self.entity_id = entity_id
