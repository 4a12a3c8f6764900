# SPDX-License-Identifier: MIT

from functools import wraps
from typing import Any, Callable, TypeVar

from streakbook import state as app_state
from streakbook.repository.id_map import ID_MAP_REPO

F = TypeVar("F", bound=Callable[..., Any])


def clear_id_map(func: F) -> F:
    """Reset the short ids before a listing command when configured to."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if app_state.get_clear_ids():
            ID_MAP_REPO.clear_ids()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
