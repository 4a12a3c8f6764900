"""View state shared by report renderers."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# Header visibility in reports, shown by default
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    """Get whether headers should be displayed in reports.

    Returns:
        True if headers should be shown, False otherwise
    """
    return _show_header_var.get()
