# SPDX-License-Identifier: MIT

from contextvars import ContextVar
from typing import Optional

from rich import print
from rich.padding import Padding

from studianta.color import HEADER_COLOR, SUB_HEADER_COLOR
from studianta.configuration import APP_NAME

# Set from config at startup and by --no-header for a single invocation
_show_header: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header.set(value)


def get_show_header() -> bool:
    return _show_header.get()


def header(sub_header: Optional[str] = None) -> None:
    """Print the application name above a view, unless headers are turned off.

    Args:
        sub_header: Name of the view being shown
    """
    if not get_show_header():
        return

    print(Padding(f"[{HEADER_COLOR}]{APP_NAME}[/{HEADER_COLOR}]", (1, 0, 0, 1)))
    if sub_header is not None:
        print(Padding(f"[{SUB_HEADER_COLOR}]{sub_header}[/{SUB_HEADER_COLOR}]", (0, 1)))
