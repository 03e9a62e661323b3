"""launchgate CLI commands."""

from typing import TYPE_CHECKING

from ._agent import disable, enable, kickstart, plist, snapshot, status
from ._shared import (
    ExitCode,
    create_manager,
    exit_with_error,
    format_json,
    get_error_console,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "ExitCode",
    "create_manager",
    "exit_with_error",
    "format_json",
    "get_error_console",
    "register_commands",
]


def register_commands(app: "App") -> None:
    app.command(status, name="status")
    app.command(enable, name="enable")
    app.command(disable, name="disable")
    app.command(kickstart, name="kickstart")
    app.command(snapshot, name="snapshot")
    app.command(plist, name="plist")
