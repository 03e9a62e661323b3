"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- JSON output formatting
- Console utilities for error handling
- Manager construction from the CLI context
"""

from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Never

from launchgate.config import ConfigResolver, JsonConfigProvider
from launchgate.launchd import GatewayLaunchAgentManager, LaunchctlClient
from launchgate.utils import get_project_root_override

if TYPE_CHECKING:
    from rich.console import Console

    from launchgate.cli._context import CLIContext

__all__ = [
    "ExitCode",
    "create_manager",
    "exit_with_error",
    "format_json",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Standard exit codes for launchgate CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    NOT_LOADED = 3
    MISSING_EXECUTABLE = 4
    BOOTSTRAP_FAILED = 5


def format_json(data: dict[str, Any], *, indent: bool = True) -> str:  # pyright: ignore[reportExplicitAny]
    """Format data as JSON.

    Args:
        data: Dictionary to format as JSON.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    import orjson

    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def get_error_console() -> "Console":
    """Get a Rich console configured for error output to stderr."""
    from rich.console import Console

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.LOAD_ERROR,
    *,
    console: "Console | None" = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use.
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(code)


def create_manager(
    ctx: "CLIContext",
    *,
    project_root: Path | None = None,
) -> GatewayLaunchAgentManager:
    """Build a GatewayLaunchAgentManager from the CLI context.

    Args:
        ctx: Current CLI context.
        project_root: Development checkout to run the gateway from. Defaults
            to CLAWDBOT_PROJECT_ROOT.

    Returns:
        A manager using the context's client (or launchctl) and config file.
    """
    client = ctx.client if ctx.client is not None else LaunchctlClient()
    provider = JsonConfigProvider(ctx.config_path, logger=ctx.logger)
    if project_root is None:
        project_root = get_project_root_override()
    return GatewayLaunchAgentManager(
        client,
        ConfigResolver(provider),
        project_root=project_root,
        logger=ctx.logger,
    )
