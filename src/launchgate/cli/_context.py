# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for dataclass field
"""CLI context for global state management.

The CLIContext is set once at CLI startup by the global option handler and
made available to all commands via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.console import Console
    from structlog.typing import FilteringBoundLogger

    from launchgate.launchd import SupervisorClient


class OutputFormat(StrEnum):
    """Supported output formats for commands."""

    JSON = "json"
    TABLE = "table"


_current_cli_context: contextvars.ContextVar["CLIContext | None"] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with options and collaborators.

    Attributes:
        config_path: Explicit config file path from --config, if given.
        config_error: Error message if config loading failed.
        verbose: Enable verbose output with additional details.
        logger: Structured logger for CLI commands (writes to file only).
        client: launchctl client override. None means the real launchctl.
        console: Console for rich output. None means a fresh stdout console.
    """

    config_path: Path | None = None
    config_error: str | None = None
    verbose: bool = False
    logger: "FilteringBoundLogger | None" = field(default=None, repr=False)
    client: "SupervisorClient | None" = field(default=None, repr=False)
    console: "Console | None" = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> "CLIContext":
        """Get current active CLIContext, or a default one if not set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls()

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        """Set the current active CLIContext.

        Args:
            ctx: The CLIContext to set as current.
        """
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context."""
        _current_cli_context.set(None)
