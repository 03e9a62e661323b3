"""The command-line interface for launchgate."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import App, Parameter
from rich.console import Console

from launchgate.config import safe_load_config
from launchgate.utils import LogFormatType, create_cli_logger

from ._commands import register_commands
from ._context import CLIContext

if TYPE_CHECKING:
    from launchgate.launchd import SupervisorClient

_HELP = "Manage the launchd agent that keeps the clawdbot gateway running."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
    client: "SupervisorClient | None" = None,
) -> App:
    """Create the launchgate CLI application.

    Args:
        console: Console for regular cyclopts output.
        error_console: Console for cyclopts error output.
        exit_on_error: Exit on parse errors instead of raising.
        client: launchctl client override, used by tests.

    Returns:
        The configured application. Invoke ``app.meta`` to honor global options.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="launchgate",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        log_level: Annotated[
            str, Parameter(name="--log-level", help="Log level for the CLI log")
        ] = "info",
        log_format: Annotated[
            LogFormatType, Parameter(name="--log-format", help="Log format (json or text)")
        ] = "json",
        log_file: Annotated[
            str, Parameter(name="--log-file", help="Write CLI logs to this file")
        ] = "",
    ) -> None:
        """Launch launchgate CLI with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output with additional details.
            config: Explicit path to config file.
            log_level: Log level threshold for the CLI log.
            log_format: CLI log format.
            log_file: CLI log file, defaulting to the launchgate log.
        """
        _, config_error = safe_load_config(config_path=config)

        cli_logger = create_cli_logger(
            level=log_level,
            log_format=log_format,
            log_file=log_file,
            command=tokens[0] if tokens else "",
        )

        ctx = CLIContext(
            config_path=config,
            config_error=config_error,
            verbose=verbose,
            logger=cli_logger,
            client=client,
            console=console,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `launchgate` CLI."""
    create_app().meta()


if __name__ == "__main__":
    main()
