# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""Gateway launch agent commands."""

from pathlib import Path
from typing import Annotated

import anyio
from cyclopts import Parameter
from rich.console import Console
from rich.table import Table

from launchgate.cli._context import CLIContext, OutputFormat
from launchgate.exceptions import BootstrapError, GatewayExecutableMissingError
from launchgate.launchd import DEFAULT_GATEWAY_PORT

from ._shared import ExitCode, create_manager, exit_with_error, format_json


def status() -> None:
    """Show whether the gateway launch agent is installed and loaded.

    Exits with status 3 when the agent is not loaded.
    """
    ctx = CLIContext.get_current()
    manager = create_manager(ctx)
    loaded = anyio.run(manager.status)

    if not loaded:
        print(f"{manager.label}: not loaded")
        raise SystemExit(ExitCode.NOT_LOADED)

    print(f"{manager.label}: loaded")
    if ctx.verbose:
        print(f"  plist: {manager.plist_path}")
        snapshot = anyio.run(manager.snapshot)
        if snapshot is not None:
            print(f"  pid: {snapshot.pid if snapshot.pid is not None else '-'}")
            print(f"  port: {snapshot.port if snapshot.port is not None else '-'}")
            print(f"  bind: {snapshot.bind or '-'}")


def enable(
    *,
    bundle: Annotated[Path, Parameter(help="Path to the installed .app bundle")],
    port: Annotated[int, Parameter(help="Gateway port")] = DEFAULT_GATEWAY_PORT,
    project_root: Annotated[
        Path | None,
        Parameter(name="--project-root", help="Run the gateway from a development checkout"),
    ] = None,
) -> None:
    """Install the gateway launch agent and make sure it is running.

    Args:
        bundle: Path to the installed .app bundle.
        port: Gateway port.
        project_root: Development checkout to run the gateway from.
    """
    ctx = CLIContext.get_current()
    manager = create_manager(ctx, project_root=project_root)

    try:
        anyio.run(manager.enable, bundle, port)
    except GatewayExecutableMissingError as e:
        exit_with_error(str(e), ExitCode.MISSING_EXECUTABLE)
    except BootstrapError as e:
        exit_with_error(str(e), ExitCode.BOOTSTRAP_FAILED)

    print(f"Enabled {manager.label} on port {port} (bind {manager.desired_bind()})")


def disable() -> None:
    """Unload the gateway launch agent and remove its plist."""
    ctx = CLIContext.get_current()
    manager = create_manager(ctx)
    anyio.run(manager.disable)
    print(f"Disabled {manager.label}")


def kickstart() -> None:
    """Force-restart the gateway job."""
    ctx = CLIContext.get_current()
    manager = create_manager(ctx)
    anyio.run(manager.kickstart)
    print(f"Restart requested for {manager.label}")


def snapshot(
    *,
    output_format: Annotated[
        OutputFormat, Parameter(name=["--format", "-f"], help="Output format")
    ] = OutputFormat.TABLE,
) -> None:
    """Show the live gateway job as reported by launchctl.

    Exits with status 3 when launchd does not know the job.

    Args:
        output_format: Output format (json or table).
    """
    ctx = CLIContext.get_current()
    manager = create_manager(ctx)
    job = anyio.run(manager.snapshot)
    if job is None:
        exit_with_error(f"{manager.label} is not loaded", ExitCode.NOT_LOADED)

    if output_format == OutputFormat.JSON:
        print(
            format_json(
                {"label": manager.label, "pid": job.pid, "port": job.port, "bind": job.bind}
            )
        )
        return

    table = Table(title=manager.label)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("pid", str(job.pid) if job.pid is not None else "-")
    table.add_row("port", str(job.port) if job.port is not None else "-")
    table.add_row("bind", job.bind or "-")
    console = ctx.console if ctx.console is not None else Console()
    console.print(table)


def plist(
    *,
    bundle: Annotated[Path, Parameter(help="Path to the installed .app bundle")],
    port: Annotated[int, Parameter(help="Gateway port")] = DEFAULT_GATEWAY_PORT,
) -> None:
    """Print the property list an enable would write, without writing it.

    Args:
        bundle: Path to the installed .app bundle.
        port: Gateway port.
    """
    ctx = CLIContext.get_current()
    manager = create_manager(ctx)
    print(manager.render_manifest(bundle, port), end="")
