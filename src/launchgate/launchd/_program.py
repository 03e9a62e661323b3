"""Gateway executable resolution.

Production installs run the gateway binary embedded in the app bundle.
Development checkouts can point at a project root instead, in which case a
locally built CLI or a JavaScript runtime plus the built entrypoint is used.
"""

import os
import shutil
from collections.abc import Callable
from pathlib import Path

from ._models import GatewayProgram

PRODUCTION_SUBCOMMAND: str = "gateway-daemon"
DEVELOPMENT_SUBCOMMAND: str = "gateway"

_RUNTIMES: tuple[str, ...] = ("node", "bun")

_SYSTEM_PATHS: tuple[str, ...] = (
    "/opt/homebrew/bin",
    "/usr/local/bin",
    "/usr/bin",
    "/bin",
    "/usr/sbin",
    "/sbin",
)


def relay_dir(bundle_path: str | Path) -> Path:
    """Return the directory holding the embedded gateway inside the bundle."""
    return Path(bundle_path) / "Contents" / "Resources" / "Relay"


def gateway_executable_path(bundle_path: str | Path) -> Path:
    """Return the embedded gateway binary path inside the bundle."""
    return relay_dir(bundle_path) / "clawdbot"


def is_executable_file(path: str | Path) -> bool:
    """Check that a path is a regular file the current user may execute."""
    return os.path.isfile(path) and os.access(path, os.X_OK)  # noqa: PTH113


def _gateway_flags(port: int, bind: str) -> tuple[str, ...]:
    return ("--port", str(port), "--bind", bind)


def resolve_gateway_program(
    bundle_path: str | Path,
    port: int,
    bind: str,
    *,
    project_root: Path | None = None,
    which: Callable[[str], str | None] = shutil.which,
) -> GatewayProgram:
    """Resolve the gateway invocation for a launch agent.

    Resolution order with a development project root:
    1. ``<root>/node_modules/.bin/clawdbot gateway ...``
    2. ``<runtime> <root>/dist/index.js gateway ...`` using node or bun
    3. The bundle binary

    Without a project root the bundle binary is always used.

    Args:
        bundle_path: Path to the installed .app bundle.
        port: Gateway port.
        bind: Gateway bind mode.
        project_root: Development checkout to run from, if any.
        which: Executable lookup, replaceable in tests.

    Returns:
        The executable to verify and the full argv.
    """
    flags = _gateway_flags(port, bind)

    if project_root is not None:
        local_bin = project_root / "node_modules" / ".bin" / "clawdbot"
        if is_executable_file(local_bin):
            return GatewayProgram(
                executable=str(local_bin),
                arguments=(str(local_bin), DEVELOPMENT_SUBCOMMAND, *flags),
            )

        entrypoint = project_root / "dist" / "index.js"
        if entrypoint.is_file():
            for name in _RUNTIMES:
                runtime = which(name)
                if runtime is not None:
                    return GatewayProgram(
                        executable=runtime,
                        arguments=(
                            runtime,
                            str(entrypoint),
                            DEVELOPMENT_SUBCOMMAND,
                            *flags,
                        ),
                    )

    gateway_bin = str(gateway_executable_path(bundle_path))
    return GatewayProgram(
        executable=gateway_bin,
        arguments=(gateway_bin, PRODUCTION_SUBCOMMAND, *flags),
    )


def preferred_path_entries(
    bundle_path: str | Path,
    *,
    home: Path | None = None,
) -> list[str]:
    """Build the PATH directories for the gateway job.

    The bundle's relay directory comes first so the embedded tools win, then
    per-user tool directories, then the system directories. Duplicates are
    dropped, keeping the first occurrence.

    Args:
        bundle_path: Path to the installed .app bundle.
        home: Home directory. Defaults to the current user's.

    Returns:
        Ordered, de-duplicated directory list.
    """
    home_dir = home if home is not None else Path.home()
    candidates = [
        str(relay_dir(bundle_path)),
        str(home_dir / ".local" / "bin"),
        str(home_dir / ".bun" / "bin"),
        str(home_dir / "Library" / "pnpm"),
        *_SYSTEM_PATHS,
    ]
    return list(dict.fromkeys(candidates))
