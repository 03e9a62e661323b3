"""Property list rendering for the gateway launch agent.

The manifest is produced from a template rather than a generic serializer so
the output stays byte-stable across runs. Program arguments, environment
variable names and environment values pass through escape_plist_value; label,
paths and booleans are controlled inputs and are written verbatim.
"""

import tempfile
from collections.abc import Sequence
from pathlib import Path

from launchgate.config import PASSWORD_ENV, TOKEN_ENV
from launchgate.exceptions import ManifestWriteError

from ._models import IMAGE_BACKEND, IMAGE_BACKEND_ENV, GatewayProgram, ServiceDescriptor

_PLIST_HEADER = """\
<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" \
"http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>"""

_PLIST_FOOTER = """\
</dict>
</plist>
"""

# Order matters: "&" first, or the entities added later get double-escaped.
_PLIST_ESCAPES: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_plist_value(raw: str) -> str:
    """Escape a string for use as XML character data in a property list.

    Args:
        raw: Unescaped value.

    Returns:
        The value with ``& < > " '`` replaced by their XML entities.
    """
    escaped = raw
    for char, entity in _PLIST_ESCAPES:
        escaped = escaped.replace(char, entity)
    return escaped


def _bool_tag(value: bool) -> str:  # noqa: FBT001
    return "<true/>" if value else "<false/>"


def render_plist(descriptor: ServiceDescriptor) -> str:
    """Render a ServiceDescriptor as a launchd property list.

    Program arguments and both the names and values of environment variables
    are XML-escaped. Label, paths and booleans are written verbatim.

    Args:
        descriptor: Desired job definition.

    Returns:
        The complete XML property list text.
    """
    lines = [
        _PLIST_HEADER,
        "  <key>Label</key>",
        f"  <string>{descriptor.label}</string>",
        "  <key>ProgramArguments</key>",
        "  <array>",
    ]
    lines.extend(
        f"    <string>{escape_plist_value(arg)}</string>"
        for arg in descriptor.program_arguments
    )
    lines.extend([
        "  </array>",
        "  <key>WorkingDirectory</key>",
        f"  <string>{descriptor.working_directory}</string>",
        "  <key>RunAtLoad</key>",
        f"  {_bool_tag(descriptor.run_at_load)}",
        "  <key>KeepAlive</key>",
        f"  {_bool_tag(descriptor.keep_alive)}",
        "  <key>EnvironmentVariables</key>",
        "  <dict>",
    ])
    for name, value in descriptor.environment.items():
        lines.append(f"    <key>{escape_plist_value(name)}</key>")
        lines.append(f"    <string>{escape_plist_value(value)}</string>")
    lines.extend([
        "  </dict>",
        "  <key>StandardOutPath</key>",
        f"  <string>{descriptor.stdout_path}</string>",
        "  <key>StandardErrorPath</key>",
        f"  <string>{descriptor.stderr_path}</string>",
        _PLIST_FOOTER,
    ])
    return "\n".join(lines)


def write_plist(path: Path, content: str) -> None:
    """Write a property list atomically.

    Writes to a temporary file in the same directory, then renames it over
    the target so launchd never reads a partially written manifest.

    Args:
        path: Destination plist path.
        content: Rendered property list.

    Raises:
        ManifestWriteError: If the write fails or the content cannot be
            encoded as UTF-8.
    """
    temp_path: Path | None = None
    try:
        _ = path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            delete=False,
            prefix=f".{path.stem}.",
            suffix=".tmp",
            encoding="utf-8",
        ) as f:
            temp_path = Path(f.name)
            _ = f.write(content)

        # Path.replace() is atomic on POSIX
        _ = temp_path.replace(path)

    except (OSError, UnicodeError) as e:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        msg = f"Failed to write launchd plist: {e}"
        raise ManifestWriteError(msg, path=path, cause=e) from e


def build_gateway_descriptor(  # noqa: PLR0913
    *,
    label: str,
    program: GatewayProgram,
    path_entries: Sequence[str],
    working_directory: str,
    log_path: str,
    token: str | None = None,
    password: str | None = None,
) -> ServiceDescriptor:
    """Assemble the gateway job definition.

    Args:
        label: launchd label for the job.
        program: Resolved gateway invocation.
        path_entries: Directories for the job's PATH, in lookup order.
        working_directory: Working directory for the gateway.
        log_path: Combined stdout/stderr log file.
        token: Gateway token, exported when not None.
        password: Gateway password, exported when not None.

    Returns:
        A descriptor with RunAtLoad and KeepAlive enabled.
    """
    environment = {
        "PATH": ":".join(path_entries),
        IMAGE_BACKEND_ENV: IMAGE_BACKEND,
    }
    if token is not None:
        environment[TOKEN_ENV] = token
    if password is not None:
        environment[PASSWORD_ENV] = password

    return ServiceDescriptor(
        label=label,
        program_arguments=program.arguments,
        environment=environment,
        working_directory=working_directory,
        stdout_path=log_path,
        stderr_path=log_path,
        run_at_load=True,
        keep_alive=True,
    )
