"""launchgate exceptions."""

from pathlib import Path  # noqa: TC003 - Used in runtime type annotations


class LaunchgateError(Exception):
    """Base exception for launchgate errors."""


class ConfigError(LaunchgateError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when the persisted configuration cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


# =============================================================================
# Launch Agent Exceptions
# =============================================================================


class LaunchAgentError(LaunchgateError):
    """Base exception for launchd job management errors.

    Attributes:
        label: The launchd label of the job involved, if known.
    """

    def __init__(self, message: str, *, label: str | None = None) -> None:
        """Initialize with error message and job context.

        Args:
            message: Human-readable error message.
            label: The launchd label of the job involved.
        """
        super().__init__(message)
        self.label: str | None = label


class GatewayExecutableMissingError(LaunchAgentError):
    """Raised when the gateway executable is missing or not executable.

    Attributes:
        executable: The path that was checked.
    """

    def __init__(
        self,
        message: str,
        *,
        executable: str,
        label: str | None = None,
    ) -> None:
        """Initialize with error message and the checked executable path.

        Args:
            message: User-facing error message.
            executable: The path that was checked.
            label: The launchd label of the job being enabled.
        """
        super().__init__(message, label=label)
        self.executable: str = executable


class BootstrapError(LaunchAgentError):
    """Raised when `launchctl bootstrap` exits with a non-zero status.

    The message is the trimmed launchctl output, or a fixed fallback when
    launchctl printed nothing.

    Attributes:
        exit_status: The launchctl exit status.
        output: The raw combined launchctl output.
    """

    def __init__(
        self,
        message: str,
        *,
        exit_status: int,
        output: str = "",
        label: str | None = None,
    ) -> None:
        """Initialize with error message and launchctl result context.

        Args:
            message: User-facing error message.
            exit_status: The launchctl exit status.
            output: The raw combined launchctl output.
            label: The launchd label of the job being bootstrapped.
        """
        super().__init__(message, label=label)
        self.exit_status: int = exit_status
        self.output: str = output


class ManifestWriteError(LaunchAgentError):
    """Raised when the launchd property list cannot be written.

    Attributes:
        path: The manifest path that failed to write.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and write context."""
        super().__init__(message)
        self.path: Path = path
        self.cause: Exception | None = cause
