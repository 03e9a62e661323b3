"""Data models for the launchd gateway job.

This module defines the core data types for launch agent management:
- ServiceDescriptor: Desired job definition rendered into a property list
- JobSnapshot: Parsed subset of `launchctl print` output
- CommandResult: Exit status and merged output of a launchctl call
- GatewayProgram: Resolved gateway executable and argv
"""

from dataclasses import dataclass, field

GATEWAY_LAUNCHD_LABEL: str = "com.clawdbot.gateway"
LEGACY_GATEWAY_LAUNCHD_LABEL: str = "com.steipete.clawdbot.gateway"

DEFAULT_GATEWAY_PORT: int = 18789

IMAGE_BACKEND_ENV: str = "CLAWDBOT_IMAGE_BACKEND"
IMAGE_BACKEND: str = "sips"


@dataclass(frozen=True, slots=True)
class ServiceDescriptor:
    """Desired launchd job definition.

    Built fresh for every enable request and written once to the job's
    property list, which launchd then reads at its own discretion.

    Attributes:
        label: Unique launchd label.
        program_arguments: Executable followed by its arguments, in argv order.
        environment: Environment variables for the job, in insertion order.
        working_directory: Working directory for the process.
        stdout_path: File receiving standard output.
        stderr_path: File receiving standard error.
        run_at_load: Start the job as soon as it is loaded.
        keep_alive: Restart the job whenever it exits.
    """

    label: str
    program_arguments: tuple[str, ...]
    environment: dict[str, str] = field(default_factory=dict)
    working_directory: str = ""
    stdout_path: str = ""
    stderr_path: str = ""
    run_at_load: bool = True
    keep_alive: bool = True


@dataclass(frozen=True, slots=True)
class JobSnapshot:
    """Live state of a launchd job as reported by `launchctl print`.

    Every field is independently optional. Jobs written by older releases
    carry no ``--bind`` argument, so a missing bind is not a mismatch.

    Attributes:
        pid: Process ID, if launchd reported one.
        port: Value of the job's ``--port`` argument.
        bind: Lowercased value of the job's ``--bind`` argument.
    """

    pid: int | None = None
    port: int | None = None
    bind: str | None = None

    def matches(self, port: int, bind: str) -> bool:
        """Check whether the live job already runs with the desired settings.

        Args:
            port: Desired gateway port.
            bind: Desired bind mode.

        Returns:
            True if the ports are equal and the live bind is either absent or
            equal to the desired one.
        """
        if self.port != port:
            return False
        if self.bind is None:
            return True
        return self.bind == bind


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a single launchctl invocation.

    Attributes:
        exit_status: Process exit status (-1 if the process could not run).
        output: Standard output and standard error, interleaved.
    """

    exit_status: int
    output: str = ""

    @property
    def ok(self) -> bool:
        """Return True if the command exited with status 0."""
        return self.exit_status == 0

    @property
    def message(self) -> str:
        """Return the output with surrounding whitespace removed."""
        return self.output.strip()


@dataclass(frozen=True, slots=True)
class GatewayProgram:
    """Resolved gateway invocation.

    Attributes:
        executable: Path that must exist and be executable before enabling.
        arguments: Complete argv, starting with the program to run.
    """

    executable: str
    arguments: tuple[str, ...]
