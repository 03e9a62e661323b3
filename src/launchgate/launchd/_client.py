"""launchctl subprocess client.

This module provides the LaunchctlClient class, the production
SupervisorClient that shells out to /bin/launchctl.
"""

import subprocess
from collections.abc import Sequence
from typing import final

import anyio

from ._models import CommandResult

LAUNCHCTL_PATH: str = "/bin/launchctl"


@final
class LaunchctlClient:
    """Runs launchctl sub-commands as child processes.

    Standard error is redirected into standard output so callers see a
    single stream. No timeout is applied: a hung launchctl hangs the caller.
    """

    __slots__ = ("_executable",)

    def __init__(self, executable: str = LAUNCHCTL_PATH) -> None:
        """Initialize the client.

        Args:
            executable: Path to the launchctl binary.
        """
        self._executable = executable

    @property
    def executable(self) -> str:
        """Return the launchctl binary path."""
        return self._executable

    async def run(self, args: Sequence[str]) -> CommandResult:
        """Run ``launchctl <args...>`` and wait for it to exit.

        Args:
            args: Sub-command and its arguments.

        Returns:
            Exit status and combined output. If the process cannot be
            started, the exit status is -1 and the output is the error text.
        """
        command = [self._executable, *args]
        try:
            completed = await anyio.run_process(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as e:
            return CommandResult(exit_status=-1, output=str(e))

        output = completed.stdout.decode("utf-8", errors="replace") if completed.stdout else ""
        return CommandResult(exit_status=completed.returncode, output=output)
