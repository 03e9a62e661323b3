"""Protocol definitions for the launchd layer.

This module defines the interface that decouples the launch agent manager
from the launchctl binary:
- SupervisorClient: Protocol for executing supervisor sub-commands
"""

from collections.abc import Sequence  # noqa: TC003 - Used in runtime type annotations
from typing import Protocol, runtime_checkable

from ._models import CommandResult  # noqa: TC001 - Used in runtime type annotations


@runtime_checkable
class SupervisorClient(Protocol):
    """Protocol for running supervisor (launchctl) sub-commands.

    Implementations must merge standard output and standard error into a
    single stream; status parsing and bootstrap error messages both read the
    combined text. Calls block until the process exits, with no timeout.
    """

    async def run(self, args: Sequence[str]) -> CommandResult:
        """Run one sub-command.

        Args:
            args: Sub-command and its arguments, e.g. ``["print", "gui/501/x"]``.

        Returns:
            The exit status and merged output. Failure to start the process is
            reported as a result, not raised.
        """
        ...
