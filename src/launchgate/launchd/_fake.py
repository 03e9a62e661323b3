"""Fake launchctl client for testing.

This module provides a FakeLaunchctlClient class that implements
SupervisorClient without running any process. It records every command and
answers from a per-sub-command response table.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from ._models import CommandResult


@dataclass(slots=True)
class FakeLaunchctlClient:
    """Fake launchctl for testing.

    Responses are keyed by sub-command (the first argument). Sub-commands
    without a configured response succeed with empty output.

    Example:
        >>> client = FakeLaunchctlClient()
        >>> client.set_response("bootstrap", 5, "Bootstrap failed: 5: Input/output error")
        >>> result = await client.run(["bootstrap", "gui/501", "/tmp/x.plist"])
        >>> client.subcommands
        ['bootstrap']
    """

    responses: dict[str, CommandResult] = field(default_factory=dict)
    calls: list[tuple[str, ...]] = field(default_factory=list)

    async def run(self, args: Sequence[str]) -> CommandResult:
        """Record the command and return the configured response."""
        call = tuple(args)
        self.calls.append(call)
        subcommand = call[0] if call else ""
        return self.responses.get(subcommand, CommandResult(exit_status=0))

    # =========================================================================
    # Test Helpers
    # =========================================================================

    def set_response(self, subcommand: str, exit_status: int, output: str = "") -> None:
        """Configure the result returned for a sub-command.

        Args:
            subcommand: launchctl sub-command, e.g. ``"print"``.
            exit_status: Exit status to report.
            output: Combined output to report.
        """
        self.responses[subcommand] = CommandResult(exit_status=exit_status, output=output)

    def set_job_loaded(self, print_output: str) -> None:
        """Make ``print`` succeed with the given job description."""
        self.set_response("print", 0, print_output)

    def set_job_missing(self) -> None:
        """Make ``print`` fail the way launchctl does for an unknown job."""
        self.set_response(
            "print",
            113,
            'Could not find service "com.clawdbot.gateway" in domain for port',
        )

    @property
    def subcommands(self) -> list[str]:
        """Return the sub-command of every recorded call, in order."""
        return [call[0] for call in self.calls if call]

    def reset(self) -> None:
        """Forget recorded calls, keeping configured responses."""
        self.calls.clear()
