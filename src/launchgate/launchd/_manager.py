"""Gateway launch agent manager.

This module provides the GatewayLaunchAgentManager class that reconciles the
per-user launchd job running the gateway with the desired configuration.

Enabling is idempotent. When launchd already runs the job with the desired
port and bind mode (common right after login, or when enable is triggered by
an unrelated settings change) the job is only re-enabled and kickstarted.
A `bootout` there would kill a gateway that just started and clients
attaching to it would loop on reconnect.
"""

import contextlib
import os
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, final

import anyio

from launchgate.config import DEFAULT_BIND_MODE, BindMode, ConfigResolver
from launchgate.exceptions import (
    BootstrapError,
    GatewayExecutableMissingError,
    ManifestWriteError,
)
from launchgate.utils import (
    create_launchd_logger,
    get_gateway_log_path,
    get_launch_agents_dir,
    get_plist_path,
)

from ._models import (
    DEFAULT_GATEWAY_PORT,
    GATEWAY_LAUNCHD_LABEL,
    LEGACY_GATEWAY_LAUNCHD_LABEL,
    CommandResult,
    GatewayProgram,
    JobSnapshot,
    ServiceDescriptor,
)
from ._parser import parse_snapshot
from ._plist import build_gateway_descriptor, render_plist, write_plist
from ._program import is_executable_file, preferred_path_entries, resolve_gateway_program
from ._protocol import SupervisorClient

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

BOOTSTRAP_FAILED_MESSAGE: str = "Failed to bootstrap gateway launchd job"


@final
class GatewayLaunchAgentManager:
    """Manages the launchd job that keeps the gateway running.

    All collaborators are injected: the launchctl client, the configuration
    resolver, filesystem locations and the logger. The manager holds no
    state between calls; launchd's job table and the plist on disk are the
    only sources of truth.

    Supervisor commands fall into two tiers. Best-effort commands (legacy
    cleanup, bootout, enable, kickstart) log failures and carry on.
    ``bootstrap`` is the only required command and raises BootstrapError.
    """

    __slots__ = (
        "_client",
        "_label",
        "_launch_agents_dir",
        "_legacy_label",
        "_log_path",
        "_logger",
        "_project_root",
        "_resolver",
        "_uid",
        "_working_directory",
    )

    def __init__(  # noqa: PLR0913
        self,
        client: SupervisorClient,
        resolver: ConfigResolver,
        *,
        label: str = GATEWAY_LAUNCHD_LABEL,
        legacy_label: str | None = LEGACY_GATEWAY_LAUNCHD_LABEL,
        launch_agents_dir: Path | None = None,
        log_path: Path | None = None,
        working_directory: Path | None = None,
        uid: int | None = None,
        project_root: Path | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize the manager.

        Args:
            client: Runs launchctl sub-commands.
            resolver: Resolves the desired bind mode, token and password.
            label: launchd label of the gateway job.
            legacy_label: Label used by earlier releases, removed on enable.
                None disables the cleanup.
            launch_agents_dir: Directory holding the plist. Defaults to
                ~/Library/LaunchAgents.
            log_path: Combined stdout/stderr log for the job.
            working_directory: Working directory for the job. Defaults to
                the home directory.
            uid: User whose gui domain hosts the job. Defaults to the
                current user.
            project_root: Development checkout to run the gateway from.
            logger: Structured logger. Defaults to the launchd log file.
        """
        self._client = client
        self._resolver = resolver
        self._label = label
        self._legacy_label = legacy_label
        self._launch_agents_dir = (
            launch_agents_dir if launch_agents_dir is not None else get_launch_agents_dir()
        )
        self._log_path = log_path if log_path is not None else get_gateway_log_path()
        self._working_directory = (
            working_directory if working_directory is not None else Path.home()
        )
        self._uid = uid if uid is not None else os.getuid()
        self._project_root = project_root
        self._logger: "FilteringBoundLogger" = (
            logger if logger is not None else create_launchd_logger()
        )

    # =========================================================================
    # Targets and Paths
    # =========================================================================

    @property
    def label(self) -> str:
        """Return the launchd label of the gateway job."""
        return self._label

    @property
    def plist_path(self) -> Path:
        """Return the path of the gateway job's property list."""
        return get_plist_path(self._label, self._launch_agents_dir)

    @property
    def legacy_plist_path(self) -> Path | None:
        """Return the path of the legacy job's property list, if any."""
        if self._legacy_label is None:
            return None
        return get_plist_path(self._legacy_label, self._launch_agents_dir)

    @property
    def domain_target(self) -> str:
        """Return the launchd domain target, ``gui/<uid>``."""
        return f"gui/{self._uid}"

    @property
    def service_target(self) -> str:
        """Return the launchd service target, ``gui/<uid>/<label>``."""
        return f"{self.domain_target}/{self._label}"

    # =========================================================================
    # Command Tiers
    # =========================================================================

    async def _run_best_effort(
        self,
        args: Sequence[str],
        *,
        event: str,
        quiet: bool = False,
    ) -> CommandResult:
        """Run a command whose failure is logged and otherwise ignored.

        Args:
            args: launchctl arguments.
            event: Log event name used when the command fails.
            quiet: Log failures at debug level instead of warning.

        Returns:
            The command result, for callers that inspect it.
        """
        result = await self._client.run(args)
        if not result.ok:
            log = self._logger.debug if quiet else self._logger.warning
            log(event, exit_status=result.exit_status, output=result.message)
        return result

    async def _run_required(
        self,
        args: Sequence[str],
        *,
        event: str,
        fallback: str,
    ) -> CommandResult:
        """Run a command whose failure is surfaced to the caller.

        Args:
            args: launchctl arguments.
            event: Log event name used when the command fails.
            fallback: Error message when launchctl printed nothing.

        Returns:
            The successful command result.

        Raises:
            BootstrapError: If the command exits with a non-zero status.
        """
        result = await self._client.run(args)
        if result.ok:
            return result

        message = result.message or fallback
        self._logger.error(event, exit_status=result.exit_status, output=result.message)
        raise BootstrapError(
            message,
            exit_status=result.exit_status,
            output=result.output,
            label=self._label,
        )

    # =========================================================================
    # Desired State
    # =========================================================================

    def desired_bind(self) -> BindMode:
        """Return the bind mode to run with, defaulting to loopback."""
        bind = self._resolver.resolve_bind_mode()
        return bind if bind is not None else DEFAULT_BIND_MODE

    def resolve_program(
        self,
        bundle_path: str | Path,
        port: int,
        bind: BindMode,
    ) -> GatewayProgram:
        """Resolve the gateway invocation, honoring the development project root."""
        return resolve_gateway_program(
            bundle_path, port, bind.value, project_root=self._project_root
        )

    def build_descriptor(
        self,
        bundle_path: str | Path,
        port: int,
        bind: BindMode,
        *,
        program: GatewayProgram | None = None,
    ) -> ServiceDescriptor:
        """Build the job definition for the given bundle, port and bind mode.

        Args:
            bundle_path: Path to the installed .app bundle.
            port: Gateway port.
            bind: Gateway bind mode.
            program: Already resolved invocation. Resolved here when None.
        """
        if program is None:
            program = self.resolve_program(bundle_path, port, bind)
        return build_gateway_descriptor(
            label=self._label,
            program=program,
            path_entries=preferred_path_entries(bundle_path),
            working_directory=str(self._working_directory),
            log_path=str(self._log_path),
            token=self._resolver.resolve_token(),
            password=self._resolver.resolve_password(),
        )

    def render_manifest(
        self,
        bundle_path: str | Path,
        port: int = DEFAULT_GATEWAY_PORT,
    ) -> str:
        """Render the plist an enable request would write, without writing it."""
        return render_plist(self.build_descriptor(bundle_path, port, self.desired_bind()))

    async def _write_manifest(self, descriptor: ServiceDescriptor) -> None:
        path = self.plist_path
        try:
            await anyio.to_thread.run_sync(write_plist, path, render_plist(descriptor))
        except ManifestWriteError as e:
            self._logger.error("launchd_plist_write_failed", path=str(path), error=str(e))

    # =========================================================================
    # Live State
    # =========================================================================

    async def snapshot(self) -> JobSnapshot | None:
        """Query launchd for the live job.

        Returns:
            The parsed job state, or None if launchd does not know the job.
        """
        result = await self._client.run(["print", self.service_target])
        if not result.ok:
            return None
        return parse_snapshot(result.output)

    async def status(self) -> bool:
        """Check whether the gateway launch agent is installed and loaded.

        Both the plist and the loaded job are required, so a stale plist
        whose job was removed behind our back reports False.
        """
        if not self.plist_path.exists():
            return False
        result = await self._client.run(["print", self.service_target])
        return result.ok

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def _ensure_enabled(self) -> None:
        _ = await self._run_best_effort(
            ["enable", self.service_target],
            event="launchd_enable_failed",
        )

    async def _remove_legacy_job(self) -> None:
        legacy_plist = self.legacy_plist_path
        if self._legacy_label is None or legacy_plist is None:
            return
        _ = await self._run_best_effort(
            ["bootout", f"{self.domain_target}/{self._legacy_label}"],
            event="launchd_legacy_bootout_failed",
            quiet=True,
        )
        with contextlib.suppress(OSError):
            legacy_plist.unlink(missing_ok=True)

    async def set_enabled(
        self,
        enabled: bool,  # noqa: FBT001
        bundle_path: str | Path,
        port: int = DEFAULT_GATEWAY_PORT,
    ) -> None:
        """Enable or disable the gateway launch agent.

        Args:
            enabled: Desired state.
            bundle_path: Path to the installed .app bundle.
            port: Gateway port.

        Raises:
            GatewayExecutableMissingError: If enabling and the gateway
                executable is missing or not executable.
            BootstrapError: If enabling and ``launchctl bootstrap`` fails.
        """
        if enabled:
            await self.enable(bundle_path, port)
        else:
            await self.disable()

    async def enable(
        self,
        bundle_path: str | Path,
        port: int = DEFAULT_GATEWAY_PORT,
    ) -> None:
        """Install the gateway launch agent and make sure it is running.

        The plist is always rewritten, even when the running job is left
        alone, because it is what launchd loads on the next bootstrap.

        Raises:
            GatewayExecutableMissingError: If the gateway executable is
                missing or not executable.
            BootstrapError: If ``launchctl bootstrap`` fails.
        """
        await self._remove_legacy_job()

        bind = self.desired_bind()
        program = self.resolve_program(bundle_path, port, bind)
        executable = program.executable
        if not is_executable_file(executable):
            self._logger.error("launchd_enable_failed_missing_gateway", executable=executable)
            msg = f"Gateway executable missing at {executable}; rebuild the app bundle"
            raise GatewayExecutableMissingError(msg, executable=executable, label=self._label)

        descriptor = self.build_descriptor(bundle_path, port, bind, program=program)
        self._logger.info("launchd_enable_requested", port=port, bind=bind.value)
        await self._write_manifest(descriptor)

        snapshot = await self.snapshot()
        if snapshot is not None and snapshot.matches(port, bind.value):
            self._logger.info(
                "launchd_job_already_loaded", pid=snapshot.pid, port=port, bind=bind.value
            )
            await self._ensure_enabled()
            _ = await self._run_best_effort(
                ["kickstart", self.service_target],
                event="launchd_kickstart_failed",
            )
            return

        await self._ensure_enabled()
        _ = await self._run_best_effort(
            ["bootout", self.service_target],
            event="launchd_bootout_failed",
            quiet=True,
        )
        try:
            _ = await self._run_required(
                ["bootstrap", self.domain_target, str(self.plist_path)],
                event="launchd_bootstrap_failed",
                fallback=BOOTSTRAP_FAILED_MESSAGE,
            )
        finally:
            # launchd may leave a freshly bootstrapped job disabled
            await self._ensure_enabled()

    async def disable(self) -> None:
        """Unload the gateway launch agent and remove its plist.

        Never raises; every failure is logged.
        """
        self._logger.info("launchd_disable_requested")
        _ = await self._run_best_effort(
            ["bootout", self.service_target],
            event="launchd_bootout_failed",
            quiet=True,
        )
        try:
            self.plist_path.unlink(missing_ok=True)
        except OSError as e:
            self._logger.warning(
                "launchd_plist_remove_failed", path=str(self.plist_path), error=str(e)
            )

    async def kickstart(self) -> None:
        """Force-restart the gateway job (``kickstart -k``)."""
        _ = await self._run_best_effort(
            ["kickstart", "-k", self.service_target],
            event="launchd_kickstart_failed",
        )
