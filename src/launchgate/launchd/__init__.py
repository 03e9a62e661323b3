"""launchd package for managing the gateway launch agent.

This package installs, reconciles and inspects the per-user launchd job that
keeps the gateway process running.

Key Components:
    - ServiceDescriptor: Desired job definition
    - JobSnapshot: Parsed live job state
    - CommandResult: launchctl exit status and output
    - SupervisorClient: Protocol for running launchctl
    - LaunchctlClient: Subprocess implementation of SupervisorClient
    - FakeLaunchctlClient: In-memory SupervisorClient for tests
    - parse_snapshot: Tolerant `launchctl print` parser
    - render_plist / escape_plist_value: Property list rendering
    - GatewayLaunchAgentManager: Enable/disable/kickstart/status

Example:
    >>> from launchgate.config import ConfigResolver, JsonConfigProvider
    >>> from launchgate.launchd import GatewayLaunchAgentManager, LaunchctlClient
    >>> manager = GatewayLaunchAgentManager(
    ...     LaunchctlClient(), ConfigResolver(JsonConfigProvider())
    ... )
    >>> await manager.set_enabled(True, "/Applications/Clawdbot.app", 18789)
"""

from ._client import LAUNCHCTL_PATH, LaunchctlClient
from ._fake import FakeLaunchctlClient
from ._manager import BOOTSTRAP_FAILED_MESSAGE, GatewayLaunchAgentManager
from ._models import (
    DEFAULT_GATEWAY_PORT,
    GATEWAY_LAUNCHD_LABEL,
    IMAGE_BACKEND,
    IMAGE_BACKEND_ENV,
    LEGACY_GATEWAY_LAUNCHD_LABEL,
    CommandResult,
    GatewayProgram,
    JobSnapshot,
    ServiceDescriptor,
)
from ._parser import (
    extract_flag_int_value,
    extract_flag_value,
    extract_int_value,
    parse_snapshot,
)
from ._plist import (
    build_gateway_descriptor,
    escape_plist_value,
    render_plist,
    write_plist,
)
from ._program import (
    gateway_executable_path,
    is_executable_file,
    preferred_path_entries,
    relay_dir,
    resolve_gateway_program,
)
from ._protocol import SupervisorClient

__all__ = [
    "BOOTSTRAP_FAILED_MESSAGE",
    "DEFAULT_GATEWAY_PORT",
    "GATEWAY_LAUNCHD_LABEL",
    "IMAGE_BACKEND",
    "IMAGE_BACKEND_ENV",
    "LAUNCHCTL_PATH",
    "LEGACY_GATEWAY_LAUNCHD_LABEL",
    "CommandResult",
    "FakeLaunchctlClient",
    "GatewayLaunchAgentManager",
    "GatewayProgram",
    "JobSnapshot",
    "LaunchctlClient",
    "ServiceDescriptor",
    "SupervisorClient",
    "build_gateway_descriptor",
    "escape_plist_value",
    "extract_flag_int_value",
    "extract_flag_value",
    "extract_int_value",
    "gateway_executable_path",
    "is_executable_file",
    "parse_snapshot",
    "preferred_path_entries",
    "relay_dir",
    "render_plist",
    "resolve_gateway_program",
    "write_plist",
]
