"""launchgate: keeps the clawdbot gateway running under launchd."""

from launchgate.config import BindMode, ConfigResolver, JsonConfigProvider
from launchgate.exceptions import (
    BootstrapError,
    GatewayExecutableMissingError,
    LaunchAgentError,
    LaunchgateError,
)
from launchgate.launchd import (
    GatewayLaunchAgentManager,
    JobSnapshot,
    LaunchctlClient,
    ServiceDescriptor,
    parse_snapshot,
    render_plist,
)

__all__ = [
    "BindMode",
    "BootstrapError",
    "ConfigResolver",
    "GatewayExecutableMissingError",
    "GatewayLaunchAgentManager",
    "JobSnapshot",
    "JsonConfigProvider",
    "LaunchAgentError",
    "LaunchctlClient",
    "LaunchgateError",
    "ServiceDescriptor",
    "parse_snapshot",
    "render_plist",
]
