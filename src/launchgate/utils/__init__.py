"""Shared utilities: filesystem locations and logger factories."""

from ._logging import LogFormatType, create_cli_logger, create_launchd_logger
from ._paths import (
    get_config_path,
    get_gateway_log_path,
    get_launch_agents_dir,
    get_launchgate_log_file,
    get_log_dir,
    get_plist_path,
    get_project_root_override,
    get_state_dir,
)

__all__ = [
    "LogFormatType",
    "create_cli_logger",
    "create_launchd_logger",
    "get_config_path",
    "get_gateway_log_path",
    "get_launch_agents_dir",
    "get_launchgate_log_file",
    "get_log_dir",
    "get_plist_path",
    "get_project_root_override",
    "get_state_dir",
]
