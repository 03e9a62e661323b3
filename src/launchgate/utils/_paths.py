from os import getenv
from pathlib import Path


def get_state_dir() -> Path:
    """Get the clawdbot state directory.

    Honors CLAWDBOT_STATE_DIR, otherwise ~/.clawdbot.
    """
    override = getenv("CLAWDBOT_STATE_DIR", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".clawdbot"


def get_config_path() -> Path:
    """Get the path to the persisted clawdbot configuration file.

    Honors CLAWDBOT_CONFIG_PATH, otherwise <state dir>/clawdbot.json.
    """
    override = getenv("CLAWDBOT_CONFIG_PATH", "").strip()
    if override:
        return Path(override).expanduser()
    return get_state_dir() / "clawdbot.json"


def get_log_dir() -> Path:
    """Get the path to the logs/ directory inside the state directory."""
    return get_state_dir() / "logs"


def get_launchgate_log_file() -> Path:
    """Get the path to the launchgate log file.

    Returns:
        Path to the log file (<state dir>/logs/launchgate.log).
    """
    return get_log_dir() / "launchgate.log"


def get_launch_agents_dir() -> Path:
    """Get the per-user LaunchAgents directory (~/Library/LaunchAgents)."""
    return Path.home() / "Library" / "LaunchAgents"


def get_plist_path(label: str, launch_agents_dir: Path | None = None) -> Path:
    """Get the property list path for a launchd label.

    Args:
        label: The launchd job label.
        launch_agents_dir: Directory holding the plist. Defaults to
            ~/Library/LaunchAgents.

    Returns:
        Path to <launch_agents_dir>/<label>.plist.
    """
    directory = launch_agents_dir if launch_agents_dir is not None else get_launch_agents_dir()
    return directory / f"{label}.plist"


def get_gateway_log_path() -> Path:
    """Get the combined stdout/stderr log path for the launchd gateway job."""
    return Path("/tmp/clawdbot/clawdbot-gateway.log")  # noqa: S108


def get_project_root_override() -> Path | None:
    """Get the development checkout from CLAWDBOT_PROJECT_ROOT, if set."""
    override = getenv("CLAWDBOT_PROJECT_ROOT", "").strip()
    if override:
        return Path(override).expanduser()
    return None
