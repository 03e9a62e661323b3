# pyright: reportAny=false, reportUnknownVariableType=false
"""JSON configuration file loading."""

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, final

import orjson

from launchgate.exceptions import ConfigLoadError
from launchgate.utils import get_config_path

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


def read_config_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse the JSON configuration file.

    A missing file is an empty configuration.

    Args:
        path: Path to the configuration file.

    Returns:
        Parsed configuration as a dictionary.

    Raises:
        ConfigLoadError: If the file cannot be read, is not valid JSON, or is
            not a JSON object.
    """
    try:
        content = path.read_bytes()
    except FileNotFoundError:
        return {}
    except OSError as e:
        msg = f"Failed to read config file: {e}"
        raise ConfigLoadError(msg, path=path) from e

    if not content.strip():
        return {}

    try:
        data = orjson.loads(content)
    except orjson.JSONDecodeError as e:
        msg = f"Failed to parse config file: {e}"
        raise ConfigLoadError(msg, path=path, line=e.lineno, column=e.colno) from e

    if not isinstance(data, dict):
        msg = f"Expected JSON object in config file, got {type(data).__name__}"
        raise ConfigLoadError(msg, path=path)

    return data


def safe_load_config(
    *,
    config_path: Path | None = None,
) -> tuple[dict[str, Any], str | None]:  # pyright: ignore[reportExplicitAny]
    """Load configuration with error handling.

    Handles errors based on the LAUNCHGATE_STRICT_CONFIG environment variable:
    - If unset or "0": warn to stderr and return an empty config
    - If "1": fail fast with sys.exit(1)

    Args:
        config_path: Explicit path to the config file (--config flag).

    Returns:
        Tuple of (config, error_message). On success, error_message is None.
    """
    strict_mode = os.environ.get("LAUNCHGATE_STRICT_CONFIG", "0") == "1"
    path = config_path if config_path is not None else get_config_path()

    if config_path is not None and not config_path.exists():
        error_msg = f"Config file not found: {config_path}"
        print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    try:
        config = read_config_file(path)
    except ConfigLoadError as e:
        error_msg = str(e)
        if strict_mode:
            print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
            sys.exit(1)
        print(f"Warning: {error_msg}", file=sys.stderr)  # noqa: T201
        return {}, error_msg
    else:
        return config, None


@final
class JsonConfigProvider:
    """ConfigProvider backed by the clawdbot JSON configuration file.

    The file is re-read on every call. Load failures are logged and produce
    an empty configuration.
    """

    __slots__ = ("_logger", "_path")

    def __init__(
        self,
        path: Path | None = None,
        *,
        logger: "FilteringBoundLogger | None" = None,
    ) -> None:
        """Initialize the provider.

        Args:
            path: Configuration file path. Defaults to the clawdbot config path.
            logger: Logger for load failures.
        """
        self._path = path
        self._logger = logger

    @property
    def path(self) -> Path:
        """Return the configuration file path."""
        return self._path if self._path is not None else get_config_path()

    def load_config(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        """Load the configuration document, or an empty one on failure."""
        try:
            return read_config_file(self.path)
        except ConfigLoadError as e:
            if self._logger is not None:
                self._logger.warning(
                    "config_load_failed", path=str(self.path), error=str(e)
                )
            return {}
