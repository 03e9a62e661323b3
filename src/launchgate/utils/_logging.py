"""Logging utilities for launchgate.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to the launchgate log file. Each logger
is self-contained and does not modify global structlog configuration.
"""

import logging
from logging.handlers import RotatingFileHandler
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

from ._paths import get_launchgate_log_file

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]

# Rotation limits for the launchd log
DEFAULT_MAX_BYTES: int = 1_048_576
DEFAULT_BACKUP_COUNT: int = 3


def _get_log_level() -> int:
    """Get the log level from environment variables.

    Checks LAUNCHGATE_DEBUG first (sets DEBUG if present), then
    LAUNCHGATE_LOG_LEVEL. Defaults to INFO if neither is set.

    Returns:
        The logging level as an integer.
    """
    if getenv("LAUNCHGATE_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(getenv("LAUNCHGATE_LOG_LEVEL", "info").upper(), logging.INFO)


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, LAUNCHGATE_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("LAUNCHGATE_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _rotating_file_logger(
    log_path: Path,
    *,
    level: int,
    max_bytes: int,
    backup_count: int,
) -> logging.Logger:
    """Get the stdlib logger that owns the rotating handler for a log file.

    There is one such logger per resolved path. A handler with the same
    rotation limits is reused; anything else attached to the logger is
    closed and replaced, so repeated factory calls never leak file handles.
    """
    resolved = log_path.resolve()
    stdlib_logger = logging.getLogger(f"launchgate.file:{resolved}")
    stdlib_logger.propagate = False
    stdlib_logger.setLevel(level)

    for handler in list(stdlib_logger.handlers):
        if (
            isinstance(handler, RotatingFileHandler)
            and handler.baseFilename == str(resolved)
            and handler.maxBytes == max_bytes
            and handler.backupCount == backup_count
        ):
            handler.setLevel(level)
            return stdlib_logger
        stdlib_logger.removeHandler(handler)
        handler.close()

    handler = RotatingFileHandler(resolved, maxBytes=max_bytes, backupCount=backup_count)
    handler.setLevel(level)
    # structlog renders the line; the handler only writes it
    handler.setFormatter(logging.Formatter("%(message)s"))
    stdlib_logger.addHandler(handler)
    return stdlib_logger


def _renderers(log_format: LogFormatType) -> list[structlog.typing.Processor]:
    """Build the processor chain: level, ISO timestamp, then the renderer."""
    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        processors.extend([structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()])
    else:
        # "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def _create_logger(
    log_file_path: str,
    *,
    log_level: int | None = None,
    log_format: LogFormatType = "json",
    max_bytes: int | None = None,
    backup_count: int | None = None,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger writing to the specified file.

    Rotation is enabled only when both max_bytes and backup_count are given;
    otherwise lines are appended to the file directly.

    Args:
        log_file_path: Path to the log file. Parent directories are created.
        log_level: Override log level (uses env vars if not specified).
        log_format: Output format, either "json" or "text".
        max_bytes: Maximum size in bytes before rotation.
        backup_count: Number of rotated log files to keep.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    log_path = Path(log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    level = log_level if log_level is not None else _get_log_level()

    sink: object
    if max_bytes is not None and backup_count is not None:
        sink = _rotating_file_logger(
            log_path, level=level, max_bytes=max_bytes, backup_count=backup_count
        )
    else:
        sink = structlog.WriteLoggerFactory(file=log_path.open("a"))()

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            sink,
            processors=_renderers(log_format),
            wrapper_class=structlog.make_filtering_bound_logger(level),
            context_class=dict,
        ),
    )


def create_launchd_logger(
    level: str | None = None,
    *,
    log_file: str = "",
    log_format: LogFormatType = "json",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create the logger used by the gateway launch agent manager.

    Writes rotated JSON logs to <state dir>/logs/launchgate.log unless a
    different file is given. Every entry carries ``component="launchd"``.

    The log level is determined by (in order of precedence):
    1. LAUNCHGATE_DEBUG environment variable (if set, enables DEBUG level)
    2. The `level` parameter (if provided)
    3. LAUNCHGATE_LOG_LEVEL environment variable
    4. Default: INFO

    Args:
        level: Optional log level string (debug, info, warning, error).
        log_file: Path to log file (uses the default launchgate log if empty).
        log_format: Output format, either "json" or "text".

    Returns:
        A FilteringBoundLogger instance configured for launchd logging.
    """
    effective_file = log_file if log_file else str(get_launchgate_log_file())

    effective_level: int | None = None
    if level is not None:
        effective_level = _log_level_from_string(level, respect_env=True)

    logger = _create_logger(
        effective_file,
        log_level=effective_level,
        log_format=log_format,
        max_bytes=DEFAULT_MAX_BYTES,
        backup_count=DEFAULT_BACKUP_COUNT,
    )
    return logger.bind(component="launchd")


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI commands.

    Creates a standalone structlog logger that writes structured logs to
    either a specified file or the default launchgate log file.

    The log level can be overridden by LAUNCHGATE_DEBUG, which enables DEBUG
    level logging regardless of the requested level.

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (uses the default log file if empty).
        command: Name of the CLI command for context (bound to all entries).

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    effective_file = log_file if log_file else str(get_launchgate_log_file())
    effective_level = _log_level_from_string(level, respect_env=True)

    logger = _create_logger(
        effective_file,
        log_level=effective_level,
        log_format=log_format,
    )

    if command:
        return logger.bind(command=command)
    return logger
