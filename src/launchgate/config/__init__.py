"""launchgate configuration.

This module provides resolution of the desired gateway run configuration
(bind mode, token, password) from the environment and the persisted clawdbot
configuration file.

Example:
    >>> from launchgate.config import ConfigResolver, JsonConfigProvider
    >>> resolver = ConfigResolver(JsonConfigProvider())
    >>> resolver.resolve_bind_mode()
    <BindMode.LOOPBACK: 'loopback'>
"""

from launchgate.exceptions import ConfigError, ConfigLoadError

from ._loader import JsonConfigProvider, read_config_file, safe_load_config
from ._models import (
    DEFAULT_BIND_MODE,
    BindMode,
    GatewayAuthFileConfig,
    GatewayFileConfig,
    parse_bind_mode,
)
from ._protocol import ConfigProvider
from ._resolver import (
    BIND_ENV,
    CONNECTION_MODE_ENV,
    PASSWORD_ENV,
    TOKEN_ENV,
    ConfigResolver,
)

__all__ = [
    "BIND_ENV",
    "CONNECTION_MODE_ENV",
    "DEFAULT_BIND_MODE",
    "PASSWORD_ENV",
    "TOKEN_ENV",
    "BindMode",
    "ConfigError",
    "ConfigLoadError",
    "ConfigProvider",
    "ConfigResolver",
    "GatewayAuthFileConfig",
    "GatewayFileConfig",
    "JsonConfigProvider",
    "parse_bind_mode",
    "read_config_file",
    "safe_load_config",
]
