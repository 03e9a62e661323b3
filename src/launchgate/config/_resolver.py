"""Desired gateway run configuration.

Resolves the bind mode, token and password the gateway launch agent should
run with. Each value is looked up in the environment first, then in the
persisted configuration; bind mode additionally depends on the connection
mode.
"""

import os
from collections.abc import Callable, Mapping
from typing import final

from ._models import BindMode, GatewayFileConfig, parse_bind_mode
from ._protocol import ConfigProvider

BIND_ENV: str = "CLAWDBOT_GATEWAY_BIND"
TOKEN_ENV: str = "CLAWDBOT_GATEWAY_TOKEN"
PASSWORD_ENV: str = "CLAWDBOT_GATEWAY_PASSWORD"
CONNECTION_MODE_ENV: str = "CLAWDBOT_CONNECTION_MODE"

REMOTE_CONNECTION_MODE: str = "remote"


@final
class ConfigResolver:
    """Resolves desired gateway parameters from environment and config.

    Precedence for every value is environment, then persisted config, then
    nothing (callers apply their own default). Invalid bind modes are
    discarded silently and resolution falls through to the next source.
    """

    __slots__ = ("_environ", "_provider", "_remote")

    def __init__(
        self,
        provider: ConfigProvider,
        *,
        environ: Mapping[str, str] | None = None,
        remote: Callable[[], bool] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            provider: Source of the persisted configuration.
            environ: Environment mapping. Defaults to os.environ.
            remote: Predicate reporting whether the app is in remote
                connection mode. Defaults to checking CLAWDBOT_CONNECTION_MODE
                and then ``gateway.mode``.
        """
        self._provider = provider
        self._environ: Mapping[str, str] = environ if environ is not None else os.environ
        self._remote = remote

    def _file_config(self) -> GatewayFileConfig:
        return GatewayFileConfig.from_root(self._provider.load_config())

    def _env(self, name: str) -> str:
        return self._environ.get(name, "").strip()

    def is_remote(self) -> bool:
        """Return True when the gateway runs on another machine."""
        if self._remote is not None:
            return self._remote()

        env_mode = self._env(CONNECTION_MODE_ENV).lower()
        if env_mode:
            return env_mode == REMOTE_CONNECTION_MODE

        file_mode = self._file_config().mode
        return file_mode is not None and file_mode.strip().lower() == REMOTE_CONNECTION_MODE

    def resolve_bind_mode(self) -> BindMode | None:
        """Resolve the bind mode for the local gateway.

        Returns:
            The bind mode from CLAWDBOT_GATEWAY_BIND or ``gateway.bind``, or
            None in remote connection mode or when neither source holds a
            supported value.
        """
        if self.is_remote():
            return None

        raw_env = self._environ.get(BIND_ENV)
        if raw_env is not None:
            bind = parse_bind_mode(raw_env)
            if bind is not None:
                return bind

        raw_file = self._file_config().bind
        if raw_file is not None:
            return parse_bind_mode(raw_file)

        return None

    def resolve_token(self) -> str | None:
        """Resolve the gateway token from CLAWDBOT_GATEWAY_TOKEN."""
        token = self._env(TOKEN_ENV)
        return token or None

    def resolve_password(self) -> str | None:
        """Resolve the gateway password.

        CLAWDBOT_GATEWAY_PASSWORD wins when non-empty after trimming.
        Otherwise ``gateway.auth.password`` is returned trimmed, including
        when it trims to an empty string.
        """
        password = self._env(PASSWORD_ENV)
        if password:
            return password

        file_password = self._file_config().password
        if file_password is None:
            return None
        return file_password.strip()
