# pyright: reportAny=false
"""Configuration models.

This module defines the bind mode enumeration and the typed view over the
``gateway`` section of the persisted clawdbot configuration. Only the fields
the launch agent manager reads are modelled; everything else is ignored.
"""

from collections.abc import Mapping
from enum import StrEnum
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, field_validator


class BindMode(StrEnum):
    """Network exposure modes accepted by the gateway ``--bind`` flag.

    - LOOPBACK: Listen on 127.0.0.1 only
    - TAILNET: Listen on the tailnet interface
    - LAN: Listen on the local network
    - AUTO: Let the gateway pick
    """

    LOOPBACK = "loopback"
    TAILNET = "tailnet"
    LAN = "lan"
    AUTO = "auto"


DEFAULT_BIND_MODE: BindMode = BindMode.LOOPBACK


def parse_bind_mode(value: str) -> BindMode | None:
    """Normalize a raw bind mode string.

    Args:
        value: Raw value from the environment or the config file.

    Returns:
        The matching BindMode after trimming and lowercasing, or None when the
        value is not one of the supported modes.
    """
    try:
        return BindMode(value.strip().lower())
    except ValueError:
        return None


def _string_or_none(value: Any) -> str | None:  # pyright: ignore[reportExplicitAny]
    return value if isinstance(value, str) else None


class GatewayAuthFileConfig(BaseModel):
    """The ``gateway.auth`` section.

    Attributes:
        password: Gateway password, untrimmed as stored.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    password: str | None = None

    @field_validator("password", mode="before")
    @classmethod
    def _coerce_password(cls, value: Any) -> str | None:  # pyright: ignore[reportExplicitAny]
        return _string_or_none(value)


class GatewayFileConfig(BaseModel):
    """The ``gateway`` section of the persisted configuration.

    Values of the wrong type are treated as absent rather than rejected, so a
    hand-edited file never blocks the launch agent.

    Attributes:
        bind: Raw bind mode string, not yet validated against BindMode.
        mode: Connection mode ("local" or "remote").
        auth: Authentication settings.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    bind: str | None = None
    mode: str | None = None
    auth: GatewayAuthFileConfig | None = None

    @field_validator("bind", "mode", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str | None:  # pyright: ignore[reportExplicitAny]
        return _string_or_none(value)

    @field_validator("auth", mode="before")
    @classmethod
    def _coerce_auth(cls, value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
        if isinstance(value, Mapping):
            return dict(value)
        return None

    @classmethod
    def from_root(cls, root: Mapping[str, object]) -> Self:
        """Extract the gateway section from a whole configuration mapping.

        Args:
            root: The parsed configuration file.

        Returns:
            The typed gateway section; empty when the section is missing or
            is not an object.
        """
        gateway = root.get("gateway")
        if not isinstance(gateway, Mapping):
            return cls()
        return cls.model_validate(dict(gateway))

    @property
    def password(self) -> str | None:
        """Return ``gateway.auth.password`` if present."""
        if self.auth is None:
            return None
        return self.auth.password
