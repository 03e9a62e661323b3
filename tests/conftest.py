"""Shared test fixtures for launchgate tests."""

import logging
import stat
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import pytest
import structlog
from rich.console import Console
from structlog.testing import CapturingLogger


@dataclass(slots=True)
class StaticConfigProvider:
    """ConfigProvider returning a fixed document."""

    document: dict[str, object] = field(default_factory=dict)

    def load_config(self) -> Mapping[str, object]:
        return self.document


@dataclass(frozen=True, slots=True)
class AppBundle:
    """Paths for a fake installed app bundle."""

    root: Path
    relay_dir: Path
    gateway_bin: Path


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def capturing_logger() -> CapturingLogger:
    """Return the raw capturing logger behind the `launchd_logger` fixture."""
    return CapturingLogger()


@pytest.fixture
def launchd_logger(
    capturing_logger: CapturingLogger,
) -> structlog.typing.FilteringBoundLogger:
    """Create a structlog logger whose entries land in `capturing_logger.calls`."""
    return structlog.wrap_logger(
        capturing_logger,
        processors=[],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
    )


@pytest.fixture
def app_bundle(tmp_path: Path) -> AppBundle:
    """Create an app bundle with an executable embedded gateway.

    Structure:
        tmp_path/
            Clawdbot.app/
                Contents/
                    Resources/
                        Relay/
                            clawdbot     # mode 0755
    """
    root = tmp_path / "Clawdbot.app"
    relay_dir = root / "Contents" / "Resources" / "Relay"
    relay_dir.mkdir(parents=True)

    gateway_bin = relay_dir / "clawdbot"
    gateway_bin.write_text("#!/bin/sh\nexit 0\n")
    gateway_bin.chmod(gateway_bin.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    return AppBundle(root=root, relay_dir=relay_dir, gateway_bin=gateway_bin)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and the clawdbot state directory into tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("CLAWDBOT_STATE_DIR", str(home / ".clawdbot"))
    for name in (
        "CLAWDBOT_CONFIG_PATH",
        "CLAWDBOT_GATEWAY_BIND",
        "CLAWDBOT_GATEWAY_TOKEN",
        "CLAWDBOT_GATEWAY_PASSWORD",
        "CLAWDBOT_CONNECTION_MODE",
        "CLAWDBOT_PROJECT_ROOT",
        "LAUNCHGATE_DEBUG",
        "LAUNCHGATE_LOG_LEVEL",
        "LAUNCHGATE_STRICT_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def config_provider() -> StaticConfigProvider:
    """Return an empty in-memory config; tests assign `document` as needed."""
    return StaticConfigProvider()
