from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from launchgate.config import ConfigResolver
from launchgate.launchd import FakeLaunchctlClient, GatewayLaunchAgentManager

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from tests.conftest import StaticConfigProvider

TEST_UID = 501

ManagerFactory = Callable[..., GatewayLaunchAgentManager]


@pytest.fixture
def fake_client() -> FakeLaunchctlClient:
    return FakeLaunchctlClient()


@pytest.fixture
def launch_agents_dir(tmp_path: Path) -> Path:
    path = tmp_path / "LaunchAgents"
    path.mkdir()
    return path


@pytest.fixture
def make_manager(
    tmp_path: Path,
    fake_client: FakeLaunchctlClient,
    config_provider: "StaticConfigProvider",
    launch_agents_dir: Path,
    launchd_logger: "FilteringBoundLogger",
) -> ManagerFactory:
    """Return a factory for managers wired to fakes under tmp_path."""

    def _make(
        *,
        environ: dict[str, str] | None = None,
        **overrides: object,
    ) -> GatewayLaunchAgentManager:
        resolver = ConfigResolver(
            config_provider, environ=environ if environ is not None else {}
        )
        options: dict[str, object] = {
            "launch_agents_dir": launch_agents_dir,
            "log_path": tmp_path / "logs" / "gateway.log",
            "working_directory": tmp_path,
            "uid": TEST_UID,
            "logger": launchd_logger,
        }
        options.update(overrides)
        return GatewayLaunchAgentManager(fake_client, resolver, **options)  # pyright: ignore[reportArgumentType]

    return _make


@pytest.fixture
def manager(make_manager: ManagerFactory) -> GatewayLaunchAgentManager:
    return make_manager()
