from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from launchgate.cli import create_app
from launchgate.launchd import FakeLaunchctlClient

RunCli = Callable[..., int]


@pytest.fixture
def fake_client() -> FakeLaunchctlClient:
    return FakeLaunchctlClient()


@pytest.fixture
def launchgate_cli(
    console: Console,
    fake_client: FakeLaunchctlClient,
    isolated_home: Path,
) -> RunCli:
    """Create CLI app for testing that returns the exit code.

    Global options are honored by invoking the meta app; launchctl is
    replaced by `fake_client` and HOME points into tmp_path.
    """
    app = create_app(console=console, error_console=console, client=fake_client)

    def _run(*args: str) -> int:
        try:
            app.meta(list(args))
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
