"""Unit tests for the launchgate CLI commands."""

import os
import plistlib
from pathlib import Path
from typing import TYPE_CHECKING

import orjson
import pytest
from rich.console import Console

from launchgate.cli import CLIContext
from launchgate.cli._commands import ExitCode, exit_with_error, format_json
from launchgate.launchd import FakeLaunchctlClient

if TYPE_CHECKING:
    from tests.conftest import AppBundle

    from .conftest import RunCli

TARGET = f"gui/{os.getuid()}/com.clawdbot.gateway"

LOADED_OUTPUT = """\
pid = 900
program arguments = ( "clawdbot", "gateway-daemon", "--port", "18789", "--bind", "lan" )
"""


def _plist_path(home: Path) -> Path:
    return home / "Library" / "LaunchAgents" / "com.clawdbot.gateway.plist"


class TestStatus:
    def test_not_loaded(
        self,
        launchgate_cli: "RunCli",
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert launchgate_cli("status") == ExitCode.NOT_LOADED
        assert "not loaded" in capsys.readouterr().out

    def test_loaded(
        self,
        launchgate_cli: "RunCli",
        fake_client: FakeLaunchctlClient,
        isolated_home: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        plist = _plist_path(isolated_home)
        plist.parent.mkdir(parents=True)
        plist.write_text("<plist/>")
        fake_client.set_job_loaded(LOADED_OUTPUT)

        assert launchgate_cli("--verbose", "status") == ExitCode.SUCCESS

        out = capsys.readouterr().out
        assert "com.clawdbot.gateway: loaded" in out
        assert "pid: 900" in out
        assert "bind: lan" in out


class TestEnable:
    def test_bootstraps_job(
        self,
        launchgate_cli: "RunCli",
        fake_client: FakeLaunchctlClient,
        app_bundle: "AppBundle",
        isolated_home: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        fake_client.set_job_missing()

        code = launchgate_cli("enable", "--bundle", str(app_bundle.root), "--port", "19000")

        assert code == ExitCode.SUCCESS
        assert ("bootstrap", f"gui/{os.getuid()}", str(_plist_path(isolated_home))) in (
            fake_client.calls
        )
        manifest = plistlib.loads(_plist_path(isolated_home).read_bytes())
        assert manifest["ProgramArguments"][2:] == ["--port", "19000", "--bind", "loopback"]
        assert "port 19000" in capsys.readouterr().out

    def test_bind_from_config_file(
        self,
        launchgate_cli: "RunCli",
        fake_client: FakeLaunchctlClient,
        app_bundle: "AppBundle",
        isolated_home: Path,
        tmp_path: Path,
    ) -> None:
        config = tmp_path / "clawdbot.json"
        config.write_bytes(orjson.dumps({"gateway": {"bind": "tailnet"}}))
        fake_client.set_job_missing()

        code = launchgate_cli("--config", str(config), "enable", "--bundle", str(app_bundle.root))

        assert code == ExitCode.SUCCESS
        manifest = plistlib.loads(_plist_path(isolated_home).read_bytes())
        assert manifest["ProgramArguments"][-1] == "tailnet"

    def test_missing_executable(
        self,
        launchgate_cli: "RunCli",
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = launchgate_cli("enable", "--bundle", str(tmp_path / "Nope.app"))

        assert code == ExitCode.MISSING_EXECUTABLE
        assert "Error:" in capsys.readouterr().err

    def test_bootstrap_failure(
        self,
        launchgate_cli: "RunCli",
        fake_client: FakeLaunchctlClient,
        app_bundle: "AppBundle",
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        fake_client.set_job_missing()
        fake_client.set_response("bootstrap", 5, "Bootstrap failed: 5")

        code = launchgate_cli("enable", "--bundle", str(app_bundle.root))

        assert code == ExitCode.BOOTSTRAP_FAILED
        assert "Bootstrap failed: 5" in capsys.readouterr().err


class TestDisable:
    def test_removes_plist(
        self,
        launchgate_cli: "RunCli",
        fake_client: FakeLaunchctlClient,
        isolated_home: Path,
    ) -> None:
        plist = _plist_path(isolated_home)
        plist.parent.mkdir(parents=True)
        plist.write_text("<plist/>")

        assert launchgate_cli("disable") == ExitCode.SUCCESS
        assert fake_client.calls == [("bootout", TARGET)]
        assert not plist.exists()


class TestKickstart:
    def test_forces_restart(
        self,
        launchgate_cli: "RunCli",
        fake_client: FakeLaunchctlClient,
    ) -> None:
        assert launchgate_cli("kickstart") == ExitCode.SUCCESS
        assert fake_client.calls == [("kickstart", "-k", TARGET)]


class TestSnapshot:
    def test_json(
        self,
        launchgate_cli: "RunCli",
        fake_client: FakeLaunchctlClient,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        fake_client.set_job_loaded(LOADED_OUTPUT)

        assert launchgate_cli("snapshot", "--format", "json") == ExitCode.SUCCESS
        assert orjson.loads(capsys.readouterr().out) == {
            "label": "com.clawdbot.gateway",
            "pid": 900,
            "port": 18789,
            "bind": "lan",
        }

    def test_table_uses_injected_console(
        self,
        launchgate_cli: "RunCli",
        fake_client: FakeLaunchctlClient,
        console: Console,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        fake_client.set_job_loaded(LOADED_OUTPUT)

        with console.capture() as capture:
            code = launchgate_cli("snapshot")

        assert code == ExitCode.SUCCESS
        table = capture.get()
        assert "com.clawdbot.gateway" in table
        assert "18789" in table
        assert "lan" in table
        assert "18789" not in capsys.readouterr().out

    def test_not_loaded(
        self,
        launchgate_cli: "RunCli",
        fake_client: FakeLaunchctlClient,
    ) -> None:
        fake_client.set_job_missing()

        assert launchgate_cli("snapshot") == ExitCode.NOT_LOADED


class TestPlist:
    def test_prints_manifest_without_writing(
        self,
        launchgate_cli: "RunCli",
        fake_client: FakeLaunchctlClient,
        app_bundle: "AppBundle",
        isolated_home: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = launchgate_cli("plist", "--bundle", str(app_bundle.root), "--port", "18790")

        assert code == ExitCode.SUCCESS
        manifest = plistlib.loads(capsys.readouterr().out.encode("utf-8"))
        assert manifest["ProgramArguments"][3] == "18790"
        assert not _plist_path(isolated_home).exists()
        assert fake_client.calls == []

    def test_project_root_from_environment(
        self,
        launchgate_cli: "RunCli",
        app_bundle: "AppBundle",
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        local_bin = tmp_path / "checkout" / "node_modules" / ".bin" / "clawdbot"
        local_bin.parent.mkdir(parents=True)
        local_bin.write_text("#!/bin/sh\n")
        local_bin.chmod(0o755)
        monkeypatch.setenv("CLAWDBOT_PROJECT_ROOT", str(tmp_path / "checkout"))

        assert launchgate_cli("plist", "--bundle", str(app_bundle.root)) == ExitCode.SUCCESS

        manifest = plistlib.loads(capsys.readouterr().out.encode("utf-8"))
        assert manifest["ProgramArguments"][:2] == [str(local_bin), "gateway"]


class TestGlobalOptions:
    def test_missing_config_exits(self, launchgate_cli: "RunCli", tmp_path: Path) -> None:
        assert launchgate_cli("--config", str(tmp_path / "missing.json"), "status") == 1

    def test_log_file(
        self,
        launchgate_cli: "RunCli",
        fake_client: FakeLaunchctlClient,
        tmp_path: Path,
    ) -> None:
        log_file = tmp_path / "cli.log"
        fake_client.set_response("kickstart", 113, "Could not find service")

        assert launchgate_cli("--log-file", str(log_file), "kickstart") == ExitCode.SUCCESS

        records = [orjson.loads(line) for line in log_file.read_text().splitlines()]
        assert records[-1]["event"] == "launchd_kickstart_failed"
        assert records[-1]["command"] == "kickstart"

    def test_context_reset_after_command(self, launchgate_cli: "RunCli") -> None:
        _ = launchgate_cli("kickstart")

        assert CLIContext.get_current() == CLIContext()


class TestShared:
    def test_exit_with_error(self, console: Console) -> None:
        with console.capture() as capture, pytest.raises(SystemExit) as exc_info:
            exit_with_error("boom", ExitCode.BOOTSTRAP_FAILED, console=console)

        assert exc_info.value.code == ExitCode.BOOTSTRAP_FAILED
        assert "Error: boom" in capture.get()

    def test_format_json(self) -> None:
        assert format_json({"a": 1}, indent=False) == '{"a":1}'
