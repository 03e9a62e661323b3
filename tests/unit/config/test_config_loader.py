"""Unit tests for JSON configuration loading."""

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from launchgate.config import JsonConfigProvider, read_config_file, safe_load_config
from launchgate.exceptions import ConfigLoadError

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem
    from structlog.testing import CapturingLogger
    from structlog.typing import FilteringBoundLogger


class TestReadConfigFile:
    def test_missing_file_is_empty(self, fs: "FakeFilesystem") -> None:
        assert read_config_file(Path("/state/clawdbot.json")) == {}

    def test_blank_file_is_empty(self, fs: "FakeFilesystem") -> None:
        fs.create_file("/state/clawdbot.json", contents="  \n")

        assert read_config_file(Path("/state/clawdbot.json")) == {}

    def test_reads_object(self, fs: "FakeFilesystem") -> None:
        fs.create_file("/state/clawdbot.json", contents='{"gateway": {"bind": "lan"}}')

        assert read_config_file(Path("/state/clawdbot.json")) == {"gateway": {"bind": "lan"}}

    def test_invalid_json_raises_with_location(self, fs: "FakeFilesystem") -> None:
        fs.create_file("/state/clawdbot.json", contents='{\n  "gateway": }')

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = read_config_file(Path("/state/clawdbot.json"))

        assert exc_info.value.path == Path("/state/clawdbot.json")
        assert exc_info.value.line == 2

    def test_non_object_raises(self, fs: "FakeFilesystem") -> None:
        fs.create_file("/state/clawdbot.json", contents="[1, 2]")

        with pytest.raises(ConfigLoadError, match="Expected JSON object"):
            _ = read_config_file(Path("/state/clawdbot.json"))


class TestSafeLoadConfig:
    def test_uses_default_path(
        self, fs: "FakeFilesystem", monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CLAWDBOT_STATE_DIR", "/state")
        monkeypatch.delenv("CLAWDBOT_CONFIG_PATH", raising=False)
        fs.create_file("/state/clawdbot.json", contents='{"a": 1}')

        assert safe_load_config() == ({"a": 1}, None)

    def test_missing_explicit_path_exits(
        self, fs: "FakeFilesystem", capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(config_path=Path("/nope.json"))

        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_invalid_file_warns(
        self,
        fs: "FakeFilesystem",
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.delenv("LAUNCHGATE_STRICT_CONFIG", raising=False)
        fs.create_file("/c.json", contents="{")

        config, error = safe_load_config(config_path=Path("/c.json"))

        assert config == {}
        assert error is not None
        assert "Warning:" in capsys.readouterr().err

    def test_invalid_file_exits_in_strict_mode(
        self, fs: "FakeFilesystem", monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LAUNCHGATE_STRICT_CONFIG", "1")
        fs.create_file("/c.json", contents="{")

        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(config_path=Path("/c.json"))

        assert exc_info.value.code == 1


class TestJsonConfigProvider:
    def test_explicit_path(self, fs: "FakeFilesystem") -> None:
        fs.create_file("/c.json", contents='{"gateway": {"mode": "remote"}}')
        provider = JsonConfigProvider(Path("/c.json"))

        assert provider.path == Path("/c.json")
        assert provider.load_config() == {"gateway": {"mode": "remote"}}

    def test_path_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLAWDBOT_CONFIG_PATH", "/etc/clawdbot.json")

        assert JsonConfigProvider().path == Path("/etc/clawdbot.json")

    def test_rereads_file(self, fs: "FakeFilesystem") -> None:
        fs.create_file("/c.json", contents='{"v": 1}')
        provider = JsonConfigProvider(Path("/c.json"))
        first = provider.load_config()
        Path("/c.json").write_text('{"v": 2}')

        assert first == {"v": 1}
        assert provider.load_config() == {"v": 2}

    def test_load_failure_is_logged_and_empty(
        self,
        fs: "FakeFilesystem",
        launchd_logger: "FilteringBoundLogger",
        capturing_logger: "CapturingLogger",
    ) -> None:
        fs.create_file("/c.json", contents="not json")
        provider = JsonConfigProvider(Path("/c.json"), logger=launchd_logger)

        assert provider.load_config() == {}
        assert capturing_logger.calls[0].kwargs["event"] == "config_load_failed"
