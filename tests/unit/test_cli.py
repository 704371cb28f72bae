"""
Unit tests for CLI functionality.
"""

from __future__ import annotations

import io
import sys
from types import SimpleNamespace
from typing import Any
from unittest.mock import patch

import pytest

from lawsender.cli.main import DEFAULT_DATA, cli_main, main
from lawsender.core.errors import RemoteRejectionError, WorkspaceNotFoundError
from lawsender.core.settings import Settings

SUB = "00000000-0000-4000-8000-00000000000a"
WORKSPACE = "7f1c2d3e-0000-4000-8000-000000000001"
REQUIRED = ["-w", WORKSPACE, "-t", "Events", "-s", SUB]


class _FakeCollector:
    def __init__(self, error: Exception | None = None) -> None:
        self.sent: list[bytes] = []
        self.error = error

    def send_data(self, body: bytes) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(body)


class TestCLI:
    """Test CLI functionality."""

    def test_send_default_payload(self) -> None:
        collector = _FakeCollector()
        with patch(
            "lawsender.cli.main.new_collector", return_value=collector
        ) as factory:
            result = main(["send", *REQUIRED])

        assert result == 0
        assert collector.sent == [DEFAULT_DATA.encode()]
        config = factory.call_args.args[0]
        assert config.workspace_id == WORKSPACE
        assert config.table == "Events"
        assert config.subscription_id == SUB
        assert config.timestamp is None
        assert isinstance(factory.call_args.kwargs["settings"], Settings)

    def test_send_explicit_payload_is_not_validated(self) -> None:
        collector = _FakeCollector()
        with patch("lawsender.cli.main.new_collector", return_value=collector):
            result = main(["send", "not json", *REQUIRED])

        assert result == 0
        assert collector.sent == [b"not json"]

    def test_send_reads_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        collector = _FakeCollector()
        monkeypatch.setattr(
            sys, "stdin", SimpleNamespace(buffer=io.BytesIO(b'[{"a":1}]'))
        )
        with patch("lawsender.cli.main.new_collector", return_value=collector):
            result = main(["send", "-", *REQUIRED])

        assert result == 0
        assert collector.sent == [b'[{"a":1}]']

    def test_send_with_timestamp(self) -> None:
        with patch(
            "lawsender.cli.main.new_collector", return_value=_FakeCollector()
        ) as factory:
            main(["send", *REQUIRED, "--timestamp", "2000-01-01T01:01:01Z"])

        config = factory.call_args.args[0]
        assert config.timestamp.isoformat() == "2000-01-01T01:01:01+00:00"

    @pytest.mark.parametrize(
        "error",
        [
            WorkspaceNotFoundError(WORKSPACE),
            RemoteRejectionError(403, "InvalidAuthorization", "bad signature"),
        ],
    )
    def test_send_failure_exits_non_zero(
        self, error: Exception, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch(
            "lawsender.cli.main.new_collector",
            return_value=_FakeCollector(error=error),
        ):
            result = main(["send", *REQUIRED])

        assert result == 1
        assert capsys.readouterr().err.strip() == f"Error: {error}"

    def test_resolution_failure_exits_non_zero(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch(
            "lawsender.cli.main.new_collector",
            side_effect=WorkspaceNotFoundError(WORKSPACE),
        ):
            result = main(["send", *REQUIRED])

        assert result == 1
        assert "not found" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "argv",
        [
            ["send", "-t", "Events", "-s", SUB],
            ["send", "-w", WORKSPACE, "-s", SUB],
            ["send", "-w", WORKSPACE, "-t", "Events"],
            ["send", "-w", "not-a-uuid", "-t", "Events", "-s", SUB],
            ["send", "-w", WORKSPACE, "-t", "bad table", "-s", SUB],
            ["send", *REQUIRED, "--timestamp", "yesterday"],
        ],
    )
    def test_usage_errors_exit_two(self, argv: list[str]) -> None:
        with patch("lawsender.cli.main.new_collector") as factory:
            with pytest.raises(SystemExit) as excinfo:
                main(argv)

        assert excinfo.value.code == 2
        factory.assert_not_called()

    def test_invalid_settings_exit_non_zero(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("LAWSENDER_HTTP__TIMEOUT_SECONDS", "0")
        with patch("lawsender.cli.main.new_collector") as factory:
            result = main(["send", *REQUIRED])

        assert result == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: invalid settings:")
        assert "http.timeout_seconds" in err
        factory.assert_not_called()

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "send" in capsys.readouterr().out

    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        from lawsender import __version__

        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])

        assert excinfo.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_verbose_enables_diagnostics(self) -> None:
        captured: list[dict[str, Any]] = []
        from lawsender.core import diagnostics

        diagnostics.set_writer_for_tests(captured.append)
        with patch(
            "lawsender.cli.main.new_collector",
            return_value=_FakeCollector(error=RemoteRejectionError(500)),
        ):
            main(["send", *REQUIRED, "--verbose"])

        assert any(p["component"] == "cli" for p in captured)

    def test_cli_main_uses_argv(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["law-sender"])

        assert cli_main() == 0
