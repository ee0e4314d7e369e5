"""Unit tests for shell execution utilities."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from dotlink.utils.shell import CommandResult, command_exists, find_executable, run_command


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_success(self) -> None:
        """Exit code zero is success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success is True
        assert CommandResult(stdout="", stderr="", returncode=1).success is False


class TestRunCommand:
    """Tests for run_command function."""

    @patch("dotlink.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """run_command returns captured output and exit code."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=3)

        result = run_command(["dpkg-query", "-W"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=3)
        call_kwargs = mock_run.call_args.kwargs
        assert call_kwargs["capture_output"] is True
        assert call_kwargs["check"] is False
        assert call_kwargs["timeout"] == 60.0

    @patch("dotlink.utils.shell.subprocess.run")
    def test_timeout_propagates(self, mock_run: MagicMock) -> None:
        """Timeouts are not swallowed."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="snap", timeout=1)
        with pytest.raises(subprocess.TimeoutExpired):
            run_command(["snap", "list"], timeout=1)


class TestFindExecutable:
    """Tests for find_executable and command_exists."""

    def test_found(self) -> None:
        """A found executable is returned as a Path."""
        with patch("dotlink.utils.shell.shutil.which", return_value="/usr/bin/git"):
            assert find_executable("git") == Path("/usr/bin/git")
            assert command_exists("git") is True

    def test_not_found(self) -> None:
        """A missing executable is None."""
        with patch("dotlink.utils.shell.shutil.which", return_value=None):
            assert find_executable("nope") is None
            assert command_exists("nope") is False
