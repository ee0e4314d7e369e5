"""Unit tests for FlatpakScanner."""

from unittest.mock import patch

import pytest
from dotlink.models.package import PackageSource
from dotlink.scanners.flatpak import FlatpakScanner
from dotlink.utils.shell import CommandResult


class TestFlatpakScanner:
    """Tests for FlatpakScanner class."""

    @pytest.fixture
    def scanner(self) -> FlatpakScanner:
        """Create FlatpakScanner instance."""
        return FlatpakScanner()

    def test_source_is_flatpak(self, scanner: FlatpakScanner) -> None:
        """Scanner returns FLATPAK as source."""
        assert scanner.source == PackageSource.FLATPAK

    def test_scan_parses_apps(self, scanner: FlatpakScanner, mock_flatpak_output: str) -> None:
        """Application IDs, versions and names are parsed."""
        with (
            patch("dotlink.scanners.flatpak.command_exists", return_value=True),
            patch("dotlink.scanners.flatpak.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(
                stdout=mock_flatpak_output, stderr="", returncode=0
            )
            programs = list(scanner.scan())

        assert [p.name for p in programs] == ["org.mozilla.firefox", "com.visualstudio.code"]
        assert programs[1].version == "1.90.0"
        assert programs[1].description == "Visual Studio Code"
        args = mock_run.call_args.args[0]
        assert "--app" in args

    def test_scan_id_only(self, scanner: FlatpakScanner) -> None:
        """Lines with only an application ID still parse."""
        with (
            patch("dotlink.scanners.flatpak.command_exists", return_value=True),
            patch("dotlink.scanners.flatpak.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(
                stdout="org.gnome.Calculator\n", stderr="", returncode=0
            )
            (program,) = scanner.scan()

        assert program.name == "org.gnome.Calculator"
        assert program.version is None

    def test_scan_failure(self, scanner: FlatpakScanner) -> None:
        """A failing flatpak list raises RuntimeError."""
        with (
            patch("dotlink.scanners.flatpak.command_exists", return_value=True),
            patch("dotlink.scanners.flatpak.run_command") as mock_run,
        ):
            mock_run.return_value = CommandResult(stdout="", stderr="error", returncode=1)
            with pytest.raises(RuntimeError, match="flatpak list failed"):
                list(scanner.scan())
