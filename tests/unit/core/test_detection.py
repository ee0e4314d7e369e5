"""Unit tests for component detection."""

import logging
import re
import subprocess
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from dotlink.core.detection import Detector, InstalledPrograms
from dotlink.models.component import Availability
from dotlink.models.metadata import DetectionConfig
from dotlink.models.package import InstalledProgram, PackageSource
from dotlink.scanners.apt import AptScanner
from dotlink.scanners.base import Scanner


class FakeScanner(Scanner):
    """Scanner returning a fixed list of programs."""

    def __init__(self, names: list[str], available: bool = True) -> None:
        self._names = names
        self._available = available
        self.scan_count = 0

    @property
    def source(self) -> PackageSource:
        return PackageSource.APT

    def is_available(self) -> bool:
        return self._available

    def scan(self) -> Iterator[InstalledProgram]:
        self.scan_count += 1
        for name in self._names:
            yield InstalledProgram(name=name, source=PackageSource.APT)


class BrokenScanner(FakeScanner):
    """Scanner whose package manager fails."""

    def scan(self) -> Iterator[InstalledProgram]:
        raise RuntimeError("dpkg-query failed")


@pytest.fixture
def installed() -> InstalledPrograms:
    """Installed program cache over a fake scanner."""
    return InstalledPrograms([FakeScanner(["git", "vim-gtk3", "Alacritty", "tmux"])])


class TestInstalledPrograms:
    """Tests for InstalledPrograms class."""

    def test_scans_once(self) -> None:
        """The program list is built on first use and cached."""
        scanner = FakeScanner(["git"])
        installed = InstalledPrograms([scanner])

        installed.find("git")
        installed.find("vim")

        assert scanner.scan_count == 1

    def test_skips_unavailable_and_failing_scanners(self) -> None:
        """Unavailable or failing scanners contribute nothing."""
        installed = InstalledPrograms(
            [FakeScanner(["vim"], available=False), BrokenScanner([]), FakeScanner(["git"])]
        )
        assert [p.name for p in installed.programs] == ["git"]

    def test_scanner_timeout_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """A package manager that times out is skipped with a warning."""
        installed = InstalledPrograms([AptScanner(), FakeScanner(["git"])])

        with (
            patch("dotlink.scanners.apt.command_exists", return_value=True),
            patch("dotlink.scanners.apt.run_command") as mock_run,
            caplog.at_level(logging.WARNING),
        ):
            mock_run.side_effect = subprocess.TimeoutExpired(cmd="dpkg-query", timeout=60)
            names = [p.name for p in installed.programs]

        assert names == ["git"]
        assert "timed out" in caplog.text

    def test_substring_case_insensitive(self, installed: InstalledPrograms) -> None:
        """Substring matching ignores case by default."""
        match = installed.find("alacritty")
        assert match is not None
        assert match.name == "Alacritty"

    def test_case_sensitive(self, installed: InstalledPrograms) -> None:
        """Case-sensitive matching can be requested."""
        assert installed.find("alacritty", case_sensitive=True) is None

    def test_regex(self, installed: InstalledPrograms) -> None:
        """Regex patterns use search semantics."""
        match = installed.find("^vim(-gtk3)?$", regex=True)
        assert match is not None
        assert match.name == "vim-gtk3"
        assert installed.find("^vi$", regex=True) is None

    def test_invalid_regex(self, installed: InstalledPrograms) -> None:
        """Invalid regexes raise re.error."""
        with pytest.raises(re.error):
            installed.find("(", regex=True)


class TestDetector:
    """Tests for Detector class."""

    def test_automatic_uses_component_name(self, installed: InstalledPrograms) -> None:
        """Automatic detection defaults to the component name as pattern."""
        result = Detector(installed).detect("tmux", DetectionConfig())
        assert result == (Availability.AVAILABLE, "tmux")

    def test_automatic_not_found(self, installed: InstalledPrograms) -> None:
        """No match means UNAVAILABLE."""
        result = Detector(installed).detect("emacs", DetectionConfig())
        assert result == (Availability.UNAVAILABLE, None)

    def test_find_in_path(self, installed: InstalledPrograms) -> None:
        """find_in_path looks up the configured binary."""
        config = DetectionConfig(method="find_in_path", binary="nvim")
        with patch("dotlink.core.detection.find_executable") as mock_find:
            mock_find.return_value = Path("/usr/bin/nvim")
            result = Detector(installed).detect("nvim", config)
            mock_find.assert_called_once_with("nvim")
        assert result == (Availability.AVAILABLE, None)

    def test_find_in_path_logs_looked_up_name(
        self, installed: InstalledPrograms, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Without a configured binary the component name is looked up and logged."""
        config = DetectionConfig.model_construct(method="find_in_path", binary=None)
        with (
            patch("dotlink.core.detection.find_executable", return_value=None) as mock_find,
            caplog.at_level(logging.DEBUG, logger="dotlink.core.detection"),
        ):
            Detector(installed).detect("tmux", config)

        mock_find.assert_called_once_with("tmux")
        assert "PATH lookup for tmux" in caplog.text

    def test_find_in_path_missing(self, installed: InstalledPrograms) -> None:
        """A binary not on PATH means UNAVAILABLE."""
        config = DetectionConfig(method="find_in_path", binary="nvim")
        with patch("dotlink.core.detection.find_executable", return_value=None):
            result = Detector(installed).detect("nvim", config)
        assert result == (Availability.UNAVAILABLE, None)

    def test_path_exists(self, installed: InstalledPrograms, tmp_path: Path) -> None:
        """path_exists checks the configured path."""
        present = DetectionConfig(method="path_exists", path=str(tmp_path))
        absent = DetectionConfig(method="path_exists", path=str(tmp_path / "nope"))
        detector = Detector(installed)
        assert detector.detect("x", present)[0] == Availability.AVAILABLE
        assert detector.detect("x", absent)[0] == Availability.UNAVAILABLE

    def test_path_exists_expands_user(self, installed: InstalledPrograms) -> None:
        """'~' in the path is expanded."""
        (Path.home() / ".ssh").mkdir()
        config = DetectionConfig(method="path_exists", path="~/.ssh")
        assert Detector(installed).detect("ssh", config)[0] == Availability.AVAILABLE

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("always_install", Availability.ALWAYS_INSTALL),
            ("never_install", Availability.NEVER_INSTALL),
            ("available", Availability.AVAILABLE),
            ("unavailable", Availability.UNAVAILABLE),
        ],
    )
    def test_static(self, value: str, expected: Availability) -> None:
        """Static detection never scans."""
        installed = MagicMock(spec=InstalledPrograms)
        config = DetectionConfig.model_validate({"method": "static", "availability": value})

        assert Detector(installed).detect("x", config) == (expected, None)
        installed.find.assert_not_called()
