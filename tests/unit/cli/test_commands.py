"""Unit tests for the dotlink CLI commands.

Commands run against a temporary dotfiles root passed with --root; HOME
points into the test's temporary directory.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from dotlink import __version__
from dotlink.cli.main import app
from dotlink.core.settings import load_settings
from typer.testing import CliRunner

runner = CliRunner()

ALWAYS = '[detection]\nmethod = "static"\navailability = "always_install"\n'
NEVER = '[detection]\nmethod = "static"\navailability = "never_install"\n'


@pytest.fixture
def dotfiles(dotfiles_root: Path) -> Path:
    """Dotfiles root with an installable 'alpha' and a disabled 'beta'."""
    for name, metadata in (("alpha", ALWAYS), ("beta", NEVER)):
        (dotfiles_root / name).mkdir()
        (dotfiles_root / name / f".{name}rc").write_text(name)
        (dotfiles_root / name / "metadata.toml").write_text(metadata)
    return dotfiles_root


class TestMain:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self) -> None:
        """--help lists the commands."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("list", "install", "remove", "verify", "init"):
            assert command in result.output


class TestListCommand:
    """Tests for dotlink list."""

    def test_table(self, dotfiles: Path) -> None:
        """The table shows every component."""
        result = runner.invoke(app, ["--root", str(dotfiles), "list"])

        assert result.exit_code == 0
        assert "alpha" in result.output
        assert "beta" in result.output

    def test_json(self, dotfiles: Path) -> None:
        """JSON output carries availability and verified state."""
        result = runner.invoke(app, ["--root", str(dotfiles), "list", "--format", "json"])

        assert result.exit_code == 0
        data = {c["name"]: c for c in json.loads(result.output)}
        assert data["alpha"]["availability"] == "always_install"
        assert data["alpha"]["state"] == "not_installed"
        assert data["beta"]["state"] == "not_evaluated"
        assert data["beta"]["install_path"] is None

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing dotfiles root exits with code 1."""
        result = runner.invoke(app, ["--root", str(tmp_path / "nope"), "list"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestInstallCommand:
    """Tests for dotlink install."""

    def test_install_named(self, dotfiles: Path, isolated_home: Path) -> None:
        """Named components are installed."""
        result = runner.invoke(app, ["--root", str(dotfiles), "install", "alpha"])

        assert result.exit_code == 0, result.output
        assert (isolated_home / ".alpharc").is_symlink()
        assert not (isolated_home / ".betarc").exists()

    def test_install_all(self, dotfiles: Path, isolated_home: Path) -> None:
        """--all installs every installable component."""
        result = runner.invoke(app, ["--root", str(dotfiles), "install", "--all"])

        assert result.exit_code == 0, result.output
        assert (isolated_home / ".alpharc").is_symlink()

    def test_dry_run(self, dotfiles: Path, isolated_home: Path) -> None:
        """--dry-run changes nothing."""
        result = runner.invoke(app, ["--root", str(dotfiles), "install", "alpha", "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Dry Run" in result.output
        assert not (isolated_home / ".alpharc").exists()

    def test_requires_selection(self, dotfiles: Path) -> None:
        """Without names or --all the command fails."""
        result = runner.invoke(app, ["--root", str(dotfiles), "install"])
        assert result.exit_code == 1
        assert "--all" in result.output

    def test_unknown_component(self, dotfiles: Path) -> None:
        """Unknown component names fail."""
        result = runner.invoke(app, ["--root", str(dotfiles), "install", "gamma"])
        assert result.exit_code == 1
        assert "gamma" in result.output

    def test_non_installable_is_skipped(self, dotfiles: Path) -> None:
        """Disabled components are skipped with a warning."""
        result = runner.invoke(app, ["--root", str(dotfiles), "install", "beta"])
        assert result.exit_code == 0
        assert "Nothing to do" in result.output

    def test_conflict_exits_1(self, dotfiles: Path, isolated_home: Path) -> None:
        """A conflicting file fails the command and is left in place."""
        (isolated_home / ".alpharc").write_text("mine")

        result = runner.invoke(app, ["--root", str(dotfiles), "install", "alpha"])

        assert result.exit_code == 1
        assert (isolated_home / ".alpharc").read_text() == "mine"

    def test_no_symlink_capability(self, dotfiles: Path, isolated_home: Path) -> None:
        """Installing without symlink capability fails before any change."""
        with patch("dotlink.cli.commands.install.can_create_symlinks", return_value=False):
            result = runner.invoke(app, ["--root", str(dotfiles), "install", "alpha"])

        assert result.exit_code == 1
        assert "privileges" in result.output
        assert not (isolated_home / ".alpharc").exists()

    def test_capability_checked_in_home(self, dotfiles: Path, isolated_home: Path) -> None:
        """The symlink check runs on the install target's filesystem."""
        with patch(
            "dotlink.cli.commands.install.can_create_symlinks", return_value=True
        ) as mock_check:
            result = runner.invoke(app, ["--root", str(dotfiles), "install", "alpha"])

        assert result.exit_code == 0, result.output
        mock_check.assert_called_once_with(isolated_home)


class TestRemoveCommand:
    """Tests for dotlink remove."""

    def test_remove(self, dotfiles: Path, isolated_home: Path) -> None:
        """Installed links are removed."""
        runner.invoke(app, ["--root", str(dotfiles), "install", "alpha"])

        result = runner.invoke(app, ["--root", str(dotfiles), "remove", "alpha"])

        assert result.exit_code == 0, result.output
        assert not (isolated_home / ".alpharc").is_symlink()

    def test_remove_dry_run(self, dotfiles: Path, isolated_home: Path) -> None:
        """--dry-run keeps the links."""
        runner.invoke(app, ["--root", str(dotfiles), "install", "alpha"])

        result = runner.invoke(app, ["--root", str(dotfiles), "remove", "--all", "-n"])

        assert result.exit_code == 0, result.output
        assert (isolated_home / ".alpharc").is_symlink()

    def test_capability_checked_in_home(self, dotfiles: Path, isolated_home: Path) -> None:
        """Removal checks symlink capability in the home directory."""
        with patch(
            "dotlink.cli.commands.remove.can_create_symlinks", return_value=True
        ) as mock_check:
            runner.invoke(app, ["--root", str(dotfiles), "remove", "alpha"])

        mock_check.assert_called_once_with(isolated_home)

    def test_remove_keeps_foreign_files(self, dotfiles: Path, isolated_home: Path) -> None:
        """Files that are not our links are kept; the run still succeeds."""
        (isolated_home / ".alpharc").write_text("mine")

        result = runner.invoke(app, ["--root", str(dotfiles), "remove", "alpha"])

        assert result.exit_code == 0, result.output
        assert (isolated_home / ".alpharc").read_text() == "mine"


class TestVerifyCommand:
    """Tests for dotlink verify."""

    def test_verify_all(self, dotfiles: Path, isolated_home: Path) -> None:
        """Verify reports without changing anything."""
        result = runner.invoke(app, ["--root", str(dotfiles), "verify"])

        assert result.exit_code == 0, result.output
        assert "alpha" in result.output
        assert not (isolated_home / ".alpharc").exists()

    def test_verify_after_install(self, dotfiles: Path) -> None:
        """Installed components verify as installed."""
        runner.invoke(app, ["--root", str(dotfiles), "install", "alpha"])

        result = runner.invoke(app, ["--root", str(dotfiles), "verify", "alpha"])

        assert result.exit_code == 0
        assert "installed" in result.output
        assert "OK" in result.output


class TestInitCommand:
    """Tests for dotlink init."""

    def test_creates_settings(self, tmp_path: Path, isolated_home: Path) -> None:
        """init writes settings with the given root."""
        result = runner.invoke(app, ["--root", str(tmp_path / "dots"), "init"])

        assert result.exit_code == 0, result.output
        path = isolated_home / ".config" / "dotlink" / "settings.toml"
        assert load_settings(path).dotfiles_root == tmp_path / "dots"

    def test_existing_requires_force(self, isolated_home: Path) -> None:
        """An existing settings file is not overwritten without --force."""
        assert runner.invoke(app, ["init"]).exit_code == 0

        result = runner.invoke(app, ["init"])
        assert result.exit_code == 1
        assert "--force" in result.output

        assert runner.invoke(app, ["init", "--force"]).exit_code == 0

    def test_settings_root_is_used(self, dotfiles: Path, isolated_home: Path) -> None:
        """Commands use the dotfiles root stored by init."""
        runner.invoke(app, ["--root", str(dotfiles), "init"])

        result = runner.invoke(app, ["install", "alpha"])

        assert result.exit_code == 0, result.output
        assert (isolated_home / ".alpharc").is_symlink()
