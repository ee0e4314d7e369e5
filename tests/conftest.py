"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from dotlink.models.component import Availability, Component


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point HOME and XDG_CONFIG_HOME into the test's temporary directory."""
    home = tmp_path / "user-home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    for var in ("XDG_DATA_HOME", "XDG_STATE_HOME", "XDG_CACHE_HOME"):
        monkeypatch.delenv(var, raising=False)
    yield home


@pytest.fixture
def dotfiles_root(tmp_path: Path) -> Path:
    """Empty dotfiles root directory."""
    root = tmp_path / "dotfiles"
    root.mkdir()
    return root


@pytest.fixture
def sample_component(dotfiles_root: Path, tmp_path: Path) -> Component:
    """Installable component with a small source tree.

    Layout::

        dotfiles/sample/.samplerc
        dotfiles/sample/.config/sample/settings.ini
        dotfiles/sample/.config/sample/themes/dark.ini
    """
    source = dotfiles_root / "sample"
    (source / ".config" / "sample" / "themes").mkdir(parents=True)
    (source / ".samplerc").write_text("rc\n")
    (source / ".config" / "sample" / "settings.ini").write_text("[main]\n")
    (source / ".config" / "sample" / "themes" / "dark.ini").write_text("[dark]\n")

    target = tmp_path / "target"
    target.mkdir()

    return Component(
        name="sample",
        source_path=source.resolve(),
        availability=Availability.AVAILABLE,
        install_path=target,
    )


@pytest.fixture
def mock_dpkg_output() -> str:
    """Sample dpkg-query output for testing."""
    return """git\t1:2.43.0-1\tinstalled\tfast, scalable, distributed revision control system
vim-gtk3\t2:9.1.0016\tinstalled\tVi IMproved - enhanced vi editor - with GTK3 GUI
tmux\t3.4-1\tinstalled\tterminal multiplexer
alacritty\t0.13.2-1\tconfig-files\tGPU-accelerated terminal emulator"""


@pytest.fixture
def mock_flatpak_output() -> str:
    """Sample flatpak list output for testing."""
    return """org.mozilla.firefox\t128.0\tFirefox
com.visualstudio.code\t1.90.0\tVisual Studio Code"""
