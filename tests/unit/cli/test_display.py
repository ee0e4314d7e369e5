"""Unit tests for shared display functions and formatting helpers."""

from pathlib import Path

from dotlink.cli.display import (
    components_to_json,
    create_components_table,
    create_reports_table,
)
from dotlink.models.component import Availability, Component, InstallState
from dotlink.models.report import MessageLevel, ReconcileMode, ReconcileReport
from dotlink.utils.formatting import format_availability, format_level, format_state


class TestFormatting:
    """Tests for the markup helpers."""

    def test_format_state(self) -> None:
        """States are styled and humanized."""
        assert format_state(InstallState.PARTIAL_INSTALL) == "[partial]partial install[/]"
        assert format_state(InstallState.INSTALLED) == "[linked]installed[/]"

    def test_format_availability(self) -> None:
        """Installable values use the success style."""
        assert format_availability(Availability.ALWAYS_INSTALL) == "[success]always install[/]"
        assert format_availability(Availability.NO_LOGIC) == "[muted]no logic[/]"
        assert format_availability(Availability.DETECTION_FAILURE).startswith("[error]")

    def test_format_level(self) -> None:
        """Levels map to theme styles."""
        assert format_level(MessageLevel.WARNING) == "[warning]warning[/]"


class TestTables:
    """Tests for the table builders."""

    def test_components_table(self, tmp_path: Path) -> None:
        """One row per component."""
        components = [
            Component(name="a", source_path=tmp_path, availability=Availability.AVAILABLE),
            Component(name="b", source_path=tmp_path),
        ]
        table = create_components_table(components)
        assert table.row_count == 2
        assert table.title == "Components"

    def test_reports_table_title(self) -> None:
        """Dry runs are marked in the title."""
        reports = [ReconcileReport(component="a", mode=ReconcileMode.INSTALL)]
        assert create_reports_table(reports, ReconcileMode.INSTALL).title == "Install"
        dry = create_reports_table(reports, ReconcileMode.REMOVE, dry_run=True)
        assert dry.title == "Remove (Dry Run)"
        assert dry.row_count == 1

    def test_components_to_json(self, tmp_path: Path) -> None:
        """Components serialize to plain values."""
        component = Component(
            name="a",
            source_path=tmp_path,
            availability=Availability.AVAILABLE,
            install_path=tmp_path / "home",
            state=InstallState.INSTALLED,
        )
        (data,) = components_to_json([component])
        assert data == {
            "name": "a",
            "friendly_name": None,
            "availability": "available",
            "state": "installed",
            "source_path": str(tmp_path),
            "install_path": str(tmp_path / "home"),
        }
