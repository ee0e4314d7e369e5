"""Shared Rich display functions for components and reconciliation reports.

Provides reusable table builders and summary printers used by the list,
install, remove and verify commands.
"""

from rich.table import Table

from dotlink.models.component import Component
from dotlink.models.report import MessageLevel, ReconcileMode, ReconcileReport
from dotlink.utils.formatting import (
    console,
    format_availability,
    format_level,
    format_state,
    print_success,
)

_MODE_TITLES: dict[ReconcileMode, str] = {
    ReconcileMode.INSTALL: "Install",
    ReconcileMode.VERIFY: "Verify",
    ReconcileMode.REMOVE: "Remove",
}


def create_components_table(components: list[Component]) -> Table:
    """Create a Rich table listing discovered components.

    Args:
        components: Components to display.

    Returns:
        Rich Table with Component, Name, Availability, State and Target columns.
    """
    table = Table(
        title="Components",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Component", style="component.name", no_wrap=True)
    table.add_column("Name")
    table.add_column("Availability")
    table.add_column("State")
    table.add_column("Target", style="component.path")

    for component in components:
        table.add_row(
            component.name,
            component.friendly_name or "",
            format_availability(component.availability),
            format_state(component.state),
            str(component.install_path) if component.install_path else "",
        )

    return table


def components_to_json(components: list[Component]) -> list[dict[str, str | None]]:
    """Convert components to JSON-serializable dictionaries."""
    return [
        {
            "name": c.name,
            "friendly_name": c.friendly_name,
            "availability": c.availability.value,
            "state": c.state.value,
            "source_path": str(c.source_path),
            "install_path": str(c.install_path) if c.install_path else None,
        }
        for c in components
    ]


def create_reports_table(
    reports: list[ReconcileReport], mode: ReconcileMode, dry_run: bool = False
) -> Table:
    """Create a Rich table displaying one row per reconciled component.

    Args:
        reports: Reports to display.
        mode: Mode the reports were produced in.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for report display.
    """
    title = _MODE_TITLES[mode]
    if dry_run:
        title = f"{title} (Dry Run)"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Component", style="component.name", no_wrap=True)
    table.add_column("State")
    table.add_column("Links", justify="right")
    table.add_column("Warnings", justify="right")
    table.add_column("Errors", justify="right")

    for report in reports:
        if report.succeeded:
            status = "[success]OK[/success]"
        else:
            status = "[error]FAIL[/error]"
        ok = sum(1 for r in report.results if r)
        table.add_row(
            status,
            report.component,
            format_state(report.state),
            f"{ok}/{len(report.results)}",
            str(len(report.warnings)),
            str(len(report.errors)),
        )

    return table


def print_messages(reports: list[ReconcileReport], verbose: bool = False) -> None:
    """Print the messages of every report.

    Only warnings and errors are shown unless verbose is set.
    """
    shown = {MessageLevel.WARNING, MessageLevel.ERROR}
    if verbose:
        shown |= {MessageLevel.DEBUG, MessageLevel.VERBOSE}

    for report in reports:
        for message in report.messages:
            if message.level not in shown:
                continue
            console.print(f"  {format_level(message.level)} {message}", highlight=False)


def print_reports_summary(reports: list[ReconcileReport]) -> None:
    """Print a summary of reconciliation reports.

    Shows a success message when every component reached its goal, or a
    count of succeeded/failed components otherwise.
    """
    success_count = sum(1 for r in reports if r.succeeded)
    fail_count = len(reports) - success_count

    if fail_count == 0:
        print_success(f"All {success_count} component(s) completed successfully.")
    else:
        console.print(
            f"\n[success]{success_count} succeeded[/success], [error]{fail_count} failed[/error]"
        )
