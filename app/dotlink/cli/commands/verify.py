"""Verify command implementation."""

from typing import Annotated

import typer

from dotlink.cli.display import create_reports_table, print_messages
from dotlink.cli.types import get_components, get_settings, pick_components
from dotlink.core.dotfiles import reconcile_components
from dotlink.models.report import ReconcileMode
from dotlink.utils.formatting import console, print_info


def verify_components(
    ctx: typer.Context,
    names: Annotated[
        list[str] | None,
        typer.Argument(help="Components to verify (default: all)."),
    ] = None,
) -> None:
    """Check whether component symlinks are in place.

    Read-only: nothing on disk is changed.

    Examples:
        dotlink verify                 # Verify every available component
        dotlink verify git             # Verify one component
    """
    obj = ctx.obj or {}
    settings = get_settings(ctx)
    selected = pick_components(
        get_components(settings), names, select_all=False, require_selection=False
    )

    if not selected:
        print_info("No installable components found.")
        return

    reports = reconcile_components(selected, ReconcileMode.VERIFY, settings.to_context())

    console.print(create_reports_table(reports, ReconcileMode.VERIFY))
    print_messages(reports, verbose=obj.get("verbose", False))
