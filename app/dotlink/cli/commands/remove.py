"""Remove command implementation.

Deletes the symlinks that point into the selected components.
"""

from pathlib import Path
from typing import Annotated

import typer

from dotlink.cli.display import create_reports_table, print_messages, print_reports_summary
from dotlink.cli.types import get_components, get_settings, pick_components
from dotlink.core.capability import can_create_symlinks
from dotlink.core.dotfiles import reconcile_components
from dotlink.core.errors import SymlinkCapabilityError
from dotlink.models.report import ReconcileMode
from dotlink.utils.formatting import console, print_error, print_info


def remove_components(
    ctx: typer.Context,
    names: Annotated[
        list[str] | None,
        typer.Argument(help="Components to remove."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without making changes.",
        ),
    ] = False,
    select_all: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Remove every available component.",
        ),
    ] = False,
) -> None:
    """Remove component symlinks.

    Only symlinks that resolve into the component are deleted. Anything
    else found at a target is left alone and reported as a warning.

    Examples:
        dotlink remove git             # Remove one component
        dotlink remove --all --dry-run # Preview removing everything
    """
    obj = ctx.obj or {}
    settings = get_settings(ctx)
    selected = pick_components(get_components(settings), names, select_all)

    if not selected:
        print_info("No installable components selected. Nothing to do.")
        return

    can_symlink = True if dry_run else can_create_symlinks(Path.home())
    context = settings.to_context(simulate=dry_run, can_symlink=can_symlink)

    try:
        reports = reconcile_components(selected, ReconcileMode.REMOVE, context)
    except SymlinkCapabilityError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not obj.get("quiet"):
        console.print(create_reports_table(reports, ReconcileMode.REMOVE, dry_run))
    print_messages(reports, verbose=obj.get("verbose", False))
    print_reports_summary(reports)

    if dry_run:
        print_info("\nDry-run mode: No changes were made.")

    if any(not r.succeeded for r in reports):
        raise typer.Exit(code=1)
