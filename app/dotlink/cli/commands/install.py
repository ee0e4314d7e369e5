"""Install command implementation.

Creates the symlinks of the selected components.
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
from dotlink.utils.formatting import console, print_error, print_info, print_success


def install_components(
    ctx: typer.Context,
    names: Annotated[
        list[str] | None,
        typer.Argument(help="Components to install."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without making changes.",
        ),
    ] = False,
    allow_nested: Annotated[
        bool,
        typer.Option(
            "--allow-nested",
            help="Descend through existing directory symlinks instead of failing.",
        ),
    ] = False,
    select_all: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Install every available component.",
        ),
    ] = False,
) -> None:
    """Install components by symlinking their files into place.

    Existing files that are not symlinks into the component are never
    overwritten; they are reported as failures instead.

    Examples:
        dotlink install git vim        # Install two components
        dotlink install --all          # Install everything available
        dotlink install --all -n       # Preview without changes
    """
    obj = ctx.obj or {}
    settings = get_settings(ctx)
    selected = pick_components(get_components(settings), names, select_all)

    if not selected:
        print_info("No installable components selected. Nothing to do.")
        return

    can_symlink = True if dry_run else can_create_symlinks(Path.home())
    context = settings.to_context(
        simulate=dry_run,
        can_symlink=can_symlink,
        allow_nested_symlinks=True if allow_nested else None,
    )

    try:
        reports = reconcile_components(selected, ReconcileMode.INSTALL, context)
    except SymlinkCapabilityError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not obj.get("quiet"):
        console.print(create_reports_table(reports, ReconcileMode.INSTALL, dry_run))
    print_messages(reports, verbose=obj.get("verbose", False))
    print_reports_summary(reports)

    if dry_run:
        print_info("\nDry-run mode: No changes were made.")
    elif all(r.succeeded for r in reports):
        print_success("Symlinks are in place.")

    if any(not r.succeeded for r in reports):
        raise typer.Exit(code=1)
