"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum

import typer

from dotlink.core.detection import Detector
from dotlink.core.dotfiles import (
    ComponentNotFoundError,
    DotfilesRootNotFoundError,
    discover_components,
    select_components,
)
from dotlink.core.settings import Settings, SettingsError, load_settings
from dotlink.models.component import Component
from dotlink.utils.formatting import print_error, print_info, print_warning


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_settings(ctx: typer.Context) -> Settings:
    """Load settings and apply the global --root override.

    Exits with code 1 if the settings file is invalid.
    """
    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(f"Failed to load settings: {e}")
        raise typer.Exit(code=1) from e

    obj = ctx.obj or {}
    root = obj.get("root")
    if root is not None:
        settings = settings.model_copy(update={"dotfiles_root": root})
    return settings


def get_components(settings: Settings, *, verify: bool = False) -> list[Component]:
    """Discover all components, exiting with code 1 if the root is missing."""
    try:
        return discover_components(settings, detector=Detector(), verify=verify)
    except DotfilesRootNotFoundError as e:
        print_error(str(e))
        print_info("Pass --root or run 'dotlink init --root PATH' to set it.")
        raise typer.Exit(code=1) from e


def pick_components(
    components: list[Component],
    names: list[str] | None,
    select_all: bool,
    *,
    require_selection: bool = True,
) -> list[Component]:
    """Select the components a command operates on.

    Args:
        components: All discovered components.
        names: Names given on the command line.
        select_all: Whether --all was given.
        require_selection: Exit with an error when neither names nor
            --all were given; otherwise fall back to all components.

    Returns:
        Selected installable components.
    """
    if names:
        try:
            selected = select_components(components, names)
        except ComponentNotFoundError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        for component in selected:
            if not component.is_installable:
                print_warning(
                    f"Skipping {component.name}: {component.availability.value.replace('_', ' ')}"
                )
    elif select_all or not require_selection:
        selected = components
    else:
        print_error("No components given. Pass component names or --all.")
        raise typer.Exit(code=1)

    return [c for c in selected if c.is_installable]
