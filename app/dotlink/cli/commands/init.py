"""Init command implementation.

Creates a settings.toml file with default values.
"""

from typing import Annotated

import typer

from dotlink.core.paths import get_settings_path
from dotlink.core.settings import Settings, SettingsError, save_settings
from dotlink.utils.formatting import console, print_error, print_info, print_success, print_warning


def init_settings(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing settings without prompting.",
        ),
    ] = False,
) -> None:
    """Create a settings file with default values.

    The global --root option, if given, is stored as the dotfiles directory.

    Examples:
        dotlink init                        # Defaults (~/dotfiles)
        dotlink --root ~/src/dots init      # Custom dotfiles directory
        dotlink init --force                # Overwrite existing settings
    """
    output_path = get_settings_path()

    if output_path.exists():
        if not force:
            print_error(f"Settings already exist: {output_path}")
            print_info("Use --force to overwrite.")
            raise typer.Exit(code=1)
        print_warning(f"Overwriting existing settings: {output_path}")

    root = (ctx.obj or {}).get("root")
    settings = Settings(dotfiles_root=root) if root is not None else Settings()

    try:
        saved_path = save_settings(settings, output_path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(f"  Dotfiles: [info]{settings.dotfiles_root}[/info]")
    print_success(f"Settings created: {saved_path}")
