"""List command implementation.

Discovers dotfiles components and shows their availability and state.
"""

import json
from typing import Annotated

import typer

from dotlink.cli.display import components_to_json, create_components_table
from dotlink.cli.types import OutputFormat, get_components, get_settings
from dotlink.core.dotfiles import count_by_availability
from dotlink.utils.formatting import console, format_availability, print_warning


def list_components(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List components in the dotfiles directory.

    Every installable component is verified against the filesystem so the
    State column shows whether its symlinks are in place.

    Examples:
        dotlink list                  # Show table of components
        dotlink list --format json    # Output as JSON
    """
    settings = get_settings(ctx)
    components = get_components(settings, verify=True)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(components_to_json(components)))
        return

    if not components:
        print_warning(f"No components found in {settings.effective_dotfiles_root}")
        return

    console.print(create_components_table(components))

    if ctx.obj and ctx.obj.get("quiet"):
        return

    counts = count_by_availability(components)
    parts = [f"{format_availability(a)}: {n}" for a, n in sorted(counts.items())]
    console.print(f"\nTotal: [bold]{len(components)}[/bold] ({', '.join(parts)})")
