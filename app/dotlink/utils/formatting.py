"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console

from dotlink.core.theme import get_theme
from dotlink.models.component import Availability, InstallState
from dotlink.models.report import MessageLevel


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())

_STATE_STYLES: dict[InstallState, str] = {
    InstallState.INSTALLED: "linked",
    InstallState.NOT_INSTALLED: "unlinked",
    InstallState.PARTIAL_INSTALL: "partial",
    InstallState.UNKNOWN: "muted",
    InstallState.NOT_EVALUATED: "muted",
}

_LEVEL_STYLES: dict[MessageLevel, str] = {
    MessageLevel.DEBUG: "muted",
    MessageLevel.VERBOSE: "info",
    MessageLevel.WARNING: "warning",
    MessageLevel.ERROR: "error",
}


def format_state(state: InstallState) -> str:
    """Format an install state with color markup."""
    style = _STATE_STYLES[state]
    return f"[{style}]{state.value.replace('_', ' ')}[/]"


def format_availability(availability: Availability) -> str:
    """Format an availability with color markup.

    Installable values are highlighted, everything else is muted.
    """
    label = availability.value.replace("_", " ")
    if availability in (Availability.AVAILABLE, Availability.ALWAYS_INSTALL):
        return f"[success]{label}[/]"
    if availability == Availability.DETECTION_FAILURE:
        return f"[error]{label}[/]"
    return f"[muted]{label}[/]"


def format_level(level: MessageLevel) -> str:
    """Format a message level with color markup."""
    return f"[{_LEVEL_STYLES[level]}]{level.value}[/]"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
