"""Installed program models used for component detection.

This module defines the data structures describing programs found on
the host by the package manager scanners (APT, Flatpak, Snap).
"""

from dataclasses import dataclass, field
from enum import Enum


class PackageSource(Enum):
    """Enumeration of supported package sources."""

    APT = "apt"
    FLATPAK = "flatpak"
    SNAP = "snap"


@dataclass(frozen=True, slots=True)
class InstalledProgram:
    """Represents a program discovered on the host.

    Attributes:
        name: Package or application name (e.g., 'git', 'org.mozilla.firefox').
        source: Package manager that installed the program.
        version: Installed version string (if available).
        description: Human-readable summary (if available).
    """

    name: str
    source: PackageSource
    version: str | None = field(default=None)
    description: str | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate program data after initialization."""
        if not self.name:
            msg = "Program name cannot be empty"
            raise ValueError(msg)
