"""Component models for dotfiles reconciliation.

This module defines the core data structures describing one managed
application's dotfiles: its availability on the host, its install
lifecycle state, and the resolved path tables consumed by the
reconciliation engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Availability(str, Enum):
    """Whether a component's application is present on the host.

    Attributes:
        AVAILABLE: Detection found the application.
        UNAVAILABLE: Detection ran but did not find the application.
        IGNORED: Component is excluded by the user's settings.
        ALWAYS_INSTALL: Statically forced to install regardless of detection.
        NEVER_INSTALL: Statically forced to never install.
        DETECTION_FAILURE: Detection raised an error (initial value).
        NO_LOGIC: No metadata exists, so there is nothing to detect with.
    """

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    IGNORED = "ignored"
    ALWAYS_INSTALL = "always_install"
    NEVER_INSTALL = "never_install"
    DETECTION_FAILURE = "detection_failure"
    NO_LOGIC = "no_logic"


class InstallState(str, Enum):
    """Install lifecycle state of a component.

    Attributes:
        INSTALLED: Every linkable path is correctly symlinked.
        NOT_INSTALLED: No linkable path is symlinked.
        PARTIAL_INSTALL: Some paths are linked and some are not.
        UNKNOWN: No linkable content was found.
        NOT_EVALUATED: No reconciliation pass has run yet.
    """

    INSTALLED = "installed"
    NOT_INSTALLED = "not_installed"
    PARTIAL_INSTALL = "partial_install"
    UNKNOWN = "unknown"
    NOT_EVALUATED = "not_evaluated"


INSTALLABLE: frozenset[Availability] = frozenset(
    {Availability.AVAILABLE, Availability.ALWAYS_INSTALL}
)


@dataclass(slots=True)
class Component:
    """One top-level dotfiles subdirectory and its resolved configuration.

    A component is constructed once per discovered source directory,
    configured once by the resolver, then reconciled any number of
    times. Only ``state`` changes after resolution.

    Attributes:
        name: Identifier, equal to the source subdirectory name.
        source_path: Absolute path to the component's source tree.
        friendly_name: Optional human-readable label.
        availability: Detection outcome.
        install_path: Directory the tree is mirrored into (installable only).
        hide_symlinks: Whether created links get the hidden flag.
        ignore_paths: Source-relative paths excluded from processing.
        rename_paths: Source-relative file path to alternate target path.
        additional_paths: Source-relative file path to extra target paths.
        state: Result of the most recent reconciliation pass.
    """

    name: str
    source_path: Path
    friendly_name: str | None = None
    availability: Availability = Availability.DETECTION_FAILURE
    install_path: Path | None = None
    hide_symlinks: bool = False
    ignore_paths: frozenset[str] = field(default_factory=frozenset)
    rename_paths: dict[str, str] = field(default_factory=dict)
    additional_paths: dict[str, tuple[str, ...]] = field(default_factory=dict)
    state: InstallState = InstallState.NOT_EVALUATED

    def __post_init__(self) -> None:
        """Validate component data after initialization."""
        if not self.name:
            msg = "Component name cannot be empty"
            raise ValueError(msg)

    @property
    def is_installable(self) -> bool:
        """Check if the component may be reconciled."""
        return self.availability in INSTALLABLE

    @property
    def display_name(self) -> str:
        """Return the friendly name, falling back to the component name."""
        return self.friendly_name or self.name
