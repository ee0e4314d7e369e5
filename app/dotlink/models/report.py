"""Reconciliation context, messages and reports.

This module defines the structures passed into and returned from the
reconciliation engine: the immutable per-run context, the structured
messages emitted for every state transition, and the per-component
report callers receive after a pass.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dotlink.models.component import InstallState


class ReconcileMode(str, Enum):
    """Mode of a reconciliation pass.

    Attributes:
        INSTALL: Create missing symlinks.
        VERIFY: Read-only status check of existing symlinks.
        REMOVE: Delete symlinks that point into the component.
    """

    INSTALL = "install"
    VERIFY = "verify"
    REMOVE = "remove"


class MessageLevel(str, Enum):
    """Severity of a reconciliation message."""

    DEBUG = "debug"
    VERBOSE = "verbose"
    WARNING = "warning"
    ERROR = "error"


# Default ignore set applied to every component
DEFAULT_GLOBAL_IGNORE_PATHS: frozenset[str] = frozenset(
    {".git", ".gitattributes", ".gitignore", ".gitmodules", "metadata.toml"}
)


@dataclass(frozen=True, slots=True)
class ReconciliationContext:
    """Process-wide settings threaded through a reconciliation walk.

    Attributes:
        global_ignore_paths: Relative paths ignored in every component.
        allow_nested_symlinks: Descend through foreign directory symlinks
            instead of treating them as conflicts.
        can_symlink: Whether the process may create symlinks.
        simulate: Evaluate install/remove without touching the filesystem.
    """

    global_ignore_paths: frozenset[str] = DEFAULT_GLOBAL_IGNORE_PATHS
    allow_nested_symlinks: bool = False
    can_symlink: bool = True
    simulate: bool = False


@dataclass(frozen=True, slots=True)
class ReconcileMessage:
    """A structured message emitted during reconciliation.

    Attributes:
        component: Name of the component the message belongs to.
        level: Message severity.
        source: Source path involved, if any.
        target: Target path involved, if any.
        detail: Human-readable description.
    """

    component: str
    level: MessageLevel
    source: Path | None
    target: Path | None
    detail: str

    def __str__(self) -> str:
        return f"[{self.component}] {self.detail}"


@dataclass(slots=True)
class ReconcileReport:
    """Outcome of one reconciliation pass over a component.

    Attributes:
        component: Name of the reconciled component.
        mode: Mode the pass ran in.
        results: Flat per-leaf success flags.
        messages: Every message emitted during the pass.
        state: Aggregated install state.
        simulated: Whether the pass made no filesystem changes by request.
    """

    component: str
    mode: ReconcileMode
    results: list[bool] = field(default_factory=list)
    messages: list[ReconcileMessage] = field(default_factory=list)
    state: InstallState = InstallState.NOT_EVALUATED
    simulated: bool = False

    @property
    def warnings(self) -> list[ReconcileMessage]:
        """Return all warning-level messages."""
        return [m for m in self.messages if m.level == MessageLevel.WARNING]

    @property
    def errors(self) -> list[ReconcileMessage]:
        """Return all error-level messages."""
        return [m for m in self.messages if m.level == MessageLevel.ERROR]

    @property
    def succeeded(self) -> bool:
        """Check if the pass reached its goal state.

        A pass with nothing to act on (UNKNOWN) is not a failure, but
        any error-level message is.
        """
        if self.mode == ReconcileMode.REMOVE:
            goal = InstallState.NOT_INSTALLED
        else:
            goal = InstallState.INSTALLED
        return self.state in (goal, InstallState.UNKNOWN) and not self.errors
