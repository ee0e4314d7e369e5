"""Recursive symlink reconciliation engine.

Walks a component's source tree and its install target in lockstep,
classifying every target position and acting on it according to the
pass mode:

- INSTALL creates missing links and reports conflicts as failures.
- VERIFY only inspects; a missing link counts as "not linked".
- REMOVE deletes links pointing into the component; anything else
  found at a target position is downgraded to a warning.

Every leaf contributes a boolean to a flat result list which the
aggregator turns into the component's install state. One bad leaf
never stops its siblings from being reconciled.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from dotlink.core.aggregate import aggregate
from dotlink.core.errors import SymlinkCapabilityError
from dotlink.core.inspector import EntryKind, canonical_path, classify
from dotlink.core.links import (
    clear_hidden,
    create_symlink,
    delete_directory_link,
    delete_file,
    list_children,
    set_hidden,
)
from dotlink.core.policy import directory_target, is_ignored, relative_key, targets_for
from dotlink.models.component import Component
from dotlink.models.report import (
    MessageLevel,
    ReconcileMessage,
    ReconcileMode,
    ReconcileReport,
    ReconciliationContext,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS: dict[MessageLevel, int] = {
    MessageLevel.DEBUG: logging.DEBUG,
    MessageLevel.VERBOSE: logging.INFO,
    MessageLevel.WARNING: logging.WARNING,
    MessageLevel.ERROR: logging.ERROR,
}


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A file in the component's source tree."""

    path: Path
    relative: str


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """A directory in the component's source tree."""

    path: Path
    relative: str

    @property
    def is_root(self) -> bool:
        """Check if this is the component's source root."""
        return not self.relative


SourceEntry = FileEntry | DirectoryEntry


def _blocking_ancestor(path: Path) -> Path | None:
    """Find the nearest existing ancestor of ``path`` that is not a directory.

    Missing ancestors are skipped since a real install creates them.
    A dangling symlink blocks, as does a regular file.
    """
    for candidate in (path, *path.parents):
        if candidate.is_dir():
            return None
        if classify(candidate).exists:
            return candidate
    return None


class ReconciliationEngine:
    """Reconciles one component's source tree against its install path.

    An engine instance performs a single pass; create a new one for
    every pass.

    Attributes:
        _component: Component being reconciled.
        _mode: Pass mode.
        _context: Process-wide settings for the pass.
    """

    def __init__(
        self,
        component: Component,
        mode: ReconcileMode,
        context: ReconciliationContext | None = None,
    ) -> None:
        self._component = component
        self._mode = mode
        self._context = context or ReconciliationContext()
        self._mutate = mode != ReconcileMode.VERIFY and not self._context.simulate
        self._root = canonical_path(component.source_path)
        self._report = ReconcileReport(
            component=component.name,
            mode=mode,
            simulated=mode != ReconcileMode.VERIFY and self._context.simulate,
        )

    def run(self) -> ReconcileReport:
        """Run the pass and return its report.

        Returns:
            ReconcileReport with flat results, messages and aggregated state.

        Raises:
            ValueError: If the component is not installable.
            SymlinkCapabilityError: If the pass would mutate the filesystem
                but the context says symlinks cannot be created.
        """
        if not self._component.is_installable:
            msg = (
                f"Component '{self._component.name}' is "
                f"{self._component.availability.value} and cannot be reconciled"
            )
            raise ValueError(msg)
        if self._mutate and not self._context.can_symlink:
            msg = "Insufficient privileges to create symbolic links"
            raise SymlinkCapabilityError(msg)

        if not self._root.is_dir():
            self._emit(
                MessageLevel.ERROR,
                self._root,
                None,
                f"Source directory does not exist: {self._root}",
            )
            results = [False]
        else:
            results = self._reconcile(DirectoryEntry(self._root, ""))

        self._report.results = results
        self._report.state = aggregate(results, is_removal=self._mode == ReconcileMode.REMOVE)
        return self._report

    # === Traversal ===

    def _reconcile(self, entry: SourceEntry) -> list[bool]:
        """Reconcile one source entry against every target it maps to."""
        if is_ignored(self._component, entry.relative, self._context.global_ignore_paths):
            self._emit(MessageLevel.DEBUG, entry.path, None, f"Ignoring path: {entry.relative}")
            return []

        if isinstance(entry, DirectoryEntry):
            targets = [directory_target(self._component, entry.relative)]
        else:
            targets = targets_for(self._component, entry.relative)

        results: list[bool] = []
        for target in targets:
            results.extend(self._reconcile_target(entry, target))
        return results

    def _reconcile_target(self, entry: SourceEntry, target: Path) -> list[bool]:
        """Apply the decision table to one (source, target) pair."""
        is_dir = isinstance(entry, DirectoryEntry)
        probe = classify(target)

        if probe.kind == EntryKind.MISSING:
            return self._on_missing(entry, target)

        if probe.kind == EntryKind.SYMLINK:
            if probe.link_target == canonical_path(entry.path):
                return self._on_linked(entry, target)
            if is_dir and self._context.allow_nested_symlinks:
                self._emit(
                    MessageLevel.VERBOSE,
                    entry.path,
                    target,
                    f"Descending into nested symlink: {target} -> {probe.link_target}",
                )
                return self._descend(entry, target)
            return self._conflict(
                entry,
                target,
                f"Symlink points elsewhere: {target} -> {probe.link_target}",
            )

        if probe.kind == EntryKind.DIRECTORY:
            if is_dir:
                return self._descend(entry, target)
            return self._conflict(entry, target, f"Expected a file but found a directory: {target}")

        if is_dir:
            return self._conflict(entry, target, f"Expected a directory but found a file: {target}")
        return self._conflict(entry, target, f"File exists and is not a symlink: {target}")

    def _descend(self, entry: SourceEntry, target: Path) -> list[bool]:
        """Reconcile the children of a source directory individually."""
        try:
            files, directories = list_children(entry.path)
        except OSError as e:
            return self._failure(entry, target, f"Unable to read source directory: {e}")

        if not files and not directories:
            self._emit(
                MessageLevel.WARNING,
                entry.path,
                target,
                f"Source directory is empty and target already exists: {target}",
            )
            return []

        # Files before directories; siblings are independent of each other
        children: list[SourceEntry] = [
            FileEntry(child, relative_key(self._root, child)) for child in files
        ]
        children.extend(
            DirectoryEntry(child, relative_key(self._root, child)) for child in directories
        )

        results: list[bool] = []
        for child in children:
            results.extend(self._reconcile(child))
        return results

    # === Leaf actions ===

    def _on_missing(self, entry: SourceEntry, target: Path) -> list[bool]:
        """Nothing exists at the target position."""
        if self._mode == ReconcileMode.VERIFY:
            self._emit(MessageLevel.VERBOSE, entry.path, target, f"Symlink not present: {target}")
            return [False]

        if self._mode == ReconcileMode.REMOVE:
            self._emit(
                MessageLevel.WARNING,
                entry.path,
                target,
                f"Expected symlink not found: {target}",
            )
            return []

        is_dir = isinstance(entry, DirectoryEntry)
        if not self._mutate:
            blocker = _blocking_ancestor(target.parent)
            if blocker is not None:
                return self._failure(
                    entry,
                    target,
                    f"Unable to create symlink {target}: not a directory: {blocker}",
                )
            self._emit(
                MessageLevel.VERBOSE,
                entry.path,
                target,
                f"Would symlink: {target} -> {entry.path}",
            )
            return [True]

        try:
            if not is_dir or entry.is_root:
                target.parent.mkdir(parents=True, exist_ok=True)
            create_symlink(target, entry.path, is_directory=is_dir)
        except OSError as e:
            return self._failure(entry, target, f"Unable to create symlink {target}: {e}")

        self._emit(MessageLevel.VERBOSE, entry.path, target, f"Symlinked: {target} -> {entry.path}")
        if self._component.hide_symlinks:
            try:
                set_hidden(target)
            except OSError as e:
                self._emit(
                    MessageLevel.WARNING,
                    entry.path,
                    target,
                    f"Unable to set hidden attribute on {target}: {e}",
                )
        return [True]

    def _on_linked(self, entry: SourceEntry, target: Path) -> list[bool]:
        """The target is already a symlink to this entry."""
        if self._mode != ReconcileMode.REMOVE:
            self._emit(MessageLevel.DEBUG, entry.path, target, f"Already symlinked: {target}")
            return [True]

        if not self._mutate:
            self._emit(MessageLevel.VERBOSE, entry.path, target, f"Would remove symlink: {target}")
            return [True]

        if self._component.hide_symlinks:
            try:
                clear_hidden(target)
            except OSError as e:
                self._emit(
                    MessageLevel.WARNING,
                    entry.path,
                    target,
                    f"Unable to clear hidden attribute on {target}: {e}",
                )

        try:
            if isinstance(entry, DirectoryEntry):
                delete_directory_link(target)
            else:
                delete_file(target)
        except OSError as e:
            return self._failure(entry, target, f"Unable to remove symlink {target}: {e}")

        self._emit(MessageLevel.VERBOSE, entry.path, target, f"Removed symlink: {target}")
        return [True]

    def _conflict(self, entry: SourceEntry, target: Path, detail: str) -> list[bool]:
        """Something other than the expected link occupies the target."""
        if self._mode == ReconcileMode.REMOVE:
            self._emit(MessageLevel.WARNING, entry.path, target, detail)
            return []
        return self._failure(entry, target, detail)

    def _failure(self, entry: SourceEntry, target: Path, detail: str) -> list[bool]:
        level = MessageLevel.WARNING if self._mode == ReconcileMode.VERIFY else MessageLevel.ERROR
        self._emit(level, entry.path, target, detail)
        return [False]

    def _emit(
        self,
        level: MessageLevel,
        source: Path | None,
        target: Path | None,
        detail: str,
    ) -> None:
        message = ReconcileMessage(
            component=self._component.name,
            level=level,
            source=source,
            target=target,
            detail=detail,
        )
        self._report.messages.append(message)
        logger.log(_LOG_LEVELS[level], "%s", message)


def reconcile(
    component: Component,
    mode: ReconcileMode,
    context: ReconciliationContext | None = None,
) -> ReconcileReport:
    """Run one reconciliation pass and record the resulting state.

    Args:
        component: Installable component to reconcile.
        mode: Install, verify or remove.
        context: Process-wide settings; defaults are used if None.

    Returns:
        ReconcileReport for the pass. ``component.state`` is updated
        to the report's state.

    Raises:
        ValueError: If the component is not installable.
        SymlinkCapabilityError: If a mutating pass lacks symlink capability.
    """
    report = ReconciliationEngine(component, mode, context).run()
    component.state = report.state
    return report
