"""Read-only filesystem probes for the reconciliation engine.

Classifies a path as missing, file, directory or symlink without
following the final link, and resolves symlink targets into canonical
absolute paths so that "does this link point at the source" becomes a
plain equality check.
"""

import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Kind of filesystem entry found at a path."""

    MISSING = "missing"
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True, slots=True)
class Probe:
    """Result of probing a single path.

    Attributes:
        kind: What exists at the path.
        link_target: Canonical target for symlinks, None otherwise.
    """

    kind: EntryKind
    link_target: Path | None = None

    @property
    def exists(self) -> bool:
        """Check if anything (including a dangling symlink) is present."""
        return self.kind != EntryKind.MISSING


def canonical_path(path: Path | str) -> Path:
    """Canonicalize a path the same way for sources and link targets.

    Resolves ``..``/``.`` segments and intermediate symlinks and
    normalizes case where the platform is case-insensitive.
    """
    return Path(os.path.normcase(os.path.realpath(path)))


def resolve_symlink_target(path: Path) -> Path | None:
    """Resolve the target of a symlink into a canonical absolute path.

    Relative link targets are interpreted against the directory that
    contains the link.

    Args:
        path: Path of the suspected symlink.

    Returns:
        Canonical target path, or None if ``path`` is not a symlink.
    """
    try:
        raw = os.readlink(path)
    except (OSError, ValueError):
        return None
    if not os.path.isabs(raw):
        raw = os.path.join(os.path.dirname(os.path.abspath(path)), raw)
    return canonical_path(raw)


def classify(path: Path) -> Probe:
    """Classify the entry at ``path`` without following a final symlink.

    Never raises for a non-existent path. Unreadable paths are reported
    as missing.

    Args:
        path: Path to probe.

    Returns:
        Probe describing the entry.
    """
    try:
        st = os.lstat(path)
    except OSError:
        return Probe(EntryKind.MISSING)

    if stat.S_ISLNK(st.st_mode):
        return Probe(EntryKind.SYMLINK, resolve_symlink_target(path))
    if stat.S_ISDIR(st.st_mode):
        return Probe(EntryKind.DIRECTORY)
    return Probe(EntryKind.FILE)
