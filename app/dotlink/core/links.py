"""Filesystem primitives used by the reconciliation engine.

Every mutation the engine performs goes through this module: creating
and deleting symlinks, toggling the hidden flag, and listing a source
directory's children. Errors propagate as OSError; the engine decides
how to report them.
"""

import logging
import os
import stat
from pathlib import Path

logger = logging.getLogger(__name__)


def create_symlink(path: Path, target: Path, *, is_directory: bool) -> None:
    """Create a symlink at ``path`` pointing to ``target``.

    Args:
        path: Location of the new link.
        target: Absolute path the link points to.
        is_directory: Whether the target is a directory.

    Raises:
        OSError: If the link cannot be created.
    """
    os.symlink(target, path, target_is_directory=is_directory)
    logger.debug("Created symlink %s -> %s", path, target)


def delete_file(path: Path) -> None:
    """Delete a file symlink.

    Raises:
        OSError: If the link cannot be removed.
    """
    path.unlink()
    logger.debug("Deleted symlink %s", path)


def delete_directory_link(path: Path) -> None:
    """Delete a directory symlink without touching the directory's contents.

    Raises:
        OSError: If ``path`` is not a symlink or cannot be removed.
    """
    if not path.is_symlink():
        msg = f"Refusing to delete non-symlink directory: {path}"
        raise IsADirectoryError(msg)
    # unlink() removes the link itself; rmtree() would follow it
    os.unlink(path)
    logger.debug("Deleted directory symlink %s", path)


def supports_hidden_flag() -> bool:
    """Check if the platform has a hidden file flag."""
    return hasattr(os, "lchflags") and hasattr(stat, "UF_HIDDEN")


def set_hidden(path: Path) -> None:
    """Set the hidden flag on a link itself. No-op where unsupported.

    Raises:
        OSError: If the flag cannot be set.
    """
    if not supports_hidden_flag():
        return
    flags = os.lstat(path).st_flags
    os.lchflags(path, flags | stat.UF_HIDDEN)


def clear_hidden(path: Path) -> None:
    """Clear the hidden flag on a link itself. No-op where unsupported.

    Raises:
        OSError: If the flag cannot be cleared.
    """
    if not supports_hidden_flag():
        return
    flags = os.lstat(path).st_flags
    os.lchflags(path, flags & ~stat.UF_HIDDEN)


def list_children(path: Path) -> tuple[list[Path], list[Path]]:
    """List the immediate children of a source directory.

    Symlinked children are classified by what they point to, since
    the source tree is what gets mirrored.

    Args:
        path: Directory to list.

    Returns:
        Tuple of (files, directories), each sorted by name.

    Raises:
        OSError: If the directory cannot be read.
    """
    files: list[Path] = []
    directories: list[Path] = []
    for child in sorted(path.iterdir()):
        if child.is_dir():
            directories.append(child)
        else:
            files.append(child)
    return files, directories
