"""Symlink capability check.

Some platforms and filesystems refuse symlink creation for ordinary
users. Mutating passes must not start unless links can be created.
"""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def can_create_symlinks(directory: Path | None = None) -> bool:
    """Check if the current process can create symbolic links.

    Creates and removes a throwaway link inside a temporary directory.

    Args:
        directory: Parent for the temporary directory, so the check runs
            on the same filesystem as the install target. Uses the
            system temp directory if None.

    Returns:
        True if a symlink could be created.
    """
    try:
        with tempfile.TemporaryDirectory(prefix="dotlink-", dir=directory) as tmp:
            target = Path(tmp) / "target"
            target.touch()
            os.symlink(target, Path(tmp) / "link")
    except (OSError, NotImplementedError) as e:
        logger.debug("Symlink capability check failed: %s", e)
        return False
    return True
