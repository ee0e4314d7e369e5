"""Snap program scanner implementation."""

import logging
from collections.abc import Iterator

from dotlink.models.package import InstalledProgram, PackageSource
from dotlink.scanners.base import Scanner
from dotlink.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# Notes flags of snaps that are not programs anyone configures
_SKIPPED_NOTES: frozenset[str] = frozenset({"base", "core", "snapd", "disabled"})


class SnapScanner(Scanner):
    """Scanner for Snap applications.

    Parses ``snap list``. Bases, snapd itself and disabled revisions are
    skipped.
    """

    @property
    def source(self) -> PackageSource:
        """Return SNAP as the package source."""
        return PackageSource.SNAP

    def is_available(self) -> bool:
        """Check if snap CLI is available."""
        return command_exists("snap")

    def scan(self) -> Iterator[InstalledProgram]:
        """Scan installed snaps.

        Raises:
            RuntimeError: If snap is not available or snap list fails.
        """
        if not self.is_available():
            msg = "Snap is not available on this system"
            raise RuntimeError(msg)

        result = run_command(["snap", "list", "--color=never"])
        if not result.success:
            msg = f"snap list failed: {result.stderr}"
            raise RuntimeError(msg)

        # First line is the column header
        for line in result.stdout.strip().split("\n")[1:]:
            program = self._parse_snap_line(line)
            if program is not None:
                yield program

    def _parse_snap_line(self, line: str) -> InstalledProgram | None:
        # Name  Version  Rev  Tracking  Publisher  Notes
        parts = line.split()
        if len(parts) < 3:
            if line.strip():
                logger.debug("Skipping malformed snap line: %r", line[:100])
            return None

        name, version = parts[0], parts[1]
        notes = set(parts[5].split(",")) if len(parts) >= 6 else set()
        if notes & _SKIPPED_NOTES or name == "snapd":
            return None

        return InstalledProgram(name=name, source=PackageSource.SNAP, version=version)
