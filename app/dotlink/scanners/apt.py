"""APT program scanner implementation.

Lists installed packages using dpkg-query.
"""

import logging
from collections.abc import Iterator

from dotlink.models.package import InstalledProgram, PackageSource
from dotlink.scanners.base import Scanner
from dotlink.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class AptScanner(Scanner):
    """Scanner for APT/dpkg packages.

    Uses dpkg-query to list packages whose status is "installed".
    """

    # dpkg-query format string: Package, Version, Status, Description
    _DPKG_FORMAT = "${Package}\\t${Version}\\t${db:Status-Status}\\t${binary:Summary}\\n"

    @property
    def source(self) -> PackageSource:
        """Return APT as the package source."""
        return PackageSource.APT

    def is_available(self) -> bool:
        """Check if dpkg-query is available."""
        return command_exists("dpkg-query")

    def scan(self) -> Iterator[InstalledProgram]:
        """Scan all installed APT packages.

        Yields:
            InstalledProgram for each installed package.

        Raises:
            RuntimeError: If dpkg-query is missing or fails.
        """
        if not self.is_available():
            msg = "APT package manager is not available on this system"
            raise RuntimeError(msg)

        result = run_command(["dpkg-query", "-W", "-f", self._DPKG_FORMAT])

        if not result.success:
            msg = f"dpkg-query failed: {result.stderr}"
            raise RuntimeError(msg)

        for line in result.stdout.strip().split("\n"):
            if not line:
                continue

            program = self._parse_dpkg_line(line)
            if program is not None:
                yield program

    def _parse_dpkg_line(self, line: str) -> InstalledProgram | None:
        """Parse a single line of dpkg-query output.

        Args:
            line: Tab-separated line from dpkg-query.

        Returns:
            InstalledProgram if the line describes an installed package,
            None otherwise.
        """
        parts = line.split("\t")
        if len(parts) < 2:
            logger.debug("Skipping malformed dpkg line (parts=%d): %r", len(parts), line[:100])
            return None

        name = parts[0].strip()
        if not name:
            return None

        # Removed-but-not-purged packages keep a config-files status
        if len(parts) >= 3 and parts[2].strip() not in ("", "installed"):
            return None

        version = parts[1].strip() or None
        description = parts[3].strip() or None if len(parts) >= 4 else None

        return InstalledProgram(
            name=name,
            source=PackageSource.APT,
            version=version,
            description=description,
        )
