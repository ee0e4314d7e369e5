"""Flatpak program scanner implementation.

Scans installed Flatpak applications using the flatpak CLI.
"""

from collections.abc import Iterator

from dotlink.models.package import InstalledProgram, PackageSource
from dotlink.scanners.base import Scanner
from dotlink.utils.shell import command_exists, run_command


class FlatpakScanner(Scanner):
    """Scanner for Flatpak applications.

    Uses `flatpak list` to enumerate installed applications. Runtimes
    are skipped since nobody keeps dotfiles for them.
    """

    @property
    def source(self) -> PackageSource:
        """Return FLATPAK as the package source."""
        return PackageSource.FLATPAK

    def is_available(self) -> bool:
        """Check if flatpak CLI is available."""
        return command_exists("flatpak")

    def scan(self) -> Iterator[InstalledProgram]:
        """Scan all installed Flatpak applications.

        Yields:
            InstalledProgram for each installed Flatpak app.

        Raises:
            RuntimeError: If flatpak command fails.
        """
        if not self.is_available():
            msg = "Flatpak is not available on this system"
            raise RuntimeError(msg)

        # Format: application, version, name (tab-separated)
        result = run_command(
            [
                "flatpak",
                "list",
                "--app",
                "--columns=application,version,name",
            ],
        )

        if not result.success:
            msg = f"flatpak list failed: {result.stderr}"
            raise RuntimeError(msg)

        for line in result.stdout.strip().split("\n"):
            if not line.strip():
                continue

            program = self._parse_flatpak_line(line)
            if program is not None:
                yield program

    def _parse_flatpak_line(self, line: str) -> InstalledProgram | None:
        """Parse a single line of flatpak list output.

        Args:
            line: Tab-separated line from flatpak list.

        Returns:
            InstalledProgram if parsing succeeds, None otherwise.
        """
        parts = line.split("\t")
        name = parts[0].strip()
        if not name:
            return None

        version = parts[1].strip() or None if len(parts) >= 2 else None
        description = parts[2].strip() or None if len(parts) >= 3 else None

        return InstalledProgram(
            name=name,
            source=PackageSource.FLATPAK,
            version=version,
            description=description,
        )
