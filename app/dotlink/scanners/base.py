"""Abstract base class for installed program scanners.

This module defines the Scanner interface that all package source
scanners must implement.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from dotlink.models.package import InstalledProgram, PackageSource


class Scanner(ABC):
    """Abstract base class for all installed program scanners.

    Scanners query a package manager and yield the programs it has
    installed. Automatic component detection matches against them.

    Example:
        >>> scanner = AptScanner()
        >>> if scanner.is_available():
        ...     for program in scanner.scan():
        ...         print(program.name)
    """

    @property
    @abstractmethod
    def source(self) -> PackageSource:
        """Return the package source this scanner handles.

        Returns:
            PackageSource enum value (APT, FLATPAK, or SNAP)
        """

    @abstractmethod
    def scan(self) -> Iterator[InstalledProgram]:
        """Scan and yield all installed programs from this source.

        Yields:
            InstalledProgram instances for each installed program.

        Raises:
            RuntimeError: If the package manager is not available.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this package manager is available on the system.

        Returns:
            True if the package manager can be used, False otherwise.
        """
