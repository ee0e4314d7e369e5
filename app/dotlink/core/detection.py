"""Component availability detection.

Decides whether a component's application is present on the host
using one of four methods configured in its metadata:

- automatic: match a pattern against installed program names
- find_in_path: look up an executable on PATH
- path_exists: check that a filesystem path exists
- static: use a fixed availability
"""

import logging
import re
import subprocess
from pathlib import Path

from dotlink.models.component import Availability
from dotlink.models.metadata import DetectionConfig
from dotlink.models.package import InstalledProgram
from dotlink.scanners import AptScanner, FlatpakScanner, Scanner, SnapScanner
from dotlink.utils.shell import find_executable

logger = logging.getLogger(__name__)

_STATIC_AVAILABILITY: dict[str, Availability] = {
    "available": Availability.AVAILABLE,
    "unavailable": Availability.UNAVAILABLE,
    "always_install": Availability.ALWAYS_INSTALL,
    "never_install": Availability.NEVER_INSTALL,
}


def get_default_scanners() -> list[Scanner]:
    """Return one scanner per supported package manager."""
    return [AptScanner(), FlatpakScanner(), SnapScanner()]


class InstalledPrograms:
    """Lazily built, shared cache of programs installed on the host.

    The first lookup scans every available package manager. Later
    lookups reuse the result, so one instance should be shared by all
    components resolved in a run.
    """

    def __init__(self, scanners: list[Scanner] | None = None) -> None:
        self._scanners = scanners if scanners is not None else get_default_scanners()
        self._programs: list[InstalledProgram] | None = None

    @property
    def programs(self) -> list[InstalledProgram]:
        """Return every installed program, scanning on first access."""
        if self._programs is None:
            self._programs = self._scan()
        return self._programs

    def _scan(self) -> list[InstalledProgram]:
        programs: list[InstalledProgram] = []
        for scanner in self._scanners:
            if not scanner.is_available():
                continue
            try:
                programs.extend(scanner.scan())
            except (RuntimeError, OSError, subprocess.SubprocessError) as e:
                logger.warning("Scanning %s programs failed: %s", scanner.source.value, e)
        logger.debug("Found %d installed programs", len(programs))
        return programs

    def find(
        self,
        pattern: str,
        *,
        regex: bool = False,
        case_sensitive: bool = False,
    ) -> InstalledProgram | None:
        """Find the first installed program whose name matches.

        Args:
            pattern: Substring, or regular expression if ``regex`` is set.
            regex: Treat the pattern as a regular expression (re.search).
            case_sensitive: Match case-sensitively.

        Returns:
            Matching InstalledProgram, or None.

        Raises:
            re.error: If ``regex`` is set and the pattern is invalid.
        """
        if regex:
            compiled = re.compile(pattern, 0 if case_sensitive else re.IGNORECASE)
            for program in self.programs:
                if compiled.search(program.name):
                    return program
            return None

        needle = pattern if case_sensitive else pattern.casefold()
        for program in self.programs:
            name = program.name if case_sensitive else program.name.casefold()
            if needle in name:
                return program
        return None


class Detector:
    """Evaluates detection settings into an availability.

    Attributes:
        _installed: Shared installed program cache for automatic detection.
    """

    def __init__(self, installed: InstalledPrograms | None = None) -> None:
        self._installed = installed or InstalledPrograms()

    def detect(
        self,
        name: str,
        detection: DetectionConfig,
    ) -> tuple[Availability, str | None]:
        """Detect a component's availability.

        Args:
            name: Component name, the default automatic pattern.
            detection: Detection settings from metadata.

        Returns:
            Tuple of (availability, friendly name found by detection or None).

        Raises:
            re.error: If an automatic regex pattern is invalid.
        """
        if detection.method == "static":
            # availability is guaranteed by DetectionConfig validation
            return _STATIC_AVAILABILITY[detection.availability or "unavailable"], None

        if detection.method == "find_in_path":
            binary = detection.binary or name
            found = find_executable(binary)
            logger.debug("PATH lookup for %s: %s", binary, found)
            return (Availability.AVAILABLE if found else Availability.UNAVAILABLE), None

        if detection.method == "path_exists":
            path = Path(detection.path or "").expanduser()
            exists = path.exists()
            logger.debug("Path check for %s: %s", path, exists)
            return (Availability.AVAILABLE if exists else Availability.UNAVAILABLE), None

        match = self._installed.find(
            detection.pattern or name,
            regex=detection.regex,
            case_sensitive=detection.case_sensitive,
        )
        if match is None:
            return Availability.UNAVAILABLE, None
        logger.debug("Automatic detection matched %s for %s", match.name, name)
        return Availability.AVAILABLE, match.name
