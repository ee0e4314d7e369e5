"""Shell execution utilities.

Provides subprocess execution for the package manager scanners and
PATH lookups for binary-based component detection.
"""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
) -> CommandResult:
    """Execute a command without a shell and capture its output.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def find_executable(name: str) -> Path | None:
    """Locate an executable on the system PATH.

    Args:
        name: Command name to look up.

    Returns:
        Absolute path to the executable, or None if not found.
    """
    found = shutil.which(name)
    return Path(found) if found else None


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH."""
    return find_executable(name) is not None
