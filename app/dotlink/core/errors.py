"""Exception hierarchy for dotlink."""


class DotlinkError(Exception):
    """Base exception for all dotlink errors."""


class SymlinkCapabilityError(DotlinkError):
    """Raised when a mutating pass is requested without symlink capability."""
