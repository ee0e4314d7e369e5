"""Reduce per-leaf reconciliation results to one install state."""

from collections.abc import Sequence

from dotlink.models.component import InstallState


def aggregate(results: Sequence[bool], is_removal: bool = False) -> InstallState:
    """Aggregate leaf results into a component install state.

    A True leaf means "linked" when reconciling toward install, but
    "removed" after a removal pass, so the all-true and all-false cases
    swap meaning when ``is_removal`` is set.

    Args:
        results: Flat list of per-leaf success flags.
        is_removal: Whether the results come from a removal pass.

    Returns:
        UNKNOWN for no results, PARTIAL_INSTALL for mixed results,
        otherwise INSTALLED or NOT_INSTALLED depending on the mode.
    """
    if not results:
        return InstallState.UNKNOWN

    if all(results):
        return InstallState.NOT_INSTALLED if is_removal else InstallState.INSTALLED
    if not any(results):
        return InstallState.INSTALLED if is_removal else InstallState.NOT_INSTALLED
    return InstallState.PARTIAL_INSTALL
