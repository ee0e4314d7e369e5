"""Discovery and bulk reconciliation of dotfiles components.

Ties the settings, metadata, resolver and engine together: discovers
every component under the dotfiles root, resolves each one, and runs
install/verify/remove passes over a selection of components. Failures
are contained per component.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from dotlink.core.detection import Detector
from dotlink.core.engine import reconcile
from dotlink.core.errors import DotlinkError, SymlinkCapabilityError
from dotlink.core.metadata import MetadataError, load_custom_metadata, load_global_metadata
from dotlink.core.resolver import resolve_component
from dotlink.core.settings import Settings
from dotlink.models.component import Availability, Component, InstallState
from dotlink.models.report import (
    MessageLevel,
    ReconcileMessage,
    ReconcileMode,
    ReconcileReport,
    ReconciliationContext,
)

logger = logging.getLogger(__name__)


class DotfilesRootNotFoundError(DotlinkError):
    """Raised when the dotfiles root directory does not exist."""


class ComponentNotFoundError(DotlinkError):
    """Raised when a requested component does not exist."""


def _is_component_dir(path: Path, settings: Settings) -> bool:
    return (
        path.is_dir()
        and not path.name.startswith(".")
        and path.name not in settings.global_ignore_paths
    )


def get_component(name: str, settings: Settings, detector: Detector | None = None) -> Component:
    """Resolve a single component by name.

    Metadata errors do not raise; they leave the component with a
    DETECTION_FAILURE availability so other components stay usable.

    Args:
        name: Component directory name.
        settings: User settings.
        detector: Shared detector; a fresh one is created if None.

    Returns:
        Resolved Component.
    """
    root = settings.effective_dotfiles_root
    try:
        global_meta = load_global_metadata(name)
        custom_meta = load_custom_metadata(name, root, settings.effective_metadata_dir)
    except MetadataError as e:
        logger.error("Invalid metadata for component %s: %s", name, e)
        return Component(name=name, source_path=root / name)

    return resolve_component(
        name,
        root,
        global_meta,
        custom_meta,
        detector=detector,
        ignored_components=settings.ignored_components,
    )


def discover_components(
    settings: Settings,
    *,
    detector: Detector | None = None,
    verify: bool = True,
) -> list[Component]:
    """Discover and resolve every component under the dotfiles root.

    Args:
        settings: User settings.
        detector: Shared detector; a fresh one is created if None.
        verify: Run a verify pass over installable components so that
            their ``state`` reflects the filesystem.

    Returns:
        Components sorted by name.

    Raises:
        DotfilesRootNotFoundError: If the dotfiles root does not exist.
    """
    root = settings.effective_dotfiles_root
    if not root.is_dir():
        raise DotfilesRootNotFoundError(f"Dotfiles directory not found: {root}")

    detector = detector or Detector()
    components = [
        get_component(child.name, settings, detector)
        for child in sorted(root.iterdir())
        if _is_component_dir(child, settings)
    ]

    if verify:
        reconcile_components(components, ReconcileMode.VERIFY, settings.to_context())
    return components


def select_components(components: Iterable[Component], names: Iterable[str]) -> list[Component]:
    """Pick components by name, preserving the requested order.

    Raises:
        ComponentNotFoundError: If a requested name was not discovered.
    """
    by_name = {c.name: c for c in components}
    selected: list[Component] = []
    for name in names:
        if name not in by_name:
            raise ComponentNotFoundError(f"Component not found: {name}")
        selected.append(by_name[name])
    return selected


def reconcile_components(
    components: Iterable[Component],
    mode: ReconcileMode,
    context: ReconciliationContext,
) -> list[ReconcileReport]:
    """Run one pass over every installable component.

    Non-installable components are skipped. An unexpected error in one
    component is recorded on its report and never stops the others;
    a missing symlink capability stops the whole run.

    Args:
        components: Components to reconcile.
        mode: Install, verify or remove.
        context: Reconciliation settings shared by every component.

    Returns:
        One ReconcileReport per installable component.

    Raises:
        SymlinkCapabilityError: If a mutating pass lacks symlink capability.
    """
    reports: list[ReconcileReport] = []
    for component in components:
        if not component.is_installable:
            logger.debug(
                "Skipping component %s (%s)", component.name, component.availability.value
            )
            continue
        try:
            reports.append(reconcile(component, mode, context))
        except SymlinkCapabilityError:
            raise
        except (DotlinkError, OSError, ValueError) as e:
            logger.error("Reconciling component %s failed: %s", component.name, e)
            component.state = InstallState.UNKNOWN
            reports.append(
                ReconcileReport(
                    component=component.name,
                    mode=mode,
                    results=[],
                    messages=[
                        ReconcileMessage(
                            component=component.name,
                            level=MessageLevel.ERROR,
                            source=component.source_path,
                            target=component.install_path,
                            detail=str(e),
                        )
                    ],
                    state=InstallState.UNKNOWN,
                )
            )
    return reports


def count_by_availability(components: Iterable[Component]) -> dict[Availability, int]:
    """Count components per availability value."""
    counts: dict[Availability, int] = {}
    for component in components:
        counts[component.availability] = counts.get(component.availability, 0) + 1
    return counts
