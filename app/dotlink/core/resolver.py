"""Component resolution: metadata + detection -> Component.

Merges the built-in ("global") and user ("custom") metadata for a
component, runs detection exactly once, and fills in the install path
and path tables the reconciliation engine needs.
"""

import logging
import re
import subprocess
from collections.abc import Collection
from pathlib import Path

from dotlink.core.detection import Detector
from dotlink.core.inspector import canonical_path
from dotlink.core.paths import get_special_folder
from dotlink.models.component import Availability, Component
from dotlink.models.metadata import ComponentMetadata, DetectionConfig, InstallPathConfig

logger = logging.getLogger(__name__)


def merge_metadata(
    global_meta: ComponentMetadata | None,
    custom_meta: ComponentMetadata | None,
) -> ComponentMetadata | None:
    """Merge built-in and custom metadata for one component.

    Scalar fields and whole sections (detection, install_path) set in
    the custom metadata replace the built-in ones. Path tables are
    combined, with custom entries winning on key collisions.

    Args:
        global_meta: Built-in metadata, if any.
        custom_meta: User override metadata, if any.

    Returns:
        Merged metadata, or None if neither source exists.
    """
    if custom_meta is None:
        return global_meta
    if global_meta is None:
        return custom_meta

    def pick(field: str) -> object:
        value = getattr(custom_meta, field)
        return value if value is not None else getattr(global_meta, field)

    ignore_paths = list(global_meta.ignore_paths)
    ignore_paths.extend(p for p in custom_meta.ignore_paths if p not in ignore_paths)

    return ComponentMetadata.model_validate(
        {
            "friendly_name": pick("friendly_name"),
            "base_path": pick("base_path"),
            "hide_symlinks": pick("hide_symlinks"),
            "detection": pick("detection"),
            "install_path": pick("install_path"),
            "ignore_paths": ignore_paths,
            "rename_paths": {**global_meta.rename_paths, **custom_meta.rename_paths},
            "additional_paths": {**global_meta.additional_paths, **custom_meta.additional_paths},
        }
    )


def resolve_install_path(config: InstallPathConfig | None) -> Path:
    """Resolve the install path settings into an absolute directory.

    Args:
        config: Install path settings; None means the home directory.

    Returns:
        Absolute install directory. An absolute destination overrides
        the special folder; a relative one is appended to it.
    """
    if config is None:
        return Path.home()

    base = get_special_folder(config.special_folder)
    if not config.destination:
        return base

    destination = Path(config.destination).expanduser()
    if destination.is_absolute():
        return destination
    return base / destination


def resolve_component(
    name: str,
    dotfiles_root: Path,
    global_meta: ComponentMetadata | None = None,
    custom_meta: ComponentMetadata | None = None,
    *,
    detector: Detector | None = None,
    ignored_components: Collection[str] = (),
) -> Component:
    """Build a fully configured Component.

    Args:
        name: Component name (its directory name under the dotfiles root).
        dotfiles_root: Directory containing all components.
        global_meta: Built-in metadata, if any.
        custom_meta: User override metadata, if any.
        detector: Detector to use; a fresh one is created if None.
        ignored_components: Names the user never wants processed.

    Returns:
        Component with availability set. Installable components also
        have their install path resolved.
    """
    component = Component(name=name, source_path=canonical_path(dotfiles_root / name))

    if name in ignored_components:
        component.availability = Availability.IGNORED
        return component

    metadata = merge_metadata(global_meta, custom_meta)
    if metadata is None:
        logger.debug("No metadata for component %s", name)
        component.availability = Availability.NO_LOGIC
        return component

    component.friendly_name = metadata.friendly_name
    if metadata.base_path:
        component.source_path = canonical_path(dotfiles_root / name / metadata.base_path)

    detector = detector or Detector()
    try:
        availability, detected_name = detector.detect(name, metadata.detection or DetectionConfig())
    except (re.error, OSError, RuntimeError, subprocess.SubprocessError) as e:
        logger.warning("Detection failed for component %s: %s", name, e)
        availability, detected_name = Availability.DETECTION_FAILURE, None

    component.availability = availability
    if component.friendly_name is None and detected_name:
        component.friendly_name = detected_name

    component.hide_symlinks = bool(metadata.hide_symlinks)
    component.ignore_paths = frozenset(metadata.ignore_paths)
    component.rename_paths = dict(metadata.rename_paths)
    component.additional_paths = {k: tuple(v) for k, v in metadata.additional_paths.items()}

    if component.is_installable:
        component.install_path = resolve_install_path(metadata.install_path)

    logger.debug("Resolved component %s: %s", name, component.availability.value)
    return component
