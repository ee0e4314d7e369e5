"""Path policy: which source paths are skipped and where they link to.

Pure functions over a component's resolved configuration. Relative
paths are always POSIX strings relative to the component's source
root, matching the keys used in metadata files.
"""

from pathlib import Path, PurePosixPath

from dotlink.models.component import Component


def relative_key(root: Path, path: Path) -> str:
    """Return ``path`` relative to ``root`` as a POSIX string.

    The root itself maps to the empty string.
    """
    relative = path.relative_to(root)
    key = PurePosixPath(*relative.parts).as_posix()
    return "" if key == "." else key


def is_ignored(
    component: Component,
    relative_path: str,
    global_ignore_paths: frozenset[str] = frozenset(),
) -> bool:
    """Check if a relative path is excluded from processing.

    Args:
        component: Component whose ignore set applies.
        relative_path: Source-relative path of a file or directory.
        global_ignore_paths: Ignore set shared by every component.

    Returns:
        True if the path appears in either ignore set.
    """
    if not relative_path:
        return False
    return relative_path in component.ignore_paths or relative_path in global_ignore_paths


def _require_install_path(component: Component) -> Path:
    if component.install_path is None:
        msg = f"Component '{component.name}' has no install path"
        raise ValueError(msg)
    return component.install_path


def directory_target(component: Component, relative_dir_path: str) -> Path:
    """Return the target path for a source directory.

    Directories never take part in rename or additional-path mapping.
    """
    install_path = _require_install_path(component)
    if not relative_dir_path:
        return install_path
    return install_path / relative_dir_path


def targets_for(component: Component, relative_file_path: str) -> list[Path]:
    """Return every target path a source file links to.

    The primary target is the renamed path if one is configured, the
    plain relative path otherwise. Additional paths follow in the order
    they were configured.

    Args:
        component: Component owning the file.
        relative_file_path: Source-relative path of the file.

    Returns:
        Non-empty list of absolute target paths.
    """
    install_path = _require_install_path(component)
    primary = component.rename_paths.get(relative_file_path, relative_file_path)
    targets = [install_path / primary]
    for extra in component.additional_paths.get(relative_file_path, ()):
        targets.append(install_path / extra)
    return targets
