"""XDG-compliant path management for dotlink.

This module provides standardized paths following the XDG Base Directory
Specification for dotlink's own configuration, and resolves the
"special folders" that component metadata may install into.

XDG defaults:
- Config: ~/.config/dotlink/
- Metadata overrides: ~/.config/dotlink/metadata/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "dotlink"

# Special folder name -> (XDG environment variable, default under home)
_SPECIAL_FOLDERS: dict[str, tuple[str | None, str]] = {
    "home": (None, ""),
    "config": ("XDG_CONFIG_HOME", ".config"),
    "data": ("XDG_DATA_HOME", ".local/share"),
    "state": ("XDG_STATE_HOME", ".local/state"),
    "cache": ("XDG_CACHE_HOME", ".cache"),
    "bin": (None, ".local/bin"),
}


def _get_xdg_base(env_var: str | None, default_subdir: str) -> Path:
    """Get an XDG base directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name, or None if not overridable.
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the base directory (not application-specific).
    """
    if env_var:
        base = os.environ.get(env_var)
        if base:
            return Path(base)
    home = Path.home()
    return home / default_subdir if default_subdir else home


def get_special_folder(name: str) -> Path:
    """Resolve a special folder name to an absolute directory.

    Args:
        name: One of home, config, data, state, cache, bin.

    Returns:
        Absolute path of the folder.

    Raises:
        ValueError: If the name is not a known special folder.
    """
    try:
        env_var, default_subdir = _SPECIAL_FOLDERS[name]
    except KeyError:
        msg = f"Unknown special folder: {name}"
        raise ValueError(msg) from None
    return _get_xdg_base(env_var, default_subdir)


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/dotlink/ (or XDG_CONFIG_HOME/dotlink/).
    """
    return get_special_folder("config") / APP_NAME


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/dotlink/settings.toml.
    """
    return get_config_dir() / "settings.toml"


def get_metadata_dir() -> Path:
    """Get the directory holding user metadata overrides.

    Returns:
        Path to ~/.config/dotlink/metadata/.
    """
    return get_config_dir() / "metadata"


def get_default_dotfiles_root() -> Path:
    """Get the default dotfiles root directory.

    Returns:
        Path to ~/dotfiles.
    """
    return Path.home() / "dotfiles"
