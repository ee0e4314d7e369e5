"""User settings for dotlink.

Settings are stored in ~/.config/dotlink/settings.toml and control where
the dotfiles live, which paths are ignored in every component, and
whether nested symlinks may be traversed. A missing settings file means
all defaults apply.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dotlink.core.errors import DotlinkError
from dotlink.core.paths import get_default_dotfiles_root, get_metadata_dir, get_settings_path
from dotlink.models.report import DEFAULT_GLOBAL_IGNORE_PATHS, ReconciliationContext

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """dotlink user settings.

    Attributes:
        dotfiles_root: Directory containing one subdirectory per component.
        global_ignore_paths: Relative paths ignored in every component.
        allow_nested_symlinks: Traverse foreign directory symlinks found at
            target positions instead of reporting them as conflicts.
        ignored_components: Component names that are never processed.
        metadata_dir: Directory with user metadata overrides. If None, uses
            ~/.config/dotlink/metadata.
    """

    model_config = ConfigDict(extra="forbid")

    dotfiles_root: Annotated[
        Path,
        Field(default_factory=get_default_dotfiles_root, description="Dotfiles directory"),
    ]
    global_ignore_paths: Annotated[
        list[str],
        Field(
            default_factory=lambda: sorted(DEFAULT_GLOBAL_IGNORE_PATHS),
            description="Paths ignored in every component",
        ),
    ]
    allow_nested_symlinks: Annotated[
        bool,
        Field(description="Traverse foreign directory symlinks"),
    ] = False
    ignored_components: Annotated[
        list[str],
        Field(default_factory=list, description="Components never processed"),
    ]
    metadata_dir: Annotated[
        Path | None,
        Field(description="Metadata override directory (None = default)"),
    ] = None

    @property
    def effective_dotfiles_root(self) -> Path:
        """Return the dotfiles root with ``~`` expanded."""
        return self.dotfiles_root.expanduser()

    @property
    def effective_metadata_dir(self) -> Path:
        """Return the configured metadata directory or the default one."""
        if self.metadata_dir is not None:
            return self.metadata_dir.expanduser()
        return get_metadata_dir()

    def to_context(
        self,
        *,
        simulate: bool = False,
        can_symlink: bool = True,
        allow_nested_symlinks: bool | None = None,
    ) -> ReconciliationContext:
        """Build the reconciliation context for a pass.

        Args:
            simulate: Evaluate without modifying the filesystem.
            can_symlink: Result of the symlink capability check.
            allow_nested_symlinks: Override for the configured value.

        Returns:
            Immutable ReconciliationContext.
        """
        nested = self.allow_nested_symlinks
        if allow_nested_symlinks is not None:
            nested = allow_nested_symlinks
        return ReconciliationContext(
            global_ignore_paths=frozenset(self.global_ignore_paths),
            allow_nested_symlinks=nested,
            can_symlink=can_symlink,
            simulate=simulate,
        )


class SettingsError(DotlinkError):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings. Defaults if the file doesn't exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save to. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def _settings_to_dict(settings: Settings) -> dict[str, object]:
    """Convert Settings to a dictionary for TOML serialization.

    None values are omitted since TOML has no null.
    """
    result: dict[str, object] = {
        "dotfiles_root": str(settings.dotfiles_root),
        "global_ignore_paths": list(settings.global_ignore_paths),
        "allow_nested_symlinks": settings.allow_nested_symlinks,
        "ignored_components": list(settings.ignored_components),
    }
    if settings.metadata_dir is not None:
        result["metadata_dir"] = str(settings.metadata_dir)
    return result
