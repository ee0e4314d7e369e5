"""Component metadata file I/O.

This module loads component metadata from TOML files and validates it
using Pydantic models. Two sources exist for every component: the
built-in defaults bundled with dotlink, and user overrides from either
the metadata directory or a ``metadata.toml`` inside the component.
"""

import logging
import tomllib
from importlib import resources
from pathlib import Path

from pydantic import ValidationError

from dotlink.core.errors import DotlinkError
from dotlink.models.metadata import ComponentMetadata

logger = logging.getLogger(__name__)

# Name of the metadata file that may live inside a component directory
COMPONENT_METADATA_FILE = "metadata.toml"


class MetadataError(DotlinkError):
    """Base exception for metadata-related errors."""


class MetadataNotFoundError(MetadataError):
    """Raised when a metadata file is not found."""


class MetadataParseError(MetadataError):
    """Raised when a metadata file cannot be parsed."""


class MetadataValidationError(MetadataError):
    """Raised when metadata content is invalid."""


def parse_metadata(text: str, origin: str = "<string>") -> ComponentMetadata:
    """Parse and validate metadata from TOML text.

    Args:
        text: TOML document.
        origin: Description of where the text came from, for errors.

    Returns:
        Validated ComponentMetadata.

    Raises:
        MetadataParseError: If the TOML syntax is invalid.
        MetadataValidationError: If the content doesn't match the schema.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise MetadataParseError(f"Invalid TOML syntax in {origin}: {e}") from e

    try:
        return ComponentMetadata.model_validate(data)
    except ValidationError as e:
        raise MetadataValidationError(f"Invalid metadata in {origin}: {e}") from e


def load_metadata(path: Path) -> ComponentMetadata:
    """Load and validate a metadata file.

    Args:
        path: Path to the metadata file.

    Returns:
        Validated ComponentMetadata.

    Raises:
        MetadataNotFoundError: If the file doesn't exist.
        MetadataParseError: If the TOML syntax is invalid.
        MetadataValidationError: If the content doesn't match the schema.
    """
    if not path.is_file():
        raise MetadataNotFoundError(f"Metadata not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MetadataError(f"Failed to read metadata: {e}") from e

    return parse_metadata(text, str(path))


def load_global_metadata(name: str) -> ComponentMetadata | None:
    """Load the built-in metadata for a component, if dotlink ships one.

    Args:
        name: Component name.

    Returns:
        ComponentMetadata, or None if no built-in file exists.

    Raises:
        MetadataError: If the bundled file is invalid.
    """
    resource = resources.files("dotlink.data").joinpath("metadata").joinpath(f"{name}.toml")
    if not resource.is_file():
        return None
    logger.debug("Loading built-in metadata for %s", name)
    return parse_metadata(resource.read_text(encoding="utf-8"), f"built-in {name}.toml")


def load_custom_metadata(
    name: str,
    dotfiles_root: Path,
    metadata_dir: Path | None = None,
) -> ComponentMetadata | None:
    """Load the user's metadata override for a component.

    The metadata directory takes priority over a ``metadata.toml``
    inside the component itself.

    Args:
        name: Component name.
        dotfiles_root: Root directory containing the component.
        metadata_dir: Directory with per-component override files.

    Returns:
        ComponentMetadata, or None if the user provides none.

    Raises:
        MetadataError: If an override file exists but is invalid.
    """
    candidates: list[Path] = []
    if metadata_dir is not None:
        candidates.append(metadata_dir / f"{name}.toml")
    candidates.append(dotfiles_root / name / COMPONENT_METADATA_FILE)

    for candidate in candidates:
        if candidate.is_file():
            logger.debug("Loading custom metadata for %s from %s", name, candidate)
            return load_metadata(candidate)
    return None
