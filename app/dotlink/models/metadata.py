"""Pydantic models for component metadata files.

Metadata files are TOML documents describing how to detect a
component's application and how to map its source tree onto the
install location. Built-in defaults and user overrides share this
schema and are merged by the component resolver.
"""

from pathlib import PurePosixPath
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Type alias for detection methods
DetectionMethod = Literal["automatic", "find_in_path", "path_exists", "static"]

# Type alias for statically configured availability
StaticAvailability = Literal["available", "unavailable", "always_install", "never_install"]

# Type alias for install base directories
SpecialFolder = Literal["home", "config", "data", "state", "cache", "bin"]


def _validate_relative(value: str) -> str:
    """Normalize a source/target relative path and reject escapes."""
    path = PurePosixPath(value.strip())
    if not str(path) or str(path) == ".":
        msg = "Relative path cannot be empty"
        raise ValueError(msg)
    if path.is_absolute():
        msg = f"Path must be relative: {value}"
        raise ValueError(msg)
    if ".." in path.parts:
        msg = f"Path must not contain '..': {value}"
        raise ValueError(msg)
    return path.as_posix()


class DetectionConfig(BaseModel):
    """Detection section of a metadata file.

    Attributes:
        method: How availability is determined.
        pattern: Substring or regex matched against installed program names
            (automatic only). Defaults to the component name.
        regex: Treat ``pattern`` as a regular expression.
        case_sensitive: Match case-sensitively (automatic only).
        binary: Executable name to look up on PATH (find_in_path only).
        path: Filesystem path whose existence means available (path_exists only).
        availability: Fixed availability (static only).
    """

    model_config = ConfigDict(extra="forbid")

    method: Annotated[DetectionMethod, Field(description="Detection method")] = "automatic"
    pattern: Annotated[str | None, Field(description="Program name pattern")] = None
    regex: Annotated[bool, Field(description="Pattern is a regex")] = False
    case_sensitive: Annotated[bool, Field(description="Case-sensitive matching")] = False
    binary: Annotated[str | None, Field(description="Executable to find in PATH")] = None
    path: Annotated[str | None, Field(description="Path that must exist")] = None
    availability: Annotated[
        StaticAvailability | None,
        Field(description="Static availability"),
    ] = None

    @model_validator(mode="after")
    def validate_method_fields(self) -> "DetectionConfig":
        """Validate that the fields required by the method are present."""
        if self.method == "find_in_path" and not self.binary:
            msg = "Detection method 'find_in_path' requires 'binary'"
            raise ValueError(msg)
        if self.method == "path_exists" and not self.path:
            msg = "Detection method 'path_exists' requires 'path'"
            raise ValueError(msg)
        if self.method == "static" and self.availability is None:
            msg = "Detection method 'static' requires 'availability'"
            raise ValueError(msg)
        return self


class InstallPathConfig(BaseModel):
    """Install path section of a metadata file.

    Attributes:
        special_folder: Base directory the destination is relative to.
        destination: Relative suffix, or an absolute path overriding
            the special folder.
    """

    model_config = ConfigDict(extra="forbid")

    special_folder: Annotated[SpecialFolder, Field(description="Base directory")] = "home"
    destination: Annotated[str | None, Field(description="Destination path")] = None


class ComponentMetadata(BaseModel):
    """Complete metadata for one component.

    Every field is optional so that a custom file can override only
    part of the built-in defaults.
    """

    model_config = ConfigDict(extra="forbid")

    friendly_name: Annotated[str | None, Field(description="Human-readable name")] = None
    base_path: Annotated[str | None, Field(description="Subdirectory holding the tree")] = None
    hide_symlinks: Annotated[bool | None, Field(description="Hide created links")] = None
    detection: Annotated[DetectionConfig | None, Field(description="Detection settings")] = None
    install_path: Annotated[
        InstallPathConfig | None,
        Field(description="Install location settings"),
    ] = None
    ignore_paths: Annotated[
        list[str],
        Field(default_factory=list, description="Paths excluded from linking"),
    ]
    rename_paths: Annotated[
        dict[str, str],
        Field(default_factory=dict, description="Source path to renamed target"),
    ]
    additional_paths: Annotated[
        dict[str, list[str]],
        Field(default_factory=dict, description="Source path to extra targets"),
    ]

    @field_validator("base_path")
    @classmethod
    def validate_base_path(cls, v: str | None) -> str | None:
        """Reject absolute or escaping base paths."""
        if v is None:
            return None
        return _validate_relative(v)

    @field_validator("ignore_paths")
    @classmethod
    def validate_ignore_paths(cls, v: list[str]) -> list[str]:
        """Normalize ignore paths."""
        return [_validate_relative(p) for p in v]

    @field_validator("rename_paths")
    @classmethod
    def validate_rename_paths(cls, v: dict[str, str]) -> dict[str, str]:
        """Normalize both sides of the rename table."""
        return {_validate_relative(k): _validate_relative(t) for k, t in v.items()}

    @field_validator("additional_paths")
    @classmethod
    def validate_additional_paths(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Normalize the additional path table."""
        result: dict[str, list[str]] = {}
        for key, targets in v.items():
            if not targets:
                msg = f"Additional paths for '{key}' cannot be empty"
                raise ValueError(msg)
            result[_validate_relative(key)] = [_validate_relative(t) for t in targets]
        return result
