"""Data models for dotlink.

This module exports the core data structures used throughout the application.
"""

from dotlink.models.component import INSTALLABLE, Availability, Component, InstallState
from dotlink.models.metadata import ComponentMetadata, DetectionConfig, InstallPathConfig
from dotlink.models.package import InstalledProgram, PackageSource
from dotlink.models.report import (
    DEFAULT_GLOBAL_IGNORE_PATHS,
    MessageLevel,
    ReconcileMessage,
    ReconcileMode,
    ReconcileReport,
    ReconciliationContext,
)

__all__ = [
    "DEFAULT_GLOBAL_IGNORE_PATHS",
    "INSTALLABLE",
    "Availability",
    "Component",
    "ComponentMetadata",
    "DetectionConfig",
    "InstallPathConfig",
    "InstallState",
    "InstalledProgram",
    "MessageLevel",
    "PackageSource",
    "ReconcileMessage",
    "ReconcileMode",
    "ReconcileReport",
    "ReconciliationContext",
]
