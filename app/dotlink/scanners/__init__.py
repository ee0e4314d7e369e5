"""Installed program scanners for different package managers.

This module exports the scanner classes used by automatic detection.
"""

from dotlink.scanners.apt import AptScanner
from dotlink.scanners.base import Scanner
from dotlink.scanners.flatpak import FlatpakScanner
from dotlink.scanners.snap import SnapScanner

__all__ = ["AptScanner", "FlatpakScanner", "Scanner", "SnapScanner"]
