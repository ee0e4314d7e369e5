"""CLI commands for dotlink.

This package contains all command implementations.
"""

from dotlink.cli.commands import components, init, install, remove, verify

__all__ = ["components", "init", "install", "remove", "verify"]
