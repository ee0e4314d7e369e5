"""Bundled data files for dotlink (theme and built-in component metadata)."""
