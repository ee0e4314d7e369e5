"""dotlink - keep a dotfiles repository symlinked into your home directory."""

__version__ = "0.1.0"
