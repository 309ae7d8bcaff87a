"""Gwirian CLI - Command-line and terminal UI client for the Gwirian API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gwirian-cli")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"  # Fallback for editable installs without metadata

from .main import main

__all__ = ["main", "__version__"]
