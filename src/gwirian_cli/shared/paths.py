"""Path management for gwirian-cli.

Resolves the per-user configuration directory. Honors XDG_CONFIG_HOME,
falling back to ~/.config.
"""

import os
from pathlib import Path

# Directory name under the XDG config base
APP_DIR_NAME = "gwirian-cli"

CONFIG_FILE_NAME = "config.json"


def get_config_dir() -> Path:
    """Get the CLI configuration directory.

    Resolved on every call so XDG_CONFIG_HOME changes are picked up.

    Returns:
        Path to $XDG_CONFIG_HOME/gwirian-cli (or ~/.config/gwirian-cli)
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    base_dir = Path(base) if base else Path.home() / ".config"
    return base_dir / APP_DIR_NAME


def get_config_file() -> Path:
    """Get path to the credential/config file."""
    return get_config_dir() / CONFIG_FILE_NAME


def ensure_config_dir() -> Path:
    """Create the configuration directory if missing.

    Created with mode 0o700 (user-only access). Existing directories
    are left untouched.

    Returns:
        Path to the configuration directory
    """
    config_dir = get_config_dir()
    config_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    return config_dir
