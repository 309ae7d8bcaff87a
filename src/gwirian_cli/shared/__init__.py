"""Shared modules for gwirian-cli.

Functionality used by both the command session and the interactive
navigation session:
- Paths (per-user config directory)
- Auth (bearer headers)
- Logging (structlog setup)
"""

from .auth import auth_headers, has_usable_token, request_headers
from .logging import configure_logging, get_logger, level_for_verbosity
from .paths import ensure_config_dir, get_config_dir, get_config_file

__all__ = [
    # Paths
    "get_config_dir",
    "get_config_file",
    "ensure_config_dir",
    # Auth
    "auth_headers",
    "request_headers",
    "has_usable_token",
    # Logging
    "configure_logging",
    "get_logger",
    "level_for_verbosity",
]
