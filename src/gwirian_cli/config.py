"""Credential store for gwirian-cli.

Handles the persisted token and base URL stored as JSON in
$XDG_CONFIG_HOME/gwirian-cli/config.json. A missing or unreadable file
is treated as "no config", never as an error.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .shared.auth import has_usable_token
from .shared.logging import get_logger
from .shared.paths import ensure_config_dir, get_config_file

DEFAULT_BASE_URL = "https://app.gwirian.com"

logger = get_logger(__name__)


@dataclass
class CLIConfig:
    """Persisted CLI configuration."""

    token: str | None = None
    base_url: str = DEFAULT_BASE_URL

    @property
    def has_token(self) -> bool:
        return has_usable_token(self.token)

    def to_dict(self) -> dict[str, Any]:
        """On-disk representation."""
        return {"token": self.token, "baseUrl": self.base_url}


def get_config_path() -> Path:
    """Get the CLI config file path.

    Returns:
        Path to the config.json file
    """
    return get_config_file()


def load_config() -> CLIConfig:
    """Load CLI configuration.

    Reading never creates the file or its directory.

    Returns:
        CLIConfig with stored values, or defaults if the file is missing
        or cannot be parsed
    """
    config_path = get_config_path()
    if not config_path.exists():
        return CLIConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.debug("config_unreadable", path=str(config_path))
        return CLIConfig()

    if not isinstance(data, dict):
        return CLIConfig()

    token = data.get("token")
    base_url = data.get("baseUrl")
    return CLIConfig(
        token=token if has_usable_token(token) else None,
        base_url=base_url if isinstance(base_url, str) and base_url else DEFAULT_BASE_URL,
    )


def _write_config(config: CLIConfig) -> None:
    """Write config with owner-only permissions."""
    ensure_config_dir()
    config_path = get_config_path()
    config_path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
    # Set file permissions to owner-only (600)
    config_path.chmod(0o600)
    logger.debug("config_written", path=str(config_path))


def normalize_base_url(url: str) -> str:
    """Strip surrounding whitespace and one trailing slash."""
    url = url.strip()
    if url.endswith("/"):
        url = url[:-1]
    return url


def set_token(token: str) -> None:
    """Persist the API token, keeping the stored base URL."""
    config = load_config()
    config.token = token
    _write_config(config)


def set_base_url(url: str) -> None:
    """Persist the API base URL, keeping the stored token."""
    config = load_config()
    config.base_url = normalize_base_url(url)
    _write_config(config)


def clear_token() -> None:
    """Remove the stored token. The base URL is kept."""
    config = load_config()
    config.token = None
    _write_config(config)