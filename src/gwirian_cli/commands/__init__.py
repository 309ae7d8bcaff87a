"""CLI commands for gwirian."""

from .account import auth_command, config_group, logout_command
from .install import install_command
from .resources import features, projects, scenario_executions, scenarios

__all__ = [
    "auth_command",
    "logout_command",
    "config_group",
    "install_command",
    "projects",
    "features",
    "scenarios",
    "scenario_executions",
]
