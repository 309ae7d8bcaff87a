"""Account commands - auth, logout, config.

These are the only commands that write the credential store.
"""

import asyncio
import json
import sys

import click

from .. import config as store
from ..client import GwirianClient
from ..errors import AuthFailure, Success
from ..formatters import print_error
from ..session import SessionConfig


@click.command("auth")
@click.option("-t", "--test", "test_token", is_flag=True, help="Test token with a projects request")
@click.pass_obj
def auth_command(config: SessionConfig, test_token: bool) -> None:
    """Set API token (prompted, optionally test connection)."""
    token = click.prompt("Token", default="", show_default=False, hide_input=True).strip()
    if not token:
        print_error("Token cannot be empty.", title="Auth")
        sys.exit(1)

    store.set_token(token)
    click.echo("Token saved.")

    if not test_token:
        return

    base_url = config.base_url_override or store.load_config().base_url

    async def _test():
        async with GwirianClient(base_url, token) as client:
            return await client.list_projects()

    outcome = asyncio.run(_test())
    if isinstance(outcome, Success):
        click.echo("Connection successful.")
        return
    if isinstance(outcome, AuthFailure):
        print_error("Token is invalid or expired.", title="Auth")
    else:
        print_error(f"Connection failed: {outcome.message}", title="Connection failed")
    sys.exit(1)


@click.command("logout")
def logout_command() -> None:
    """Clear stored API token."""
    store.clear_token()
    click.echo("Token cleared.")


@click.group("config")
def config_group() -> None:
    """View or set configuration."""
    pass


@config_group.command("get")
@click.pass_obj
def config_get(config: SessionConfig) -> None:
    """Show base URL and token status."""
    current = store.load_config()
    token_status = "set" if current.has_token else "not set"

    if config.json_output:
        click.echo(json.dumps({"baseUrl": current.base_url, "token": token_status}, indent=2))
        return

    click.echo(f"Base URL: {current.base_url}")
    click.echo(f"Token: {token_status}")


@config_group.group("set")
def config_set() -> None:
    """Set a config value."""
    pass


@config_set.command("base-url")
@click.argument("url")
def config_set_base_url(url: str) -> None:
    """Set API base URL."""
    store.set_base_url(url)
    click.echo(f"Base URL set to: {url}")
