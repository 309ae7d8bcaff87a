"""CLI main entry point."""

import sys

import click

from .commands import (
    auth_command,
    config_group,
    features,
    install_command,
    logout_command,
    projects,
    scenario_executions,
    scenarios,
)
from .formatters import stdin_is_tty, stdout_is_tty
from .session import SessionConfig
from .shared.logging import configure_logging, level_for_verbosity

EXIT_INTERRUPTED = 130


@click.group(invoke_without_command=True)
@click.option(
    "--base-url",
    envvar="GWIRIAN_BASE_URL",
    help="Override base URL for this run",
)
@click.option("--json", "json_output", is_flag=True, help="Output raw JSON")
@click.option("-v", "--verbose", count=True, help="Increase verbosity")
@click.pass_context
def cli(ctx: click.Context, base_url: str | None, json_output: bool, verbose: int) -> None:
    """CLI for the Gwirian API with an interactive terminal UI.

    Run without arguments on a terminal to browse projects, features and
    scenarios interactively.
    """
    configure_logging(level_for_verbosity(verbose))
    ctx.obj = SessionConfig(
        base_url_override=base_url,
        json_output=json_output,
    )

    if ctx.invoked_subcommand is not None:
        return

    if stdin_is_tty() and stdout_is_tty():
        from .tui import run_tui

        try:
            code = run_tui()
        except KeyboardInterrupt:
            code = EXIT_INTERRUPTED
        sys.exit(code)

    click.echo(ctx.get_help())


cli.add_command(auth_command)
cli.add_command(logout_command)
cli.add_command(config_group)
cli.add_command(install_command)
cli.add_command(projects)
cli.add_command(features)
cli.add_command(scenarios)
cli.add_command(scenario_executions)


def main() -> None:
    """Main entry point."""
    cli(prog_name="gwirian")


if __name__ == "__main__":
    main()
