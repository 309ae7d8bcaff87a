"""Command session: one CLI invocation, one request, one exit code.

Resolves the credential, issues a single API call, and routes the outcome
to the renderer or the error path. Handlers turn the returned code into the
process exit status.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import click

from .client import GwirianClient
from .config import load_config
from .errors import (
    ClassifiedError,
    Outcome,
    Success,
    auth_required,
    classify,
    classify_exception,
)
from .formatters import TableOptions, print_error, render, select_mode, stdout_is_tty
from .shared.logging import get_logger

EXIT_OK = 0
EXIT_FAILURE = 1

logger = get_logger(__name__)

ClientCall = Callable[[GwirianClient], Awaitable[Outcome]]


@dataclass(frozen=True)
class SessionConfig:
    """Per-process options from the root command group."""

    base_url_override: str | None = None
    json_output: bool = False


@dataclass(frozen=True)
class Credential:
    token: str
    base_url: str


def report_error(error: ClassifiedError) -> None:
    print_error(error.message, title=error.title, status_code=error.status_code)


def output(
    data: Any,
    json_output: bool,
    columns: list[str] | None = None,
    table_options: TableOptions | None = None,
) -> None:
    """Render a value to stdout in the mode the terminal calls for."""
    mode = select_mode(data, json_output, columns, stdout_is_tty())
    text = render(data, mode, columns, table_options)
    if text:
        click.echo(text)


class CommandSession:
    """Non-interactive control flow for a single command."""

    def __init__(self, config: SessionConfig):
        self.config = config

    def resolve_credential(self) -> Credential | None:
        """Merge the base URL override over the stored config.

        Returns:
            Credential, or None if no token is stored
        """
        stored = load_config()
        if not stored.has_token:
            return None
        return Credential(
            token=stored.token,
            base_url=self.config.base_url_override or stored.base_url,
        )

    def client_for(self, credential: Credential) -> GwirianClient:
        return GwirianClient(credential.base_url, credential.token)

    async def _invoke(self, credential: Credential, call: ClientCall) -> Outcome:
        async with self.client_for(credential) as client:
            return await call(client)

    def execute(
        self,
        call: ClientCall,
        columns: list[str] | None = None,
        table_options: TableOptions | None = None,
        confirmation: str | None = None,
        extract: Callable[[Any], Any] | None = None,
    ) -> int:
        """Run one API call and present its outcome.

        Args:
            call: Coroutine function issuing exactly one client request
            columns: Columns for list output
            table_options: Table tweaks for interactive output
            confirmation: Fixed line printed instead of the result (deletes)
            extract: Picks the renderable part of a success value

        Returns:
            Process exit code
        """
        credential = self.resolve_credential()
        if credential is None:
            report_error(auth_required())
            return EXIT_FAILURE

        try:
            outcome = asyncio.run(self._invoke(credential, call))
        except Exception as e:
            logger.debug("call_failed", error=repr(e))
            report_error(classify_exception(e))
            return EXIT_FAILURE

        if not isinstance(outcome, Success):
            report_error(classify(outcome))
            return EXIT_FAILURE

        if confirmation:
            click.echo(confirmation)
            return EXIT_OK

        value = extract(outcome.value) if extract else outcome.value
        output(value, self.config.json_output, columns, table_options)
        return EXIT_OK
