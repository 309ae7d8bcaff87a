"""Interactive navigation session.

Drives the Setup and Browse state machines: asks for input, issues one
API call per stage, feeds the results to transition() and paints the
resulting state.
"""

import asyncio
from collections.abc import Awaitable, Callable

from rich.console import Console

from .. import config as store
from ..client import GwirianClient
from ..errors import AUTH_FAILURE_MESSAGE, AuthFailure, Outcome, Success, TransportFailure
from ..session import EXIT_FAILURE, EXIT_OK, Credential
from ..shared.logging import get_logger
from .prompts import Prompter, QuestionaryPrompter
from .screens import SELECT_PROMPTS, choices_for, render_state
from .state import (
    INVALID_TOKEN_ERROR,
    BaseUrlSubmitted,
    CallCompleted,
    CallFailed,
    SelectionMade,
    SetupStep,
    Stage,
    StageEntered,
    TokenSubmitted,
    ValidationFailed,
    ValidationSucceeded,
    ViewState,
    is_finished,
    transition,
)

logger = get_logger(__name__)

UNEXPECTED_RESPONSE_ERROR = "Unexpected response from server."

ClientFactory = Callable[[str, str], GwirianClient]


def failure_message(outcome: Outcome, invalid_token_message: str) -> str:
    if isinstance(outcome, AuthFailure):
        return invalid_token_message
    return outcome.message


class NavigationSession:
    """Setup, then Projects -> Features -> Scenarios drill-down."""

    def __init__(
        self,
        prompter: Prompter | None = None,
        console: Console | None = None,
        client_factory: ClientFactory = GwirianClient,
    ):
        self.prompter = prompter or QuestionaryPrompter()
        self.console = console or Console()
        self.client_factory = client_factory
        self._in_flight: set[Stage] = set()

    def paint(self, state: ViewState) -> None:
        self.console.clear()
        self.console.print(render_state(state))

    async def _call(
        self,
        credential: Credential,
        call: Callable[[GwirianClient], Awaitable[Outcome]],
    ) -> Outcome:
        try:
            async with self.client_factory(credential.base_url, credential.token) as client:
                return await call(client)
        except Exception as e:
            logger.debug("call_failed", error=repr(e))
            return TransportFailure(message=str(e) or e.__class__.__name__)

    async def run(self) -> int:
        """Run Setup when no token is stored, else Browse."""
        current = store.load_config()
        if not current.has_token:
            return await self.run_setup(current.base_url)
        return await self.run_browse(Credential(current.token, current.base_url))

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    async def run_setup(self, default_base_url: str) -> int:
        """Collect and validate a token and base URL.

        Returns:
            EXIT_OK once a validation call succeeds
        """
        state = ViewState.for_setup(default_base_url)
        self.paint(state)

        while state.setup_step is not SetupStep.DONE:
            if state.setup_step is SetupStep.AWAIT_TOKEN:
                value = await self.prompter.ask_token()
                state = transition(state, TokenSubmitted(value))
            elif state.setup_step is SetupStep.AWAIT_BASE_URL:
                value = await self.prompter.ask_base_url(state.base_url or default_base_url)
                state = transition(state, BaseUrlSubmitted(value, default_base_url))
            else:
                state = await self._validate(state)
            self.paint(state)

        return EXIT_OK

    async def _validate(self, state: ViewState) -> ViewState:
        # Persisted before testing so a bad token can be corrected in place
        store.set_token(state.token)
        store.set_base_url(state.base_url)

        credential = Credential(state.token, state.base_url)
        with self.console.status("Testing connection..."):
            outcome = await self._call(credential, lambda c: c.list_projects())

        if isinstance(outcome, Success):
            return transition(state, ValidationSucceeded())
        return transition(state, ValidationFailed(failure_message(outcome, INVALID_TOKEN_ERROR)))

    # -------------------------------------------------------------------------
    # Browse
    # -------------------------------------------------------------------------

    def _stage_call(self, state: ViewState) -> Callable[[GwirianClient], Awaitable[Outcome]]:
        if state.stage is Stage.PROJECTS:
            return lambda c: c.list_projects()
        if state.stage is Stage.FEATURES:
            return lambda c: c.list_features(state.selected_project_id)
        return lambda c: c.list_scenarios(state.selected_project_id, state.selected_feature_id)

    async def load_stage(self, state: ViewState, credential: Credential) -> ViewState:
        """Enter a stage and fetch its list.

        A stage that already has a request in flight is returned unchanged.
        """
        if state.stage in self._in_flight:
            logger.debug("duplicate_load_ignored", stage=state.stage.value)
            return state

        self._in_flight.add(state.stage)
        try:
            state = transition(state, StageEntered())
            with self.console.status(render_state(state)):
                outcome = await self._call(credential, self._stage_call(state))
        finally:
            self._in_flight.discard(state.stage)

        if isinstance(outcome, Success):
            if not isinstance(outcome.value, list):
                logger.debug("unexpected_list_body", stage=state.stage.value)
                return transition(state, CallFailed(UNEXPECTED_RESPONSE_ERROR))
            return transition(state, CallCompleted(tuple(outcome.value)))
        return transition(state, CallFailed(failure_message(outcome, AUTH_FAILURE_MESSAGE)))

    async def run_browse(self, credential: Credential) -> int:
        """Drill down until a listing, an empty stage or an error.

        Returns:
            EXIT_FAILURE if a stage failed, else EXIT_OK
        """
        state = ViewState.for_browse()
        while True:
            state = await self.load_stage(state, credential)
            self.paint(state)
            if is_finished(state):
                return EXIT_FAILURE if state.error else EXIT_OK

            selected = await self.prompter.select(SELECT_PROMPTS[state.stage], choices_for(state))
            state = transition(state, SelectionMade(selected))


def run_tui() -> int:
    """Entry point for `gwirian` with no arguments on a terminal."""
    return asyncio.run(NavigationSession().run())
