"""View state and transitions for the interactive navigation session.

ViewState is immutable. The only way to change it is transition(), a pure
function of (state, event). Drivers feed it events for completed calls and
user input; screens render whatever state comes out.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Union

from ..config import normalize_base_url


class Screen(Enum):
    SETUP = "setup"
    BROWSE = "browse"


class Stage(Enum):
    PROJECTS = "projects"
    FEATURES = "features"
    SCENARIOS = "scenarios"


class SetupStep(Enum):
    AWAIT_TOKEN = "await_token"
    AWAIT_BASE_URL = "await_base_url"
    TESTING = "testing"
    DONE = "done"


NEXT_STAGE = {
    Stage.PROJECTS: Stage.FEATURES,
    Stage.FEATURES: Stage.SCENARIOS,
}

EMPTY_TOKEN_ERROR = "Token cannot be empty."
EMPTY_BASE_URL_ERROR = "Base URL cannot be empty."
INVALID_TOKEN_ERROR = "Token is invalid or expired. Please check and try again."


class InvalidTransition(Exception):
    """Event not accepted in the current state."""


@dataclass(frozen=True)
class ViewState:
    """Everything a screen needs to render."""

    screen: Screen
    stage: Stage | None = None
    setup_step: SetupStep | None = None
    selected_project_id: str | None = None
    selected_feature_id: str | None = None
    items: tuple[dict[str, Any], ...] = ()
    loading: bool = False
    loaded: bool = False
    error: str | None = None
    # Setup input, kept until validation finishes
    token: str | None = None
    base_url: str | None = None

    @classmethod
    def for_setup(cls, default_base_url: str) -> "ViewState":
        return cls(
            screen=Screen.SETUP,
            setup_step=SetupStep.AWAIT_TOKEN,
            base_url=default_base_url,
        )

    @classmethod
    def for_browse(cls) -> "ViewState":
        return cls(screen=Screen.BROWSE, stage=Stage.PROJECTS)


# -----------------------------------------------------------------------------
# Events
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class TokenSubmitted:
    value: str


@dataclass(frozen=True)
class BaseUrlSubmitted:
    value: str
    default: str


@dataclass(frozen=True)
class ValidationSucceeded:
    pass


@dataclass(frozen=True)
class ValidationFailed:
    message: str


@dataclass(frozen=True)
class StageEntered:
    pass


@dataclass(frozen=True)
class CallCompleted:
    items: tuple[dict[str, Any], ...]


@dataclass(frozen=True)
class CallFailed:
    message: str


@dataclass(frozen=True)
class SelectionMade:
    item_id: str


Event = Union[
    TokenSubmitted,
    BaseUrlSubmitted,
    ValidationSucceeded,
    ValidationFailed,
    StageEntered,
    CallCompleted,
    CallFailed,
    SelectionMade,
]


# -----------------------------------------------------------------------------
# Transitions
# -----------------------------------------------------------------------------


def _reject(state: ViewState, event: Event) -> InvalidTransition:
    where = state.setup_step if state.screen is Screen.SETUP else state.stage
    return InvalidTransition(f"{type(event).__name__} not valid in {where}")


def _setup_transition(state: ViewState, event: Event) -> ViewState:
    step = state.setup_step

    if isinstance(event, TokenSubmitted) and step is SetupStep.AWAIT_TOKEN:
        token = event.value.strip()
        if not token:
            return replace(state, error=EMPTY_TOKEN_ERROR)
        return replace(state, token=token, setup_step=SetupStep.AWAIT_BASE_URL, error=None)

    if isinstance(event, BaseUrlSubmitted) and step is SetupStep.AWAIT_BASE_URL:
        url = normalize_base_url(event.value or event.default)
        if not url:
            return replace(state, error=EMPTY_BASE_URL_ERROR)
        return replace(
            state, base_url=url, setup_step=SetupStep.TESTING, loading=True, error=None
        )

    if isinstance(event, ValidationSucceeded) and step is SetupStep.TESTING:
        return replace(state, setup_step=SetupStep.DONE, loading=False)

    if isinstance(event, ValidationFailed) and step is SetupStep.TESTING:
        return replace(
            state, setup_step=SetupStep.AWAIT_BASE_URL, loading=False, error=event.message
        )

    raise _reject(state, event)


def _browse_transition(state: ViewState, event: Event) -> ViewState:
    if isinstance(event, StageEntered):
        if state.loading:
            raise _reject(state, event)
        return replace(state, loading=True, loaded=False, error=None, items=())

    if isinstance(event, CallCompleted) and state.loading:
        return replace(state, loading=False, loaded=True, items=tuple(event.items))

    if isinstance(event, CallFailed) and state.loading:
        return replace(state, loading=False, loaded=True, error=event.message)

    selectable = state.loaded and state.error is None and state.items
    if isinstance(event, SelectionMade) and selectable and state.stage in NEXT_STAGE:
        advanced = replace(
            state, stage=NEXT_STAGE[state.stage], items=(), loaded=False
        )
        if state.stage is Stage.PROJECTS:
            return replace(advanced, selected_project_id=event.item_id)
        return replace(advanced, selected_feature_id=event.item_id)

    raise _reject(state, event)


def transition(state: ViewState, event: Event) -> ViewState:
    """Apply one event.

    Raises:
        InvalidTransition: The event is not accepted in this state
    """
    if state.screen is Screen.SETUP:
        return _setup_transition(state, event)
    return _browse_transition(state, event)


def is_finished(state: ViewState) -> bool:
    """True when no further event can move the state forward."""
    if state.screen is Screen.SETUP:
        return state.setup_step is SetupStep.DONE
    if not state.loaded:
        return False
    return state.error is not None or not state.items or state.stage is Stage.SCENARIOS
