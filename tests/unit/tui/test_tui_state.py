"""Unit tests for navigation view state transitions."""

import pytest

from gwirian_cli.tui.state import (
    EMPTY_BASE_URL_ERROR,
    EMPTY_TOKEN_ERROR,
    BaseUrlSubmitted,
    CallCompleted,
    CallFailed,
    InvalidTransition,
    Screen,
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

DEFAULT_URL = "https://app.gwirian.com"


def _loaded(stage_state: ViewState, items) -> ViewState:
    state = transition(stage_state, StageEntered())
    return transition(state, CallCompleted(tuple(items)))


@pytest.mark.tui
class TestSetupTransitions:
    def test_initial_state(self):
        state = ViewState.for_setup(DEFAULT_URL)

        assert state.screen is Screen.SETUP
        assert state.setup_step is SetupStep.AWAIT_TOKEN
        assert state.base_url == DEFAULT_URL
        assert not is_finished(state)

    def test_token_is_trimmed(self):
        state = transition(ViewState.for_setup(DEFAULT_URL), TokenSubmitted("  abc  "))

        assert state.token == "abc"
        assert state.setup_step is SetupStep.AWAIT_BASE_URL

    def test_empty_token_stays_with_error(self):
        start = ViewState.for_setup(DEFAULT_URL)
        state = transition(start, TokenSubmitted("   "))

        assert state.setup_step is SetupStep.AWAIT_TOKEN
        assert state.error == EMPTY_TOKEN_ERROR
        assert state.token is None

    def test_empty_base_url_takes_default(self):
        state = transition(ViewState.for_setup(DEFAULT_URL), TokenSubmitted("abc"))
        state = transition(state, BaseUrlSubmitted("", DEFAULT_URL))

        assert state.setup_step is SetupStep.TESTING
        assert state.base_url == DEFAULT_URL
        assert state.loading

    def test_base_url_normalized(self):
        state = transition(ViewState.for_setup(DEFAULT_URL), TokenSubmitted("abc"))
        state = transition(state, BaseUrlSubmitted(" https://staging.test/ ", DEFAULT_URL))

        assert state.base_url == "https://staging.test"

    def test_blank_base_url_with_no_default(self):
        state = transition(ViewState.for_setup(""), TokenSubmitted("abc"))
        state = transition(state, BaseUrlSubmitted("", ""))

        assert state.setup_step is SetupStep.AWAIT_BASE_URL
        assert state.error == EMPTY_BASE_URL_ERROR

    def test_validation_success_is_done(self):
        state = transition(ViewState.for_setup(DEFAULT_URL), TokenSubmitted("abc"))
        state = transition(state, BaseUrlSubmitted("", DEFAULT_URL))
        state = transition(state, ValidationSucceeded())

        assert state.setup_step is SetupStep.DONE
        assert is_finished(state)

    def test_validation_failure_returns_to_base_url(self):
        state = transition(ViewState.for_setup(DEFAULT_URL), TokenSubmitted("abc"))
        state = transition(state, BaseUrlSubmitted("https://x.test", DEFAULT_URL))
        state = transition(state, ValidationFailed("Token is invalid"))

        assert state.setup_step is SetupStep.AWAIT_BASE_URL
        assert state.error == "Token is invalid"
        assert state.token == "abc"
        assert state.base_url == "https://x.test"
        assert not state.loading

    def test_out_of_order_event_rejected(self):
        with pytest.raises(InvalidTransition):
            transition(ViewState.for_setup(DEFAULT_URL), ValidationSucceeded())

    def test_states_are_not_mutated(self):
        start = ViewState.for_setup(DEFAULT_URL)
        transition(start, TokenSubmitted("abc"))

        assert start.token is None
        assert start.setup_step is SetupStep.AWAIT_TOKEN


@pytest.mark.tui
class TestBrowseTransitions:
    def test_initial_state_is_projects(self):
        state = ViewState.for_browse()

        assert state.stage is Stage.PROJECTS
        assert not is_finished(state)

    def test_stage_entered_starts_loading(self):
        state = transition(ViewState.for_browse(), StageEntered())

        assert state.loading
        assert not state.loaded

    def test_second_load_while_loading_rejected(self):
        state = transition(ViewState.for_browse(), StageEntered())

        with pytest.raises(InvalidTransition):
            transition(state, StageEntered())

    def test_selection_while_loading_rejected(self):
        state = transition(ViewState.for_browse(), StageEntered())

        with pytest.raises(InvalidTransition):
            transition(state, SelectionMade("1"))

    def test_project_selection_advances_to_features(self):
        state = _loaded(ViewState.for_browse(), [{"id": 1, "name": "Shop"}])
        state = transition(state, SelectionMade("1"))

        assert state.stage is Stage.FEATURES
        assert state.selected_project_id == "1"
        assert state.items == ()
        assert not state.loaded

    def test_feature_selection_advances_to_scenarios(self):
        state = _loaded(ViewState.for_browse(), [{"id": 1}])
        state = transition(state, SelectionMade("1"))
        state = _loaded(state, [{"id": 7, "title": "Cart"}])
        state = transition(state, SelectionMade("7"))

        assert state.stage is Stage.SCENARIOS
        assert state.selected_project_id == "1"
        assert state.selected_feature_id == "7"

    def test_scenarios_are_terminal(self):
        state = _loaded(ViewState.for_browse(), [{"id": 1}])
        state = _loaded(transition(state, SelectionMade("1")), [{"id": 7}])
        state = _loaded(transition(state, SelectionMade("7")), [{"id": 9, "title": "Pay"}])

        assert is_finished(state)
        with pytest.raises(InvalidTransition):
            transition(state, SelectionMade("9"))

    def test_empty_list_is_finished(self):
        state = _loaded(ViewState.for_browse(), [])

        assert is_finished(state)
        with pytest.raises(InvalidTransition):
            transition(state, SelectionMade("1"))

    def test_failure_is_finished(self):
        state = transition(ViewState.for_browse(), StageEntered())
        state = transition(state, CallFailed("Boom"))

        assert state.error == "Boom"
        assert is_finished(state)
        with pytest.raises(InvalidTransition):
            transition(state, SelectionMade("1"))

    def test_reload_clears_error(self):
        state = transition(ViewState.for_browse(), StageEntered())
        state = transition(state, CallFailed("Boom"))
        state = transition(state, StageEntered())

        assert state.error is None
        assert state.loading
