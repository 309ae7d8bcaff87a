"""Screen rendering for the navigation session.

render_state() is a pure function of ViewState; the driver decides where
and when the result is painted.
"""

from typing import Any

from rich.console import Group, RenderableType
from rich.text import Text

from .state import Screen, SetupStep, Stage, ViewState

SETUP_TITLE = "Gwirian CLI – Configuration"
SETUP_HINT = "Enter your API token and base URL (optional)."
SETUP_DONE = 'Configuration saved. You can now run "gwirian" again to open the TUI.'

LOADING_LABELS = {
    Stage.PROJECTS: "Loading projects",
    Stage.FEATURES: "Loading features",
    Stage.SCENARIOS: "Loading scenarios",
}

EMPTY_MESSAGES = {
    Stage.PROJECTS: "No projects found.",
    Stage.FEATURES: "No features in this project.",
    Stage.SCENARIOS: "No scenarios in this feature.",
}

SELECT_PROMPTS = {
    Stage.PROJECTS: "Select a project",
    Stage.FEATURES: "Select a feature",
}


def choice_label(stage: Stage, item: dict[str, Any]) -> str:
    """Menu label for a project or feature."""
    key = "name" if stage is Stage.PROJECTS else "title"
    label = item.get(key)
    return str(label) if label else f"#{item.get('id')}"


def choices_for(state: ViewState) -> list[tuple[str, str]]:
    """(label, id) pairs for the current stage's menu."""
    return [(choice_label(state.stage, item), str(item.get("id"))) for item in state.items]


def _scenario_block(scenario: dict[str, Any]) -> list[Text]:
    title = scenario.get("title") or f"Scenario #{scenario.get('id')}"
    lines = [Text(str(title), style="bold")]
    for key, prefix in (("given", "Given"), ("when", "When"), ("then", "Then")):
        if scenario.get(key):
            lines.append(Text(f"{prefix}: {scenario[key]}", style="dim"))
    return lines


def render_setup(state: ViewState) -> RenderableType:
    if state.setup_step is SetupStep.DONE:
        return Text(SETUP_DONE, style="green")

    parts: list[RenderableType] = [
        Text(SETUP_TITLE, style="bold"),
        Text(SETUP_HINT, style="dim"),
    ]
    if state.error:
        parts.append(Text(state.error, style="red"))
    if state.setup_step is SetupStep.TESTING:
        parts.append(Text("Testing connection...", style="yellow"))
    return Group(*parts)


def render_browse(state: ViewState) -> RenderableType:
    if state.error:
        return Text(state.error, style="red")
    if state.loading or not state.loaded:
        return Text(LOADING_LABELS[state.stage])
    if not state.items:
        return Text(EMPTY_MESSAGES[state.stage])
    if state.stage is Stage.SCENARIOS:
        parts: list[RenderableType] = [Text("Scenarios", style="bold")]
        for scenario in state.items:
            parts.append(Text(""))
            parts.extend(_scenario_block(scenario))
        return Group(*parts)
    return Text(SELECT_PROMPTS[state.stage], style="bold")


def render_state(state: ViewState) -> RenderableType:
    """Render the whole screen for a state."""
    if state.screen is Screen.SETUP:
        return render_setup(state)
    return render_browse(state)
