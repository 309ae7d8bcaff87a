"""Resource commands - projects, features, scenarios, scenario executions.

Each command issues exactly one API call through a CommandSession and
exits with the session's code.
"""

import sys
from typing import Any

import click

from ..formatters import TableOptions
from ..session import CommandSession, SessionConfig
from ..utils import build_fields

PROJECT_COLUMNS = ["id", "name", "description"]
FEATURE_COLUMNS = ["id", "title", "description"]
SCENARIO_COLUMNS = ["id", "title", "given", "when", "then"]
EXECUTION_COLUMNS = ["id", "status", "notes", "executed_at"]
SEARCH_COLUMNS = ["type", "id", "title", "status"]

SCENARIO_TABLE = TableOptions(word_wrap=True, col_widths=(6, 26, 28, 28, 28))

input_file_option = click.option(
    "--input-file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON/YAML file with fields (flags override)",
)


def _fields(options: dict[str, Any], input_file: str | None) -> dict[str, Any]:
    try:
        return build_fields(options, input_file)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--input-file")


def _run(config: SessionConfig, call, **kwargs: Any) -> None:
    sys.exit(CommandSession(config).execute(call, **kwargs))


def _search_results(value: Any) -> Any:
    if isinstance(value, dict) and "results" in value:
        return value["results"]
    return value


# -----------------------------------------------------------------------------
# Projects
# -----------------------------------------------------------------------------


@click.group()
def projects() -> None:
    """List, show or search projects."""
    pass


@projects.command("list")
@click.pass_obj
def projects_list(config: SessionConfig) -> None:
    """List projects."""
    _run(config, lambda c: c.list_projects(), columns=PROJECT_COLUMNS)


@projects.command("show")
@click.argument("project_id")
@click.pass_obj
def projects_show(config: SessionConfig, project_id: str) -> None:
    """Show project details."""
    _run(config, lambda c: c.get_project(project_id))


@projects.command("search")
@click.argument("project_id")
@click.argument("query")
@click.option("--limit", type=int, help="Maximum number of results")
@click.pass_obj
def projects_search(
    config: SessionConfig, project_id: str, query: str, limit: int | None
) -> None:
    """Search features and scenarios in a project."""
    extract = None if config.json_output else _search_results
    _run(
        config,
        lambda c: c.search_project(project_id, query, limit),
        columns=SEARCH_COLUMNS,
        extract=extract,
    )


# -----------------------------------------------------------------------------
# Features
# -----------------------------------------------------------------------------


def feature_options(func):
    func = click.option("--tag-list", help="Comma-separated tags")(func)
    func = click.option("--description", help="Description")(func)
    func = click.option("--title", help="Title")(func)
    return input_file_option(func)


@click.group()
def features() -> None:
    """List, show, create, update, or delete features."""
    pass


@features.command("list")
@click.argument("project_id")
@click.pass_obj
def features_list(config: SessionConfig, project_id: str) -> None:
    """List features."""
    _run(config, lambda c: c.list_features(project_id), columns=FEATURE_COLUMNS)


@features.command("show")
@click.argument("project_id")
@click.argument("feature_id")
@click.pass_obj
def features_show(config: SessionConfig, project_id: str, feature_id: str) -> None:
    """Show feature."""
    _run(config, lambda c: c.get_feature(project_id, feature_id))


@features.command("create")
@click.argument("project_id")
@feature_options
@click.pass_obj
def features_create(
    config: SessionConfig,
    project_id: str,
    input_file: str | None,
    title: str | None,
    description: str | None,
    tag_list: str | None,
) -> None:
    """Create feature."""
    fields = _fields(
        {"title": title, "description": description, "tag_list": tag_list}, input_file
    )
    _run(config, lambda c: c.create_feature(project_id, fields))


@features.command("update")
@click.argument("project_id")
@click.argument("feature_id")
@feature_options
@click.pass_obj
def features_update(
    config: SessionConfig,
    project_id: str,
    feature_id: str,
    input_file: str | None,
    title: str | None,
    description: str | None,
    tag_list: str | None,
) -> None:
    """Update feature."""
    fields = _fields(
        {"title": title, "description": description, "tag_list": tag_list}, input_file
    )
    _run(config, lambda c: c.update_feature(project_id, feature_id, fields))


@features.command("delete")
@click.argument("project_id")
@click.argument("feature_id")
@click.pass_obj
def features_delete(config: SessionConfig, project_id: str, feature_id: str) -> None:
    """Delete feature."""
    _run(
        config,
        lambda c: c.delete_feature(project_id, feature_id),
        confirmation="Feature deleted.",
    )


# -----------------------------------------------------------------------------
# Scenarios
# -----------------------------------------------------------------------------


def scenario_options(func):
    func = click.option("--position", type=int, help="Position")(func)
    func = click.option("--then", "then_", help="Then")(func)
    func = click.option("--when", help="When")(func)
    func = click.option("--given", help="Given")(func)
    func = click.option("--title", help="Title")(func)
    return input_file_option(func)


def _scenario_fields(input_file: str | None, **options: Any) -> dict[str, Any]:
    options["then"] = options.pop("then_")
    return _fields(options, input_file)


@click.group()
def scenarios() -> None:
    """List, show, create, update, or delete scenarios."""
    pass


@scenarios.command("list")
@click.argument("project_id")
@click.argument("feature_id")
@click.pass_obj
def scenarios_list(config: SessionConfig, project_id: str, feature_id: str) -> None:
    """List scenarios."""
    _run(
        config,
        lambda c: c.list_scenarios(project_id, feature_id),
        columns=SCENARIO_COLUMNS,
        table_options=SCENARIO_TABLE,
    )


@scenarios.command("show")
@click.argument("project_id")
@click.argument("feature_id")
@click.argument("scenario_id")
@click.pass_obj
def scenarios_show(
    config: SessionConfig, project_id: str, feature_id: str, scenario_id: str
) -> None:
    """Show scenario."""
    _run(config, lambda c: c.get_scenario(project_id, feature_id, scenario_id))


@scenarios.command("create")
@click.argument("project_id")
@click.argument("feature_id")
@scenario_options
@click.pass_obj
def scenarios_create(
    config: SessionConfig,
    project_id: str,
    feature_id: str,
    input_file: str | None,
    **options: Any,
) -> None:
    """Create scenario."""
    fields = _scenario_fields(input_file, **options)
    _run(config, lambda c: c.create_scenario(project_id, feature_id, fields))


@scenarios.command("update")
@click.argument("project_id")
@click.argument("feature_id")
@click.argument("scenario_id")
@scenario_options
@click.pass_obj
def scenarios_update(
    config: SessionConfig,
    project_id: str,
    feature_id: str,
    scenario_id: str,
    input_file: str | None,
    **options: Any,
) -> None:
    """Update scenario."""
    fields = _scenario_fields(input_file, **options)
    _run(config, lambda c: c.update_scenario(project_id, feature_id, scenario_id, fields))


@scenarios.command("delete")
@click.argument("project_id")
@click.argument("feature_id")
@click.argument("scenario_id")
@click.pass_obj
def scenarios_delete(
    config: SessionConfig, project_id: str, feature_id: str, scenario_id: str
) -> None:
    """Delete scenario."""
    _run(
        config,
        lambda c: c.delete_scenario(project_id, feature_id, scenario_id),
        confirmation="Scenario deleted.",
    )


# -----------------------------------------------------------------------------
# Scenario executions
# -----------------------------------------------------------------------------


def execution_options(func):
    func = click.option("--executed-at", help="Executed at (ISO date)")(func)
    func = click.option("--notes", help="Notes")(func)
    func = click.option("--status", help="Status")(func)
    return input_file_option(func)


@click.group("scenario-executions")
def scenario_executions() -> None:
    """List, show, create, update, or delete scenario executions."""
    pass


@scenario_executions.command("list")
@click.argument("project_id")
@click.argument("feature_id")
@click.argument("scenario_id")
@click.pass_obj
def executions_list(
    config: SessionConfig, project_id: str, feature_id: str, scenario_id: str
) -> None:
    """List scenario executions."""
    _run(
        config,
        lambda c: c.list_scenario_executions(project_id, feature_id, scenario_id),
        columns=EXECUTION_COLUMNS,
    )


@scenario_executions.command("show")
@click.argument("project_id")
@click.argument("feature_id")
@click.argument("scenario_id")
@click.argument("execution_id")
@click.pass_obj
def executions_show(
    config: SessionConfig,
    project_id: str,
    feature_id: str,
    scenario_id: str,
    execution_id: str,
) -> None:
    """Show scenario execution."""
    _run(
        config,
        lambda c: c.get_scenario_execution(project_id, feature_id, scenario_id, execution_id),
    )


@scenario_executions.command("create")
@click.argument("project_id")
@click.argument("feature_id")
@click.argument("scenario_id")
@execution_options
@click.pass_obj
def executions_create(
    config: SessionConfig,
    project_id: str,
    feature_id: str,
    scenario_id: str,
    input_file: str | None,
    status: str | None,
    notes: str | None,
    executed_at: str | None,
) -> None:
    """Create scenario execution."""
    fields = _fields(
        {"status": status, "notes": notes, "executed_at": executed_at}, input_file
    )
    _run(
        config,
        lambda c: c.create_scenario_execution(project_id, feature_id, scenario_id, fields),
    )


@scenario_executions.command("update")
@click.argument("project_id")
@click.argument("feature_id")
@click.argument("scenario_id")
@click.argument("execution_id")
@execution_options
@click.pass_obj
def executions_update(
    config: SessionConfig,
    project_id: str,
    feature_id: str,
    scenario_id: str,
    execution_id: str,
    input_file: str | None,
    status: str | None,
    notes: str | None,
    executed_at: str | None,
) -> None:
    """Update scenario execution."""
    fields = _fields(
        {"status": status, "notes": notes, "executed_at": executed_at}, input_file
    )
    _run(
        config,
        lambda c: c.update_scenario_execution(
            project_id, feature_id, scenario_id, execution_id, fields
        ),
    )


@scenario_executions.command("delete")
@click.argument("project_id")
@click.argument("feature_id")
@click.argument("scenario_id")
@click.argument("execution_id")
@click.pass_obj
def executions_delete(
    config: SessionConfig,
    project_id: str,
    feature_id: str,
    scenario_id: str,
    execution_id: str,
) -> None:
    """Delete scenario execution."""
    _run(
        config,
        lambda c: c.delete_scenario_execution(
            project_id, feature_id, scenario_id, execution_id
        ),
        confirmation="Scenario execution deleted.",
    )
