import pytest
import typer
from typer.testing import CliRunner

from paramset.cli.cli import app
from paramset.cli.common.assignments import parse_assignments, to_definitions
from paramset.cli.common.exits import exit_from_exc
from paramset.core.errors import HostStoreError
from paramset.core.models import ParametersAction, ParameterValue
from paramset.core.parameters import get_parameter_value

runner = CliRunner()


@pytest.fixture
def state(host, tmp_path):
    return str(tmp_path / "state")


def _params(state: str, *args: str):
    return runner.invoke(app, ["params", "--state-dir", state, *args])


def test_get_prints_value(state):
    result = _params(state, "get", "A", "--job", "folder/deploy", "--run", "1")

    assert result.exit_code == 0
    assert result.output.strip().splitlines()[-1] == "old"


def test_get_missing_parameter_fails(state):
    result = _params(state, "get", "Z", "--job", "folder/deploy", "--run", "1")

    assert result.exit_code == 1
    assert "Specified parameter 'Z' was not found!" in result.output


def test_get_rejects_non_numeric_run(state):
    result = _params(state, "get", "A", "--job", "folder/deploy", "--run", "abc")

    assert result.exit_code == 2
    assert "Run ID must be numeric" in result.output


def test_set_then_get(state, host):
    result = _params(state, "set", "NEW", "v", "--job", "folder/deploy", "--run", "1")

    assert result.exit_code == 0
    assert get_parameter_value(host, "NEW", "folder/deploy", "1") == "v"


def test_update_applies_batch(state, host):
    result = _params(
        state,
        "update",
        "--job", "folder/deploy",
        "--run", "1",
        "-P", "A=x",
        "-P", "C=y",
        "--no-confirm",
    )

    assert result.exit_code == 0
    assert get_parameter_value(host, "A", "folder/deploy", "1") == "x"
    assert get_parameter_value(host, "C", "folder/deploy", "1") == "y"


def test_update_unknown_parameter_fails(state, host):
    result = _params(
        state,
        "update",
        "--job", "folder/deploy",
        "--run", "1",
        "-P", "B=x",
        "--no-confirm",
    )

    assert result.exit_code == 1
    assert "Provided parameter 'B' isn't defined" in result.output
    assert get_parameter_value(host, "A", "folder/deploy", "1") == "old"


def test_update_rejects_bad_assignment(state):
    result = _params(
        state, "update", "--job", "folder/deploy", "--run", "1", "-P", "broken"
    )

    assert result.exit_code == 2


def test_jobs_create_and_run(tmp_path):
    state = str(tmp_path / "fresh")

    created = runner.invoke(
        app, ["jobs", "--state-dir", state, "create", "build", "-P", "VERSION=1.0"]
    )
    recorded = runner.invoke(
        app, ["jobs", "--state-dir", state, "run", "build", "-P", "VERSION=2.0"]
    )
    shown = runner.invoke(
        app,
        ["params", "--state-dir", state, "get", "VERSION", "--job", "build", "--run", "1"],
    )

    assert created.exit_code == 0
    assert recorded.exit_code == 0
    assert shown.output.strip().splitlines()[-1] == "2.0"


def test_jobs_run_unknown_job(tmp_path):
    result = runner.invoke(app, ["jobs", "--state-dir", str(tmp_path), "run", "ghost"])

    assert result.exit_code == 1
    assert "Specified job 'ghost' was not found!" in result.output


def test_parse_assignments_splits_on_first_equals():
    assert parse_assignments(["A=1", "URL=http://x?a=b", "A=2"]) == {
        "A": "2",
        "URL": "http://x?a=b",
    }


@pytest.mark.parametrize("item", ["broken", "=value"])
def test_parse_assignments_rejects_invalid(item):
    with pytest.raises(ValueError, match="Invalid assignment"):
        parse_assignments([item])


def test_to_definitions():
    definitions = to_definitions(["A=a0"])

    assert [(d.name, d.default) for d in definitions] == [("A", "a0")]


def test_show_prints_markup_like_class_verbatim(state, host):
    run = host.get_run(host.get_job("folder/deploy"), "1")
    host.add_or_replace_action(
        run, ParametersAction((ParameterValue("A", "v", kind="[/x]"),))
    )

    result = _params(state, "show", "--job", "folder/deploy", "--run", "1")

    assert result.exit_code == 0
    assert "[/x]" in result.output


def test_exit_from_exc_chains_the_cause():
    cause = HostStoreError("Cannot read job file")

    with pytest.raises(typer.Exit) as info:
        exit_from_exc(cause, message=str(cause), code=1)

    assert info.value.exit_code == 1
    assert info.value.__cause__ is cause
