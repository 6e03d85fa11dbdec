import io

import pytest

from paramset.core.models import StepResult
from paramset.core.parameters import get_parameter_value
from paramset.core.steps import (
    GetParameterValueStep,
    SetParameterValueStep,
    StepContext,
    build_step,
    validate_step_arguments,
)


def _context() -> StepContext:
    return StepContext(log=io.StringIO())


def test_get_step_appends_value(host):
    values: list[str] = []
    context = _context()

    ok = GetParameterValueStep("A", "folder/deploy", "1", values).perform(host, context)

    assert ok is True
    assert values == ["old"]
    assert context.result == StepResult.SUCCESS
    assert context.log.getvalue().startswith(
        "GetParameterValue with parameter: A, job: folder/deploy, and job's run: 1"
    )


@pytest.mark.parametrize(
    ("name", "job", "run", "sink", "expected"),
    [
        ("A", "missing", "1", [], "ERROR: Specified job 'missing' was not found!"),
        ("A", "folder/deploy", "0", [], "ERROR: Specified job's run '0' was not found!"),
        ("A", "folder/deploy", "1", None, "ERROR: Specified list to return value to was null!"),
        ("Z", "folder/deploy", "1", [], "ERROR: Specified parameter 'Z' was not found!"),
    ],
)
def test_get_step_failures_flag_context(host, name, job, run, sink, expected):
    context = _context()

    ok = GetParameterValueStep(name, job, run, sink).perform(host, context)

    assert ok is False
    assert context.result == StepResult.FAILURE
    assert expected in context.log.getvalue().splitlines()
    assert not sink


def test_set_step_writes_and_logs(host):
    context = _context()

    ok = SetParameterValueStep("A", "new", "folder/deploy", "1").perform(host, context)

    assert ok is True
    assert get_parameter_value(host, "A", "folder/deploy", "1") == "new"
    assert (
        "SetParameterValue with parameter: A, job: folder/deploy, and job's run: 1"
        in context.log.getvalue()
    )


def test_set_step_missing_job_is_reported(host):
    context = _context()

    ok = SetParameterValueStep("A", "new", "nope", "1").perform(host, context)

    assert ok is False
    assert context.result == StepResult.FAILURE
    assert "ERROR: Specified job 'nope' was not found!" in context.log.getvalue()
    assert get_parameter_value(host, "A", "folder/deploy", "1") == "old"


def test_build_step_maps_pipeline_arguments():
    values: list[str] = []
    get_step = build_step("getParameterValue", name="A", job="j", run=1, list=values)
    set_step = build_step(
        "setParameterValue", name="A", value="v", job="j", run="2", **{"class": "X"}
    )

    assert get_step.output is values
    assert get_step.run == "1"
    assert set_step.class_ == "X"


def test_build_step_rejects_unknown_symbol():
    with pytest.raises(ValueError, match="Unknown step"):
        build_step("deleteParameterValue", name="A")


def test_validate_step_arguments_reports_each_field():
    results = validate_step_arguments(
        "getParameterValue", {"name": "", "job": "deploy", "run": "abc"}
    )

    assert results["name"].message == "Please set a parameter name"
    assert results["job"].is_ok
    assert results["run"].message == "Run ID must be numeric"


@pytest.mark.parametrize(
    "step",
    [
        GetParameterValueStep("A", "folder/deploy", "1", []),
        SetParameterValueStep("A", "new", "folder/deploy", "1"),
    ],
)
def test_corrupt_store_fails_the_step(host, step):
    (host.root / "jobs" / "folder" / "deploy" / "job.json").write_text(
        "{bad", encoding="utf-8"
    )
    context = _context()

    assert step.perform(host, context) is False
    assert context.result == StepResult.FAILURE
    assert "ERROR: Cannot read job file" in context.log.getvalue()
