import pytest

from paramset.core.validation import check_job, check_name, check_run


def test_check_job_requires_value():
    assert check_job("").message == "Please set a job name"
    assert check_job(None).kind == "error"
    assert check_job("folder/deploy").is_ok


def test_check_name_requires_value():
    assert check_name("").message == "Please set a parameter name"
    assert check_name("VERSION").is_ok


@pytest.mark.parametrize("value", ["1", "42", "-3", "+7"])
def test_check_run_accepts_integers(value: str):
    assert check_run(value).is_ok


@pytest.mark.parametrize("value", ["abc", "1.5", " 1", "lastBuild", "1_000"])
def test_check_run_rejects_non_integers(value: str):
    assert check_run(value).message == "Run ID must be numeric"


def test_check_run_requires_value():
    assert check_run("").message == "Please set a run ID"
