"""Core parameter read and write logic.

This module contains the domain-level operations for reading a parameter
value from a run, overwriting a single value, and applying a validated batch
of updates. It is intentionally free of pipeline, HTTP and CLI concerns:
failures are raised as `ParameterError` subclasses and each frontend decides
how to report them.
"""

from __future__ import annotations

import logging
from typing import Iterable

from paramset.core.errors import (
    JobNotFound,
    NoParametersDefined,
    ParameterNotDefined,
    ParameterNotFound,
    RunNotFound,
)
from paramset.core.host import HostAdapter
from paramset.core.models import (
    STRING_PARAMETER_KIND,
    Job,
    ParametersAction,
    ParameterValue,
    Run,
)

logger = logging.getLogger(__name__)


def resolve_run(host: HostAdapter, job_name: str, run_id: str) -> tuple[Job, Run]:
    """
    Resolve a job by full name and one of its runs by identifier.

    Raises:
        JobNotFound: If no job has this full name.
        RunNotFound: If the job has no run with this identifier.
    """
    job = host.get_job(job_name)
    if job is None:
        raise JobNotFound(job_name)
    run = host.get_run(job, str(run_id))
    if run is None:
        raise RunNotFound(str(run_id))
    return job, run


def find_parameter_value(host: HostAdapter, run: Run, name: str) -> str:
    """
    Return the value of the first parameter named `name` on the run.

    Parameter actions are scanned in stored order.

    Raises:
        ParameterNotFound: If no action carries a parameter with this name.
    """
    for action in host.get_parameter_actions(run):
        parameter = action.get_parameter(name)
        if parameter is not None:
            return str(parameter.value)
    raise ParameterNotFound(name)


def get_parameter_value(
    host: HostAdapter,
    name: str,
    job_name: str,
    run_id: str,
) -> str:
    """
    Read one parameter value from a run of a job.

    Args:
        host: Host adapter used for job, run and parameter lookup.
        name: Parameter name, matched exactly.
        job_name: Full name of the job.
        run_id: Identifier of the run within the job.

    Returns:
        The parameter value as a string. Nothing is mutated.
    """
    _, run = resolve_run(host, job_name, run_id)
    return find_parameter_value(host, run, name)


def set_parameter_value(
    host: HostAdapter,
    name: str,
    value: str,
    job_name: str,
    run_id: str,
    *,
    kind: str = STRING_PARAMETER_KIND,
) -> Run:
    """
    Create or overwrite a parameter on a run.

    The new value is attached as a fresh parameter action that replaces the
    run's existing parameter actions, so parameters carried only by the old
    action are dropped. There is no check that the parameter already exists.

    Returns:
        The persisted run.
    """
    _, run = resolve_run(host, job_name, run_id)
    action = ParametersAction(parameters=(ParameterValue(name, str(value), kind),))
    updated = host.add_or_replace_action(run, action)
    logger.info("Set parameter %r on %s #%s", name, job_name, run.number)
    return updated


def merge_parameter_values(
    current: Iterable[ParameterValue],
    updates: Iterable[ParameterValue],
) -> tuple[ParameterValue, ...]:
    """
    Overlay `updates` on `current`, keeping the order of `current`.

    Names present only in `current` keep their value. A name repeated in
    `updates` takes its last value. Names absent from `current` are appended.
    """
    latest: dict[str, ParameterValue] = {}
    for update in updates:
        latest[update.name] = update

    merged: list[ParameterValue] = []
    seen: set[str] = set()
    for parameter in current:
        if parameter.name in seen:
            continue
        seen.add(parameter.name)
        merged.append(latest.get(parameter.name, parameter))
    merged.extend(p for name, p in latest.items() if name not in seen)
    return tuple(merged)


def update_parameters(
    host: HostAdapter,
    job_name: str,
    run_id: str,
    updates: list[ParameterValue],
) -> Run:
    """
    Apply a batch of updates to parameters that already exist on a run.

    Validation runs over the whole batch before anything is written: if any
    submitted name is not among the run's current parameter values, the batch
    is rejected and the run is left untouched. Otherwise the submitted values
    are merged over the current ones and attached in a single action.

    Raises:
        JobNotFound: If the job cannot be resolved.
        RunNotFound: If the run cannot be resolved.
        NoParametersDefined: If the run carries no parameter values at all.
        ParameterNotDefined: For the first submitted name the run lacks.
    """
    _, run = resolve_run(host, job_name, run_id)

    current = [p for a in host.get_parameter_actions(run) for p in a.parameters]
    if not current:
        raise NoParametersDefined(job_name)

    defined = {p.name for p in current}
    for update in updates:
        if update.name not in defined:
            raise ParameterNotDefined(update.name, job_name)

    merged = merge_parameter_values(current, updates)
    updated = host.add_or_replace_action(run, ParametersAction(parameters=merged))
    logger.info(
        "Updated %d parameter(s) on %s #%s", len(updates), job_name, run.number
    )
    return updated
