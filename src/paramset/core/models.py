"""Core domain models for jobs, runs and parameter values.

This module defines the data structures used throughout the application to
represent jobs, their runs, and the parameter actions recorded on a run.
These models are intentionally simple, immutable, and free of any
infrastructure or presentation concerns.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

STRING_PARAMETER_KIND = "StringParameterValue"


@dataclass(frozen=True)
class ParameterDefinition:
    """
    Declares a string parameter on a job.

    Attributes:
        name: Parameter name, unique within the job.
        default: Value assigned to new runs that do not override it.
        description: Optional human-readable description.
    """

    name: str
    default: str = ""
    description: str | None = None


@dataclass(frozen=True)
class Job:
    """
    Represents a job known to the host automation server.

    Attributes:
        full_name: Hierarchical job name; folder segments are separated by `/`.
        parameter_definitions: Parameters declared on the job, in order.
    """

    full_name: str
    parameter_definitions: tuple[ParameterDefinition, ...] = ()


@dataclass(frozen=True)
class ParameterValue:
    """
    A single named parameter value recorded on a run.

    Attributes:
        name: Parameter name.
        value: Parameter value, always carried as a string.
        kind: Storage type of the value as reported by the host.
    """

    name: str
    value: str
    kind: str = STRING_PARAMETER_KIND


@dataclass(frozen=True)
class ParametersAction:
    """Groups a set of parameter values attached to a run."""

    parameters: tuple[ParameterValue, ...] = ()

    def get_parameter(self, name: str) -> ParameterValue | None:
        """Return the first parameter named `name`, or None."""
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None


@dataclass(frozen=True)
class Run:
    """
    Represents a single numbered execution (run) of a job.

    Attributes:
        job_name: Full name of the job this run belongs to.
        number: Host-assigned run number, unique within the job.
        actions: Parameter actions recorded on the run, in stored order.
    """

    job_name: str
    number: int
    actions: tuple[ParametersAction, ...] = ()

    def parameter_values(self) -> list[ParameterValue]:
        """Return the values of every parameter action, in stored order."""
        return [p for action in self.actions for p in action.parameters]


class StepResult(str, Enum):
    """
    Outcome of a pipeline step.

    Values:
        SUCCESS: The step completed.
        FAILURE: The step reported an error; the enclosing run fails.
    """

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
