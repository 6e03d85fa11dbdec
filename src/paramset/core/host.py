"""Interfaces to the host automation server's object model.

The parameter operations depend only on these narrow protocols. A concrete
host (a JSON file store, a test stub, a remote server client) supplies an
object that satisfies them.
"""

from __future__ import annotations

from typing import Protocol

from paramset.core.models import Job, ParametersAction, Run


class JobRepository(Protocol):
    """Interface for job lookup."""

    def get_job(self, full_name: str) -> Job | None:
        """Return the job with exactly this full name, or None."""
        ...


class RunRepository(Protocol):
    """Interface for run lookup within a job."""

    def get_run(self, job: Job, run_id: str) -> Run | None:
        """Return the run identified by `run_id` on `job`, or None."""
        ...


class ParameterStore(Protocol):
    """Interface for reading and replacing a run's parameter actions."""

    def get_parameter_actions(self, run: Run) -> list[ParametersAction]:
        """Return the run's parameter actions in stored order."""
        ...

    def add_or_replace_action(self, run: Run, action: ParametersAction) -> Run:
        """
        Replace every parameter action on the run with `action`.

        The run must be persisted before this returns. Returns the updated run.
        """
        ...


class HostAdapter(JobRepository, RunRepository, ParameterStore, Protocol):
    """Everything the parameter operations need from the host."""
