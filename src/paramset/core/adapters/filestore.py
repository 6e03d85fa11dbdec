from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Mapping

from paramset.core.errors import HostStoreError
from paramset.core.models import (
    STRING_PARAMETER_KIND,
    Job,
    ParameterDefinition,
    ParametersAction,
    ParameterValue,
    Run,
)
from paramset.core.validation import parse_run_number

logger = logging.getLogger(__name__)

_JOB_FILE = "job.json"
_LAST_BUILD = "lastBuild"

# One lock for every store in the process; the file system is shared.
_WRITE_LOCK = threading.Lock()


def _name_segments(full_name: str) -> list[str] | None:
    """Split a job full name into path segments, or None if it is unsafe."""
    segments = full_name.split("/")
    if any(s in {"", ".", ".."} or "\\" in s for s in segments):
        return None
    return segments


def _parameter_to_json(p: ParameterValue) -> dict[str, str]:
    return {"class": p.kind, "name": p.name, "value": p.value}


def _parameter_from_json(item: Mapping[str, Any]) -> ParameterValue:
    return ParameterValue(
        name=str(item["name"]),
        value=str(item.get("value", "")),
        kind=str(item.get("class") or STRING_PARAMETER_KIND),
    )


class JsonFileHost:
    """Host adapter persisting jobs and runs as JSON files under a root directory."""

    def __init__(self, root: Path | str):
        """Create a store rooted at `root`; nothing is written until a job is created."""
        self.root = Path(root)

    # -- storage -----------------------------------------------------------

    def _job_path(self, full_name: str) -> Path | None:
        segments = _name_segments(full_name)
        if segments is None:
            return None
        return self.root.joinpath("jobs", *segments, _JOB_FILE)

    def _load(self, path: Path) -> dict[str, Any] | None:
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise HostStoreError(f"Cannot read job file {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise HostStoreError(f"Job file {path} does not hold an object")
        return payload

    def _store(self, path: Path, payload: Mapping[str, Any]) -> None:
        """Write `payload` atomically: temporary file, then rename over `path`."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=".job-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2)
            os.replace(tmp, path)
        except OSError as exc:
            Path(tmp).unlink(missing_ok=True)
            raise HostStoreError(f"Cannot write job file {path}: {exc}") from exc

    @staticmethod
    def _job_from_json(payload: Mapping[str, Any]) -> Job:
        try:
            definitions = tuple(
                ParameterDefinition(
                    name=str(d["name"]),
                    default=str(d.get("default", "")),
                    description=d.get("description"),
                )
                for d in payload.get("parameters", [])
            )
            return Job(full_name=str(payload["name"]), parameter_definitions=definitions)
        except (KeyError, TypeError) as exc:
            raise HostStoreError(f"Malformed job record: {exc}") from exc

    @staticmethod
    def _run_from_json(job_name: str, item: Mapping[str, Any]) -> Run:
        try:
            actions = tuple(
                ParametersAction(
                    parameters=tuple(
                        _parameter_from_json(p) for p in a.get("parameters", [])
                    )
                )
                for a in item.get("actions", [])
            )
            return Run(job_name=job_name, number=int(item["number"]), actions=actions)
        except (KeyError, TypeError, ValueError) as exc:
            raise HostStoreError(f"Malformed run record in {job_name}: {exc}") from exc

    @staticmethod
    def _run_to_json(run: Run) -> dict[str, Any]:
        return {
            "number": run.number,
            "actions": [
                {"parameters": [_parameter_to_json(p) for p in a.parameters]}
                for a in run.actions
            ],
        }

    # -- HostAdapter ---------------------------------------------------------

    def get_job(self, full_name: str) -> Job | None:
        """Return the job with exactly this full name, or None."""
        path = self._job_path(full_name)
        if path is None:
            return None
        payload = self._load(path)
        if payload is None:
            return None
        return self._job_from_json(payload)

    def get_run(self, job: Job, run_id: str) -> Run | None:
        """
        Return a run by number, or the `lastBuild` permalink.

        Unknown numbers and any other identifier resolve to None.
        """
        runs = self.list_runs(job)
        if not runs:
            return None
        if run_id == _LAST_BUILD:
            return max(runs, key=lambda r: r.number)
        number = parse_run_number(run_id)
        if number is None:
            return None
        return next((r for r in runs if r.number == number), None)

    def get_parameter_actions(self, run: Run) -> list[ParametersAction]:
        return list(run.actions)

    def add_or_replace_action(self, run: Run, action: ParametersAction) -> Run:
        """Replace the run's parameter actions with `action` and persist it."""
        path = self._job_path(run.job_name)
        if path is None:
            raise HostStoreError(f"Invalid job name: '{run.job_name}'")
        updated = Run(job_name=run.job_name, number=run.number, actions=(action,))

        with _WRITE_LOCK:
            payload = self._load(path)
            if payload is None:
                raise HostStoreError(f"Job '{run.job_name}' disappeared")
            runs = payload.setdefault("runs", [])
            for index, item in enumerate(runs):
                if int(item.get("number", -1)) == run.number:
                    runs[index] = self._run_to_json(updated)
                    break
            else:
                raise HostStoreError(
                    f"Run #{run.number} of '{run.job_name}' disappeared"
                )
            self._store(path, payload)

        logger.debug("Saved %s #%s", run.job_name, run.number)
        return updated

    # -- administration --------------------------------------------------------

    def create_job(
        self,
        full_name: str,
        definitions: tuple[ParameterDefinition, ...] | list[ParameterDefinition] = (),
    ) -> Job:
        """
        Create a job, or redefine the parameters of an existing one.

        Existing runs are kept.

        Raises:
            ValueError: If the name has empty, `.` or `..` segments.
        """
        path = self._job_path(full_name)
        if path is None:
            raise ValueError(f"Invalid job name: '{full_name}'")
        job = Job(full_name=full_name, parameter_definitions=tuple(definitions))

        with _WRITE_LOCK:
            payload = self._load(path) or {"runs": []}
            payload["name"] = full_name
            payload["parameters"] = [
                {"name": d.name, "default": d.default, "description": d.description}
                for d in job.parameter_definitions
            ]
            self._store(path, payload)

        logger.info("Defined job %s", full_name)
        return job

    def list_jobs(self) -> list[Job]:
        """Return every job in the store, sorted by full name."""
        base = self.root / "jobs"
        if not base.exists():
            return []
        jobs = []
        for path in base.rglob(_JOB_FILE):
            payload = self._load(path)
            if payload is not None:
                jobs.append(self._job_from_json(payload))
        return sorted(jobs, key=lambda j: j.full_name)

    def list_runs(self, job: Job) -> list[Run]:
        """Return the job's runs in ascending number order."""
        path = self._job_path(job.full_name)
        if path is None:
            return []
        payload = self._load(path)
        if payload is None:
            return []
        runs = [self._run_from_json(job.full_name, r) for r in payload.get("runs", [])]
        return sorted(runs, key=lambda r: r.number)

    def create_run(self, job: Job, values: Mapping[str, str] | None = None) -> Run:
        """
        Record a new run of `job` with the next build number.

        Parameter values start from the job's defaults; `values` overrides
        them and may add names the job does not declare. A run without any
        value carries no parameter action.
        """
        path = self._job_path(job.full_name)
        if path is None:
            raise ValueError(f"Invalid job name: '{job.full_name}'")

        merged = {d.name: d.default for d in job.parameter_definitions}
        merged.update(values or {})
        parameters = tuple(ParameterValue(name=k, value=str(v)) for k, v in merged.items())
        actions = (ParametersAction(parameters=parameters),) if parameters else ()

        with _WRITE_LOCK:
            payload = self._load(path)
            if payload is None:
                raise HostStoreError(f"Job '{job.full_name}' does not exist")
            runs = payload.setdefault("runs", [])
            number = max((int(r.get("number", 0)) for r in runs), default=0) + 1
            run = Run(job_name=job.full_name, number=number, actions=actions)
            runs.append(self._run_to_json(run))
            self._store(path, payload)

        logger.info("Recorded %s #%s", job.full_name, number)
        return run
