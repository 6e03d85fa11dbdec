"""Form-field validation for step configuration.

Each checker takes the raw field text and returns a `FormValidation`; it
never raises. The messages are shown next to the field in the configuration UI.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Literal

MISSING_JOB_NAME = "Please set a job name"
MISSING_PARAMETER_NAME = "Please set a parameter name"
MISSING_RUN_ID = "Please set a run ID"
NON_NUMERIC_RUN_ID = "Run ID must be numeric"

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_run_number(value: str) -> int | None:
    """Return the run number for a signed ASCII-digit string, else None."""
    if not _INTEGER.fullmatch(value):
        return None
    return int(value)


@dataclass(frozen=True)
class FormValidation:
    """Result of validating a single form field."""

    kind: Literal["ok", "error"]
    message: str | None = None

    @classmethod
    def ok(cls) -> FormValidation:
        return cls(kind="ok")

    @classmethod
    def error(cls, message: str) -> FormValidation:
        return cls(kind="error", message=message)

    @property
    def is_ok(self) -> bool:
        return self.kind == "ok"


Checker = Callable[[str], FormValidation]


def check_job(value: str | None) -> FormValidation:
    """Job name must be non-empty."""
    if not value:
        return FormValidation.error(MISSING_JOB_NAME)
    return FormValidation.ok()


def check_name(value: str | None) -> FormValidation:
    """Parameter name must be non-empty."""
    if not value:
        return FormValidation.error(MISSING_PARAMETER_NAME)
    return FormValidation.ok()


def check_run(value: str | None) -> FormValidation:
    """Run identifier must be non-empty and parse as an integer."""
    if not value:
        return FormValidation.error(MISSING_RUN_ID)
    if parse_run_number(value) is None:
        return FormValidation.error(NON_NUMERIC_RUN_ID)
    return FormValidation.ok()


FIELD_CHECKERS: dict[str, Checker] = {
    "job": check_job,
    "name": check_name,
    "run": check_run,
}
