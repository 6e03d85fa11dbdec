"""Errors raised by the parameter operations.

Every `ParameterError` carries the exact message shown to pipeline logs and
HTTP callers, so boundaries can surface `str(exc)` without reformatting.
"""


class ParameterError(RuntimeError):
    """Base class for expected, user-facing parameter failures."""


class JobNotFound(ParameterError):
    def __init__(self, job: str):
        self.job = job
        super().__init__(f"Specified job '{job}' was not found!")


class RunNotFound(ParameterError):
    def __init__(self, run: str):
        self.run = run
        super().__init__(f"Specified job's run '{run}' was not found!")


class ParameterNotFound(ParameterError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Specified parameter '{name}' was not found!")


class MissingOutputSink(ParameterError):
    def __init__(self):
        super().__init__("Specified list to return value to was null!")


class NoParametersDefined(ParameterError):
    def __init__(self, job: str):
        self.job = job
        super().__init__(f"Specified job '{job}' doesn't have parameters defined!")


class ParameterNotDefined(ParameterError):
    """Raised when a batch update names a parameter the run does not carry."""

    def __init__(self, name: str, job: str):
        self.name = name
        self.job = job
        super().__init__(f"Provided parameter '{name}' isn't defined for job '{job}'!")


class HostStoreError(RuntimeError):
    """Raised when the host store cannot be read or written."""
