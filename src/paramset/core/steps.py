"""Pipeline build steps for reading and writing run parameters.

A step is a small, stateless handler invoked synchronously by a running job.
It reports progress and failures to the execution's log stream and flags the
execution as failed instead of raising: neither `ParameterError` nor
`HostStoreError` escapes `perform`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, MutableSequence, TextIO

from paramset.core.errors import HostStoreError, MissingOutputSink, ParameterError
from paramset.core.host import HostAdapter
from paramset.core.models import STRING_PARAMETER_KIND, StepResult
from paramset.core.parameters import (
    find_parameter_value,
    resolve_run,
    set_parameter_value,
)
from paramset.core.validation import FIELD_CHECKERS, FormValidation


@dataclass
class StepContext:
    """
    The execution a step runs inside.

    Attributes:
        log: Stream receiving the step's log lines.
        result: Status of the execution; steps only ever downgrade it.
    """

    log: TextIO
    result: StepResult = StepResult.SUCCESS

    def println(self, message: str) -> None:
        print(message, file=self.log)

    def fail(self, message: str) -> None:
        """Log `ERROR: <message>` and mark the execution as failed."""
        self.println(f"ERROR: {message}")
        self.result = StepResult.FAILURE


@dataclass
class GetParameterValueStep:
    """Appends the value of a parameter on another run to `output`."""

    name: str
    job: str
    run: str
    output: MutableSequence[str] | None = None

    def perform(self, host: HostAdapter, context: StepContext) -> bool:
        context.println(
            f"GetParameterValue with parameter: {self.name}, job: {self.job}, "
            f"and job's run: {self.run}"
        )
        try:
            _, run = resolve_run(host, self.job, str(self.run))
            if self.output is None:
                raise MissingOutputSink()
            value = find_parameter_value(host, run, self.name)
        except (ParameterError, HostStoreError) as exc:
            context.fail(str(exc))
            return False
        self.output.append(value)
        return True


@dataclass
class SetParameterValueStep:
    """Creates or overwrites a parameter on another run."""

    name: str
    value: str
    job: str
    run: str
    class_: str | None = None

    def perform(self, host: HostAdapter, context: StepContext) -> bool:
        context.println(
            f"SetParameterValue with parameter: {self.name}, job: {self.job}, "
            f"and job's run: {self.run}"
        )
        try:
            set_parameter_value(
                host,
                self.name,
                self.value,
                self.job,
                str(self.run),
                kind=self.class_ or STRING_PARAMETER_KIND,
            )
        except (ParameterError, HostStoreError) as exc:
            context.fail(str(exc))
            return False
        return True


@dataclass(frozen=True)
class StepDescriptor:
    """
    Registration record for a step.

    Attributes:
        symbol: Name the step is invoked by in pipeline scripts.
        display_name: Label shown in the configuration UI.
        factory: Callable building the step from its keyword arguments.
        fields: Configuration fields that have a validator.
        aliases: Pipeline argument names mapped to constructor names.
    """

    symbol: str
    display_name: str
    factory: Callable[..., Any]
    fields: tuple[str, ...]
    aliases: dict[str, str] = field(default_factory=dict)


STEP_DESCRIPTORS: dict[str, StepDescriptor] = {
    "getParameterValue": StepDescriptor(
        symbol="getParameterValue",
        display_name="Get parameter value",
        factory=GetParameterValueStep,
        fields=("name", "job", "run"),
        aliases={"list": "output"},
    ),
    "setParameterValue": StepDescriptor(
        symbol="setParameterValue",
        display_name="Set parameter value",
        factory=SetParameterValueStep,
        fields=("name", "job", "run"),
        aliases={"class": "class_", "_class": "class_"},
    ),
}


def _descriptor(symbol: str) -> StepDescriptor:
    try:
        return STEP_DESCRIPTORS[symbol]
    except KeyError:
        raise ValueError(f"Unknown step: '{symbol}'") from None


def build_step(symbol: str, **arguments: Any) -> Any:
    """
    Build a step from its pipeline symbol and pipeline-style arguments.

    Raises:
        ValueError: If the symbol is unknown.
        TypeError: If the arguments do not fit the step.
    """
    descriptor = _descriptor(symbol)
    kwargs = {descriptor.aliases.get(k, k): v for k, v in arguments.items()}
    if "run" in kwargs:
        kwargs["run"] = str(kwargs["run"])
    return descriptor.factory(**kwargs)


def validate_step_arguments(
    symbol: str, arguments: dict[str, Any]
) -> dict[str, FormValidation]:
    """Run the field validators of a step over configuration values."""
    descriptor = _descriptor(symbol)
    results: dict[str, FormValidation] = {}
    for name in descriptor.fields:
        raw = arguments.get(name)
        results[name] = FIELD_CHECKERS[name]("" if raw is None else str(raw))
    return results
