"""Commands for reading and updating run parameters."""

import io
from pathlib import Path

import typer

from paramset.cli.common.assignments import to_parameter_values
from paramset.cli.common.context import AppContext, build_context
from paramset.cli.common.exits import die, die_with_step_log, exit_from_exc, ok_exit
from paramset.cli.common.options import (
    ConfirmOpt,
    JobOpt,
    ParamOpt,
    RunOpt,
    StateDirOpt,
)
from paramset.cli.common.output import out
from paramset.core.errors import HostStoreError, ParameterError
from paramset.core.parameters import resolve_run, update_parameters
from paramset.core.steps import StepContext, build_step, validate_step_arguments

app = typer.Typer(
    help="Read and update parameters recorded on a run",
    no_args_is_help=False,
    invoke_without_command=True,
)


@app.callback()
def _init(ctx: typer.Context, state_dir: Path | None = StateDirOpt):
    """Initialize the host store context."""
    ctx.obj = build_context(state_dir)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


def _run_step(appctx: AppContext, symbol: str, **arguments) -> None:
    """Validate the step's fields like the configuration form, then perform it."""
    for field, result in validate_step_arguments(symbol, arguments).items():
        if not result.is_ok:
            die(f"--{field}: {result.message}", code=2)

    step = build_step(symbol, **arguments)
    log = io.StringIO()
    try:
        ok = step.perform(appctx.host, StepContext(log=log))
    except HostStoreError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    if not ok:
        die_with_step_log(log.getvalue(), code=1)


@app.command()
def get(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Parameter name"),
    job: str = JobOpt,
    run: str = RunOpt,
):
    """
    Print the value of a parameter on a run.
    """
    appctx: AppContext = ctx.obj
    values: list[str] = []
    _run_step(appctx, "getParameterValue", name=name, job=job, run=run, list=values)
    typer.echo(values[0])


@app.command("set")
def set_(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Parameter name"),
    value: str = typer.Argument(..., help="New value"),
    job: str = JobOpt,
    run: str = RunOpt,
):
    """
    Create or overwrite a parameter on a run.

    The run's previous parameter set is replaced by this single value.
    """
    appctx: AppContext = ctx.obj
    _run_step(appctx, "setParameterValue", name=name, value=value, job=job, run=run)
    out.success(f"{name} set on {job} #{run}")


@app.command()
def update(
    ctx: typer.Context,
    job: str = JobOpt,
    run: str = RunOpt,
    param: list[str] = ParamOpt,
    confirm: bool = ConfirmOpt,
):
    """
    Update parameters that already exist on a run.

    All names are checked first; nothing is written if any is unknown.
    """
    appctx: AppContext = ctx.obj

    try:
        updates = to_parameter_values(param)
    except ValueError as e:
        exit_from_exc(e, message=str(e), code=2)
    if not updates:
        die("At least one --param name=value is required", code=2)

    out.header(f"Pending updates for {job} #{run}")
    out.parameters_table(updates, title="Updates")

    if confirm and not out.confirm("Apply these updates?"):
        ok_exit("Cancelled")

    try:
        updated = update_parameters(appctx.host, job, run, updates)
    except (ParameterError, HostStoreError) as e:
        exit_from_exc(e, message=str(e), code=1)

    out.success(f"Updated {len(updates)} parameter(s)")
    out.parameters_table(updated.parameter_values(), title="Parameters")


@app.command()
def show(
    ctx: typer.Context,
    job: str = JobOpt,
    run: str = RunOpt,
):
    """
    Show every parameter recorded on a run.
    """
    appctx: AppContext = ctx.obj

    try:
        _, resolved = resolve_run(appctx.host, job, run)
    except (ParameterError, HostStoreError) as e:
        exit_from_exc(e, message=str(e), code=1)

    values = resolved.parameter_values()
    if not values:
        ok_exit(f"{job} #{resolved.number} has no parameters")
    out.parameters_table(values, title=f"{job} #{resolved.number}")
