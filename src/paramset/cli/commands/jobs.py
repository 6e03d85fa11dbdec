"""Commands for managing jobs and recording runs in the host store."""

from pathlib import Path

import typer

from paramset.cli.common.assignments import parse_assignments, to_definitions
from paramset.cli.common.context import AppContext, build_context
from paramset.cli.common.exits import exit_from_exc, warn_exit
from paramset.cli.common.options import ParamOpt, StateDirOpt
from paramset.cli.common.output import out
from paramset.core.errors import HostStoreError, JobNotFound

app = typer.Typer(
    help="Define jobs and record runs",
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


@app.command()
def create(
    ctx: typer.Context,
    job: str = typer.Argument(..., help="Full job name (folders separated by '/')"),
    param: list[str] = ParamOpt,
):
    """
    Define a job and its parameters (name=default).
    """
    appctx: AppContext = ctx.obj

    try:
        definitions = to_definitions(param)
        created = appctx.host.create_job(job, definitions)
    except ValueError as e:
        exit_from_exc(e, message=str(e), code=2)
    except HostStoreError as e:
        exit_from_exc(e, message=str(e), code=1)

    out.success(f"Job defined: {created.full_name}")
    out.jobs_table([created], title="Job")


@app.command("list")
def list_(ctx: typer.Context):
    """
    List jobs in the store.
    """
    appctx: AppContext = ctx.obj

    try:
        jobs = appctx.host.list_jobs()
    except HostStoreError as e:
        exit_from_exc(e, message=str(e), code=1)

    if not jobs:
        warn_exit("No jobs found", code=0)

    out.jobs_table(jobs)


@app.command()
def run(
    ctx: typer.Context,
    job: str = typer.Argument(..., help="Full job name"),
    param: list[str] = ParamOpt,
):
    """
    Record a new run of a job, overriding parameter defaults with name=value.
    """
    appctx: AppContext = ctx.obj

    try:
        values = parse_assignments(param)
    except ValueError as e:
        exit_from_exc(e, message=str(e), code=2)

    try:
        found = appctx.host.get_job(job)
        if found is None:
            raise JobNotFound(job)
        recorded = appctx.host.create_run(found, values)
    except (JobNotFound, HostStoreError) as e:
        exit_from_exc(e, message=str(e), code=1)

    out.success(f"Run recorded: {job} #{recorded.number}")
    out.runs_table([recorded], title="Run")


@app.command()
def runs(
    ctx: typer.Context,
    job: str = typer.Argument(..., help="Full job name"),
):
    """
    List the recorded runs of a job.
    """
    appctx: AppContext = ctx.obj

    try:
        found = appctx.host.get_job(job)
        if found is None:
            raise JobNotFound(job)
        recorded = appctx.host.list_runs(found)
    except (JobNotFound, HostStoreError) as e:
        exit_from_exc(e, message=str(e), code=1)

    if not recorded:
        warn_exit(f"{job} has no runs", code=0)

    out.runs_table(recorded)
