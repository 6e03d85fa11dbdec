"""Common CLI options for the CLI."""

import typer

from paramset.core.config import STATE_DIR_ENV

StateDirOpt = typer.Option(
    None,
    "--state-dir",
    "-s",
    envvar=STATE_DIR_ENV,
    help="Directory holding the job/run store",
)

JobOpt = typer.Option(
    ...,
    "--job",
    "-j",
    help="Full job name (folders separated by '/')",
)

RunOpt = typer.Option(
    ...,
    "--run",
    "-r",
    help="Run number of the job",
)

ParamOpt = typer.Option(
    [],
    "--param",
    "-P",
    help="Parameter assignment (name=value). This is reusable.",
    show_default=False,
)

ConfirmOpt = typer.Option(
    True,
    "--confirm/--no-confirm",
    help="Ask for confirmation before updating parameters",
)

HostOpt = typer.Option(None, "--host", help="Interface to bind the HTTP API to")

PortOpt = typer.Option(None, "--port", help="Port to bind the HTTP API to")

TokenOpt = typer.Option(
    None,
    "--token",
    help="Bearer token required for updates (defaults to PARAMSET_API_TOKEN)",
)

