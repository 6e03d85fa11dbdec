"""CLI application for run parameter tooling."""

from pathlib import Path

import typer
import uvicorn

from paramset.api.app import create_app
from paramset.api.auth import BearerTokenAuthorizer
from paramset.cli.commands.jobs import app as jobs_app
from paramset.cli.commands.params import app as params_app
from paramset.cli.common.context import build_context
from paramset.cli.common.options import HostOpt, PortOpt, StateDirOpt, TokenOpt
from paramset.cli.common.output import out
from paramset.core.config import api_token, log_level, server_host, server_port
from paramset.core.logs import configure_logging

app = typer.Typer(
    help="paramset - read and update parameters recorded on job runs",
    no_args_is_help=True,
)

app.add_typer(params_app, name="params", help="Get / set / update run parameters.")
app.add_typer(jobs_app, name="jobs", help="Define jobs and record runs.")


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
):
    """Configure logging for every command."""
    configure_logging("DEBUG" if verbose else log_level())


@app.command()
def serve(
    state_dir: Path | None = StateDirOpt,
    host: str | None = HostOpt,
    port: int | None = PortOpt,
    token: str | None = TokenOpt,
):
    """
    Serve the parameter update endpoint over HTTP.
    """
    appctx = build_context(state_dir)
    token = token or api_token()
    authorizer = BearerTokenAuthorizer(token) if token else None
    api = create_app(appctx.host, authorizer)

    bind_host = host or server_host()
    bind_port = port or server_port()
    out.info(f"Serving {appctx.state_dir} on http://{bind_host}:{bind_port}")
    uvicorn.run(api, host=bind_host, port=bind_port, log_level=log_level().lower())


if __name__ == "__main__":
    app()
