"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from paramset.cli.common.output import out


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit successfully with an optional informational message."""
    if msg:
        out.info(msg)
    raise typer.Exit(0)


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Print an error message and exit, chaining the Exit to `exc`.
    """
    out.error(message)
    raise typer.Exit(code) from exc


def die_with_step_log(log: str, code: int = 1) -> NoReturn:
    """
    Replay a failed step's log and exit.

    `ERROR:` lines are shown as errors, everything else as metadata.
    """
    for line in log.splitlines():
        if line.startswith("ERROR: "):
            out.error(line[len("ERROR: "):])
        elif line:
            out.info(line)
    raise typer.Exit(code)

