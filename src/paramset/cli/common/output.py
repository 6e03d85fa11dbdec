"""Output formatting utilities for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import questionary
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

QUESTIONARY_STYLE_CONFIRM = Style.from_dict(
    {
        "qmark": "bold ansicyan",
        "question": "bold",
        "answer": "bold ansicyan",
        "instruction": "ansibrightblack",
        "error": "bold ansired",
    }
)

console = Console(theme=_THEME)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        console.print(f"[title]›[/] {escape(msg)}")

    def success(self, msg: str) -> None:
        console.print(f"[ok]✓[/] {escape(msg)}")

    def warn(self, msg: str) -> None:
        console.print(f"[warn]⚠[/] {escape(msg)}")

    def error(self, msg: str) -> None:
        console.print(f"[err]✗[/] {escape(msg)}")

    def header(self, title: str) -> None:
        console.print(f"[title]{escape(title)}[/]")

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for a yes/no answer.

        Returns:
            True if the user confirms, False otherwise (including Ctrl-C).
        """
        console.print("[meta]Use y/n then Enter[/]")
        answer = questionary.confirm(
            f"[paramset] {message}",
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            auto_enter=False,
        ).ask()
        return bool(answer)

    def parameters_table(self, parameters: Iterable[Any], title: str = "Parameters") -> None:
        """
        Expects objects with .name .value .kind (like paramset.core.models.ParameterValue)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Name", style="ok", no_wrap=True)
        t.add_column("Value")
        t.add_column("Class", style="meta")

        for p in parameters:
            kind = getattr(p, "kind", "") or ""
            t.add_row(escape(p.name), escape(p.value), escape(kind))

        console.print(t)

    def jobs_table(self, jobs: Iterable[Any], title: str = "Jobs") -> None:
        """
        Expects objects with .full_name and .parameter_definitions
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Job", style="ok", no_wrap=True)
        t.add_column("Parameters", style="meta")

        for j in jobs:
            params = ", ".join(
                f"{d.name}={d.default}" for d in getattr(j, "parameter_definitions", ())
            )
            t.add_row(escape(j.full_name), escape(params))

        console.print(t)

    def runs_table(self, runs: Iterable[Any], title: str = "Runs") -> None:
        """
        Expects objects with .job_name .number and .parameter_values()
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Job", style="ok", no_wrap=True)
        t.add_column("Run", style="ok", no_wrap=True)
        t.add_column("Parameters", style="meta")

        for r in runs:
            params = ", ".join(f"{p.name}={p.value}" for p in r.parameter_values())
            t.add_row(escape(r.job_name), f"#{r.number}", escape(params))

        console.print(t)


out = Out()
