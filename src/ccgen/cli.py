"""Shared CLI output helpers.

:class:`Reporter` owns the two rich consoles every message goes through.
With a log file both consoles write to it, which redirects ccgen's own
output (not the backend's).

Usage::

    from ccgen.cli import Reporter, error_exit

    reporter = Reporter()
    reporter.executing("cc -c file.c")
    error_exit(reporter, "something broke")
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape


class Reporter:
    """Routes normal and error output to stdout/stderr or a log file."""

    def __init__(self, log_file: Path | None = None) -> None:
        self._log: IO[str] | None = None
        if log_file is not None:
            self._log = open(log_file, "w", encoding="utf-8")
            self.out = Console(file=self._log, soft_wrap=True, highlight=False, emoji=False)
            self.err = self.out
        else:
            self.out = Console(soft_wrap=True, highlight=False, emoji=False)
            self.err = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)

    def close(self) -> None:
        if self._log is not None:
            self._log.close()
            self._log = None

    def __enter__(self) -> Reporter:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def line(self, text: str) -> None:
        """Print *text* verbatim (no markup, no wrapping)."""
        print(text, file=self.out.file, flush=True)

    def executing(self, command: str) -> None:
        self.line(f"Executing... {command}")

    def warning(self, msg: str) -> None:
        self.err.print(f"[yellow]warning:[/yellow] {escape(msg)}")

    def error(self, msg: str) -> None:
        self.err.print(f"[red bold]error:[/red bold] {escape(msg)}")

    def json_print(self, data: dict[str, Any] | list[Any]) -> None:
        self.line(json.dumps(data, indent=2))


def error_exit(reporter: Reporter, msg: str, *, code: int = 1) -> NoReturn:
    """Report *msg* as an error and ``raise typer.Exit(code)``."""
    reporter.error(msg)
    raise typer.Exit(code=code)
