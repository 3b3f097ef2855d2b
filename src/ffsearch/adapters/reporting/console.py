# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import typer

from ...domain.models import ContentMatch, FileResult, MatchTotals

SIZE_WIDTH = 10
MODE_WIDTH = 12
OWNER_WIDTH = 12
GROUP_WIDTH = 12
TIME_WIDTH = 19
MIME_WIDTH = 30


def humanize_bytes(count: int) -> str:
    """1024-based size, e.g. 1536 -> '1.5 KB'."""
    unit = 1024
    if count < unit:
        return f"{count} B"
    div, exp = unit, 0
    n = count // unit
    while n >= unit:
        div *= unit
        exp += 1
        n //= unit
    return f"{count / div:.1f} {'KMGTPE'[exp]}B"


def format_column(text: str, width: int) -> str:
    if len(text) <= width:
        return text.ljust(width)
    return text[: width - 3] + "..."


class ConsoleReporter:
    """
    SearchListener that prints results as they arrive: a header per
    directory, one line per file, and matching lines in verbose mode.
    """

    def __init__(self, *, verbose: bool = False, show_errors: bool = False) -> None:
        self._verbose = bool(verbose)
        self._show_errors = bool(show_errors)
        self._last_dir: Optional[Path] = None

    def on_file(self, result: FileResult) -> None:
        if self._last_dir is None or self._last_dir != result.directory:
            self._last_dir = result.directory
            typer.echo("")
            typer.echo(self._dir_header(result.directory))

        rec = result.record
        name = self._style_name(result)
        if not self._verbose:
            typer.echo(name)
            return

        mode = format_column(rec.mode, MODE_WIDTH)
        if rec.suid:
            mode = typer.style(mode, fg="red")
        cols = [
            mode,
            format_column(rec.owner, OWNER_WIDTH),
            format_column(rec.group, GROUP_WIDTH),
            str(rec.size).rjust(SIZE_WIDTH),
            format_column(rec.mod_time, TIME_WIDTH),
            format_column(rec.mime_type, MIME_WIDTH),
            name,
        ]
        if self._show_errors:
            cols.append(typer.style(f" - {rec.error}", fg="bright_black"))
        typer.echo(" ".join(cols))

    def on_match(self, match: ContentMatch) -> None:
        if not self._verbose:
            return
        path = typer.style(str(match.path), fg="yellow")
        line = typer.style(str(match.line_number), fg="blue")
        text = typer.style(match.display, fg="bright_black")
        typer.echo(f"{path}:{line}:{text}")

    def on_error(self, path: Path, error: BaseException) -> None:
        if self._show_errors:
            typer.echo(f"Error processing file {path}: {error}", err=True)

    def summary(self, totals: MatchTotals, *, searched: bool) -> None:
        typer.echo("")
        typer.echo(f"{typer.style('- files:', fg='cyan')} {totals.files}")
        size = typer.style(humanize_bytes(totals.bytes), fg="yellow")
        typer.echo(f"{typer.style('- bytes:', fg='cyan')} {totals.bytes} ({size})")
        if searched:
            typer.echo(f"{typer.style('- matches:', fg='cyan')} {totals.matches}")
        typer.echo("")

    @staticmethod
    def _dir_header(directory: Path) -> str:
        label = typer.style(str(directory), fg="green")
        if not os.path.islink(directory):
            return f"{label}:"
        label = typer.style(str(directory), fg="yellow")
        try:
            final = os.path.realpath(directory, strict=True)
        except (OSError, TypeError):
            return f"{label} (could not resolve symlink):"
        return f"{label} --> {typer.style(final, fg='green')}:"

    @staticmethod
    def _style_name(result: FileResult) -> str:
        rec = result.record
        if rec.link:
            return f"{typer.style(result.filename, fg='yellow')} --> {rec.link}"
        st = result.entry.stat
        perm = (st.st_mode & 0o777) if st is not None else 0
        if perm & 0o111:
            if perm & 0o007:
                color = "red"
            elif perm & 0o070:
                color = "bright_red"
            else:
                color = "magenta"
        else:
            color = "bright_blue"
        return typer.style(result.filename, fg=color)
