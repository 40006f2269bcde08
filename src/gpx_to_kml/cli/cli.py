#!/usr/bin/env python3
"""
gpx_to_kml.cli.cli

Typer-based CLI for converting a directory of GPX tracks into KML files.

Examples
--------
Convert in place (KML files land next to the GPX files):

    gpx-to-kml ~/tracks

Write into another directory with four worker threads:

    gpx-to-kml ~/tracks ~/kml --workers 4
"""

from __future__ import annotations

import logging
import sys
import traceback
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer

from gpx_to_kml.errors import ConversionError

app = typer.Typer(
    name="gpx-to-kml",
    help="Convert a directory of GPX tracks to KML files.",
    add_completion=False,
)

PACKAGE_LOGGER = "gpx_to_kml"


# -----------------------------
# Console / error utilities
# -----------------------------
class _MaxLevelFilter(logging.Filter):
    """Pass records strictly below ``level``."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


@contextmanager
def _console_logging(debug: bool) -> Iterator[None]:
    """Route package log records to stdout (info) and stderr (warnings+).

    Parameters
    ----------
    debug : bool
        Whether DEBUG records are emitted as well.
    """
    formatter = logging.Formatter("%(message)s")
    out_handler = logging.StreamHandler(sys.stdout)
    out_handler.setFormatter(formatter)
    out_handler.addFilter(_MaxLevelFilter(logging.WARNING))
    err_handler = logging.StreamHandler(sys.stderr)
    err_handler.setFormatter(formatter)
    err_handler.setLevel(logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    previous_level = package_logger.level
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    package_logger.addHandler(out_handler)
    package_logger.addHandler(err_handler)
    try:
        yield
    finally:
        package_logger.removeHandler(out_handler)
        package_logger.removeHandler(err_handler)
        package_logger.setLevel(previous_level)


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly run error.

    Parameters
    ----------
    exc : Exception
        Exception that aborted the run.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


# -----------------------------
# Command
# -----------------------------
@app.command()
def convert_cmd(
    input_dir: Path = typer.Argument(
        ...,
        help="Input directory containing GPX files.",
    ),
    output_dir: Path | None = typer.Argument(
        None,
        help="Output directory for KML results. Defaults to INPUT_DIR.",
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        min=1,
        help="Worker threads. Defaults to the number of CPUs.",
    ),
    backlog_factor: int = typer.Option(
        2,
        "--backlog-factor",
        min=1,
        help="Queued conversions allowed per worker before scanning pauses.",
    ),
    line_color: str = typer.Option(
        "ff0000ff", "--line-color", help="KML line color as aabbggrr hex."
    ),
    line_width: float = typer.Option(4.0, "--line-width", help="KML line width."),
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
) -> None:
    """Convert every .gpx file in INPUT_DIR into a .kml file.

    Parameters
    ----------
    input_dir : Path
        Directory scanned (non-recursively) for ``.gpx`` files.
    output_dir : Path | None, default=None
        Where KML files are written; must already exist.
    workers : int | None, default=None
        Worker pool size.

    Notes
    -----
    - Per-file failures are reported on stderr and counted; they do not
      change the exit code.
    - Existing KML files are never overwritten.
    """
    with _console_logging(debug):
        try:
            from gpx_to_kml.api import convert_gpx_directory

            tally = convert_gpx_directory(
                input_dir=input_dir,
                output_dir=output_dir,
                max_workers=workers,
                backlog_factor=backlog_factor,
                line_color=line_color,
                line_width=line_width,
            )
        except ConversionError as exc:
            raise typer.Exit(code=_print_conversion_error(exc, debug))
        except Exception as exc:
            # Unexpected crash: still show a clean message; debug prints traceback.
            raise typer.Exit(code=_print_conversion_error(exc, debug))

    typer.echo(tally.summary())


if __name__ == "__main__":
    app()
