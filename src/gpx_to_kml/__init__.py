"""Top-level API for GPX to KML conversion."""

from __future__ import annotations

from pathlib import Path

from gpx_to_kml.application.results import RunTally

__version__ = "0.1.0"


def convert_gpx_directory(
    input_dir: Path,
    output_dir: Path | None = None,
    max_workers: int | None = None,
    backlog_factor: int = 2,
    line_color: str = "ff0000ff",
    line_width: float = 4.0,
) -> RunTally:
    """Convert every ``.gpx`` file directly under ``input_dir`` to KML.

    Parameters
    ----------
    input_dir : Path
        Directory holding GPX files.
    output_dir : Path | None, default=None
        Destination directory. Defaults to ``input_dir``.
    max_workers : int | None, default=None
        Worker threads. Defaults to the CPU count.
    backlog_factor : int, default=2
        In-flight conversions allowed per worker.
    line_color : str, default="ff0000ff"
        KML ``aabbggrr`` line color.
    line_width : float, default=4.0
        KML line width.

    Returns
    -------
    RunTally
        Succeeded and failed counts for the run.
    """
    from .api import convert_gpx_directory as _impl

    return _impl(
        input_dir=input_dir,
        output_dir=output_dir,
        max_workers=max_workers,
        backlog_factor=backlog_factor,
        line_color=line_color,
        line_width=line_width,
    )


def convert_gpx_file(
    input_path: Path,
    output_dir: Path | None = None,
    line_color: str = "ff0000ff",
    line_width: float = 4.0,
) -> Path:
    """Convert a single GPX file to KML.

    Parameters
    ----------
    input_path : Path
        GPX file to convert.
    output_dir : Path | None, default=None
        Destination directory. Defaults to the input file's directory.

    Returns
    -------
    Path
        Path of the written KML file.
    """
    from .api import convert_gpx_file as _impl

    return _impl(
        input_path=input_path,
        output_dir=output_dir,
        line_color=line_color,
        line_width=line_width,
    )


__all__ = [
    "RunTally",
    "convert_gpx_directory",
    "convert_gpx_file",
]
