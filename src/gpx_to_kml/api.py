"""Public file-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from gpx_to_kml.application import BatchOptions
from gpx_to_kml.application import LineStyleOptions
from gpx_to_kml.application import RunTally
from gpx_to_kml.application import convert_directory
from gpx_to_kml.application import convert_file
from gpx_to_kml.application.use_cases import validate_line_style
from gpx_to_kml.errors import ConversionError


def convert_gpx_directory(
    input_dir: Path,
    output_dir: Optional[Path] = None,
    max_workers: Optional[int] = None,
    backlog_factor: int = 2,
    line_color: str = "ff0000ff",
    line_width: float = 4.0,
) -> RunTally:
    """Convert every GPX file in ``input_dir`` to KML."""
    options = BatchOptions(
        max_workers=max_workers,
        backlog_factor=backlog_factor,
        line_style=LineStyleOptions(color=line_color, width=line_width),
    )
    return convert_directory(input_dir, output_dir, options=options)


def convert_gpx_file(
    input_path: Path,
    output_dir: Optional[Path] = None,
    line_color: str = "ff0000ff",
    line_width: float = 4.0,
) -> Path:
    """Convert one GPX file to KML and return the output path.

    Raises
    ------
    ConversionError
        If the file cannot be converted.
    """
    outcome = convert_file(
        input_path,
        output_dir if output_dir is not None else input_path.parent,
        style=validate_line_style(
            LineStyleOptions(color=line_color, width=line_width)
        ),
    )
    if not outcome.ok:
        raise ConversionError(outcome.message)
    return outcome.output_path
