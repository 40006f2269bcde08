"""Application-layer use-cases and option objects."""

from __future__ import annotations

from pathlib import Path

from gpx_to_kml.application.options import BatchOptions, LineStyleOptions
from gpx_to_kml.application.ports import TrackParser, TrackWriter
from gpx_to_kml.application.results import (
    ConversionFailure,
    ConversionOutcome,
    ConversionSuccess,
    RunTally,
)


def convert_file(
    input_path: Path,
    output_dir: Path,
    *,
    parser: TrackParser | None = None,
    writer: TrackWriter | None = None,
    style: LineStyleOptions | None = None,
) -> ConversionOutcome:
    """Convert one GPX file via lazy use-case import."""
    from gpx_to_kml.application.use_cases import convert_file as _impl

    return _impl(
        input_path,
        output_dir,
        parser=parser,
        writer=writer,
        style=style,
    )


def convert_directory(
    input_dir: Path,
    output_dir: Path | None = None,
    *,
    options: BatchOptions | None = None,
    parser: TrackParser | None = None,
    writer: TrackWriter | None = None,
) -> RunTally:
    """Convert a GPX directory via lazy use-case import."""
    from gpx_to_kml.application.use_cases import convert_directory as _impl

    return _impl(
        input_dir,
        output_dir,
        options=options,
        parser=parser,
        writer=writer,
    )


__all__ = [
    "BatchOptions",
    "LineStyleOptions",
    "ConversionFailure",
    "ConversionOutcome",
    "ConversionSuccess",
    "RunTally",
    "convert_file",
    "convert_directory",
]
