"""Application use-cases orchestrating conversion workflows."""

from __future__ import annotations

import os
from functools import partial
from pathlib import Path

from pydantic import ValidationError

from gpx_to_kml.adapters.gpx_parser import GpxTrackParser
from gpx_to_kml.adapters.kml_writer import KmlTrackWriter
from gpx_to_kml.application.options import BatchOptions, LineStyleOptions
from gpx_to_kml.application.ports import TrackParser, TrackWriter
from gpx_to_kml.application.results import (
    ConversionFailure,
    ConversionOutcome,
    ConversionSuccess,
    RunTally,
)
from gpx_to_kml.batch.dispatcher import BatchDispatcher
from gpx_to_kml.errors import InvalidArgumentError
from gpx_to_kml.schemas import BatchConversionConfig, LineStyleConfig


def convert_file(
    input_path: Path,
    output_dir: Path,
    *,
    parser: TrackParser | None = None,
    writer: TrackWriter | None = None,
    style: LineStyleOptions | None = None,
) -> ConversionOutcome:
    """Use-case: convert one GPX file into a KML file.

    Never raises; every failure is reported as a ``ConversionFailure`` whose
    message names the input file.
    """
    parser = parser or GpxTrackParser()
    writer = writer or KmlTrackWriter()
    style = style or LineStyleOptions()

    try:
        track = parser.load(input_path)
        output_path = writer.write(track, output_dir, style)
    except Exception as exc:
        return ConversionFailure(
            input_path=input_path,
            message=f'{exc} while parsing: "{input_path}"',
        )
    return ConversionSuccess(input_path=input_path, output_path=output_path)


def validate_line_style(style: LineStyleOptions) -> LineStyleOptions:
    """Return ``style`` after checking color and width.

    Raises
    ------
    InvalidArgumentError
        If the color is not ``aabbggrr`` hex or the width is not positive.
    """
    try:
        config = LineStyleConfig(color=style.color, width=style.width)
    except ValidationError as exc:
        raise InvalidArgumentError(f"Invalid line style: {exc}") from exc
    return LineStyleOptions(color=config.color, width=config.width)


def build_batch_config(
    input_dir: Path,
    output_dir: Path | None,
    options: BatchOptions,
) -> BatchConversionConfig:
    """Validate run parameters before any worker starts.

    Raises
    ------
    InvalidArgumentError
        If a directory is missing or an option is out of range.
    """
    try:
        return BatchConversionConfig(
            input_dir=input_dir,
            output_dir=output_dir if output_dir is not None else input_dir,
            max_workers=(
                options.max_workers
                if options.max_workers is not None
                else os.cpu_count() or 1
            ),
            backlog_factor=options.backlog_factor,
            line_style={
                "color": options.line_style.color,
                "width": options.line_style.width,
            },
        )
    except ValidationError as exc:
        raise InvalidArgumentError(f"Invalid conversion parameters: {exc}") from exc


def convert_directory(
    input_dir: Path,
    output_dir: Path | None = None,
    *,
    options: BatchOptions | None = None,
    parser: TrackParser | None = None,
    writer: TrackWriter | None = None,
) -> RunTally:
    """Use-case: convert every ``.gpx`` file directly under ``input_dir``.

    Parameters
    ----------
    input_dir : Path
        Directory scanned (non-recursively) for GPX files.
    output_dir : Path | None, default=None
        Destination directory; defaults to ``input_dir``.
    options : BatchOptions | None, default=None
        Worker count, backlog factor and line style.

    Returns
    -------
    RunTally
        Final succeeded/failed counts.
    """
    options = options or BatchOptions()
    config = build_batch_config(input_dir, output_dir, options)
    style = LineStyleOptions(
        color=config.line_style.color,
        width=config.line_style.width,
    )
    dispatcher = BatchDispatcher(
        output_dir=config.output_dir,
        converter=partial(convert_file, parser=parser, writer=writer, style=style),
        max_workers=config.max_workers,
        backlog_factor=config.backlog_factor,
    )
    return dispatcher.run(config.input_dir)
