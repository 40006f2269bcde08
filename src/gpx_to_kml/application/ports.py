"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from gpx_to_kml.application.options import LineStyleOptions
from gpx_to_kml.application.results import ConversionOutcome
from gpx_to_kml.models import Track


class TrackParser(Protocol):
    """Load a GPX file into a track."""

    def load(self, input_path: Path) -> Track:
        """Parse track from path."""


class TrackWriter(Protocol):
    """Serialize a track into an output directory."""

    def write(
        self,
        track: Track,
        output_dir: Path,
        style: LineStyleOptions,
    ) -> Path:
        """Write track and return the created file path."""


class FileConverter(Protocol):
    """Convert a single file; never raises."""

    def __call__(self, input_path: Path, output_dir: Path) -> ConversionOutcome:
        """Convert ``input_path`` into ``output_dir``."""
