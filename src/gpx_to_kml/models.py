"""Track domain objects shared by the parser and writer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Coordinate:
    """One sample along a track."""

    latitude: float
    longitude: float
    altitude: float


@dataclass(frozen=True)
class Track:
    """Named, timestamped path parsed from one GPX file.

    Parameters
    ----------
    name : str
        Track name from ``trk/name``; may be empty.
    recorded_at : datetime
        UTC timestamp from ``metadata/time``.
    points : tuple[Coordinate, ...]
        Coordinates in document order.
    """

    name: str
    recorded_at: datetime
    points: tuple[Coordinate, ...] = field(default_factory=tuple)

    @property
    def date_label(self) -> str:
        """Return the ``YYYY-MM-DD`` date of the recording."""
        return self.recorded_at.strftime("%Y-%m-%d")
