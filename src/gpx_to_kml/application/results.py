"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, TypeAlias


@dataclass(frozen=True)
class ConversionSuccess:
    """A GPX file converted into a KML file."""

    input_path: Path
    output_path: Path
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class ConversionFailure:
    """A GPX file that could not be converted."""

    input_path: Path
    message: str
    ok: ClassVar[bool] = False


ConversionOutcome: TypeAlias = ConversionSuccess | ConversionFailure


@dataclass(frozen=True)
class RunTally:
    """Snapshot of the run-wide conversion counters."""

    succeeded: int = 0
    failed: int = 0
    in_flight: int = 0

    def summary(self) -> str:
        """Return the one-line summary printed at the end of a run."""
        return f"Succeeded: {self.succeeded} Failed: {self.failed}"
