"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineStyleOptions:
    """KML line appearance (``aabbggrr`` color, width in pixels)."""

    color: str = "ff0000ff"
    width: float = 4.0


@dataclass(frozen=True)
class BatchOptions:
    """Directory conversion options passed through use-cases.

    ``max_workers=None`` sizes the pool to the CPU count.
    """

    max_workers: int | None = None
    backlog_factor: int = 2
    line_style: LineStyleOptions = LineStyleOptions()
