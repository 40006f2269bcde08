"""Shared pytest configuration, marker assignment and GPX fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

GPX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">\n'
)


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


def render_gpx(
    *,
    name: str | None = "Morning Ride",
    time: str | None = "2024-05-01T08:00:00Z",
    points: Sequence[tuple[str, str, str]] = (
        ("47.6062100", "-122.3320700", "56.2"),
        ("47.6097000", "-122.3331000", "61.0"),
    ),
    segment: bool = True,
) -> str:
    """Render a small GPX 1.1 document; ``None`` omits the element."""
    body = [GPX_HEADER]
    if time is not None:
        body.append(f"  <metadata><time>{time}</time></metadata>\n")
    body.append("  <trk>\n")
    if name is not None:
        body.append(f"    <name>{name}</name>\n")
    if segment:
        body.append("    <trkseg>\n")
        for lat, lon, ele in points:
            body.append(
                f'      <trkpt lat="{lat}" lon="{lon}"><ele>{ele}</ele></trkpt>\n'
            )
        body.append("    </trkseg>\n")
    body.append("  </trk>\n</gpx>\n")
    return "".join(body)


@pytest.fixture
def write_gpx(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing GPX documents into ``tmp_path / "in"``."""
    input_dir = tmp_path / "in"
    input_dir.mkdir()

    def _write(filename: str = "ride.gpx", content: str | None = None, **kwargs: object) -> Path:
        path = input_dir / filename
        path.write_text(content if content is not None else render_gpx(**kwargs), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Return an empty output directory."""
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def gpx_text() -> Callable[..., str]:
    """Return the GPX renderer for tests that parse from memory."""
    return render_gpx
