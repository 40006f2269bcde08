"""Unit tests for KML document writing."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest
from lxml import etree

from gpx_to_kml.adapters import kml_writer
from gpx_to_kml.adapters.kml_writer import KmlTrackWriter, format_coordinates
from gpx_to_kml.application.options import LineStyleOptions
from gpx_to_kml.errors import OutputAlreadyExistsError, WriteFailureError
from gpx_to_kml.models import Coordinate, Track

KML = "{http://www.opengis.net/kml/2.2}"


def _track(name: str = "Morning Ride") -> Track:
    return Track(
        name=name,
        recorded_at=datetime(2024, 5, 1, 8, 0, 0, tzinfo=timezone.utc),
        points=(
            Coordinate(latitude=47.60621, longitude=-122.33207, altitude=56.2),
            Coordinate(latitude=-33.8688, longitude=151.2093, altitude=0.0),
        ),
    )


def test_format_coordinates_is_lon_lat_alt_with_trailing_separator() -> None:
    """Render 7-digit fixed precision triples in input order."""
    assert format_coordinates(_track().points) == (
        "-122.3320700,47.6062100,56.2000000 151.2093000,-33.8688000,0.0000000 "
    )
    assert format_coordinates(()) == ""


def test_write_creates_dated_file(output_dir: Path) -> None:
    """Name the file after the recording date and the track name."""
    path = KmlTrackWriter().write(_track(), output_dir, LineStyleOptions())
    assert path == output_dir / "2024-05-01 Morning Ride.kml"
    assert path.is_file()


def test_write_normalizes_illegal_characters(output_dir: Path) -> None:
    """Replace separators and reserved characters in the filename."""
    path = KmlTrackWriter().write(
        _track("Trail: North/South"), output_dir, LineStyleOptions()
    )
    assert path.name == "2024-05-01 Trail_ North_South.kml"


def test_written_document_structure(output_dir: Path) -> None:
    """Emit namespaces, style, style map and placemark geometry."""
    path = KmlTrackWriter().write(_track(), output_dir, LineStyleOptions())
    raw = path.read_bytes()
    assert raw.startswith(b"<?xml version='1.0' encoding='UTF-8'?>")

    root = etree.fromstring(raw)
    assert root.tag == f"{KML}kml"
    assert root.nsmap == {
        None: "http://www.opengis.net/kml/2.2",
        "gx": "http://www.google.com/kml/ext/2.2",
        "kml": "http://www.opengis.net/kml/2.2",
        "atom": "http://www.w3.org/2005/Atom",
    }

    document = root.find(f"{KML}Document")
    assert document is not None
    assert document.findtext(f"{KML}name") == "2024-05-01 Morning Ride.kml"

    style = document.find(f"{KML}Style")
    assert style is not None
    assert style.get("id") == "style1"
    assert style.findtext(f"{KML}LineStyle/{KML}color") == "ff0000ff"
    assert style.findtext(f"{KML}LineStyle/{KML}width") == "4"

    pairs = document.findall(f"{KML}StyleMap/{KML}Pair")
    assert [pair.findtext(f"{KML}key") for pair in pairs] == ["normal", "highlight"]
    assert {pair.findtext(f"{KML}styleUrl") for pair in pairs} == {"style1"}

    placemark = document.find(f"{KML}Placemark")
    assert placemark is not None
    assert placemark.findtext(f"{KML}name") == "2024-05-01 Morning Ride"
    assert placemark.findtext(f"{KML}styleUrl") == "#stylemap_id00"
    coordinates = placemark.findtext(
        f"{KML}MultiGeometry/{KML}LineString/{KML}coordinates"
    )
    assert coordinates == format_coordinates(_track().points)


def test_custom_line_style(output_dir: Path) -> None:
    """Apply a configured color and width."""
    path = KmlTrackWriter().write(
        _track(), output_dir, LineStyleOptions(color="ff00ff00", width=2.5)
    )
    root = etree.fromstring(path.read_bytes())
    assert root.findtext(f".//{KML}LineStyle/{KML}color") == "ff00ff00"
    assert root.findtext(f".//{KML}LineStyle/{KML}width") == "2.5"


def test_write_refuses_to_overwrite(output_dir: Path) -> None:
    """Fail instead of overwriting an existing output."""
    existing = output_dir / "2024-05-01 Morning Ride.kml"
    existing.write_text("keep me", encoding="utf-8")

    with pytest.raises(OutputAlreadyExistsError, match="already exists"):
        KmlTrackWriter().write(_track(), output_dir, LineStyleOptions())
    assert existing.read_text(encoding="utf-8") == "keep me"


def test_write_failure_is_wrapped(
    output_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Report I/O errors with the destination path."""

    def fail_open(self: Path, *args: object, **kwargs: object) -> None:
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "open", fail_open)
    with pytest.raises(WriteFailureError, match="Failed writing to") as excinfo:
        KmlTrackWriter().write(_track(), output_dir, LineStyleOptions())
    assert "2024-05-01 Morning Ride.kml" in str(excinfo.value)


def test_write_logs_destination(
    output_dir: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Log the path being written."""
    with caplog.at_level("INFO", logger=kml_writer.logger.name):
        path = KmlTrackWriter().write(_track(), output_dir, LineStyleOptions())
    assert f"Writing: {path}" in caplog.text
