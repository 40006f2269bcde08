"""GPX track parsing on top of lxml element trees."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from lxml import etree

from gpx_to_kml.errors import MalformedInputError
from gpx_to_kml.models import Coordinate, Track

UTC = getattr(datetime, "UTC", timezone.utc)  # noqa: UP017

GPX_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _local_name(element: etree._Element) -> str | None:
    """Return the namespace-free tag of an element, or ``None`` for comments."""
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _first_child(parent: etree._Element, name: str) -> etree._Element | None:
    """Return the first child element named ``name`` regardless of namespace."""
    for child in parent:
        if _local_name(child) == name:
            return child
    return None


def _children(parent: etree._Element, name: str) -> list[etree._Element]:
    return [child for child in parent if _local_name(child) == name]


def _parse_float(text: str | None) -> float:
    try:
        return float(text if text is not None else "")
    except ValueError as exc:
        raise MalformedInputError(f'Invalid number "{text or ""}"') from exc


def parse_time(root: etree._Element) -> datetime:
    """Parse ``metadata/time`` as a strict UTC timestamp.

    Raises
    ------
    MalformedInputError
        If the element is missing or not formatted as ``YYYY-MM-DDTHH:MM:SSZ``.
    """
    metadata = _first_child(root, "metadata")
    if metadata is None:
        raise MalformedInputError("Missing metadata element")
    time_element = _first_child(metadata, "time")
    if time_element is None:
        raise MalformedInputError("Missing metadata time element")
    text = time_element.text or ""
    try:
        parsed = datetime.strptime(text, GPX_TIME_FORMAT)
    except ValueError as exc:
        raise MalformedInputError(f'Invalid time "{text}"') from exc
    return parsed.replace(tzinfo=UTC)


def parse_name(track: etree._Element) -> str:
    """Return the ``name`` text of a ``trk`` element (empty if blank)."""
    name = _first_child(track, "name")
    if name is None:
        raise MalformedInputError("Missing name element")
    return name.text or ""


def parse_coordinates(track: etree._Element) -> tuple[Coordinate, ...]:
    """Collect the points of the first ``trkseg`` in document order."""
    segment = _first_child(track, "trkseg")
    if segment is None:
        raise MalformedInputError("Missing trkseg element")

    points: list[Coordinate] = []
    for point in _children(segment, "trkpt"):
        lat = point.get("lat")
        lon = point.get("lon")
        if lat is None or lon is None:
            raise MalformedInputError("Missing lat/lon attributes")
        elevation = _first_child(point, "ele")
        if elevation is None:
            raise MalformedInputError("Missing ele element")
        points.append(
            Coordinate(
                latitude=_parse_float(lat),
                longitude=_parse_float(lon),
                altitude=_parse_float(elevation.text),
            )
        )
    return tuple(points)


class GpxTrackParser:
    """Parse the first track of a GPX document."""

    def parse_root(self, root: etree._Element) -> Track:
        """Build a track from a parsed ``gpx`` root element.

        Parameters
        ----------
        root : lxml.etree._Element
            Document root; must be a ``gpx`` element.

        Returns
        -------
        Track
            Track from the first ``trk`` and its first ``trkseg``.

        Raises
        ------
        MalformedInputError
            If a required element, attribute or value is missing or invalid.
        """
        if _local_name(root) != "gpx":
            raise MalformedInputError("Missing root element")

        recorded_at = parse_time(root)

        track = _first_child(root, "trk")
        if track is None:
            raise MalformedInputError("Missing trk element")

        return Track(
            name=parse_name(track),
            recorded_at=recorded_at,
            points=parse_coordinates(track),
        )

    def load(self, input_path: Path) -> Track:
        """Read ``input_path`` and parse it into a track."""
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            document = etree.parse(str(input_path), parser)
        except (etree.XMLSyntaxError, OSError) as exc:
            raise MalformedInputError(f"Failed reading XML file {exc}") from exc
        return self.parse_root(document.getroot())
