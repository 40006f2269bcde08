"""KML document construction and serialization."""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from gpx_to_kml.application.options import LineStyleOptions
from gpx_to_kml.errors import OutputAlreadyExistsError, WriteFailureError
from gpx_to_kml.filenames import normalize_filename
from gpx_to_kml.models import Coordinate, Track

logger = logging.getLogger(__name__)

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
KML_NSMAP = {
    None: KML_NAMESPACE,
    "gx": "http://www.google.com/kml/ext/2.2",
    "kml": KML_NAMESPACE,
    "atom": "http://www.w3.org/2005/Atom",
}
STYLE_ID = "style1"
STYLE_MAP_ID = "stylemap_id00"


def format_coordinates(points: tuple[Coordinate, ...]) -> str:
    """Render points as space-terminated ``lon,lat,alt`` triples."""
    return "".join(
        f"{point.longitude:.7f},{point.latitude:.7f},{point.altitude:.7f} "
        for point in points
    )


def _text_child(parent: etree._Element, tag: str, text: str) -> etree._Element:
    child = etree.SubElement(parent, tag)
    child.text = text
    return child


def build_document(
    track: Track,
    style: LineStyleOptions,
) -> etree._ElementTree:
    """Build the KML tree for ``track``.

    Tags are left unqualified: they serialize into the default KML namespace
    declared on the root, next to the redundant ``kml`` prefix.
    """
    basename = f"{track.date_label} {track.name}"

    root = etree.Element("kml", nsmap=KML_NSMAP)
    document = etree.SubElement(root, "Document")
    _text_child(document, "name", f"{basename}.kml")

    style_element = etree.SubElement(document, "Style", id=STYLE_ID)
    line_style = etree.SubElement(style_element, "LineStyle")
    _text_child(line_style, "color", style.color)
    _text_child(line_style, "width", f"{style.width:g}")

    style_map = etree.SubElement(document, "StyleMap", id=STYLE_MAP_ID)
    for key in ("normal", "highlight"):
        pair = etree.SubElement(style_map, "Pair")
        _text_child(pair, "key", key)
        _text_child(pair, "styleUrl", STYLE_ID)

    placemark = etree.SubElement(document, "Placemark")
    _text_child(placemark, "name", basename)
    _text_child(placemark, "styleUrl", f"#{STYLE_MAP_ID}")
    geometry = etree.SubElement(placemark, "MultiGeometry")
    line = etree.SubElement(geometry, "LineString")
    _text_child(line, "coordinates", format_coordinates(track.points))

    return etree.ElementTree(root)


class KmlTrackWriter:
    """Write one KML file per track."""

    def output_path(self, track: Track, output_dir: Path) -> Path:
        """Return the normalized destination for ``track``."""
        filename = f"{track.date_label} {track.name}.kml"
        return output_dir / normalize_filename(filename)

    def write(
        self,
        track: Track,
        output_dir: Path,
        style: LineStyleOptions,
    ) -> Path:
        """Serialize ``track`` into ``output_dir``.

        Parameters
        ----------
        track : Track
            Parsed track.
        output_dir : Path
            Existing directory receiving the KML file.
        style : LineStyleOptions
            Line appearance for the track.

        Returns
        -------
        Path
            Path of the written KML file.

        Raises
        ------
        OutputAlreadyExistsError
            If the destination already exists.
        WriteFailureError
            If the document cannot be written.
        """
        output_path = self.output_path(track, output_dir)
        # Not atomic with the write below; concurrent writers may still collide.
        if output_path.exists():
            raise OutputAlreadyExistsError(
                f'Output file already exists, skipping "{output_path}"'
            )

        logger.info("Writing: %s", output_path)
        tree = build_document(track, style)
        try:
            with output_path.open("wb") as handle:
                tree.write(
                    handle,
                    encoding="UTF-8",
                    xml_declaration=True,
                    pretty_print=True,
                )
        except (OSError, etree.LxmlError) as exc:
            raise WriteFailureError(f'Failed writing to: "{output_path}"') from exc
        return output_path
