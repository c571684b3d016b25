"""KML importer — raw document bytes → imported layers and unmeasured shapes.

Tolerant at the smallest granularity: a bad coordinate tuple is dropped, a
placemark with no usable point is dropped, a missing style falls back to a
palette colour. Only an unreadable document or an import that yields no shape
at all fails, and then nothing is returned for commit.
"""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass, field

from metre.errors import ImportFailedError
from metre.kml.colors import kml_color_to_hex, palette_color
from metre.models.project import (
    DEFAULT_COLOR,
    UNNAMED,
    GeoPoint,
    Layer,
    LayerCategory,
    LayerKind,
    Shape,
    ShapeKind,
)

logger = logging.getLogger(__name__)

IMPORTED_OPACITY = 0.6


@dataclass
class ImportResult:
    layers: list[Layer] = field(default_factory=list)
    shapes: list[Shape] = field(default_factory=list)
    # Where the map should fly to after the import
    center: GeoPoint | None = None


def import_kml(data: bytes, filename: str = "") -> ImportResult:
    """Parse a KML document into imported layers and shapes (measured_value = 0)."""
    try:
        root = ET.fromstring(data)
    except (ET.ParseError, LookupError, ValueError) as e:
        logger.warning("KML import of %r failed: %s", filename, e)
        raise ImportFailedError("parse", f"Unreadable KML document: {e}") from e

    styles = parse_styles(root)
    result = ImportResult()

    folders = [el for el in root.iter() if _local(el.tag) == "Folder"]
    if folders:
        for index, folder in enumerate(folders):
            placemarks = list(_own_placemarks(folder))
            layer = _imported_layer(
                name=_child_text(folder, "name") or f"Folder {index + 1}",
                color=_folder_color(placemarks, styles, index),
            )
            result.layers.append(layer)
            result.shapes.extend(_collect_shapes(placemarks, layer))
    else:
        placemarks = [el for el in root.iter() if _local(el.tag) == "Placemark"]
        if placemarks:
            layer = _imported_layer(name=f"Import {filename or 'document'}", color=DEFAULT_COLOR)
            result.layers.append(layer)
            result.shapes.extend(_collect_shapes(placemarks, layer))

    if not result.shapes:
        logger.warning("KML import of %r found no polygon or line", filename)
        raise ImportFailedError("empty", "No compatible geometry (polygon/line) found")

    result.center = result.shapes[0].points[0]
    logger.info(
        "Imported %r: %d layers, %d shapes",
        filename, len(result.layers), len(result.shapes),
    )
    return result


# ── Styles ───────────────────────────────────────────────────────────────


def parse_styles(root: ET.Element) -> dict[str, str]:
    """``#styleId`` → ``#rrggbb``, from ``Style`` then ``StyleMap`` (normal pair)."""
    styles: dict[str, str] = {}
    for style in root.iter():
        if _local(style.tag) != "Style" or not style.get("id"):
            continue
        poly = _find_text(style, "PolyStyle", "color")
        line = _find_text(style, "LineStyle", "color")
        if poly:
            styles[f"#{style.get('id')}"] = kml_color_to_hex(poly)
        elif line:
            styles[f"#{style.get('id')}"] = kml_color_to_hex(line)

    for style_map in root.iter():
        if _local(style_map.tag) != "StyleMap" or not style_map.get("id"):
            continue
        for pair in _children(style_map, "Pair"):
            if _child_text(pair, "key") != "normal":
                continue
            target = _style_key(_child_text(pair, "styleUrl"))
            if target in styles:
                styles[f"#{style_map.get('id')}"] = styles[target]
    return styles


def _folder_color(placemarks: list[ET.Element], styles: dict[str, str], index: int) -> str:
    if placemarks:
        ref = _style_key(_descendant_text(placemarks[0], "styleUrl"))
        if ref in styles:
            return styles[ref]
    return palette_color(index)


def _style_key(style_url: str | None) -> str:
    """Keep only the ``#id`` fragment of a styleUrl."""
    if not style_url:
        return ""
    url = style_url.strip()
    return "#" + url.split("#", 1)[1] if "#" in url else url


# ── Placemarks ───────────────────────────────────────────────────────────


def parse_coordinates(text: str) -> list[GeoPoint]:
    """``lng,lat[,alt]`` tuples separated by whitespace; bad tuples are skipped."""
    points: list[GeoPoint] = []
    for token in text.split():
        parts = token.split(",")
        if len(parts) < 2:
            logger.debug("Skipping coordinate tuple %r", token)
            continue
        try:
            lng, lat = float(parts[0]), float(parts[1])
        except ValueError:
            logger.debug("Skipping coordinate tuple %r", token)
            continue
        if not (math.isfinite(lat) and math.isfinite(lng)):
            logger.debug("Skipping non-finite coordinate tuple %r", token)
            continue
        points.append(GeoPoint(lat=lat, lng=lng))
    return points


def placemark_to_shape(placemark: ET.Element, layer_id: str) -> Shape | None:
    polygon = _first_descendant(placemark, "Polygon")
    line = _first_descendant(placemark, "LineString")
    if polygon is not None:
        kind = ShapeKind.POLYGON
        outer = _first_descendant(polygon, "outerBoundaryIs")
        coords = _descendant_text(outer if outer is not None else polygon, "coordinates")
    elif line is not None:
        kind = ShapeKind.POLYLINE
        coords = _descendant_text(line, "coordinates")
    else:
        return None

    points = parse_coordinates(coords or "")
    if kind == ShapeKind.POLYGON and len(points) > 1 and points[0] == points[-1]:
        points = points[:-1]
    if not points:
        return None

    return Shape(
        name=_child_text(placemark, "name") or UNNAMED,
        kind=kind,
        points=points,
        layer_id=layer_id,
        measured_value=0.0,
    )


def _collect_shapes(placemarks: list[ET.Element], layer: Layer) -> list[Shape]:
    shapes = []
    for placemark in placemarks:
        shape = placemark_to_shape(placemark, layer.id)
        if shape is None:
            logger.debug("Placemark without usable geometry dropped from %r", layer.name)
            continue
        shapes.append(shape)
    return shapes


def _imported_layer(name: str, color: str) -> Layer:
    return Layer(
        name=name,
        color=color,
        kind=LayerKind.MIXED,
        category=LayerCategory.IMPORTED,
        opacity=IMPORTED_OPACITY,
    )


def _own_placemarks(folder: ET.Element) -> Iterator[ET.Element]:
    """Placemarks whose nearest enclosing folder is ``folder``."""
    for child in folder:
        tag = _local(child.tag)
        if tag == "Placemark":
            yield child
        elif tag != "Folder":
            yield from _own_placemarks(child)


# ── Namespace-agnostic element helpers ───────────────────────────────────


def _local(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _children(el: ET.Element, name: str) -> list[ET.Element]:
    return [c for c in el if _local(c.tag) == name]


def _child_text(el: ET.Element, name: str) -> str:
    for child in _children(el, name):
        if child.text and child.text.strip():
            return child.text.strip()
    return ""


def _first_descendant(el: ET.Element, name: str) -> ET.Element | None:
    return next((d for d in el.iter() if d is not el and _local(d.tag) == name), None)


def _descendant_text(el: ET.Element | None, name: str) -> str | None:
    if el is None:
        return None
    found = _first_descendant(el, name)
    return found.text if found is not None else None


def _find_text(el: ET.Element, parent: str, name: str) -> str | None:
    container = _first_descendant(el, parent)
    return _descendant_text(container, name)
