"""Workspace — one project, its store and the capture session, driven by UI events.

Data flow: capture finishes → GeoMath measures → LayerStore stores the shape
under the active layer. Imports and conversions go through the same store.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable

from metre.engine import geomath
from metre.engine.capture import ShapeCapture, can_start_capture
from metre.engine.converter import convert_shape
from metre.engine.maplink import center_from_link
from metre.engine.store import LayerStore
from metre.errors import InvalidOperationError
from metre.kml.importer import ImportResult, import_kml
from metre.models.project import (
    GeoPoint,
    Layer,
    LayerKind,
    Project,
    Shape,
    ShapeKind,
    new_project,
    shape_kind_for,
)

logger = logging.getLogger(__name__)


class ToolMode(str, enum.Enum):
    SELECT = "select"
    DRAW_POLYGON = "draw_polygon"
    DRAW_LINE = "draw_line"


_MODE_KIND = {ToolMode.DRAW_POLYGON: ShapeKind.POLYGON, ToolMode.DRAW_LINE: ShapeKind.POLYLINE}
_KIND_MODE = {kind: mode for mode, kind in _MODE_KIND.items()}

# Default shape names: "Surface 3", "Longueur 1"
KIND_LABELS = {ShapeKind.POLYGON: "Surface", ShapeKind.POLYLINE: "Longueur"}


class Workspace:
    def __init__(self, project: Project | None = None, seed_default_layer: bool = True) -> None:
        self.project = project if project is not None else new_project(seed_default_layer)
        self.store = LayerStore(self.project)
        self.capture = ShapeCapture()
        self.tool_mode = ToolMode.SELECT
        self.map_center: GeoPoint | None = None

    @property
    def active_layer(self) -> Layer | None:
        return self.store.active_layer

    # ── Layers ───────────────────────────────────────────────────────────

    def add_layer(self, name: str, kind: LayerKind, color: str) -> Layer:
        layer = self.store.add_layer(name, kind, color)
        self._enter_layer_mode(layer)
        return layer

    def set_active_layer(self, layer_id: str) -> Layer:
        layer = self.store.set_active_layer(layer_id)
        self._enter_layer_mode(layer)
        return layer

    def delete_layer(self, layer_id: str) -> None:
        was_active = self.project.active_layer_id == layer_id
        self.store.delete_layer(layer_id)
        if was_active:
            self.capture.cancel()
            self.tool_mode = ToolMode.SELECT

    def toggle_visibility(self, layer_id: str) -> Layer:
        return self.store.toggle_visibility(layer_id)

    def set_opacity(self, layer_id: str, value: float) -> Layer:
        return self.store.set_opacity(layer_id, value)

    def _enter_layer_mode(self, layer: Layer) -> None:
        kind = shape_kind_for(layer)
        if not layer.is_measurement or kind is None:
            self.set_tool_mode(ToolMode.SELECT)
            return
        self.set_tool_mode(_KIND_MODE[kind])

    # ── Capture ──────────────────────────────────────────────────────────

    def set_tool_mode(self, mode: ToolMode) -> bool:
        """Switch tools. Drawing modes the active layer cannot use are ignored."""
        if mode == ToolMode.SELECT:
            self.capture.cancel()
            self.tool_mode = mode
            return True

        kind = _MODE_KIND[mode]
        if not can_start_capture(self.active_layer, kind):
            return False
        self.tool_mode = mode
        self.project.selected_shape_id = None
        self.capture.start(kind)
        return True

    def add_point(self, point: GeoPoint) -> None:
        kind = _MODE_KIND.get(self.tool_mode)
        if kind is None:
            return
        if not self.capture.is_capturing:
            if not can_start_capture(self.active_layer, kind):
                return
            self.capture.start(kind)
        self.capture.add_point(point)

    def hover(self, point: GeoPoint) -> None:
        self.capture.hover(point)

    def finish_capture(self, name: str | None = None) -> Shape | None:
        """Store the captured geometry under the active layer; None if not finishable."""
        return self._finish(self.capture.try_finish, name)

    def click_vertex(self, index: int, name: str | None = None) -> Shape | None:
        return self._finish(lambda: self.capture.click_vertex(index), name)

    def _finish(self, finisher: Callable[[], list[GeoPoint] | None], name: str | None) -> Shape | None:
        if not self.capture.can_finish:
            return None
        layer = self.active_layer
        if layer is None or not can_start_capture(layer, self.capture.target_kind):
            raise InvalidOperationError("Active layer missing or incompatible with the capture")
        points = finisher()
        if points is None:
            return None
        return self._store_captured(layer, points, name)

    def cancel_capture(self) -> None:
        self.capture.cancel()
        self.project.selected_shape_id = None

    def _store_captured(self, layer: Layer, points: list[GeoPoint], name: str | None) -> Shape:
        kind = shape_kind_for(layer)
        measured = geomath.measure(points, kind)
        if not name or not name.strip():
            count = len(self.store.shapes_of(layer.id))
            name = f"{KIND_LABELS[kind]} {count + 1}"

        shape = Shape(
            name=name.strip(),
            kind=kind,
            points=points,
            layer_id=layer.id,
            measured_value=measured,
        )
        self.store.add_shape(shape)
        logger.info("Shape %r added to %r (%.2f %s)", shape.name, layer.name, measured, layer.unit)
        return shape

    # ── Shapes ───────────────────────────────────────────────────────────

    def select_shape(self, shape_id: str | None) -> Shape | None:
        if self.tool_mode != ToolMode.SELECT and shape_id is not None:
            return None
        return self.store.select_shape(shape_id)

    def delete_shape(self, shape_id: str) -> None:
        self.store.delete_shape(shape_id)

    def delete_selected_shape(self) -> None:
        if self.project.selected_shape_id is not None:
            self.store.delete_shape(self.project.selected_shape_id)

    def convert_shape(self, shape_id: str, target_layer_id: str | None = None) -> Shape:
        """Move a shape into ``target_layer_id`` (default: the active layer)."""
        target = target_layer_id or self.project.active_layer_id
        return convert_shape(self.store, shape_id, target)

    # ── Import / map ─────────────────────────────────────────────────────

    def import_document(self, data: bytes, filename: str) -> ImportResult:
        result = import_kml(data, filename)
        self.store.add_imported(result.layers, result.shapes)
        if result.center is not None:
            self.map_center = result.center
        return result

    def center_on_link(self, url: str) -> GeoPoint:
        self.map_center = center_from_link(url)
        return self.map_center
