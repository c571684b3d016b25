"""LayerStore — every mutation of a Project goes through here.

Validation happens before any change, so a refused operation leaves the
project as it was. Deletes are idempotent.
"""

from __future__ import annotations

import logging
import math

from metre.errors import InvalidOperationError, NotFoundError
from metre.models.project import (
    Layer,
    LayerCategory,
    LayerKind,
    Project,
    Shape,
)

logger = logging.getLogger(__name__)

_DEFAULT_OPACITY = {LayerKind.SURFACE: 0.5, LayerKind.LENGTH: 1.0}


class LayerStore:
    def __init__(self, project: Project) -> None:
        self.project = project
        self._totals_cache: tuple[int, dict[str, float]] | None = None

    # ── Lookups ──────────────────────────────────────────────────────────

    def get_layer(self, layer_id: str | None) -> Layer | None:
        if layer_id is None:
            return None
        return next((l for l in self.project.layers if l.id == layer_id), None)

    def get_shape(self, shape_id: str | None) -> Shape | None:
        if shape_id is None:
            return None
        return next((s for s in self.project.shapes if s.id == shape_id), None)

    @property
    def active_layer(self) -> Layer | None:
        return self.get_layer(self.project.active_layer_id)

    def shapes_of(self, layer_id: str) -> list[Shape]:
        return [s for s in self.project.shapes if s.layer_id == layer_id]

    def draw_order(self) -> list[Layer]:
        """Imported layers underneath, measurement layers on top."""
        imported = [l for l in self.project.layers if not l.is_measurement]
        measurement = [l for l in self.project.layers if l.is_measurement]
        return imported + measurement

    # ── Layers ───────────────────────────────────────────────────────────

    def add_layer(self, name: str, kind: LayerKind, color: str) -> Layer:
        if kind not in _DEFAULT_OPACITY:
            raise InvalidOperationError(f"Measurement layers are surface or length, not {kind.value}")
        layer = Layer(
            name=name,
            color=color,
            kind=kind,
            category=LayerCategory.MEASUREMENT,
            opacity=_DEFAULT_OPACITY[kind],
        )
        self.project.layers.append(layer)
        self.project.active_layer_id = layer.id
        self.project.selected_shape_id = None
        self.project.touch()
        logger.info("Layer %r added (%s)", name, kind.value)
        return layer

    def delete_layer(self, layer_id: str) -> None:
        layer = self.get_layer(layer_id)
        if layer is None:
            return
        dropped = {s.id for s in self.project.shapes if s.layer_id == layer_id}
        self.project.layers = [l for l in self.project.layers if l.id != layer_id]
        self.project.shapes = [s for s in self.project.shapes if s.layer_id != layer_id]
        if self.project.active_layer_id == layer_id:
            self.project.active_layer_id = None
        if self.project.selected_shape_id in dropped:
            self.project.selected_shape_id = None
        self.project.touch()
        logger.info("Layer %r deleted with %d shapes", layer.name, len(dropped))

    def set_active_layer(self, layer_id: str) -> Layer:
        layer = self.get_layer(layer_id)
        if layer is None:
            raise NotFoundError(f"Unknown layer {layer_id}")
        self.project.active_layer_id = layer.id
        self.project.selected_shape_id = None
        self.project.touch()
        return layer

    def toggle_visibility(self, layer_id: str) -> Layer:
        layer = self._require_layer(layer_id)
        layer.is_visible = not layer.is_visible
        self.project.touch()
        return layer

    def set_opacity(self, layer_id: str, value: float) -> Layer:
        layer = self._require_layer(layer_id)
        if not math.isfinite(value):
            raise InvalidOperationError(f"Opacity must be a finite number, got {value!r}")
        layer.opacity = min(max(float(value), 0.0), 1.0)
        self.project.touch()
        return layer

    # ── Shapes ───────────────────────────────────────────────────────────

    def add_shape(self, shape: Shape) -> Shape:
        if self.get_layer(shape.layer_id) is None:
            raise InvalidOperationError(f"Shape {shape.name!r} references unknown layer {shape.layer_id}")
        self.project.shapes.append(shape)
        self.project.touch()
        return shape

    def delete_shape(self, shape_id: str) -> None:
        if self.get_shape(shape_id) is None:
            return
        self.project.shapes = [s for s in self.project.shapes if s.id != shape_id]
        if self.project.selected_shape_id == shape_id:
            self.project.selected_shape_id = None
        self.project.touch()

    def select_shape(self, shape_id: str | None) -> Shape | None:
        shape = self.get_shape(shape_id)
        if shape_id is not None and shape is None:
            raise NotFoundError(f"Unknown shape {shape_id}")
        self.project.selected_shape_id = shape_id
        return shape

    def replace_shape(self, old_id: str, shape: Shape) -> Shape:
        """Swap one shape for another in a single step (used by conversion)."""
        if self.get_shape(old_id) is None:
            raise NotFoundError(f"Unknown shape {old_id}")
        if self.get_layer(shape.layer_id) is None:
            raise InvalidOperationError(f"Unknown layer {shape.layer_id}")
        self.project.shapes = [s for s in self.project.shapes if s.id != old_id]
        self.project.shapes.append(shape)
        if self.project.selected_shape_id == old_id:
            self.project.selected_shape_id = None
        self.project.touch()
        return shape

    def add_imported(self, layers: list[Layer], shapes: list[Shape]) -> None:
        """Commit an import batch entirely or not at all."""
        known = {l.id for l in self.project.layers} | {l.id for l in layers}
        for layer in layers:
            if layer.category != LayerCategory.IMPORTED:
                raise InvalidOperationError(f"Layer {layer.name!r} is not an imported layer")
            if layer.kind != LayerKind.MIXED:
                raise InvalidOperationError(f"Imported layer {layer.name!r} must be mixed, not {layer.kind.value}")
        for shape in shapes:
            if shape.layer_id not in known:
                raise InvalidOperationError(f"Shape {shape.name!r} references unknown layer {shape.layer_id}")
        self.project.layers.extend(layers)
        self.project.shapes.extend(shapes)
        self.project.touch()

    # ── Totals ───────────────────────────────────────────────────────────

    def layer_totals(self) -> dict[str, float]:
        """Sum of measured values per measurement layer, memoised per revision."""
        revision = self.project.revision
        if self._totals_cache is not None and self._totals_cache[0] == revision:
            return dict(self._totals_cache[1])

        totals = {l.id: 0.0 for l in self.project.layers if l.is_measurement}
        for shape in self.project.shapes:
            if shape.layer_id in totals:
                totals[shape.layer_id] += shape.measured_value
        self._totals_cache = (revision, totals)
        return dict(totals)

    def layer_total(self, layer_id: str) -> float | None:
        """None for imported layers, which carry no aggregate."""
        layer = self._require_layer(layer_id)
        if not layer.is_measurement:
            return None
        return self.layer_totals()[layer.id]

    def _require_layer(self, layer_id: str) -> Layer:
        layer = self.get_layer(layer_id)
        if layer is None:
            raise NotFoundError(f"Unknown layer {layer_id}")
        return layer
