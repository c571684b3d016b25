"""Converter — moves a shape into a measurement layer, retyping and remeasuring it."""

from __future__ import annotations

import logging

from metre.engine import geomath
from metre.engine.store import LayerStore
from metre.errors import InvalidOperationError, NotFoundError
from metre.models.project import UNNAMED, Shape, shape_kind_for

logger = logging.getLogger(__name__)


def convert_shape(store: LayerStore, shape_id: str, target_layer_id: str | None) -> Shape:
    """Replace ``shape_id`` by a new shape owned by the target measurement layer.

    The target layer's kind decides the geometry (surface → polygon,
    length → polyline) whatever the source shape was. A geometry too small to
    measure keeps a value of 0 and is still converted.
    """
    shape = store.get_shape(shape_id)
    if shape is None:
        raise NotFoundError(f"Unknown shape {shape_id}")
    target = store.get_layer(target_layer_id)
    if target is None or not target.is_measurement:
        raise InvalidOperationError("Conversion target must be a surface or length layer")

    kind = shape_kind_for(target)
    if kind is None:
        raise InvalidOperationError(f"Layer {target.name!r} accepts no geometry")

    measured = geomath.measure(shape.points, kind)
    name = f"Import {target.name}" if shape.name == UNNAMED else shape.name

    converted = Shape(
        name=name,
        kind=kind,
        points=list(shape.points),
        layer_id=target.id,
        measured_value=measured,
    )
    store.replace_shape(shape.id, converted)
    store.select_shape(converted.id)
    logger.info(
        "Shape %r converted into %r as %s (%.2f %s)",
        shape.name, target.name, kind.value, measured, target.unit,
    )
    return converted
