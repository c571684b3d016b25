"""ShapeCapture — turns point-add / finish / cancel events into a finished vertex list.

One session at a time. Guard rejections (finishing too early, adding a point
while idle) leave the state untouched and surface nothing.
"""

from __future__ import annotations

import enum
import logging

from metre.models.project import MIN_POINTS, GeoPoint, Layer, ShapeKind, shape_kind_for

logger = logging.getLogger(__name__)


class CaptureState(str, enum.Enum):
    IDLE = "idle"
    CAPTURING = "capturing"


def can_start_capture(layer: Layer | None, kind: ShapeKind | None = None) -> bool:
    """Surface layers draw polygons, length layers polylines, imported layers nothing."""
    if layer is None or not layer.is_measurement:
        return False
    layer_kind = shape_kind_for(layer)
    if layer_kind is None:
        return False
    return kind is None or kind == layer_kind


class ShapeCapture:
    """Idle ⇄ Capturing(points, target_kind) state machine."""

    def __init__(self) -> None:
        self.state = CaptureState.IDLE
        self.target_kind: ShapeKind | None = None
        self.points: list[GeoPoint] = []
        # Last pointer position, drives the rubber-band preview segment
        self.cursor: GeoPoint | None = None

    @property
    def is_capturing(self) -> bool:
        return self.state == CaptureState.CAPTURING

    @property
    def can_finish(self) -> bool:
        if not self.is_capturing or self.target_kind is None:
            return False
        return len(self.points) >= MIN_POINTS[self.target_kind]

    def start(self, kind: ShapeKind) -> None:
        if self.is_capturing:
            self.cancel()
        self.state = CaptureState.CAPTURING
        self.target_kind = kind
        self.points = []
        self.cursor = None
        logger.debug("Capture started (%s)", kind.value)

    def add_point(self, point: GeoPoint) -> None:
        if not self.is_capturing:
            return
        self.points.append(point)

    def hover(self, point: GeoPoint) -> None:
        if self.is_capturing:
            self.cursor = point

    def try_finish(self) -> list[GeoPoint] | None:
        """Return the captured vertices and go idle, or do nothing if too few."""
        if not self.can_finish:
            return None
        points = self.points
        logger.debug("Capture finished with %d points", len(points))
        self._reset()
        return points

    def click_vertex(self, index: int) -> list[GeoPoint] | None:
        # Clicking the first vertex closes the polygon
        if self.target_kind == ShapeKind.POLYGON and index == 0:
            return self.try_finish()
        return None

    def cancel(self) -> None:
        if self.is_capturing:
            logger.debug("Capture cancelled, %d points discarded", len(self.points))
        self._reset()

    def _reset(self) -> None:
        self.state = CaptureState.IDLE
        self.target_kind = None
        self.points = []
        self.cursor = None
