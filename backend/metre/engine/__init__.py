"""Geometry & layer measurement engine."""

from metre.engine.capture import CaptureState, ShapeCapture, can_start_capture
from metre.engine.converter import convert_shape
from metre.engine.store import LayerStore
from metre.engine.workspace import ToolMode, Workspace

__all__ = [
    "CaptureState",
    "ShapeCapture",
    "can_start_capture",
    "convert_shape",
    "LayerStore",
    "ToolMode",
    "Workspace",
]
