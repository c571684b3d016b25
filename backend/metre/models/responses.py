"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from metre.engine.capture import CaptureState
from metre.engine.workspace import ToolMode
from metre.llm.report import ReportRow
from metre.models.project import GeoPoint, Layer, Shape, ShapeKind


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    env: str = "development"


class CaptureStatus(BaseModel):
    state: CaptureState = CaptureState.IDLE
    target_kind: ShapeKind | None = None
    points: list[GeoPoint] = Field(default_factory=list)
    cursor: GeoPoint | None = None
    can_finish: bool = False


class ProjectSnapshot(BaseModel):
    layers: list[Layer] = Field(default_factory=list)
    shapes: list[Shape] = Field(default_factory=list)
    active_layer_id: str | None = None
    selected_shape_id: str | None = None
    totals: dict[str, float] = Field(default_factory=dict)
    draw_order: list[str] = Field(default_factory=list)
    tool_mode: ToolMode = ToolMode.SELECT
    capture: CaptureStatus = Field(default_factory=CaptureStatus)
    map_center: GeoPoint | None = None


class LayerTotalResponse(BaseModel):
    layer_id: str
    total: float | None = None
    unit: str | None = None


class FinishResponse(BaseModel):
    shape: Shape | None = None
    capture: CaptureStatus


class ImportResponse(BaseModel):
    layers: list[Layer] = Field(default_factory=list)
    shape_count: int = 0
    center: GeoPoint | None = None


class ReportResponse(BaseModel):
    rows: list[ReportRow] = Field(default_factory=list)


class SummaryResponse(BaseModel):
    text: str
