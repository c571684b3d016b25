"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from metre.engine.workspace import ToolMode
from metre.models.project import LayerKind


class AddLayerRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Layer name")
    kind: LayerKind = Field(..., description="surface or length")
    color: str = Field(default="#ef4444", pattern=r"^#[0-9a-fA-F]{6}$", description="Hex colour (#rrggbb)")


class OpacityRequest(BaseModel):
    opacity: float = Field(..., allow_inf_nan=False, description="Clamped to [0, 1]")


class SelectionRequest(BaseModel):
    shape_id: str | None = Field(default=None, description="Shape to select, null to clear")


class ConvertRequest(BaseModel):
    target_layer_id: str | None = Field(
        default=None,
        description="Measurement layer receiving the shape (defaults to the active layer)",
    )


class ToolModeRequest(BaseModel):
    mode: ToolMode


class PointRequest(BaseModel):
    lat: float
    lng: float


class FinishRequest(BaseModel):
    name: str | None = Field(default=None, description="Shape name, defaults to '<label> <n>'")


class MapLinkRequest(BaseModel):
    url: str = Field(..., description="Google Maps link containing @lat,lng")
