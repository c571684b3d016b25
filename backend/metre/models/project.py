"""Measurement project model — layers, shapes and the project aggregate."""

from __future__ import annotations

import enum
import uuid

from pydantic import BaseModel, Field, PrivateAttr, model_validator


def new_id() -> str:
    return uuid.uuid4().hex


class ShapeKind(str, enum.Enum):
    POLYGON = "polygon"
    POLYLINE = "polyline"


class LayerKind(str, enum.Enum):
    SURFACE = "surface"
    LENGTH = "length"
    MIXED = "mixed"


class LayerCategory(str, enum.Enum):
    MEASUREMENT = "measurement"
    IMPORTED = "imported"


# Unnamed placemarks and the label prefix of converted ones
UNNAMED = "Sans nom"

# Neutral gray for imported layers without a usable style
DEFAULT_COLOR = "#9ca3af"

# Minimum vertex count per geometry kind (closure is never stored)
MIN_POINTS = {ShapeKind.POLYGON: 3, ShapeKind.POLYLINE: 2}


class GeoPoint(BaseModel):
    """Latitude/longitude in decimal degrees, taken as given."""

    lat: float
    lng: float

    def as_lnglat(self) -> tuple[float, float]:
        return (self.lng, self.lat)


class Shape(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    kind: ShapeKind
    # Open ring for polygons: the first point is never repeated at the end
    points: list[GeoPoint] = Field(default_factory=list)
    layer_id: str
    # Area in m² (polygon) or length in m (polyline), 0 until measured
    measured_value: float = Field(default=0.0, ge=0.0)


class Layer(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    color: str
    kind: LayerKind
    category: LayerCategory = Field(default=LayerCategory.MEASUREMENT, frozen=True)
    is_visible: bool = True
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_kind_matches_category(self) -> Layer:
        # Measurement layers are surface or length, imported layers always mixed
        mixed = self.kind == LayerKind.MIXED
        if self.category == LayerCategory.IMPORTED and not mixed:
            raise ValueError(f"Imported layer {self.name!r} must be mixed, not {self.kind.value}")
        if self.category == LayerCategory.MEASUREMENT and mixed:
            raise ValueError(f"Measurement layer {self.name!r} cannot be mixed")
        return self

    @property
    def is_measurement(self) -> bool:
        return self.category == LayerCategory.MEASUREMENT

    @property
    def unit(self) -> str:
        return "m²" if self.kind == LayerKind.SURFACE else "m"


class Project(BaseModel):
    """Aggregate root. Mutated only through ``LayerStore``."""

    layers: list[Layer] = Field(default_factory=list)
    shapes: list[Shape] = Field(default_factory=list)
    active_layer_id: str | None = None
    selected_shape_id: str | None = None

    # Bumped on every mutation; keys the totals memo
    _revision: int = PrivateAttr(default=0)

    @property
    def revision(self) -> int:
        return self._revision

    def touch(self) -> None:
        self._revision += 1


def shape_kind_for(layer: Layer) -> ShapeKind | None:
    """Geometry kind a measurement layer accepts; None for imported layers."""
    if layer.kind == LayerKind.SURFACE:
        return ShapeKind.POLYGON
    if layer.kind == LayerKind.LENGTH:
        return ShapeKind.POLYLINE
    return None


def new_project(seed_default_layer: bool = True) -> Project:
    """Fresh project, optionally seeded with the "Murs" surface layer."""
    project = Project()
    if seed_default_layer:
        layer = Layer(name="Murs", color="#ef4444", kind=LayerKind.SURFACE, opacity=0.5)
        project.layers.append(layer)
        project.active_layer_id = layer.id
    return project
