"""Measurement report handed to the summary model. Measurement layers only."""

from __future__ import annotations

from pydantic import BaseModel

from metre.engine.store import LayerStore
from metre.models.project import LayerKind


class ReportRow(BaseModel):
    layer_name: str
    kind_label: str
    total_value: str  # formatted to 2 decimals
    unit: str
    shape_count: int


def build_report(store: LayerStore) -> list[ReportRow]:
    totals = store.layer_totals()
    rows = []
    for layer in store.project.layers:
        if not layer.is_measurement:
            continue
        surface = layer.kind == LayerKind.SURFACE
        rows.append(
            ReportRow(
                layer_name=layer.name,
                kind_label="Surface Area" if surface else "Linear Length",
                total_value=f"{totals.get(layer.id, 0.0):.2f}",
                unit=layer.unit,
                shape_count=len(store.shapes_of(layer.id)),
            )
        )
    return rows
