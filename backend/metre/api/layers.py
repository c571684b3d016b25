"""Layer panel commands: create, delete, activate, visibility, opacity, totals."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from metre.dependencies import get_workspace
from metre.engine.workspace import Workspace
from metre.models.project import Layer
from metre.models.requests import AddLayerRequest, OpacityRequest
from metre.models.responses import LayerTotalResponse

router = APIRouter(prefix="/layers")


@router.post("", response_model=Layer, status_code=201)
async def add_layer(req: AddLayerRequest, ws: Workspace = Depends(get_workspace)) -> Layer:
    return ws.add_layer(req.name, req.kind, req.color)


@router.delete("/{layer_id}", status_code=204)
async def delete_layer(layer_id: str, ws: Workspace = Depends(get_workspace)) -> Response:
    ws.delete_layer(layer_id)
    return Response(status_code=204)


@router.post("/{layer_id}/activate", response_model=Layer)
async def activate_layer(layer_id: str, ws: Workspace = Depends(get_workspace)) -> Layer:
    return ws.set_active_layer(layer_id)


@router.post("/{layer_id}/visibility", response_model=Layer)
async def toggle_visibility(layer_id: str, ws: Workspace = Depends(get_workspace)) -> Layer:
    return ws.toggle_visibility(layer_id)


@router.put("/{layer_id}/opacity", response_model=Layer)
async def set_opacity(layer_id: str, req: OpacityRequest, ws: Workspace = Depends(get_workspace)) -> Layer:
    return ws.set_opacity(layer_id, req.opacity)


@router.get("/{layer_id}/total", response_model=LayerTotalResponse)
async def layer_total(layer_id: str, ws: Workspace = Depends(get_workspace)) -> LayerTotalResponse:
    total = ws.store.layer_total(layer_id)
    layer = ws.store.get_layer(layer_id)
    return LayerTotalResponse(
        layer_id=layer_id,
        total=total,
        unit=layer.unit if total is not None else None,
    )
