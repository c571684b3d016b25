"""Shape commands: delete, select, convert into a measurement layer."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from metre.dependencies import get_workspace
from metre.engine.workspace import Workspace
from metre.models.project import Shape
from metre.models.requests import ConvertRequest, SelectionRequest

router = APIRouter()


@router.delete("/shapes/{shape_id}", status_code=204)
async def delete_shape(shape_id: str, ws: Workspace = Depends(get_workspace)) -> Response:
    ws.delete_shape(shape_id)
    return Response(status_code=204)


@router.put("/selection", response_model=Shape | None)
async def select_shape(req: SelectionRequest, ws: Workspace = Depends(get_workspace)) -> Shape | None:
    return ws.select_shape(req.shape_id)


@router.post("/shapes/{shape_id}/convert", response_model=Shape)
async def convert_shape(
    shape_id: str,
    req: ConvertRequest | None = None,
    ws: Workspace = Depends(get_workspace),
) -> Shape:
    target = req.target_layer_id if req is not None else None
    return ws.convert_shape(shape_id, target)
