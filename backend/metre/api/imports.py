"""POST /api/import — KML document as the raw request body."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from metre.dependencies import get_workspace
from metre.engine.workspace import Workspace
from metre.models.responses import ImportResponse

router = APIRouter()


@router.post("/import", response_model=ImportResponse, status_code=201)
async def import_document(
    request: Request,
    filename: str = Query(default="document.kml", description="Source file name, names folder-less imports"),
    ws: Workspace = Depends(get_workspace),
) -> ImportResponse:
    data = await request.body()
    result = ws.import_document(data, filename)
    return ImportResponse(layers=result.layers, shape_count=len(result.shapes), center=result.center)
