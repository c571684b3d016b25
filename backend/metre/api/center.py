"""POST /api/map/center — centre the map on a pasted Google Maps link."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from metre.dependencies import get_workspace
from metre.engine.workspace import Workspace
from metre.models.project import GeoPoint
from metre.models.requests import MapLinkRequest

router = APIRouter()


@router.post("/map/center", response_model=GeoPoint)
async def center_map(req: MapLinkRequest, ws: Workspace = Depends(get_workspace)) -> GeoPoint:
    return ws.center_on_link(req.url)
