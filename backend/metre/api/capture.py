"""Capture events from the map widget: tool mode, clicks, hover, finish, cancel."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from metre.api.project import capture_status
from metre.dependencies import get_workspace
from metre.engine.workspace import Workspace
from metre.models.project import GeoPoint
from metre.models.requests import FinishRequest, PointRequest, ToolModeRequest
from metre.models.responses import CaptureStatus, FinishResponse

router = APIRouter(prefix="/capture")


@router.put("/mode", response_model=CaptureStatus)
async def set_mode(req: ToolModeRequest, ws: Workspace = Depends(get_workspace)) -> CaptureStatus:
    ws.set_tool_mode(req.mode)
    return capture_status(ws)


@router.post("/points", response_model=CaptureStatus)
async def add_point(req: PointRequest, ws: Workspace = Depends(get_workspace)) -> CaptureStatus:
    ws.add_point(GeoPoint(lat=req.lat, lng=req.lng))
    return capture_status(ws)


@router.post("/hover", response_model=CaptureStatus)
async def hover(req: PointRequest, ws: Workspace = Depends(get_workspace)) -> CaptureStatus:
    ws.hover(GeoPoint(lat=req.lat, lng=req.lng))
    return capture_status(ws)


@router.post("/vertices/{index}", response_model=FinishResponse)
async def click_vertex(
    index: int,
    req: FinishRequest | None = None,
    ws: Workspace = Depends(get_workspace),
) -> FinishResponse:
    shape = ws.click_vertex(index, req.name if req is not None else None)
    return FinishResponse(shape=shape, capture=capture_status(ws))


@router.post("/finish", response_model=FinishResponse)
async def finish(req: FinishRequest | None = None, ws: Workspace = Depends(get_workspace)) -> FinishResponse:
    shape = ws.finish_capture(req.name if req is not None else None)
    return FinishResponse(shape=shape, capture=capture_status(ws))


@router.post("/cancel", response_model=CaptureStatus)
async def cancel(ws: Workspace = Depends(get_workspace)) -> CaptureStatus:
    ws.cancel_capture()
    return capture_status(ws)
