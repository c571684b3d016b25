"""GET /api/project, /api/report — read-only views of the workspace."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from metre.dependencies import get_workspace
from metre.engine.workspace import Workspace
from metre.llm.report import build_report
from metre.models.responses import CaptureStatus, ProjectSnapshot, ReportResponse

router = APIRouter()


def capture_status(ws: Workspace) -> CaptureStatus:
    capture = ws.capture
    return CaptureStatus(
        state=capture.state,
        target_kind=capture.target_kind,
        points=list(capture.points),
        cursor=capture.cursor,
        can_finish=capture.can_finish,
    )


def snapshot(ws: Workspace) -> ProjectSnapshot:
    project = ws.project
    return ProjectSnapshot(
        layers=project.layers,
        shapes=project.shapes,
        active_layer_id=project.active_layer_id,
        selected_shape_id=project.selected_shape_id,
        totals=ws.store.layer_totals(),
        draw_order=[l.id for l in ws.store.draw_order()],
        tool_mode=ws.tool_mode,
        capture=capture_status(ws),
        map_center=ws.map_center,
    )


@router.get("/project", response_model=ProjectSnapshot)
async def get_project(ws: Workspace = Depends(get_workspace)) -> ProjectSnapshot:
    return snapshot(ws)


@router.get("/report", response_model=ReportResponse)
async def get_report(ws: Workspace = Depends(get_workspace)) -> ReportResponse:
    return ReportResponse(rows=build_report(ws.store))
