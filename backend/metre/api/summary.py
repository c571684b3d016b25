"""POST /api/summary — AI summary of the measurement report (standard + streaming)."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from metre.dependencies import get_workspace
from metre.engine.workspace import Workspace
from metre.llm.report import build_report
from metre.models.responses import SummaryResponse

router = APIRouter()


@router.post("/summary", response_model=SummaryResponse)
async def summary(ws: Workspace = Depends(get_workspace)) -> SummaryResponse:
    from metre.llm.client import summarize

    text = await summarize(build_report(ws.store))
    return SummaryResponse(text=text)


@router.post("/summary/stream")
async def summary_stream(ws: Workspace = Depends(get_workspace)) -> StreamingResponse:
    from metre.llm.client import stream_summary

    return StreamingResponse(
        stream_summary(build_report(ws.store)),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
