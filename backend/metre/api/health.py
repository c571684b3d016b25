"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from metre.config import Settings
from metre.dependencies import get_settings
from metre.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", version="0.1.0", env=settings.metre_env)


@router.get("/prompts")
async def prompts() -> dict[str, str]:
    from metre.llm.prompts import get_all_templates

    return get_all_templates()
