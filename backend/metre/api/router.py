"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from metre.api import capture, center, health, imports, layers, project, shapes, summary

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(project.router)
api_router.include_router(layers.router)
api_router.include_router(shapes.router)
api_router.include_router(capture.router)
api_router.include_router(imports.router)
api_router.include_router(center.router)
api_router.include_router(summary.router)
