"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from metre.config import settings
from metre.errors import ImportFailedError, InvalidOperationError, NotFoundError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.metre_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _invalid_operation(request: Request, exc: InvalidOperationError) -> JSONResponse:
    logger.info("Refused %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def _import_failed(request: Request, exc: ImportFailedError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": exc.message, "reason": exc.reason})


def create_app() -> FastAPI:
    app = FastAPI(
        title="MetreMaster",
        description="Surface and length take-off over a map — layers, capture, KML import",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(InvalidOperationError, _invalid_operation)
    app.add_exception_handler(ImportFailedError, _import_failed)

    from metre.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
