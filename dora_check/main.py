from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dora_check.config import settings

logger = logging.getLogger(__name__)


def _register_routers(app: FastAPI) -> None:
    """Attach all domain routers under the /api prefix."""
    from dora_check.routers.assessment import router as assessment_router
    from dora_check.routers.reports import router as reports_router

    app.include_router(assessment_router, prefix="/api")
    app.include_router(reports_router, prefix="/api")


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore[type-arg]
    """Application lifespan handler: report delivery mode on startup."""
    from dora_check.services.notification_service import notification_client

    if notification_client.is_configured:
        logger.info("Report delivery via webhook enabled")
    else:
        logger.info("Report delivery in log-only mode")
    yield


def create_app() -> FastAPI:
    """Construct and configure the FastAPI application."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="DORA Quick Check API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_routers(app)

    @app.get("/api/health", tags=["health"])
    async def health_check() -> dict[str, Any]:
        """Liveness probe endpoint."""
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run("dora_check.main:app", host=settings.HOST, port=settings.PORT)
