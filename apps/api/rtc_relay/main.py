"""FastAPI application for the WebRTC signaling relay."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from .core.config import settings
from .routers.signaling import router as signaling_router

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Apply the configured level to the root logger."""

    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging(settings.log_level)

app = FastAPI(title="RTC Signaling Relay", version="0.1.0")

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

app.include_router(signaling_router)


@app.get("/health", tags=["meta"])
async def health() -> dict[str, str]:
    """Liveness probe with the running environment."""

    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.app_env,
    }


@app.head("/health", tags=["meta"])
async def health_head() -> Response:
    """Allow HEAD for uptime monitors that only need the status code."""

    return Response(status_code=200)


logger.info("Signaling relay ready on %s (%s)", settings.signaling_path, settings.app_env)
