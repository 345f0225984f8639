"""Health check for the service request API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["system"])


@health_router.get("/health", summary="Service health check")
def healthcheck(request: Request) -> JSONResponse:
    """Report whether the submission database answers a trivial query."""

    try:
        with request.app.state.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.error("Health check could not reach the database", exc_info=True)
        return JSONResponse(status_code=503, content={"status": "degraded", "database": "unavailable"})
    return JSONResponse(content={"status": "ok", "database": "ok"})
