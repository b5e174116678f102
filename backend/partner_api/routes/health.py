"""
Partner API - Health Check Route
=================================

What:  Health endpoint for container probes and load balancers.
How:   Runs SELECT 1 against the database and checks that the upload
       directory exists and is writable.

    Status levels:
    - healthy:   database reachable and uploads writable (HTTP 200)
    - unhealthy: either check failed (HTTP 503)
"""

import logging
import os
import time

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text

from partner_api import __version__
from partner_api.schemas.common import HealthResponse
from partner_api.services.upload_service import UploadService, get_upload_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "A dependency is unavailable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    uploads: UploadService = Depends(get_upload_service),
) -> HealthResponse:
    db_status = "connected"
    uploads_status = "writable"

    try:
        from partner_api.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", str(e))

    if not (uploads.upload_dir.is_dir() and os.access(uploads.upload_dir, os.W_OK)):
        uploads_status = "unavailable"
        logger.warning("Health check: upload directory not writable: %s", uploads.upload_dir)

    overall = "healthy"
    if db_status != "connected" or uploads_status != "writable":
        overall = "unhealthy"
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uploads=uploads_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
