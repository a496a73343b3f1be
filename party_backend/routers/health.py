"""Health check endpoint."""
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        return JSONResponse(status_code=503, content={"status": "starting", "database": "unavailable"})

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "error", "database": "disconnected"})

    return {"status": "ok", "database": "connected"}
