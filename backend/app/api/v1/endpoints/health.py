"""
Health check endpoints

- /health/live  - process is up
- /health/ready - database reachable and asset store root writable
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from datetime import datetime
from typing import Dict, Any
import os
import time

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.database import get_session_local
from app.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_database() -> Dict[str, Any]:
    """Check database connectivity"""
    start = time.time()
    try:
        async with get_session_local()() as session:
            await session.execute(text("SELECT 1"))
        return {"status": "healthy", "latency_ms": round((time.time() - start) * 1000, 2)}
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}


def check_storage() -> Dict[str, Any]:
    """Asset store root must exist and be writable"""
    root = settings.STORAGE_ROOT_DIR
    if os.path.isdir(root) and os.access(root, os.W_OK):
        return {"status": "healthy", "root": str(root)}
    return {"status": "unhealthy", "root": str(root), "error": "Storage root is not writable"}


@router.get("/live")
async def liveness():
    return {"status": "alive", "timestamp": datetime.utcnow().isoformat()}


@router.get("/ready")
async def readiness():
    checks = {
        "database": await check_database(),
        "storage": check_storage(),
    }
    healthy = all(check["status"] == "healthy" for check in checks.values())

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "ready" if healthy else "not_ready", "checks": checks},
    )
