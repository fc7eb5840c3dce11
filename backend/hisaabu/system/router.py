import time
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

router = APIRouter(tags=["system"])

_STARTED_AT = time.monotonic()


@router.get("/health")
def health():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
    }


@router.get("/ready")
def readiness(request: Request):
    try:
        with request.app.state.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        raise HTTPException(status_code=503, detail="Database not ready")
    return {"status": "ready", "database": "connected"}


@router.get("/api/version")
def version(request: Request):
    settings = request.app.state.settings
    return {
        "version": settings.APP_VERSION,
        "name": "Hisaabu Backend",
        "environment": settings.ENV,
    }
