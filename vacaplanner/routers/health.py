import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from vacaplanner.core.config import settings
from vacaplanner.database import session_scope

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/")
def root():
    return {"message": f"{settings.app_name} API", "version": settings.version, "docs": "/docs"}


@router.get("/health")
def health_check():
    """Liveness probe."""
    return {
        "status": "up",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.version,
        "environment": settings.environment,
    }


@router.get("/readiness")
def readiness_check():
    """Ready once the leave store answers a trivial query."""
    try:
        with session_scope() as session:
            session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Readiness check failed", extra={"reason": str(e)})
        raise HTTPException(status_code=503, detail="Servizio non disponibile")
    return {"status": "ready", "components": {"database": "connected"}}
