from fastapi import APIRouter, Depends
from datetime import datetime

from torneos.db import Database, get_db

router = APIRouter()

@router.get("/health")
async def health_check(db: Database = Depends(get_db)):
    """
    Basic health check endpoint for production monitoring
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": "1.0.0",
        "checks": {}
    }

    if await db.ping():
        health_status["checks"]["database"] = {"status": "healthy"}
    else:
        health_status["checks"]["database"] = {"status": "unhealthy"}
        health_status["status"] = "degraded"

    return health_status

@router.get("/health/live")
async def liveness_check():
    """
    Liveness probe endpoint
    """
    return {
        "status": "alive",
        "timestamp": datetime.utcnow().isoformat()
    }
