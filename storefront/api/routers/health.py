# storefront/api/routers/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.api.deps import get_database
from storefront.data.database import Database

router = APIRouter(tags=["health"])


@router.get("/health")
def health(database: Database = Depends(get_database)):
    """Liveness and readiness check, 503 when the database is unreachable."""
    timestamp = datetime.now(timezone.utc).isoformat()
    if database.ping():
        return {"status": "ok", "database": "reachable", "timestamp": timestamp}
    return JSONResponse(
        status_code=503,
        content={"status": "error", "database": "unreachable", "timestamp": timestamp},
    )
