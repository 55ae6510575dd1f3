"""Health check endpoint with database connectivity check."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from iacp.core.config import settings
from iacp.core.database import check_db_connected, get_db
from iacp.schemas.health import HealthResponse

SERVICE_NAME = "IACP - Identity, Auth, Claim, Provider"

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        service=SERVICE_NAME,
        environment=settings.APP_ENV,
        database=db_status,
    )
