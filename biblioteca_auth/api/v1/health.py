"""Health check endpoint: service liveness plus credential store connectivity."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from biblioteca_auth.core.config import settings
from biblioteca_auth.core.database import check_db_connected, get_db
from biblioteca_auth.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Used by load balancers; database is 'disconnected' when users cannot log in."""
    return HealthResponse(
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
