"""Health route - liveness check."""

from datetime import datetime, timezone

from fastapi import APIRouter

from feedcore.core.config import settings
from feedcore.schemas.api import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health():
    """Liveness probe. The service keeps no state, so there is nothing else to check."""
    return HealthResponse(
        status="healthy",
        env=settings.ENV,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
