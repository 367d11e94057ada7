"""
Greenfields Health Check Endpoint
Liveness probe for the container platform.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from greenfields.api.deps import SettingsDep

router = APIRouter(prefix="/health", tags=["health"])


class LivenessResponse(BaseModel):
    """Simple liveness check response."""

    status: str
    version: str
    started_at: Optional[str] = None


# Track when the application started
_startup_time: Optional[datetime] = None


def mark_startup_complete() -> None:
    """Mark the application as started. Call this during app startup."""
    global _startup_time
    _startup_time = datetime.now(timezone.utc)


def get_startup_time() -> Optional[datetime]:
    """Get the application startup time."""
    return _startup_time


@router.get("", response_model=LivenessResponse)
async def liveness(settings: SettingsDep) -> LivenessResponse:
    """Report that the process is up and serving requests."""
    started = get_startup_time()
    return LivenessResponse(
        status="ok",
        version=settings.metadata.version,
        started_at=started.isoformat() if started else None,
    )
