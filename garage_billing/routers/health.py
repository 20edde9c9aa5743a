# garage_billing/routers/health.py
"""
System health check endpoint.
Returns backend status plus the default garage configuration in effect.
"""

from fastapi import APIRouter
from garage_billing.config import settings
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check():
    """
    Returns:
    - Backend status
    - Default capacity and rate schedule applied to requests that omit them
    """
    return {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "defaults": {
            "capacity": settings.DEFAULT_CAPACITY,
            "rates": settings.DEFAULT_RATES,
        },
        "max_events_per_request": settings.MAX_EVENTS_PER_REQUEST,
    }
