"""Liveness probe."""

from __future__ import annotations

from fastapi import APIRouter

from vaccination_api.core.timeutils import utcnow
from vaccination_api.schemas.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="OK", timestamp=utcnow().isoformat())
