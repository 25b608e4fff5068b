"""Health check endpoints.

Provides liveness and readiness probes for orchestrators and load balancers.
They are mounted at the root, outside the versioned API prefix.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from recipe_rebel.cache.redis import check_redis_health
from recipe_rebel.core.config import Settings, get_settings
from recipe_rebel.database import check_database_health
from recipe_rebel.schemas import (
    HealthResponse,
    HealthStatus,
    ReadinessResponse,
    ReadinessStatus,
)


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Check if the service is alive; no dependency is contacted."""
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description=(
        "Checks the database and Redis. The service is ready when the database "
        "answers; a missing Redis only degrades it (roles are then read from "
        "the database on every request)."
    ),
    responses={503: {"description": "Database unavailable"}},
)
async def readiness_check(
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ReadinessResponse:
    """Check if the service is ready to handle requests."""
    dependencies: dict[str, str] = {}
    dependencies.update(await check_database_health())
    dependencies.update(await check_redis_health())

    if dependencies["database"] != "healthy":
        readiness = ReadinessStatus.NOT_READY
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif dependencies["redis_cache"] != "healthy":
        readiness = ReadinessStatus.DEGRADED
    else:
        readiness = ReadinessStatus.READY

    return ReadinessResponse(
        status=readiness,
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
