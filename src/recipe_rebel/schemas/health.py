"""Health check schemas.

This module contains schemas for the liveness and readiness probes.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from recipe_rebel.schemas.base import APIResponse
from recipe_rebel.schemas.enums import HealthStatus, ReadinessStatus


class HealthResponse(APIResponse):
    """Liveness probe response."""

    status: HealthStatus = Field(..., description="Health status")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")


class ReadinessResponse(APIResponse):
    """Readiness probe response with dependency status."""

    status: ReadinessStatus = Field(..., description="Readiness status")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")
    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Status of backing services",
    )
