"""Health check API response models."""

from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Response for basic health check endpoint."""

    status: str = Field(..., description="Health status (healthy)")
    timestamp: str = Field(..., description="ISO timestamp of health check")
    version: str = Field(..., description="Application version")
    service: str = Field(..., description="Service name")


class LivenessProbeResponse(BaseModel):
    """Response for the liveness probe."""

    status: str = Field(..., description="Liveness status (alive)")


class ReadinessChecks(BaseModel):
    """Individual readiness checks."""

    database: bool = Field(..., description="Whether the database answered a query")
    chat: bool = Field(..., description="Whether a completion API key is configured")


class ReadinessProbeResponse(BaseModel):
    """Response for the readiness probe.

    Only the database decides readiness; a missing chat key degrades the
    assistant to a fixed notice but does not take the service out of rotation.
    """

    status: str = Field(..., description="Readiness status (ready/not_ready)")
    checks: ReadinessChecks
    timestamp: str = Field(..., description="ISO timestamp of readiness check")
