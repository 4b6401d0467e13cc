"""Health check endpoints for monitoring service status."""

import logging
import tomllib
from datetime import UTC, datetime
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response
from sqlalchemy import text

from speciescatalog.chat.providers import OpenAICompletionProvider
from speciescatalog.database.core import DatabaseService
from speciescatalog.system.path_resolver import PathResolver
from speciescatalog.web.core.container import Container
from speciescatalog.web.models.health import (
    HealthCheckResponse,
    LivenessProbeResponse,
    ReadinessChecks,
    ReadinessProbeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health")

SERVICE_NAME = "species-catalog"


def get_version(path_resolver: PathResolver) -> str:
    """Get application version from pyproject.toml."""
    pyproject_path = path_resolver.get_repo_path() / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            return tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError) as e:
        logger.warning("Could not read version from pyproject.toml: %s", e)
        return "unknown"


def _timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@router.get("/", response_model=HealthCheckResponse)
@inject
async def health_check(
    path_resolver: Annotated[PathResolver, Depends(Provide[Container.path_resolver])],
) -> HealthCheckResponse:
    """Check basic health status of the service."""
    return HealthCheckResponse(
        status="healthy",
        timestamp=_timestamp(),
        version=get_version(path_resolver),
        service=SERVICE_NAME,
    )


@router.get("/live", response_model=LivenessProbeResponse)
async def liveness_probe() -> LivenessProbeResponse:
    """Liveness probe: the process is up and serving."""
    return LivenessProbeResponse(status="alive")


@router.get("/ready", status_code=200, response_model=ReadinessProbeResponse)
@inject
async def readiness_probe(
    db_service: Annotated[DatabaseService, Depends(Provide[Container.core_database])],
    completion_provider: Annotated[
        OpenAICompletionProvider, Depends(Provide[Container.completion_provider])
    ],
    response: Response,
) -> ReadinessProbeResponse:
    """Readiness probe verifying database connectivity.

    Responds 503 when the database cannot be queried.
    """
    database_ok = True
    try:
        async with db_service.get_async_db() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        database_ok = False

    if not database_ok:
        response.status_code = 503

    return ReadinessProbeResponse(
        status="ready" if database_ok else "not_ready",
        checks=ReadinessChecks(database=database_ok, chat=completion_provider.is_configured),
        timestamp=_timestamp(),
    )
