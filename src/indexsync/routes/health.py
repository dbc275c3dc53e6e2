"""Health check endpoints for liveness and readiness probes."""
from typing import Literal

from elastic_transport import TransportError
from elasticsearch import ApiError
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from indexsync.search.index import SearchIndex

router = APIRouter(prefix="/health", tags=["health"])


class LivenessResponse(BaseModel):
    """Response model for liveness probe.

    Attributes:
        status: Always 'alive' when process is running.
    """

    status: Literal["alive"]


class ReadinessCheck(BaseModel):
    """Individual dependency check result.

    Attributes:
        name: Identifier for the dependency being checked.
        status: Result of the check ('ok' or 'failed').
        message: Version on success, error details on failure.
    """

    name: str
    status: Literal["ok", "failed"]
    message: str | None = None


class ReadinessResponse(BaseModel):
    """Response model for readiness probe.

    Attributes:
        status: Overall readiness ('ready' or 'not_ready').
        checks: List of individual dependency check results.
    """

    status: Literal["ready", "not_ready"]
    checks: list[ReadinessCheck]


async def _check_elasticsearch(search_index: SearchIndex) -> ReadinessCheck:
    """Verify the search engine answers cluster info.

    Args:
        search_index: Active search index.

    Returns:
        Check result with status and version or error message.
    """
    name = f"elasticsearch:{search_index.name}"
    try:
        version = await search_index.server_version()
    except (ApiError, TransportError) as e:
        return ReadinessCheck(name=name, status="failed", message=str(e))
    return ReadinessCheck(name=name, status="ok", message=version)


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe endpoint.

    Returns:
        Liveness status response.
    """
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> JSONResponse:
    """Readiness probe endpoint.

    Returns 200 if the search engine is reachable, 503 otherwise. Hook
    endpoints keep accepting notifications either way.

    Returns:
        Readiness status with individual check results.
    """
    checks = [await _check_elasticsearch(request.app.state.search_index)]
    all_ok = all(c.status == "ok" for c in checks)
    response = ReadinessResponse(
        status="ready" if all_ok else "not_ready",
        checks=checks,
    )
    code = status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response.model_dump(), status_code=code)
