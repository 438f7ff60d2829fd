"""Health check endpoints for liveness and readiness probes."""
from pathlib import Path
from typing import Literal

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from console_api.config import Settings

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
        message: Error details when status is 'failed'.
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


def _check_directory(path: Path) -> ReadinessCheck:
    """Verify directory exists and is accessible.

    Args:
        path: Path to directory.

    Returns:
        Check result with status and optional error message.
    """
    name = f"dir:{path}"
    try:
        if path.exists() and path.is_dir():
            list(path.iterdir())
            return ReadinessCheck(name=name, status="ok")
        return ReadinessCheck(name=name, status="failed", message="Directory not found")
    except PermissionError as e:
        return ReadinessCheck(
            name=name, status="failed", message=f"Permission denied: {e}"
        )
    except OSError as e:
        return ReadinessCheck(name=name, status="failed", message=str(e))


def _check_catalog(request: Request, path: Path) -> ReadinessCheck:
    """Verify the catalog loaded and its file is still readable.

    Args:
        request: FastAPI request (provides access to app state).
        path: Path to the catalog file.

    Returns:
        Check result with status and optional error message.
    """
    name = f"catalog:{path}"
    error = request.app.state.catalog_error
    if error is not None:
        return ReadinessCheck(name=name, status="failed", message=error)

    if not path.exists():
        return ReadinessCheck(name=name, status="failed", message="Catalog not found")

    try:
        with path.open("rb"):
            pass
    except OSError as e:
        return ReadinessCheck(name=name, status="failed", message=str(e))

    return ReadinessCheck(name=name, status="ok")


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe endpoint.

    Returns immediate success if the process is running.

    Returns:
        Liveness status response.
    """
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> JSONResponse:
    """Readiness probe endpoint.

    Validates the catalog file and the auto-save drafts directory.
    Returns 200 if all checks pass, 503 if any fail.

    Args:
        request: FastAPI request (provides access to app state).

    Returns:
        Readiness status with individual check results.
    """
    settings: Settings = request.app.state.settings
    checks = [
        _check_catalog(request, settings.catalog_path),
        _check_directory(settings.drafts_dir),
    ]
    all_ok = all(c.status == "ok" for c in checks)
    response = ReadinessResponse(
        status="ready" if all_ok else "not_ready",
        checks=checks,
    )
    code = status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response.model_dump(), status_code=code)
