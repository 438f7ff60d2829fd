"""Content repository tree endpoints."""
import structlog
from fastapi import APIRouter, Header, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from console_api.tree import (
    DEFAULT_ORGANIZATION,
    AggregationError,
    ContentTreeService,
    ErrorResponse,
    Identity,
    RequestContext,
    TreeResponse,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/repository", tags=["repository"])


def parse_locale(accept_language: str | None, default: str) -> str:
    """Pick the preferred locale from an Accept-Language header.

    Args:
        accept_language: Raw header value, e.g. ``fr-CA,fr;q=0.9``.
        default: Locale used when the header is absent or empty.

    Returns:
        The first language tag, or ``default``.
    """
    if not accept_language:
        return default
    tag = accept_language.split(",", 1)[0].split(";", 1)[0].strip()
    return tag or default


def _context(
    request: Request,
    identity: str | None,
    organization: str | None,
    accept_language: str | None,
) -> RequestContext | None:
    if not identity or not identity.strip():
        return None
    return RequestContext(
        identity=Identity(
            name=identity.strip(),
            organization=organization or DEFAULT_ORGANIZATION,
        ),
        locale=parse_locale(accept_language, request.app.state.settings.default_locale),
        request_id=request.headers.get("X-Request-ID"),
    )


def _unauthorized() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=ErrorResponse(
            error="Unauthorized", detail="X-Identity header is required"
        ).model_dump(),
    )


def _unavailable(e: AggregationError) -> JSONResponse:
    logger.error("tree_request_failed", source=e.source, error=str(e))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Content tree unavailable", detail=str(e)
        ).model_dump(),
    )


@router.get(
    "/tree",
    response_model=TreeResponse,
    responses={
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Get content tree",
    description="Returns the permission-filtered content tree for the caller.",
)
async def get_tree(
    request: Request,
    users: list[str] = Query(
        default=[],
        description="Identity keys of users whose private folders are expanded",
    ),
    x_identity: str | None = Header(default=None),
    x_organization: str | None = Header(default=None),
    accept_language: str | None = Header(default=None),
) -> TreeResponse | JSONResponse:
    """Get the content tree.

    Args:
        request: FastAPI request (provides access to app state).
        users: Users whose private folders are loaded.
        x_identity: Caller user name.
        x_organization: Caller organization.
        accept_language: Preferred locale.

    Returns:
        Top-level tree nodes, 401 without an identity, or 500 when a
        source fails.
    """
    context = _context(request, x_identity, x_organization, accept_language)
    if context is None:
        return _unauthorized()

    service: ContentTreeService = request.app.state.tree_service

    try:
        nodes = await run_in_threadpool(service.get_tree, context, users)
    except AggregationError as e:
        return _unavailable(e)

    return TreeResponse(nodes=nodes)


@router.get(
    "/tree/search",
    response_model=TreeResponse,
    responses={
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Search content tree",
    description="Returns tree branches whose labels match the filter.",
)
async def search_tree(
    request: Request,
    filter: str = Query(default="", description="Case-insensitive label filter"),
    x_identity: str | None = Header(default=None),
    x_organization: str | None = Header(default=None),
    accept_language: str | None = Header(default=None),
) -> TreeResponse | JSONResponse:
    """Search the content tree by label.

    Args:
        request: FastAPI request (provides access to app state).
        filter: Label filter. Empty matches everything.
        x_identity: Caller user name.
        x_organization: Caller organization.
        accept_language: Preferred locale.

    Returns:
        Matching branches, 401 without an identity, or 500 when a
        source fails.
    """
    context = _context(request, x_identity, x_organization, accept_language)
    if context is None:
        return _unauthorized()

    service: ContentTreeService = request.app.state.tree_service

    try:
        nodes = await run_in_threadpool(service.search_tree, context, filter)
    except AggregationError as e:
        return _unavailable(e)

    return TreeResponse(nodes=nodes)
