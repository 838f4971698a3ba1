"""Health check routes."""

import logging
from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from portal.adapter.error import StoreError
from portal.config import Settings
from portal.domain.service import InviteCodeService, OriginValidator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"], route_class=DishkaRoute)

# Never echoed back by the CORS debug route
CREDENTIAL_HEADERS = frozenset({"authorization", "cookie"})


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str


class CORSDebugResponse(BaseModel):
    """CORS debugging information."""

    origin: str | None
    origin_allowed: bool
    allowed_origins: list[str]
    headers: dict[str, str]


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        Health status indicating the service is running
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version="0.1.0",
        git_sha=settings.git_sha,
    )


@router.get("/health/cors", response_model=CORSDebugResponse)
async def cors_debug(
    request: Request,
    settings: FromDishka[Settings],
    origin_validator: FromDishka[OriginValidator],
) -> CORSDebugResponse:
    """Debug the origin allow-list.

    Returns:
        Whether the request's Origin is allowed, the list and request headers
        minus credentials
    """
    origin = request.headers.get("origin")
    return CORSDebugResponse(
        origin=origin,
        origin_allowed=origin_validator.validate(origin),
        allowed_origins=list(settings.allowed_origins),
        headers={
            name: value
            for name, value in request.headers.items()
            if name not in CREDENTIAL_HEADERS
        },
    )


@router.get("/health/database")
async def database_health(
    invite_code_service: FromDishka[InviteCodeService],
) -> JSONResponse:
    """Check the invite code store is reachable.

    Returns:
        200 with the number of stored codes, or 503 if the store is down
    """
    try:
        total = await invite_code_service.count_codes()
    except StoreError as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            {"status": "unhealthy", "database": "unreachable"},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return JSONResponse(
        {"status": "healthy", "database": "reachable", "inviteCodes": total}
    )
