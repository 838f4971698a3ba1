"""FastAPI application."""

import logging

from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from portal.adapter.error import AdapterError
from portal.domain.error import DomainError
from portal.interface.api.routes import auth, cross_domain_auth, health, invite_codes
from portal.interface.error import InvalidRequestBodyError, error_response
from portal.util.di.container import create_container, setup_di
from portal.util.observability import instrument_fastapi, instrument_httpx

logger = logging.getLogger(__name__)


async def handle_service_error(request: Request, exc: Exception) -> JSONResponse:
    """Translate domain and upstream errors to {success: false, error}."""
    status_code, message = error_response(exc)
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed or incomplete request bodies as 400."""
    logger.info(f"Rejected request to {request.url.path}: {len(exc.errors())} errors")
    return await handle_service_error(request, InvalidRequestBodyError(str(exc)))


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py configures it.

    No CORS middleware is installed: the cross-domain routes answer their
    own preflight and set CORS headers per response.

    Args:
        container: DI container, the production container when omitted
    """
    # Instrument httpx for identity provider calls
    instrument_httpx()

    app_instance = FastAPI(
        title="Portal Auth API",
        description="Cross-domain authentication and invite codes",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_exception_handler(DomainError, handle_service_error)
    app_instance.add_exception_handler(AdapterError, handle_service_error)
    app_instance.add_exception_handler(RequestValidationError, handle_validation_error)

    setup_di(app_instance, container or create_container())

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(cross_domain_auth.router)
    app_instance.include_router(invite_codes.router)
    app_instance.include_router(auth.router)

    return app_instance
