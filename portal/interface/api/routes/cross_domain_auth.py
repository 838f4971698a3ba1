"""Cross-domain authentication routes.

Partner sites call these from the browser. The transport Origin header
is checked before anything else; CORS headers are only ever sent back
to an allow-listed origin.
"""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from portal.application.usecase.cross_domain import (
    CheckLoginStatusRequest,
    CheckLoginStatusUseCase,
    CrossDomainAuthRequest,
    CrossDomainAuthUseCase,
)
from portal.domain.error import UnauthorizedOriginError
from portal.interface.api.cors import apply_cors_headers
from portal.interface.error import InvalidRequestBodyError, error_response

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/cross-domain-auth", tags=["cross-domain-auth"], route_class=DishkaRoute
)


def _failure(
    status_code: int, message: str, origin: str | None = None
) -> JSONResponse:
    response = JSONResponse(
        {"success": False, "error": message}, status_code=status_code
    )
    if origin:
        apply_cors_headers(response, origin)
    return response


def _error(exc: Exception, origin: str | None = None) -> JSONResponse:
    status_code, message = error_response(exc)
    return _failure(status_code, message, origin)


async def _parse_body(request: Request) -> CrossDomainAuthRequest:
    """Read the JSON object body.

    Raises:
        InvalidRequestBodyError: If the body is not a valid JSON object
    """
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidRequestBodyError(f"Malformed JSON: {e}") from e
    if not isinstance(body, dict):
        raise InvalidRequestBodyError("Body is not a JSON object")

    try:
        return CrossDomainAuthRequest.model_validate(body)
    except ValidationError as e:
        logger.info(f"Rejected cross-domain request body: {e.error_count()} errors")
        raise InvalidRequestBodyError(str(e)) from e


@router.options("")
async def preflight(
    request: Request,
    cross_domain_auth_use_case: FromDishka[CrossDomainAuthUseCase],
) -> Response:
    """Answer the CORS preflight.

    Returns:
        200 with CORS headers for an allowed origin, otherwise 403 with no body
    """
    try:
        origin = cross_domain_auth_use_case.authorize_transport(
            request.headers.get("origin")
        )
    except UnauthorizedOriginError:
        return Response(status_code=status.HTTP_403_FORBIDDEN)

    return apply_cors_headers(Response(status_code=status.HTTP_200_OK), origin)


@router.post("")
async def cross_domain_auth(
    request: Request,
    cross_domain_auth_use_case: FromDishka[CrossDomainAuthUseCase],
) -> JSONResponse:
    """Run a cross-domain action: login, logout, verify or get_user_info.

    The body must carry ``action`` and the caller's ``origin``; both the
    Origin header and the body origin must be allow-listed.

    Returns:
        The action's JSON result with CORS headers
    """
    transport_origin = request.headers.get("origin")
    try:
        origin = cross_domain_auth_use_case.authorize_transport(transport_origin)
    except UnauthorizedOriginError as e:
        # No CORS headers: the browser must not expose this to the caller
        return _error(e)

    try:
        auth_request = await _parse_body(request)
        result = await cross_domain_auth_use_case.execute(
            auth_request, transport_origin=origin
        )
    except Exception as e:
        return _error(e, origin)

    return apply_cors_headers(JSONResponse(result.to_body()), origin)


@router.get("")
async def check_login_status(
    request: Request,
    check_login_status_use_case: FromDishka[CheckLoginStatusUseCase],
    cross_domain_auth_use_case: FromDishka[CrossDomainAuthUseCase],
    token: str | None = Query(default=None),
) -> JSONResponse:
    """Report whether a bearer token is live.

    Returns:
        {success, isLoggedIn, user} with CORS headers
    """
    try:
        origin = cross_domain_auth_use_case.authorize_transport(
            request.headers.get("origin")
        )
    except UnauthorizedOriginError as e:
        return _error(e)

    try:
        response = await check_login_status_use_case.execute(
            CheckLoginStatusRequest(token=token)
        )
    except Exception as e:
        return _error(e, origin)

    return apply_cors_headers(JSONResponse(response.to_body()), origin)
