"""Invite code routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status
from fastapi.responses import JSONResponse

from portal.application.usecase.invite_code import (
    GenerateInviteCodeRequest,
    GenerateInviteCodeResponse,
    GenerateInviteCodeUseCase,
    ListInviteCodesRequest,
    ListInviteCodesResponse,
    ListInviteCodesUseCase,
    RedeemInviteCodeRequest,
    RedeemInviteCodeResponse,
    RedeemInviteCodeUseCase,
    ValidateInviteCodeRequest,
    ValidateInviteCodeResponse,
    ValidateInviteCodeUseCase,
)
from portal.adapter.error import AdapterError
from portal.domain.error import DomainError, NotAuthenticatedError
from portal.domain.model import Identity
from portal.domain.service import IdentityService
from portal.interface.error import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invite-codes", tags=["invite-codes"], route_class=DishkaRoute)


async def authenticate(
    authorization: str | None, identity_service: IdentityService
) -> Identity:
    """Resolve the identity provider access token in an Authorization header.

    Raises:
        NotAuthenticatedError: If the header is missing or the token is rejected
    """
    if not authorization:
        raise NotAuthenticatedError()

    scheme, _, access_token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not access_token.strip():
        raise NotAuthenticatedError()

    return await identity_service.get_user(access_token.strip())


def _issuer(identity: Identity) -> str:
    return identity.email or identity.id


@router.post("", status_code=status.HTTP_200_OK)
async def generate_invite_code(
    generate_invite_code_use_case: FromDishka[GenerateInviteCodeUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> JSONResponse:
    """Generate a new invite code for the signed-in user.

    Returns:
        {success, code, message}

    Raises:
        NotAuthenticatedError: If not signed in (401)
        AllocationExhaustedError: If no unique code was found (500)
    """
    identity = await authenticate(authorization, identity_service)
    response: GenerateInviteCodeResponse = await generate_invite_code_use_case.execute(
        GenerateInviteCodeRequest(requested_by=_issuer(identity))
    )
    logger.info(f"Invite code generated for user {identity.id}")
    return JSONResponse(response.to_body())


@router.get("")
async def list_invite_codes(
    list_invite_codes_use_case: FromDishka[ListInviteCodesUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> JSONResponse:
    """List invite codes issued by the signed-in user, newest first.

    Returns:
        {success, inviteCodes}
    """
    identity = await authenticate(authorization, identity_service)
    response: ListInviteCodesResponse = await list_invite_codes_use_case.execute(
        ListInviteCodesRequest(created_by=_issuer(identity), limit=limit, offset=offset)
    )
    return JSONResponse(response.to_body())


@router.post("/validate")
async def validate_invite_code(
    request: ValidateInviteCodeRequest,
    validate_invite_code_use_case: FromDishka[ValidateInviteCodeUseCase],
) -> JSONResponse:
    """Check an invite code without consuming it.

    Returns:
        {isValid, message, code?}; 400 when no code was given
    """
    try:
        response: ValidateInviteCodeResponse = (
            await validate_invite_code_use_case.execute(request)
        )
    except (DomainError, AdapterError) as e:
        status_code, message = error_response(e)
        return JSONResponse(
            {"isValid": False, "message": message}, status_code=status_code
        )

    return JSONResponse(response.to_body())


@router.put("/validate")
async def redeem_invite_code(
    request: RedeemInviteCodeRequest,
    redeem_invite_code_use_case: FromDishka[RedeemInviteCodeUseCase],
) -> JSONResponse:
    """Mark an invite code as used.

    Returns:
        {success, message}

    Raises:
        MissingFieldError: If code or userEmail is absent (400)
        InviteCodeAlreadyUsedOrNotFoundError: If no unused code matched (409)
    """
    response: RedeemInviteCodeResponse = await redeem_invite_code_use_case.execute(
        request
    )
    return JSONResponse(response.to_body())
