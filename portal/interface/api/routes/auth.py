"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from portal.application.usecase.auth import (
    RegisterRequest,
    RegisterResponse,
    RegisterWithInviteUseCase,
    RequestPasswordResetRequest,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post("/register")
async def register(
    request: RegisterRequest,
    register_use_case: FromDishka[RegisterWithInviteUseCase],
) -> JSONResponse:
    """Create an account with an invite code.

    Args:
        request: Email, password, invite code and optional confirmation redirect
        register_use_case: Registration use case from DI

    Returns:
        {success, userId, email, message}

    Raises:
        InviteCodeError: If the code is not usable (400)
        RegistrationRejectedError: If the identity provider refuses (400)
        InviteCodeAlreadyUsedOrNotFoundError: If another sign-up won the code (409)
    """
    response: RegisterResponse = await register_use_case.execute(request)
    logger.info(f"Registered user {response.user_id}")
    return JSONResponse(response.to_body())


@router.post("/forgot-password")
async def forgot_password(
    request: RequestPasswordResetRequest,
    request_password_reset_use_case: FromDishka[RequestPasswordResetUseCase],
) -> JSONResponse:
    """Send a password reset link.

    Answers the same for known and unknown emails.

    Returns:
        {success, message}
    """
    response: RequestPasswordResetResponse = (
        await request_password_reset_use_case.execute(request)
    )
    return JSONResponse(response.to_body())
