"""Password reset request use case."""

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.application.usecase.cross_domain.common import validate_return_url
from portal.domain.service import IdentityService

RESET_REQUESTED_MESSAGE = (
    "If an account exists for this email, a password reset link has been sent"
)


class RequestPasswordResetRequest(CamelModel):
    email: str
    redirect_to: str | None = None  # Page that receives the recovery link


class RequestPasswordResetResponse(CamelModel):
    success: bool = True
    message: str = RESET_REQUESTED_MESSAGE


class RequestPasswordResetUseCase(BaseUseCase):
    """Use case for the forgot-password form."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(
        self, request: RequestPasswordResetRequest
    ) -> RequestPasswordResetResponse:
        """Request a reset email.

        The response is identical whether or not the account exists.

        Raises:
            InvalidReturnUrlError: If redirect_to is not an absolute http(s) URL
            ProviderError: If the identity provider fails
        """
        redirect_to = (
            validate_return_url(request.redirect_to) if request.redirect_to else None
        )
        await self.identity_service.request_password_reset(
            request.email.strip(), redirect_to
        )
        return RequestPasswordResetResponse()
