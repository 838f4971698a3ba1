"""Register with invite code use case."""

import logfire

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.domain.service import IdentityService, InviteCodeService

REGISTERED_MESSAGE = "Registration successful, check your email to confirm"


class RegisterRequest(CamelModel):
    """Registration request."""

    email: str
    password: str
    invite_code: str
    email_redirect_to: str | None = None


class RegisterResponse(CamelModel):
    success: bool = True
    user_id: str
    email: str | None = None
    message: str = REGISTERED_MESSAGE


class RegisterWithInviteUseCase(BaseUseCase):
    """Use case for creating an account gated by an invite code."""

    def __init__(
        self,
        identity_service: IdentityService,
        invite_code_service: InviteCodeService,
    ) -> None:
        """Initialize registration use case.

        Args:
            identity_service: Identity provider service
            invite_code_service: Invite code service
        """
        self.identity_service = identity_service
        self.invite_code_service = invite_code_service

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Execute registration flow.

        Flow:
        1. Check the invite code is usable (no side effects)
        2. Create the account with the identity provider
        3. Consume the code for the new account's email

        Two sign-ups racing for one code can both pass step 1; only one
        wins step 3.

        Raises:
            InviteCodeError: If the code is missing, malformed, unknown or used
            RegistrationRejectedError: If the identity provider refuses
            InviteCodeAlreadyUsedOrNotFoundError: If another sign-up won the code
        """
        with logfire.span("register_with_invite.execute", email=request.email):
            await self.invite_code_service.require_valid(request.invite_code)

            identity = await self.identity_service.sign_up(
                request.email, request.password, request.email_redirect_to
            )

            await self.invite_code_service.consume(request.invite_code, request.email)

            logfire.info("User registered with invite code", subject_id=identity.id)
            return RegisterResponse(user_id=identity.id, email=identity.email)
