"""Redeem invite code use case."""

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.domain.error import MissingFieldError
from portal.domain.service import InviteCodeService

REDEEMED_MESSAGE = "Invite code marked as used"


class RedeemInviteCodeRequest(CamelModel):
    code: str | None = None
    user_email: str | None = None


class RedeemInviteCodeResponse(CamelModel):
    success: bool = True
    message: str = REDEEMED_MESSAGE


class RedeemInviteCodeUseCase(BaseUseCase):
    """Use case for marking an invite code as used."""

    def __init__(self, invite_code_service: InviteCodeService) -> None:
        self.invite_code_service = invite_code_service

    async def execute(self, request: RedeemInviteCodeRequest) -> RedeemInviteCodeResponse:
        """Consume the code for a user.

        Raises:
            MissingFieldError: If code or userEmail is absent
            InviteCodeAlreadyUsedOrNotFoundError: If no unused code matched
        """
        code, user_email = request.code, request.user_email
        if not code or not user_email:
            fields = {"code": code, "userEmail": user_email}
            raise MissingFieldError(
                *[name for name, value in fields.items() if not value]
            )

        await self.invite_code_service.consume(code, user_email)
        return RedeemInviteCodeResponse()
