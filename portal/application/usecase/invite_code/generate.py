"""Generate invite code use case."""

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.domain.service import InviteCodeService

GENERATED_MESSAGE = "Invite code generated"


class GenerateInviteCodeRequest(CamelModel):
    requested_by: str  # Email of the signed-in user


class GenerateInviteCodeResponse(CamelModel):
    success: bool = True
    code: str
    message: str = GENERATED_MESSAGE


class GenerateInviteCodeUseCase(BaseUseCase):
    """Use case for issuing a new invite code."""

    def __init__(self, invite_code_service: InviteCodeService) -> None:
        self.invite_code_service = invite_code_service

    async def execute(
        self, request: GenerateInviteCodeRequest
    ) -> GenerateInviteCodeResponse:
        """Allocate a unique code for the requesting user.

        Raises:
            AllocationExhaustedError: If no unique code was found
        """
        record = await self.invite_code_service.allocate(request.requested_by)
        return GenerateInviteCodeResponse(code=record.code.root)
