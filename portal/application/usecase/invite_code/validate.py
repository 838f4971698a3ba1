"""Validate invite code use case."""

import logfire

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.application.usecase.invite_code.list_codes import InviteCodeItem
from portal.domain.error import InviteCodeMissingError
from portal.domain.service import InviteCodeService


class ValidateInviteCodeRequest(CamelModel):
    code: str | None = None


class ValidateInviteCodeResponse(CamelModel):
    """Validate invite code response.

    code is the stored record, present only for a valid code.
    """

    is_valid: bool
    message: str
    code: InviteCodeItem | None = None


class ValidateInviteCodeUseCase(BaseUseCase):
    """Use case for checking an invite code before sign-up.

    Checking never consumes the code.
    """

    def __init__(self, invite_code_service: InviteCodeService) -> None:
        self.invite_code_service = invite_code_service

    async def execute(
        self, request: ValidateInviteCodeRequest
    ) -> ValidateInviteCodeResponse:
        """Check a code.

        Raises:
            InviteCodeMissingError: If no code was supplied
        """
        if not request.code:
            raise InviteCodeMissingError()

        with logfire.span("validate_invite_code.execute"):
            validation = await self.invite_code_service.check_valid(request.code)
            return ValidateInviteCodeResponse(
                is_valid=validation.is_valid,
                message=validation.message,
                code=(
                    InviteCodeItem.from_record(validation.record)
                    if validation.record
                    else None
                ),
            )
