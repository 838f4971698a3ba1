"""Login status check use case."""

from typing import Any

from pydantic import field_serializer

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.application.usecase.cross_domain.common import CrossDomainUser
from portal.domain.service import TokenService


class CheckLoginStatusRequest(CamelModel):
    token: str | None = None


class CheckLoginStatusResponse(CamelModel):
    """Status response.

    user is omitted when no token was sent and null when the token is
    not live.
    """

    success: bool
    is_logged_in: bool
    user: CrossDomainUser | None = None

    @field_serializer("user")
    def serialize_user(self, user: CrossDomainUser | None) -> dict[str, Any] | None:
        return user.to_body() if user else None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class CheckLoginStatusUseCase(BaseUseCase):
    """Use case for the partner login status check. Parse only, no lookups."""

    def __init__(self, token_service: TokenService) -> None:
        self.token_service = token_service

    async def execute(
        self, request: CheckLoginStatusRequest
    ) -> CheckLoginStatusResponse:
        if not request.token:
            return CheckLoginStatusResponse(success=False, is_logged_in=False)

        payload = self.token_service.parse(request.token)
        return CheckLoginStatusResponse(
            success=True,
            is_logged_in=payload is not None,
            user=CrossDomainUser.from_payload(payload) if payload else None,
        )
