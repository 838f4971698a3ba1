"""Token verification use case."""

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.application.usecase.cross_domain.common import CrossDomainUser
from portal.domain.error import TokenInvalidOrExpiredError
from portal.domain.service import TokenService


class VerifyTokenRequest(CamelModel):
    token: str | None = None


class VerifyTokenResponse(CamelModel):
    success: bool = True
    user: CrossDomainUser
    expires_at: int


class VerifyTokenUseCase(BaseUseCase):
    """Use case for checking a bearer token handed to a partner site."""

    def __init__(self, token_service: TokenService) -> None:
        self.token_service = token_service

    async def execute(self, request: VerifyTokenRequest) -> VerifyTokenResponse:
        """Return the identity embedded in a live token.

        Raises:
            TokenInvalidOrExpiredError: If the token is malformed or expired
        """
        payload = self.token_service.parse(request.token)
        if payload is None:
            raise TokenInvalidOrExpiredError()

        return VerifyTokenResponse(
            user=CrossDomainUser.from_payload(payload),
            expires_at=payload.expires_at,
        )
