"""User info use case."""

import logfire

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.application.usecase.cross_domain.common import CrossDomainUser
from portal.domain.error import TokenInvalidOrExpiredError
from portal.domain.service import ProfileService, TokenService


class GetUserInfoRequest(CamelModel):
    token: str | None = None


class GetUserInfoResponse(CamelModel):
    success: bool = True
    user: CrossDomainUser


class GetUserInfoUseCase(BaseUseCase):
    """Use case for fetching profile-enriched user info for a token."""

    def __init__(
        self, token_service: TokenService, profile_service: ProfileService
    ) -> None:
        """Initialize get user info use case.

        Args:
            token_service: Bearer token service
            profile_service: Profile lookup service
        """
        self.token_service = token_service
        self.profile_service = profile_service

    async def execute(self, request: GetUserInfoRequest) -> GetUserInfoResponse:
        """Parse the token and enrich it with the profile avatar.

        A missing profile leaves the avatar out rather than failing.

        Raises:
            TokenInvalidOrExpiredError: If the token is malformed or expired
        """
        payload = self.token_service.parse(request.token)
        if payload is None:
            raise TokenInvalidOrExpiredError()

        with logfire.span("get_user_info.execute", subject_id=payload.subject_id):
            profile = await self.profile_service.find_profile(payload.subject_id)
            avatar = profile.avatar_url if profile else None
            return GetUserInfoResponse(
                user=CrossDomainUser.from_payload(payload, avatar=avatar)
            )
