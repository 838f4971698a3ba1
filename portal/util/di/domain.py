"""Domain layer DI providers."""

from dishka import Scope, provide

from portal.config import TokenSettings
from portal.domain.repository import InviteCodeRepository, ProfileRepository
from portal.domain.service import (
    IdentityProvider,
    IdentityService,
    InviteCodeService,
    OriginValidator,
    ProfileService,
    TokenService,
)
from portal.domain.value import OriginAllowList
from portal.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_origin_validator(self, allow_list: OriginAllowList) -> OriginValidator:
        """Provide origin validator."""
        return OriginValidator(allow_list=allow_list)

    @provide
    def get_token_service(self, token_settings: TokenSettings) -> TokenService:
        """Provide bearer token domain service."""
        return TokenService(token_settings=token_settings)

    @provide
    def get_identity_service(
        self, identity_provider: IdentityProvider
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(identity_provider=identity_provider)

    @provide
    def get_invite_code_service(
        self, invite_code_repository: InviteCodeRepository
    ) -> InviteCodeService:
        """Provide invite code domain service."""
        return InviteCodeService(invite_code_repository=invite_code_repository)

    @provide
    def get_profile_service(
        self, profile_repository: ProfileRepository
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(profile_repository=profile_repository)
