"""Application layer DI providers."""

from dishka import Scope, provide

from portal.application.usecase.auth import (
    RegisterWithInviteUseCase,
    RequestPasswordResetUseCase,
)
from portal.application.usecase.cross_domain import (
    CheckLoginStatusUseCase,
    CrossDomainAuthUseCase,
    GetUserInfoUseCase,
    LoginUseCase,
    LogoutUseCase,
    VerifyTokenUseCase,
)
from portal.application.usecase.invite_code import (
    GenerateInviteCodeUseCase,
    ListInviteCodesUseCase,
    RedeemInviteCodeUseCase,
    ValidateInviteCodeUseCase,
)
from portal.domain.service import (
    IdentityService,
    InviteCodeService,
    OriginValidator,
    ProfileService,
    TokenService,
)
from portal.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Cross-domain use cases
    @provide
    def get_login_use_case(
        self, identity_service: IdentityService, token_service: TokenService
    ) -> LoginUseCase:
        """Provide cross-domain login use case."""
        return LoginUseCase(
            identity_service=identity_service, token_service=token_service
        )

    @provide
    def get_logout_use_case(self, identity_service: IdentityService) -> LogoutUseCase:
        """Provide cross-domain logout use case."""
        return LogoutUseCase(identity_service=identity_service)

    @provide
    def get_verify_token_use_case(
        self, token_service: TokenService
    ) -> VerifyTokenUseCase:
        """Provide token verification use case."""
        return VerifyTokenUseCase(token_service=token_service)

    @provide
    def get_user_info_use_case(
        self, token_service: TokenService, profile_service: ProfileService
    ) -> GetUserInfoUseCase:
        """Provide user info use case."""
        return GetUserInfoUseCase(
            token_service=token_service, profile_service=profile_service
        )

    @provide
    def get_check_login_status_use_case(
        self, token_service: TokenService
    ) -> CheckLoginStatusUseCase:
        """Provide login status use case."""
        return CheckLoginStatusUseCase(token_service=token_service)

    @provide
    def get_cross_domain_auth_use_case(
        self,
        origin_validator: OriginValidator,
        login_use_case: LoginUseCase,
        logout_use_case: LogoutUseCase,
        verify_token_use_case: VerifyTokenUseCase,
        get_user_info_use_case: GetUserInfoUseCase,
    ) -> CrossDomainAuthUseCase:
        """Provide the cross-domain handshake use case."""
        return CrossDomainAuthUseCase(
            origin_validator=origin_validator,
            login_use_case=login_use_case,
            logout_use_case=logout_use_case,
            verify_token_use_case=verify_token_use_case,
            get_user_info_use_case=get_user_info_use_case,
        )

    # Invite code use cases
    @provide
    def get_generate_invite_code_use_case(
        self, invite_code_service: InviteCodeService
    ) -> GenerateInviteCodeUseCase:
        """Provide generate invite code use case."""
        return GenerateInviteCodeUseCase(invite_code_service=invite_code_service)

    @provide
    def get_list_invite_codes_use_case(
        self, invite_code_service: InviteCodeService
    ) -> ListInviteCodesUseCase:
        """Provide list invite codes use case."""
        return ListInviteCodesUseCase(invite_code_service=invite_code_service)

    @provide
    def get_validate_invite_code_use_case(
        self, invite_code_service: InviteCodeService
    ) -> ValidateInviteCodeUseCase:
        """Provide validate invite code use case."""
        return ValidateInviteCodeUseCase(invite_code_service=invite_code_service)

    @provide
    def get_redeem_invite_code_use_case(
        self, invite_code_service: InviteCodeService
    ) -> RedeemInviteCodeUseCase:
        """Provide redeem invite code use case."""
        return RedeemInviteCodeUseCase(invite_code_service=invite_code_service)

    # Auth use cases
    @provide
    def get_register_use_case(
        self,
        identity_service: IdentityService,
        invite_code_service: InviteCodeService,
    ) -> RegisterWithInviteUseCase:
        """Provide registration use case."""
        return RegisterWithInviteUseCase(
            identity_service=identity_service,
            invite_code_service=invite_code_service,
        )

    @provide
    def get_request_password_reset_use_case(
        self, identity_service: IdentityService
    ) -> RequestPasswordResetUseCase:
        """Provide password reset request use case."""
        return RequestPasswordResetUseCase(identity_service=identity_service)
