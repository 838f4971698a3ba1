"""Cross-domain login use case."""

import logfire

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.application.usecase.cross_domain.common import (
    CrossDomainUser,
    Delivery,
    LoginMessage,
    LoginMessageData,
    MessageDelivery,
    RedirectDelivery,
    build_redirect_url,
    encode_user_info,
)
from portal.domain.service import IdentityService, TokenService
from portal.domain.value import DeliveryMode


class LoginRequest(CamelModel):
    """Login request.

    origin is the already verified body origin; it addresses the popup
    message.
    """

    email: str
    password: str
    origin: str
    return_url: str | None = None
    mode: DeliveryMode = DeliveryMode.REDIRECT


class LoginResponse(CamelModel):
    """Login response."""

    success: bool = True
    redirect_url: str | None = None
    user: CrossDomainUser
    token: str
    delivery: Delivery | None = None


class LoginUseCase(BaseUseCase):
    """Use case for signing in on behalf of a partner site."""

    def __init__(
        self, identity_service: IdentityService, token_service: TokenService
    ) -> None:
        """Initialize login use case.

        Args:
            identity_service: Identity provider service
            token_service: Bearer token service
        """
        self.identity_service = identity_service
        self.token_service = token_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Flow:
        1. Check credentials with the identity provider
        2. Mint a bearer token
        3. Build the redirect URL when a return URL was given
        4. Pick the delivery: window message for popups, else redirect

        Args:
            request: Login request

        Returns:
            Login response with user, token and delivery

        Raises:
            InvalidCredentialsError: If the identity provider rejects the login
            InvalidReturnUrlError: If return_url is not an absolute http(s) URL
        """
        with logfire.span(
            "cross_domain_login.execute",
            origin=request.origin,
            mode=request.mode.value,
            has_return_url=request.return_url is not None,
        ):
            identity = await self.identity_service.sign_in(
                request.email, request.password
            )
            token = self.token_service.issue(identity)
            user = CrossDomainUser.from_identity(identity)

            redirect_url = None
            if request.return_url:
                redirect_url = build_redirect_url(
                    request.return_url,
                    {
                        "loginSuccess": "true",
                        "authToken": token,
                        "userInfo": encode_user_info(user),
                    },
                )

            delivery: RedirectDelivery | MessageDelivery | None = None
            if request.mode == DeliveryMode.POPUP:
                delivery = MessageDelivery(
                    target_origin=request.origin,
                    payload=LoginMessage(
                        data=LoginMessageData(user=user, token=token)
                    ),
                )
            elif redirect_url:
                delivery = RedirectDelivery(url=redirect_url)

            logfire.info(
                "Cross-domain login succeeded",
                subject_id=identity.id,
                origin=request.origin,
                delivery=delivery.kind if delivery else None,
            )

            return LoginResponse(
                redirect_url=redirect_url, user=user, token=token, delivery=delivery
            )
