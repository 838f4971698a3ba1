"""Cross-domain authentication handshake.

Every request passes the origin gate first: the transport Origin header
and the origin declared in the body must both be on the allow-list
before any action runs. Actions are then dispatched by name.
"""

import logfire
from pydantic import ConfigDict

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.application.usecase.cross_domain.login import (
    LoginRequest,
    LoginResponse,
    LoginUseCase,
)
from portal.application.usecase.cross_domain.logout import (
    LogoutRequest,
    LogoutResponse,
    LogoutUseCase,
)
from portal.application.usecase.cross_domain.user_info import (
    GetUserInfoRequest,
    GetUserInfoResponse,
    GetUserInfoUseCase,
)
from portal.application.usecase.cross_domain.verify import (
    VerifyTokenRequest,
    VerifyTokenResponse,
    VerifyTokenUseCase,
)
from portal.domain.error import (
    MissingFieldError,
    UnauthorizedOriginError,
    UnknownActionError,
)
from portal.domain.service import OriginValidator
from portal.domain.value import CrossDomainAction, DeliveryMode

CrossDomainAuthResponse = (
    LoginResponse | LogoutResponse | VerifyTokenResponse | GetUserInfoResponse
)


class CrossDomainAuthRequest(CamelModel):
    """Body of a cross-domain auth request.

    Fields not used by the chosen action are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    action: str | None = None
    origin: str | None = None
    email: str | None = None
    password: str | None = None
    return_url: str | None = None
    mode: DeliveryMode = DeliveryMode.REDIRECT
    token: str | None = None
    access_token: str | None = None


class CrossDomainAuthUseCase(BaseUseCase):
    """Origin gate plus action dispatch for the cross-domain endpoint."""

    def __init__(
        self,
        origin_validator: OriginValidator,
        login_use_case: LoginUseCase,
        logout_use_case: LogoutUseCase,
        verify_token_use_case: VerifyTokenUseCase,
        get_user_info_use_case: GetUserInfoUseCase,
    ) -> None:
        self.origin_validator = origin_validator
        self.login_use_case = login_use_case
        self.logout_use_case = logout_use_case
        self.verify_token_use_case = verify_token_use_case
        self.get_user_info_use_case = get_user_info_use_case

    def authorize_transport(self, origin: str | None) -> str:
        """Check the transport Origin header.

        Returns:
            The allowed origin, to be echoed in CORS headers

        Raises:
            UnauthorizedOriginError: If the origin is absent or not allowed
        """
        if origin is None or not self.origin_validator.validate(origin):
            raise UnauthorizedOriginError(origin)
        return origin

    async def execute(
        self, request: CrossDomainAuthRequest, transport_origin: str | None = None
    ) -> CrossDomainAuthResponse:
        """Gate on both origins, then run the requested action.

        Args:
            request: Parsed request body
            transport_origin: Origin header of the HTTP request

        Returns:
            The action's response

        Raises:
            UnauthorizedOriginError: If either origin is not allowed
            UnknownActionError: If the action is not supported
            MissingFieldError: If login lacks email or password
        """
        self.authorize_transport(transport_origin)
        origin = request.origin
        if origin is None or not self.origin_validator.validate(origin):
            raise UnauthorizedOriginError(origin)

        try:
            action = CrossDomainAction(request.action)
        except ValueError:
            logfire.warn("Unknown cross-domain action", action=request.action)
            raise UnknownActionError(request.action)

        with logfire.span(
            "cross_domain_auth.execute", action=action.value, origin=origin
        ):
            if action == CrossDomainAction.LOGIN:
                email, password = request.email, request.password
                if not email or not password:
                    fields = {"email": email, "password": password}
                    raise MissingFieldError(
                        *[name for name, value in fields.items() if not value]
                    )
                return await self.login_use_case.execute(
                    LoginRequest(
                        email=email,
                        password=password,
                        origin=origin,
                        return_url=request.return_url,
                        mode=request.mode,
                    )
                )

            if action == CrossDomainAction.LOGOUT:
                return await self.logout_use_case.execute(
                    LogoutRequest(
                        return_url=request.return_url,
                        access_token=request.access_token,
                    )
                )

            if action == CrossDomainAction.VERIFY:
                return await self.verify_token_use_case.execute(
                    VerifyTokenRequest(token=request.token)
                )

            return await self.get_user_info_use_case.execute(
                GetUserInfoRequest(token=request.token)
            )
