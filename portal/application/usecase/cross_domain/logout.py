"""Cross-domain logout use case."""

import logfire

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.application.usecase.cross_domain.common import build_redirect_url
from portal.domain.service import IdentityService


class LogoutRequest(CamelModel):
    """Logout request."""

    return_url: str | None = None
    access_token: str | None = None  # Identity provider session to end


class LogoutResponse(CamelModel):
    """Logout response."""

    success: bool = True
    redirect_url: str | None = None


class LogoutUseCase(BaseUseCase):
    """Use case for signing out on behalf of a partner site."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: LogoutRequest) -> LogoutResponse:
        """Sign out and build the return redirect.

        Bearer tokens already handed to partner sites stay valid until
        they expire.

        Raises:
            InvalidReturnUrlError: If return_url is not an absolute http(s) URL
        """
        with logfire.span("cross_domain_logout.execute"):
            # Reject a bad return URL before ending the session
            redirect_url = (
                build_redirect_url(request.return_url, {"logoutSuccess": "true"})
                if request.return_url
                else None
            )
            await self.identity_service.sign_out(request.access_token)
            return LogoutResponse(redirect_url=redirect_url)
