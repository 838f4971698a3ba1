"""Cross-domain authentication use cases."""

from portal.application.usecase.cross_domain.common import (
    CrossDomainUser,
    MessageDelivery,
    RedirectDelivery,
    build_redirect_url,
    encode_user_info,
)
from portal.application.usecase.cross_domain.handshake import (
    CrossDomainAuthRequest,
    CrossDomainAuthUseCase,
)
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
from portal.application.usecase.cross_domain.status import (
    CheckLoginStatusRequest,
    CheckLoginStatusResponse,
    CheckLoginStatusUseCase,
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

__all__ = [
    "CheckLoginStatusRequest",
    "CheckLoginStatusResponse",
    "CheckLoginStatusUseCase",
    "CrossDomainAuthRequest",
    "CrossDomainAuthUseCase",
    "CrossDomainUser",
    "GetUserInfoRequest",
    "GetUserInfoResponse",
    "GetUserInfoUseCase",
    "LoginRequest",
    "LoginResponse",
    "LoginUseCase",
    "LogoutRequest",
    "LogoutResponse",
    "LogoutUseCase",
    "MessageDelivery",
    "RedirectDelivery",
    "VerifyTokenRequest",
    "VerifyTokenResponse",
    "VerifyTokenUseCase",
    "build_redirect_url",
    "encode_user_info",
]
