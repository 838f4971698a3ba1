"""Auth use cases."""

from portal.application.usecase.auth.register import (
    RegisterRequest,
    RegisterResponse,
    RegisterWithInviteUseCase,
)
from portal.application.usecase.auth.reset_password import (
    RequestPasswordResetRequest,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
)

__all__ = [
    "RegisterRequest",
    "RegisterResponse",
    "RegisterWithInviteUseCase",
    "RequestPasswordResetRequest",
    "RequestPasswordResetResponse",
    "RequestPasswordResetUseCase",
]
