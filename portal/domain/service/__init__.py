"""Domain services."""

from .base import Service
from .identity_service import IdentityProvider, IdentityService
from .invite_code_service import (
    InviteCodeService,
    InviteCodeValidation,
    generate_invite_code,
)
from .origin_service import OriginValidator
from .profile_service import ProfileService
from .token_service import TokenService

__all__ = [
    "IdentityProvider",
    "IdentityService",
    "InviteCodeService",
    "InviteCodeValidation",
    "OriginValidator",
    "ProfileService",
    "Service",
    "TokenService",
    "generate_invite_code",
]
