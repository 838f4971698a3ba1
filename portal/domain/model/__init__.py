"""Domain models."""

from portal.domain.model.identity import Identity, Profile, derive_display_name
from portal.domain.model.invite_code import InviteCodeRecord
from portal.domain.model.session import SESSION_LIFETIME_MS, SessionTokenPayload

__all__ = [
    "Identity",
    "InviteCodeRecord",
    "Profile",
    "SESSION_LIFETIME_MS",
    "SessionTokenPayload",
    "derive_display_name",
]
