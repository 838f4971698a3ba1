"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from datetime import timedelta
from enum import Enum

from pydantic import field_validator

from portal.domain.value.common import RootValueObject, ValueObject

INVITE_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
INVITE_CODE_LENGTH = 6
INVITE_CODE_PATTERN = re.compile(r"^[A-Z0-9]{6}$")

# Allocation gives up after this many candidates
MAX_ALLOCATION_ATTEMPTS = 10

# Fixed lifetime of a cross-domain bearer token
SESSION_LIFETIME = timedelta(hours=24)


def normalize_invite_code(code: str) -> str:
    """Upper-case and trim user input."""
    return code.upper().strip()


def is_valid_invite_code_format(code: str) -> bool:
    """Check a code is 6 letters or digits, case-insensitively.

    Whitespace is not trimmed here; callers normalize first.
    """
    return INVITE_CODE_PATTERN.fullmatch(code.upper()) is not None


class InviteCode(RootValueObject[str]):
    """Six character invite code drawn from A-Z and 0-9."""

    @field_validator("root")
    @classmethod
    def validate_code_format(cls, v: str) -> str:
        """Validate code format."""
        if not INVITE_CODE_PATTERN.fullmatch(v):
            raise ValueError("Invite code must be 6 characters of A-Z or 0-9")
        return v


class CrossDomainAction(str, Enum):
    """Actions accepted by the cross-domain endpoint."""

    LOGIN = "login"
    LOGOUT = "logout"
    VERIFY = "verify"
    GET_USER_INFO = "get_user_info"


class DeliveryMode(str, Enum):
    """How a partner page expects the login result."""

    REDIRECT = "redirect"
    POPUP = "popup"


class OriginAllowList(ValueObject):
    """Immutable allow-list of literal origins.

    Built once from settings at startup. Matching is exact: no wildcards,
    no scheme or port normalization.
    """

    origins: tuple[str, ...]

    def __contains__(self, origin: object) -> bool:
        return origin in self.origins
