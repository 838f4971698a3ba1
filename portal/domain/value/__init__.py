"""Domain value objects."""

from portal.domain.value.identifiers import InviteCodeId, SubjectId
from portal.domain.value.types import (
    INVITE_CODE_ALPHABET,
    INVITE_CODE_LENGTH,
    MAX_ALLOCATION_ATTEMPTS,
    SESSION_LIFETIME,
    CrossDomainAction,
    DeliveryMode,
    InviteCode,
    OriginAllowList,
    is_valid_invite_code_format,
    normalize_invite_code,
)

__all__ = [
    # Identifiers
    "InviteCodeId",
    "SubjectId",
    # Types
    "CrossDomainAction",
    "DeliveryMode",
    "InviteCode",
    "OriginAllowList",
    # Constants
    "INVITE_CODE_ALPHABET",
    "INVITE_CODE_LENGTH",
    "MAX_ALLOCATION_ATTEMPTS",
    "SESSION_LIFETIME",
    # Helpers
    "is_valid_invite_code_format",
    "normalize_invite_code",
]
