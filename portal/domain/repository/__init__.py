"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from portal.domain.repository.invite_code import InviteCodeRepository
from portal.domain.repository.profile import ProfileRepository

__all__ = [
    "InviteCodeRepository",
    "ProfileRepository",
]
