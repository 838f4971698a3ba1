"""PostgreSQL repository implementations."""

from portal.persistence.repository.invite_code import PostgresInviteCodeRepository
from portal.persistence.repository.profile import PostgresProfileRepository

__all__ = [
    "PostgresInviteCodeRepository",
    "PostgresProfileRepository",
]
