"""Cross-domain session token payload.

Field aliases are the wire names partner sites read after decoding the
token: id, email, username, timestamp, expiresAt (milliseconds).
"""

from typing import Any, Optional

from pydantic import ConfigDict, Field

from portal.domain.model.common import DomainModel
from portal.domain.model.identity import Identity
from portal.domain.value import SESSION_LIFETIME, SubjectId

SESSION_LIFETIME_MS = int(SESSION_LIFETIME.total_seconds() * 1000)


class SessionTokenPayload(DomainModel):
    """Payload carried by a bearer token.

    Business rules:
    - expires_at is issued_at plus the fixed session lifetime
    - live while now <= expires_at, never refreshed
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    subject_id: SubjectId = Field(alias="id")
    email: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias="username")
    issued_at: int = Field(alias="timestamp")
    expires_at: int = Field(alias="expiresAt")

    @classmethod
    def mint(cls, identity: Identity, issued_at: int) -> "SessionTokenPayload":
        """Build the payload for a fresh login.

        Args:
            identity: Authenticated identity
            issued_at: Current time in ms since epoch

        Returns:
            New payload expiring one session lifetime later
        """
        return cls(
            subject_id=identity.id,
            email=identity.email,
            display_name=identity.display_name,
            issued_at=issued_at,
            expires_at=issued_at + SESSION_LIFETIME_MS,
        )

    def is_live(self, now: int) -> bool:
        return now <= self.expires_at

    def to_claims(self) -> dict[str, Any]:
        """Wire representation, absent fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
