"""Identity and profile entities.

Identities come from the external identity provider; profiles are rows
of the primary application's profiles table.
"""

from typing import Optional

from portal.domain.model.common import DomainModel
from portal.domain.value import SubjectId


def derive_display_name(username: Optional[str], email: Optional[str]) -> Optional[str]:
    """Username if present, otherwise the local part of the email."""
    if username:
        return username
    if email:
        return email.split("@")[0]
    return None


class Identity(DomainModel):
    """Authenticated user as reported by the identity provider."""

    id: SubjectId
    email: Optional[str] = None
    username: Optional[str] = None  # From user metadata
    avatar_url: Optional[str] = None  # From user metadata

    @property
    def display_name(self) -> Optional[str]:
        """Name shown to partner sites."""
        return derive_display_name(self.username, self.email)


class Profile(DomainModel):
    """Profile row used to enrich user info."""

    id: SubjectId
    username: Optional[str] = None
    avatar_url: Optional[str] = None
