"""Profile repository interface."""

from abc import ABC, abstractmethod

from portal.domain.model import Profile
from portal.domain.value import SubjectId


class ProfileRepository(ABC):
    """Read-only access to the profiles table."""

    @abstractmethod
    async def find_by_id(self, subject_id: SubjectId) -> Profile | None:
        """Find a profile by identity provider subject id.

        Args:
            subject_id: Subject id from a bearer token

        Returns:
            The profile if found, None otherwise
        """
        pass
