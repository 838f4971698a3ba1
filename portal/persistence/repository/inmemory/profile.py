"""In-memory profile repository for testing."""

from portal.domain.model import Profile
from portal.domain.repository import ProfileRepository
from portal.domain.value import SubjectId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[str, Profile] = {}

    def add(self, profile: Profile) -> None:
        """Seed a profile."""
        self._profiles[profile.id] = profile

    async def find_by_id(self, subject_id: SubjectId) -> Profile | None:
        """Find a profile by subject id."""
        return self._profiles.get(subject_id)
