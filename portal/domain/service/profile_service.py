"""Profile domain service."""

import logfire

from portal.domain.model import Profile
from portal.domain.repository import ProfileRepository
from portal.domain.value import SubjectId

from .base import Service


class ProfileService(Service):
    """Looks up profile rows used to enrich user info."""

    def __init__(self, profile_repository: ProfileRepository) -> None:
        self.profile_repository = profile_repository

    async def find_profile(self, subject_id: SubjectId) -> Profile | None:
        """Find the profile for a subject, if one exists.

        Args:
            subject_id: Subject id from a bearer token

        Returns:
            Profile or None
        """
        with logfire.span("profile_service.find_profile", subject_id=subject_id):
            profile = await self.profile_repository.find_by_id(subject_id)
            if profile is None:
                logfire.debug("No profile for subject", subject_id=subject_id)
            return profile
