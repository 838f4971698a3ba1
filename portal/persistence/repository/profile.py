"""PostgreSQL implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.adapter.error import StoreError
from portal.domain.model import Profile
from portal.domain.repository import ProfileRepository
from portal.domain.value import SubjectId
from portal.persistence.mappers import row_to_profile
from portal.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, subject_id: SubjectId) -> Profile | None:
        """Find a profile by subject id.

        Profile ids are UUIDs; any other subject id cannot match a row.
        """
        try:
            UUID(subject_id)
        except ValueError:
            return None

        stmt = select(profiles_table).where(profiles_table.c.id == subject_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError(f"Profile lookup failed: {e}") from e
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None
