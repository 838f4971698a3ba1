"""PostgreSQL implementation of InviteCode repository."""

from datetime import datetime

from sqlalchemy import exists, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.adapter.error import StoreError
from portal.domain.error import DuplicateInviteCodeError
from portal.domain.model import InviteCodeRecord
from portal.domain.repository import InviteCodeRepository
from portal.domain.value import InviteCode
from portal.persistence.mappers import invite_code_to_dict, row_to_invite_code
from portal.persistence.tables import invite_codes_table

UNIQUE_VIOLATION = "23505"


def _is_unique_violation(error: IntegrityError) -> bool:
    sqlstate = getattr(error.orig, "sqlstate", None) or getattr(
        error.orig, "pgcode", None
    )
    return sqlstate == UNIQUE_VIOLATION


class PostgresInviteCodeRepository(InviteCodeRepository):
    """PostgreSQL implementation of InviteCodeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def exists(self, code: InviteCode) -> bool:
        """Check whether a code is already taken."""
        stmt = select(exists().where(invite_codes_table.c.code == code.root))
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError(f"Invite code lookup failed: {e}") from e
        return bool(result.scalar())

    async def insert(self, record: InviteCodeRecord) -> InviteCodeRecord:
        """Insert a new invite code.

        Runs in a savepoint so a unique violation leaves the request
        transaction usable for the next candidate.

        Args:
            record: Record to insert

        Returns:
            The stored record

        Raises:
            DuplicateInviteCodeError: If the code is already taken
            StoreError: On any other database failure
        """
        stmt = (
            insert(invite_codes_table)
            .values(**invite_code_to_dict(record))
            .returning(invite_codes_table)
        )
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().one()
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise DuplicateInviteCodeError(record.code.root) from e
            raise StoreError(f"Invite code insert failed: {e}") from e
        except SQLAlchemyError as e:
            raise StoreError(f"Invite code insert failed: {e}") from e

        return row_to_invite_code(dict(row))

    async def find_by_code(self, code: InviteCode) -> InviteCodeRecord | None:
        """Find an invite code record."""
        stmt = select(invite_codes_table).where(invite_codes_table.c.code == code.root)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError(f"Invite code lookup failed: {e}") from e
        row = result.mappings().first()
        return row_to_invite_code(dict(row)) if row else None

    async def mark_used(
        self, code: InviteCode, used_by_email: str, used_at: datetime
    ) -> InviteCodeRecord | None:
        """Redeem an unused code with one conditional UPDATE.

        The row lock taken by the UPDATE makes a concurrent redemption
        re-check ``is_used`` after this transaction commits, so it matches
        nothing.
        """
        stmt = (
            update(invite_codes_table)
            .where(
                invite_codes_table.c.code == code.root,
                invite_codes_table.c.is_used.is_(False),
            )
            .values(is_used=True, used_at=used_at, used_by_email=used_by_email)
            .returning(invite_codes_table)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError(f"Invite code redemption failed: {e}") from e
        row = result.mappings().first()
        return row_to_invite_code(dict(row)) if row else None

    async def find_by_creator(
        self, created_by: str, limit: int = 50, offset: int = 0
    ) -> list[InviteCodeRecord]:
        """Find codes issued by a user with pagination."""
        stmt = (
            select(invite_codes_table)
            .where(invite_codes_table.c.created_by == created_by)
            .order_by(invite_codes_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError(f"Invite code listing failed: {e}") from e
        rows = result.mappings().all()
        return [row_to_invite_code(dict(row)) for row in rows]

    async def count(self) -> int:
        """Count all invite codes."""
        stmt = select(func.count()).select_from(invite_codes_table)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError(f"Invite code count failed: {e}") from e
        return result.scalar() or 0

    async def commit(self) -> None:
        """Commit the request transaction."""
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Invite code commit failed: {e}") from e
