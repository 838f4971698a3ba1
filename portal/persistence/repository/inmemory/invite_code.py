"""In-memory invite code repository for testing."""

from datetime import datetime
from itertools import count

from portal.domain.error import DuplicateInviteCodeError
from portal.domain.model import InviteCodeRecord
from portal.domain.repository import InviteCodeRepository
from portal.domain.value import InviteCode, InviteCodeId


class InMemoryInviteCodeRepository(InviteCodeRepository):
    """In-memory implementation of InviteCodeRepository for testing.

    The check-and-set sections contain no await, so on a single event
    loop they run without interleaving, like the conditional UPDATE.
    """

    def __init__(self) -> None:
        self._records: dict[str, InviteCodeRecord] = {}
        self._ids = count(1)
        self.commits = 0

    async def exists(self, code: InviteCode) -> bool:
        """Check whether a code is already taken."""
        return code.root in self._records

    async def insert(self, record: InviteCodeRecord) -> InviteCodeRecord:
        """Insert a new invite code.

        Raises:
            DuplicateInviteCodeError: If the code is already taken
        """
        if record.code.root in self._records:
            raise DuplicateInviteCodeError(record.code.root)

        stored = record.model_copy(update={"id": InviteCodeId(next(self._ids))})
        self._records[stored.code.root] = stored
        return stored

    async def find_by_code(self, code: InviteCode) -> InviteCodeRecord | None:
        """Find an invite code record."""
        return self._records.get(code.root)

    async def mark_used(
        self, code: InviteCode, used_by_email: str, used_at: datetime
    ) -> InviteCodeRecord | None:
        """Redeem an unused code."""
        record = self._records.get(code.root)
        if record is None or record.is_used:
            return None

        updated = record.model_copy(
            update={"is_used": True, "used_at": used_at, "used_by_email": used_by_email}
        )
        self._records[code.root] = updated
        return updated

    async def find_by_creator(
        self, created_by: str, limit: int = 50, offset: int = 0
    ) -> list[InviteCodeRecord]:
        """Find codes issued by a user with pagination."""
        matches = [r for r in self._records.values() if r.created_by == created_by]

        # Sort by created_at descending
        matches.sort(key=lambda r: r.created_at, reverse=True)

        return matches[offset : offset + limit]

    async def count(self) -> int:
        """Count all invite codes."""
        return len(self._records)

    async def commit(self) -> None:
        """Count commits; writes are already visible."""
        self.commits += 1
