"""Invite code repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from portal.domain.model import InviteCodeRecord
from portal.domain.value import InviteCode


class InviteCodeRepository(ABC):
    """Repository for InviteCodeRecord entity.

    Defines the contract for invite code persistence operations.
    Implementations live in the persistence layer and must enforce
    uniqueness of ``code`` themselves.
    """

    @abstractmethod
    async def exists(self, code: InviteCode) -> bool:
        """Check whether a code is already taken.

        Best-effort pre-check used by allocation; insert() remains the
        authoritative signal.

        Args:
            code: Candidate code

        Returns:
            True if a record with this code exists
        """
        pass

    @abstractmethod
    async def insert(self, record: InviteCodeRecord) -> InviteCodeRecord:
        """Insert a new invite code.

        Args:
            record: Record to insert

        Returns:
            The stored record, with its store-assigned id

        Raises:
            DuplicateInviteCodeError: If the code violates the unique constraint
        """
        pass

    @abstractmethod
    async def find_by_code(self, code: InviteCode) -> InviteCodeRecord | None:
        """Find an invite code record.

        Args:
            code: Normalized code

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def mark_used(
        self, code: InviteCode, used_by_email: str, used_at: datetime
    ) -> InviteCodeRecord | None:
        """Atomically redeem an unused code.

        Must be a single conditional update on ``is_used = false``, never
        a read followed by a write. Of two concurrent calls for the same
        code at most one gets a record back.

        Args:
            code: Normalized code
            used_by_email: Email of the redeeming user
            used_at: Redemption time

        Returns:
            The updated record, or None if no unused record matched
        """
        pass

    @abstractmethod
    async def find_by_creator(
        self, created_by: str, limit: int = 50, offset: int = 0
    ) -> list[InviteCodeRecord]:
        """Find codes issued by a user, newest first.

        Args:
            created_by: Issuer email
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of records
        """
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make the changes written so far durable.

        Called before a redemption or allocation is reported to the caller,
        so the outcome cannot be lost after the response is sent.
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all invite codes.

        Used by the database health check.
        """
        pass
