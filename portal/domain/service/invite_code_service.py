"""Invite code domain service."""

import secrets
from datetime import datetime
from typing import Callable

import logfire
from pydantic import BaseModel

from portal.domain.error import (
    AllocationExhaustedError,
    DuplicateInviteCodeError,
    InviteCodeAlreadyUsedError,
    InviteCodeAlreadyUsedOrNotFoundError,
    InviteCodeBadFormatError,
    InviteCodeError,
    InviteCodeMissingError,
    InviteCodeNotFoundError,
)
from portal.domain.model import InviteCodeRecord
from portal.domain.model.invite_code import utc_now
from portal.domain.repository import InviteCodeRepository
from portal.domain.value import (
    INVITE_CODE_ALPHABET,
    INVITE_CODE_LENGTH,
    MAX_ALLOCATION_ATTEMPTS,
    InviteCode,
    is_valid_invite_code_format,
    normalize_invite_code,
)

from .base import Service

VALID_INVITE_CODE_MESSAGE = "Invite code is valid"


def generate_invite_code() -> str:
    """Draw 6 independent uniform samples from A-Z0-9."""
    return "".join(
        secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH)
    )


def mask_code(code: str) -> str:
    """Keep the first two characters for logs."""
    return code[:2] + "****"


class InviteCodeValidation(BaseModel):
    """Outcome of checking a code before registration."""

    is_valid: bool
    message: str
    record: InviteCodeRecord | None = None


class InviteCodeService(Service):
    """Domain service for invite code allocation and redemption."""

    def __init__(
        self,
        invite_code_repository: InviteCodeRepository,
        code_generator: Callable[[], str] = generate_invite_code,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize invite code service.

        Args:
            invite_code_repository: Invite code repository
            code_generator: Source of candidate codes
            clock: Timestamp source for created_at/used_at
        """
        self.invite_code_repository = invite_code_repository
        self.code_generator = code_generator
        self.clock = clock

    async def allocate(self, requested_by: str) -> InviteCodeRecord:
        """Generate and store a unique invite code.

        The existence check only skips obvious collisions. The insert is
        the authoritative success signal: a unique violation there means
        another allocator won the race, and the loop moves on to a fresh
        candidate. Both kinds of collision count toward the attempt budget.

        Args:
            requested_by: Email of the issuing user

        Returns:
            The stored invite code record

        Raises:
            AllocationExhaustedError: If every attempt collided
        """
        with logfire.span("invite_code_service.allocate", requested_by=requested_by):
            for attempt in range(1, MAX_ALLOCATION_ATTEMPTS + 1):
                candidate = InviteCode(self.code_generator())

                if await self.invite_code_repository.exists(candidate):
                    logfire.debug(
                        "Invite code candidate taken",
                        attempt=attempt,
                        code=mask_code(candidate.root),
                    )
                    continue

                try:
                    record = await self.invite_code_repository.insert(
                        InviteCodeRecord(
                            code=candidate,
                            created_by=requested_by,
                            created_at=self.clock(),
                        )
                    )
                except DuplicateInviteCodeError:
                    logfire.warn(
                        "Invite code insert lost a race",
                        attempt=attempt,
                        code=mask_code(candidate.root),
                    )
                    continue

                await self.invite_code_repository.commit()
                logfire.info(
                    "Invite code allocated",
                    requested_by=requested_by,
                    attempts=attempt,
                    code=mask_code(record.code.root),
                )
                return record

            logfire.error(
                "Invite code allocation exhausted",
                requested_by=requested_by,
                attempts=MAX_ALLOCATION_ATTEMPTS,
            )
            raise AllocationExhaustedError(MAX_ALLOCATION_ATTEMPTS)

    async def require_valid(self, code: str | None) -> InviteCodeRecord:
        """Look up a code that can still be redeemed.

        Args:
            code: Raw user input

        Returns:
            The unused record

        Raises:
            InviteCodeMissingError: If the input is empty
            InviteCodeBadFormatError: If the input is not 6 letters/digits
            InviteCodeNotFoundError: If no record has this code
            InviteCodeAlreadyUsedError: If the record was already redeemed
        """
        normalized = normalize_invite_code(code or "")
        if not normalized:
            raise InviteCodeMissingError()

        if not is_valid_invite_code_format(normalized):
            raise InviteCodeBadFormatError()

        record = await self.invite_code_repository.find_by_code(InviteCode(normalized))
        if record is None:
            raise InviteCodeNotFoundError()

        if record.is_used:
            raise InviteCodeAlreadyUsedError()

        return record

    async def check_valid(self, code: str | None) -> InviteCodeValidation:
        """Check a code without consuming it.

        Args:
            code: Raw user input

        Returns:
            Validation outcome with a message per failure kind
        """
        with logfire.span("invite_code_service.check_valid"):
            try:
                record = await self.require_valid(code)
            except InviteCodeError as e:
                logfire.info("Invite code rejected", reason=type(e).__name__)
                return InviteCodeValidation(is_valid=False, message=str(e))

            return InviteCodeValidation(
                is_valid=True, message=VALID_INVITE_CODE_MESSAGE, record=record
            )

    async def consume(self, code: str, used_by_email: str) -> InviteCodeRecord:
        """Redeem a code exactly once.

        A single conditional update on is_used = false is the only
        concurrency guard: of two simultaneous calls at most one matches.
        The redemption is committed before this returns.

        Args:
            code: Raw user input
            used_by_email: Email of the redeeming user

        Returns:
            The redeemed record

        Raises:
            InviteCodeAlreadyUsedOrNotFoundError: If no unused record matched
        """
        normalized = normalize_invite_code(code)
        with logfire.span(
            "invite_code_service.consume", code=mask_code(normalized)
        ):
            if not is_valid_invite_code_format(normalized):
                # No stored record can match a malformed code
                raise InviteCodeAlreadyUsedOrNotFoundError()

            record = await self.invite_code_repository.mark_used(
                InviteCode(normalized), used_by_email, self.clock()
            )
            if record is None:
                logfire.warn(
                    "Invite code redemption matched no unused record",
                    code=mask_code(normalized),
                )
                raise InviteCodeAlreadyUsedOrNotFoundError()

            await self.invite_code_repository.commit()
            logfire.info(
                "Invite code redeemed",
                code=mask_code(normalized),
                used_by_email=used_by_email,
            )
            return record

    async def list_codes(
        self, created_by: str, limit: int = 50, offset: int = 0
    ) -> list[InviteCodeRecord]:
        """List codes issued by a user, newest first.

        Args:
            created_by: Issuer email
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of records
        """
        with logfire.span(
            "invite_code_service.list_codes",
            created_by=created_by,
            limit=limit,
            offset=offset,
        ):
            records = await self.invite_code_repository.find_by_creator(
                created_by, limit, offset
            )
            logfire.info(
                "Invite codes listed", created_by=created_by, count=len(records)
            )
            return records

    async def count_codes(self) -> int:
        """Count stored codes (store reachability check)."""
        return await self.invite_code_repository.count()
