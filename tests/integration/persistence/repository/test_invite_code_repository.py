"""Integration tests for PostgresInviteCodeRepository.

Run against a migrated PostgreSQL database named by DATABASE__URL.
"""

import os
from datetime import datetime, timezone

import pytest

from portal.domain.error import DuplicateInviteCodeError
from portal.domain.model import InviteCodeRecord
from portal.domain.repository import InviteCodeRepository, ProfileRepository
from portal.domain.service import generate_invite_code
from portal.domain.value import InviteCode, SubjectId
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="DATABASE__URL is not set"
)

integration_env = create_env_fixture(unmock={"persistence"})

ISSUER = "integration@example.com"


def fresh_record(**fields) -> InviteCodeRecord:
    return InviteCodeRecord(
        code=InviteCode(generate_invite_code()), created_by=ISSUER, **fields
    )


class TestInviteCodeRepositoryIntegration:
    """Round trips through the invite_codes table."""

    @pytest.mark.asyncio
    async def test_insert_assigns_id(self, integration_env):
        repository = await integration_env.get(InviteCodeRepository)
        record = fresh_record()

        stored = await repository.insert(record)

        assert stored.id is not None
        assert await repository.exists(record.code) is True
        found = await repository.find_by_code(record.code)
        assert found is not None
        assert found.code == record.code
        assert found.is_used is False

    @pytest.mark.asyncio
    async def test_duplicate_insert_keeps_transaction_usable(self, integration_env):
        """A unique violation only rolls back its savepoint."""
        repository = await integration_env.get(InviteCodeRepository)
        record = fresh_record()
        await repository.insert(record)

        with pytest.raises(DuplicateInviteCodeError):
            await repository.insert(record)

        other = await repository.insert(fresh_record())
        assert other.id is not None

    @pytest.mark.asyncio
    async def test_mark_used_only_once(self, integration_env):
        repository = await integration_env.get(InviteCodeRepository)
        record = await repository.insert(fresh_record())
        used_at = datetime.now(timezone.utc)

        first = await repository.mark_used(record.code, "bob@example.com", used_at)
        second = await repository.mark_used(record.code, "carol@example.com", used_at)

        assert first is not None
        assert first.is_used is True
        assert first.used_by_email == "bob@example.com"
        assert second is None

    @pytest.mark.asyncio
    async def test_find_by_creator_newest_first(self, integration_env):
        repository = await integration_env.get(InviteCodeRepository)
        older = await repository.insert(
            fresh_record(created_at=datetime(2020, 1, 1, tzinfo=timezone.utc))
        )
        newer = await repository.insert(fresh_record())

        records = await repository.find_by_creator(ISSUER, limit=100)

        codes = [r.code for r in records]
        assert codes.index(newer.code) < codes.index(older.code)

    @pytest.mark.asyncio
    async def test_unknown_profile(self, integration_env):
        repository = await integration_env.get(ProfileRepository)

        assert await repository.find_by_id(SubjectId("not-a-uuid")) is None
        assert (
            await repository.find_by_id(
                SubjectId("00000000-0000-0000-0000-000000000000")
            )
            is None
        )
