"""Unit tests for invite-gated registration."""

import pytest

from portal.adapter.supabase import MockSupabaseIdentityProvider
from portal.application.usecase.auth import RegisterRequest, RegisterWithInviteUseCase
from portal.domain.error import (
    InvalidCredentialsError,
    InviteCodeAlreadyUsedError,
    InviteCodeBadFormatError,
    InviteCodeMissingError,
    InviteCodeNotFoundError,
    RegistrationRejectedError,
)
from portal.domain.model import InviteCodeRecord
from portal.domain.repository import InviteCodeRepository
from portal.domain.service import IdentityService
from portal.domain.value import InviteCode
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

NEW_EMAIL = "bob@example.com"
NEW_PASSWORD = "bob-password-1"


async def seed_code(unit_env, code: str = "JOIN42") -> InviteCodeRepository:
    repository = await unit_env.get(InviteCodeRepository)
    await repository.insert(
        InviteCodeRecord(code=InviteCode(code), created_by="alice@example.com")
    )
    return repository


class TestRegisterWithInvite:
    """Tests for RegisterWithInviteUseCase."""

    @pytest.mark.asyncio
    async def test_registers_and_consumes_code(self, unit_env):
        repository = await seed_code(unit_env)
        use_case = await unit_env.get(RegisterWithInviteUseCase)
        identity_service = await unit_env.get(IdentityService)

        response = await use_case.execute(
            RegisterRequest(
                email=NEW_EMAIL,
                password=NEW_PASSWORD,
                invite_code="join42",
                email_redirect_to="https://app.lacs.cc/welcome",
            )
        )

        assert response.success is True
        assert response.email == NEW_EMAIL
        assert response.user_id.startswith("mock-")
        record = await repository.find_by_code(InviteCode("JOIN42"))
        assert record is not None
        assert record.is_used is True
        assert record.used_by_email == NEW_EMAIL
        # Redemption is committed before the response is built
        assert repository.commits == 1

        # The new account can sign in
        identity = await identity_service.sign_in(NEW_EMAIL, NEW_PASSWORD)
        assert identity.email == NEW_EMAIL

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "code,error",
        [
            ("", InviteCodeMissingError),
            ("JOIN", InviteCodeBadFormatError),
            ("NOPE99", InviteCodeNotFoundError),
        ],
    )
    async def test_bad_code_creates_no_account(self, unit_env, code, error):
        await seed_code(unit_env)
        use_case = await unit_env.get(RegisterWithInviteUseCase)
        identity_service = await unit_env.get(IdentityService)

        with pytest.raises(error):
            await use_case.execute(
                RegisterRequest(email=NEW_EMAIL, password=NEW_PASSWORD, invite_code=code)
            )

        with pytest.raises(InvalidCredentialsError):
            await identity_service.sign_in(NEW_EMAIL, NEW_PASSWORD)

    @pytest.mark.asyncio
    async def test_used_code_rejected(self, unit_env):
        await seed_code(unit_env)
        use_case = await unit_env.get(RegisterWithInviteUseCase)
        await use_case.execute(
            RegisterRequest(email=NEW_EMAIL, password=NEW_PASSWORD, invite_code="JOIN42")
        )

        with pytest.raises(InviteCodeAlreadyUsedError):
            await use_case.execute(
                RegisterRequest(
                    email="carol@example.com", password="pw", invite_code="JOIN42"
                )
            )

    @pytest.mark.asyncio
    async def test_rejected_sign_up_keeps_code(self, unit_env):
        repository = await seed_code(unit_env)
        use_case = await unit_env.get(RegisterWithInviteUseCase)

        with pytest.raises(RegistrationRejectedError):
            await use_case.execute(
                RegisterRequest(
                    email=MockSupabaseIdentityProvider.MOCK_EMAIL,
                    password="anything",
                    invite_code="JOIN42",
                )
            )

        record = await repository.find_by_code(InviteCode("JOIN42"))
        assert record is not None and record.is_used is False
