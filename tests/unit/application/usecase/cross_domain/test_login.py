"""Unit tests for the cross-domain login use case."""

import json
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from portal.adapter.supabase import MockSupabaseIdentityProvider
from portal.application.usecase.cross_domain import (
    LoginRequest,
    LoginUseCase,
    MessageDelivery,
    RedirectDelivery,
)
from portal.domain.error import InvalidCredentialsError, InvalidReturnUrlError
from portal.domain.service import TokenService
from portal.domain.value import DeliveryMode
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

EMAIL = MockSupabaseIdentityProvider.MOCK_EMAIL
PASSWORD = MockSupabaseIdentityProvider.MOCK_PASSWORD
ORIGIN = "https://app.lacs.cc"


class TestLogin:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_login_without_return_url(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)
        token_service = await unit_env.get(TokenService)

        response = await use_case.execute(
            LoginRequest(email=EMAIL, password=PASSWORD, origin=ORIGIN)
        )

        assert response.success is True
        assert response.redirect_url is None
        assert response.delivery is None
        assert response.user.id == MockSupabaseIdentityProvider.MOCK_USER_ID
        assert response.user.username == "alice"
        assert response.user.avatar == "https://example.com/alice.png"
        payload = token_service.parse(response.token)
        assert payload is not None
        assert payload.email == EMAIL

    @pytest.mark.asyncio
    async def test_login_builds_redirect_delivery(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)

        response = await use_case.execute(
            LoginRequest(
                email=EMAIL,
                password=PASSWORD,
                origin=ORIGIN,
                return_url="https://partner.example/cb?state=xyz",
            )
        )

        assert isinstance(response.delivery, RedirectDelivery)
        assert response.delivery.url == response.redirect_url
        query = parse_qs(urlsplit(response.redirect_url).query)
        assert query["state"] == ["xyz"]
        assert query["loginSuccess"] == ["true"]
        assert query["authToken"] == [response.token]
        user_info = json.loads(unquote(query["userInfo"][0]))
        assert user_info == {
            "id": MockSupabaseIdentityProvider.MOCK_USER_ID,
            "username": "alice",
            "email": EMAIL,
            "avatar": "https://example.com/alice.png",
        }

    @pytest.mark.asyncio
    async def test_popup_mode_addresses_verified_origin(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)

        response = await use_case.execute(
            LoginRequest(
                email=EMAIL,
                password=PASSWORD,
                origin=ORIGIN,
                return_url="https://partner.example/cb",
                mode=DeliveryMode.POPUP,
            )
        )

        assert isinstance(response.delivery, MessageDelivery)
        assert response.delivery.target_origin == ORIGIN
        assert response.delivery.payload.type == "LOGIN_SUCCESS"
        assert response.delivery.payload.data.token == response.token
        assert response.delivery.payload.data.user == response.user
        # The redirect URL is still returned for callers that want it
        assert response.redirect_url is not None

    @pytest.mark.asyncio
    async def test_popup_body_uses_camel_case(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)

        response = await use_case.execute(
            LoginRequest(
                email=EMAIL, password=PASSWORD, origin=ORIGIN, mode=DeliveryMode.POPUP
            )
        )

        body = response.to_body()
        assert "redirectUrl" not in body
        assert body["delivery"]["kind"] == "message"
        assert body["delivery"]["targetOrigin"] == ORIGIN
        assert body["delivery"]["payload"]["type"] == "LOGIN_SUCCESS"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password",
        [(EMAIL, "wrong-password"), ("nobody@example.com", PASSWORD)],
    )
    async def test_bad_credentials_share_one_error(self, unit_env, email, password):
        use_case = await unit_env.get(LoginUseCase)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await use_case.execute(
                LoginRequest(email=email, password=password, origin=ORIGIN)
            )

        assert str(exc_info.value) == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_invalid_return_url(self, unit_env):
        use_case = await unit_env.get(LoginUseCase)

        with pytest.raises(InvalidReturnUrlError):
            await use_case.execute(
                LoginRequest(
                    email=EMAIL, password=PASSWORD, origin=ORIGIN, return_url="/cb"
                )
            )
