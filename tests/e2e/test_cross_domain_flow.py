"""End-to-end tests for the cross-domain auth endpoint."""

import base64
import json
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from portal.adapter.supabase import MockSupabaseIdentityProvider

ALLOWED_ORIGIN = "https://app.lacs.cc"
DISALLOWED_ORIGIN = "https://evil.example"
PARTNER_RETURN_URL = "https://partner.example/cb"

ENDPOINT = "/cross-domain-auth"

# Decodes to JSON nested deeper than the parser allows
NESTED_TOKEN = base64.b64encode(b"[" * 10_000).decode()


def post(client, body, origin=ALLOWED_ORIGIN):
    headers = {"Origin": origin} if origin else {}
    return client.post(ENDPOINT, json=body, headers=headers)


def login(client, **overrides):
    body = {
        "action": "login",
        "origin": ALLOWED_ORIGIN,
        "email": MockSupabaseIdentityProvider.MOCK_EMAIL,
        "password": MockSupabaseIdentityProvider.MOCK_PASSWORD,
    }
    body.update(overrides)
    return post(client, body)


class TestPreflight:
    """CORS preflight handling."""

    def test_allowed_origin(self, client):
        """Should echo the origin with credentials allowed."""
        response = client.options(ENDPOINT, headers={"Origin": ALLOWED_ORIGIN})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
        assert response.headers["access-control-allow-credentials"] == "true"
        assert "POST" in response.headers["access-control-allow-methods"]
        assert "Authorization" in response.headers["access-control-allow-headers"]

    def test_disallowed_origin(self, client):
        """Should refuse with no body and no CORS headers."""
        response = client.options(ENDPOINT, headers={"Origin": DISALLOWED_ORIGIN})

        assert response.status_code == 403
        assert response.content == b""
        assert "access-control-allow-origin" not in response.headers

    def test_missing_origin(self, client):
        response = client.options(ENDPOINT)

        assert response.status_code == 403


class TestOriginGate:
    """Origin checks on POST."""

    def test_disallowed_transport_origin(self, client):
        """Should answer 403 without CORS headers."""
        response = post(
            client,
            {"action": "login", "origin": ALLOWED_ORIGIN},
            origin=DISALLOWED_ORIGIN,
        )

        assert response.status_code == 403
        assert response.json() == {"success": False, "error": "Unauthorized origin"}
        assert "access-control-allow-origin" not in response.headers

    def test_disallowed_body_origin(self, client):
        """Should answer 403 with CORS headers for the verified transport origin."""
        response = login(client, origin=DISALLOWED_ORIGIN)

        assert response.status_code == 403
        assert response.json()["error"] == "Unauthorized origin"
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN


class TestLogin:
    """Login over HTTP."""

    def test_login_with_return_url(self, client):
        """Should return a redirect carrying the token and user info."""
        response = login(client, returnUrl=PARTNER_RETURN_URL + "?lang=en")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
        data = response.json()
        assert data["success"] is True
        assert data["delivery"] == {"kind": "redirect", "url": data["redirectUrl"]}

        redirect = urlsplit(data["redirectUrl"])
        assert f"{redirect.scheme}://{redirect.netloc}{redirect.path}" == (
            PARTNER_RETURN_URL
        )
        query = parse_qs(redirect.query)
        assert query["lang"] == ["en"]
        assert query["loginSuccess"] == ["true"]
        assert query["authToken"] == [data["token"]]
        assert json.loads(unquote(query["userInfo"][0]))["id"] == (
            MockSupabaseIdentityProvider.MOCK_USER_ID
        )

    def test_login_popup(self, client):
        response = login(client, returnUrl=PARTNER_RETURN_URL, mode="popup")

        data = response.json()
        assert data["delivery"]["kind"] == "message"
        assert data["delivery"]["targetOrigin"] == ALLOWED_ORIGIN
        assert data["delivery"]["payload"]["data"]["token"] == data["token"]

    def test_wrong_password(self, client):
        response = login(client, password="nope")

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "Invalid email or password",
        }
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    def test_missing_password(self, client):
        response = login(client, password=None)

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: password"

    def test_invalid_return_url(self, client):
        response = login(client, returnUrl="/relative")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid return URL"


class TestTokenRoundTrip:
    """Tokens issued by login are accepted by verify, get_user_info and status."""

    def test_verify_and_user_info(self, client):
        token = login(client).json()["token"]

        verify = post(client, {"action": "verify", "origin": ALLOWED_ORIGIN, "token": token})
        info = post(
            client, {"action": "get_user_info", "origin": ALLOWED_ORIGIN, "token": token}
        )

        assert verify.status_code == 200
        assert verify.json()["user"]["email"] == MockSupabaseIdentityProvider.MOCK_EMAIL
        assert "expiresAt" in verify.json()
        assert info.status_code == 200
        assert info.json()["user"]["avatar"].startswith("https://cdn.example.com/")

    def test_verify_garbage(self, client):
        response = post(
            client, {"action": "verify", "origin": ALLOWED_ORIGIN, "token": "garbage"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Token is invalid or expired"

    @pytest.mark.parametrize("action", ["verify", "get_user_info"])
    def test_deeply_nested_token_is_invalid(self, client, action):
        response = post(
            client, {"action": action, "origin": ALLOWED_ORIGIN, "token": NESTED_TOKEN}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Token is invalid or expired"
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    def test_status_with_deeply_nested_token(self, client):
        response = client.get(
            ENDPOINT, params={"token": NESTED_TOKEN}, headers={"Origin": ALLOWED_ORIGIN}
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "isLoggedIn": False,
            "user": None,
        }
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    def test_status(self, client):
        token = login(client).json()["token"]

        response = client.get(
            ENDPOINT, params={"token": token}, headers={"Origin": ALLOWED_ORIGIN}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["isLoggedIn"] is True
        assert data["user"]["id"] == MockSupabaseIdentityProvider.MOCK_USER_ID
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    def test_status_without_token(self, client):
        response = client.get(ENDPOINT, headers={"Origin": ALLOWED_ORIGIN})

        assert response.json() == {"success": False, "isLoggedIn": False}

    def test_status_disallowed_origin(self, client):
        response = client.get(ENDPOINT, headers={"Origin": DISALLOWED_ORIGIN})

        assert response.status_code == 403


class TestLogoutAndErrors:
    """Logout and malformed requests."""

    def test_logout(self, client):
        response = post(
            client,
            {
                "action": "logout",
                "origin": ALLOWED_ORIGIN,
                "returnUrl": PARTNER_RETURN_URL,
            },
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "redirectUrl": PARTNER_RETURN_URL + "?logoutSuccess=true",
        }

    def test_unknown_action(self, client):
        response = post(client, {"action": "register", "origin": ALLOWED_ORIGIN})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid action"

    def test_malformed_json(self, client):
        """Should answer 400 with CORS headers."""
        response = client.post(
            ENDPOINT,
            content=b"{not json",
            headers={"Origin": ALLOWED_ORIGIN, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid request body"}
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    def test_non_object_body(self, client):
        response = post(client, ["login"])

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid request body"}
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    def test_invalid_mode(self, client):
        response = login(client, mode="iframe")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"
